import pytest
from fastapi import FastAPI
from fastapi.testclient import TestClient

from checkout.api import order_router, payment_router
from checkout.api.deps import get_intake_handler, get_order_store, get_reconciler


@pytest.fixture()
def client(intake, store, reconciler):
    app = FastAPI()
    app.include_router(payment_router)
    app.include_router(order_router)
    app.dependency_overrides[get_intake_handler] = lambda: intake
    app.dependency_overrides[get_order_store] = lambda: store
    app.dependency_overrides[get_reconciler] = lambda: reconciler
    return TestClient(app)
