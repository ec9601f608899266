import pytest
from protean.integrations.pytest import DomainFixture

from checkout.catalog.fake_adapter import InMemoryCatalog
from checkout.config import CheckoutSettings
from checkout.order.intake import OrderIntakeHandler
from checkout.order.repository_store import RepositoryOrderStore
from checkout.payment.gateway.fake_adapter import FakeGateway
from checkout.payment.reconciliation import PaymentStatusReconciler


@pytest.fixture(scope="session")
def checkout_bed():
    from checkout.domain import checkout
    from checkout.utils.db import drop_db, setup_db

    bed = DomainFixture(checkout)
    bed.setup()
    setup_db(checkout)
    yield bed
    drop_db(checkout)
    bed.teardown()


@pytest.fixture(autouse=True)
def _ctx(checkout_bed):
    with checkout_bed.domain_context():
        yield


@pytest.fixture(autouse=True)
def run_around_tests(_ctx):
    """Clear stored orders and events after every test."""
    yield

    from protean import current_domain

    for _, provider in current_domain.providers.items():
        provider._data_reset()

    current_domain.event_store.store._data_reset()


# ---------------------------------------------------------------------------
# Collaborators
# ---------------------------------------------------------------------------
@pytest.fixture()
def catalog():
    catalog = InMemoryCatalog(subscription_price=49.00)
    catalog.add_product("p1", "Apă minerală 0.5L", 10.00)
    catalog.add_product("p2", "Apă plată 2L", 7.50)
    catalog.add_bundle("pachet-familie", "Pachet Familie", 99.00)
    return catalog


@pytest.fixture()
def store():
    return RepositoryOrderStore()


@pytest.fixture()
def gateway():
    return FakeGateway()


@pytest.fixture()
def settings():
    return CheckoutSettings(deposit_unit=0.50)


@pytest.fixture()
def intake(catalog, store, gateway, settings):
    return OrderIntakeHandler(catalog=catalog, store=store, gateway=gateway, settings=settings)


@pytest.fixture()
def reconciler(store):
    return PaymentStatusReconciler(store=store)


# ---------------------------------------------------------------------------
# Request payloads
# ---------------------------------------------------------------------------
@pytest.fixture()
def delivery_address():
    return {
        "street": "Str. Lalelelor 12",
        "city": "Cluj-Napoca",
        "county": "Cluj",
        "postalCode": "400001",
        "country": "Romania",
    }


@pytest.fixture()
def person_customer(delivery_address):
    return {
        "type": "person",
        "firstName": "Ana",
        "lastName": "Pop",
        "email": "ana.pop@example.ro",
        "phone": "0722 123 456",
        "deliveryAddress": delivery_address,
        "sameAddress": True,
    }


@pytest.fixture()
def company_customer(delivery_address):
    return {
        "type": "company",
        "companyName": "Izvor Distribuție SRL",
        "cui": "RO12345678",
        "contactPerson": "Mihai Ionescu",
        "email": "comenzi@izvor.ro",
        "phone": "+40 722-123-456",
        "deliveryAddress": delivery_address,
        "billingAddress": {
            "street": "Bd. Unirii 1",
            "city": "București",
            "county": "București",
            "postalCode": "030167",
            "country": "Romania",
        },
        "sameAddress": False,
    }


@pytest.fixture()
def checkout_payload(person_customer):
    return {
        "customer": person_customer,
        "cartItems": [
            {"id": "p1", "type": "product", "name": "Apă minerală", "price": 10.00, "quantity": 2},
        ],
    }


@pytest.fixture()
def placed_order(intake, checkout_payload):
    """Order number of a pending order totalling 21.00 lei."""
    return intake.handle_checkout(checkout_payload).order_number
