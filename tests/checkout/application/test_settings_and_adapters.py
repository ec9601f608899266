"""Tests for settings, the catalogue adapter and gateway selection."""

import json

import pytest
from pydantic import ValidationError as PydanticValidationError

from checkout.catalog import InMemoryCatalog, get_catalog, reset_catalog, set_catalog
from checkout.config import DEFAULT_DEPOSIT_UNIT, CheckoutSettings
from checkout.payment.gateway import build_gateway, get_gateway, reset_gateway, set_gateway
from checkout.payment.gateway.fake_adapter import FakeGateway
from checkout.payment.gateway.netopia_adapter import NetopiaGateway


@pytest.fixture()
def clean_env(monkeypatch):
    names = ("SGR_DEPOSIT", "NETOPIA_API_KEY", "NETOPIA_POS_SIGNATURE", "PAYMENT_RETURN_PATH", "CHECKOUT_CATALOG_FILE")
    for name in names:
        monkeypatch.delenv(name, raising=False)
    return monkeypatch


class TestSettings:
    def test_defaults(self, clean_env):
        settings = CheckoutSettings.from_env()
        assert settings.deposit_unit == DEFAULT_DEPOSIT_UNIT
        assert settings.payment_return_path == "/payment/success"
        assert settings.netopia_configured is False
        assert settings.catalog_file is None

    def test_from_environment(self, clean_env):
        clean_env.setenv("SGR_DEPOSIT", "0.75")
        clean_env.setenv("NETOPIA_API_KEY", "key")
        clean_env.setenv("NETOPIA_POS_SIGNATURE", "XXXX-XXXX")
        clean_env.setenv("PAYMENT_RETURN_PATH", "/plata/succes")

        settings = CheckoutSettings.from_env()
        assert settings.deposit_unit == 0.75
        assert settings.netopia_configured is True
        assert settings.payment_return_path == "/plata/succes"

    def test_both_credentials_required(self, clean_env):
        clean_env.setenv("NETOPIA_API_KEY", "key")
        assert CheckoutSettings.from_env().netopia_configured is False

    def test_negative_deposit_rejected(self):
        with pytest.raises(PydanticValidationError):
            CheckoutSettings(deposit_unit=-0.5)


class TestGatewaySelection:
    def test_mock_flow_without_credentials(self):
        gateway = build_gateway(CheckoutSettings())
        assert isinstance(gateway, FakeGateway)

    def test_netopia_with_credentials(self):
        gateway = build_gateway(CheckoutSettings(netopia_api_key="key", netopia_pos_signature="XXXX"))
        assert isinstance(gateway, NetopiaGateway)
        assert gateway.pos_signature == "XXXX"

    def test_return_path_is_used(self):
        redirect = build_gateway(CheckoutSettings(payment_return_path="/gata")).create_payment_redirect(
            "NX-1", 21.0, "ana@example.ro"
        )
        assert redirect.url == "/gata?orderId=NX-1&mock=true"
        assert redirect.is_mock is True

    def test_override_and_reset(self, gateway):
        set_gateway(gateway)
        try:
            assert get_gateway() is gateway
        finally:
            reset_gateway()
        assert get_gateway() is not gateway
        reset_gateway()


class TestInMemoryCatalog:
    def test_fetch_returns_only_known_ids(self, catalog):
        prices = catalog.fetch_prices(["p1", "ghost"], ["pachet-familie", "nope"])
        assert set(prices.products) == {"p1"}
        assert set(prices.bundles) == {"pachet-familie"}
        assert prices.subscription_price == 49.00

    def test_from_json(self, tmp_path):
        path = tmp_path / "catalog.json"
        path.write_text(
            json.dumps(
                {
                    "products": [{"id": "p9", "name": "Apă", "price": "3.5"}],
                    "bundles": [{"id": "b1", "name": "Pachet", "price": 20}],
                    "subscriptionPrice": 49.0,
                }
            ),
            encoding="utf-8",
        )
        catalog = InMemoryCatalog.from_json(path)

        assert catalog.products["p9"].price == 3.5
        assert catalog.bundles["b1"].name == "Pachet"
        assert catalog.subscription_price == 49.0

    def test_override_and_reset(self, catalog):
        set_catalog(catalog)
        try:
            assert get_catalog() is catalog
        finally:
            reset_catalog()
        assert get_catalog() is not catalog
        reset_catalog()
