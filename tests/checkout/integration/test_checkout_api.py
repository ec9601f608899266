"""Integration tests for the payment initiation endpoint."""

from checkout.order.intake import OrderIntakeHandler
from checkout.order.store import OrderStoreError


class TestInitiatePayment:
    def test_success(self, client, checkout_payload):
        response = client.post("/api/payment/initiate", json=checkout_payload)

        assert response.status_code == 200
        data = response.json()
        assert data["success"] is True
        assert data["orderNumber"].startswith("NX-")
        assert data["paymentUrl"] == f"/payment/success?orderId={data['orderNumber']}&mock=true"
        assert "Netopia nu este configurat" in data["message"]

    def test_order_is_visible_after_checkout(self, client, checkout_payload):
        order_number = client.post("/api/payment/initiate", json=checkout_payload).json()["orderNumber"]

        response = client.get(f"/api/orders/{order_number}")

        assert response.status_code == 200
        data = response.json()
        assert data["orderNumber"] == order_number
        assert data["status"] == "pending"
        assert data["paymentStatus"] == "pending"
        assert data["subtotal"] == 20.0
        assert data["depositTotal"] == 1.0
        assert data["total"] == 21.0
        assert data["paidAt"] is None
        assert "21,00 lei" in data["summary"]

    def test_empty_cart(self, client, checkout_payload):
        checkout_payload["cartItems"] = []
        response = client.post("/api/payment/initiate", json=checkout_payload)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Date lipsă sau invalide"}

    def test_missing_customer(self, client, checkout_payload):
        del checkout_payload["customer"]
        response = client.post("/api/payment/initiate", json=checkout_payload)
        assert response.status_code == 400

    def test_body_is_not_json(self, client):
        response = client.post(
            "/api/payment/initiate",
            content="customer=ana",
            headers={"content-type": "application/json"},
        )
        assert response.status_code == 400
        assert response.json()["success"] is False

    def test_invalid_email(self, client, checkout_payload):
        checkout_payload["customer"]["email"] = "ana"
        response = client.post("/api/payment/initiate", json=checkout_payload)

        assert response.status_code == 400
        assert response.json()["error"] == "Adresă de email invalidă"

    def test_oversized_company_name(self, client, checkout_payload, company_customer):
        company_customer["companyName"] = "A" * 300
        checkout_payload["customer"] = company_customer
        response = client.post("/api/payment/initiate", json=checkout_payload)

        assert response.status_code == 400
        assert response.json() == {"success": False, "error": "Date lipsă sau invalide"}

    def test_phone_with_separators(self, client, checkout_payload):
        checkout_payload["customer"]["phone"] = "+40 - 722 - 123 - 456"
        response = client.post("/api/payment/initiate", json=checkout_payload)

        assert response.status_code == 200
        assert response.json()["success"] is True

    def test_unknown_items_are_listed(self, client, checkout_payload):
        checkout_payload["cartItems"] = [
            {"id": "ghost", "type": "product", "name": "Fantomă", "quantity": 1},
            {"id": "pachet-lipsa", "type": "bundle", "name": "Pachet Vară", "quantity": 1},
        ]
        response = client.post("/api/payment/initiate", json=checkout_payload)

        assert response.status_code == 400
        assert response.json()["error"] == (
            'Produsul "Fantomă" nu a fost găsit, Pachetul "Pachet Vară" nu a fost găsit'
        )

    def test_persistence_failure(self, client, intake, checkout_payload, monkeypatch):
        def _fail(new_order):
            raise OrderStoreError("disk full")

        monkeypatch.setattr(intake.store, "create_order", _fail)
        response = client.post("/api/payment/initiate", json=checkout_payload)

        assert response.status_code == 500
        assert response.json() == {"success": False, "error": "A apărut o eroare la procesarea comenzii"}

    def test_unexpected_error_is_generic_500(self, client, checkout_payload, monkeypatch):
        def _boom(self, payload):
            raise RuntimeError("unexpected")

        monkeypatch.setattr(OrderIntakeHandler, "handle_checkout", _boom)
        response = client.post("/api/payment/initiate", json=checkout_payload)

        assert response.status_code == 500
        assert response.json()["success"] is False


class TestOrderLookup:
    def test_unknown_order(self, client):
        response = client.get("/api/orders/NX-MISSING")

        assert response.status_code == 404
        assert response.json() == {"success": False, "error": "Comanda nu a fost găsită"}
