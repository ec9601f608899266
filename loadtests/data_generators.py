"""Faker-based data generators for the checkout load test scenarios.

Payloads pass the checkout's own validation: emails match the address
pattern, phones are Romanian (+40 or a leading 0), and cart lines only
reference ids from ``loadtests/catalog.json``.
"""

import json
import random
import uuid
from pathlib import Path

from faker import Faker

fake = Faker("ro_RO")

_CATALOG = json.loads((Path(__file__).parent / "catalog.json").read_text(encoding="utf-8"))

COUNTIES = ["Alba", "Bihor", "Brașov", "București", "Cluj", "Constanța", "Iași", "Timiș"]

PRODUCT_IDS = [p["id"] for p in _CATALOG["products"]]
BUNDLE_IDS = [b["id"] for b in _CATALOG["bundles"]]

# Netopia status codes
NETOPIA_PENDING = 0
NETOPIA_PAID = 2
NETOPIA_DECLINED = 6


def valid_email() -> str:
    local = fake.user_name()[:20]
    return f"{local}.{uuid.uuid4().hex[:4]}@{fake.free_email_domain()}"


def valid_phone() -> str:
    """Mobile numbers like ``0722 123 456``."""
    return f"07{random.randint(20, 89)} {random.randint(100, 999)} {random.randint(100, 999)}"


def address_data() -> dict:
    return {
        "street": fake.street_address()[:255],
        "city": fake.city()[:100],
        "county": random.choice(COUNTIES),
        "postalCode": fake.postcode()[:20],
        "country": "Romania",
    }


def person_customer() -> dict:
    return {
        "type": "person",
        "firstName": fake.first_name()[:100],
        "lastName": fake.last_name()[:100],
        "email": valid_email(),
        "phone": valid_phone(),
        "deliveryAddress": address_data(),
        "sameAddress": True,
    }


def company_customer() -> dict:
    return {
        "type": "company",
        "companyName": fake.company()[:255],
        "cui": f"RO{random.randint(1_000_000, 99_999_999)}",
        "contactPerson": fake.name()[:255],
        "email": valid_email(),
        "phone": valid_phone(),
        "deliveryAddress": address_data(),
        "billingAddress": address_data(),
        "sameAddress": False,
    }


def cart_items() -> list[dict]:
    """1-3 products, sometimes a bundle. Prices are deliberately wrong."""
    items = [
        {"id": pid, "type": "product", "price": 0.01, "quantity": random.randint(1, 12)}
        for pid in random.sample(PRODUCT_IDS, k=random.randint(1, len(PRODUCT_IDS)))
    ]
    if random.random() < 0.3:
        items.append({"id": random.choice(BUNDLE_IDS), "type": "bundle", "quantity": 1})
    return items


def checkout_data() -> dict:
    customer = person_customer() if random.random() < 0.8 else company_customer()
    payload = {"customer": customer, "cartItems": cart_items()}
    if random.random() < 0.2:
        payload["orderNotes"] = fake.sentence()[:200]
    return payload


def unknown_item_checkout_data() -> dict:
    """Checkout that must be rejected: one line is not in the catalogue."""
    payload = checkout_data()
    payload["cartItems"].append({"id": f"lipsa-{uuid.uuid4().hex[:6]}", "type": "product", "quantity": 1})
    return payload


def ipn_data(order_number: str | None, status: int) -> dict:
    notification = {
        "payment": {
            "status": status,
            "ntpID": f"NTP-LT-{uuid.uuid4().hex[:10]}",
            "amount": 0,
            "currency": "RON",
        },
    }
    if order_number:
        notification["order"] = {"orderID": order_number}
    return notification
