"""Checkout customers: individuals and companies.

The storefront sends one of two customer shapes, tagged by ``type``. Both
carry a delivery address and, unless ``sameAddress`` is set, a separate
billing address. ``normalize_customer`` flattens either shape into the
record persisted on the order.
"""

from dataclasses import dataclass
from typing import Annotated, Literal, assert_never

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from checkout.customer.contact import is_valid_email, is_valid_phone, normalize_phone
from checkout.errors import InvalidCustomer

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class Address(BaseModel):
    model_config = _CAMEL

    street: str = Field(min_length=1, max_length=255)
    city: str = Field(min_length=1, max_length=100)
    county: str = Field(default="", max_length=100)
    postal_code: str = Field(min_length=1, max_length=20)
    country: str = Field(default="Romania", max_length=100)


class _CustomerBase(BaseModel):
    model_config = _CAMEL

    email: str = Field(max_length=254)
    # Raw input; spaces and hyphens are dropped before the number is stored.
    phone: str = Field(max_length=30)
    delivery_address: Address
    billing_address: Address | None = None
    same_address: bool = False

    @model_validator(mode="after")
    def billing_address_required_unless_same(self):
        if not self.same_address and self.billing_address is None:
            raise ValueError("billingAddress is required when sameAddress is false")
        return self


class PersonCustomer(_CustomerBase):
    type: Literal["person"]
    first_name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)


class CompanyCustomer(_CustomerBase):
    type: Literal["company"]
    company_name: str = Field(min_length=1, max_length=255)
    cui: str = Field(min_length=1, max_length=20)
    contact_person: str = Field(default="", max_length=255)


Customer = Annotated[PersonCustomer | CompanyCustomer, Field(discriminator="type")]


@dataclass(frozen=True)
class CustomerRecord:
    """Customer data as stored on an order."""

    customer_type: str
    display_name: str
    email: str
    phone: str
    delivery_address: Address
    billing_address: Address
    first_name: str | None = None
    last_name: str | None = None
    company_name: str | None = None
    cui: str | None = None
    contact_person: str | None = None


def validate_contact(customer: PersonCustomer | CompanyCustomer) -> None:
    """Raise InvalidCustomer when the email or phone number is malformed."""
    if not is_valid_email(customer.email):
        raise InvalidCustomer("Adresă de email invalidă")
    if not is_valid_phone(customer.phone):
        raise InvalidCustomer("Număr de telefon invalid")


def normalize_customer(customer: PersonCustomer | CompanyCustomer) -> CustomerRecord:
    billing = customer.delivery_address if customer.same_address else customer.billing_address

    match customer:
        case PersonCustomer():
            return CustomerRecord(
                customer_type="person",
                display_name=f"{customer.first_name} {customer.last_name}",
                email=customer.email,
                phone=normalize_phone(customer.phone),
                delivery_address=customer.delivery_address,
                billing_address=billing,
                first_name=customer.first_name,
                last_name=customer.last_name,
            )
        case CompanyCustomer():
            return CustomerRecord(
                customer_type="company",
                display_name=customer.company_name,
                email=customer.email,
                phone=normalize_phone(customer.phone),
                delivery_address=customer.delivery_address,
                billing_address=billing,
                company_name=customer.company_name,
                cui=customer.cui,
                contact_person=customer.contact_person,
            )
        case _:
            assert_never(customer)
