"""Tests for email and Romanian phone number checks."""

import pytest

from checkout.customer.contact import is_valid_email, is_valid_phone, normalize_phone


class TestEmail:
    @pytest.mark.parametrize("email", ["ana@example.ro", "a.b+c@mail.co.uk", "x@y.z"])
    def test_valid(self, email):
        assert is_valid_email(email) is True

    @pytest.mark.parametrize("email", ["", None, "ana", "ana@example", "ana pop@example.ro", "@example.ro", "a@@b.ro"])
    def test_invalid(self, email):
        assert is_valid_email(email) is False


class TestPhone:
    @pytest.mark.parametrize(
        "phone",
        ["0722123456", "0722 123 456", "0722-123-456", "+40722123456", "+40 722 123 456", "07221234567"],
    )
    def test_valid(self, phone):
        assert is_valid_phone(phone) is True

    @pytest.mark.parametrize(
        "phone",
        ["", None, "12345", "0722", "+4122123456", "072212345a", "0722.123.456", "072212345678"],
    )
    def test_invalid(self, phone):
        assert is_valid_phone(phone) is False

    def test_normalize_strips_spaces_and_hyphens(self):
        assert normalize_phone("+40 722-123 456") == "+40722123456"
