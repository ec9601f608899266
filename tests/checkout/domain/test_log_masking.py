from checkout.utils.logging import get_log_level, mask_contact_details


class TestMaskContactDetails:
    def test_email_is_masked(self):
        event = mask_contact_details(None, "info", {"event": "Order created", "customer": "ana.pop@example.ro"})
        assert event["customer"] == "a***@example.ro"

    def test_phone_is_masked(self):
        event = mask_contact_details(None, "info", {"event": "x", "phone": "0722123456"})
        assert event["phone"] == "***456"

    def test_credentials_are_redacted(self):
        event = mask_contact_details(None, "info", {"event": "x", "netopia_api_key": "secret"})
        assert event["netopia_api_key"] == "[redacted]"

    def test_other_fields_untouched(self):
        event = mask_contact_details(None, "info", {"event": "x", "order_number": "NX-1", "total": 21.0})
        assert event == {"event": "x", "order_number": "NX-1", "total": 21.0}


class TestLogLevel:
    def test_explicit_level_wins(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "ERROR")
        assert get_log_level() == "ERROR"

    def test_level_follows_environment(self, monkeypatch):
        monkeypatch.delenv("LOG_LEVEL", raising=False)
        monkeypatch.delenv("ENVIRONMENT", raising=False)
        monkeypatch.setenv("PROTEAN_ENV", "production")
        assert get_log_level() == "INFO"
