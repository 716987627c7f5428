"""Tests for email validation and log sanitization."""

import pytest

from platform_backend.security import is_valid_email, sanitize_for_logging


class TestEmailValidation:
    @pytest.mark.parametrize("email", [
        "reader@example.com",
        "first.last+news@sub.example.org",
    ])
    def test_valid(self, email) -> None:
        assert is_valid_email(email)

    @pytest.mark.parametrize("email", [
        "notanemail",
        "user@",
        "@domain.com",
        "user@domain",
        "user @domain.com",
        "",
        None,
    ])
    def test_invalid(self, email) -> None:
        assert not is_valid_email(email)

    def test_too_long(self) -> None:
        assert not is_valid_email("a" * 250 + "@example.com")


class TestSanitizeForLogging:
    def test_secret_fields_redacted(self) -> None:
        sanitized = sanitize_for_logging({"title": "T", "api_key": "abc", "adminPassword": "pw"})
        assert sanitized == {"title": "T", "api_key": "***REDACTED***", "adminPassword": "***REDACTED***"}

    def test_inline_images_truncated(self) -> None:
        image = "data:image/png;base64," + "A" * 5000

        sanitized = sanitize_for_logging({"image": image}, max_value_length=20)

        assert sanitized["image"] == f"{image[:20]}... ({len(image)} chars)"

    def test_non_dict(self) -> None:
        assert sanitize_for_logging(["not", "a", "dict"]) == {}

    def test_input_not_modified(self) -> None:
        data = {"token": "t"}
        sanitize_for_logging(data)
        assert data == {"token": "t"}
