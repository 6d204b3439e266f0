"""Form input validator tests"""

import pytest

from localpress.errors import ValidationError
from localpress.utils.validators import (
    is_valid_email,
    is_valid_zip_code,
    require_email,
    require_tip_amount,
    require_zip_code,
    sanitize_zip_code,
)


class TestZipCode:

    @pytest.mark.parametrize("zip_code", ["90210", "00000", "12345-6789", " 90210 ", "10001-0001"])
    def test_valid(self, zip_code):
        assert is_valid_zip_code(zip_code)

    @pytest.mark.parametrize("zip_code", [
        "", "9021", "902100", "abcde", "9021a", "12345-678", "12345-67890",
        "123456789", "12345 6789", "1234-56789", "12345-", "-1234",
        "\u0669\u0660\u0662\u0661\u0660", "\uff19\uff10\uff12\uff11\uff10", "90210-\u0661\u0662\u0663\u0664",
    ])
    def test_invalid(self, zip_code):
        assert not is_valid_zip_code(zip_code)

    def test_non_string(self):
        assert not is_valid_zip_code(90210)

    def test_sanitize(self):
        assert sanitize_zip_code(" 90210 ") == "90210"
        assert sanitize_zip_code("zip: 12345-6789!") == "12345-6789"
        assert sanitize_zip_code("1234567890123") == "1234567890"
        assert sanitize_zip_code("\uff19\uff10\uff12\uff11\uff10") == ""

    def test_require_returns_trimmed(self):
        assert require_zip_code(" 90210 ") == "90210"

    def test_require_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            require_zip_code("abc")
        assert exc_info.value.field == "zip_code"


class TestEmail:

    def test_valid(self):
        assert is_valid_email("reader@example.com")

    @pytest.mark.parametrize("email", ["", "reader", "reader@", "@example.com", "a b@example.com", "reader@example"])
    def test_invalid(self, email):
        assert not is_valid_email(email)

    def test_require_raises(self):
        with pytest.raises(ValidationError) as exc_info:
            require_email(None)
        assert exc_info.value.field == "email"


class TestTipAmount:

    def test_rounds_to_cents(self):
        assert require_tip_amount("7.499") == 7.5

    @pytest.mark.parametrize("amount", [0, -1, "abc", None, float("nan"), 5000])
    def test_rejects(self, amount):
        with pytest.raises(ValidationError):
            require_tip_amount(amount)
