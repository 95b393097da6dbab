"""
Tests for PAN masking, token generation and card scheme detection.
"""
import pytest

from paystore.security import card_brand, generate_token, mask_pan, mask_params


class TestMaskPan:
    """Tests for mask_pan()"""

    @pytest.mark.parametrize("pan,expected", [
        ("4111111111111111", "************1111"),
        ("378282246310005", "***********0005"),
        ("1234", "1234"),
        ("12", "12"),
        ("", ""),
    ])
    def test_mask_pan(self, pan, expected):
        assert mask_pan(pan) == expected

    def test_custom_mask_char(self):
        assert mask_pan("4111111111111111", "X") == "XXXXXXXXXXXX1111"


class TestMaskParams:
    """Tests for mask_params()"""

    def test_query_string(self):
        result = mask_params("http://vault/v1/cards?pan=4111111111111111&limit=1")

        assert result == "http://vault/v1/cards?pan=************1111&limit=1"

    def test_only_the_pan_parameter_is_masked(self):
        result = mask_params("http://vault/v1/x?span=abcdef1234&card_pan=5555&pan=4111111111111111")

        assert result == "http://vault/v1/x?span=abcdef1234&card_pan=5555&pan=************1111"

    def test_json_body(self):
        result = mask_params('{"pan": "5555555555554444", "holder": "J DOE"}')

        assert result == '{"pan": "************4444", "holder": "J DOE"}'

    def test_text_without_pan_unchanged(self):
        assert mask_params('{"limit": 10}') == '{"limit": 10}'


class TestGenerateToken:
    """Tests for generate_token()"""

    def test_token_is_hex_sha256(self):
        token = generate_token()

        assert len(token) == 64
        int(token, 16)

    @pytest.mark.parametrize("size", [1, 16, 32, 128])
    def test_token_length_does_not_depend_on_size(self, size):
        token = generate_token(size)

        assert len(token) == 64
        assert token == token.lower()

    def test_tokens_are_unique(self):
        tokens = {generate_token() for _ in range(100)}

        assert len(tokens) == 100


class TestCardBrand:
    """Tests for card_brand()"""

    @pytest.mark.parametrize("pan,brand", [
        ("4111111111111111", "Visa"),
        ("5555555555554444", "MasterCard"),
        ("2221000000000009", "MasterCard"),
        ("378282246310005", "American Express"),
        ("6011111111111117", "Discover"),
        ("3530111333300000", "JCB"),
        ("30569309025904", "Diners Club"),
        ("2200123412341234", "Mir"),
        ("6200000000000005", "UnionPay"),
        ("6759649826438453", "Maestro"),
        ("9999999999999999", "Unknown"),
        ("4111-1111", "Unknown"),
    ])
    def test_card_brand(self, pan, brand):
        assert card_brand(pan) == brand
