"""
Card data protection helpers: PAN masking, access tokens, scheme detection.
"""

import hashlib
import re
import secrets

MASK_CHAR = "*"
TOKEN_SIZE = 32

_QUERY_PAN = re.compile(r"((?<![A-Za-z_])pan=)([^&\s\"]+)")
_JSON_PAN = re.compile(r"(\"pan\"\s*:\s*\")([^\"]+)(\")")

# (scheme, prefixes, allowed lengths); first match wins, so longer and more
# specific prefixes come before the broad ones.
_BRANDS = (
    ("Mir", ("2200", "2201", "2202", "2203", "2204"), (16, 17, 18, 19)),
    ("American Express", ("34", "37"), (15,)),
    ("Diners Club", ("300", "301", "302", "303", "304", "305", "36", "38", "39"), (14, 16, 19)),
    ("JCB", tuple(str(p) for p in range(3528, 3590)), (16, 17, 18, 19)),
    ("Discover", ("6011", "644", "645", "646", "647", "648", "649", "65"), (16, 19)),
    ("UnionPay", ("62",), (16, 17, 18, 19)),
    ("Maestro", ("5018", "5020", "5038", "5893", "6304", "6759", "6761", "6762", "6763"), tuple(range(12, 20))),
    ("MasterCard", tuple(str(p) for p in range(51, 56)) + tuple(str(p) for p in range(2221, 2721)), (16,)),
    ("Visa", ("4",), (13, 16, 19)),
)


def mask_pan(pan: str, mask_char: str = MASK_CHAR) -> str:
    """Replace every character but the last four with the mask character."""
    repeat = max(len(pan) - 4, 0)
    return mask_char * repeat + pan[repeat:]


def mask_params(data: str) -> str:
    """Mask PAN values in a query string or JSON body before logging it."""
    result = _QUERY_PAN.sub(lambda m: m.group(1) + mask_pan(m.group(2)), data)
    return _JSON_PAN.sub(
        lambda m: m.group(1) + mask_pan(m.group(2)) + m.group(3), result
    )


def generate_token(size: int = TOKEN_SIZE) -> str:
    """SHA-256 of ``size`` random bytes, hex encoded (64 characters)."""
    return hashlib.sha256(secrets.token_bytes(size)).hexdigest()


def card_brand(pan: str) -> str:
    """Best-effort card scheme detection from the PAN prefix and length."""
    digits = pan.replace(" ", "")
    if not digits.isdigit():
        return "Unknown"
    for brand, prefixes, lengths in _BRANDS:
        if len(digits) in lengths and digits.startswith(prefixes):
            return brand
    return "Unknown"
