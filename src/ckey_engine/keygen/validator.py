"""
Offline license key validation.

Recomputes everything from the name and the key text; no stored state.
"""

import re

from ckey_engine.common.exceptions import InvalidKeyError
from ckey_engine.common.logging import get_logger
from ckey_engine.keygen.checksum import derive_prefix, validation_code
from ckey_engine.keygen.cipher import derive_schedule, encrypt_block
from ckey_engine.keygen.generator import CODE_LEN, KEY_LENGTH, LICENSE_KEY

logger = get_logger("keygen.validator")

KEY_PATTERN = re.compile(f"[0-9a-fA-F]{{{KEY_LENGTH}}}")


class ValidationResult:
    """Result of offline key validation."""

    __slots__ = ("valid", "code", "message")

    def __init__(self, valid: bool, code: str = "", message: str = ""):
        self.valid = valid
        self.code = code
        self.message = message


def parse_license_key(key: str) -> tuple[int, int]:
    """
    Split a key into (validation code, 64-bit payload).

    Raises:
        InvalidKeyError: key is not a string of 18 hex characters
    """
    if not isinstance(key, str):
        raise InvalidKeyError("Key is not a string")
    if len(key) != KEY_LENGTH:
        raise InvalidKeyError(f"Expected {KEY_LENGTH} characters, got {len(key)}")
    if not KEY_PATTERN.fullmatch(key):
        raise InvalidKeyError("Key contains non-hexadecimal characters")

    check_byte = int(key[:CODE_LEN], 16)
    high = int(key[CODE_LEN:CODE_LEN + 8], 16)
    low = int(key[CODE_LEN + 8:], 16)
    return check_byte, (high << 32) | low


def validate_key(name: str, key: str) -> ValidationResult:
    """
    Full offline validation with a diagnostic code.

    Codes: INVALID_FORMAT, INVALID_CHECKSUM, NAME_MISMATCH, VALID.
    Never raises.
    """
    try:
        check_byte, out = parse_license_key(key)
    except InvalidKeyError as e:
        return ValidationResult(False, "INVALID_FORMAT", e.message)

    payload = encrypt_block(derive_schedule(LICENSE_KEY), out)
    if validation_code(payload) != check_byte:
        return ValidationResult(
            False, "INVALID_CHECKSUM", "Validation code does not match the payload"
        )

    try:
        expected = derive_prefix(name)
    except (AttributeError, TypeError, UnicodeError) as e:
        logger.debug("Name could not be encoded: %s", type(e).__name__)
        return ValidationResult(False, "INVALID_FORMAT", "Name is not a valid string")

    if payload >> 32 != expected:
        return ValidationResult(False, "NAME_MISMATCH", "Key was not issued for this name")

    return ValidationResult(True, "VALID", "Key is valid for this name")


def verify_license_key(name: str, key: str) -> bool:
    """True iff ``key`` is a valid license key for ``name``. Never raises."""
    result = validate_key(name, key)
    logger.debug("License key check: %s", result.code)
    return result.valid
