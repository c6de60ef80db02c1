"""CKey-Engine: offline name-bound license key generator and verifier."""

from ckey_engine.client import KeyClient
from ckey_engine.keygen.generator import generate_license_key
from ckey_engine.keygen.validator import ValidationResult, validate_key, verify_license_key

__all__ = [
    "KeyClient",
    "ValidationResult",
    "generate_license_key",
    "validate_key",
    "verify_license_key",
]
__version__ = "0.1.0"
