"""
License key generator.

Format: {VV}{PPPPPPPPPPPPPPPP}, 18 lowercase hex characters
- 2-char validation code (XOR of the plaintext payload bytes)
- 16-char payload: the 64-bit plaintext run backwards through the cipher
  keyed with LICENSE_KEY

Plaintext layout (64 bits):
- high word: name-derived prefix (see checksum.derive_prefix)
- low word: random suffix, either verbatim (tags 0x0401-0x0403 in its top
  16 bits) or tagged with 0x01000000 and truncated to its low 24 bits

Verification encrypts the payload to recover the plaintext, so a key is
checked from the name and key text alone.
"""

import random
from typing import Optional

from ckey_engine.common.exceptions import InvalidSuffixError
from ckey_engine.common.logging import get_logger
from ckey_engine.keygen.checksum import derive_prefix, validation_code
from ckey_engine.keygen.cipher import WORD_MASK, decrypt_block, derive_schedule

logger = get_logger("keygen.generator")

LICENSE_KEY = -5408575981733630035
KEY_LENGTH = 18
CODE_LEN = 2

SUFFIX_MAX = 0x7FFFFFFF
VERBATIM_SUFFIX_TAGS = (0x0401, 0x0402, 0x0403)
SUFFIX_TAG = 0x01000000
SUFFIX_LOW_MASK = 0xFFFFFF


def random_suffix() -> int:
    """Draw a suffix uniformly from [0, 0x7fffffff]."""
    return random.randint(0, SUFFIX_MAX)


def build_payload(prefix: int, suffix: int) -> int:
    """Combine a 32-bit prefix and a suffix into the 64-bit plaintext."""
    if suffix >> 16 in VERBATIM_SUFFIX_TAGS:
        low = suffix
    else:
        low = SUFFIX_TAG | (suffix & SUFFIX_LOW_MASK)
    return ((prefix & WORD_MASK) << 32) | low


def format_key(code: int, out: int) -> str:
    """Render validation code + payload as 18 lowercase hex chars."""
    return f"{code & 0xFF:02x}{out & 0xFFFFFFFFFFFFFFFF:016x}"


def generate_license_key(name: str, suffix: Optional[int] = None) -> str:
    """
    Generate a license key bound to ``name``.

    Args:
        name: Licensee name, any unicode string (empty included)
        suffix: Fixed suffix in [0, 0x7fffffff]; random when omitted

    Returns:
        18-character lowercase hex license key
    """
    if suffix is None:
        suffix = random_suffix()
    elif not 0 <= suffix <= SUFFIX_MAX:
        raise InvalidSuffixError(f"Suffix must be in [0, {SUFFIX_MAX:#x}], got {suffix}")

    payload = build_payload(derive_prefix(name), suffix)
    out = decrypt_block(derive_schedule(LICENSE_KEY), payload)
    key = format_key(validation_code(payload), out)

    logger.debug("Generated license key for name of %d chars", len(name))
    return key
