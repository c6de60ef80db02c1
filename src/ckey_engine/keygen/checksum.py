"""Name checksum and payload validation code."""

from ckey_engine.keygen.cipher import BLOCK_MASK, WORD_MASK, rotate_left
from ckey_engine.keygen.encoder import encode_name

PREFIX_MAGIC = 0x54882F8A


def fold_signed(data: bytes) -> int:
    """Rotate-XOR fold of sign-extended bytes into an unsigned 32-bit word."""
    n = 0
    for b in data:
        signed = b - 256 if b > 127 else b
        n = rotate_left(n ^ (signed & WORD_MASK), 3)
    return n


def derive_prefix(name: str) -> int:
    """The 32-bit prefix a valid key for ``name`` must carry (unsigned)."""
    return fold_signed(encode_name(name)) ^ PREFIX_MAGIC


def validation_code(block: int) -> int:
    """XOR of the eight unsigned bytes of a 64-bit block."""
    n = 0
    for b in (block & BLOCK_MASK).to_bytes(8, "big"):
        n ^= b
    # abs() of a masked byte is a no-op; the code is always 0..255
    return abs(n & 0xFF)
