"""
RC5-style 64-bit block cipher used by the license key scheme.

Blocks are unsigned 64-bit ints split into two 32-bit words: A (low) and
B (high). Round keys are unsigned 32-bit words; every add and subtract is
reduced modulo 2**32 so results match a 32-bit two's-complement machine
bit for bit.

Rotation amounts are data-dependent (taken from the running words
themselves), always reduced to ``y & 31``.
"""

from functools import lru_cache

ROUNDS = 12
ROUND_KEYS = 2 * (ROUNDS + 1)

WORD_MASK = 0xFFFFFFFF
BLOCK_MASK = 0xFFFFFFFFFFFFFFFF

# Schedule seed and increment, given as signed 32-bit literals
SCHEDULE_SEED = -1209970333 & WORD_MASK
SCHEDULE_STEP = -1640531527 & WORD_MASK

Schedule = tuple[int, ...]


def rotate_left(x: int, y: int, width: int = 32) -> int:
    """Rotate an unsigned ``width``-bit word left by ``y mod width``."""
    mask = (1 << width) - 1
    shift = y & (width - 1)
    x &= mask
    return ((x << shift) | (x >> (width - shift))) & mask


def rotate_right(x: int, y: int, width: int = 32) -> int:
    """Rotate an unsigned ``width``-bit word right by ``y mod width``."""
    mask = (1 << width) - 1
    shift = y & (width - 1)
    x &= mask
    return ((x >> shift) | (x << (width - shift))) & mask


def split_block(block: int) -> tuple[int, int]:
    """Return (A, B) = (low word, high word) of a 64-bit block."""
    block &= BLOCK_MASK
    return block & WORD_MASK, block >> 32


def pack_block(a: int, b: int) -> int:
    """Inverse of split_block."""
    return (a & WORD_MASK) | ((b & WORD_MASK) << 32)


@lru_cache(maxsize=8)
def derive_schedule(key: int) -> Schedule:
    """
    Expand a 64-bit cipher key into the 26-word round-key schedule.

    Args:
        key: 64-bit key, signed or unsigned (normalised to two's complement)

    Returns:
        Immutable tuple of 26 unsigned 32-bit round keys
    """
    key &= BLOCK_MASK
    words = [key & WORD_MASK, key >> 32]

    rk = [SCHEDULE_SEED]
    for _ in range(1, ROUND_KEYS):
        rk.append((rk[-1] + SCHEDULE_STEP) & WORD_MASK)

    a = b = 0
    i = j = 0
    for _ in range(3 * ROUND_KEYS):
        rk[i] = rotate_left((rk[i] + a + b) & WORD_MASK, 3)
        a = rk[i]
        words[j] = rotate_left((words[j] + a + b) & WORD_MASK, a + b)
        b = words[j]
        i = (i + 1) % ROUND_KEYS
        j = (j + 1) % 2

    return tuple(rk)


def encrypt_block(schedule: Schedule, block: int) -> int:
    """Encrypt one 64-bit block."""
    a, b = split_block(block)
    a = (a + schedule[0]) & WORD_MASK
    b = (b + schedule[1]) & WORD_MASK

    for r in range(1, ROUNDS + 1):
        a = (rotate_left(a ^ b, b) + schedule[2 * r]) & WORD_MASK
        b = (rotate_left(b ^ a, a) + schedule[2 * r + 1]) & WORD_MASK

    return pack_block(a, b)


def decrypt_block(schedule: Schedule, block: int) -> int:
    """Decrypt one 64-bit block; exact inverse of encrypt_block."""
    a, b = split_block(block)

    for r in range(ROUNDS, 0, -1):
        b = rotate_right((b - schedule[2 * r + 1]) & WORD_MASK, a) ^ a
        a = rotate_right((a - schedule[2 * r]) & WORD_MASK, b) ^ b

    b = (b - schedule[1]) & WORD_MASK
    a = (a - schedule[0]) & WORD_MASK

    return pack_block(a, b)
