"""
Name encoder: binds a license to its owner's name.

The name is serialised as a length-prefixed, zero-padded buffer and
encrypted block by block under the fixed name key.
"""

import struct

from ckey_engine.keygen.cipher import derive_schedule, encrypt_block

NAME_KEY = 0x7A21C951691CD470
BLOCK_SIZE = 8


def _utf8(name: str) -> bytes:
    try:
        return name.encode("utf-8")
    except UnicodeEncodeError:
        # Lone surrogates become U+FFFD, as a WHATWG TextEncoder does
        return (
            name.encode("utf-16", "surrogatepass")
            .decode("utf-16", "replace")
            .encode("utf-8")
        )


def build_name_buffer(name: str) -> bytes:
    """Length prefix (4 bytes, big-endian) + UTF-8 name, zero-padded to 8."""
    raw = _utf8(name)
    buff = struct.pack(">I", len(raw)) + raw
    return buff + b"\x00" * (-len(buff) % BLOCK_SIZE)


def encode_name(name: str) -> bytes:
    """Encrypt the name buffer under NAME_KEY, one big-endian block at a time."""
    schedule = derive_schedule(NAME_KEY)
    buff = build_name_buffer(name)
    out = bytearray()
    for offset in range(0, len(buff), BLOCK_SIZE):
        (block,) = struct.unpack_from(">Q", buff, offset)
        out += struct.pack(">Q", encrypt_block(schedule, block))
    return bytes(out)
