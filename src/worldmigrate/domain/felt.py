"""Field element helpers and Cairo value encodings."""

from __future__ import annotations

from typing import Final

from starknet_py.cairo.felt import encode_shortstring

FIELD_PRIME: Final[int] = 2**251 + 17 * 2**192 + 1
BYTES_PER_WORD: Final[int] = 31


def parse_felt(value: str) -> int:
    """Parse a decimal or ``0x``-prefixed hexadecimal string into a felt."""

    text = value.strip()
    if not text:
        raise ValueError("Empty felt value")
    try:
        parsed = int(text, 16) if text.lower().startswith("0x") else int(text, 10)
    except ValueError as exc:
        raise ValueError(f"Invalid felt value: {value!r}") from exc
    if not 0 <= parsed < FIELD_PRIME:
        raise ValueError(f"Felt value out of range: {value!r}")
    return parsed


def felt_to_hex(value: int) -> str:
    return f"{value:#066x}"


def short_string_to_felt(text: str) -> int:
    """Encode ``text`` as a Cairo short string (at most 31 ASCII characters)."""

    return encode_shortstring(text)


def bytearray_to_felts(text: str) -> list[int]:
    """Serialize ``text`` as a Cairo ``ByteArray``.

    Layout: number of full 31-byte words, the words, the pending word and the
    pending word length.
    """

    data = text.encode("utf-8")
    full_count, pending_len = divmod(len(data), BYTES_PER_WORD)
    words = [
        int.from_bytes(data[index * BYTES_PER_WORD : (index + 1) * BYTES_PER_WORD], "big")
        for index in range(full_count)
    ]
    pending = int.from_bytes(data[full_count * BYTES_PER_WORD :], "big") if pending_len else 0
    return [full_count, *words, pending, pending_len]
