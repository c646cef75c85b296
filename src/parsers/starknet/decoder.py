"""Decoders for Cairo return values (felts as hex strings)."""

from src.parsers.exceptions import ContractReadError

BYTES_PER_WORD = 31


def decode_uint(felts: list[str]) -> int:
    """Decode a u256 (low, high) or a single-felt integer."""
    if len(felts) == 1:
        return int(felts[0], 16)
    if len(felts) == 2:
        low, high = (int(f, 16) for f in felts)
        return low + (high << 128)
    raise ContractReadError(f"Expected 1 or 2 felts for an integer, got {len(felts)}")


def decode_address(felts: list[str]) -> str:
    if len(felts) != 1:
        raise ContractReadError(f"Expected 1 felt for an address, got {len(felts)}")
    return hex(int(felts[0], 16))


def _felt_to_text(value: int, length: int | None = None) -> str:
    if length is None:
        length = (value.bit_length() + 7) // 8
    try:
        raw = value.to_bytes(length, "big")
    except OverflowError as e:
        raise ContractReadError(f"String word does not fit in {length} bytes") from e
    return raw.decode("utf-8", errors="replace")


def decode_string(felts: list[str]) -> str:
    """Decode a Cairo short string (one felt) or a serialized ByteArray.

    ByteArray layout: [n_words, word_0 .. word_n-1, pending_word, pending_len],
    full words carry 31 bytes each.
    """
    if not felts:
        return ""
    if len(felts) == 1:
        return _felt_to_text(int(felts[0], 16))

    values = [int(f, 16) for f in felts]
    n_words = values[0]
    if len(values) != n_words + 3:
        raise ContractReadError(f"Malformed ByteArray: {len(values)} felts for {n_words} words")

    words = [_felt_to_text(w, BYTES_PER_WORD) for w in values[1 : 1 + n_words]]
    pending_word, pending_len = values[1 + n_words], values[2 + n_words]
    if pending_len:
        words.append(_felt_to_text(pending_word, pending_len))
    return "".join(words)
