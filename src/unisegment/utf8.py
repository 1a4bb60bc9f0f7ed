"""Scalar-at-a-time UTF-8 decoding with replacement. One U+FFFD per malformed unit."""

REPLACEMENT = 0xFFFD


def _lead_table() -> tuple:
    # lead byte -> (sequence length, lowest second byte, highest second byte)
    table = [None] * 256
    for b in range(0xC2, 0xE0):
        table[b] = (2, 0x80, 0xBF)
    for b in range(0xE0, 0xF0):
        table[b] = (3, 0x80, 0xBF)
    table[0xE0] = (3, 0xA0, 0xBF)  # no overlongs
    table[0xED] = (3, 0x80, 0x9F)  # no surrogates
    for b in range(0xF0, 0xF5):
        table[b] = (4, 0x80, 0xBF)
    table[0xF0] = (4, 0x90, 0xBF)
    table[0xF4] = (4, 0x80, 0x8F)  # <= U+10FFFF
    return tuple(table)


_LEADS = _lead_table()


def decode_scalar(buf, pos: int = 0) -> tuple[int, int]:
    """Decode the scalar starting at buf[pos]. Returns (scalar, width in bytes).

    Malformed or truncated input yields (REPLACEMENT, 1), so every call on a
    non-empty remainder consumes at least one byte.
    """
    lead = buf[pos]
    if lead < 0x80:
        return lead, 1
    seq = _LEADS[lead]
    if seq is None:
        return REPLACEMENT, 1
    size, lo, hi = seq
    if pos + size > len(buf):
        return REPLACEMENT, 1
    second = buf[pos + 1]
    if not lo <= second <= hi:
        return REPLACEMENT, 1
    scalar = ((lead & (0x7F >> size)) << 6) | (second & 0x3F)
    for i in range(pos + 2, pos + size):
        b = buf[i]
        if not 0x80 <= b <= 0xBF:
            return REPLACEMENT, 1
        scalar = (scalar << 6) | (b & 0x3F)
    return scalar, size


def is_truncated(buf, pos: int = 0) -> bool:
    """True if buf[pos:] is a valid but incomplete multi-byte sequence."""
    available = len(buf) - pos
    if available <= 0:
        return False
    seq = _LEADS[buf[pos]]
    if seq is None:
        return False
    size, lo, hi = seq
    if available >= size:
        return False
    if available > 1 and not lo <= buf[pos + 1] <= hi:
        return False
    return all(0x80 <= buf[i] <= 0xBF for i in range(pos + 2, len(buf)))


def decode_all(buf) -> tuple[list[int], list[int]]:
    """Decode a whole buffer. Returns scalars and their byte offsets plus len(buf)."""
    scalars = []
    offsets = []
    pos = 0
    end = len(buf)
    while pos < end:
        scalar, width = decode_scalar(buf, pos)
        scalars.append(scalar)
        offsets.append(pos)
        pos += width
    offsets.append(end)
    return scalars, offsets


def encoded_width(scalar: int) -> int:
    """UTF-8 length of a scalar. Surrogates count as 3 (surrogatepass)."""
    if scalar < 0x80:
        return 1
    if scalar < 0x800:
        return 2
    if scalar < 0x10000:
        return 3
    return 4
