"""Grapheme_Cluster_Break property lookup. Backed by the regex module's Unicode tables."""
import logging
from enum import IntEnum
from functools import lru_cache

import regex

logger = logging.getLogger(__name__)

MAX_SCALAR = 0x10FFFF


class Property(IntEnum):
    """Property class of a scalar value. ANY is both "Other" and the table wildcard."""

    ANY = 0
    CR = 1
    LF = 2
    CONTROL = 3
    EXTEND = 4
    ZWJ = 5
    REGIONAL_INDICATOR = 6
    PREPEND = 7
    SPACING_MARK = 8
    L = 9
    V = 10
    T = 11
    LV = 12
    LVT = 13
    EXTENDED_PICTOGRAPHIC = 14


# Alternation order matters: a Grapheme_Cluster_Break value other than Other
# takes precedence over Extended_Pictographic.
_PROPERTY_PATTERN = regex.compile(
    r"(?P<CR>\p{Grapheme_Cluster_Break=CR})"
    r"|(?P<LF>\p{Grapheme_Cluster_Break=LF})"
    r"|(?P<CONTROL>\p{Grapheme_Cluster_Break=Control})"
    r"|(?P<EXTEND>\p{Grapheme_Cluster_Break=Extend})"
    r"|(?P<ZWJ>\p{Grapheme_Cluster_Break=ZWJ})"
    r"|(?P<REGIONAL_INDICATOR>\p{Grapheme_Cluster_Break=Regional_Indicator})"
    r"|(?P<PREPEND>\p{Grapheme_Cluster_Break=Prepend})"
    r"|(?P<SPACING_MARK>\p{Grapheme_Cluster_Break=SpacingMark})"
    r"|(?P<L>\p{Grapheme_Cluster_Break=L})"
    r"|(?P<V>\p{Grapheme_Cluster_Break=V})"
    r"|(?P<T>\p{Grapheme_Cluster_Break=T})"
    r"|(?P<LV>\p{Grapheme_Cluster_Break=LV})"
    r"|(?P<LVT>\p{Grapheme_Cluster_Break=LVT})"
    r"|(?P<EXTENDED_PICTOGRAPHIC>\p{Extended_Pictographic})"
)


def _lookup(scalar: int) -> Property:
    if scalar < 0 or scalar > MAX_SCALAR:
        return Property.ANY
    if 0xD800 <= scalar <= 0xDFFF:
        # Cs is Control; regex has no Grapheme_Cluster_Break data for surrogates.
        return Property.CONTROL
    match = _PROPERTY_PATTERN.match(chr(scalar))
    if match is None:
        return Property.ANY
    return Property[match.lastgroup]


_ASCII = tuple(_lookup(cp) for cp in range(0x80))
logger.debug("Precomputed %d ASCII property classes", len(_ASCII))


@lru_cache(maxsize=4096)
def _cached_lookup(scalar: int) -> Property:
    return _lookup(scalar)


def classify(scalar: int) -> Property:
    """Return the property class of a scalar value. Total: unknown values are ANY."""
    if 0 <= scalar < 0x80:
        return _ASCII[scalar]
    return _cached_lookup(scalar)
