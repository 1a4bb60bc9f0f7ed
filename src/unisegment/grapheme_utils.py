"""Grapheme helpers for callers that want lists and limits rather than a cursor."""
from unisegment.iterator import Graphemes, count_clusters


def split_into_graphemes(text: str) -> list[str]:
    """Split text into extended grapheme clusters. Joining the result gives text back."""
    if not text:
        return []
    return list(Graphemes(text))


def grapheme_spans(text: str) -> list[tuple[int, int]]:
    """UTF-8 byte ranges [from, to) of each cluster in text."""
    g = Graphemes(text)
    spans = []
    while g.advance():
        spans.append(g.current_byte_range())
    return spans


def truncate_graphemes(text: str, limit: int) -> str:
    """Keep at most limit clusters of text. Never cuts through a cluster."""
    if limit < 0:
        raise ValueError("limit must be >= 0")
    kept = 0
    end = 0
    g = Graphemes(text)
    while kept < limit and g.advance():
        end += len(g.current_text())
        kept += 1
    return text[:end]


def is_single_grapheme(text: str) -> bool:
    """Check if text is exactly one user-perceived character."""
    return count_clusters(text) == 1
