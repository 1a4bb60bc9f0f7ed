"""Extended grapheme cluster segmentation (Unicode UAX #29)."""
from .grapheme_utils import grapheme_spans, is_single_grapheme, split_into_graphemes, truncate_graphemes
from .iterator import Graphemes, Phase, count_clusters
from .properties import Property, classify
from .streaming import StreamSegmenter, first_cluster_from_bytes, first_cluster_from_text
from .transitions import State, break_tie, resolve, transition

__all__ = [
    "Graphemes", "Phase", "count_clusters",
    "first_cluster_from_bytes", "first_cluster_from_text", "StreamSegmenter",
    "Property", "classify", "State", "resolve", "break_tie", "transition",
    "split_into_graphemes", "grapheme_spans", "truncate_graphemes", "is_single_grapheme",
]
