"""Tests for the Graphemes iterator."""
import random
import sys
from pathlib import Path

import pytest
import regex

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))
from unisegment.iterator import Graphemes, Phase, count_clusters

from grapheme_cases import BENCHMARK_TEXT, CASES, KISS, to_text


def drain(g: Graphemes) -> list[str]:
    out = []
    while g.advance():
        out.append(g.current_text())
    return out


@pytest.mark.parametrize("text, expected", CASES)
def test_clusters(text, expected):
    g = Graphemes(text)
    index = 0
    while g.advance():
        assert g.current_text() == expected[index]
        assert g.current_scalars() == tuple(map(ord, expected[index]))
        assert g.current_bytes() == expected[index].encode("utf-8")
        index += 1
    assert index == len(expected)


@pytest.mark.parametrize("text, expected", CASES)
def test_from_scalars(text, expected):
    assert drain(Graphemes.from_scalars([ord(c) for c in text])) == expected


@pytest.mark.parametrize("text, expected", CASES)
def test_from_bytes(text, expected):
    assert drain(Graphemes.from_bytes(text.encode("utf-8"))) == expected


def test_str():
    g = Graphemes("mo" + chr(0x308) + "p")
    g.advance()
    g.advance()
    g.advance()
    assert g.current_text() == "p"


def test_bytes():
    g = Graphemes("A" + to_text(KISS) + "B")
    g.advance()
    g.advance()
    g.advance()
    assert g.current_bytes() == b"B"


def test_positions():
    g = Graphemes("A" + to_text(KISS) + "B")
    g.advance()
    g.advance()
    assert g.current_byte_range() == (1, 28)


def test_reset():
    g = Graphemes("mo" + chr(0x308) + "p")
    g.advance()
    g.advance()
    g.advance()
    g.reset()
    assert g.phase is Phase.NOT_STARTED
    g.advance()
    assert g.current_text() == "m"


def test_reset_replays_identical_sequence():
    g = Graphemes(BENCHMARK_TEXT)
    first = list(g)
    g.reset()
    assert list(g) == first


def test_early_access():
    g = Graphemes("test")
    assert g.phase is Phase.NOT_STARTED
    assert g.current_scalars() == ()
    assert g.current_text() == ""
    assert g.current_bytes() == b""
    assert g.current_byte_range() == (0, 0)


def test_late_access():
    g = Graphemes("x")
    assert g.advance() is True
    assert g.advance() is False
    assert g.phase is Phase.FINISHED
    assert g.current_scalars() == ()
    assert g.current_text() == ""
    assert g.current_bytes() == b""
    assert g.current_byte_range() == (1, 1)


def test_advance_after_exhaustion_stays_finished():
    g = Graphemes("ab")
    assert drain(g) == ["a", "b"]
    assert g.advance() is False
    assert g.advance() is False
    assert g.current_byte_range() == (2, 2)


def test_empty_text():
    g = Graphemes("")
    assert g.current_byte_range() == (0, 0)
    assert g.advance() is False
    assert g.current_byte_range() == (0, 0)


def test_byte_ranges_partition_input():
    data = BENCHMARK_TEXT.encode("utf-8")
    g = Graphemes(BENCHMARK_TEXT)
    prev_end = 0
    while g.advance():
        start, end = g.current_byte_range()
        assert start == prev_end
        assert end > start
        assert data[start:end] == g.current_bytes()
        prev_end = end
    assert prev_end == len(data)


def test_malformed_bytes_replaced():
    g = Graphemes.from_bytes(b"a\xffb")
    assert drain(g) == ["a", chr(0xFFFD), "b"]
    g.reset()
    g.advance()
    g.advance()
    assert g.current_bytes() == b"\xff"
    assert g.current_byte_range() == (1, 2)


def test_lone_surrogate_is_own_cluster():
    g = Graphemes("a" + chr(0xD800) + "b")
    g.advance()
    g.advance()
    assert g.current_scalars() == (0xD800,)
    assert g.current_byte_range() == (1, 4)


def test_lone_surrogate_does_not_take_marks():
    text = "a" + chr(0xD800) + chr(0x308) + chr(0x200D)
    assert drain(Graphemes(text)) == ["a", chr(0xD800), chr(0x308) + chr(0x200D)]
    assert count_clusters(chr(0xDC00) + chr(0xDC00)) == 2


def test_rejects_bytes_in_constructor():
    with pytest.raises(TypeError):
        Graphemes(b"abc")


def test_count():
    assert count_clusters("") == 0
    assert count_clusters("\U0001F1E9\U0001F1EA" + to_text([0x1F3F3, 0xFE0F, 0x200D, 0x1F308])) == 2
    assert count_clusters("\r\n") == 1


# Scalars whose segmentation does not depend on rules newer than the table.
ALPHABET = [
    0x61, 0x62, 0x20, 0x0D, 0x0A, 0x09, 0x0308, 0x200D, 0xFE0F, 0x1F3FD,
    0x1F1E9, 0x1F1EA, 0x0600, 0x0E33, 0x0E2D, 0x1100, 0x1161, 0x11A8,
    0xAC00, 0xAC01, 0x1F469, 0x2764, 0x1F642, 0x30C4,
]


def random_texts(n: int, seed: int = 29) -> list[str]:
    rng = random.Random(seed)
    return [to_text(rng.choices(ALPHABET, k=rng.randint(0, 12))) for _ in range(n)]


@pytest.mark.parametrize("text", random_texts(300))
def test_matches_regex_extended_grapheme(text):
    clusters = list(Graphemes(text))
    assert clusters == regex.findall(r"\X", text)
    assert "".join(clusters) == text
    assert all(clusters)
