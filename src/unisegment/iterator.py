"""Iterator over extended grapheme clusters of a fully decoded text."""
from enum import Enum
from itertools import accumulate

from unisegment.transitions import State, transition
from unisegment.utf8 import decode_all, encoded_width


class Phase(Enum):
    NOT_STARTED = "not_started"
    IN_PROGRESS = "in_progress"
    FINISHED = "finished"


class Graphemes:
    """Cursor over the grapheme clusters of a text.

    Call advance() before reading the first cluster:

        g = Graphemes(text)
        while g.advance():
            print(g.current_text(), g.current_byte_range())
    """

    def __init__(self, text: str):
        if not isinstance(text, str):
            raise TypeError(f"expected str, got {type(text).__name__}")
        scalars = tuple(map(ord, text))
        offsets = list(accumulate(map(encoded_width, scalars), initial=0))
        self._load(text, scalars, text.encode("utf-8", "surrogatepass"), offsets)

    @classmethod
    def from_scalars(cls, scalars) -> "Graphemes":
        """Build from a pre-decoded sequence of scalar values."""
        return cls("".join(map(chr, scalars)))

    @classmethod
    def from_bytes(cls, data) -> "Graphemes":
        """Build from UTF-8 bytes. Malformed units become U+FFFD; byte ranges index data."""
        scalars, offsets = decode_all(data)
        g = cls.__new__(cls)
        g._load("".join(map(chr, scalars)), tuple(scalars), bytes(data), offsets)
        return g

    def _load(self, text: str, scalars: tuple, data: bytes, offsets: list) -> None:
        self._text = text
        self._scalars = scalars
        self._data = data
        self._offsets = offsets
        self._init_cursor()

    def _init_cursor(self) -> None:
        self._start = 0
        self._end = 0
        self._pos = 0
        self._state = State.ANY
        self._phase = Phase.NOT_STARTED
        # Consume the first scalar (GB1) so the first advance() yields cluster one.
        self._scan()

    def _scan(self) -> bool:
        self._start = self._end
        n = len(self._scalars)
        while self._pos <= n:
            # GB2
            if self._pos == n:
                self._end = self._pos
                self._pos += 1
                break
            self._state, boundary = transition(self._state, self._scalars[self._pos])
            # GB1
            if self._pos == 0 or boundary:
                self._end = self._pos
                self._pos += 1
                break
            self._pos += 1
        return self._start != self._end

    def advance(self) -> bool:
        """Move to the next cluster. Returns False once the text is exhausted."""
        if self._phase is Phase.FINISHED:
            return False
        if self._scan():
            self._phase = Phase.IN_PROGRESS
            return True
        self._phase = Phase.FINISHED
        return False

    def reset(self) -> None:
        """Rewind to the state right after construction."""
        self._init_cursor()

    def _active(self) -> bool:
        return self._phase is Phase.IN_PROGRESS

    def current_scalars(self) -> tuple[int, ...]:
        if not self._active():
            return ()
        return self._scalars[self._start:self._end]

    def current_text(self) -> str:
        if not self._active():
            return ""
        return self._text[self._start:self._end]

    def current_bytes(self) -> bytes:
        if not self._active():
            return b""
        return self._data[self._offsets[self._start]:self._offsets[self._end]]

    def current_byte_range(self) -> tuple[int, int]:
        """[from, to) of the current cluster in the UTF-8 encoding.

        (0, 0) before the first advance(), (total, total) once exhausted.
        """
        if self._phase is Phase.NOT_STARTED:
            return 0, 0
        if self._phase is Phase.FINISHED:
            total = self._offsets[-1]
            return total, total
        return self._offsets[self._start], self._offsets[self._end]

    @property
    def phase(self) -> Phase:
        return self._phase

    def __iter__(self):
        while self.advance():
            yield self.current_text()


def count_clusters(text: str) -> int:
    """Number of user-perceived characters in text."""
    g = Graphemes(text)
    n = 0
    while g.advance():
        n += 1
    return n
