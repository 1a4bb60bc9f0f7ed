"""Resumable one-cluster-at-a-time segmentation of byte and text buffers."""
import logging

from unisegment.transitions import State, transition
from unisegment.utf8 import decode_scalar, is_truncated

logger = logging.getLogger(__name__)


def first_cluster_from_bytes(buf, state: State | None = None, *, final: bool = True):
    """Split the first grapheme cluster off a UTF-8 buffer.

    Returns (cluster, rest, new_state); slices have the type of buf, so pass a
    memoryview to avoid copies. state is None for a fresh stream, otherwise the
    new_state of the previous call on the directly preceding data:

        state = None
        while buf:
            cluster, buf, state = first_cluster_from_bytes(buf, state)

    If the buffer runs out before a boundary is seen and final is True, the
    whole buffer is the cluster and new_state is None. With final=False the
    call instead returns an empty cluster, the untouched buffer and the
    incoming state, meaning more data is needed to decide.
    """
    if not buf:
        return buf[:0], buf[:0], state

    end = len(buf)
    if not final and is_truncated(buf, 0):
        return buf[:0], buf, state
    scalar, length = decode_scalar(buf, 0)
    current = state
    if current is None:
        current, _ = transition(State.ANY, scalar)

    # Every pass consumes at least one byte, so the loop ends at len(buf).
    while length < end:
        if not final and is_truncated(buf, length):
            break
        scalar, width = decode_scalar(buf, length)
        current, boundary = transition(current, scalar)
        if boundary:
            return buf[:length], buf[length:], current
        length += width

    if final:
        return buf, buf[:0], None
    return buf[:0], buf, state


def first_cluster_from_text(buf: str, state: State | None = None, *, final: bool = True):
    """Like first_cluster_from_bytes() but over a str, one scalar per character."""
    if not buf:
        return "", "", state

    end = len(buf)
    current = state
    if current is None:
        current, _ = transition(State.ANY, ord(buf[0]))

    for length in range(1, end):
        current, boundary = transition(current, ord(buf[length]))
        if boundary:
            return buf[:length], buf[length:], current

    if final:
        return buf, "", None
    return "", buf, state


class StreamSegmenter:
    """Feed UTF-8 chunks, get back complete grapheme clusters as bytes.

    The trailing cluster of each chunk is held back until a later chunk (or
    finish()) shows where it ends, so splitting the input at any byte offset
    gives the same clusters as segmenting it in one piece. Held-back bytes are
    decoded once: the automaton state and scan offset carry over between
    pushes, so a cluster spread over many chunks costs time linear in its size.
    """

    def __init__(self):
        self._buf = bytearray()
        # Offset in _buf of the next undecoded byte; _buf[0] starts the open cluster.
        self._scan = 0
        # State after the scalars before _scan, None before the first scalar.
        self._state = None
        self.bytes_in = 0
        self.clusters_out = 0

    def _drain(self, final: bool) -> list[bytes]:
        buf = self._buf
        pos = self._scan
        state = self._state
        start = 0
        out = []
        end = len(buf)
        while pos < end:
            if not final and is_truncated(buf, pos):
                break
            scalar, width = decode_scalar(buf, pos)
            if state is None:
                # GB1
                state, _ = transition(State.ANY, scalar)
            else:
                state, boundary = transition(state, scalar)
                if boundary:
                    out.append(bytes(buf[start:pos]))
                    start = pos
            pos += width

        if final:
            if start < end:
                out.append(bytes(buf[start:]))
            buf.clear()
            self._scan = 0
            self._state = None
        else:
            del buf[:start]
            self._scan = pos - start
            self._state = state
        self.clusters_out += len(out)
        return out

    def push(self, chunk: bytes) -> list[bytes]:
        """Add a chunk and return the clusters it completed."""
        if not chunk:
            return []
        self.bytes_in += len(chunk)
        self._buf += chunk
        return self._drain(final=False)

    def finish(self) -> list[bytes]:
        """Flush the held-back data as final clusters and reset for a new stream."""
        out = self._drain(final=True)
        logger.debug("Stream finished: %d bytes in, %d clusters out", self.bytes_in, self.clusters_out)
        return out

    @property
    def pending(self) -> bytes:
        return bytes(self._buf)
