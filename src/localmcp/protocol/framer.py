"""Turn inbound text chunks into discrete request texts.

Two policies are supported:

``chunk`` (default)
    Each chunk is split on newlines on its own; every non-blank segment
    is one request. A payload written across two chunks is therefore
    seen as two malformed requests.

``line``
    A trailing segment without a newline is held back and prepended to
    the next chunk, so payloads split across writes are reassembled.
    Whatever is still buffered at end of input is emitted by :meth:`flush`.
"""

from __future__ import annotations

from collections.abc import Iterator
from typing import Literal

FramingMode = Literal["chunk", "line"]


def split_chunk(chunk: str) -> Iterator[str]:
    """Yield the non-blank newline-separated segments of *chunk*."""
    for segment in chunk.split("\n"):
        if segment.strip():
            yield segment


class RequestFramer:
    """Stateful wrapper around :func:`split_chunk` for either framing mode."""

    def __init__(self, mode: FramingMode = "chunk") -> None:
        if mode not in ("chunk", "line"):
            msg = f"Unknown framing mode: {mode!r}"
            raise ValueError(msg)
        self.mode: FramingMode = mode
        self._pending = ""

    def feed(self, chunk: str) -> Iterator[str]:
        """Yield every complete request text contained in *chunk*."""
        if self.mode == "chunk":
            yield from split_chunk(chunk)
            return

        data = self._pending + chunk
        head, sep, tail = data.rpartition("\n")
        if not sep:
            self._pending = data
            return
        self._pending = tail
        yield from split_chunk(head)

    def flush(self) -> Iterator[str]:
        """Yield any buffered partial request at end of input."""
        pending, self._pending = self._pending, ""
        yield from split_chunk(pending)
