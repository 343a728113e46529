"""Transport loop — owns the stdin/stdout lifecycle of the server.

Inbound bytes are read in whatever chunks the OS hands over, framed into
request texts, dispatched one at a time and answered in order as
newline-delimited JSON. Logging never touches the output channel.
"""

from __future__ import annotations

import asyncio
import codecs
import enum
import json
import logging
import sys
from typing import IO, TYPE_CHECKING, Any, Protocol, runtime_checkable

from localmcp.protocol.framer import FramingMode, RequestFramer

if TYPE_CHECKING:
    from localmcp.protocol.dispatcher import ProtocolDispatcher

logger = logging.getLogger(__name__)

DEFAULT_CHUNK_SIZE = 64 * 1024


@runtime_checkable
class ChunkReader(Protocol):
    """Source of inbound text chunks; returns ``""`` at end of input."""

    async def read(self) -> str: ...


@runtime_checkable
class LineWriter(Protocol):
    """Sink for outbound protocol lines (without trailing newline)."""

    async def write_line(self, line: str) -> None: ...


class StdioChannel:
    """Reads chunks from stdin and writes lines to stdout.

    Reads run in the default executor so a blocking ``read1`` never stalls
    the event loop; multi-byte UTF-8 sequences split across reads are
    decoded incrementally.
    """

    def __init__(
        self,
        stdin: IO[bytes] | None = None,
        stdout: IO[bytes] | None = None,
        *,
        chunk_size: int = DEFAULT_CHUNK_SIZE,
    ) -> None:
        self._stdin = stdin if stdin is not None else sys.stdin.buffer
        self._stdout = stdout if stdout is not None else sys.stdout.buffer
        self._chunk_size = chunk_size
        self._decoder = codecs.getincrementaldecoder("utf-8")(errors="replace")

    async def read(self) -> str:
        loop = asyncio.get_running_loop()
        reader = getattr(self._stdin, "read1", self._stdin.read)
        data: bytes = await loop.run_in_executor(None, reader, self._chunk_size)
        if not data:
            return self._decoder.decode(b"", final=True)
        text = self._decoder.decode(data)
        # A lone partial code point is not end of input.
        return text if text else await self.read()

    async def write_line(self, line: str) -> None:
        self._stdout.write((line + "\n").encode("utf-8"))
        self._stdout.flush()


class LoopState(enum.Enum):
    STARTING = "starting"
    READY = "ready"
    CLOSED = "closed"


def encode_response(response: dict[str, Any]) -> str:
    """Serialise a response envelope as one compact JSON line.

    Text is emitted as UTF-8 where possible. Lone surrogates (legal in a
    JSON ``\\u`` escape, not encodable as UTF-8) force an all-ASCII line.
    """
    line = json.dumps(response, ensure_ascii=False, separators=(",", ":"), default=str)
    try:
        line.encode("utf-8")
    except UnicodeEncodeError:
        return json.dumps(response, ensure_ascii=True, separators=(",", ":"), default=str)
    return line


class TransportLoop:
    """Reads, frames, dispatches and answers until the input channel closes.

    Usage::

        loop = TransportLoop(dispatcher, StdioChannel())
        await loop.run()
    """

    def __init__(
        self,
        dispatcher: ProtocolDispatcher,
        reader: ChunkReader,
        writer: LineWriter | None = None,
        *,
        framing: FramingMode = "chunk",
    ) -> None:
        self._dispatcher = dispatcher
        self._reader = reader
        if writer is None:
            if not isinstance(reader, LineWriter):
                msg = "A writer is required when the reader cannot write lines"
                raise TypeError(msg)
            writer = reader
        self._writer = writer
        self._framer = RequestFramer(framing)
        self.state = LoopState.STARTING
        self.handled = 0

    async def run(self) -> None:
        """Serve until end of input."""
        self.state = LoopState.READY
        logger.info("Transport ready (framing=%s)", self._framer.mode)
        while True:
            chunk = await self._reader.read()
            if not chunk:
                break
            await self.process_chunk(chunk)

        for text in self._framer.flush():
            await self._process(text)
        self.state = LoopState.CLOSED
        logger.info("Input closed after %d request(s)", self.handled)

    async def process_chunk(self, chunk: str) -> None:
        """Dispatch every request text in *chunk*, in order."""
        for text in self._framer.feed(chunk):
            await self._process(text)

    async def _process(self, text: str) -> None:
        self.handled += 1
        try:
            response = await self._dispatcher.handle(text)
            if response is None:
                return
            await self._writer.write_line(encode_response(response))
        except Exception:
            logger.exception("Error processing message")
