"""Wire settings, store, registry and transport together."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from localmcp.protocol.dispatcher import ProtocolDispatcher
from localmcp.protocol.models import ServerInfo
from localmcp.protocol.transport import ChunkReader, LineWriter, StdioChannel, TransportLoop
from localmcp.store.backend import InMemoryMarketStore, MarketStore, SqliteMarketStore, StoreError
from localmcp.tools import build_registry
from localmcp.utils.telemetry import configure_telemetry

if TYPE_CHECKING:
    from localmcp.config import ServerSettings

logger = logging.getLogger(__name__)


def build_store(settings: ServerSettings) -> MarketStore:
    if settings.store.backend == "memory":
        return InMemoryMarketStore()
    return SqliteMarketStore(settings.store.path)


def build_dispatcher(settings: ServerSettings, store: MarketStore) -> ProtocolDispatcher:
    registry = build_registry(store, encoding=settings.files.encoding)
    return ProtocolDispatcher(
        registry,
        server_info=ServerInfo(name=settings.name, version=settings.version),
        protocol_version=settings.protocol_version,
    )


async def serve(
    settings: ServerSettings,
    reader: ChunkReader | None = None,
    writer: LineWriter | None = None,
) -> TransportLoop:
    """Run the server until the input channel closes.

    Defaults to stdin/stdout. Returns the finished :class:`TransportLoop`.
    """
    if settings.telemetry.enabled:
        configure_telemetry(
            service_name=settings.name,
            otlp_endpoint=settings.telemetry.otlp_endpoint,
        )

    store = build_store(settings)
    if isinstance(store, SqliteMarketStore):
        try:
            await store.open()
        except StoreError as exc:
            # Market tools will report the failure per call.
            logger.error("Database setup error: %s", exc)
    dispatcher = build_dispatcher(settings, store)

    if reader is None:
        channel = StdioChannel()
        reader, writer = channel, channel
    loop = TransportLoop(dispatcher, reader, writer, framing=settings.framing)

    logger.info("%s %s running on stdio", settings.name, settings.version)
    try:
        await loop.run()
    finally:
        await store.close()
    return loop
