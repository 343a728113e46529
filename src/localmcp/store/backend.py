"""Market store backends.

:class:`MarketStore` defines the async storage protocol the market tools
depend on. :class:`InMemoryMarketStore` is a list-backed implementation
for tests and throwaway sessions; :class:`SqliteMarketStore` persists to
a SQLite file.

Neither backend locks: the server dispatches one request at a time, so
there is never more than one writer.
"""

from __future__ import annotations

import asyncio
import logging
import sqlite3
from pathlib import Path
from typing import Protocol, runtime_checkable

from localmcp.store.models import Market, MarketData

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS markets (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    title TEXT NOT NULL,
    description TEXT,
    end_date TEXT,
    created_at DATETIME DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE IF NOT EXISTS market_data (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    market_id INTEGER,
    price REAL,
    volume REAL,
    timestamp DATETIME DEFAULT CURRENT_TIMESTAMP,
    FOREIGN KEY (market_id) REFERENCES markets (id)
);
"""


class StoreError(Exception):
    """A store operation failed."""


@runtime_checkable
class MarketStore(Protocol):
    """Async persistence protocol for markets and their price data."""

    async def add_market(
        self,
        title: str,
        description: str | None = None,
        end_date: str | None = None,
    ) -> Market:
        """Insert a market and return it with its assigned ID."""
        ...

    async def list_markets(self) -> list[Market]:
        """Return all markets, newest first."""
        ...

    async def add_market_data(
        self,
        market_id: int,
        price: float,
        volume: float | None = None,
    ) -> MarketData:
        """Insert a price/volume observation and return it with its ID."""
        ...

    async def close(self) -> None:
        """Release any underlying resources."""
        ...


class InMemoryMarketStore:
    """List-backed :class:`MarketStore`; contents vanish with the process."""

    def __init__(self) -> None:
        self._markets: list[Market] = []
        self._data: list[MarketData] = []

    async def add_market(
        self,
        title: str,
        description: str | None = None,
        end_date: str | None = None,
    ) -> Market:
        market = Market(
            id=len(self._markets) + 1,
            title=title,
            description=description,
            end_date=end_date,
        )
        self._markets.append(market)
        return market.model_copy()

    async def list_markets(self) -> list[Market]:
        ordered = sorted(self._markets, key=lambda m: (m.created_at, m.id), reverse=True)
        return [m.model_copy() for m in ordered]

    async def add_market_data(
        self,
        market_id: int,
        price: float,
        volume: float | None = None,
    ) -> MarketData:
        row = MarketData(id=len(self._data) + 1, market_id=market_id, price=price, volume=volume)
        self._data.append(row)
        return row.model_copy()

    async def close(self) -> None:
        pass


class SqliteMarketStore:
    """SQLite-backed :class:`MarketStore`.

    The database file and its parent directory are created on first use.
    Queries run in a worker thread so the event loop stays responsive.
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)
        self._conn: sqlite3.Connection | None = None

    @property
    def path(self) -> Path:
        return self._path

    def _connect(self) -> sqlite3.Connection:
        if self._conn is None:
            if str(self._path) != ":memory:":
                self._path.parent.mkdir(parents=True, exist_ok=True)
            conn = sqlite3.connect(str(self._path), check_same_thread=False)
            conn.row_factory = sqlite3.Row
            conn.executescript(_SCHEMA)
            conn.commit()
            self._conn = conn
            logger.info("Database initialized at %s", self._path)
        return self._conn

    async def open(self) -> None:
        """Create the schema eagerly instead of on the first query."""
        try:
            await asyncio.to_thread(self._connect)
        except (sqlite3.Error, OSError) as exc:
            raise StoreError(f"Failed to open database {self._path}: {exc}") from exc

    async def add_market(
        self,
        title: str,
        description: str | None = None,
        end_date: str | None = None,
    ) -> Market:
        def _insert() -> Market:
            conn = self._connect()
            cur = conn.execute(
                "INSERT INTO markets (title, description, end_date) VALUES (?, ?, ?)",
                (title, description, end_date),
            )
            conn.commit()
            row = conn.execute("SELECT * FROM markets WHERE id = ?", (cur.lastrowid,)).fetchone()
            return Market.model_validate(dict(row))

        try:
            return await asyncio.to_thread(_insert)
        except (sqlite3.Error, OSError) as exc:
            raise StoreError(f"Failed to add market: {exc}") from exc

    async def list_markets(self) -> list[Market]:
        def _select() -> list[Market]:
            rows = self._connect().execute(
                "SELECT * FROM markets ORDER BY created_at DESC, id DESC"
            ).fetchall()
            return [Market.model_validate(dict(row)) for row in rows]

        try:
            return await asyncio.to_thread(_select)
        except (sqlite3.Error, OSError) as exc:
            raise StoreError(f"Failed to get markets: {exc}") from exc

    async def add_market_data(
        self,
        market_id: int,
        price: float,
        volume: float | None = None,
    ) -> MarketData:
        def _insert() -> MarketData:
            conn = self._connect()
            cur = conn.execute(
                "INSERT INTO market_data (market_id, price, volume) VALUES (?, ?, ?)",
                (market_id, price, volume),
            )
            conn.commit()
            row = conn.execute(
                "SELECT * FROM market_data WHERE id = ?", (cur.lastrowid,)
            ).fetchone()
            return MarketData.model_validate(dict(row))

        try:
            return await asyncio.to_thread(_insert)
        except (sqlite3.Error, OSError) as exc:
            raise StoreError(f"Failed to add market data: {exc}") from exc

    async def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None
