"""Persistence for the market tools."""

from localmcp.store.backend import InMemoryMarketStore, MarketStore, SqliteMarketStore, StoreError
from localmcp.store.models import Market, MarketData

__all__ = [
    "InMemoryMarketStore",
    "Market",
    "MarketData",
    "MarketStore",
    "SqliteMarketStore",
    "StoreError",
]
