"""Thin market handlers over an injected :class:`MarketStore`."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from localmcp.protocol.errors import ToolExecutionError
from localmcp.protocol.models import InputSchema, ToolDescriptor, ToolParameter
from localmcp.protocol.registry import RegisteredTool
from localmcp.store.backend import MarketStore, StoreError
from localmcp.tools._args import as_number, optional_str, require, require_str

ADD_MARKET = ToolDescriptor(
    name="add_market",
    description="Add a new market to the database",
    input_schema=InputSchema(
        properties={
            "title": ToolParameter(type="string", description="Market title"),
            "description": ToolParameter(type="string", description="Market description"),
            "end_date": ToolParameter(type="string", description="Market end date (ISO format)"),
        },
        required=("title",),
    ),
)

GET_MARKETS = ToolDescriptor(
    name="get_markets",
    description="Get all markets from the database",
)

ADD_MARKET_DATA = ToolDescriptor(
    name="add_market_data",
    description="Add market data (price, volume)",
    input_schema=InputSchema(
        properties={
            "market_id": ToolParameter(type="number", description="Market ID"),
            "price": ToolParameter(type="number", description="Market price"),
            "volume": ToolParameter(type="number", description="Trading volume"),
        },
        required=("market_id", "price"),
    ),
)


class MarketTools:
    def __init__(self, store: MarketStore) -> None:
        self._store = store

    async def add_market(self, arguments: Mapping[str, Any]) -> str:
        title = require_str(arguments, "title")
        try:
            market = await self._store.add_market(
                title,
                description=optional_str(arguments, "description"),
                end_date=optional_str(arguments, "end_date"),
            )
        except StoreError as exc:
            raise ToolExecutionError(str(exc)) from exc
        return f"Market added with ID: {market.id}"

    async def get_markets(self, arguments: Mapping[str, Any]) -> str:
        try:
            markets = await self._store.list_markets()
        except StoreError as exc:
            raise ToolExecutionError(str(exc)) from exc
        listing = "\n".join(market.summary() for market in markets)
        return f"Markets:\n{listing or 'No markets found'}"

    async def add_market_data(self, arguments: Mapping[str, Any]) -> str:
        market_id = as_number(require(arguments, "market_id"), "market_id")
        if not market_id.is_integer():
            raise ToolExecutionError("Invalid argument market_id: expected an integer")
        price = as_number(require(arguments, "price"), "price")
        raw_volume = arguments.get("volume")
        volume = None if raw_volume is None else as_number(raw_volume, "volume")

        try:
            row = await self._store.add_market_data(int(market_id), price, volume)
        except StoreError as exc:
            raise ToolExecutionError(str(exc)) from exc
        return f"Market data added with ID: {row.id}"

    def tools(self) -> list[RegisteredTool]:
        return [
            RegisteredTool(ADD_MARKET, self.add_market),
            RegisteredTool(GET_MARKETS, self.get_markets),
            RegisteredTool(ADD_MARKET_DATA, self.add_market_data),
        ]
