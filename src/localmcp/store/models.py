"""Market store records."""

from __future__ import annotations

from datetime import datetime, timezone

from pydantic import BaseModel, Field


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Market(BaseModel):
    """A prediction market tracked by the store."""

    id: int
    title: str
    description: str | None = None
    end_date: str | None = None
    created_at: datetime = Field(default_factory=_utcnow)

    def summary(self) -> str:
        return (
            f"ID: {self.id}, Title: {self.title}, "
            f"Description: {self.description or 'N/A'}, "
            f"End Date: {self.end_date or 'N/A'}"
        )


class MarketData(BaseModel):
    """A price/volume observation for a market."""

    id: int
    market_id: int
    price: float
    volume: float | None = None
    timestamp: datetime = Field(default_factory=_utcnow)
