"""Current time and date arithmetic."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime, timedelta, timezone
from typing import Any

from localmcp.protocol.errors import ToolExecutionError
from localmcp.protocol.models import InputSchema, ToolDescriptor, ToolParameter
from localmcp.protocol.registry import RegisteredTool
from localmcp.tools._args import require_str

_MS_PER_MINUTE = 60 * 1000
_MS_PER_HOUR = 60 * _MS_PER_MINUTE
_MS_PER_DAY = 24 * _MS_PER_HOUR

GET_CURRENT_TIME = ToolDescriptor(
    name="get_current_time",
    description="Get the current time in various formats",
    input_schema=InputSchema(
        properties={
            "format": ToolParameter(
                type="string",
                description="Time format (iso, unix, readable)",
                default="iso",
            ),
        },
    ),
)

CALCULATE_TIME_DIFFERENCE = ToolDescriptor(
    name="calculate_time_difference",
    description="Calculate time difference between two dates",
    input_schema=InputSchema(
        properties={
            "start_date": ToolParameter(type="string", description="Start date (ISO format)"),
            "end_date": ToolParameter(type="string", description="End date (ISO format)"),
        },
        required=("start_date", "end_date"),
    ),
)


def format_time(now: datetime, fmt: str) -> str:
    """Render *now* (timezone-aware) as ``unix``, ``readable`` or ISO-8601."""
    if fmt == "unix":
        return str(int(now.timestamp()))
    if fmt == "readable":
        local = now.astimezone()
        hour = local.hour % 12 or 12
        meridiem = "AM" if local.hour < 12 else "PM"
        return (
            f"{local.month}/{local.day}/{local.year}, "
            f"{hour}:{local.minute:02d}:{local.second:02d} {meridiem}"
        )
    utc = now.astimezone(timezone.utc)
    return utc.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def parse_date(value: str) -> datetime:
    """Parse an ISO-8601 date or datetime; naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError as exc:
        raise ToolExecutionError(f"Invalid date: {value}") from exc
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


async def get_current_time(arguments: Mapping[str, Any]) -> str:
    fmt = arguments.get("format") or "iso"
    now = datetime.now(timezone.utc)
    return f"Current time ({fmt}): {format_time(now, str(fmt))}"


async def calculate_time_difference(arguments: Mapping[str, Any]) -> str:
    start_date = require_str(arguments, "start_date")
    end_date = require_str(arguments, "end_date")
    diff_ms = (parse_date(end_date) - parse_date(start_date)) // timedelta(milliseconds=1)

    return (
        f"Time difference between {start_date} and {end_date}:\n"
        f"- Days: {diff_ms // _MS_PER_DAY}\n"
        f"- Hours: {diff_ms // _MS_PER_HOUR}\n"
        f"- Minutes: {diff_ms // _MS_PER_MINUTE}\n"
        f"- Milliseconds: {diff_ms}"
    )


def clock_tools() -> list[RegisteredTool]:
    return [
        RegisteredTool(GET_CURRENT_TIME, get_current_time),
        RegisteredTool(CALCULATE_TIME_DIFFERENCE, calculate_time_difference),
    ]
