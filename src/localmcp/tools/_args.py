"""Argument helpers shared by the tool handlers."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from localmcp.protocol.errors import ToolExecutionError


def require(arguments: Mapping[str, Any], key: str) -> Any:
    value = arguments.get(key)
    if value is None:
        raise ToolExecutionError(f"Missing required argument: {key}")
    return value


def require_str(arguments: Mapping[str, Any], key: str) -> str:
    value = require(arguments, key)
    if not isinstance(value, str):
        raise ToolExecutionError(f"Invalid argument {key}: expected a string")
    return value


def optional_str(arguments: Mapping[str, Any], key: str) -> str | None:
    """Return a string argument, treating missing and empty values as ``None``."""
    value = arguments.get(key)
    if value is None or value == "":
        return None
    if not isinstance(value, str):
        raise ToolExecutionError(f"Invalid argument {key}: expected a string")
    return value


def as_number(value: Any, key: str) -> float:
    # bool is an int subclass but never a meaningful price or id
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        raise ToolExecutionError(f"Invalid argument {key}: expected a number")
    return float(value)
