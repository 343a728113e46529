"""A line-delimited JSON-RPC tool server over stdio."""

from __future__ import annotations

__version__ = "1.0.0"
