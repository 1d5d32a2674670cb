"""Public JSON codec API for wire payloads and summaries."""

from __future__ import annotations

from engine.diagnostics.json_codec import dumps_bytes, dumps_text, loads

__all__ = ["dumps_bytes", "dumps_text", "loads"]
