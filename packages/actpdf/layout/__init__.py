"""Page layouts mapping business records to draw commands."""

from __future__ import annotations

from .assignment import LabelBlock, build_assignment_commands, format_datetime, safe_text

__all__ = ["LabelBlock", "build_assignment_commands", "format_datetime", "safe_text"]
