"""Utilities shared by actpdf modules."""

from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Any

_UNSAFE_FILENAME = re.compile(r"[^a-zA-Z0-9\-_]+")


def get_logger(name: str) -> logging.Logger:
    logger = logging.getLogger(name)
    if not logger.handlers:
        handler = logging.StreamHandler()
        formatter = logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
        logger.propagate = False
    return logger


def resolve_path(path: str | Path | None) -> Path:
    if path is None:
        raise ValueError("Path must not be None")
    resolved = Path(path).expanduser().resolve()
    return resolved


def ensure_output_parent(path: str | Path) -> Path:
    resolved = resolve_path(path)
    resolved.parent.mkdir(parents=True, exist_ok=True)
    return resolved


def update_dict(target: dict[str, Any], **updates: Any) -> dict[str, Any]:
    target.update({k: v for k, v in updates.items() if v is not None})
    return target


def safe_filename_part(*parts: str | None) -> str:
    """Join non-empty ``parts`` with ``-`` and replace unsafe character runs with ``_``."""

    base = "-".join(part.strip() for part in parts if part and part.strip())
    return _UNSAFE_FILENAME.sub("_", base)
