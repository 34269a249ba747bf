"""
Load failures raised by the property and financial stores.
"""
from __future__ import annotations

from pathlib import Path


class DataLoadError(Exception):
    """A source file could not be found, read, or parsed."""

    def __init__(self, message: str, path: Path | str | None = None) -> None:
        super().__init__(message)
        self.path = Path(path) if path is not None else None
