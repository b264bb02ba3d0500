from __future__ import annotations

import json
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

import yaml


class ParseStatus(str, Enum):
    PARSED = "parsed"
    UNAVAILABLE = "unavailable"
    FAILED = "failed"


@dataclass(frozen=True)
class ParseResult:
    """Outcome of a best-effort configuration read.

    ``UNAVAILABLE`` means the file is missing or unreadable, ``FAILED`` means it
    was read but could not be decoded into the expected shape.
    """

    status: ParseStatus
    data: Any = None
    error: Optional[str] = None

    @classmethod
    def parsed(cls, data: Any) -> "ParseResult":
        return cls(ParseStatus.PARSED, data=data)

    @classmethod
    def unavailable(cls, error: Optional[str] = None) -> "ParseResult":
        return cls(ParseStatus.UNAVAILABLE, error=error)

    @classmethod
    def failed(cls, error: str) -> "ParseResult":
        return cls(ParseStatus.FAILED, error=error)

    @property
    def ok(self) -> bool:
        return self.status is ParseStatus.PARSED


def read_text(path: Path) -> Optional[str]:
    """Return file contents, or None when the file cannot be read."""
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError):
        return None


def _load(path: Path, loader: Callable[[str], Any], errors: tuple) -> ParseResult:
    if not path.is_file():
        return ParseResult.unavailable()
    content = read_text(path)
    if content is None:
        return ParseResult.unavailable(f"could not read {path}")
    try:
        data = loader(content)
    except errors as exc:
        return ParseResult.failed(str(exc))
    if not isinstance(data, dict):
        return ParseResult.failed(f"expected a mapping at the top of {path.name}")
    return ParseResult.parsed(data)


def load_yaml_mapping(path: Path) -> ParseResult:
    # Timestamp-like scalars that are not real dates raise plain ValueError.
    return _load(path, yaml.safe_load, (yaml.YAMLError, ValueError, TypeError))


def load_json_mapping(path: Path) -> ParseResult:
    return _load(path, json.loads, (json.JSONDecodeError,))
