"""Domain models for served files."""

from __future__ import annotations

import os
from dataclasses import dataclass
from email.utils import formatdate
from pathlib import Path


@dataclass(frozen=True, slots=True)
class CacheValidator:
    etag: str
    last_modified: str

    @classmethod
    def from_stat(cls, stat_result: os.stat_result) -> "CacheValidator":
        mtime_ms = stat_result.st_mtime_ns // 1_000_000
        return cls(
            etag=f'"{mtime_ms}-{stat_result.st_size}"',
            last_modified=formatdate(stat_result.st_mtime, usegmt=True),
        )


@dataclass(frozen=True, slots=True)
class StoredFile:
    path: Path
    media_type: str
    stat_result: os.stat_result
    validator: CacheValidator

    @property
    def size_bytes(self) -> int:
        return self.stat_result.st_size
