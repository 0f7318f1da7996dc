"""Gateways for subject profiles and the descriptive content catalog.

The production deployment keeps these rows in a hosted database; the
file-backed implementations here read and write plain JSON tables under
``DATA_DIR`` so the service runs without one:

* ``profiles.json``      - {subject_id: {"id", "date_of_birth", "mbti_personality", ...}}
* ``mbti_info.json``     - [ContentRecord rows]
* ``mbti_videos.json``   - [MediaRecord rows]
* ``mbti_books.json``    - [BookRecord rows]
"""

from __future__ import annotations

import json
import logging
import os
import threading
from dataclasses import fields
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional

from . import config
from .errors import DataUnavailable, PersistenceFailed
from .types import BookRecord, ContentRecord, MediaRecord

log = logging.getLogger(__name__)

_LOCK = threading.Lock()


def data_root() -> Path:
    return Path(os.getenv("DATA_DIR", config.DATA_DIR)).resolve()


def _read_json(path: Path, default: Any) -> Any:
    """Missing tables read as ``default``; unreadable ones are a data failure."""

    if not path.exists():
        return default
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        raise DataUnavailable(f"{path.name}: {e}") from e


def _write_json(path: Path, payload: Any) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = path.with_suffix(path.suffix + ".tmp")
    tmp.write_text(json.dumps(payload, indent=2, sort_keys=True), encoding="utf-8")
    tmp.replace(path)


def utcnow_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ResultStore:
    def persist(self, subject_id: str, code: str) -> None:
        raise NotImplementedError

    def profile(self, subject_id: str) -> Optional[Dict[str, Any]]:
        raise NotImplementedError


class ContentRepository:
    def descriptive(self, code: str, age: int) -> Optional[ContentRecord]:
        raise NotImplementedError

    def videos(self, code: str) -> List[MediaRecord]:
        raise NotImplementedError

    def books(self, code: str) -> List[BookRecord]:
        raise NotImplementedError


def _profiles(path: Path) -> Dict[str, Dict[str, Any]]:
    table = _read_json(path, {})
    if not isinstance(table, dict) or not all(isinstance(r, dict) for r in table.values()):
        raise DataUnavailable(f"{path.name}: expected an object of profile rows")
    return table


class FileProfileStore(ResultStore):
    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else data_root()

    @property
    def path(self) -> Path:
        return self.root / "profiles.json"

    def persist(self, subject_id: str, code: str) -> None:
        """Upsert ``mbti_personality`` on the subject's profile."""

        try:
            with _LOCK:
                profiles = _profiles(self.path)
                row = profiles.setdefault(subject_id, {"id": subject_id})
                row["mbti_personality"] = code
                row["updated_at"] = utcnow_iso()
                _write_json(self.path, profiles)
        except (OSError, DataUnavailable) as e:
            raise PersistenceFailed(f"could not save result for {subject_id}: {e}") from e

    def profile(self, subject_id: str) -> Optional[Dict[str, Any]]:
        profiles = _profiles(self.path)
        row = profiles.get(subject_id)
        return dict(row) if row is not None else None


def _record(cls, row: Dict[str, Any]):
    # tables may carry extra columns (ids, timestamps) the core does not use
    names = {f.name for f in fields(cls)}
    return cls(**{k: v for k, v in row.items() if k in names})


def _rows(path: Path) -> List[Dict[str, Any]]:
    rows = _read_json(path, [])
    if not isinstance(rows, list):
        raise DataUnavailable(f"{path.name}: expected a list of rows")
    return rows


class FileContentRepository(ContentRepository):
    def __init__(self, root: Optional[Path] = None):
        self.root = Path(root) if root is not None else data_root()

    def descriptive(self, code: str, age: int) -> Optional[ContentRecord]:
        for row in _rows(self.root / "mbti_info.json"):
            try:
                if row.get("trait") == code and int(row["age_from"]) <= age <= int(row["age_to"]):
                    return _record(ContentRecord, row)
            except (AttributeError, KeyError, TypeError, ValueError) as e:
                raise DataUnavailable(f"mbti_info.json: bad row {row!r}: {e}") from e
        return None

    def videos(self, code: str) -> List[MediaRecord]:
        try:
            return [_record(MediaRecord, r) for r in _rows(self.root / "mbti_videos.json") if r.get("trait") == code]
        except (AttributeError, TypeError) as e:
            raise DataUnavailable(f"mbti_videos.json: {e}") from e

    def books(self, code: str) -> List[BookRecord]:
        try:
            return [_record(BookRecord, r) for r in _rows(self.root / "mbti_books.json") if r.get("trait") == code]
        except (AttributeError, TypeError) as e:
            raise DataUnavailable(f"mbti_books.json: {e}") from e
