"""
Named grid layouts persisted to a msgpack file.

Usage:
    from pathviz.storage import LayoutStore

    store = LayoutStore()
    layout_id = store.save("Maze 1", grid)
    store.list()
    store.load(layout_id).grid
"""

from __future__ import annotations

import logging
import os
import threading
import uuid
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import msgpack

from pathviz.config import LAYOUTS_PATH
from pathviz.errors import InvalidGrid, LayoutNotFound
from pathviz.grid.model import Grid

logger = logging.getLogger(__name__)

# Serializes read-modify-write of store files across request threads
_WRITE_LOCK = threading.Lock()


@dataclass(frozen=True)
class LayoutSummary:
    """Listing entry for a saved layout."""

    id: str
    name: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "created_at": self.created_at.isoformat()}


@dataclass(frozen=True)
class Layout:
    """
    A saved layout.

    Attributes:
        id: Store-assigned identifier
        name: User-chosen name
        grid: The validated grid
        created_at: When the layout was saved
    """

    id: str
    name: str
    grid: Grid
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "grid": self.grid.to_rows(),
            "created_at": self.created_at.isoformat(),
        }


class LayoutStore:
    """
    msgpack-backed map of layout id -> {name, grid, created_at}.

    The whole file is read on each call and rewritten on each change; a
    missing file is an empty store. Writes go to a temp file first and are
    moved into place so a crash never leaves a truncated store.
    """

    def __init__(self, path: Path | str = LAYOUTS_PATH) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _read(self) -> dict[str, dict]:
        if not self._path.exists():
            return {}
        with open(self._path, "rb") as f:
            return msgpack.unpack(f, raw=False)

    def _write(self, records: dict[str, dict]) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self._path.with_suffix(self._path.suffix + ".tmp")
        with open(tmp_path, "wb") as f:
            msgpack.pack(records, f, use_bin_type=True)
        os.replace(tmp_path, self._path)

    def save(self, name: str, grid: Grid) -> str:
        """
        Save a layout under a new id.

        Search markings (VISITED, PATH) are not stored.

        Returns:
            The new layout id

        Raises:
            InvalidGrid: If name is blank or not a string
        """
        if name is not None and not isinstance(name, str):
            raise InvalidGrid(f"Layout name must be a string, got {type(name).__name__}")
        name = (name or "").strip()
        if not name:
            raise InvalidGrid("Layout name must not be empty")

        layout_id = uuid.uuid4().hex
        with _WRITE_LOCK:
            records = self._read()
            records[layout_id] = {
                "name": name,
                "grid": grid.cleared().to_rows(),
                "created_at": datetime.now().isoformat(),
            }
            self._write(records)
        logger.info(f"Saved layout '{name}' ({grid.rows}x{grid.cols}) as {layout_id}")
        return layout_id

    def load(self, layout_id: str) -> Layout:
        """
        Load a layout; the stored matrix is re-validated.

        Raises:
            LayoutNotFound: If no layout has this id
            InvalidGrid: If the stored matrix is malformed
        """
        record = self._read().get(layout_id)
        if record is None:
            raise LayoutNotFound(f"Layout '{layout_id}' not found")
        return Layout(
            id=layout_id,
            name=record["name"],
            grid=Grid.from_rows(record["grid"]),
            created_at=datetime.fromisoformat(record["created_at"]),
        )

    def list(self) -> list[LayoutSummary]:
        """All saved layouts, newest first."""
        summaries = [
            LayoutSummary(
                id=layout_id,
                name=record["name"],
                created_at=datetime.fromisoformat(record["created_at"]),
            )
            for layout_id, record in self._read().items()
        ]
        # records keep insertion order, which breaks timestamp ties
        ordered = sorted(enumerate(summaries), key=lambda pair: (pair[1].created_at, pair[0]), reverse=True)
        return [summary for _, summary in ordered]

    def delete(self, layout_id: str) -> None:
        """
        Remove a layout.

        Raises:
            LayoutNotFound: If no layout has this id
        """
        with _WRITE_LOCK:
            records = self._read()
            if layout_id not in records:
                raise LayoutNotFound(f"Layout '{layout_id}' not found")
            name = records.pop(layout_id)["name"]
            self._write(records)
        logger.info(f"Deleted layout '{name}' ({layout_id})")

    def __len__(self) -> int:
        return len(self._read())
