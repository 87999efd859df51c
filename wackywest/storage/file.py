"""
File Store - One JSON file per game.

The store:
- Writes game_<ID>.json under a directory
- Replaces files atomically (write to temp, then rename)
- Needs no database
"""

from __future__ import annotations
import json
import os
from pathlib import Path
from typing import Any

from ..engine_core.errors import StoreError
from .base import GameStore


class FileGameStore(GameStore):
    """
    File-based store for game states.

    Usage:
        store = FileGameStore(store_dir="~/.wackywest/games")
        store.save_game("ABC123", state)
        state = store.load_game("ABC123")
    """

    def __init__(self, store_dir: str | Path | None = None):
        if store_dir is None:
            store_dir = Path.home() / ".wackywest" / "games"
        self.store_dir = Path(store_dir).expanduser()

        # Ensure store directory exists
        self.store_dir.mkdir(parents=True, exist_ok=True)

    def _get_path(self, game_id: str) -> Path:
        return self.store_dir / f"game_{game_id}.json"

    def _read(self, game_id: str) -> dict[str, Any] | None:
        path = self._get_path(game_id)
        if not path.exists():
            return None
        try:
            with open(path, "r", encoding="utf-8") as f:
                return json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise StoreError(f"Failed to read game {game_id}: {e}") from e

    def _write(self, game_id: str, data: dict[str, Any]) -> None:
        path = self._get_path(game_id)
        tmp_path = path.with_suffix(".json.tmp")
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, path)
        except OSError as e:
            raise StoreError(f"Failed to save game {game_id}: {e}") from e

    def list_games(self) -> list[str]:
        """
        List all stored game ids.
        """
        if not self.store_dir.exists():
            return []

        return sorted(
            f.stem[len("game_"):] for f in self.store_dir.glob("game_*.json")
        )

    def delete(self, game_id: str):
        self._get_path(game_id).unlink(missing_ok=True)
