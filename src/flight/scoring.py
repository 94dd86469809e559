# src/flight/scoring.py
from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import Dict, Iterable, Optional, Protocol, Union

from .modes import MODES

logger = logging.getLogger(__name__)


class BestScoreStore(Protocol):
    def load(self, mode_name: str) -> int: ...
    def save(self, mode_name: str, value: int) -> None: ...


class MemoryBestScoreStore:
    """Session-only store; also what the gym env uses so training never touches disk."""

    def __init__(self, initial: Optional[Dict[str, int]] = None):
        self.values: Dict[str, int] = dict(initial or {})
        self.writes = 0

    def load(self, mode_name: str) -> int:
        return int(self.values.get(mode_name, 0))

    def save(self, mode_name: str, value: int) -> None:
        self.values[mode_name] = int(value)
        self.writes += 1


class JsonBestScoreStore:
    """
    Bests as a small JSON object {"ARCADE": 12, "PRO": 7}.
    A missing or corrupt file reads as 0; a failed write is logged and the
    best simply stays in memory for the session.
    """

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def _read_all(self) -> Dict[str, int]:
        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("Could not read best scores from %s: %s", self.path, e)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring malformed best score file %s", self.path)
            return {}
        return data

    def load(self, mode_name: str) -> int:
        try:
            return max(0, int(self._read_all().get(mode_name, 0)))
        except (TypeError, ValueError):
            return 0

    def save(self, mode_name: str, value: int) -> None:
        data = self._read_all()
        data[mode_name] = int(value)
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(data, indent=2, sort_keys=True), encoding="utf-8")
        except OSError as e:
            logger.warning("Best score for %s not persisted (%s): %s", mode_name, self.path, e)


class ScoreTracker:
    """Run score, near-miss count and per-mode bests (read once, at construction)."""

    def __init__(self, store: BestScoreStore, mode_names: Iterable[str] = MODES):
        self.store = store
        self.score = 0
        self.near_miss = 0
        self.best: Dict[str, int] = {name: int(store.load(name)) for name in mode_names}

    def reset_run(self) -> None:
        self.score = 0
        self.near_miss = 0

    def add_pass(self, count: int = 1) -> None:
        self.score += count

    def add_near_miss(self, count: int = 1) -> None:
        self.near_miss += count
        self.score += count

    def best_for(self, mode_name: str) -> int:
        return self.best.get(mode_name, 0)

    def record_death(self, mode_name: str, score: int) -> bool:
        """Store `score` as the new best for the mode if it beats it. Returns True on a record."""
        if score <= self.best_for(mode_name):
            return False
        self.best[mode_name] = score
        try:
            self.store.save(mode_name, score)
        except Exception:
            logger.warning("Best score store failed for %s", mode_name, exc_info=True)
        logger.debug("New best %s=%d", mode_name, score)
        return True
