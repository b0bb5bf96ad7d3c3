"""
High score persistence.

The game only needs a single high score through the HighScoreStore port.
Leaderboard backs that port with a JSON file that also keeps the top ten
runs with the player's initials:

    {
        "high_score": 12340,
        "entries": [
            {"initials": "ABC", "score": 12340, "level": 3, "date": "..."},
            ...
        ]
    }
"""

from __future__ import annotations

import json
import logging
import re
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional, Protocol, Union

logger = logging.getLogger(__name__)

MAX_ENTRIES = 10
DEFAULT_PATH = Path.home() / ".pacman2d" / "leaderboard.json"


class HighScoreStore(Protocol):
    def load_high_score(self) -> int: ...

    def save_high_score(self, score: int) -> None: ...


class MemoryHighScoreStore:
    """Keeps the high score for the lifetime of the process only."""

    def __init__(self, high_score: int = 0):
        self.high_score = high_score

    def load_high_score(self) -> int:
        return self.high_score

    def save_high_score(self, score: int) -> None:
        self.high_score = max(self.high_score, int(score))


def sanitize_initials(initials) -> str:
    letters = re.sub(r"[^A-Z]", "", str(initials or "").upper())
    return letters[:3].ljust(3, "_")


def format_date(iso_date) -> str:
    """'2026-01-05T...' -> '01/05'."""
    try:
        date = datetime.fromisoformat(str(iso_date))
    except ValueError:
        return "--/--"
    return date.strftime("%m/%d")


def _valid_entry(entry) -> bool:
    return (
        isinstance(entry, dict)
        and isinstance(entry.get("initials"), str)
        and isinstance(entry.get("score"), int)
        and not isinstance(entry.get("score"), bool)
        and entry["score"] >= 0
    )


class Leaderboard:
    """Top ten scores stored as JSON on disk."""

    def __init__(self, path: Union[str, Path, None] = None):
        self.path = Path(path) if path is not None else DEFAULT_PATH

    # --- File I/O ---

    def _read(self) -> Dict:
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError:
            return {}
        except (OSError, ValueError) as e:
            logger.warning("could not read leaderboard %s: %s", self.path, e)
            return {}
        if isinstance(data, list):
            return {"entries": data}
        if isinstance(data, dict):
            return data
        return {}

    def _write(self, data: Dict) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning("could not write leaderboard %s: %s", self.path, e)
            return False
        return True

    # --- Entries ---

    def entries(self) -> List[Dict]:
        raw = self._read().get("entries", [])
        if not isinstance(raw, list):
            return []
        return [e for e in raw if _valid_entry(e)][:MAX_ENTRIES]

    def save_score(self, initials, score: int, level: int,
                   now: Optional[datetime] = None) -> int:
        """Insert a run; returns its 1-based rank, or -1 if it didn't place."""
        entry = {
            "initials": sanitize_initials(initials),
            "score": max(0, int(score)),
            "level": max(1, int(level)),
            "date": (now or datetime.now()).isoformat(),
        }
        data = self._read()
        entries = self.entries()

        index = len(entries)
        for i, existing in enumerate(entries):
            if entry["score"] > existing["score"]:
                index = i
                break
        if index >= MAX_ENTRIES:
            return -1

        entries.insert(index, entry)
        data["entries"] = entries[:MAX_ENTRIES]
        data["high_score"] = max(_stored_high(data), entry["score"])
        if not self._write(data):
            return -1
        return index + 1

    def is_high_score(self, score: int) -> bool:
        if score <= 0:
            return False
        entries = self.entries()
        if len(entries) < MAX_ENTRIES:
            return True
        return score > entries[-1]["score"]

    def minimum_high_score(self) -> int:
        entries = self.entries()
        if len(entries) < MAX_ENTRIES:
            return 0
        return entries[-1]["score"] + 1

    def clear(self):
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("could not clear leaderboard %s: %s", self.path, e)

    # --- HighScoreStore ---

    def load_high_score(self) -> int:
        data = self._read()
        best = _stored_high(data)
        for entry in self.entries():
            best = max(best, entry["score"])
        return best

    def save_high_score(self, score: int) -> None:
        data = self._read()
        if int(score) <= _stored_high(data):
            return
        data["high_score"] = int(score)
        self._write(data)


def _stored_high(data: Dict) -> int:
    value = data.get("high_score", 0)
    if isinstance(value, int) and not isinstance(value, bool) and value > 0:
        return value
    return 0
