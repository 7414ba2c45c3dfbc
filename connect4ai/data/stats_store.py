"""
stats_store.py - Win/loss/draw statistics per player

Player records live in a single JSON file, keyed by the lowercase form of
the player's formatted name. Every read-modify-write holds the file's lock
from the read to the write, and writes go through a temporary file that
replaces the existing one.
"""

import datetime
import json
import os
import shutil
from typing import Any, Dict, List, Optional

import filelock

from connect4ai.debug import debug
from connect4ai.utils import STATS_FILE, Connect4Error

RESULT_FIELDS = {
    "win": "wins",
    "loss": "losses",
    "draw": "draws",
}
LEADERBOARD_SIZE = 10


class UnknownUserError(KeyError):
    """Stats were requested for a player that has no record."""


class StatsWriteError(Connect4Error, OSError):
    """The stats file could not be written."""


def _lock(file_path: str) -> filelock.FileLock:
    directory = os.path.dirname(file_path)
    if directory:
        os.makedirs(directory, exist_ok=True)
    return filelock.FileLock(f"{file_path}.lock")


def _read_json(file_path: str) -> Dict[str, Any]:
    # Caller holds the lock
    if not os.path.exists(file_path):
        return {}
    try:
        with open(file_path, 'r') as f:
            data = json.load(f)
    except json.JSONDecodeError:
        debug.error(f"Error decoding JSON from {file_path}", "stats")
        return {}

    if not isinstance(data, dict):
        debug.error(f"Expected a JSON object in {file_path}", "stats")
        return {}
    return data


def _write_json(file_path: str, data: Any) -> bool:
    # Caller holds the lock
    temp_file = f"{file_path}.tmp"
    try:
        with open(temp_file, 'w') as f:
            json.dump(data, f, indent=2)
        shutil.move(temp_file, file_path)
        return True
    except OSError as e:
        debug.error(f"Error writing to {file_path}: {e}", "stats")
        return False


def safe_read_json(file_path: str) -> Dict[str, Any]:
    """
    Read a JSON object from file_path under its lock.

    Returns:
        The parsed object, or an empty dict if the file is missing or corrupt
    """
    if not os.path.exists(file_path):
        return {}
    with _lock(file_path):
        return _read_json(file_path)


def _save(file_path: str, users: Dict[str, Any]) -> None:
    if not _write_json(file_path, users):
        raise StatsWriteError(f"Could not save stats to {file_path}")


def format_username(name: str) -> str:
    """Collapse whitespace and capitalise each word: "rahul  prakash" -> "Rahul Prakash"."""
    return " ".join(word.capitalize() for word in name.split())


def user_key(name: str) -> str:
    return format_username(name).lower()


def _new_record(username: str) -> Dict[str, Any]:
    return {
        "username": username,
        "wins": 0,
        "losses": 0,
        "draws": 0,
        "total_games": 0,
        "last_played": None,
    }


def create_user(name: str, path: str = STATS_FILE) -> Dict[str, Any]:
    """
    Create (or reset) a player's record with zeroed stats.

    Raises:
        ValueError: if name is blank
        StatsWriteError: if the stats file cannot be written
    """
    username = format_username(name)
    if not username:
        raise ValueError("Username must not be blank")

    record = _new_record(username)
    with _lock(path):
        users = _read_json(path)
        users[username.lower()] = record
        _save(path, users)
    debug.info(f"Created stats for {username}", "stats")
    return record


def get_user(name: str, path: str = STATS_FILE) -> Optional[Dict[str, Any]]:
    """A player's record, or None if they have none."""
    return safe_read_json(path).get(user_key(name))


def get_or_create_user(name: str, path: str = STATS_FILE) -> Dict[str, Any]:
    return get_user(name, path) or create_user(name, path)


def update_stats(name: str, result: str, path: str = STATS_FILE) -> Dict[str, Any]:
    """
    Record the result of a finished game.

    Args:
        name: Player name, in any case or spacing
        result: "win", "loss" or "draw" from the player's side
        path: Stats file

    Returns:
        The updated record

    Raises:
        ValueError: for an unknown result
        UnknownUserError: if the player has no record
        StatsWriteError: if the stats file cannot be written
    """
    if result not in RESULT_FIELDS:
        raise ValueError(f"Unknown result {result!r}")

    key = user_key(name)
    with _lock(path):
        users = _read_json(path)
        if key not in users:
            raise UnknownUserError(f"User not found: {name}")

        record = users[key]
        record[RESULT_FIELDS[result]] += 1
        record["total_games"] += 1
        record["last_played"] = datetime.datetime.now().isoformat()
        _save(path, users)

    debug.info(f"Recorded {result} for {record['username']}", "stats")
    return record


def get_leaderboard(limit: int = LEADERBOARD_SIZE, path: str = STATS_FILE) -> List[Dict[str, Any]]:
    """Players with the most wins, best first."""
    users = list(safe_read_json(path).values())
    users.sort(key=lambda u: u["wins"], reverse=True)
    return users[:limit]
