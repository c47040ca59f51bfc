"""
File-backed storage for program state.

Handles reading and writing the profile, training log and max history
inside one data directory.
"""

import json
from pathlib import Path

from ..core.config import DEFAULT_DATA_DIR
from ..core.models import LoggedSet, MaxRecord, ProgramProfile
from .serializers import (
    ValidationError,
    dict_to_logged_set,
    dict_to_max_record,
    dict_to_profile,
    logged_set_to_dict,
    max_record_to_dict,
    profile_to_dict,
    to_json_line,
)


class ProgramStore:
    """
    Manages program state stored in a data directory.

    Files:
    - profile.json: starting maxes, current position, completed sessions
    - training_log.jsonl: one LoggedSet per line, sorted by key
    - max_history.jsonl: one MaxRecord per line, in the order recorded
    """

    def __init__(self, data_dir: str | Path):
        """
        Initialize the store.

        Args:
            data_dir: Directory holding the data files
        """
        self.data_dir = Path(data_dir)
        self.profile_path = self.data_dir / "profile.json"
        self.log_path = self.data_dir / "training_log.jsonl"
        self.max_history_path = self.data_dir / "max_history.jsonl"

    def exists(self) -> bool:
        """Check if a profile has been initialized."""
        return self.profile_path.exists()

    def init(self) -> None:
        """
        Create the data directory and empty log files if missing.
        """
        self.data_dir.mkdir(parents=True, exist_ok=True)
        for path in (self.log_path, self.max_history_path):
            if not path.exists():
                path.touch()

    def reset(self) -> None:
        """Clear the training log and max history (used by ``init --force``)."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.log_path.write_text("")
        self.max_history_path.write_text("")

    # -- profile -----------------------------------------------------------

    def load_profile(self) -> ProgramProfile:
        """
        Load the program profile.

        Raises:
            FileNotFoundError: If init has not been run
            ValidationError: If profile.json is corrupt
        """
        if not self.profile_path.exists():
            raise FileNotFoundError(
                f"Profile not found: {self.profile_path}. Run 'init' first."
            )
        try:
            with open(self.profile_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Error parsing {self.profile_path}: {e}") from e
        return dict_to_profile(data)

    def save_profile(self, profile: ProgramProfile) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        with open(self.profile_path, "w", encoding="utf-8") as f:
            json.dump(profile_to_dict(profile), f, indent=2)

    # -- training log ------------------------------------------------------

    def _read_jsonl(self, path: Path) -> list[dict]:
        if not path.exists():
            raise FileNotFoundError(f"File not found: {path}. Run 'init' first.")
        rows: list[dict] = []
        with open(path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, 1):
                line = line.strip()
                if not line:
                    continue
                try:
                    rows.append(json.loads(line))
                except json.JSONDecodeError as e:
                    raise ValidationError(
                        f"Error parsing line {line_num} in {path}: {e}"
                    ) from e
        return rows

    def load_log(self) -> list[LoggedSet]:
        """
        Load all logged sets.

        Raises:
            FileNotFoundError: If the log file doesn't exist
            ValidationError: If a line is invalid
        """
        sets = [dict_to_logged_set(d) for d in self._read_jsonl(self.log_path)]
        sets.sort(key=lambda s: s.key)
        return sets

    def load_session(self, week: int, day: int) -> list[LoggedSet]:
        """Logged sets of one session, sorted by key."""
        return [s for s in self.load_log() if (s.week, s.day) == (week, day)]

    def save_log(self, sets: list[LoggedSet]) -> None:
        """Rewrite the training log."""
        self.data_dir.mkdir(parents=True, exist_ok=True)
        with open(self.log_path, "w", encoding="utf-8") as f:
            for s in sorted(sets, key=lambda s: s.key):
                f.write(to_json_line(logged_set_to_dict(s)) + "\n")

    # -- max history -------------------------------------------------------

    def load_max_history(self) -> list[MaxRecord]:
        """
        Load max records in the order they were appended.

        Raises:
            FileNotFoundError: If the history file doesn't exist
            ValidationError: If a line is invalid
        """
        return [dict_to_max_record(d) for d in self._read_jsonl(self.max_history_path)]

    def append_max_record(self, record: MaxRecord) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        with open(self.max_history_path, "a", encoding="utf-8") as f:
            f.write(to_json_line(max_record_to_dict(record)) + "\n")


def get_default_store() -> ProgramStore:
    """
    Get a ProgramStore in the default data directory.

    Returns:
        ProgramStore instance
    """
    return ProgramStore(DEFAULT_DATA_DIR)
