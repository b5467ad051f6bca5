"""Song records as served by the library backend."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable

_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def _to_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def _to_int(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 0
    if isinstance(value, float) and not value.is_integer():
        return 0
    number = int(value)
    return number if _INT_MIN <= number <= _INT_MAX else 0


@dataclass(frozen=True)
class Song:
    """One entry of the song list."""

    title: str
    author: str
    duration: int
    song_id: int

    @classmethod
    def from_json(cls, value: Any) -> Song:
        """Build a song from a JSON object; missing or mistyped fields become empty or zero."""
        if not isinstance(value, dict):
            raise TypeError(f"expected a JSON object, got {type(value).__name__}")
        return cls(
            title=_to_str(value.get("title")),
            author=_to_str(value.get("author")),
            duration=_to_int(value.get("duration")),
            song_id=_to_int(value.get("id")),
        )

    def duration_text(self) -> str:
        """Duration label as shown in the song list."""
        return f"🕒 {self.duration} sec"


def parse_songs(values: Iterable[Any]) -> list[Song]:
    """Songs for every JSON object in ``values``, skipping anything else."""
    return [Song.from_json(value) for value in values if isinstance(value, dict)]