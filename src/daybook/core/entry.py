"""Journal entry domain model - no I/O dependencies."""

import json
from dataclasses import dataclass, field
from datetime import date, datetime

SECTION_SIZE = 3


class EntryDecodeError(ValueError):
    """A stored section could not be decoded into its structured form."""


@dataclass
class Goal:
    """One of the day's goals."""

    text: str = ""
    completed: bool = False

    @property
    def is_blank(self) -> bool:
        return not self.text.strip()

    def to_dict(self) -> dict:
        return {"text": self.text, "completed": self.completed}

    @classmethod
    def from_dict(cls, data: dict) -> "Goal":
        """Build from stored JSON. Raises EntryDecodeError for a non-boolean flag."""
        text = data.get("text")
        completed = data.get("completed", False)
        if not isinstance(completed, bool):
            raise EntryDecodeError(f"Invalid goal completed flag: {completed!r}")
        return cls(text="" if text is None else str(text), completed=completed)


@dataclass
class JournalEntry:
    """One calendar day's journal record."""

    date: date
    goals: list[Goal] = field(default_factory=list)
    affirmations: list[str] = field(default_factory=list)
    gratitude: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @property
    def goals_completed_count(self) -> int:
        """Completed goals, always counted from the live goal list."""
        return count_completed_goals(self.goals)

    @property
    def goals_set_count(self) -> int:
        return len(self.goals)

    def to_dict(self) -> dict:
        return {
            "date": self.date.isoformat(),
            "goals": [g.to_dict() for g in self.goals],
            "affirmations": list(self.affirmations),
            "gratitude": list(self.gratitude),
            "goals_completed": self.goals_completed_count,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "updated_at": self.updated_at.isoformat() if self.updated_at else None,
        }


def empty_entry(day: date) -> JournalEntry:
    """A blank entry with three empty slots per section."""
    return JournalEntry(
        date=day,
        goals=[Goal() for _ in range(SECTION_SIZE)],
        affirmations=[""] * SECTION_SIZE,
        gratitude=[""] * SECTION_SIZE,
    )


def count_completed_goals(goals: list[Goal]) -> int:
    return sum(1 for g in goals if g.completed)


def has_content(items: list[str]) -> bool:
    """True if any item is non-blank after trimming."""
    return any(isinstance(item, str) and item.strip() for item in items)


def has_goal_text(goals: list[Goal]) -> bool:
    """True if any goal has non-blank text. Completion flags are ignored."""
    return any(not g.is_blank for g in goals)


# ============== Text encoding ==============


def encode_goals(goals: list[Goal]) -> str:
    return json.dumps([g.to_dict() for g in goals])


def encode_lines(items: list[str]) -> str:
    return json.dumps(list(items))


def decode_goals(raw: str | None) -> list[Goal]:
    """Decode a JSON goals array. Raises EntryDecodeError on malformed input."""
    data = _load_array(raw, "goals")
    goals = []
    for item in data:
        if isinstance(item, dict):
            goals.append(Goal.from_dict(item))
        elif isinstance(item, str):
            goals.append(Goal(text=item))
        else:
            raise EntryDecodeError(f"Invalid goal item: {item!r}")
    return goals


def decode_lines(raw: str | None, section: str) -> list[str]:
    """Decode a JSON array of strings. Raises EntryDecodeError on malformed input."""
    data = _load_array(raw, section)
    if not all(isinstance(item, str) for item in data):
        raise EntryDecodeError(f"Invalid {section} items: expected strings")
    return data


def _load_array(raw: str | None, section: str) -> list:
    if raw is None or raw == "":
        return []
    try:
        data = json.loads(raw)
    except json.JSONDecodeError as e:
        raise EntryDecodeError(f"Malformed {section} JSON: {e}") from e
    if not isinstance(data, list):
        raise EntryDecodeError(f"Malformed {section} JSON: expected an array")
    return data
