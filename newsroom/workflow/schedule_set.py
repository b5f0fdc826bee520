"""
Per-article schedule entries.

An article carries at most one entry per platform. The set is persisted as a
JSON list of ``{"platform", "date", "time", "isPosted"}`` records on the
article row, so every change is a read-modify-write of the whole list.
"""
from dataclasses import dataclass, replace
from datetime import date as dt_date, datetime, time as dt_time
from typing import Any, Dict, Iterable, List, Optional, Tuple
from zoneinfo import ZoneInfo

from ..errors import ValidationFailed
from ..models.enums import ArticleStatus

DATE_FORMAT = "%Y-%m-%d"
TIME_FORMAT = "%H:%M"


def normalize_date(value: Any) -> str:
    """Coerce a date, datetime or ISO string to ``YYYY-MM-DD``."""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, dt_date):
        return value.isoformat()
    if isinstance(value, str):
        try:
            # Browsers often send full ISO timestamps; only the calendar day matters.
            return dt_date.fromisoformat(value.strip()[:10]).isoformat()
        except ValueError:
            pass
    raise ValidationFailed(f"Invalid schedule date: {value!r}", {"date": str(value)})


def normalize_time(value: Any) -> str:
    """Coerce a time or ``HH:mm[:ss]`` string to ``HH:mm``."""
    if isinstance(value, dt_time):
        return value.strftime(TIME_FORMAT)
    if isinstance(value, str):
        try:
            return dt_time.fromisoformat(value.strip()).strftime(TIME_FORMAT)
        except ValueError:
            pass
    raise ValidationFailed(f"Invalid schedule time: {value!r}", {"time": str(value)})


@dataclass(frozen=True)
class ScheduleEntry:
    """One platform's planned publish moment for an article."""

    platform: str
    date: str
    time: str
    is_posted: bool = False

    @classmethod
    def create(cls, platform: str, date: Any, time: Any, is_posted: bool = False) -> "ScheduleEntry":
        if not platform or not str(platform).strip():
            raise ValidationFailed("Schedule entry requires a platform")
        return cls(
            platform=str(platform).strip(),
            date=normalize_date(date),
            time=normalize_time(time),
            is_posted=bool(is_posted),
        )

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ScheduleEntry":
        return cls.create(
            platform=data.get("platform"),
            date=data.get("date"),
            time=data.get("time"),
            is_posted=data.get("isPosted", data.get("is_posted", False)),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "platform": self.platform,
            "date": self.date,
            "time": self.time,
            "isPosted": self.is_posted,
        }

    def target_instant(self, tz: ZoneInfo) -> datetime:
        """The wall-clock moment this entry fires, interpreted in ``tz``."""
        naive = datetime.strptime(f"{self.date} {self.time}", f"{DATE_FORMAT} {TIME_FORMAT}")
        return naive.replace(tzinfo=tz)

    def is_due(self, now: datetime, tz: ZoneInfo) -> bool:
        return self.target_instant(tz) <= now

    def mark_posted(self) -> "ScheduleEntry":
        return replace(self, is_posted=True)


class ScheduleSet:
    """
    Ordered collection of schedule entries keyed by platform.

    Instances are immutable: every operation returns a new set.
    """

    def __init__(self, entries: Iterable[ScheduleEntry] = ()):
        collapsed: Dict[str, ScheduleEntry] = {}
        for entry in entries:
            # A re-inserted key keeps its original position but takes the new value.
            collapsed[entry.platform] = entry
        self._entries: Tuple[ScheduleEntry, ...] = tuple(collapsed.values())

    @classmethod
    def from_json(cls, raw: Optional[List[Dict[str, Any]]]) -> "ScheduleSet":
        return cls(ScheduleEntry.from_dict(item) for item in (raw or []))

    def to_json(self) -> List[Dict[str, Any]]:
        return [entry.to_dict() for entry in self._entries]

    @property
    def entries(self) -> Tuple[ScheduleEntry, ...]:
        return self._entries

    @property
    def platforms(self) -> List[str]:
        return [entry.platform for entry in self._entries]

    def get(self, platform: str) -> Optional[ScheduleEntry]:
        for entry in self._entries:
            if entry.platform == platform:
                return entry
        return None

    def merge(self, incoming: Iterable[ScheduleEntry]) -> "ScheduleSet":
        """Add entries, replacing any existing entry for the same platform."""
        return ScheduleSet(list(self._entries) + list(incoming))

    def without(self, platforms: Iterable[str]) -> "ScheduleSet":
        """Drop every entry whose platform is listed."""
        dropped = set(platforms)
        return ScheduleSet(e for e in self._entries if e.platform not in dropped)

    def mark_due(self, now: datetime, tz: ZoneInfo) -> Tuple["ScheduleSet", List[ScheduleEntry]]:
        """
        Flag every unposted entry whose target instant is at or before ``now``.

        Returns the updated set and the entries that were promoted. Applying it
        twice with the same ``now`` promotes nothing the second time.
        """
        promoted: List[ScheduleEntry] = []
        updated: List[ScheduleEntry] = []
        for entry in self._entries:
            if not entry.is_posted and entry.is_due(now, tz):
                entry = entry.mark_posted()
                promoted.append(entry)
            updated.append(entry)
        return ScheduleSet(updated), promoted

    @property
    def all_posted(self) -> bool:
        return bool(self._entries) and all(e.is_posted for e in self._entries)

    def derive_status(self) -> ArticleStatus:
        """
        Article status implied by the entries' posted flags.

        Empty set means the article can be rescheduled (REVIEWED).
        """
        if not self._entries:
            return ArticleStatus.REVIEWED
        if self.all_posted:
            return ArticleStatus.POSTED
        return ArticleStatus.SCHEDULED

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self):
        return iter(self._entries)

    def __bool__(self) -> bool:
        return bool(self._entries)

    def __eq__(self, other) -> bool:
        if not isinstance(other, ScheduleSet):
            return NotImplemented
        return self._entries == other._entries

    def __repr__(self) -> str:
        return f"ScheduleSet({list(self._entries)!r})"
