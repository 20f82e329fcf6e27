"""
Typed views over Notion page objects.

Notion returns each row as a bag of properties keyed by name. PropertyMap
reads those with a declared shape per access; a missing property, or one of
an unexpected type, reads as empty instead of raising.
"""

from dataclasses import dataclass
from datetime import date, datetime
from enum import Enum
from typing import Any, Dict, Optional, Tuple


def parse_date(value: Any) -> Optional[date]:
    """Parse the calendar date from an ISO date or datetime string."""
    if not isinstance(value, str):
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse a Notion timestamp such as 2024-01-02T10:00:00.000Z."""
    if not isinstance(value, str):
        return None
    text = value[:-1] + "+00:00" if value.endswith("Z") else value
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        day = parse_date(value)
        return datetime(day.year, day.month, day.day) if day else None


class PropertyMap:
    """Null-safe accessor for the ``properties`` of a Notion page."""

    def __init__(self, properties: Optional[Dict[str, Any]]):
        self._properties = properties if isinstance(properties, dict) else {}

    def _value(self, name: str, kind: str) -> Any:
        prop = self._properties.get(name)
        if not isinstance(prop, dict):
            return None
        return prop.get(kind)

    def _runs(self, name: str, kind: str) -> Tuple[str, ...]:
        runs = self._value(name, kind)
        if not isinstance(runs, list):
            return ()
        return tuple(
            run.get('plain_text') or ''
            for run in runs
            if isinstance(run, dict)
        )

    def title(self, name: str) -> Tuple[str, ...]:
        """Plain text fragments of a title property; empty when absent."""
        return self._runs(name, 'title')

    def rich_text(self, name: str) -> Tuple[str, ...]:
        """Plain text fragments of a rich text property; empty when absent."""
        return self._runs(name, 'rich_text')

    def select(self, name: str) -> Optional[str]:
        option = self._value(name, 'select')
        if isinstance(option, dict):
            return option.get('name')
        return None

    def checkbox(self, name: str) -> Optional[bool]:
        value = self._value(name, 'checkbox')
        return value if isinstance(value, bool) else None

    def date(self, name: str) -> Optional[date]:
        """Start date of a date property; None when absent or unparseable."""
        value = self._value(name, 'date')
        if isinstance(value, dict):
            return parse_date(value.get('start'))
        return None

    def url(self, name: str) -> Optional[str]:
        value = self._value(name, 'url')
        return value if isinstance(value, str) else None

    def formula_boolean(self, name: str) -> Optional[bool]:
        formula = self._value(name, 'formula')
        if isinstance(formula, dict) and isinstance(formula.get('boolean'), bool):
            return formula['boolean']
        return None


class Category(Enum):
    NORMAL = "Normal"
    GRATITUDE = "Gratitude"
    BLOCKER = "Blocker"

    @classmethod
    def from_name(cls, name: Optional[str]) -> Optional["Category"]:
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass(frozen=True)
class Record:
    """One row of the standup database."""

    title_runs: Tuple[str, ...] = ()
    item_date: Optional[date] = None
    category: Optional[Category] = None
    completed: Optional[bool] = None
    created_time: Optional[datetime] = None

    @property
    def title(self) -> str:
        # Notion splits titles into runs at every formatting change
        return ''.join(self.title_runs)

    @classmethod
    def from_page(cls, page: Dict[str, Any]) -> "Record":
        props = PropertyMap(page.get('properties'))
        return cls(
            title_runs=props.title('Name'),
            item_date=props.date('Item Date'),
            category=Category.from_name(props.select('Category')),
            completed=props.checkbox('Completed'),
            created_time=parse_timestamp(page.get('created_time')),
        )


@dataclass(frozen=True)
class SongRecord:
    """One row of the song of the day database."""

    title: str = ''
    artist: str = ''
    url: Optional[str] = None
    notes: str = ''
    created_time: Optional[datetime] = None
    is_current_song: Optional[bool] = None

    @classmethod
    def from_page(cls, page: Dict[str, Any]) -> "SongRecord":
        props = PropertyMap(page.get('properties'))
        return cls(
            title=''.join(props.title('Song Title')),
            artist=''.join(props.rich_text('Artist')),
            url=props.url('URL'),
            notes=''.join(props.rich_text('Notes')),
            created_time=parse_timestamp(page.get('created_time')),
            is_current_song=props.formula_boolean('CurrentSong'),
        )
