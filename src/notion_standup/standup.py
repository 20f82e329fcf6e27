"""
Build the daily standup from the Notion records.

Main standup database properties:
    Item Date (date)
    Name (title)
    Category (select with options: Normal, Gratitude, Blocker)
    Completed (checkbox)

Song of the day database properties:
    Song Title (title)
    Artist (text)
    URL (url)
    Notes (text)
    Created time
    CurrentSong (formula: prop("Created time").formatDate("YYYY-MM-DD") == now().formatDate("YYYY-MM-DD"))
"""

import functools
import logging
from datetime import date, timedelta
from enum import Enum
from typing import Callable, Iterable, List, Optional, TypeVar

from .config import Config
from .fortune import random_fortune
from .notion_api import fetch_records, fetch_song_records
from .records import Category, Record, SongRecord
from .template import TemplateRenderer, build_template_context

logger = logging.getLogger(__name__)

T = TypeVar("T")

NONE_LINE = "* None\n"


class Section(Enum):
    PREVIOUS = "Previous"
    TODAY = "Today"
    BLOCKERS = "Blockers"
    GRATITUDE = "Gratitude/Joy/Others"
    SOTD = "Song of the Day"

    @property
    def label(self) -> str:
        return self.value

    @property
    def default_category(self) -> Optional[Category]:
        return DEFAULT_CATEGORIES.get(self)


DEFAULT_CATEGORIES = {
    Section.PREVIOUS: Category.NORMAL,
    Section.TODAY: Category.NORMAL,
    Section.BLOCKERS: Category.BLOCKER,
    Section.GRATITUDE: Category.GRATITUDE,
}

# Print order of the standup
STANDUP_SECTIONS = [Section.PREVIOUS, Section.TODAY, Section.BLOCKERS, Section.GRATITUDE]


def previous_business_day(today: date) -> date:
    """The day before today, skipping back over weekends (Monday -> Friday)."""
    day = today - timedelta(days=1)
    # 5 = Saturday, 6 = Sunday
    while day.weekday() >= 5:
        day -= timedelta(days=1)
    return day


def sorted_null_tolerant(items: Iterable[T], key: Callable[[T], object], reverse: bool = False) -> List[T]:
    """
    Stable sort where a missing key on either side compares as equal.

    Undated items keep their relative position from the input order, so
    the result depends on the order the source returned them in.
    """
    def compare(a: T, b: T) -> int:
        ka, kb = key(a), key(b)
        if ka is None or kb is None:
            return 0
        if ka == kb:
            return 0
        result = -1 if ka < kb else 1
        return -result if reverse else result

    return sorted(items, key=functools.cmp_to_key(compare))


def created_date(record) -> Optional[date]:
    # Creation order is compared by calendar day only
    return record.created_time.date() if record.created_time else None


def entry_line(record: Record) -> str:
    return f"* {record.title}\n"


def classify_entry(section: Section, record: Record, today: date) -> Optional[str]:
    """
    Decide whether a record belongs in a section.

    Returns:
        The formatted bullet line, or None when the record is excluded
    """
    if record.completed is not False:
        return None

    if section is Section.PREVIOUS:
        if record.item_date is None or record.item_date != previous_business_day(today):
            return None
    elif section is Section.TODAY:
        if record.item_date is None or record.item_date != today:
            return None
    elif section not in (Section.BLOCKERS, Section.GRATITUDE):
        return None

    return entry_line(record)


def format_song_of_the_day(
    song: Optional[SongRecord], playlist_url: str, append_newline: bool = False
) -> str:
    result = f"* [{Section.SOTD.label}]({playlist_url}): "
    if song:
        result += f":musical_note: [{song.artist} - {song.title}]({song.url or ''}) :musical_note:"
        if song.notes and song.notes.strip():
            result += f" - {song.notes}"
    else:
        result += "None"
    if append_newline:
        result += "\n"
    return result


def current_song(songs: Iterable[SongRecord]) -> Optional[SongRecord]:
    """Most recently created song flagged as today's song."""
    newest_first = sorted_null_tolerant(songs, created_date, reverse=True)
    for song in newest_first:
        if song.is_current_song is True:
            return song
    return None


class DailyStandup:
    """
    Renders standup sections from already-fetched records.

    Use DailyStandup.from_notion() to fetch both databases and build the
    template context in one step.
    """

    def __init__(
        self,
        records: List[Record],
        song_records: List[SongRecord],
        renderer: TemplateRenderer,
        playlist_url: str = "",
        today: Optional[date] = None,
    ):
        self.records = records
        self.song_records = song_records
        self.renderer = renderer
        self.playlist_url = playlist_url
        self.today = today or date.today()

    @classmethod
    def from_notion(
        cls,
        config: Config,
        today: Optional[date] = None,
        sotd_in_context: bool = True,
        fortune: Optional[str] = None,
    ) -> "DailyStandup":
        """
        Fetch both databases and prepare the template context.

        Args:
            config: Configuration object
            today: Date to build the standup for (defaults to today)
            sotd_in_context: Expose the song of the day as {{sotd}}
            fortune: Fortune text to use instead of calling random_fortune()

        Raises:
            ConnectivityError: If either database cannot be fetched
        """
        today = today or date.today()
        logger.info("Fetching standup records...")
        records = fetch_records(config)
        logger.info("Fetching song of the day records...")
        song_records = fetch_song_records(config)

        sotd = None
        if sotd_in_context:
            sotd = format_song_of_the_day(current_song(song_records), config.sotd_playlist_url)
        context = build_template_context(
            today, fortune if fortune is not None else random_fortune(), sotd
        )
        renderer = TemplateRenderer(
            context,
            jira_project_id=config.jira_project_id,
            jira_project_url=config.jira_project_url,
            escape_output=False,
        )
        return cls(records, song_records, renderer, config.sotd_playlist_url, today)

    def section_for_category(self, section: Section, category: Optional[Category] = None) -> str:
        """
        Build one section, e.g. section_for_category(Section.TODAY, Category.NORMAL)
        lists today's open entries in the Normal category under "Today".
        """
        if category is None:
            category = section.default_category

        matching = [r for r in self.records if r.category is not None and r.category == category]
        by_item_date = sorted_null_tolerant(matching, lambda r: r.item_date)
        ordered = sorted_null_tolerant(by_item_date, created_date)

        lines = []
        for record in ordered:
            line = classify_entry(section, record, self.today)
            if line:
                lines.append(line)

        if not lines:
            lines.append(NONE_LINE)

        text = f"*{section.label}:*\n" + ''.join(lines)
        return self.renderer.render(text)

    def song_of_the_day(self, append_newline: bool = False) -> str:
        return format_song_of_the_day(
            current_song(self.song_records), self.playlist_url, append_newline
        )

    def sections(self, include_sotd: bool = False) -> List[str]:
        """All rendered blocks in print order."""
        blocks = [self.section_for_category(section) for section in STANDUP_SECTIONS]
        if include_sotd:
            blocks.append(self.song_of_the_day(append_newline=True))
        return blocks
