from datetime import date

import pytest

from notion_standup.config import Config
from notion_standup.records import Category, Record, SongRecord, parse_timestamp
from notion_standup.template import TemplateRenderer


ENV = {
    "NOTION_API_TOKEN": "secret-token",
    "STANDUP_DATABASE_ID": "standup-db",
    "SOTD_DATABASE_ID": "sotd-db",
    "SOTD_PLAYLIST_URL": "https://open.spotify.com/playlist/abc",
    "JIRA_PROJECT_ID": "PLS",
    "JIRA_PROJECT_URL": "https://jira.example.com/browse/",
}

# A Wednesday
TODAY = date(2024, 3, 6)


@pytest.fixture
def env():
    return dict(ENV)


@pytest.fixture
def config(env):
    return Config(environ=env, search_default_locations=False)


@pytest.fixture
def renderer():
    return TemplateRenderer(
        {"day_of_week": "Wednesday", "fortune": "Be kind"},
        jira_project_id="PLS",
        jira_project_url="https://jira.example.com/browse/",
    )


def make_record(title="Entry", item_date=None, category=Category.NORMAL, completed=False, created=None):
    runs = tuple(title) if isinstance(title, (list, tuple)) else (title,)
    return Record(
        title_runs=runs,
        item_date=item_date,
        category=category,
        completed=completed,
        created_time=parse_timestamp(created),
    )


def make_song(title="Song", artist="Artist", url="https://example.com/song", notes="",
              created=None, current=False):
    return SongRecord(
        title=title,
        artist=artist,
        url=url,
        notes=notes,
        created_time=parse_timestamp(created),
        is_current_song=current,
    )


def standup_page(name, item_date=None, category="Normal", completed=False,
                 created="2024-03-06T09:00:00.000Z"):
    """A raw Notion page shaped like a standup database row."""
    return {
        "object": "page",
        "created_time": created,
        "properties": {
            "Name": {"type": "title", "title": [{"plain_text": name}]},
            "Item Date": {"type": "date", "date": {"start": item_date} if item_date else None},
            "Category": {"type": "select", "select": {"name": category} if category else None},
            "Completed": {"type": "checkbox", "checkbox": completed},
        },
    }


def song_page(title, artist, url, notes="", current=False, created="2024-03-06T08:00:00.000Z"):
    """A raw Notion page shaped like a song of the day row."""
    return {
        "object": "page",
        "created_time": created,
        "properties": {
            "Song Title": {"type": "title", "title": [{"plain_text": title}]},
            "Artist": {"type": "rich_text", "rich_text": [{"plain_text": artist}]},
            "URL": {"type": "url", "url": url},
            "Notes": {"type": "rich_text", "rich_text": [{"plain_text": notes}] if notes else []},
            "CurrentSong": {"type": "formula", "formula": {"type": "boolean", "boolean": current}},
        },
    }
