"""Notion Standup - daily standup notes from Notion, formatted for Slack."""

__version__ = "1.0.0"
__license__ = "MIT"

from .config import Config, ConfigurationError, load_config
from .notion_api import ConnectivityError, query_database
from .standup import DailyStandup, Section, previous_business_day

__all__ = [
    "Config",
    "ConfigurationError",
    "ConnectivityError",
    "DailyStandup",
    "Section",
    "load_config",
    "previous_business_day",
    "query_database",
]
