"""
Thin Notion API layer: database queries with pagination.

Only the database query endpoint is used. Requests are made once; any
network or API failure is raised as ConnectivityError and aborts the run.
"""

import json
import logging
import urllib.error
import urllib.request
from typing import Any, Dict, List, Optional

from .config import Config
from .records import Record, SongRecord

# Set up logging
logger = logging.getLogger(__name__)

PAGE_SIZE = 100


class ConnectivityError(RuntimeError):
    """Raised when the Notion API cannot be reached or returns an error."""

    def __init__(self, message: str, status: Optional[int] = None):
        super().__init__(message)
        self.status = status


def make_api_request(
    url: str,
    token: str,
    api_version: str,
    method: str = 'GET',
    payload: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Make a single API request.

    Args:
        url: API endpoint URL
        token: Notion API token
        api_version: Notion API version
        method: HTTP method
        payload: JSON body

    Returns:
        API response as dict

    Raises:
        ConnectivityError: On HTTP, network or decoding errors
    """
    headers = {
        "Authorization": f"Bearer {token}",
        "Notion-Version": api_version
    }

    data = None
    if payload is not None:
        headers["Content-Type"] = "application/json"
        data = json.dumps(payload).encode('utf-8')

    req = urllib.request.Request(url, data=data, headers=headers, method=method)
    try:
        with urllib.request.urlopen(req) as response:
            body = response.read()
    except urllib.error.HTTPError as e:
        error_body = e.read().decode('utf-8', errors='replace')
        raise ConnectivityError(
            f"Notion API error {e.code} for {url}: {error_body}", status=e.code
        ) from e
    except (urllib.error.URLError, OSError) as e:
        raise ConnectivityError(f"Failed to call Notion API at {url}: {e}") from e

    try:
        return json.loads(body)
    except ValueError as e:
        raise ConnectivityError(f"Invalid JSON response from {url}: {e}") from e


def query_database(database_id: str, config: Config) -> List[Dict[str, Any]]:
    """Get all rows from a database, handling pagination."""
    url = f"{config.api_base_url}/databases/{database_id}/query"
    all_rows = []
    start_cursor = None

    while True:
        payload: Dict[str, Any] = {"page_size": PAGE_SIZE}
        if start_cursor:
            payload["start_cursor"] = start_cursor

        result = make_api_request(
            url, config.notion_token, config.api_version, method='POST', payload=payload
        )
        rows = result.get('results') or []
        logger.debug(f"Fetched {len(rows)} rows from database {database_id}")
        all_rows.extend(rows)

        if result.get('has_more') and result.get('next_cursor'):
            start_cursor = result['next_cursor']
        else:
            break

    logger.info(f"Retrieved {len(all_rows)} rows from database {database_id}")
    return all_rows


def fetch_records(config: Config) -> List[Record]:
    """Load the standup database."""
    return [Record.from_page(page) for page in query_database(config.standup_database_id, config)]


def fetch_song_records(config: Config) -> List[SongRecord]:
    """Load the song of the day database."""
    return [SongRecord.from_page(page) for page in query_database(config.sotd_database_id, config)]
