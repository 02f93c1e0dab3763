"""Build an authenticated HTTP client from browser cookies."""

import json
import logging
from pathlib import Path
from typing import Any

import requests

logger = logging.getLogger(__name__)

DEFAULT_HEADERS = {
    "User-Agent": "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/143.0.0.0 Safari/537.36",
    "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
    "Accept-Language": "en-AU,en;q=0.9",
    "DNT": "1",
}


def load_cookies(filepath: str | Path) -> list[dict[str, Any]]:
    """
    Load cookies exported from a logged-in browser session.

    Args:
        filepath: Path to a JSON file holding either a list of cookie
            dictionaries or an object with a "cookies" list

    Returns:
        List of cookie dictionaries
    """
    filepath = Path(filepath)

    if not filepath.exists():
        raise FileNotFoundError(f"Cookies file not found: {filepath}")

    with open(filepath, "r", encoding="utf-8") as f:
        data = json.load(f)

    # Accept both a bare list and the {"cookies": [...]} wrapper
    if isinstance(data, list):
        return data
    return data.get("cookies", [])


def create_client_from_cookies(
    cookies: list[dict[str, Any]],
    headers: dict[str, str] | None = None,
) -> requests.Session:
    """
    Create a requests.Session carrying the cookies of an established login.

    Args:
        cookies: List of cookie dictionaries (name, value, domain, path)
        headers: Extra headers merged over the browser-like defaults

    Returns:
        requests.Session configured with the cookies
    """
    client = requests.Session()
    client.headers.update(DEFAULT_HEADERS)
    if headers:
        client.headers.update(headers)

    for cookie in cookies:
        client.cookies.set(
            name=cookie["name"],
            value=cookie["value"],
            domain=cookie.get("domain", ""),
            path=cookie.get("path", "/"),
        )

    logger.debug("Created client with %d cookies", len(cookies))
    return client
