import logging
import re
import unicodedata

import requests

from webextract.exceptions import FetchError

logger = logging.getLogger(__name__)
logger.setLevel(logging.DEBUG)


def fetch_page(
    url: str,
    timeout: int = 30,
    user_agent: str | None = None,
    session: requests.Session | None = None,
) -> str:
    """
    Downloads an HTML page and returns its decoded text.

    Args:
        url (str): The URL of the page to download.
        timeout (int): Request timeout in seconds.
        user_agent (str | None): User-Agent header sent with the request.
        session (requests.Session | None): Session to reuse between pages.

    Returns:
        str: The page content.

    Raises:
        FetchError: If the request fails or the response is not HTML.
    """
    logger.debug(f"Fetching {url}")
    headers = {"User-Agent": user_agent} if user_agent else {}
    http = session or requests
    try:
        response = http.get(url, timeout=timeout, headers=headers)
        response.raise_for_status()
    except requests.RequestException as e:
        logger.debug(f"Failed to fetch {url}: {e}")
        raise FetchError(url, str(e)) from e

    content_type = response.headers.get("content-type", "")
    if content_type and "html" not in content_type.lower():
        raise FetchError(url, f"unsupported content type {content_type}")

    logger.debug(f"Fetched {len(response.text)} characters from {url}")
    return response.text


def normalize_text(text: str | None) -> str:
    """
    Collapse whitespace and normalize unicode in a text fragment.

    Args:
        text (str | None): Raw text extracted from the page.

    Returns:
        str: The cleaned text, empty when `text` is None.
    """
    if not text:
        return ""
    text = unicodedata.normalize("NFKC", text)
    return re.sub(r"\s+", " ", text).strip()


def unique(values: list) -> list:
    """Remove duplicates while keeping the first occurrence order."""
    return list(dict.fromkeys(value for value in values if value))
