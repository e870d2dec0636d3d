import re
from urllib.parse import urlparse

IPV4_PATTERN = re.compile(r"^\d{1,3}(\.\d{1,3}){3}$")
HOSTNAME_PATTERN = re.compile(
    r"^(?=.{1,253}$)([a-z0-9]([a-z0-9-]{0,61}[a-z0-9])?\.)+[a-z]{2,63}$",
    re.IGNORECASE,
)


def is_matching(value: str, pattern: re.Pattern) -> bool:
    return pattern.match(value) is not None


def is_valid_url(url) -> bool:
    """
    Check that `url` is an absolute http(s) URL pointing to a plausible host.

    Args:
        url: The value to check. Anything other than a string is rejected.

    Returns:
        bool: True when the URL can be handed to the extractor.
    """
    if not isinstance(url, str) or not url:
        return False
    if any(char.isspace() for char in url):
        return False
    try:
        parsed = urlparse(url)
        # port is parsed lazily and raises on out of range values
        parsed.port
    except ValueError:
        return False
    if parsed.scheme not in ("http", "https"):
        return False
    host = parsed.hostname
    if not host:
        return False
    if host == "localhost":
        return True
    if is_matching(host, IPV4_PATTERN):
        return all(0 <= int(part) <= 255 for part in host.split("."))
    return is_matching(host, HOSTNAME_PATTERN)
