"""Exceptions raised by the extraction workflow and its collaborators."""


class WebExtractError(Exception):
    """Base class for errors raised by webextract."""


class FetchError(WebExtractError):
    """A page could not be downloaded."""

    def __init__(self, url: str, message: str):
        super().__init__(f"Could not fetch {url}: {message}")
        self.url = url


class StorageError(WebExtractError):
    """Extracted data could not be written to the store."""
