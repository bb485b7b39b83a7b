"""Reachability check for URLs found in the README."""

import logging
import re
from concurrent.futures import ThreadPoolExecutor

import requests

from readme_validator.errors import ErrorKind, ValidationError
from readme_validator.modules.markdown_content import MarkdownContent
from readme_validator.validators.base import Validator

logger = logging.getLogger(__name__)

URL_RE = re.compile(r"https?://[^\s<>()\[\]\"'`]+")
TRAILING_PUNCTUATION = ".,;:!?*_"
SKIPPED_URL_FRAGMENTS = ("registry.terraform.io/providers/",)


def find_urls(text: str) -> list[str]:
    """Return the distinct http(s) URLs in text, in order of first appearance."""
    urls: list[str] = []
    for match in URL_RE.finditer(text):
        url = match.group(0).rstrip(TRAILING_PUNCTUATION)
        if url not in urls:
            urls.append(url)
    return urls


class URLValidator(Validator):
    """Check that every URL in the README answers with HTTP 200.

    Provider registry links are skipped. Requests run in a bounded thread
    pool, each with its own timeout.
    """

    name = "urls"

    def __init__(self, markdown: MarkdownContent, timeout: float = 10.0, max_workers: int = 5):
        self.markdown = markdown
        self.timeout = timeout
        self.max_workers = max_workers

    def validate(self) -> list[ValidationError]:
        urls = [
            url
            for url in find_urls(self.markdown.content)
            if not any(fragment in url for fragment in SKIPPED_URL_FRAGMENTS)
        ]
        if not urls:
            return []

        logger.debug("Checking %d URLs", len(urls))
        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            results = list(executor.map(self.check_url, urls))
        return [error for error in results if error is not None]

    def check_url(self, url: str) -> ValidationError | None:
        """Request one URL, returning an error if it fails or is not 200."""
        try:
            response = requests.get(url, timeout=self.timeout)
        except requests.RequestException as e:
            return ValidationError(f"error accessing URL: {url}: {e}", ErrorKind.URL)

        try:
            if response.status_code != 200:
                return ValidationError(
                    f"URL returned non-OK status: {url}: Status: {response.status_code}",
                    ErrorKind.URL,
                )
        finally:
            response.close()
        return None


__all__ = ["URLValidator", "find_urls"]
