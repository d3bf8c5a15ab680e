"""Authoritative web search for a business's official website."""

from __future__ import annotations

import logging
import re
from typing import Optional, Set

import requests

from .models import SearchCandidate
from .normalize import extract_domain, input_tokens
from .settings import ResolverSettings

LOGGER = logging.getLogger(__name__)

SEARCH_URL = "https://www.google.com/search"
_HREF_RE = re.compile(r"href=[\"']([^\"']*)['\"]")


def search_query(name: str) -> str:
    """Build the single official-website query for a name.

    Args:
        name (str): Normalized business name.

    Returns:
        str: Search query.
    """
    return f'"{name}" official website'


def parse_top_search_result(
    html: str, name: str, settings: Optional[ResolverSettings] = None
) -> Optional[SearchCandidate]:
    """Pick the first acceptable organic result from a search page.

    Only absolute HTTP links are considered. Domains are skipped when already
    seen, blacklisted, longer than the maximum length, or when their first
    label is too short.

    Args:
        html (str): Search results page.
        name (str): Normalized business name used for scoring.
        settings (Optional[ResolverSettings]): Filter and scoring constants.

    Returns:
        Optional[SearchCandidate]: Top candidate, or None.
    """
    settings = settings or ResolverSettings()
    tokens = input_tokens(name, settings.min_token_length)
    seen: Set[str] = set()
    for match in _HREF_RE.finditer(html or ""):
        url = match.group(1)
        if not url.startswith("http"):
            continue
        domain = extract_domain(url)
        if domain in seen:
            continue
        seen.add(domain)
        if settings.is_blacklisted(domain):
            LOGGER.debug("Filtered (blacklist): %s", domain)
            continue
        if len(domain) > settings.max_domain_length:
            LOGGER.debug("Filtered (too long): %s", domain)
            continue
        if len(domain.split(".")[0]) < settings.min_first_label_length:
            LOGGER.debug("Filtered (too short): %s", domain)
            continue
        matches = sum(1 for token in tokens if token in domain)
        if matches:
            score = settings.search_match_base + matches * settings.search_match_step
            snippet = f"Matched {matches} tokens"
        else:
            score = settings.search_base_score
            snippet = "Search result"
        return SearchCandidate(
            domain=domain,
            url=url,
            title=domain,
            snippet=snippet,
            relevance_score=min(score, 1.0),
        )
    return None


class GoogleSearchClient:
    """Fetch the top official-website result from Google's HTML results."""

    def __init__(
        self,
        settings: Optional[ResolverSettings] = None,
        session: Optional[requests.Session] = None,
        search_url: str = SEARCH_URL,
    ) -> None:
        """Initialize the search client.

        Args:
            settings (Optional[ResolverSettings]): Timeout, User-Agent and filters.
            session (Optional[requests.Session]): Session to reuse for requests.
            search_url (str): Search endpoint.
        """
        self.settings = settings or ResolverSettings()
        self.session = session or requests.Session()
        self.search_url = search_url

    def top_result(self, name: str) -> Optional[SearchCandidate]:
        """Search for a name's official website and return the top result.

        Args:
            name (str): Normalized business name.

        Returns:
            Optional[SearchCandidate]: Top candidate, or None on any failure.
        """
        query = search_query(name)
        LOGGER.info("Searching: %s", query)
        try:
            response = self.session.get(
                self.search_url,
                params={"q": query},
                headers={"User-Agent": self.settings.user_agent},
                timeout=self.settings.http_timeout,
            )
        except requests.RequestException as exc:
            LOGGER.info("Search failed: %s", exc)
            return None
        if not response.ok:
            LOGGER.info("Search returned HTTP %s", response.status_code)
            return None
        return parse_top_search_result(response.text, name, self.settings)
