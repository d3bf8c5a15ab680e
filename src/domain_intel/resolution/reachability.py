"""HTTP reachability checks."""

from __future__ import annotations

import logging
from typing import Optional

import requests

from .settings import ResolverSettings

LOGGER = logging.getLogger(__name__)


class HttpReachability:
    """Check whether a domain answers ``HEAD https://<domain>``."""

    def __init__(
        self,
        settings: Optional[ResolverSettings] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        """Initialize the checker.

        Args:
            settings (Optional[ResolverSettings]): Timeout and User-Agent source.
            session (Optional[requests.Session]): Session to reuse for requests.
        """
        self.settings = settings or ResolverSettings()
        self.session = session or requests.Session()

    def is_reachable(self, domain: str) -> bool:
        """Send a HEAD request to the domain over HTTPS.

        Args:
            domain (str): Domain or URL.

        Returns:
            bool: True for a response with status below 400; any error is False.
        """
        url = domain if domain.startswith(("http://", "https://")) else f"https://{domain}"
        try:
            response = self.session.head(
                url,
                headers={"User-Agent": self.settings.user_agent},
                timeout=self.settings.http_timeout,
                allow_redirects=True,
            )
        except requests.RequestException as exc:
            LOGGER.debug("HEAD %s failed: %s", url, exc)
            return False
        LOGGER.debug("HEAD %s returned %s", url, response.status_code)
        return response.status_code < 400
