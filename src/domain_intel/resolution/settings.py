"""Heuristic constants for domain resolution and their YAML overrides."""

from __future__ import annotations

import dataclasses
import logging
from pathlib import Path
from typing import Optional, Tuple

from ..config import SETTINGS_FILENAME, find_config_file, load_yaml_mapping
from ..errors import ConfigurationError
from ..schema_validation import collect_settings_schema_errors

LOGGER = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36"
DEFAULT_AI_MODEL = "llama-3.3-70b-versatile"

BLACKLIST = (
    "google",
    "r.google",
    "r.bing",
    "bing",
    "facebook",
    "twitter",
    "instagram",
    "youtube",
    "reddit",
    "linkedin",
    "github",
    "stackoverflow",
    "pinterest",
    "medium",
    "quora",
    "tumblr",
    "tiktok",
    "amazon",
    "ebay",
    "aliexpress",
    "walmart",
    "yelp",
    "trustpilot",
    "glassdoor",
    "indeed",
    "github.io",
    "blogspot",
    "wordpress.com",
    "wix.com",
    "weebly.com",
)

COMMON_TLDS = (
    ".com",
    ".org",
    ".net",
    ".gov",
    ".com.au",
    ".org.au",
    ".net.au",
    ".gov.au",
    ".co.uk",
    ".gov.uk",
    ".co.nz",
    ".com.br",
)

FALLBACK_TLDS = (".com", ".com.au", ".co.uk", ".org", ".net")


@dataclasses.dataclass(frozen=True)
class ResolverSettings:
    """Tunable constants used by the resolution stages.

    Attributes:
        validation_threshold (int): Criteria out of three a search result must pass.
        search_match_base (float): Score base when input tokens appear in the domain.
        search_match_step (float): Score added per matching token.
        search_base_score (float): Score when no input token appears in the domain.
        min_token_length (int): Shortest input token considered for matching.
        max_domain_length (int): Longest acceptable search result domain.
        min_first_label_length (int): Shortest acceptable first domain label.
        ai_base_score (float): Score of the first AI candidate.
        ai_score_step (float): Score lost per later AI candidate.
        fallback_score (float): Score of fallback candidates.
        direct_score (float): Score of a verified direct input.
        http_timeout (float): Seconds allowed for reachability and search requests.
        user_agent (str): User-Agent header for outbound HTTP requests.
        ai_model (str): Chat model used for domain inference.
        common_tlds (Tuple[str, ...]): Suffixes that mark input as a domain.
        fallback_tlds (Tuple[str, ...]): Suffixes tried, in order, for fallback guesses.
        blacklist (Tuple[str, ...]): Substrings that disqualify a domain.
    """

    validation_threshold: int = 2
    search_match_base: float = 0.8
    search_match_step: float = 0.1
    search_base_score: float = 0.5
    min_token_length: int = 3
    max_domain_length: int = 50
    min_first_label_length: int = 2
    ai_base_score: float = 0.70
    ai_score_step: float = 0.05
    fallback_score: float = 0.4
    direct_score: float = 1.0
    http_timeout: float = 5.0
    user_agent: str = DEFAULT_USER_AGENT
    ai_model: str = DEFAULT_AI_MODEL
    common_tlds: Tuple[str, ...] = COMMON_TLDS
    fallback_tlds: Tuple[str, ...] = FALLBACK_TLDS
    blacklist: Tuple[str, ...] = BLACKLIST

    def is_blacklisted(self, domain: str) -> bool:
        """Check whether a domain contains any blacklisted substring.

        Args:
            domain (str): Domain to check.

        Returns:
            bool: True when the domain must never be returned.
        """
        lowered = domain.lower()
        return any(blocked in lowered for blocked in self.blacklist)


_FIELD_TYPES = {field.name: str(field.type) for field in dataclasses.fields(ResolverSettings)}


def _coerce_setting(name: str, value: object) -> object:
    """Convert one schema-valid YAML value to the type of a settings field.

    Args:
        name (str): Settings field name.
        value (object): YAML value already checked against the settings schema.

    Returns:
        object: Converted value; suffix and blacklist lists become lowercase tuples.
    """
    declared = _FIELD_TYPES[name]
    if declared.startswith("Tuple"):
        return tuple(item.lower() for item in value)
    if declared == "int":
        return int(value)
    if declared == "float":
        return float(value)
    return value


def settings_from_mapping(data: dict, base: Optional[ResolverSettings] = None) -> ResolverSettings:
    """Apply a mapping of overrides to resolver settings.

    Args:
        data (dict): Field overrides keyed by settings field name.
        base (Optional[ResolverSettings]): Settings to override; defaults to the defaults.

    Returns:
        ResolverSettings: New settings instance.

    Raises:
        ConfigurationError: If a key is unknown or a value is invalid.
    """
    errors = collect_settings_schema_errors(data)
    if errors:
        first = errors[0]
        raise ConfigurationError(
            f"Invalid resolver settings: {first['location']}: {first['message']}"
        )
    base = base or ResolverSettings()
    overrides = {name: _coerce_setting(name, value) for name, value in data.items()}
    return dataclasses.replace(base, **overrides)


def load_settings(path: Optional[Path | str] = None) -> ResolverSettings:
    """Load resolver settings from a YAML file.

    Without an explicit path the first ``settings.yaml`` in the external config
    directories is used; with neither, the defaults are returned.

    Args:
        path (Optional[Path | str]): Settings file path.

    Returns:
        ResolverSettings: Loaded settings.

    Raises:
        ConfigurationError: If the file is missing, unparsable or invalid.
    """
    if path is not None:
        settings_path = Path(path).expanduser()
        if not settings_path.is_file():
            raise ConfigurationError(f"Settings file {settings_path} does not exist")
    else:
        settings_path = find_config_file(SETTINGS_FILENAME)
        if settings_path is None:
            return ResolverSettings()
    LOGGER.info("Loading resolver settings from %s", settings_path)
    return settings_from_mapping(load_yaml_mapping(settings_path))
