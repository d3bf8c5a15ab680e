"""Resolve free-text business names or partial domains to canonical domains."""

from __future__ import annotations

from .engine import (
    TRANSITIONS,
    DomainResolver,
    ResolutionState,
    ai_candidates,
    count_validation_criteria,
    fallback_candidates,
    validate_search_result,
)
from .inference import GroqDomainInference, is_rate_limit_error, parse_candidate_domains
from .models import ResolutionResult, SearchCandidate
from .normalize import looks_like_domain, normalize_input
from .reachability import HttpReachability
from .search import GoogleSearchClient, parse_top_search_result
from .settings import ResolverSettings, load_settings, settings_from_mapping

__all__ = [
    "DomainResolver",
    "GoogleSearchClient",
    "GroqDomainInference",
    "HttpReachability",
    "ResolutionResult",
    "ResolutionState",
    "ResolverSettings",
    "SearchCandidate",
    "TRANSITIONS",
    "ai_candidates",
    "count_validation_criteria",
    "fallback_candidates",
    "is_rate_limit_error",
    "load_settings",
    "looks_like_domain",
    "normalize_input",
    "parse_candidate_domains",
    "parse_top_search_result",
    "settings_from_mapping",
    "validate_search_result",
]
