"""Search method and confidence constants with exit code mapping."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Union


class SearchMethod(Enum):
    """Pipeline stage that produced a resolution result."""

    DIRECT_COMPLETE = "direct_complete"
    AUTHORITATIVE_SEARCH_VALIDATED = "authoritative_search_validated"
    AI_INFERENCE = "ai_inference"
    FALLBACK_GUESS = "fallback_guess"
    NO_RESULT = "no_result"


class Confidence(Enum):
    """Confidence tier attached to a resolution result."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    NONE = "none"


_CONFIDENCE_BY_METHOD = {
    SearchMethod.DIRECT_COMPLETE: Confidence.HIGH,
    SearchMethod.AUTHORITATIVE_SEARCH_VALIDATED: Confidence.HIGH,
    SearchMethod.AI_INFERENCE: Confidence.MEDIUM,
    SearchMethod.FALLBACK_GUESS: Confidence.LOW,
    SearchMethod.NO_RESULT: Confidence.NONE,
}


@dataclass(frozen=True)
class ExitCodes:
    """Exit codes used by the command-line interface.

    Attributes:
        FOUND (int): Exit code when the input resolved to a domain.
        ERROR (int): Exit code for usage or configuration errors.
        NO_RESULT (int): Exit code when no domain could be resolved.
    """

    FOUND: int = 0
    ERROR: int = 2
    NO_RESULT: int = 3


def coerce_search_method(method: Union[SearchMethod, str]) -> SearchMethod:
    """Normalize a search method string or enum into a SearchMethod value.

    Args:
        method (SearchMethod | str): Search method enum or string value.

    Returns:
        SearchMethod: Normalized value; unknown strings map to NO_RESULT.
    """
    if isinstance(method, SearchMethod):
        return method
    try:
        return SearchMethod(method)
    except ValueError:
        return SearchMethod.NO_RESULT


def confidence_for_method(method: Union[SearchMethod, str]) -> Confidence:
    """Map a search method to its confidence tier.

    Args:
        method (SearchMethod | str): Search method enum or string value.

    Returns:
        Confidence: Confidence tier for the method.
    """
    return _CONFIDENCE_BY_METHOD[coerce_search_method(method)]


def exit_code_for_method(method: Union[SearchMethod, str]) -> int:
    """Map a search method to a CLI exit code.

    Args:
        method (SearchMethod | str): Search method enum or string value.

    Returns:
        int: Exit code for the method.
    """
    if coerce_search_method(method) is SearchMethod.NO_RESULT:
        return ExitCodes.NO_RESULT
    return ExitCodes.FOUND


__all__ = [
    "Confidence",
    "ExitCodes",
    "SearchMethod",
    "coerce_search_method",
    "confidence_for_method",
    "exit_code_for_method",
]
