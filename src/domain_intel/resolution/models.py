"""Resolution result dataclasses."""

from __future__ import annotations

import dataclasses
from typing import Optional, Tuple

from ..status import Confidence, SearchMethod, confidence_for_method


@dataclasses.dataclass(frozen=True)
class SearchCandidate:
    """A discovered or inferred domain.

    Attributes:
        domain (str): Candidate domain.
        url (str): URL the candidate was found at or would be reached on.
        title (str): Display title.
        snippet (str): Short note on how the candidate was produced.
        relevance_score (float): Score in the range 0 to 1.
    """

    domain: str
    url: str
    title: str
    snippet: str
    relevance_score: float


@dataclasses.dataclass(frozen=True)
class ResolutionResult:
    """Outcome of resolving one input string.

    Attributes:
        original_input (str): Input exactly as supplied.
        search_method (SearchMethod): Stage that produced the result.
        domain (Optional[str]): Canonical domain, None when nothing was found.
        alternatives (Tuple[SearchCandidate, ...]): Candidates considered by the stage.
    """

    original_input: str
    search_method: SearchMethod
    domain: Optional[str] = None
    alternatives: Tuple[SearchCandidate, ...] = ()

    def __post_init__(self) -> None:
        """Check that the domain is set exactly when a result was found.

        Alternatives are stored as a tuple.

        Raises:
            ValueError: If the domain and search method disagree.
        """
        has_domain = self.domain is not None
        if has_domain == (self.search_method is SearchMethod.NO_RESULT):
            raise ValueError("domain must be set unless search_method is no_result")
        object.__setattr__(self, "alternatives", tuple(self.alternatives))

    @property
    def found(self) -> bool:
        """bool: Whether a domain was resolved."""
        return self.search_method is not SearchMethod.NO_RESULT

    @property
    def confidence(self) -> Confidence:
        """Confidence: Confidence tier derived from the search method."""
        return confidence_for_method(self.search_method)

    @classmethod
    def no_result(cls, original_input: str) -> "ResolutionResult":
        """Build an explicit failure result.

        Args:
            original_input (str): Input exactly as supplied.

        Returns:
            ResolutionResult: Result with no domain and no alternatives.
        """
        return cls(original_input=original_input, search_method=SearchMethod.NO_RESULT)
