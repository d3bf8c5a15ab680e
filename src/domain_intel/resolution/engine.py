"""Staged domain resolution modelled as an explicit state machine."""

from __future__ import annotations

import dataclasses
import logging
from enum import Enum
from typing import Callable, Dict, FrozenSet, List, Optional

from ..status import SearchMethod
from .inference import GroqDomainInference, is_rate_limit_error
from .models import ResolutionResult, SearchCandidate
from .normalize import looks_like_domain, normalize_input, squash_name
from .reachability import HttpReachability
from .search import GoogleSearchClient
from .settings import ResolverSettings

LOGGER = logging.getLogger(__name__)

DIRECT_SNIPPET = "Direct input - verified"
AI_SNIPPET = "AI-inferred candidate"
FALLBACK_SNIPPET = "Fallback - name normalized"


class ResolutionState(Enum):
    """States of the resolution pipeline."""

    NORMALIZE = "normalize"
    DIRECT_CHECK = "direct_check"
    AUTHORITATIVE_SEARCH = "authoritative_search"
    VALIDATE_RESULT = "validate_result"
    AI_INFER = "ai_infer"
    FALLBACK_GUESS = "fallback_guess"
    FAIL = "fail"
    DONE = "done"


TRANSITIONS: Dict[ResolutionState, FrozenSet[ResolutionState]] = {
    ResolutionState.NORMALIZE: frozenset({ResolutionState.DIRECT_CHECK, ResolutionState.FAIL}),
    ResolutionState.DIRECT_CHECK: frozenset(
        {ResolutionState.DONE, ResolutionState.AUTHORITATIVE_SEARCH}
    ),
    ResolutionState.AUTHORITATIVE_SEARCH: frozenset(
        {ResolutionState.VALIDATE_RESULT, ResolutionState.AI_INFER}
    ),
    ResolutionState.VALIDATE_RESULT: frozenset({ResolutionState.DONE, ResolutionState.AI_INFER}),
    ResolutionState.AI_INFER: frozenset({ResolutionState.DONE, ResolutionState.FALLBACK_GUESS}),
    ResolutionState.FALLBACK_GUESS: frozenset({ResolutionState.DONE, ResolutionState.FAIL}),
    ResolutionState.FAIL: frozenset({ResolutionState.DONE}),
    ResolutionState.DONE: frozenset(),
}


def candidate_for(domain: str, snippet: str, score: float) -> SearchCandidate:
    """Build a candidate that points at ``https://<domain>``.

    Args:
        domain (str): Candidate domain.
        snippet (str): Provenance note.
        score (float): Relevance score.

    Returns:
        SearchCandidate: Candidate titled with its own domain.
    """
    return SearchCandidate(
        domain=domain,
        url=f"https://{domain}",
        title=domain,
        snippet=snippet,
        relevance_score=score,
    )


def count_validation_criteria(
    candidate: SearchCandidate, reachability: object, settings: ResolverSettings
) -> int:
    """Count the validation criteria a search result passes.

    The criteria are: the domain is reachable, the result has a title, and the
    domain is not blacklisted.

    Args:
        candidate (SearchCandidate): Search result to validate.
        reachability (object): Object with is_reachable(domain) -> bool.
        settings (ResolverSettings): Blacklist source.

    Returns:
        int: Criteria passed, from 0 to 3.
    """
    passed = 0
    if reachability.is_reachable(candidate.domain):
        LOGGER.debug("Criterion passed: %s is accessible", candidate.domain)
        passed += 1
    if candidate.title:
        LOGGER.debug("Criterion passed: search result has a title")
        passed += 1
    if not settings.is_blacklisted(candidate.domain):
        LOGGER.debug("Criterion passed: %s is not blacklisted", candidate.domain)
        passed += 1
    return passed


def validate_search_result(
    candidate: SearchCandidate, reachability: object, settings: ResolverSettings
) -> bool:
    """Accept a search result when enough validation criteria pass.

    Args:
        candidate (SearchCandidate): Search result to validate.
        reachability (object): Object with is_reachable(domain) -> bool.
        settings (ResolverSettings): Threshold and blacklist source.

    Returns:
        bool: True when at least ``validation_threshold`` criteria pass.
    """
    passed = count_validation_criteria(candidate, reachability, settings)
    accepted = passed >= settings.validation_threshold
    LOGGER.info(
        "Validation: %d/3 criteria passed -> %s", passed, "ACCEPTED" if accepted else "REJECTED"
    )
    return accepted


def ai_candidates(domains: List[str], settings: ResolverSettings) -> List[SearchCandidate]:
    """Turn AI-suggested domains into scored candidates.

    Suggestions are normalized, and empty or blacklisted ones are dropped
    before scores are assigned by position.

    Args:
        domains (List[str]): Raw suggestions in model order.
        settings (ResolverSettings): Scoring and blacklist source.

    Returns:
        List[SearchCandidate]: Candidates in suggestion order.
    """
    kept: List[str] = []
    for raw in domains:
        domain = normalize_input(raw)
        if not domain or domain in kept:
            continue
        if settings.is_blacklisted(domain):
            LOGGER.debug("Filtered AI candidate (blacklist): %s", domain)
            continue
        kept.append(domain)
    return [
        candidate_for(
            domain,
            AI_SNIPPET,
            max(settings.ai_base_score - index * settings.ai_score_step, 0.0),
        )
        for index, domain in enumerate(kept)
    ]


def fallback_candidates(name: str, settings: ResolverSettings) -> List[SearchCandidate]:
    """Guess domains by concatenating the name's alphanumeric words.

    Args:
        name (str): Normalized business name.
        settings (ResolverSettings): Fallback TLDs, score and blacklist.

    Returns:
        List[SearchCandidate]: Candidates in TLD order; empty for short names.
    """
    squashed = squash_name(name)
    if len(squashed) < 2:
        return []
    candidates = []
    for tld in settings.fallback_tlds:
        domain = f"{squashed}{tld}"
        if settings.is_blacklisted(domain):
            LOGGER.debug("Filtered fallback candidate (blacklist): %s", domain)
            continue
        candidates.append(candidate_for(domain, FALLBACK_SNIPPET, settings.fallback_score))
    return candidates


@dataclasses.dataclass
class _Run:
    """Mutable state for one resolve call."""

    original_input: str
    normalized: str = ""
    top_result: Optional[SearchCandidate] = None
    result: Optional[ResolutionResult] = None


class DomainResolver:
    """Resolve free-text input to a canonical, reachable domain.

    The resolver keeps no per-call state, so one instance can serve concurrent
    callers as long as its collaborators can.
    """

    def __init__(
        self,
        settings: Optional[ResolverSettings] = None,
        *,
        reachability: Optional[object] = None,
        search: Optional[object] = None,
        inference: Optional[object] = None,
    ) -> None:
        """Initialize the resolver.

        Args:
            settings (Optional[ResolverSettings]): Heuristic constants.
            reachability (Optional[object]): Object with is_reachable(domain) -> bool.
            search (Optional[object]): Object with top_result(name) -> Optional[SearchCandidate].
            inference (Optional[object]): Object with suggest_domains(name) -> List[str];
                None skips AI inference.
        """
        self.settings = settings or ResolverSettings()
        self.reachability = reachability or HttpReachability(self.settings)
        self.search = search or GoogleSearchClient(self.settings)
        self.inference = inference
        self._handlers: Dict[ResolutionState, Callable[[_Run], ResolutionState]] = {
            ResolutionState.NORMALIZE: self._normalize,
            ResolutionState.DIRECT_CHECK: self._direct_check,
            ResolutionState.AUTHORITATIVE_SEARCH: self._authoritative_search,
            ResolutionState.VALIDATE_RESULT: self._validate_result,
            ResolutionState.AI_INFER: self._ai_infer,
            ResolutionState.FALLBACK_GUESS: self._fallback_guess,
            ResolutionState.FAIL: self._fail,
        }

    @classmethod
    def from_env(
        cls, settings: Optional[ResolverSettings] = None, *, use_ai: bool = True
    ) -> "DomainResolver":
        """Build a resolver with live collaborators.

        Args:
            settings (Optional[ResolverSettings]): Heuristic constants.
            use_ai (bool): Whether to enable AI inference.

        Returns:
            DomainResolver: Configured resolver.

        Raises:
            MissingCredentialsError: If AI is enabled and GROQ_API_KEY is unset.
        """
        settings = settings or ResolverSettings()
        inference = GroqDomainInference.from_env(settings) if use_ai else None
        return cls(settings, inference=inference)

    def resolve(self, value: str) -> ResolutionResult:
        """Resolve free-text input to a domain.

        Args:
            value (str): Business name, domain or URL.

        Returns:
            ResolutionResult: Resolved domain with confidence, or an explicit failure.
        """
        run = _Run(original_input=value if value is not None else "")
        state = ResolutionState.NORMALIZE
        LOGGER.info("Resolving input: %s", run.original_input)
        while state is not ResolutionState.DONE:
            next_state = self._handlers[state](run)
            if next_state not in TRANSITIONS[state]:
                raise RuntimeError(f"Invalid transition {state.value} -> {next_state.value}")
            LOGGER.debug("Transition %s -> %s", state.value, next_state.value)
            state = next_state
        return run.result

    def _accept(
        self,
        run: _Run,
        method: SearchMethod,
        domain: str,
        alternatives: List[SearchCandidate],
    ) -> bool:
        """Record a found result unless its domain is blacklisted.

        Args:
            run (_Run): Current run.
            method (SearchMethod): Stage producing the result.
            domain (str): Chosen domain.
            alternatives (List[SearchCandidate]): Candidates to report.

        Returns:
            bool: True when the result was recorded.
        """
        if self.settings.is_blacklisted(domain):
            LOGGER.info("Rejected blacklisted domain %s", domain)
            return False
        run.result = ResolutionResult(
            original_input=run.original_input,
            search_method=method,
            domain=domain,
            alternatives=tuple(alternatives),
        )
        LOGGER.info("Resolved %s via %s", domain, method.value)
        return True

    def _normalize(self, run: _Run) -> ResolutionState:
        """Normalize the input; empty input fails immediately.

        Args:
            run (_Run): Current run.

        Returns:
            ResolutionState: Next state.
        """
        run.normalized = normalize_input(run.original_input)
        LOGGER.debug("Normalized input: %s", run.normalized)
        if not run.normalized:
            return ResolutionState.FAIL
        return ResolutionState.DIRECT_CHECK

    def _direct_check(self, run: _Run) -> ResolutionState:
        """Accept domain-shaped input that is reachable.

        Args:
            run (_Run): Current run.

        Returns:
            ResolutionState: Next state.
        """
        domain = run.normalized
        if not looks_like_domain(domain, self.settings.common_tlds):
            return ResolutionState.AUTHORITATIVE_SEARCH
        if self.settings.is_blacklisted(domain):
            LOGGER.info("Direct input %s is blacklisted, searching instead", domain)
            return ResolutionState.AUTHORITATIVE_SEARCH
        if self.reachability.is_reachable(domain):
            candidate = candidate_for(domain, DIRECT_SNIPPET, self.settings.direct_score)
            if self._accept(run, SearchMethod.DIRECT_COMPLETE, domain, [candidate]):
                return ResolutionState.DONE
        LOGGER.info("Direct validation failed for %s, continuing to search", domain)
        return ResolutionState.AUTHORITATIVE_SEARCH

    def _authoritative_search(self, run: _Run) -> ResolutionState:
        """Run the single official-website search.

        Args:
            run (_Run): Current run.

        Returns:
            ResolutionState: Next state.
        """
        run.top_result = self.search.top_result(run.normalized)
        if run.top_result is None:
            LOGGER.info("No usable search result for %s", run.normalized)
            return ResolutionState.AI_INFER
        return ResolutionState.VALIDATE_RESULT

    def _validate_result(self, run: _Run) -> ResolutionState:
        """Validate the top search result.

        Args:
            run (_Run): Current run.

        Returns:
            ResolutionState: Next state.
        """
        top = run.top_result
        LOGGER.info("Validating top search result: %s", top.domain)
        if validate_search_result(top, self.reachability, self.settings) and self._accept(
            run, SearchMethod.AUTHORITATIVE_SEARCH_VALIDATED, top.domain, [top]
        ):
            return ResolutionState.DONE
        return ResolutionState.AI_INFER

    def _ai_infer(self, run: _Run) -> ResolutionState:
        """Ask the AI collaborator for candidates and accept the first reachable one.

        Args:
            run (_Run): Current run.

        Returns:
            ResolutionState: Next state.
        """
        if self.inference is None:
            LOGGER.debug("AI inference disabled")
            return ResolutionState.FALLBACK_GUESS
        try:
            suggestions = self.inference.suggest_domains(run.normalized)
        except Exception as exc:
            if is_rate_limit_error(exc):
                LOGGER.info("AI inference skipped: rate limit reached")
            else:
                LOGGER.info("AI inference failed: %s", exc)
            return ResolutionState.FALLBACK_GUESS
        candidates = ai_candidates(suggestions, self.settings)
        LOGGER.info("AI inference generated %d candidates", len(candidates))
        for candidate in candidates:
            if self.reachability.is_reachable(candidate.domain):
                if self._accept(run, SearchMethod.AI_INFERENCE, candidate.domain, candidates):
                    return ResolutionState.DONE
            else:
                LOGGER.debug("AI candidate not accessible: %s", candidate.domain)
        return ResolutionState.FALLBACK_GUESS

    def _fallback_guess(self, run: _Run) -> ResolutionState:
        """Validate the first guessed domain built from the name.

        Args:
            run (_Run): Current run.

        Returns:
            ResolutionState: Next state.
        """
        candidates = fallback_candidates(run.normalized, self.settings)
        if not candidates:
            return ResolutionState.FAIL
        best = candidates[0]
        if self.reachability.is_reachable(best.domain) and self._accept(
            run, SearchMethod.FALLBACK_GUESS, best.domain, candidates
        ):
            return ResolutionState.DONE
        return ResolutionState.FAIL

    def _fail(self, run: _Run) -> ResolutionState:
        """Record an explicit failure.

        Args:
            run (_Run): Current run.

        Returns:
            ResolutionState: DONE.
        """
        LOGGER.info("Resolution failed for %s", run.original_input)
        run.result = ResolutionResult.no_result(run.original_input)
        return ResolutionState.DONE
