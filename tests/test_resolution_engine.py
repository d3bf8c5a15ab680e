import pytest

from domain_intel.errors import MissingCredentialsError
from domain_intel.resolution import (
    TRANSITIONS,
    DomainResolver,
    ResolutionResult,
    ResolutionState,
    ResolverSettings,
    ai_candidates,
    count_validation_criteria,
    fallback_candidates,
)
from domain_intel.resolution.engine import AI_SNIPPET, DIRECT_SNIPPET, FALLBACK_SNIPPET
from domain_intel.status import Confidence, SearchMethod

from tests.support import FakeInference, FakeReachability, FakeSearch, search_candidate


def _resolver(reachable=(), search_result=None, inference=None, settings=None):
    reachability = FakeReachability(reachable)
    search = FakeSearch(search_result)
    resolver = DomainResolver(
        settings, reachability=reachability, search=search, inference=inference
    )
    return resolver, reachability, search


def test_direct_input_is_accepted_when_reachable():
    resolver, _, search = _resolver(reachable={"example.com"})

    result = resolver.resolve("HTTPS://WWW.Example.COM/path?x=1")

    assert result.search_method is SearchMethod.DIRECT_COMPLETE
    assert result.domain == "example.com"
    assert result.confidence is Confidence.HIGH
    assert result.original_input == "HTTPS://WWW.Example.COM/path?x=1"
    assert [alt.snippet for alt in result.alternatives] == [DIRECT_SNIPPET]
    assert result.alternatives[0].relevance_score == 1.0
    assert search.calls == []


def test_unreachable_direct_input_falls_through_to_search():
    top = search_candidate("example.com.au")
    resolver, reachability, search = _resolver(reachable={"example.com.au"}, search_result=top)

    result = resolver.resolve("example.com")

    assert reachability.calls[0] == "example.com"
    assert search.calls == ["example.com"]
    assert result.search_method is SearchMethod.AUTHORITATIVE_SEARCH_VALIDATED
    assert result.domain == "example.com.au"
    assert result.alternatives == (top,)


def test_business_name_skips_direct_check():
    top = search_candidate("acmewidgets.com")
    resolver, reachability, _ = _resolver(reachable={"acmewidgets.com"}, search_result=top)

    result = resolver.resolve("Acme Widgets")

    assert reachability.calls == ["acmewidgets.com"]
    assert result.domain == "acmewidgets.com"
    assert result.confidence is Confidence.HIGH


def test_search_result_passes_with_two_of_three_criteria():
    top = search_candidate("acmewidgets.com")
    resolver, _, _ = _resolver(reachable=(), search_result=top)

    result = resolver.resolve("Acme Widgets")

    assert result.search_method is SearchMethod.AUTHORITATIVE_SEARCH_VALIDATED
    assert result.domain == "acmewidgets.com"


def test_search_result_with_one_criterion_is_rejected():
    top = search_candidate("acmewidgets.com", title="")
    resolver, _, _ = _resolver(reachable=(), search_result=top)

    result = resolver.resolve("Acme Widgets")

    assert result.search_method is SearchMethod.NO_RESULT
    assert result.domain is None
    assert result.alternatives == ()


def test_blacklisted_search_result_is_never_returned():
    top = search_candidate("facebook.com")
    inference = FakeInference(domains=["acmewidgets.com"])
    resolver, _, _ = _resolver(
        reachable={"facebook.com", "acmewidgets.com"}, search_result=top, inference=inference
    )

    result = resolver.resolve("Acme Widgets")

    assert result.search_method is SearchMethod.AI_INFERENCE
    assert result.domain == "acmewidgets.com"
    assert inference.calls == ["acme widgets"]


def test_blacklisted_direct_input_yields_no_result():
    resolver, reachability, _ = _resolver(reachable={"facebook.com", "facebookcom.com"})

    result = resolver.resolve("facebook.com")

    assert result.search_method is SearchMethod.NO_RESULT
    assert "facebook.com" not in reachability.calls


def test_ai_candidates_are_normalized_filtered_and_scored():
    inference = FakeInference(
        domains=["Acme.com", "acme.com", "linkedin.com/company/acme", "acmewidgets.com.au"]
    )
    resolver, reachability, _ = _resolver(
        reachable={"acmewidgets.com.au"}, inference=inference
    )

    result = resolver.resolve("Acme Widgets")

    assert result.search_method is SearchMethod.AI_INFERENCE
    assert result.confidence is Confidence.MEDIUM
    assert result.domain == "acmewidgets.com.au"
    assert [alt.domain for alt in result.alternatives] == ["acme.com", "acmewidgets.com.au"]
    assert [alt.relevance_score for alt in result.alternatives] == pytest.approx([0.70, 0.65])
    assert {alt.snippet for alt in result.alternatives} == {AI_SNIPPET}
    assert reachability.calls == ["acme.com", "acmewidgets.com.au"]


def test_rate_limited_ai_is_called_once_then_falls_back():
    inference = FakeInference(error=RuntimeError("Error code: 429 - rate_limit_exceeded"))
    resolver, _, _ = _resolver(reachable={"acmewidgets.com"}, inference=inference)

    result = resolver.resolve("Acme Widgets")

    assert inference.calls == ["acme widgets"]
    assert result.search_method is SearchMethod.FALLBACK_GUESS
    assert result.confidence is Confidence.LOW
    assert result.domain == "acmewidgets.com"
    assert [alt.domain for alt in result.alternatives] == [
        "acmewidgets.com",
        "acmewidgets.com.au",
        "acmewidgets.co.uk",
        "acmewidgets.org",
        "acmewidgets.net",
    ]
    assert {alt.snippet for alt in result.alternatives} == {FALLBACK_SNIPPET}


def test_failed_ai_degrades_to_fallback():
    inference = FakeInference(error=ValueError("bad payload"))
    resolver, _, _ = _resolver(reachable={"acmewidgets.com"}, inference=inference)

    result = resolver.resolve("Acme Widgets")

    assert result.search_method is SearchMethod.FALLBACK_GUESS


def test_fallback_only_validates_first_candidate():
    resolver, reachability, _ = _resolver(reachable={"acmewidgets.com.au"})

    result = resolver.resolve("Acme Widgets")

    assert result.search_method is SearchMethod.NO_RESULT
    assert reachability.calls == ["acmewidgets.com"]


def test_empty_input_fails_without_any_lookups():
    resolver, reachability, search = _resolver(reachable={"example.com"})

    result = resolver.resolve("   ")

    assert result.search_method is SearchMethod.NO_RESULT
    assert result.confidence is Confidence.NONE
    assert result.original_input == "   "
    assert reachability.calls == []
    assert search.calls == []


def test_short_names_produce_no_fallback_candidates():
    resolver, _, _ = _resolver()

    assert resolver.resolve("!").search_method is SearchMethod.NO_RESULT
    assert fallback_candidates("a", ResolverSettings()) == []


def test_invalid_transition_raises():
    resolver, _, _ = _resolver()
    resolver._handlers[ResolutionState.NORMALIZE] = lambda _run: ResolutionState.AI_INFER

    with pytest.raises(RuntimeError, match="Invalid transition"):
        resolver.resolve("example.com")


def test_transition_table_covers_every_state():
    assert set(TRANSITIONS) == set(ResolutionState)
    assert TRANSITIONS[ResolutionState.DONE] == frozenset()
    for state, targets in TRANSITIONS.items():
        assert state not in targets


def test_ai_scores_are_floored_at_zero():
    settings = ResolverSettings(ai_score_step=0.5)

    candidates = ai_candidates(["a.com", "b.com", "c.com"], settings)

    assert [item.relevance_score for item in candidates] == pytest.approx([0.70, 0.20, 0.0])


def test_count_validation_criteria():
    settings = ResolverSettings()
    reachable = FakeReachability({"acme.com"})

    assert count_validation_criteria(search_candidate("acme.com"), reachable, settings) == 3
    assert count_validation_criteria(search_candidate("other.com"), reachable, settings) == 2
    assert count_validation_criteria(search_candidate("youtube.com", title=""), reachable, settings) == 0


def test_custom_threshold_requires_all_criteria():
    settings = ResolverSettings(validation_threshold=3)
    top = search_candidate("acmewidgets.com")
    resolver, _, _ = _resolver(reachable=(), search_result=top, settings=settings)

    assert resolver.resolve("Acme Widgets").search_method is SearchMethod.NO_RESULT


def test_from_env_without_ai_skips_inference(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)

    resolver = DomainResolver.from_env(use_ai=False)

    assert resolver.inference is None


def test_from_env_with_ai_requires_credentials(monkeypatch):
    monkeypatch.delenv("GROQ_API_KEY", raising=False)

    with pytest.raises(MissingCredentialsError, match="GROQ_API_KEY"):
        DomainResolver.from_env()


def test_result_alternatives_are_stored_as_tuple():
    candidate = search_candidate("example.com")

    result = ResolutionResult(
        original_input="Example",
        search_method=SearchMethod.FALLBACK_GUESS,
        domain="example.com",
        alternatives=[candidate],
    )

    assert result.alternatives == (candidate,)
