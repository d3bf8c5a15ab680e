from domain_intel import api
from domain_intel import classifier
from domain_intel import runner
from domain_intel import status


def test_api_exports_runner_objects() -> None:
    assert api.run_pipeline is runner.run_pipeline
    assert api.build_report is runner.build_report
    assert api.PipelineRequest is runner.PipelineRequest
    assert api.PipelineResult is runner.PipelineResult
    assert api.IntelligenceReport is runner.IntelligenceReport
    assert api.classify is classifier.classify
    assert api.ExitCodes is status.ExitCodes
    assert api.SearchMethod is status.SearchMethod
    assert api.exit_code_for_method is status.exit_code_for_method


def test_api_all_exports() -> None:
    for name in (
        "run_pipeline",
        "build_report",
        "DomainResolver",
        "ResolutionResult",
        "SearchCandidate",
        "classify",
        "ProviderReport",
        "query_whois",
        "parse_whois",
        "split_registrar",
        "DnsResolver",
        "CachingResolver",
        "DnsLookupError",
        "MissingCredentialsError",
        "FingerprintConfigError",
        "with_provider",
        "list_providers",
        "Confidence",
        "ExitCodes",
    ):
        assert name in api.__all__
        assert hasattr(api, name)
