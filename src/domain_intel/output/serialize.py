"""Serialize results into camelCase JSON-ready payloads."""

from __future__ import annotations

from typing import Dict, List, Optional

from ..classifier import DetectedService, ProviderReport
from ..dns_records import DnsRecordSet, DomainCheck, RecordKind
from ..registration import RegistrarName, WhoisLookup, WhoisRecord
from ..registration.models import SCALAR_FIELDS
from ..resolution import ResolutionResult, SearchCandidate


def _camel(name: str) -> str:
    """Convert a snake_case name to camelCase.

    Args:
        name (str): snake_case name.

    Returns:
        str: camelCase name.
    """
    head, *rest = name.split("_")
    return head + "".join(part.capitalize() for part in rest)


def serialize_candidate(candidate: SearchCandidate) -> dict:
    """Serialize a search candidate.

    Args:
        candidate (SearchCandidate): Candidate to serialize.

    Returns:
        dict: Candidate payload.
    """
    return {
        "domain": candidate.domain,
        "url": candidate.url,
        "title": candidate.title,
        "snippet": candidate.snippet,
        "relevanceScore": round(candidate.relevance_score, 4),
    }


def serialize_resolution(result: ResolutionResult) -> dict:
    """Serialize a resolution result.

    Args:
        result (ResolutionResult): Result to serialize.

    Returns:
        dict: Resolution payload.
    """
    return {
        "found": result.found,
        "domain": result.domain,
        "originalInput": result.original_input,
        "alternatives": [serialize_candidate(item) for item in result.alternatives],
        "searchMethod": result.search_method.value,
        "confidence": result.confidence.value,
    }


def _serialize_service(service: DetectedService) -> dict:
    """Serialize a detected service, omitting a missing source.

    Args:
        service (DetectedService): Service to serialize.

    Returns:
        dict: Service payload.
    """
    payload = {"name": service.name, "type": service.type}
    if service.source:
        payload["source"] = service.source
    return payload


def serialize_provider_report(report: ProviderReport) -> dict:
    """Serialize a provider report.

    Args:
        report (ProviderReport): Report to serialize.

    Returns:
        dict: Provider report payload.
    """
    summary = report.summary
    return {
        "emailHost": {
            "provider": report.email_host.provider,
            "mxServers": list(report.email_host.mx_servers),
            "matchedPattern": report.email_host.matched_pattern,
        },
        "dnsProvider": {
            "provider": report.dns_provider.provider,
            "nameservers": list(report.dns_provider.nameservers),
            "matchedPattern": report.dns_provider.matched_pattern,
        },
        "security": {
            "detected": report.security.detected,
            "count": report.security.count,
            "services": [_serialize_service(item) for item in report.security.services],
        },
        "marketing": {
            "detected": report.marketing.detected,
            "count": report.marketing.count,
            "services": [_serialize_service(item) for item in report.marketing.services],
        },
        "authorizedSenders": {
            "providers": list(report.authorized_senders.providers),
            "spfIncludes": list(report.authorized_senders.spf_includes),
        },
        "summary": {
            "totalMXRecords": summary.total_mx_records,
            "totalNSRecords": summary.total_ns_records,
            "totalSPFIncludes": summary.total_spf_includes,
            "securityServicesDetected": summary.security_services_detected,
            "marketingServicesDetected": summary.marketing_services_detected,
            "distinctProviders": summary.distinct_providers,
        },
    }


def serialize_whois_record(record: WhoisRecord) -> dict:
    """Serialize a WHOIS record, omitting absent fields.

    Args:
        record (WhoisRecord): Record to serialize.

    Returns:
        dict: Record payload with only present fields.
    """
    payload: Dict[str, object] = {}
    for name in SCALAR_FIELDS:
        value = getattr(record, name)
        if value:
            payload[_camel(name)] = value
    if record.name_servers:
        payload["nameServers"] = list(record.name_servers)
    if record.hosting_provider:
        payload["hostingProvider"] = record.hosting_provider
    return payload


def serialize_whois_lookup(lookup: WhoisLookup) -> dict:
    """Serialize a WHOIS lookup envelope.

    Args:
        lookup (WhoisLookup): Envelope to serialize.

    Returns:
        dict: Lookup payload with record fields inlined.
    """
    payload: Dict[str, object] = {"success": lookup.success, "domain": lookup.domain}
    if lookup.record is not None:
        payload.update(serialize_whois_record(lookup.record))
    if lookup.error:
        payload["error"] = lookup.error
    return payload


def serialize_registrar(registrar: Optional[RegistrarName]) -> Optional[dict]:
    """Serialize a registrar name split.

    Args:
        registrar (Optional[RegistrarName]): Registrar names.

    Returns:
        Optional[dict]: Payload, or None when absent.
    """
    if registrar is None:
        return None
    payload = {"legalName": registrar.legal_name}
    if registrar.trading_name:
        payload["tradingName"] = registrar.trading_name
    return payload


def serialize_domain_check(check: DomainCheck) -> dict:
    """Serialize a domain existence check.

    Args:
        check (DomainCheck): Check to serialize.

    Returns:
        dict: Check payload.
    """
    payload: Dict[str, object] = {
        "exists": check.exists,
        "status": check.status,
        "domain": check.domain,
    }
    if check.error:
        payload["error"] = check.error
    return payload


def _record_payload(kind: RecordKind, data: object) -> object:
    """Convert parsed records of one kind into JSON-ready values.

    Args:
        kind (RecordKind): Record kind.
        data (object): Parsed records.

    Returns:
        object: JSON-ready records.
    """
    if data is None:
        return None
    if kind is RecordKind.MX:
        return [{"exchange": host, "priority": priority} for host, priority in data]
    if kind is RecordKind.SOA:
        mname, rname, serial = data
        return {"mname": mname, "rname": rname, "serial": serial}
    if kind is RecordKind.SRV:
        return [
            {"priority": priority, "weight": weight, "port": port, "target": target}
            for priority, weight, port, target in data
        ]
    if isinstance(data, (list, tuple)):
        return list(data)
    return data


def serialize_dns_records(records: DnsRecordSet) -> dict:
    """Serialize gathered DNS records keyed by record kind.

    Args:
        records (DnsRecordSet): Records to serialize.

    Returns:
        dict: Per-kind payloads with success, data and error.
    """
    payload: Dict[str, object] = {}
    for kind, lookup in records.lookups.items():
        entry: Dict[str, object] = {"success": lookup.success}
        if lookup.success:
            entry["data"] = _record_payload(kind, lookup.data)
        else:
            entry["error"] = lookup.error
        payload[kind.value] = entry
    return payload


def serialize_provider_list(entries: List[tuple[str, str, str]]) -> List[dict]:
    """Serialize fingerprint listing rows.

    Args:
        entries (List[tuple[str, str, str]]): (table, key, name) rows.

    Returns:
        List[dict]: Listing payload.
    """
    return [{"table": table, "key": key, "name": name} for table, key, name in entries]


def serialize_report(report: object) -> dict:
    """Serialize an intelligence report.

    Args:
        report (object): IntelligenceReport to serialize.

    Returns:
        dict: Report payload; sections that were not produced are omitted.
    """
    payload: Dict[str, object] = {
        "domain": report.domain,
        "reportTime": report.report_time,
        "domainCheck": serialize_domain_check(report.domain_check),
    }
    if report.dns_records is not None:
        payload["dnsRecords"] = serialize_dns_records(report.dns_records)
    if report.providers is not None:
        payload["providers"] = serialize_provider_report(report.providers)
    if report.whois is not None:
        payload["whois"] = serialize_whois_lookup(report.whois)
    registrar = serialize_registrar(report.registrar)
    if registrar is not None:
        payload["registrar"] = registrar
    return payload
