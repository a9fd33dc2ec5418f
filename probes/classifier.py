"""CORS Response Classifier"""

from collections.abc import Mapping

from core.models import CORSHeaderSet, OriginCandidate, ScanResult

# Response header name for each CORSHeaderSet field
CORS_HEADERS = {
    "acao": "Access-Control-Allow-Origin",
    "acac": "Access-Control-Allow-Credentials",
    "acam": "Access-Control-Allow-Methods",
    "acah": "Access-Control-Allow-Headers",
    "acma": "Access-Control-Max-Age",
    "aceh": "Access-Control-Expose-Headers",
}


def extract_cors_headers(headers: Mapping[str, str]) -> CORSHeaderSet:
    """Read the six CORS headers, replacing commas with semicolons"""
    lowered = {key.lower(): value for key, value in headers.items()}
    values = {}
    for field_name, header in CORS_HEADERS.items():
        value = lowered.get(header.lower())
        values[field_name] = value.replace(",", ";") if value else None
    return CORSHeaderSet(**values)


def has_any(header_set: CORSHeaderSet) -> bool:
    return header_set.has_any()


def classify(
    target: str,
    candidate: OriginCandidate,
    headers: Mapping[str, str],
) -> ScanResult | None:
    """Build a ScanResult for a probe response, or None when it has no CORS headers"""
    header_set = extract_cors_headers(headers)
    if not has_any(header_set):
        return None
    return ScanResult(
        url=target,
        origin=candidate.origin,
        headers=header_set,
        strategy=candidate.strategy,
    )
