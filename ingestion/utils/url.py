"""URL canonicalization helpers for article identity and dedup."""

from __future__ import annotations

import hashlib
from typing import Iterable, Optional
from urllib.parse import parse_qsl, urlencode, urljoin, urlparse, urlunparse


TRACKING_QUERY_PARAMS = {
    "gclid",
    "fbclid",
    "mc_cid",
    "mc_eid",
    "ncid",
    "cmpid",
    "ref",
    "ref_src",
    "ref_url",
    "taid",
    "guccounter",
    "soc_src",
    "soc_trk",
}

_DEFAULT_PORTS = {"http": 80, "https": 443}


def _is_tracking(key: str, strip: set[str]) -> bool:
    lowered = key.lower()
    return lowered.startswith("utm_") or lowered in strip


def canonicalize_url(url: str, *, strip_params: Optional[Iterable[str]] = None) -> str:
    """Canonicalize an absolute URL into a dedup key.

    - Lowercase scheme + hostname, drop default ports
    - Remove fragments and trailing slashes
    - Strip tracking query parameters, sort the rest
    """
    if not url:
        return ""
    strip = set(strip_params) if strip_params is not None else TRACKING_QUERY_PARAMS
    p = urlparse(url.strip())
    scheme = (p.scheme or "https").lower()
    host = (p.hostname or "").lower()
    netloc = host
    if p.port is not None and _DEFAULT_PORTS.get(scheme) != p.port:
        netloc = f"{host}:{p.port}"
    path = p.path.rstrip("/")

    kept = [(k, v) for k, v in parse_qsl(p.query, keep_blank_values=True) if not _is_tracking(k, strip)]
    kept.sort(key=lambda kv: (kv[0].lower(), kv[1]))
    query = urlencode(kept, doseq=True)

    return urlunparse((scheme, netloc, path, "", query, ""))


def absolute_http_url(candidate: Optional[str], base: Optional[str] = None) -> Optional[str]:
    """Resolve ``candidate`` against ``base`` and return it only if it is absolute http(s)."""
    if not candidate:
        return None
    text = str(candidate).strip()
    if not text:
        return None
    try:
        resolved = urljoin(base, text) if base else text
        p = urlparse(resolved)
        host = p.hostname
    except ValueError:
        # e.g. unbalanced IPv6 brackets
        return None
    if p.scheme.lower() not in ("http", "https") or not host:
        return None
    return resolved


def article_id(source_id: str, link: str) -> str:
    """Stable article id derived from source id and canonical link."""
    data = (source_id.strip() + "\n" + canonicalize_url(link)).encode("utf-8")
    return hashlib.sha256(data).hexdigest()
