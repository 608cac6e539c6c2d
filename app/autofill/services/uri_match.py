from __future__ import annotations

import logging
import re
from typing import Iterable, Optional, Set
from urllib.parse import urlparse

import tldextract

from ..schemas import LoginData, LoginUri, UriMatchType

LOGGER = logging.getLogger(__name__)

# Bundled public suffix snapshot only; matching never goes to the network.
_EXTRACT = tldextract.TLDExtract(suffix_list_urls=())


def _parse(url: Optional[str]):
    raw = (url or "").strip()
    if not raw:
        return None
    candidate = raw if "://" in raw else f"http://{raw}"
    try:
        return urlparse(candidate)
    except ValueError:
        return None


def get_host(url: Optional[str]) -> Optional[str]:
    parsed = _parse(url)
    if parsed is None or not parsed.hostname:
        return None
    host = parsed.hostname.lower()
    try:
        port = parsed.port
    except ValueError:
        port = None
    if port:
        host = f"{host}:{port}"
    return host


def get_domain(url: Optional[str]) -> Optional[str]:
    """Return the registrable domain for a URL, or its hostname when it has none."""
    parsed = _parse(url)
    if parsed is None or not parsed.hostname:
        return None
    hostname = parsed.hostname.lower().strip(".")
    extracted = _EXTRACT(hostname)
    if extracted.domain and extracted.suffix:
        return f"{extracted.domain}.{extracted.suffix}".lower()
    return hostname


class DefaultUriMatcher:
    """URI match modes for saved login URIs."""

    def matches(
        self,
        login: Optional[LoginData],
        page_url: Optional[str],
        equivalent_domains: Iterable[str],
        default_match: UriMatchType,
    ) -> bool:
        if login is None or not page_url:
            return False
        match_domains: Set[str] = {domain.lower() for domain in equivalent_domains if domain}
        page_domain = get_domain(page_url)
        if page_domain:
            match_domains.add(page_domain)
        return any(
            self.uri_matches(uri, page_url, match_domains, default_match) for uri in login.uris
        )

    def uri_matches(
        self,
        login_uri: LoginUri,
        page_url: str,
        match_domains: Set[str],
        default_match: UriMatchType,
    ) -> bool:
        mode = login_uri.match or default_match
        saved = login_uri.uri
        if not saved:
            return False
        if mode == UriMatchType.DOMAIN:
            domain = get_domain(saved)
            return domain is not None and domain in match_domains
        if mode == UriMatchType.HOST:
            host = get_host(saved)
            return host is not None and host == get_host(page_url)
        if mode == UriMatchType.EXACT:
            return page_url == saved
        if mode == UriMatchType.STARTS_WITH:
            return page_url.startswith(saved)
        if mode == UriMatchType.REGULAR_EXPRESSION:
            try:
                return re.search(saved, page_url, re.IGNORECASE) is not None
            except re.error as exc:
                LOGGER.warning("Invalid saved URI pattern %r: %s", saved, exc)
                return False
        return False
