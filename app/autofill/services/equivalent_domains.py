from __future__ import annotations

import logging
from typing import Dict, Iterable, List, Optional, Set

import requests

from ..config import CONFIG, resolve_equivalent_domains_url
from .uri_match import get_domain

LOGGER = logging.getLogger(__name__)

DEFAULT_EQUIVALENT_DOMAINS: List[List[str]] = [
    ["google.com", "youtube.com", "gmail.com"],
    ["apple.com", "icloud.com"],
    ["microsoft.com", "live.com", "outlook.com", "office.com", "hotmail.com", "microsoftonline.com"],
    ["amazon.com", "amazon.co.uk", "amazon.ca", "amazon.de", "amazon.fr", "amazon.es", "amazon.it"],
    ["ebay.com", "ebay.co.uk", "ebay.ca", "ebay.de", "ebay.fr"],
    ["paypal.com", "paypal-search.com"],
    ["atlassian.com", "bitbucket.org", "trello.com", "statuspage.io"],
    ["steampowered.com", "steamcommunity.com", "steamgames.com"],
    ["yahoo.com", "flickr.com"],
]


class EquivalentDomainRegistry:
    def __init__(self, groups: Optional[Iterable[Iterable[str]]] = None) -> None:
        source = DEFAULT_EQUIVALENT_DOMAINS if groups is None else groups
        self.groups: List[Set[str]] = []
        for group in source:
            domains = {domain.strip().lower() for domain in group if domain and domain.strip()}
            if domains:
                self.groups.append(domains)

    def domains_for(self, url: Optional[str]) -> Set[str]:
        domain = get_domain(url)
        if not domain:
            return set()
        equivalent: Set[str] = set()
        for group in self.groups:
            if domain in group:
                equivalent |= group
        return equivalent


def parse_domains_payload(payload: Dict) -> List[List[str]]:
    groups: List[List[str]] = []
    for group in payload.get("equivalentDomains") or []:
        if isinstance(group, list) and group:
            groups.append([str(domain) for domain in group])
    for entry in payload.get("globalEquivalentDomains") or []:
        if not isinstance(entry, dict) or entry.get("excluded"):
            continue
        domains = entry.get("domains") or []
        if domains:
            groups.append([str(domain) for domain in domains])
    return groups


def load_equivalent_domains(
    url: Optional[str] = None,
    timeout: Optional[float] = None,
) -> EquivalentDomainRegistry:
    endpoint = resolve_equivalent_domains_url(url)
    if not endpoint:
        return EquivalentDomainRegistry()
    try:
        resp = requests.get(endpoint, timeout=timeout or CONFIG.domains.http_timeout)
        resp.raise_for_status()
        payload = resp.json()
    except Exception as exc:  # noqa: BLE001
        LOGGER.warning("Equivalent domains fetch failed; using built-in groups: %s", exc)
        return EquivalentDomainRegistry()
    if not isinstance(payload, dict):
        LOGGER.warning("Equivalent domains payload is not an object; using built-in groups")
        return EquivalentDomainRegistry()
    return EquivalentDomainRegistry(parse_domains_payload(payload))
