from __future__ import annotations

from typing import Optional, Protocol, Set

from ..schemas import LoginData, UriMatchType


class UriMatcher(Protocol):
    def matches(
        self,
        login: LoginData,
        page_url: str,
        equivalent_domains: Set[str],
        default_match: UriMatchType,
    ) -> bool:
        ...


class EquivalentDomainLookup(Protocol):
    def domains_for(self, url: Optional[str]) -> Set[str]:
        ...


class TotpGenerator(Protocol):
    async def get_code(self, seed: str) -> Optional[str]:
        ...
