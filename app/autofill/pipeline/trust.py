from __future__ import annotations

import logging
from typing import Optional

from ..schemas import LoginData, UriMatchType
from ..services.collaborators import EquivalentDomainLookup, UriMatcher

LOGGER = logging.getLogger(__name__)


def in_untrusted_iframe(
    page_url: Optional[str],
    tab_url: Optional[str],
    login: Optional[LoginData],
    domain_lookup: EquivalentDomainLookup,
    uri_matcher: UriMatcher,
    default_match: UriMatchType,
) -> bool:
    """True when the page being filled is not covered by any saved URI.

    A page whose URL equals the tab URL is the top-level document and is
    always trusted, whether or not any URI is saved.
    """
    if page_url == tab_url:
        return False
    if login is None or not page_url:
        return True
    equivalent_domains = domain_lookup.domains_for(page_url)
    if uri_matcher.matches(login, page_url, equivalent_domains, default_match):
        return False
    LOGGER.debug("Page %s does not match any saved URI; marking untrusted", page_url)
    return True
