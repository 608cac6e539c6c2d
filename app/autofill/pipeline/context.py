from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..schemas import Credential, FillScriptOptions, PageFieldCatalog, UriMatchType
from ..services.collaborators import EquivalentDomainLookup, TotpGenerator, UriMatcher
from .assembler import FillScriptAssembler


@dataclass
class FillContext:
    """Everything one fill-script build reads, plus its assembler."""

    catalog: PageFieldCatalog
    credential: Credential
    options: FillScriptOptions
    assembler: FillScriptAssembler
    uri_matcher: UriMatcher
    domain_lookup: EquivalentDomainLookup
    default_uri_match: UriMatchType
    totp_generator: Optional[TotpGenerator] = None
