from __future__ import annotations

import logging
from typing import Optional

from ..config import CONFIG
from ..schemas import (
    Credential,
    CredentialType,
    FillScript,
    FillScriptOptions,
    PageFieldCatalog,
    UriMatchType,
)
from ..services.collaborators import EquivalentDomainLookup, TotpGenerator, UriMatcher
from ..services.equivalent_domains import EquivalentDomainRegistry
from ..services.uri_match import DefaultUriMatcher
from .assembler import FillScriptAssembler
from .card import build_card_script
from .context import FillContext
from .custom_fields import fill_custom_fields
from .identity import build_identity_script
from .login import build_login_script

LOGGER = logging.getLogger(__name__)


def resolve_default_uri_match(options: FillScriptOptions) -> UriMatchType:
    if options.default_uri_match is not None:
        return options.default_uri_match
    try:
        return UriMatchType(CONFIG.fill.default_uri_match)
    except ValueError:
        LOGGER.warning("Unknown default URI match %r; using domain", CONFIG.fill.default_uri_match)
        return UriMatchType.DOMAIN


async def generate_fill_script(
    catalog: Optional[PageFieldCatalog],
    credential: Optional[Credential],
    options: Optional[FillScriptOptions] = None,
    uri_matcher: Optional[UriMatcher] = None,
    domain_lookup: Optional[EquivalentDomainLookup] = None,
    totp_generator: Optional[TotpGenerator] = None,
) -> Optional[FillScript]:
    """Build the fill script for one frame's catalog and one credential.

    Custom fields are matched first, then the builder for the credential's
    kind runs against the same assembler. Returns None when there is nothing
    to build from.
    """
    if catalog is None or credential is None:
        return None
    options = options or FillScriptOptions()
    ctx = FillContext(
        catalog=catalog,
        credential=credential,
        options=options,
        assembler=FillScriptAssembler(
            FillScript(delay_between_actions_ms=CONFIG.fill.delay_between_actions_ms)
        ),
        uri_matcher=uri_matcher or DefaultUriMatcher(),
        domain_lookup=domain_lookup or EquivalentDomainRegistry(),
        default_uri_match=resolve_default_uri_match(options),
        totp_generator=totp_generator,
    )

    fill_custom_fields(ctx)

    if credential.type == CredentialType.LOGIN:
        return await build_login_script(ctx)
    if credential.type == CredentialType.CARD:
        return build_card_script(ctx)
    if credential.type == CredentialType.IDENTITY:
        return build_identity_script(ctx)
    return None
