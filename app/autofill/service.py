from __future__ import annotations

import logging
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .config import CONFIG
from .pipeline.generate import generate_fill_script
from .pipeline.login import fetch_totp_code
from .pipeline.password_fields import get_forms_with_password_fields
from .schemas import (
    AutofillResult,
    Credential,
    CredentialType,
    FillScript,
    FillScriptOptions,
    FormWithPasswords,
    FrameFill,
    PageDetail,
    PageFieldCatalog,
    Tab,
)
from .services.collaborators import EquivalentDomainLookup, TotpGenerator, UriMatcher
from .services.equivalent_domains import EquivalentDomainRegistry
from .services.uri_match import DefaultUriMatcher

LOGGER = logging.getLogger(__name__)


class AutofillError(ValueError):
    pass


class NothingToAutofillError(AutofillError):
    def __init__(self, message: str = "Nothing to auto-fill.") -> None:
        super().__init__(message)


class DidNotAutofillError(AutofillError):
    def __init__(self, message: str = "Did not auto-fill.") -> None:
        super().__init__(message)


class AutofillOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    tab: Optional[Tab] = None
    credential: Optional[Credential] = None
    page_details: List[PageDetail] = Field(default_factory=list, alias="pageDetails")
    skip_username_only_fill: bool = Field(default=False, alias="skipUsernameOnlyFill")
    only_empty_fields: bool = Field(default=False, alias="onlyEmptyFields")
    only_visible_fields: bool = Field(default=False, alias="onlyVisibleFields")
    fill_new_password: bool = Field(default=False, alias="fillNewPassword")
    allow_totp_autofill: bool = Field(default=False, alias="allowTotpAutofill")
    # None means the caller has no opinion; only an explicit False blocks.
    allow_untrusted_iframe: Optional[bool] = Field(default=None, alias="allowUntrustedIframe")
    can_access_premium: bool = Field(default=True, alias="canAccessPremium")
    disable_auto_totp_copy: bool = Field(default=False, alias="disableAutoTotpCopy")
    serialize_totp: bool = Field(default=False, alias="serializeTotp")

    @classmethod
    def for_trigger(cls, from_command: bool, **values) -> "AutofillOptions":
        """Options for a keyboard command (True) or a fill on page load (False)."""
        presets = {
            "skip_username_only_fill": not from_command,
            "only_empty_fields": not from_command,
            "only_visible_fields": not from_command,
            "fill_new_password": from_command,
            "allow_untrusted_iframe": from_command,
            "allow_totp_autofill": from_command,
        }
        presets.update(values)
        return cls(**presets)

    def script_options(self) -> FillScriptOptions:
        return FillScriptOptions(
            skip_username_only_fill=self.skip_username_only_fill,
            only_empty_fields=self.only_empty_fields,
            only_visible_fields=self.only_visible_fields,
            fill_new_password=self.fill_new_password,
            allow_totp_autofill=self.allow_totp_autofill,
            serialize_totp=self.serialize_totp,
            tab_url=self.tab.url if self.tab else None,
        )


class AutofillService:
    def __init__(
        self,
        uri_matcher: Optional[UriMatcher] = None,
        domain_lookup: Optional[EquivalentDomainLookup] = None,
        totp_generator: Optional[TotpGenerator] = None,
    ) -> None:
        self.uri_matcher = uri_matcher or DefaultUriMatcher()
        self.domain_lookup = domain_lookup or EquivalentDomainRegistry()
        self.totp_generator = totp_generator

    def get_forms_with_password_fields(self, catalog: PageFieldCatalog) -> List[FormWithPasswords]:
        return get_forms_with_password_fields(catalog)

    async def generate_fill_script(
        self,
        catalog: Optional[PageFieldCatalog],
        credential: Optional[Credential],
        options: Optional[FillScriptOptions] = None,
    ) -> Optional[FillScript]:
        return await generate_fill_script(
            catalog,
            credential,
            options,
            uri_matcher=self.uri_matcher,
            domain_lookup=self.domain_lookup,
            totp_generator=self.totp_generator,
        )

    async def do_autofill(self, options: AutofillOptions) -> AutofillResult:
        tab = options.tab
        credential = options.credential
        if tab is None or credential is None or not options.page_details:
            raise NothingToAutofillError()

        if not options.can_access_premium and credential.login is not None and credential.login.totp:
            credential = credential.model_copy(
                update={"login": credential.login.model_copy(update={"totp": None})}
            )

        script_options = options.script_options()
        result = AutofillResult()
        for page in options.page_details:
            if page.tab.id != tab.id or page.tab.url != tab.url:
                LOGGER.debug("Skipping frame %s; tab changed", page.frame_id)
                continue
            script = await self.generate_fill_script(page.details, credential, script_options)
            if script is None or not script.script:
                continue
            if script.untrusted_iframe and options.allow_untrusted_iframe is False:
                LOGGER.info("Auto-fill on page load was blocked due to an untrusted iframe.")
                continue
            script.delay_between_actions_ms = CONFIG.fill.delay_between_actions_ms
            result.fills.append(FrameFill(frame_id=page.frame_id, fill_script=script))

        if not result.fills:
            raise DidNotAutofillError()

        if self._copies_totp(credential, options):
            result.totp_code = await fetch_totp_code(self.totp_generator, credential.login.totp)
        return result

    @staticmethod
    def _copies_totp(credential: Credential, options: AutofillOptions) -> bool:
        if credential.type != CredentialType.LOGIN or credential.login is None:
            return False
        if not credential.login.totp or options.disable_auto_totp_copy:
            return False
        return options.can_access_premium or credential.organization_use_totp
