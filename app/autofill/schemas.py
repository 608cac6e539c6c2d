from __future__ import annotations

from enum import Enum
from typing import Annotated, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator


class UriMatchType(str, Enum):
    DOMAIN = "domain"
    HOST = "host"
    STARTS_WITH = "starts_with"
    EXACT = "exact"
    REGULAR_EXPRESSION = "regular_expression"
    NEVER = "never"


class CredentialType(str, Enum):
    LOGIN = "login"
    CARD = "card"
    IDENTITY = "identity"


class CustomFieldType(str, Enum):
    TEXT = "text"
    HIDDEN = "hidden"
    BOOLEAN = "boolean"
    LINKED = "linked"


class FieldDescriptor(BaseModel):
    """One scraped form field. Attribute names follow the page scrape on the wire."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    opid: str
    element_number: int = Field(default=0, alias="elementNumber")
    tag_name: Optional[str] = Field(default=None, alias="tagName")
    type: Optional[str] = None
    html_id: Optional[str] = Field(default=None, alias="htmlID")
    html_name: Optional[str] = Field(default=None, alias="htmlName")
    html_class: Optional[str] = Field(default=None, alias="htmlClass")
    label_left: Optional[str] = Field(default=None, alias="label-left")
    label_right: Optional[str] = Field(default=None, alias="label-right")
    label_top: Optional[str] = Field(default=None, alias="label-top")
    label_tag: Optional[str] = Field(default=None, alias="label-tag")
    label_aria: Optional[str] = Field(default=None, alias="label-aria")
    placeholder: Optional[str] = None
    autocomplete_type: Optional[str] = Field(default=None, alias="autoCompleteType")
    data_stripe: Optional[str] = Field(default=None, alias="data-stripe")
    data_recurly: Optional[str] = Field(default=None, alias="data-recurly")
    value: Optional[str] = None
    max_length: Optional[int] = Field(default=None, alias="maxLength")
    viewable: bool = False
    disabled: bool = False
    readonly: bool = False
    select_info: Optional[List[List[Optional[str]]]] = Field(default=None, alias="selectInfo")
    form: Optional[str] = None

    @field_validator("select_info", mode="before")
    @classmethod
    def _unwrap_options(cls, value):
        # The scrape nests options as {"options": [[value, text], ...]}.
        if isinstance(value, dict):
            return value.get("options")
        return value

    @property
    def is_label_only(self) -> bool:
        return self.tag_name == "span"

    @property
    def select_options(self) -> List[List[Optional[str]]]:
        return list(self.select_info or [])


class FormDescriptor(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    opid: Optional[str] = None
    html_name: Optional[str] = Field(default=None, alias="htmlName")
    html_id: Optional[str] = Field(default=None, alias="htmlID")
    html_action: Optional[str] = Field(default=None, alias="htmlAction")
    html_method: Optional[str] = Field(default=None, alias="htmlMethod")


class PageFieldCatalog(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    url: Optional[str] = None
    forms: Dict[str, FormDescriptor] = Field(default_factory=dict)
    fields: List[FieldDescriptor] = Field(default_factory=list)


class LoginUri(BaseModel):
    uri: str
    match: Optional[UriMatchType] = None


class LoginData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    username: Optional[str] = None
    password: Optional[str] = None
    totp: Optional[str] = None
    uris: List[LoginUri] = Field(default_factory=list)


class CardData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    cardholder_name: Optional[str] = Field(default=None, alias="cardholderName")
    brand: Optional[str] = None
    number: Optional[str] = None
    exp_month: Optional[str] = Field(default=None, alias="expMonth")
    exp_year: Optional[str] = Field(default=None, alias="expYear")
    code: Optional[str] = None


class IdentityData(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: Optional[str] = None
    first_name: Optional[str] = Field(default=None, alias="firstName")
    middle_name: Optional[str] = Field(default=None, alias="middleName")
    last_name: Optional[str] = Field(default=None, alias="lastName")
    address1: Optional[str] = None
    address2: Optional[str] = None
    address3: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = Field(default=None, alias="postalCode")
    country: Optional[str] = None
    company: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    ssn: Optional[str] = None
    username: Optional[str] = None
    passport_number: Optional[str] = Field(default=None, alias="passportNumber")
    license_number: Optional[str] = Field(default=None, alias="licenseNumber")


class CustomField(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    name: Optional[str] = None
    value: Optional[str] = None
    type: CustomFieldType = CustomFieldType.TEXT
    # Name of the credential attribute a linked field mirrors, e.g. "username" or "expMonth".
    linked_id: Optional[str] = Field(default=None, alias="linkedId")


class Credential(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    id: Optional[str] = None
    name: Optional[str] = None
    type: CredentialType
    login: Optional[LoginData] = None
    card: Optional[CardData] = None
    identity: Optional[IdentityData] = None
    fields: List[CustomField] = Field(default_factory=list)
    organization_use_totp: bool = Field(default=False, alias="organizationUseTotp")

    def record(self) -> Optional[BaseModel]:
        if self.type == CredentialType.LOGIN:
            return self.login
        if self.type == CredentialType.CARD:
            return self.card
        if self.type == CredentialType.IDENTITY:
            return self.identity
        return None

    def linked_field_value(self, linked_id: Optional[str]) -> Optional[str]:
        record = self.record()
        if record is None or not linked_id:
            return None
        for name, info in type(record).model_fields.items():
            if linked_id in (name, info.alias):
                value = getattr(record, name)
                return value if isinstance(value, str) else None
        return None


class Click(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: Literal["click"] = "click"
    opid: str

    def to_wire(self) -> List[str]:
        return [self.action, self.opid]


class Focus(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: Literal["focus"] = "focus"
    opid: str

    def to_wire(self) -> List[str]:
        return [self.action, self.opid]


class Fill(BaseModel):
    model_config = ConfigDict(frozen=True)

    action: Literal["fill"] = "fill"
    opid: str
    value: str

    def to_wire(self) -> List[str]:
        return [self.action, self.opid, self.value]


FillAction = Annotated[Union[Click, Focus, Fill], Field(discriminator="action")]


class FillScript(BaseModel):
    script: List[FillAction] = Field(default_factory=list)
    untrusted_iframe: bool = False
    saved_urls: List[str] = Field(default_factory=list)
    delay_between_actions_ms: int = 0

    def fills(self) -> List[Fill]:
        return [action for action in self.script if isinstance(action, Fill)]

    def to_wire(self) -> Dict[str, object]:
        return {
            "script": [action.to_wire() for action in self.script],
            "untrustedIframe": self.untrusted_iframe,
            "savedUrls": list(self.saved_urls),
            "delayBetweenActionsMs": self.delay_between_actions_ms,
        }


class FillScriptOptions(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    skip_username_only_fill: bool = Field(default=False, alias="skipUsernameOnlyFill")
    only_empty_fields: bool = Field(default=False, alias="onlyEmptyFields")
    only_visible_fields: bool = Field(default=False, alias="onlyVisibleFields")
    fill_new_password: bool = Field(default=False, alias="fillNewPassword")
    allow_totp_autofill: bool = Field(default=False, alias="allowTotpAutofill")
    # Fetch TOTP codes one at a time so their Fill actions keep scan order.
    serialize_totp: bool = Field(default=False, alias="serializeTotp")
    tab_url: Optional[str] = Field(default=None, alias="tabUrl")
    default_uri_match: Optional[UriMatchType] = Field(default=None, alias="defaultUriMatch")


class FormWithPasswords(BaseModel):
    form: FormDescriptor
    password: FieldDescriptor
    username: Optional[FieldDescriptor] = None
    passwords: List[FieldDescriptor] = Field(default_factory=list)


class Tab(BaseModel):
    id: Union[int, str]
    url: Optional[str] = None


class PageDetail(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    frame_id: int = Field(default=0, alias="frameId")
    tab: Tab
    details: PageFieldCatalog


class FrameFill(BaseModel):
    frame_id: int
    fill_script: FillScript


class AutofillResult(BaseModel):
    fills: List[FrameFill] = Field(default_factory=list)
    totp_code: Optional[str] = None
