from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class NameTable:
    key: str
    names: List[str]
    # Names that may also match as substrings; None allows substrings for every name.
    contains_names: Optional[List[str]] = None
    tier: int = 1


@dataclass(frozen=True)
class PropertySpec:
    attr: str
    group: str


# Property table used by directive matching; the group is the prefix a
# directive such as "label=regex=..." is scoped to.
MATCH_PROPERTIES: List[PropertySpec] = [
    PropertySpec("html_id", "id"),
    PropertySpec("html_name", "name"),
    PropertySpec("label_left", "label"),
    PropertySpec("label_right", "label"),
    PropertySpec("label_tag", "label"),
    PropertySpec("label_aria", "label"),
    PropertySpec("placeholder", "placeholder"),
]

FUZZY_ATTRIBUTES = [
    "html_id",
    "html_name",
    "label_tag",
    "placeholder",
    "label_left",
    "label_top",
    "label_aria",
]

EXCLUDED_AUTOFILL_TYPES = [
    "radio",
    "checkbox",
    "hidden",
    "file",
    "button",
    "image",
    "reset",
    "search",
]

USERNAME_FIELD_TYPES = ("text", "email", "tel")
TOTP_FIELD_TYPES = ("text", "number")
ONE_TIME_CODE_AUTOCOMPLETE = "one-time-code"
NEW_PASSWORD_AUTOCOMPLETE = "new-password"

PASSWORD_FIELD_IGNORE_LIST = [
    "onetimepassword",
    "captcha",
    "findanything",
    "forgot",
]

USERNAME_FIELD_NAMES = [
    # English
    "username",
    "user name",
    "email",
    "email address",
    "e-mail",
    "e-mail address",
    "userid",
    "user id",
    "customer id",
    "login id",
    # German
    "benutzername",
    "benutzer name",
    "email adresse",
    "e-mail adresse",
    "benutzerid",
    "benutzer id",
]

TOTP_FIELD_NAMES = [
    "totp",
    "totpcode",
    "2facode",
    "approvals_code",
    "mfacode",
    "code",
    "mfa",
    "otc",
    "otc-code",
    "otp",
    "otp-code",
    "otpcode",
    "pin",
    "security_code",
    "twofactor",
    "twofa",
    "twofactorcode",
    "verificationcode",
]

# Card

CARD_ATTRIBUTES = [
    "autocomplete_type",
    "data_stripe",
    "html_name",
    "html_id",
    "label_tag",
    "placeholder",
    "label_left",
    "label_top",
    "label_aria",
    "data_recurly",
]

CARD_ATTRIBUTES_EXTENDED = CARD_ATTRIBUTES + ["label_right"]

CARD_HOLDER_FIELD_NAMES = [
    "cc-name",
    "card-name",
    "cardholder-name",
    "cardholder",
    "name",
    "nom",
]

CARD_HOLDER_FIELD_NAME_VALUES = [
    "cc-name",
    "card-name",
    "cardholder-name",
    "cardholder",
    "tbName",
]

CARD_NUMBER_FIELD_NAMES = [
    "cc-number",
    "cc-num",
    "card-number",
    "card-num",
    "number",
    "cc",
    "cc-no",
    "card-no",
    "credit-card",
    "numero-carte",
    "carte",
    "carte-credit",
    "num-carte",
    "cb-num",
]

CARD_NUMBER_FIELD_NAME_VALUES = [
    "cc-number",
    "cc-num",
    "card-number",
    "card-num",
    "cc-no",
    "card-no",
    "numero-carte",
    "num-carte",
    "cb-num",
]

CARD_EXPIRY_FIELD_NAMES = [
    "cc-exp",
    "card-exp",
    "cc-expiration",
    "card-expiration",
    "cc-ex",
    "card-ex",
    "card-expire",
    "card-expiry",
    "validite",
    "expiration",
    "expiry",
    "mm-yy",
    "mm-yyyy",
    "yy-mm",
    "yyyy-mm",
    "expiration-date",
    "payment-card-expiration",
    "payment-cc-date",
]

CARD_EXPIRY_FIELD_NAME_VALUES = [
    "mm-yy",
    "mm-yyyy",
    "yy-mm",
    "yyyy-mm",
    "expiration-date",
    "payment-card-expiration",
]

EXPIRY_MONTH_FIELD_NAMES = [
    "exp-month",
    "cc-exp-month",
    "cc-month",
    "card-month",
    "cc-mo",
    "card-mo",
    "exp-mo",
    "card-exp-mo",
    "cc-exp-mo",
    "card-expiration-month",
    "expiration-month",
    "cc-mm",
    "cc-m",
    "card-mm",
    "card-m",
    "card-exp-mm",
    "cc-exp-mm",
    "exp-mm",
    "exp-m",
    "expire-month",
    "expire-mo",
    "expiry-month",
    "expiry-mo",
    "card-expire-month",
    "card-expire-mo",
    "card-expiry-month",
    "card-expiry-mo",
    "mois-validite",
    "mois-expiration",
    "m-validite",
    "m-expiration",
    "expiry-date-field-month",
    "expiration-date-month",
    "expiration-date-mm",
    "exp-mon",
    "validity-mo",
    "exp-date-mo",
    "cb-date-mois",
    "date-m",
]

EXPIRY_YEAR_FIELD_NAMES = [
    "exp-year",
    "cc-exp-year",
    "cc-year",
    "card-year",
    "cc-yr",
    "card-yr",
    "exp-yr",
    "card-exp-yr",
    "cc-exp-yr",
    "card-expiration-year",
    "expiration-year",
    "cc-yy",
    "cc-y",
    "card-yy",
    "card-y",
    "card-exp-yy",
    "cc-exp-yy",
    "exp-yy",
    "exp-y",
    "cc-yyyy",
    "card-yyyy",
    "card-exp-yyyy",
    "cc-exp-yyyy",
    "expire-year",
    "expire-yr",
    "expiry-year",
    "expiry-yr",
    "card-expire-year",
    "card-expire-yr",
    "card-expiry-year",
    "card-expiry-yr",
    "an-validite",
    "an-expiration",
    "annee-validite",
    "annee-expiration",
    "expiry-date-field-year",
    "expiration-date-year",
    "cb-date-ann",
    "expiration-date-yy",
    "expiration-date-yyyy",
    "validity-year",
    "exp-date-year",
    "date-y",
]

CVV_FIELD_NAMES = [
    "cvv",
    "cvc",
    "cvv2",
    "cc-csc",
    "cc-cvv",
    "card-csc",
    "card-cvv",
    "cvd",
    "cid",
    "cvc2",
    "cnv",
    "cvn2",
    "cc-code",
    "card-code",
    "code-securite",
    "security-code",
    "crypto",
    "card-verif",
    "verification-code",
    "csc",
    "ccv",
]

CARD_BRAND_FIELD_NAMES = [
    "cc-type",
    "card-type",
    "card-brand",
    "cc-brand",
    "cb-type",
]

MONTH_ABBR = ["mm", "mo", "mth", "month"]
YEAR_ABBR_LONG = ["yyyy"]
YEAR_ABBR_SHORT = ["yy", "yr"]

CARD_CATEGORIES: List[NameTable] = [
    NameTable("cardholder_name", CARD_HOLDER_FIELD_NAMES, CARD_HOLDER_FIELD_NAME_VALUES),
    NameTable("number", CARD_NUMBER_FIELD_NAMES, CARD_NUMBER_FIELD_NAME_VALUES),
    NameTable("exp", CARD_EXPIRY_FIELD_NAMES, CARD_EXPIRY_FIELD_NAME_VALUES),
    NameTable("exp_month", EXPIRY_MONTH_FIELD_NAMES),
    NameTable("exp_year", EXPIRY_YEAR_FIELD_NAMES),
    NameTable("code", CVV_FIELD_NAMES),
    NameTable("brand", CARD_BRAND_FIELD_NAMES),
]

# Identity

IDENTITY_ATTRIBUTES = list(CARD_ATTRIBUTES)

FULL_NAME_FIELD_NAMES = ["name", "full-name", "your-name"]
FULL_NAME_FIELD_NAME_VALUES = ["full-name", "your-name"]

ADDRESS_FIELD_NAMES = [
    "address",
    "street-address",
    "addr",
    "street",
    "mailing-addr",
    "billing-addr",
    "mail-addr",
    "bill-addr",
]
ADDRESS_FIELD_NAME_VALUES = ["mailing-addr", "billing-addr", "mail-addr", "bill-addr"]

FIRST_NAME_FIELD_NAMES = ["f-name", "first-name", "given-name", "first-n"]
MIDDLE_NAME_FIELD_NAMES = [
    "m-name",
    "middle-name",
    "additional-name",
    "middle-initial",
    "middle-n",
    "middle-i",
]
LAST_NAME_FIELD_NAMES = [
    "l-name",
    "last-name",
    "s-name",
    "surname",
    "family-name",
    "family-n",
    "last-n",
]
TITLE_FIELD_NAMES = ["honorific-prefix", "prefix", "title"]
EMAIL_FIELD_NAMES = ["e-mail", "email", "email-address"]
ADDRESS1_FIELD_NAMES = ["address-1", "address-line-1", "addr-1", "street-1"]
ADDRESS2_FIELD_NAMES = ["address-2", "address-line-2", "addr-2", "street-2"]
ADDRESS3_FIELD_NAMES = ["address-3", "address-line-3", "addr-3", "street-3"]
POSTAL_CODE_FIELD_NAMES = [
    "postal",
    "zip",
    "zip2",
    "zip-code",
    "postal-code",
    "post-code",
    "address-zip",
    "address-postal",
    "address-code",
    "address-postal-code",
    "address-zip-code",
]
CITY_FIELD_NAMES = ["city", "town", "address-level-2", "address-city", "address-town"]
STATE_FIELD_NAMES = [
    "state",
    "province",
    "provence",
    "address-level-1",
    "address-state",
    "address-province",
]
COUNTRY_FIELD_NAMES = [
    "country",
    "country-code",
    "country-name",
    "address-country",
    "address-country-name",
    "address-country-code",
]
PHONE_FIELD_NAMES = ["phone", "mobile", "mobile-phone", "tel", "telephone", "phone-number"]
IDENTITY_USERNAME_FIELD_NAMES = ["user-name", "user-id", "screen-name"]
COMPANY_FIELD_NAMES = ["company", "company-name", "organization", "organization-name"]

IDENTITY_CATEGORIES: List[NameTable] = [
    NameTable("name", FULL_NAME_FIELD_NAMES, FULL_NAME_FIELD_NAME_VALUES, tier=1),
    NameTable("address", ADDRESS_FIELD_NAMES, ADDRESS_FIELD_NAME_VALUES, tier=1),
    NameTable("first_name", FIRST_NAME_FIELD_NAMES, tier=2),
    NameTable("middle_name", MIDDLE_NAME_FIELD_NAMES, tier=2),
    NameTable("last_name", LAST_NAME_FIELD_NAMES, tier=2),
    NameTable("title", TITLE_FIELD_NAMES, tier=2),
    NameTable("email", EMAIL_FIELD_NAMES, tier=2),
    NameTable("address1", ADDRESS1_FIELD_NAMES, tier=2),
    NameTable("address2", ADDRESS2_FIELD_NAMES, tier=2),
    NameTable("address3", ADDRESS3_FIELD_NAMES, tier=2),
    NameTable("postal_code", POSTAL_CODE_FIELD_NAMES, tier=2),
    NameTable("city", CITY_FIELD_NAMES, tier=2),
    NameTable("state", STATE_FIELD_NAMES, tier=2),
    NameTable("country", COUNTRY_FIELD_NAMES, tier=2),
    NameTable("phone", PHONE_FIELD_NAMES, tier=2),
    NameTable("username", IDENTITY_USERNAME_FIELD_NAMES, tier=2),
    NameTable("company", COMPANY_FIELD_NAMES, tier=2),
]


def iter_identity_categories(tier: int) -> List[NameTable]:
    return [table for table in IDENTITY_CATEGORIES if table.tier == tier]


def field_names_payload() -> Dict[str, object]:
    return {
        "username": USERNAME_FIELD_NAMES,
        "totp": TOTP_FIELD_NAMES,
        "password_ignore": PASSWORD_FIELD_IGNORE_LIST,
        "excluded_types": EXCLUDED_AUTOFILL_TYPES,
        "card": {
            table.key: {"names": table.names, "contains": table.contains_names}
            for table in CARD_CATEGORIES
        },
        "identity": {
            table.key: {"names": table.names, "contains": table.contains_names, "tier": table.tier}
            for table in IDENTITY_CATEGORIES
        },
    }
