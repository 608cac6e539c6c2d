from __future__ import annotations

import logging
from typing import Callable, List, Optional

import anyio

from ..field_names import TOTP_FIELD_TYPES, USERNAME_FIELD_NAMES, USERNAME_FIELD_TYPES
from ..schemas import FieldDescriptor, FillScript, PageFieldCatalog, UriMatchType
from ..services.collaborators import TotpGenerator
from .context import FillContext
from .locators import find_totp_field, find_username_field, is_totp_like
from .matching import field_is_fuzzy_match
from .password_fields import load_password_fields
from .trust import in_untrusted_iframe

LOGGER = logging.getLogger(__name__)

Locator = Callable[..., Optional[FieldDescriptor]]


async def fetch_totp_code(generator: Optional[TotpGenerator], seed: Optional[str]) -> Optional[str]:
    if generator is None or not seed:
        return None
    try:
        return await generator.get_code(seed)
    except Exception as exc:  # noqa: BLE001
        LOGGER.warning("TOTP code generation failed: %s", exc)
        return None


def _totp_enabled(ctx: FillContext) -> bool:
    login = ctx.credential.login
    return bool(ctx.options.allow_totp_autofill and login is not None and login.totp)


def _locate(
    locator: Locator,
    catalog: PageFieldCatalog,
    anchor: FieldDescriptor,
    without_form: bool,
    only_visible: bool,
) -> Optional[FieldDescriptor]:
    found = locator(catalog, anchor, False, False, without_form)
    if found is None and not only_visible:
        found = locator(catalog, anchor, True, True, without_form)
    return found


def _collect_companions(
    ctx: FillContext,
    anchor: FieldDescriptor,
    without_form: bool,
    usernames: List[FieldDescriptor],
    totps: List[FieldDescriptor],
) -> None:
    login = ctx.credential.login
    only_visible = ctx.options.only_visible_fields
    if login.username:
        username = _locate(find_username_field, ctx.catalog, anchor, without_form, only_visible)
        if username is not None:
            usernames.append(username)
    if _totp_enabled(ctx):
        totp = _locate(find_totp_field, ctx.catalog, anchor, without_form, only_visible)
        if totp is not None:
            totps.append(totp)


def _is_first_on_page(catalog: PageFieldCatalog, field: FieldDescriptor) -> bool:
    return bool(catalog.fields) and catalog.fields[0].opid == field.opid


async def _fill_totp_fields(ctx: FillContext, totps: List[FieldDescriptor]) -> None:
    assembler = ctx.assembler
    seed = ctx.credential.login.totp
    pending: List[FieldDescriptor] = []
    seen = set()
    for field in totps:
        if field.opid in seen or assembler.is_filled(field):
            continue
        seen.add(field.opid)
        pending.append(field)
    if not pending:
        return
    if ctx.totp_generator is None:
        LOGGER.debug("No TOTP generator configured; skipping %d TOTP field(s)", len(pending))
        return

    if ctx.options.serialize_totp:
        for field in pending:
            assembler.set_field_value(field, await fetch_totp_code(ctx.totp_generator, seed))
        return

    async def _fill_one(field: FieldDescriptor) -> None:
        code = await fetch_totp_code(ctx.totp_generator, seed)
        assembler.set_field_value(field, code)

    async with anyio.create_task_group() as tg:
        for field in pending:
            tg.start_soon(_fill_one, field)


async def build_login_script(ctx: FillContext) -> Optional[FillScript]:
    login = ctx.credential.login
    if login is None:
        return None
    catalog = ctx.catalog
    options = ctx.options
    assembler = ctx.assembler
    script = assembler.script

    script.saved_urls = [uri.uri for uri in login.uris if uri.match != UriMatchType.NEVER]
    script.untrusted_iframe = in_untrusted_iframe(
        catalog.url,
        options.tab_url,
        login,
        ctx.domain_lookup,
        ctx.uri_matcher,
        ctx.default_uri_match,
    )

    password_fields = load_password_fields(
        catalog, False, False, options.only_empty_fields, options.fill_new_password
    )
    if not password_fields and not options.only_visible_fields:
        password_fields = load_password_fields(
            catalog, True, True, options.only_empty_fields, options.fill_new_password
        )

    passwords: List[FieldDescriptor] = []
    usernames: List[FieldDescriptor] = []
    totps: List[FieldDescriptor] = []

    for form_key in catalog.forms:
        form_passwords = [field for field in password_fields if field.form == form_key]
        if not form_passwords:
            continue
        passwords.extend(form_passwords)
        _collect_companions(ctx, form_passwords[0], False, usernames, totps)

    if password_fields and not passwords:
        # Password field outside any form; search the whole page for companions.
        anchor = password_fields[0]
        passwords.append(anchor)
        if not _is_first_on_page(catalog, anchor):
            _collect_companions(ctx, anchor, True, usernames, totps)

    if not password_fields:
        for field in catalog.fields:
            if not field.viewable:
                continue
            if (
                not options.skip_username_only_fill
                and field.type in USERNAME_FIELD_TYPES
                and field_is_fuzzy_match(field, USERNAME_FIELD_NAMES)
            ):
                usernames.append(field)
            if _totp_enabled(ctx) and field.type in TOTP_FIELD_TYPES and is_totp_like(field):
                totps.append(field)

    for field in usernames:
        assembler.set_field_value(field, login.username)
    for field in passwords:
        assembler.set_field_value(field, login.password)
    if _totp_enabled(ctx):
        await _fill_totp_fields(ctx, totps)

    assembler.append_trailing_focus()
    return assembler.build()
