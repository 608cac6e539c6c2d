from __future__ import annotations

import logging
from typing import Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from .config import CONFIG
from .field_names import field_names_payload
from .schemas import Credential, FillScriptOptions, PageFieldCatalog
from .service import AutofillError, AutofillOptions, AutofillService, DidNotAutofillError
from .services.equivalent_domains import load_equivalent_domains

logging.basicConfig(level=CONFIG.log_level, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
LOGGER = logging.getLogger("autofill")

app = FastAPI(title="Autofill Engine")

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

_SERVICE: Optional[AutofillService] = None


def get_service() -> AutofillService:
    global _SERVICE
    if _SERVICE is None:
        _SERVICE = AutofillService(domain_lookup=load_equivalent_domains())
    return _SERVICE


def _validation_error(exc: ValidationError) -> JSONResponse:
    return JSONResponse(
        {"error": "Invalid payload", "detail": exc.errors(include_url=False, include_context=False)},
        status_code=422,
    )


@app.get("/health")
async def health() -> Dict[str, str]:
    return {"status": "ok"}


@app.get("/field_names")
async def field_names() -> Dict[str, object]:
    return field_names_payload()


@app.post("/fill_script")
async def fill_script(payload: Dict):
    if not isinstance(payload, dict):
        return JSONResponse({"error": "Invalid payload"}, status_code=400)
    if not payload.get("pageDetails") or not payload.get("credential"):
        return JSONResponse({"error": "Missing pageDetails or credential"}, status_code=400)
    try:
        catalog = PageFieldCatalog.model_validate(payload["pageDetails"])
        credential = Credential.model_validate(payload["credential"])
        options = FillScriptOptions.model_validate(payload.get("options") or {})
    except ValidationError as exc:
        return _validation_error(exc)
    if payload.get("tabUrl"):
        options = options.model_copy(update={"tab_url": payload["tabUrl"]})

    script = await get_service().generate_fill_script(catalog, credential, options)
    return JSONResponse({"fillScript": script.to_wire() if script is not None else None})


@app.post("/forms_with_passwords")
async def forms_with_passwords(payload: Dict):
    if not isinstance(payload, dict):
        return JSONResponse({"error": "Invalid payload"}, status_code=400)
    try:
        catalog = PageFieldCatalog.model_validate(payload.get("pageDetails") or payload)
    except ValidationError as exc:
        return _validation_error(exc)
    forms = get_service().get_forms_with_password_fields(catalog)
    return JSONResponse({"forms": [form.model_dump(by_alias=True) for form in forms]})


@app.post("/autofill")
async def autofill(payload: Dict):
    if not isinstance(payload, dict):
        return JSONResponse({"error": "Invalid payload"}, status_code=400)
    request = dict(payload.get("options") or {})
    for key in ("tab", "credential", "pageDetails"):
        if key in payload:
            request[key] = payload[key]
    try:
        options = AutofillOptions.model_validate(request)
    except ValidationError as exc:
        return _validation_error(exc)

    try:
        result = await get_service().do_autofill(options)
    except DidNotAutofillError as exc:
        return JSONResponse({"error": str(exc)}, status_code=409)
    except AutofillError as exc:
        return JSONResponse({"error": str(exc)}, status_code=400)

    LOGGER.info("Autofilled %d frame(s)", len(result.fills))
    return JSONResponse(
        {
            "fills": [
                {"frameId": fill.frame_id, "fillScript": fill.fill_script.to_wire()}
                for fill in result.fills
            ],
            "totpCode": result.totp_code,
        }
    )
