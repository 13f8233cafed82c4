"""
Site customization router — the one branding document.

Endpoints:
    GET  /customizations          Current document (provisioned if missing)
    GET  /customizations/fonts    Selectable font families
    PUT  /customizations          Merge-update (admin)
    POST /customizations/reset    Restore defaults (admin)

Tags:
    showcase, api, router, customization

Doc-Types:
    api-reference
"""

from __future__ import annotations

from typing import Annotated, Any

from fastapi import APIRouter, Body

from showcase.api.deps import Access, CurrentAdmin
from showcase.core.envelope import item_envelope, record_envelope, success_envelope
from showcase.kinds.customization import AVAILABLE_FONTS, CUSTOMIZATION

router = APIRouter(prefix="/customizations")

Payload = Annotated[dict[str, Any], Body()]


@router.get("")
def get_customization(access: Access):
    return item_envelope(CUSTOMIZATION, access.reader.read_singleton(CUSTOMIZATION))


@router.get("/fonts")
def list_fonts():
    return success_envelope({"fonts": list(AVAILABLE_FONTS)})


@router.put("")
def update_customization(access: Access, admin: CurrentAdmin, body: Payload):
    record = access.writer.upsert_singleton(CUSTOMIZATION, None, body)
    return record_envelope(CUSTOMIZATION, record, "Customization updated successfully")


@router.post("/reset")
def reset_customization(access: Access, admin: CurrentAdmin):
    record = access.writer.reset_singleton(CUSTOMIZATION)
    return record_envelope(CUSTOMIZATION, record, "Customization reset to defaults")
