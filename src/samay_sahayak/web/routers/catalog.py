"""Read-only reference data: techniques and template presets."""

from fastapi import APIRouter

from ...models.technique import TECHNIQUES
from ...models.templates import default_templates

router = APIRouter(tags=["catalog"])


@router.get("/techniques")
async def list_techniques():
    return {"success": True, "techniques": [t.to_dict() for t in TECHNIQUES]}


@router.get("/templates")
async def list_templates():
    return {"success": True, "templates": [t.to_dict() for t in default_templates()]}
