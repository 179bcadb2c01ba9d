"""
API endpoints for the store template catalog.
"""

from typing import List, Optional

from fastapi import APIRouter, HTTPException

from storefront import templates
from storefront.templates import StoreTemplate

router = APIRouter()


@router.get("", response_model=List[StoreTemplate])
async def list_templates(category: Optional[str] = None):
    return templates.list_templates(category)


@router.get("/{template_id}", response_model=StoreTemplate)
async def get_template(template_id: str):
    template = templates.find_by_id(template_id)
    if template is None:
        raise HTTPException(status_code=404, detail="Template not found")
    return template
