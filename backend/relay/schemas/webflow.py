"""Webflow Schemas — request bodies accepted by the Webflow relay routes.

Invariants:
    - fieldData / customCode must be JSON objects (lists, strings, null rejected → 400)
    - Object contents pass through untouched: Webflow owns their schema
"""

from typing import Any

from pydantic import BaseModel, ConfigDict


class FieldDataBody(BaseModel):
    """Body carrying a fieldData object (page meta, live collection items)."""
    fieldData: dict[str, Any]


class PageContentBody(BaseModel):
    """Page DOM update — fieldData plus optional script/body identifiers."""
    fieldData: dict[str, Any]
    body_id: Any = None
    script_id: Any = None
    script_version: Any = None


class CustomCodeBody(BaseModel):
    customCode: dict[str, Any]


class NewItemFieldData(BaseModel):
    model_config = ConfigDict(extra="allow")

    name: str


class CollectionItemCreate(BaseModel):
    """POST /webflow — only fieldData.name is forwarded."""
    fieldData: NewItemFieldData

    def to_upstream(self) -> dict:
        return {
            "isArchived": False,
            "isDraft": False,
            "fieldData": {"name": self.fieldData.name},
        }
