from __future__ import annotations

import json
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

# HelpScout renders these inline in article titles and bodies.
NAME_LINE_BREAK = "</br>"
TEXT_LINE_BREAK = "<br>"


def to_inline_breaks(value: str, marker: str) -> str:
    """Replace every newline in ``value`` with the HTML ``marker``."""
    return value.replace("\r\n", "\n").replace("\n", marker)


class CategoryMapping(BaseModel):
    """Links a HelpJuice category ID to the HelpScout category of the same name."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    source_id: int = Field(0, alias="sourceId")
    destination_id: str = Field(..., alias="destinationId")
    name: str

    @property
    def is_mapped(self) -> bool:
        return self.source_id != 0


class CategoryPayload(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    collection_id: str = Field(..., alias="collectionId")
    name: str

    def to_json(self) -> str:
        return json.dumps(self.model_dump(by_alias=True), ensure_ascii=False)


class Article(BaseModel):
    name: str
    text: str = ""
    categories: list[str] = Field(default_factory=list)

    def to_helpscout_payload(self, collection_id: str) -> dict[str, Any]:
        """Build the body for ``POST /articles`` with HelpScout line breaks."""
        return {
            "collectionId": collection_id,
            "name": to_inline_breaks(self.name, NAME_LINE_BREAK),
            "categories": list(self.categories),
            "text": to_inline_breaks(self.text, TEXT_LINE_BREAK),
        }

    def to_json(self, collection_id: str) -> str:
        return json.dumps(self.to_helpscout_payload(collection_id), ensure_ascii=False)
