from __future__ import annotations

import re
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

_INTEGER = re.compile(r"[+-]?[0-9]+")
_INT64_MIN, _INT64_MAX = -(2**63), 2**63 - 1


def lenient_int(value: Any) -> int:
    """Parse an export column as an integer, yielding 0 when it is malformed.

    Only an optional sign followed by ASCII digits is accepted.  Blank cells,
    surrounding whitespace, decimals and words all become ``0``, as do values
    outside the signed 64-bit range.
    """
    if isinstance(value, str) and _INTEGER.fullmatch(value):
        value = int(value)
    elif not isinstance(value, int):
        return 0
    value = int(value)
    return value if _INT64_MIN <= value <= _INT64_MAX else 0


class _ExportRecord(BaseModel):
    model_config = ConfigDict(frozen=True)


class Category(_ExportRecord):
    id: int
    parent: int = 0
    name: str

    @field_validator("id", "parent", mode="before")
    @classmethod
    def _parse_int(cls, v: Any) -> int:
        return lenient_int(v)


class Question(_ExportRecord):
    name: str
    category: int
    id: int
    views: int = 0

    @field_validator("category", "id", "views", mode="before")
    @classmethod
    def _parse_int(cls, v: Any) -> int:
        return lenient_int(v)


class Answer(_ExportRecord):
    question: int
    body: str = ""

    @field_validator("question", mode="before")
    @classmethod
    def _parse_int(cls, v: Any) -> int:
        return lenient_int(v)
