"""
JSON report of a decompilation, as printed by `shave report`.
"""

from __future__ import annotations

import json

from pydantic import BaseModel, ConfigDict, Field

from .engine import DecompileResult
from .version import tool_version

PROTOCOL_VERSION = 1


class DecompileReport(BaseModel):
    model_config = ConfigDict(populate_by_name=True, frozen=True)

    protocol: int = PROTOCOL_VERSION
    tool_version: str = Field(alias="toolVersion")
    source: str
    revision: str
    template_format: str = Field(alias="format")
    template: str

    @classmethod
    def from_result(cls, result: DecompileResult, source: str) -> "DecompileReport":
        return cls(
            tool_version=tool_version(),
            source=source,
            revision=result.revision,
            template_format=result.format.value,
            template=result.template,
        )

    def to_json(self) -> str:
        """Single-line JSON with camelCase keys; non-ASCII template text is kept as is."""
        return json.dumps(self.model_dump(mode="json", by_alias=True), ensure_ascii=False)


__all__ = ["DecompileReport", "PROTOCOL_VERSION"]
