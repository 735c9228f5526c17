from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

SourceType = Literal["pdf", "docx", "txt"]


class ParsedResume(BaseModel):
    source_type: SourceType
    filename: str = ""
    text: str
    parsing_warnings: list[str] = Field(default_factory=list)

    @property
    def text_length(self) -> int:
        """Characters left once surrounding whitespace is stripped."""
        return len(self.text.strip())
