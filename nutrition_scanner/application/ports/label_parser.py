"""Label parser port - turns recognized text into nutrition facts."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol, runtime_checkable

from ...domain.entities.observations import TextBox
from ...domain.value_objects.language import LabelLanguage


@dataclass(frozen=True, slots=True)
class ParsedLabel:
    """Structured result of a label scan."""
    language: LabelLanguage
    rows: list[list[str]] = field(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return len(self.rows) == 0

    def to_dict(self) -> dict:
        return {"language": self.language.value, "rows": [list(r) for r in self.rows]}


@runtime_checkable
class LabelParser(Protocol):
    """Port for tabular nutrition label parsers."""

    def parse(self, text_boxes: list[TextBox], language: LabelLanguage) -> ParsedLabel:
        """Parse accurate-mode text boxes of a cropped label."""
        ...
