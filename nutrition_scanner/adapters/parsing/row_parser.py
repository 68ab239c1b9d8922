"""Row parser - groups recognized text into table rows."""

from __future__ import annotations

import logging

from ...application.ports.label_parser import ParsedLabel
from ...domain.entities.observations import TextBox
from ...domain.value_objects.language import LabelLanguage

logger = logging.getLogger(__name__)


class RowLabelParser:
    """Minimal LabelParser: one row per horizontal band of text.

    A box joins the current row when its vertical center falls inside the
    row's vertical extent. Rows are ordered top to bottom, cells left to right.
    """

    def parse(self, text_boxes: list[TextBox], language: LabelLanguage) -> ParsedLabel:
        boxes = sorted(
            (b for b in text_boxes if b.text.strip()),
            key=lambda b: b.bounding_box.center.y
        )

        rows: list[list[TextBox]] = []
        top = bottom = 0.0
        for box in boxes:
            center_y = box.bounding_box.center.y
            if rows and top <= center_y <= bottom:
                rows[-1].append(box)
                top = min(top, box.bounding_box.min_y)
                bottom = max(bottom, box.bounding_box.max_y)
            else:
                rows.append([box])
                top = box.bounding_box.min_y
                bottom = box.bounding_box.max_y

        cells = [
            [b.text.strip() for b in sorted(row, key=lambda b: b.bounding_box.min_x)]
            for row in rows
        ]
        logger.debug(f"Parsed {len(boxes)} text boxes into {len(cells)} rows")
        return ParsedLabel(language=language, rows=cells)
