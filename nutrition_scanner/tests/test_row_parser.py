"""Tests for the row label parser."""

from nutrition_scanner.adapters.parsing.row_parser import RowLabelParser
from nutrition_scanner.application.ports.label_parser import LabelParser
from nutrition_scanner.domain.value_objects.language import LabelLanguage


class TestRowLabelParser:
    """Tests for RowLabelParser."""

    def test_is_label_parser(self):
        assert isinstance(RowLabelParser(), LabelParser)

    def test_groups_rows(self, fake):
        texts = [
            fake.text_box("3g", 0.6, 0.2, 0.7, 0.25),
            fake.text_box("Calories", 0.1, 0.1, 0.3, 0.15),
            fake.text_box("  ", 0.1, 0.3, 0.3, 0.35),
            fake.text_box("Fat", 0.1, 0.2, 0.3, 0.25),
            fake.text_box("120", 0.6, 0.11, 0.7, 0.16),
        ]

        parsed = RowLabelParser().parse(texts, LabelLanguage.ENGLISH)

        assert parsed.rows == [["Calories", "120"], ["Fat", "3g"]]
        assert parsed.to_dict() == {
            "language": "english",
            "rows": [["Calories", "120"], ["Fat", "3g"]],
        }

    def test_empty(self):
        parsed = RowLabelParser().parse([], LabelLanguage.FRENCH)
        assert parsed.is_empty
        assert parsed.language == LabelLanguage.FRENCH
