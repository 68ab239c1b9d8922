"""Label languages and the keywords that identify a nutrition panel."""

from __future__ import annotations

from enum import Enum


class LabelLanguage(str, Enum):
    """Supported label languages.

    Declaration order is significant: it breaks ties when scoring.
    """
    ENGLISH = "english"
    GERMAN = "german"
    FRENCH = "french"
    SPANISH = "spanish"
    ITALIAN = "italian"
    DUTCH = "dutch"


# Lowercase substrings that indicate nutrition-facts content
KEYWORDS_BY_LANGUAGE: dict[LabelLanguage, tuple[str, ...]] = {
    LabelLanguage.ENGLISH: (
        "nutrition",
        "calories",
        "energy",
        "total fat",
        "fat",
        "saturated",
        "cholesterol",
        "sodium",
        "carbohydrate",
        "fiber",
        "fibre",
        "sugars",
        "protein",
        "salt",
        "serving",
    ),
    LabelLanguage.GERMAN: (
        "nährwert",
        "brennwert",
        "energie",
        "fett",
        "gesättigte",
        "fettsäuren",
        "kohlenhydrate",
        "zucker",
        "ballaststoffe",
        "eiweiß",
        "salz",
    ),
    LabelLanguage.FRENCH: (
        "valeurs nutritionnelles",
        "énergie",
        "matières grasses",
        "acides gras saturés",
        "glucides",
        "sucres",
        "fibres alimentaires",
        "protéines",
        "sel",
    ),
    LabelLanguage.SPANISH: (
        "información nutricional",
        "valor energético",
        "grasas",
        "saturadas",
        "hidratos de carbono",
        "azúcares",
        "fibra alimentaria",
        "proteínas",
        "sodio",
    ),
    LabelLanguage.ITALIAN: (
        "valori nutrizionali",
        "energia",
        "grassi",
        "acidi grassi saturi",
        "carboidrati",
        "zuccheri",
        "fibre",
        "proteine",
        "sale",
    ),
    LabelLanguage.DUTCH: (
        "voedingswaarde",
        "vetten",
        "verzadigde",
        "koolhydraten",
        "suikers",
        "voedingsvezel",
        "eiwitten",
        "zout",
    ),
}


def keywords_for(language: LabelLanguage) -> tuple[str, ...]:
    """Keywords for a language (empty if the language has none)."""
    return KEYWORDS_BY_LANGUAGE.get(language, ())
