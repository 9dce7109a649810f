"""
Languages supported by the translation backends.

Codes follow DeepL's identifiers (`FR`, `EN-US`, `PT-BR`). Bundle file names
use the lowercase form with underscores instead (`app_en_us.arb`), so
parsing accepts either separator and any case.
"""

from __future__ import annotations

from enum import Enum

from arbsync.core.errors import InvalidLanguageError


class Lang(str, Enum):
    """Supported languages."""

    AR = "AR"          # Arabic
    BG = "BG"          # Bulgarian
    CS = "CS"          # Czech
    DA = "DA"          # Danish
    DE = "DE"          # German
    EL = "EL"          # Greek
    EN = "EN"          # English
    EN_GB = "EN-GB"    # English (British)
    EN_US = "EN-US"    # English (American)
    ES = "ES"          # Spanish
    ET = "ET"          # Estonian
    FI = "FI"          # Finnish
    FR = "FR"          # French
    HU = "HU"          # Hungarian
    ID = "ID"          # Indonesian
    IT = "IT"          # Italian
    JA = "JA"          # Japanese
    KO = "KO"          # Korean
    LT = "LT"          # Lithuanian
    LV = "LV"          # Latvian
    NB = "NB"          # Norwegian (Bokmål)
    NL = "NL"          # Dutch
    PL = "PL"          # Polish
    PT = "PT"          # Portuguese (all varieties mixed)
    PT_BR = "PT-BR"    # Portuguese (Brazilian)
    PT_PT = "PT-PT"    # Portuguese (excluding Brazilian)
    RO = "RO"          # Romanian
    RU = "RU"          # Russian
    SK = "SK"          # Slovak
    SL = "SL"          # Slovenian
    SV = "SV"          # Swedish
    TR = "TR"          # Turkish
    UK = "UK"          # Ukrainian
    ZH = "ZH"          # Chinese

    def __str__(self) -> str:
        return self.value

    @classmethod
    def parse(cls, code: str) -> Lang:
        """
        Parse a language identifier.

        Accepts `fr`, `FR`, `en-us`, `EN_US` and so on.

        Raises:
            InvalidLanguageError: for unknown identifiers
        """
        normalized = code.strip().upper().replace("_", "-")
        try:
            return cls(normalized)
        except ValueError:
            raise InvalidLanguageError(code) from None

    def file_code(self) -> str:
        """Identifier as used in bundle file names (`en_us`)."""
        return self.value.lower().replace("-", "_")


# Human-readable names, used when prompting language models
LANGUAGE_NAMES: dict[Lang, str] = {
    Lang.AR: "Arabic",
    Lang.BG: "Bulgarian",
    Lang.CS: "Czech",
    Lang.DA: "Danish",
    Lang.DE: "German",
    Lang.EL: "Greek",
    Lang.EN: "English",
    Lang.EN_GB: "English (British)",
    Lang.EN_US: "English (American)",
    Lang.ES: "Spanish",
    Lang.ET: "Estonian",
    Lang.FI: "Finnish",
    Lang.FR: "French",
    Lang.HU: "Hungarian",
    Lang.ID: "Indonesian",
    Lang.IT: "Italian",
    Lang.JA: "Japanese",
    Lang.KO: "Korean",
    Lang.LT: "Lithuanian",
    Lang.LV: "Latvian",
    Lang.NB: "Norwegian (Bokmål)",
    Lang.NL: "Dutch",
    Lang.PL: "Polish",
    Lang.PT: "Portuguese",
    Lang.PT_BR: "Portuguese (Brazilian)",
    Lang.PT_PT: "Portuguese (European)",
    Lang.RO: "Romanian",
    Lang.RU: "Russian",
    Lang.SK: "Slovak",
    Lang.SL: "Slovenian",
    Lang.SV: "Swedish",
    Lang.TR: "Turkish",
    Lang.UK: "Ukrainian",
    Lang.ZH: "Chinese (Simplified)",
}


def get_language_name(lang: Lang | str) -> str:
    """Get human-readable language name."""
    if not isinstance(lang, Lang):
        lang = Lang.parse(lang)
    return LANGUAGE_NAMES.get(lang, lang.value)


def parse_language(code: str) -> Lang | None:
    """Parse a language identifier, returning None when unknown."""
    try:
        return Lang.parse(code)
    except InvalidLanguageError:
        return None
