"""
Supported languages and utilities.

The portals ship twenty languages: the major world languages plus the
Indian languages most of our patients speak. Arabic is the only
right-to-left entry and flips the layout direction when selected.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


DEFAULT_LANGUAGE = "en"


class Language(str, Enum):
    """Supported languages."""
    
    # === World languages ===
    EN = "en"      # English
    ES = "es"      # Spanish
    FR = "fr"      # French
    DE = "de"      # German
    IT = "it"      # Italian
    PT = "pt"      # Portuguese
    RU = "ru"      # Russian
    JA = "ja"      # Japanese
    KO = "ko"      # Korean
    ZH = "zh"      # Chinese
    AR = "ar"      # Arabic - RTL
    
    # === Indian languages ===
    HI = "hi"      # Hindi
    BN = "bn"      # Bengali
    TE = "te"      # Telugu
    TA = "ta"      # Tamil
    MR = "mr"      # Marathi
    GU = "gu"      # Gujarati
    KN = "kn"      # Kannada
    ML = "ml"      # Malayalam
    PA = "pa"      # Punjabi


@dataclass(frozen=True)
class LanguageDescriptor:
    """Static description of a supported language."""
    
    code: str
    name: str
    native_name: str
    rtl: bool = False
    flag: str = ""
    
    def to_dict(self) -> dict[str, object]:
        return {
            "code": self.code,
            "name": self.name,
            "native_name": self.native_name,
            "rtl": self.rtl,
            "flag": self.flag,
        }


LANGUAGE_CONFIG: dict[str, LanguageDescriptor] = {
    d.code: d
    for d in (
        LanguageDescriptor("en", "English", "English", False, "🇺🇸"),
        LanguageDescriptor("es", "Spanish", "Español", False, "🇪🇸"),
        LanguageDescriptor("fr", "French", "Français", False, "🇫🇷"),
        LanguageDescriptor("de", "German", "Deutsch", False, "🇩🇪"),
        LanguageDescriptor("it", "Italian", "Italiano", False, "🇮🇹"),
        LanguageDescriptor("pt", "Portuguese", "Português", False, "🇵🇹"),
        LanguageDescriptor("ru", "Russian", "Русский", False, "🇷🇺"),
        LanguageDescriptor("ja", "Japanese", "日本語", False, "🇯🇵"),
        LanguageDescriptor("ko", "Korean", "한국어", False, "🇰🇷"),
        LanguageDescriptor("zh", "Chinese", "中文", False, "🇨🇳"),
        LanguageDescriptor("ar", "Arabic", "العربية", True, "🇸🇦"),
        LanguageDescriptor("hi", "Hindi", "हिन्दी", False, "🇮🇳"),
        LanguageDescriptor("bn", "Bengali", "বাংলা", False, "🇧🇩"),
        LanguageDescriptor("te", "Telugu", "తెలుగు", False, "🇮🇳"),
        LanguageDescriptor("ta", "Tamil", "தமிழ்", False, "🇮🇳"),
        LanguageDescriptor("mr", "Marathi", "मराठी", False, "🇮🇳"),
        LanguageDescriptor("gu", "Gujarati", "ગુજરાતી", False, "🇮🇳"),
        LanguageDescriptor("kn", "Kannada", "ಕನ್ನಡ", False, "🇮🇳"),
        LanguageDescriptor("ml", "Malayalam", "മലയാളം", False, "🇮🇳"),
        LanguageDescriptor("pa", "Punjabi", "ਪੰਜਾਬੀ", False, "🇮🇳"),
    )
}


# RTL languages (need layout direction flip)
RTL_LANGUAGES: list[Language] = [
    lang for lang in Language if LANGUAGE_CONFIG[lang.value].rtl
]


# All supported (for API)
SUPPORTED_LANGUAGES = list(Language)


LTR_LANGUAGES = [lang for lang in Language if lang not in RTL_LANGUAGES]


# English names people type instead of codes
_NAME_VARIANTS = {
    descriptor.name.lower(): code for code, descriptor in LANGUAGE_CONFIG.items()
}
_NAME_VARIANTS.update({
    "mandarin": "zh",
    "castellano": "es",
    "bangla": "bn",
    "panjabi": "pa",
    # Common misspellings
    "portugese": "pt",
    "malyalam": "ml",
})


# =============================================================================
# Utilities
# =============================================================================


def normalize_language_code(code: str) -> str:
    """Normalize language code to standard form."""
    code = str(code).lower().strip()
    return _NAME_VARIANTS.get(code, code)


def is_supported(code: str) -> bool:
    """Check if a language code is in the registry."""
    return normalize_language_code(code) in LANGUAGE_CONFIG


def get_language_info(code: str) -> LanguageDescriptor:
    """Get the descriptor for a language, falling back to English."""
    return LANGUAGE_CONFIG.get(
        normalize_language_code(code),
        LANGUAGE_CONFIG[DEFAULT_LANGUAGE],
    )


def get_language_name(code: str) -> str:
    """Get human-readable language name."""
    descriptor = LANGUAGE_CONFIG.get(normalize_language_code(code))
    return descriptor.name if descriptor else code


def is_rtl(code: str) -> bool:
    """Check if language is right-to-left."""
    descriptor = LANGUAGE_CONFIG.get(normalize_language_code(code))
    return bool(descriptor and descriptor.rtl)


def get_language_by_code(code: str) -> Language | None:
    """Get Language enum by code."""
    try:
        return Language(normalize_language_code(code))
    except ValueError:
        return None


def default_languages() -> list[dict[str, str]]:
    """Registry languages in the remote service's list format."""
    return [
        {"language": code, "name": descriptor.name}
        for code, descriptor in LANGUAGE_CONFIG.items()
    ]
