"""
Internationalization - cached, debounced translation for the MediHub portals.

Design:
1. One Translator per UI tree, built explicitly (no globals)
2. Two caches: a UI cache cleared on language switch, a bounded remote cache
3. Single texts are debounced and deduplicated; groups go in one batch
4. Fail-soft - a failed translation shows the original text

Usage:
    from medihub.i18n import create_translator
    
    translator = create_translator()
    
    await translator.change_language("hi")
    label = await translator.t("Patient Records")
    labels = await translator.t_batch(["Name", "Age", "Blood Group"])
"""

from medihub.i18n.translator import (
    Translator,
    create_translator,
)
from medihub.i18n.client import (
    RemoteTranslationClient,
    TranslationProvider,
    TranslationServiceError,
)
from medihub.i18n.cache import (
    BoundedTranslationCache,
    TranslationCache,
    TranslationKey,
)
from medihub.i18n.state import (
    LanguageStateStore,
    LayoutDirection,
    UnsupportedLanguageError,
)
from medihub.i18n.dispatch import SingleTextDispatcher
from medihub.i18n.batch import (
    BatchDispatcher,
    LabeledOption,
    PlainOption,
)
from medihub.i18n.languages import (
    DEFAULT_LANGUAGE,
    Language,
    LanguageDescriptor,
    LANGUAGE_CONFIG,
    SUPPORTED_LANGUAGES,
    LTR_LANGUAGES,
    RTL_LANGUAGES,
    get_language_info,
    get_language_name,
    is_rtl,
    is_supported,
    normalize_language_code,
)
from medihub.i18n.bindings import (
    TranslatedGroup,
    TranslatedText,
    translate_component_texts,
    translate_form_fields,
)
from medihub.i18n.terms import (
    translate_label,
    translate_medical_term,
    translate_record,
    translate_terms,
)
from medihub.i18n.warmup import (
    UI_STRINGS,
    WARM_UP_LANGUAGES,
    warm_single_language,
    warm_translation_cache,
)

__all__ = [
    # Core translation
    "Translator",
    "create_translator",
    "TranslationProvider",
    "RemoteTranslationClient",
    "TranslationServiceError",
    # Caches
    "TranslationKey",
    "TranslationCache",
    "BoundedTranslationCache",
    # State and dispatch
    "LanguageStateStore",
    "LayoutDirection",
    "UnsupportedLanguageError",
    "SingleTextDispatcher",
    "BatchDispatcher",
    "PlainOption",
    "LabeledOption",
    # Bindings
    "TranslatedText",
    "TranslatedGroup",
    "translate_component_texts",
    "translate_form_fields",
    # Medical records
    "translate_medical_term",
    "translate_terms",
    "translate_label",
    "translate_record",
    # Cache warming
    "UI_STRINGS",
    "WARM_UP_LANGUAGES",
    "warm_translation_cache",
    "warm_single_language",
    # Language utilities
    "DEFAULT_LANGUAGE",
    "Language",
    "LanguageDescriptor",
    "LANGUAGE_CONFIG",
    "SUPPORTED_LANGUAGES",
    "LTR_LANGUAGES",
    "RTL_LANGUAGES",
    "get_language_info",
    "get_language_name",
    "is_rtl",
    "is_supported",
    "normalize_language_code",
]
