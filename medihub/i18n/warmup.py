"""
Cache warming for translations.

Pre-translates the portals' fixed UI strings so the first user to pick a
language doesn't wait on a cold cache.

Two levels:
- warm_translation_cache() fills the remote client's cache for several
  languages (survives language switches).
- warm_single_language() fills the UI cache for the translator's current
  language (cleared on the next switch).

Usage:
    # Warm the remote cache for a few languages
    await warm_translation_cache(client, languages=["hi", "ta", "bn"])
    
    # CLI
    python -m medihub.i18n.warmup --languages hi ta
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Any, Sequence

import yaml

from medihub.i18n.client import TranslationProvider, TranslationServiceError
from medihub.i18n.languages import (
    DEFAULT_LANGUAGE,
    Language,
    get_language_name,
)
from medihub.i18n.translator import Translator

logger = logging.getLogger(__name__)


# =============================================================================
# String catalogs
# =============================================================================


COMMON_STRINGS = [
    # Navigation
    "Dashboard",
    "Sign Out",
    "Sign In",
    "Sign Up",
    "Back to Home",
    
    # Actions
    "Save",
    "Cancel",
    "Edit",
    "Delete",
    "Add",
    "Update",
    "Submit",
    "Close",
    "Confirm",
    
    # Status
    "Loading...",
    "Success",
    "Error",
    "Warning",
    "Information",
    
    # Forms
    "Name",
    "Email",
    "Phone",
    "Address",
    "Date of Birth",
    "Gender",
    
    # Medical
    "Patient",
    "Doctor",
    "Hospital",
    "Lab",
    "Prescription",
    "Medication",
    "Treatment",
    "Diagnosis",
    "Symptoms",
    
    # Time
    "Today",
    "Yesterday",
    "Tomorrow",
    "Date",
    "Time",
    
    # Messages
    "No data found",
    "Please wait...",
    "Try Again",
    "Something went wrong",
    
    # Placeholders
    "Enter name",
    "Enter email",
    "Enter phone number",
    "Select date",
    "Search...",
    
    # Validation
    "This field is required",
    "Please enter a valid email",
    "Please enter a valid phone number",
    
    # Dashboards
    "Patient Records",
    "Medical History",
    "Appointments",
    "Lab Results",
    "Vaccinations",
    
    # Authentication
    "Welcome Back",
    "Create Account",
    "Forgot Password?",
    "Remember Me",
    
    # Profile
    "Personal Information",
    "Contact Information",
    "Medical Information",
    "Emergency Contact",
    
    # Permissions
    "Access Denied",
    "Unauthorized",
    "Permission Required",
]


MEDICAL_SPECIALIZATIONS = [
    "Cardiology",
    "Dermatology",
    "Endocrinology",
    "Gastroenterology",
    "Neurology",
    "Oncology",
    "Orthopedics",
    "Pediatrics",
    "Psychiatry",
    "Radiology",
    "Surgery",
    "Urology",
    "Gynecology",
    "Ophthalmology",
    "ENT (Ear, Nose, Throat)",
    "General Medicine",
    "Family Medicine",
    "Emergency Medicine",
    "Anesthesiology",
    "Pathology",
]


HOSPITAL_TYPES = [
    "General Hospital",
    "Specialty Hospital",
    "Teaching Hospital",
    "Research Hospital",
    "Rehabilitation Center",
    "Psychiatric Hospital",
    "Maternity Hospital",
    "Pediatric Hospital",
    "Cardiac Center",
    "Cancer Center",
    "Trauma Center",
    "Emergency Hospital",
]


LAB_TEST_TYPES = [
    "Blood Test",
    "Urine Test",
    "X-Ray",
    "MRI Scan",
    "CT Scan",
    "Ultrasound",
    "ECG/EKG",
    "Biopsy",
    "Pathology Test",
    "Microbiology Test",
    "Biochemistry Test",
    "Hematology Test",
    "Immunology Test",
    "Genetic Test",
]


UI_STRINGS = COMMON_STRINGS + MEDICAL_SPECIALIZATIONS + HOSPITAL_TYPES + LAB_TEST_TYPES


# Indian languages first: most of our patients
WARM_UP_LANGUAGES: list[Language] = [
    Language.HI,
    Language.BN,
    Language.TE,
    Language.TA,
    Language.MR,
    Language.GU,
    Language.KN,
    Language.ML,
    Language.PA,
]


def _collect_strings(data: Any) -> list[str]:
    """Pull every string out of a YAML document (lists, mappings, scalars)."""
    if isinstance(data, str):
        return [data]
    if isinstance(data, dict):
        return [s for value in data.values() for s in _collect_strings(value)]
    if isinstance(data, list):
        return [s for item in data for s in _collect_strings(item)]
    return []


def load_string_catalogs(catalog_dir: str | Path) -> list[str]:
    """Load extra UI strings from every YAML file in a directory."""
    strings: list[str] = []
    catalog_path = Path(catalog_dir)
    
    if not catalog_path.exists():
        logger.warning(f"String catalog directory not found: {catalog_dir}")
        return strings
    
    for yaml_file in sorted([*catalog_path.glob("*.yaml"), *catalog_path.glob("*.yml")]):
        try:
            with open(yaml_file, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.warning(f"Error loading {yaml_file}: {e}")
            continue
        
        found = _collect_strings(data)
        strings.extend(found)
        logger.info(f"Loaded {len(found)} strings from {yaml_file.name}")
    
    return [s for s in strings if s and s.strip()]


def _unique(texts: Sequence[str]) -> list[str]:
    return list(dict.fromkeys(t for t in texts if t and t.strip()))


# =============================================================================
# Cache Warming
# =============================================================================


async def warm_translation_cache(
    provider: TranslationProvider,
    languages: Sequence[str | Language] | None = None,
    texts: Sequence[str] | None = None,
    catalog_dir: str | Path | None = None,
    source: str = DEFAULT_LANGUAGE,
    batch_size: int = 50,
) -> dict[str, Any]:
    """
    Pre-warm the remote client's cache.
    
    Args:
        provider: Client whose cache gets filled
        languages: Languages to warm (defaults to WARM_UP_LANGUAGES)
        texts: Strings to translate (defaults to UI_STRINGS)
        catalog_dir: Optional directory of extra YAML string catalogs
        source: Language the strings are written in
        batch_size: Texts per batch request
    
    Returns:
        Stats dict with counts
    """
    if languages is None:
        languages = WARM_UP_LANGUAGES
    
    lang_codes = [
        lang.value if isinstance(lang, Language) else str(lang)
        for lang in languages
    ]
    
    all_texts = list(texts) if texts is not None else list(UI_STRINGS)
    if catalog_dir:
        all_texts.extend(load_string_catalogs(catalog_dir))
    all_texts = _unique(all_texts)
    
    stats = {
        "languages": len(lang_codes),
        "texts": len(all_texts),
        "translations": 0,
        "errors": 0,
    }
    
    logger.info(
        f"Warming {len(all_texts)} texts x {len(lang_codes)} languages "
        f"({', '.join(lang_codes)})"
    )
    
    for lang in lang_codes:
        if lang == source:
            continue
        
        for i in range(0, len(all_texts), batch_size):
            batch = all_texts[i:i + batch_size]
            try:
                await provider.fetch_translations(batch, lang, source)
            except TranslationServiceError as e:
                stats["errors"] += 1
                logger.warning(f"Error warming batch for {lang}: {e}")
                continue
            stats["translations"] += len(batch)
        
        logger.info(f"Warmed {get_language_name(lang)} ({lang})")
    
    return stats


async def warm_single_language(
    translator: Translator,
    texts: Sequence[str] | None = None,
) -> int:
    """
    Fill the UI cache for the translator's current language.
    
    Useful right after a language switch. Returns the number of texts that
    were not already cached.
    """
    texts = _unique(texts if texts is not None else UI_STRINGS)
    uncached = [t for t in texts if translator.get_cached(t) == t]
    
    if uncached:
        await translator.t_batch(uncached)
    
    logger.info(
        f"Warmed {get_language_name(translator.current_language)}: "
        f"{len(uncached)} translated, {len(texts) - len(uncached)} already cached"
    )
    return len(uncached)


# =============================================================================
# CLI Entry Point
# =============================================================================


def main():
    """Run cache warm-up from command line."""
    import argparse
    
    from medihub.config import configure_logging, get_settings
    from medihub.i18n.client import RemoteTranslationClient
    
    parser = argparse.ArgumentParser(
        description="Warm translation cache for priority languages"
    )
    parser.add_argument(
        "--languages", "-l",
        nargs="+",
        help="Specific languages to warm (default: Indian languages)"
    )
    parser.add_argument(
        "--all", "-a",
        action="store_true",
        help="Warm ALL supported languages (slow!)"
    )
    parser.add_argument(
        "--catalog-dir",
        default=None,
        help="Directory of extra YAML string catalogs"
    )
    
    args = parser.parse_args()
    
    settings = get_settings()
    configure_logging(settings)
    
    if args.all:
        languages = [lang for lang in Language if lang.value != DEFAULT_LANGUAGE]
    else:
        languages = args.languages
    
    async def run() -> dict[str, Any]:
        client = RemoteTranslationClient.from_settings(settings)
        try:
            return await warm_translation_cache(
                client,
                languages=languages,
                catalog_dir=args.catalog_dir,
            )
        finally:
            await client.aclose()
    
    stats = asyncio.run(run())
    
    print(f"Languages warmed: {stats['languages']}")
    print(f"Unique texts:     {stats['texts']}")
    print(f"Translations:     {stats['translations']}")
    print(f"Errors:           {stats['errors']}")


if __name__ == "__main__":
    main()
