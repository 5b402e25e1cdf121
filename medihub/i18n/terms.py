"""
Medical terminology helpers.

Records coming back from the hospital, lab and vaccination tables carry
short codes ("O+", "MMR", "ICU") that translate badly on their own. These
helpers expand them to plain English first, then hand them to the
translator. Which record fields get translated is up to the caller.
"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping

from medihub.i18n.translator import Translator

logger = logging.getLogger(__name__)


# Abbreviation -> phrase the translation service understands
MEDICAL_TERMS: dict[str, str] = {
    # Blood groups
    "A+": "A Positive",
    "A-": "A Negative",
    "B+": "B Positive",
    "B-": "B Negative",
    "AB+": "AB Positive",
    "AB-": "AB Negative",
    "O+": "O Positive",
    "O-": "O Negative",
    
    # Vaccinations
    "COVID-19": "COVID-19 Vaccine",
    "Influenza": "Influenza Vaccine",
    "Hepatitis B": "Hepatitis B Vaccine",
    "MMR": "MMR Vaccine",
    "Polio": "Polio Vaccine",
    "DPT": "DPT Vaccine",
    "BCG": "BCG Vaccine",
    
    # Departments
    "Emergency": "Emergency Department",
    "ICU": "Intensive Care Unit",
    "OPD": "Outpatient Department",
    "ENT": "Ear, Nose and Throat",
    
    # Tests
    "MRI": "MRI Scan",
    "ECG": "ECG/EKG",
    "CBC": "Complete Blood Count",
}


# Record field name -> display label
FIELD_LABELS: dict[str, str] = {
    "name": "Name",
    "age": "Age",
    "gender": "Gender",
    "blood_group": "Blood Group",
    "contact": "Contact",
    "address": "Address",
    "dob": "Date of Birth",
    "aadhar": "Aadhaar Number",
    "treatment_name": "Treatment",
    "description": "Description",
    "start_date": "Start Date",
    "end_date": "End Date",
    "follow_up_date": "Follow-up Date",
    "vaccine_name": "Vaccine",
    "vaccination_date": "Vaccination Date",
    "next_due": "Next Due",
    "batch_number": "Batch Number",
    "administered_by": "Administered By",
}


def expand_term(term: str) -> str:
    """Expand a known abbreviation; anything else is returned as-is."""
    return MEDICAL_TERMS.get(term.strip(), term) if term else term


async def translate_medical_term(translator: Translator, term: str) -> str:
    """Expand and translate one medical term."""
    if not term:
        return term
    return await translator.t(expand_term(term))


async def translate_terms(translator: Translator, terms: Iterable[str]) -> list[str]:
    """Expand and translate several terms in one batch."""
    return await translator.t_batch([expand_term(t) for t in terms])


async def translate_label(translator: Translator, field_name: str) -> str:
    """Translate the display label of a record field."""
    return await translator.t(FIELD_LABELS.get(field_name, field_name))


async def translate_record(
    translator: Translator,
    record: Mapping[str, Any],
    fields: Iterable[str],
    term_fields: Iterable[str] = (),
) -> dict[str, Any]:
    """
    Translate selected fields of a record.
    
    Returns a copy with ``translated_<field>`` added for every listed field
    that holds text (or a list of texts). Fields in ``term_fields`` are
    expanded through the glossary first. The original record is unchanged.
    
    Args:
        translator: Translator to use
        record: Any mapping (patient, treatment, vaccination row...)
        fields: Free-text fields to translate
        term_fields: Fields holding glossary terms
    """
    result = dict(record)
    terms = list(term_fields)
    
    # Collect every string so the whole record goes out as one batch
    slots: list[tuple[str, int | None]] = []
    texts: list[str] = []
    
    for field_name in dict.fromkeys([*fields, *terms]):
        value = record.get(field_name)
        expand = field_name in terms
        if isinstance(value, str) and value:
            slots.append((field_name, None))
            texts.append(expand_term(value) if expand else value)
        elif isinstance(value, (list, tuple)):
            for i, item in enumerate(value):
                if isinstance(item, str) and item:
                    slots.append((field_name, i))
                    texts.append(expand_term(item) if expand else item)
    
    if not texts:
        return result
    
    translated = await translator.t_batch(texts)
    
    for (field_name, index), value in zip(slots, translated):
        key = f"translated_{field_name}"
        if index is None:
            result[key] = value
        else:
            if key not in result:
                result[key] = list(record[field_name])
            result[key][index] = value
    
    return result
