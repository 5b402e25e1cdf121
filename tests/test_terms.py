"""
Tests for medical terminology and record translation.
"""

import pytest

from medihub.i18n.terms import (
    expand_term,
    translate_label,
    translate_medical_term,
    translate_record,
    translate_terms,
)


class TestExpandTerm:
    def test_known_abbreviations(self):
        assert expand_term("O+") == "O Positive"
        assert expand_term("ICU") == "Intensive Care Unit"
        assert expand_term(" MMR ") == "MMR Vaccine"

    def test_unknown_passes_through(self):
        assert expand_term("Aspirin") == "Aspirin"
        assert expand_term("") == ""


class TestTranslateTerms:
    @pytest.mark.asyncio
    async def test_single_term(self, translator):
        await translator.change_language("es")
        assert await translate_medical_term(translator, "AB-") == "[es] AB Negative"
        assert await translate_medical_term(translator, "") == ""

    @pytest.mark.asyncio
    async def test_terms_in_one_batch(self, translator, provider):
        await translator.change_language("es")
        
        result = await translate_terms(translator, ["BCG", "Polio"])
        
        assert result == ["[es] BCG Vaccine", "[es] Polio Vaccine"]
        assert len(provider.batch_calls) == 1

    @pytest.mark.asyncio
    async def test_label(self, translator):
        await translator.change_language("hi")
        assert await translate_label(translator, "blood_group") == "[hi] Blood Group"
        assert await translate_label(translator, "ward") == "[hi] ward"


class TestTranslateRecord:
    @pytest.mark.asyncio
    async def test_translates_selected_fields(self, translator, provider):
        await translator.change_language("es")
        record = {
            "patient_id": "p1",
            "blood_group": "O+",
            "vaccines": ["MMR", "BCG"],
            "notes": "Fasting required",
            "age": 42,
        }
        
        result = await translate_record(
            translator,
            record,
            fields=["notes", "age"],
            term_fields=["blood_group", "vaccines"],
        )
        
        assert result["translated_notes"] == "[es] Fasting required"
        assert result["translated_blood_group"] == "[es] O Positive"
        assert result["translated_vaccines"] == ["[es] MMR Vaccine", "[es] BCG Vaccine"]
        assert "translated_age" not in result
        assert "translated_patient_id" not in result
        # Whole record in one batch, input untouched
        assert len(provider.batch_calls) == 1
        assert "translated_notes" not in record

    @pytest.mark.asyncio
    async def test_nothing_to_translate(self, translator, provider):
        await translator.change_language("es")
        
        result = await translate_record(translator, {"age": 42}, fields=["age", "missing"])
        
        assert result == {"age": 42}
        assert provider.batch_calls == []
