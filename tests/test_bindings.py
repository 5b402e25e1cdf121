"""
Tests for the presentational bindings.
"""

import asyncio

import pytest

from medihub.i18n.bindings import (
    TranslatedGroup,
    TranslatedText,
    translate_component_texts,
    translate_form_fields,
)


class TestTranslatedText:
    @pytest.mark.asyncio
    async def test_renders_original_until_translated(self, translator):
        await translator.change_language("es")
        text = TranslatedText(translator, "Save")
        
        assert text.render() == "Save"
        assert await text.refresh() == "[es] Save"
        assert text.render() == "[es] Save"
        text.close()

    @pytest.mark.asyncio
    async def test_updates_when_another_call_site_translates(self, translator):
        await translator.change_language("es")
        text = TranslatedText(translator, "Save")
        
        await translator.t("Save")
        await asyncio.sleep(0)
        
        assert text.display == "[es] Save"
        assert text.renders >= 1
        text.close()

    @pytest.mark.asyncio
    async def test_ignores_other_texts(self, translator):
        await translator.change_language("es")
        text = TranslatedText(translator, "Save")
        
        await translator.t("Cancel")
        await translator.t_batch(["Delete"])
        
        assert text.display == "Save"
        text.close()

    @pytest.mark.asyncio
    async def test_ignores_same_text_from_another_source(self, translator):
        await translator.change_language("es")
        text = TranslatedText(translator, "Save")
        
        await translator.t("Save", source_language="fr")
        await translator.t_batch(["Save"], source_language="fr")
        
        assert text.display == "Save"
        assert await text.refresh() == "[es] Save"
        text.close()

    @pytest.mark.asyncio
    async def test_picks_up_batch_translations(self, translator):
        await translator.change_language("es")
        text = TranslatedText(translator, "Male")
        
        await translator.t_batch(["Male", "Female"])
        
        assert text.display == "[es] Male"
        text.close()

    @pytest.mark.asyncio
    async def test_language_change_retranslates(self, translator):
        await translator.change_language("es")
        text = TranslatedText(translator, "Save")
        await text.refresh()
        
        await translator.change_language("fr")
        # Original shown while the new translation is pending
        assert text.display == "Save"
        
        assert await text.wait() == "[fr] Save"
        text.close()

    @pytest.mark.asyncio
    async def test_close_unsubscribes(self, translator):
        before = translator.events.subscription_count
        text = TranslatedText(translator, "Save")
        assert translator.events.subscription_count == before + 3
        
        text.close()
        
        assert translator.events.subscription_count == before

    @pytest.mark.asyncio
    async def test_rtl_display_is_formatted(self, translator):
        await translator.change_language("ar")
        text = TranslatedText(translator, "Blood   Group")
        
        assert await text.refresh() == "[ar] Blood Group"
        text.close()


class TestTranslatedGroup:
    @pytest.mark.asyncio
    async def test_refresh_and_render(self, translator, provider):
        await translator.change_language("es")
        group = TranslatedGroup(translator, ["Name", "Age"], separator=" / ")
        
        assert group.render() == "Name / Age"
        assert await group.refresh() == ["[es] Name", "[es] Age"]
        assert group.render() == "[es] Name / [es] Age"
        assert not group.loading
        assert len(provider.batch_calls) == 1

    @pytest.mark.asyncio
    async def test_empty_group(self, translator, provider):
        group = TranslatedGroup(translator, [])
        assert await group.refresh() == []
        assert provider.batch_calls == []


class TestHelpers:
    @pytest.mark.asyncio
    async def test_component_texts(self, translator):
        await translator.change_language("bn")
        
        result = await translate_component_texts(translator, {
            "title": "Patient Records",
            "button": "Save",
        })
        
        assert result == {"title": "[bn] Patient Records", "button": "[bn] Save"}

    @pytest.mark.asyncio
    async def test_component_texts_empty(self, translator):
        assert await translate_component_texts(translator, {}) == {}

    @pytest.mark.asyncio
    async def test_form_fields(self, translator):
        await translator.change_language("te")
        config = {
            "email": {
                "type": "email",
                "label": "Email",
                "placeholder": "Enter email",
                "error_message": "Please enter a valid email",
            },
            "dob": {"type": "date", "label": "Date of Birth"},
        }
        
        result = await translate_form_fields(translator, config)
        
        assert result["email"] == {
            "type": "email",
            "label": "[te] Email",
            "placeholder": "[te] Enter email",
            "error_message": "[te] Please enter a valid email",
        }
        assert result["dob"]["label"] == "[te] Date of Birth"
        # Input untouched
        assert config["email"]["label"] == "Email"
