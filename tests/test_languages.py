"""
Tests for the language registry.
"""

import pytest

from medihub.i18n.languages import (
    DEFAULT_LANGUAGE,
    LANGUAGE_CONFIG,
    LTR_LANGUAGES,
    RTL_LANGUAGES,
    SUPPORTED_LANGUAGES,
    Language,
    default_languages,
    get_language_by_code,
    get_language_info,
    get_language_name,
    is_rtl,
    is_supported,
    normalize_language_code,
)


class TestRegistry:
    def test_default_is_english(self):
        assert DEFAULT_LANGUAGE == "en"
        assert DEFAULT_LANGUAGE in LANGUAGE_CONFIG

    def test_every_enum_member_has_a_descriptor(self):
        for lang in Language:
            descriptor = LANGUAGE_CONFIG[lang.value]
            assert descriptor.code == lang.value
            assert descriptor.name
            assert descriptor.native_name

    def test_twenty_languages(self):
        assert len(SUPPORTED_LANGUAGES) == 20
        assert len(LANGUAGE_CONFIG) == 20

    def test_only_arabic_is_rtl(self):
        assert RTL_LANGUAGES == [Language.AR]
        assert Language.AR not in LTR_LANGUAGES
        assert len(LTR_LANGUAGES) == 19

    def test_descriptor_to_dict(self):
        data = LANGUAGE_CONFIG["hi"].to_dict()
        assert data["code"] == "hi"
        assert data["name"] == "Hindi"
        assert data["native_name"] == "हिन्दी"
        assert data["rtl"] is False


class TestLookups:
    @pytest.mark.parametrize("raw,expected", [
        ("ES", "es"),
        ("  fr ", "fr"),
        ("Spanish", "es"),
        ("mandarin", "zh"),
        ("portugese", "pt"),
        ("xx", "xx"),
    ])
    def test_normalize(self, raw, expected):
        assert normalize_language_code(raw) == expected

    def test_is_supported(self):
        assert is_supported("ta")
        assert is_supported("Tamil")
        assert not is_supported("xx")
        assert not is_supported("")

    def test_unknown_code_falls_back_to_english(self):
        assert get_language_info("xx").code == "en"
        assert get_language_info("ar").rtl is True

    def test_get_language_name(self):
        assert get_language_name("bn") == "Bengali"
        assert get_language_name("xx") == "xx"

    def test_is_rtl(self):
        assert is_rtl("ar")
        assert is_rtl("Arabic")
        assert not is_rtl("hi")
        assert not is_rtl("xx")

    def test_get_language_by_code(self):
        assert get_language_by_code("KN") is Language.KN
        assert get_language_by_code("xx") is None

    def test_default_languages_format(self):
        languages = default_languages()
        assert len(languages) == len(LANGUAGE_CONFIG)
        assert {"language": "ml", "name": "Malayalam"} in languages
