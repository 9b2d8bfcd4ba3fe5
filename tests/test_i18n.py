"""
Tests for response message translation.
"""

import pytest

from app.core.i18n import TRANSLATIONS, create_translator, get_language, translate


class TestGetLanguage:
    """Language resolution from request headers."""

    def test_default_is_russian(self):
        assert get_language({}) == "ru"

    def test_x_language_header(self):
        assert get_language({"x-language": "uz"}) == "uz"

    def test_x_language_wins_over_accept_language(self):
        assert get_language({"x-language": "en", "accept-language": "uz"}) == "en"

    def test_unsupported_x_language_falls_through(self):
        assert get_language({"x-language": "de", "accept-language": "en-US,en;q=0.9"}) == "en"

    def test_accept_language_primary_subtag(self):
        assert get_language({"accept-language": "uz-Latn-UZ"}) == "uz"

    def test_unsupported_accept_language(self):
        assert get_language({"accept-language": "fr-FR"}) == "ru"


class TestTranslate:
    """Message key lookup with fallbacks."""

    @pytest.mark.parametrize("language", ["ru", "en", "uz"])
    def test_all_languages_share_keys(self, language):
        assert TRANSLATIONS[language].keys() == TRANSLATIONS["ru"].keys()

    def test_known_key(self):
        assert translate("orderCreated", "en") == "Order created"

    def test_unknown_language_uses_russian(self):
        assert translate("orderCreated", "de") == TRANSLATIONS["ru"]["orderCreated"]

    def test_unknown_key_returns_key(self):
        assert translate("noSuchKey", "en") == "noSuchKey"

    def test_translator_bound_to_headers(self):
        t = create_translator({"x-language": "en"})
        assert t("insufficientStock") == "Insufficient stock"
