"""
Tests for subdomain slug generation.
"""
from unittest.mock import patch

import pytest

from storefront.services.slug import generate_slug, with_suffix


@pytest.mark.unit
class TestGenerateSlug:

    def test_punctuation_is_collapsed_and_trimmed(self):
        assert generate_slug("My Fashion Store!!") == "my-fashion-store"

    def test_runs_of_separators_become_single_dash(self):
        assert generate_slug("  Tech -- & -- Gadgets  ") == "tech-gadgets"

    def test_accents_are_folded_to_ascii(self):
        assert generate_slug("Café Délice") == "cafe-delice"

    def test_digits_are_kept(self):
        assert generate_slug("Shop 24/7") == "shop-24-7"

    def test_same_name_gives_same_slug(self):
        assert generate_slug("Rose Garden") == generate_slug("Rose Garden")

    @pytest.mark.parametrize("name", ["!!!", "متجر الورود", "", "🌹🌹"])
    def test_untransliterable_name_falls_back_to_timestamp(self, name):
        with patch("storefront.services.slug.time.time", return_value=1700000000.123):
            slug = generate_slug(name)
        assert slug == "store-1700000000123"

    def test_fallback_is_never_empty(self):
        assert generate_slug("؟؟؟") != ""


@pytest.mark.unit
def test_with_suffix():
    assert with_suffix("rose", 1) == "rose"
    assert with_suffix("rose", 2) == "rose-2"
    assert with_suffix("rose", 5) == "rose-5"
