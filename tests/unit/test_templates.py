"""
Tests for the static template catalog.
"""
import pytest

from storefront import templates


@pytest.mark.unit
class TestTemplateCatalog:

    def test_find_known_template(self):
        template = templates.find_by_id("tech-modern")
        assert template is not None
        assert template.name.en == "Tech Modern"
        assert template.fonts.primary == "Roboto"

    def test_unknown_template_is_none(self):
        assert templates.find_by_id("does-not-exist") is None

    def test_template_ids_are_unique(self):
        ids = [t.id for t in templates.list_templates()]
        assert len(ids) == len(set(ids))

    def test_filter_by_category(self):
        minimal = templates.list_templates("minimal")
        assert [t.id for t in minimal] == ["minimal-clean"]
