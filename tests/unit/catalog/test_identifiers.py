"""
Unit tests for app identifier normalisation and the App entity.
"""

import uuid
from types import SimpleNamespace

import pytest

from catalog.domain.app import App, slug_for
from catalog.domain.identifiers import compact, resolve_identifier, slugify
from core.domain.value_objects import AppStatus


def _app(name, slug):
    return SimpleNamespace(name=name, slug=slug)


def _resolve(identifier, apps):
    return resolve_identifier(identifier, apps, lambda a: a.name, lambda a: a.slug)


class TestSlugify:
    """Tests for slugify and compact."""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("Widget Pro", "widget-pro"),
            ("  Widget   Pro!! ", "widget-pro"),
            ("com.example.app", "com-example-app"),
            ("---", ""),
        ],
    )
    def test_slugify(self, value, expected):
        assert slugify(value) == expected

    def test_slugify_cuts_to_120(self):
        assert len(slugify("a" * 300)) == 120

    def test_compact(self):
        assert compact(" Widget-Pro 2 ") == "widgetpro2"

    def test_slug_fallback_uses_id(self):
        app_id = uuid.UUID("12345678-1234-5678-1234-567812345678")
        assert slug_for("!!!", app_id) == "app-12345678"


class TestResolveIdentifier:
    """Tests for priority-ordered app matching."""

    def test_exact_name(self):
        apps = [_app("Widget Pro", "widget-pro")]
        assert _resolve("Widget Pro", apps) is apps[0]

    def test_case_insensitive_name(self):
        apps = [_app("Widget Pro", "widget-pro")]
        assert _resolve("widget pro", apps) is apps[0]

    def test_slug(self):
        apps = [_app("Widget Pro", "widget-pro")]
        assert _resolve("widget-pro", apps) is apps[0]

    def test_compacted_name(self):
        apps = [_app("Widget Pro", "widget-pro")]
        assert _resolve("WIDGETPRO", apps) is apps[0]

    def test_stronger_rule_wins_over_list_order(self):
        loose = _app("widget pro", "widget-pro-1")
        exact = _app("Widget Pro", "widget-pro")
        assert _resolve("Widget Pro", [loose, exact]) is exact

    def test_no_match(self):
        assert _resolve("Gadget", [_app("Widget", "widget")]) is None

    @pytest.mark.parametrize("identifier", ["", "   ", None])
    def test_blank_identifier(self, identifier):
        assert _resolve(identifier, [_app("Widget", "widget")]) is None


class TestAppEntity:
    """Tests for the App entity."""

    def test_create_trims_and_slugs(self):
        app = App.create(name="  Widget Pro  ")

        assert app.name == "Widget Pro"
        assert app.slug == "widget-pro"
        assert app.status == AppStatus.ACTIVE
        assert app.is_active

    def test_create_requires_name(self):
        with pytest.raises(ValueError, match="App name is required"):
            App.create(name="   ")

    def test_rename_updates_slug(self):
        app = App.create(name="Widget").update(name="Gadget Plus")

        assert app.name == "Gadget Plus"
        assert app.slug == "gadget-plus"

    def test_blank_rename_keeps_name(self):
        app = App.create(name="Widget")
        updated = app.update(name="  ", status=AppStatus.INACTIVE)

        assert updated.name == "Widget"
        assert updated.status == AppStatus.INACTIVE
        assert not updated.is_active
