"""Tests for the template registry."""
import pytest

from create_mn_app.core.registry import (
    SUGGESTION_THRESHOLD,
    TemplateRegistry,
    edit_distance,
    get_registry,
)
from create_mn_app.models.template import TemplateDescriptor


def descriptor(name, availability="available"):
    return TemplateDescriptor(name=name, display=name.title(), availability=availability)


class TestEditDistance:
    """Test the Levenshtein distance helper."""

    def test_identical(self):
        assert edit_distance("counter", "counter") == 0

    def test_single_edits(self):
        assert edit_distance("counterr", "counter") == 1
        assert edit_distance("cuonter", "counter") == 2
        assert edit_distance("student", "studnt") == 1

    def test_empty(self):
        assert edit_distance("", "dex") == 3
        assert edit_distance("dex", "") == 3

    def test_symmetric(self):
        assert edit_distance("hello", "yellow") == edit_distance("yellow", "hello")


class TestCatalog:
    """Test the embedded catalog."""

    def test_catalog_order(self):
        names = [t.name for t in get_registry().list(include_unavailable=True)]
        assert names == ["hello-world", "counter", "student", "bboard", "dex", "midnight-kitties"]

    def test_list_hides_coming_soon_by_default(self):
        names = [t.name for t in get_registry().list()]
        assert names == ["hello-world", "counter", "student"]

    def test_counter_descriptor(self):
        counter = get_registry().lookup("counter")
        assert counter.is_remote
        assert counter.repository == "midnightntwrk/example-counter"
        assert counter.minimum_runtime_version == "22"
        assert counter.requires_compiler is True
        assert counter.compiler_version == "0.23.0"
        assert counter.strip_contracts is False

    def test_student_strips_contracts(self):
        assert get_registry().lookup("student").strip_contracts is True

    def test_hello_world_is_bundled(self):
        hello = get_registry().lookup("hello-world")
        assert not hello.is_remote
        assert hello.repository is None
        assert hello.requires_compiler is False

    def test_lookup_unknown(self):
        assert get_registry().lookup("nope") is None

    def test_is_selectable(self):
        registry = get_registry()
        assert registry.is_selectable("counter")
        assert not registry.is_selectable("dex")
        assert not registry.is_selectable("nope")

    def test_from_yaml_rejects_missing_list(self, tmp_path):
        catalog = tmp_path / "catalog.yml"
        catalog.write_text("templates: nope\n")
        with pytest.raises(ValueError, match="templates"):
            TemplateRegistry.from_yaml(catalog)

    def test_duplicate_names_rejected(self):
        with pytest.raises(ValueError, match="Duplicate"):
            TemplateRegistry([descriptor("alpha"), descriptor("alpha")])


class TestSuggest:
    """Test "did you mean" suggestions."""

    def test_typo_suggests_counter(self):
        suggestion = get_registry().suggest("counterr")
        assert suggestion is not None
        assert suggestion.name == "counter"

    def test_case_insensitive(self):
        assert get_registry().suggest("COUNTER").name == "counter"

    def test_threshold_is_inclusive(self):
        registry = TemplateRegistry([descriptor("abcdef")])
        assert SUGGESTION_THRESHOLD == 3
        assert registry.suggest("abcxyz").name == "abcdef"
        assert registry.suggest("abwxyz") is None

    def test_far_input_has_no_suggestion(self):
        assert get_registry().suggest("completely-different") is None

    def test_tie_keeps_catalog_order(self):
        registry = TemplateRegistry([descriptor("aaa"), descriptor("bbb")])
        assert registry.suggest("ab").name == "aaa"

        reversed_registry = TemplateRegistry([descriptor("bbb"), descriptor("aaa")])
        assert reversed_registry.suggest("ab").name == "bbb"

    def test_unavailable_templates_never_suggested(self):
        registry = TemplateRegistry([
            descriptor("dex", availability="coming-soon"),
            descriptor("hello-world"),
        ])
        assert registry.suggest("dexx") is None
        assert get_registry().suggest("dex") is None
