"""Tests for category and KSB reference data."""

import pytest

from otjlog.domain.entities import KSBType
from otjlog.domain.reference import (
    DEFAULT_CATEGORIES,
    DEFAULT_KSBS,
    ReferenceData,
    filter_ksbs,
    remove_ksb,
    toggle_ksb,
)


@pytest.fixture
def reference():
    return ReferenceData()


class TestCategories:
    """Tests for category lookup."""

    def test_default_categories(self, reference):
        assert len(reference.categories) == 6
        assert reference.has_category("Research and self-study")
        assert not reference.has_category("research and self-study")
        assert reference.category_description("Team training sessions") == "Group learning activities"

    def test_resolve_by_number(self, reference):
        assert reference.resolve_category("1") == list(DEFAULT_CATEGORIES)[0]
        assert reference.resolve_category("6") == list(DEFAULT_CATEGORIES)[5]

    def test_resolve_case_insensitive(self, reference):
        assert reference.resolve_category("research AND self-study") == "Research and self-study"

    def test_unresolved_value_is_returned_unchanged(self, reference):
        assert reference.resolve_category("7") == "7"
        assert reference.resolve_category("Gardening") == "Gardening"


class TestKSBs:
    """Tests for KSB lookup and selection."""

    def test_get_ksb_ignores_case(self, reference):
        assert reference.get_ksb("s2").id == "S2"
        assert reference.get_ksb("X9") is None

    def test_filter_by_type(self):
        behaviours = filter_ksbs(DEFAULT_KSBS, ksb_type="Behaviour")
        assert [k.id for k in behaviours] == ["B1", "B2", "B3"]
        assert all(k.type == KSBType.BEHAVIOUR for k in behaviours)

    def test_filter_by_search_matches_id_or_description(self):
        assert [k.id for k in filter_ksbs(DEFAULT_KSBS, search="k2")] == ["K2"]
        assert [k.id for k in filter_ksbs(DEFAULT_KSBS, search="TESTING")] == ["K3"]

    def test_filter_all_types(self):
        assert len(filter_ksbs(DEFAULT_KSBS, ksb_type="All")) == len(DEFAULT_KSBS)
        assert len(filter_ksbs(DEFAULT_KSBS, ksb_type=None)) == len(DEFAULT_KSBS)

    def test_filter_combines_search_and_type(self):
        assert [k.id for k in filter_ksbs(DEFAULT_KSBS, search="code", ksb_type="Skill")] == ["S1"]
        assert filter_ksbs(DEFAULT_KSBS, search="code", ksb_type="Knowledge") == []

    def test_toggle_adds_then_removes(self):
        k1, s1 = DEFAULT_KSBS[0], DEFAULT_KSBS[4]
        selected = toggle_ksb([], k1)
        selected = toggle_ksb(selected, s1)
        assert [k.id for k in selected] == ["K1", "S1"]

        selected = toggle_ksb(selected, k1)
        assert [k.id for k in selected] == ["S1"]

    def test_remove(self):
        selected = list(DEFAULT_KSBS[:3])
        assert [k.id for k in remove_ksb(selected, "K2")] == ["K1", "K3"]
        assert len(selected) == 3
