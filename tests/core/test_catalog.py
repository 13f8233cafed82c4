"""Tests for the static fallback catalog."""

from __future__ import annotations

import pytest

from showcase.core.catalog import CATALOG_TIMESTAMP, find_fallback, get_fallback
from showcase.kinds import ACHIEVEMENTS, ALL_KINDS, CONTACTS, CUSTOMIZATION, SERVICES, TEAM


class TestGetFallback:
    @pytest.mark.parametrize(
        ("kind", "expected"),
        [("achievements", 5), ("content", 4), ("team", 3), ("projects", 2), ("services", 6),
         ("customization", 1), ("contacts", 0)],
    )
    def test_catalog_sizes(self, kind, expected):
        assert len(get_fallback(kind)) == expected

    def test_unknown_kind_is_empty(self):
        assert get_fallback("press-releases") == []

    def test_accepts_kind_object(self):
        assert len(get_fallback(TEAM)) == 3

    def test_calls_return_fresh_instances(self):
        first = get_fallback(ACHIEVEMENTS)
        first[0].title = "changed"
        assert get_fallback(ACHIEVEMENTS)[0].title == "Company Founded"

    def test_timestamps_are_stable(self):
        stamps = [r.created_at for r in get_fallback(SERVICES)]
        assert stamps == [r.created_at for r in get_fallback(SERVICES)]
        assert get_fallback(CUSTOMIZATION)[0].created_at == CATALOG_TIMESTAMP

    def test_ids_are_unique_per_kind(self):
        for kind in ALL_KINDS:
            ids = [r.id for r in get_fallback(kind)]
            assert len(ids) == len(set(ids)), kind.name

    def test_seed_keys_are_unique_per_kind(self):
        for kind in ALL_KINDS:
            keys = [kind.seed_key(r) for r in get_fallback(kind)]
            assert len(keys) == len(set(keys)), kind.name

    def test_only_one_popular_service(self):
        popular = [s.title for s in get_fallback(SERVICES) if s.popular]
        assert popular == ["Web Development"]


class TestFindFallback:
    def test_found(self):
        assert find_fallback(TEAM, "fallback-3").name

    def test_missing(self):
        assert find_fallback(TEAM, "fallback-9") is None

    def test_kind_without_catalog(self):
        assert find_fallback(CONTACTS, "anything") is None
