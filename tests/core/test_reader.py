"""Tests for the availability-aware reader.

Covers fallback substitution, first-read provisioning (full, partial,
failed, concurrent) and the derived-read helper.
"""

from __future__ import annotations

import threading

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError

from showcase.core.access import build_access
from showcase.core.catalog import get_fallback
from showcase.core.errors import NotFound
from showcase.core.orm import create_showcase_engine
from showcase.core.orm.tables import AchievementTable, ContactTable, TeamMemberTable
from showcase.core.probe import StaticProbe
from showcase.core.reader import (
    MSG_PROVISION_FAILED,
    MSG_QUERY_FAILED,
    MSG_UNAVAILABLE,
    Source,
)
from showcase.core.repository import PageRequest
from showcase.core.settings import ShowcaseSettings
from showcase.core.writer import SeedOutcome, SeedResult
from showcase.kinds import (
    ACHIEVEMENTS,
    ALL_KINDS,
    CONTACTS,
    CONTENT,
    CUSTOMIZATION,
    PROJECTS,
    TEAM,
)

SEEDED_KINDS = [kind for kind in ALL_KINDS if get_fallback(kind)]


def _count(access, table) -> int:
    with access.session_factory() as session:
        return session.execute(select(func.count()).select_from(table)).scalar_one()


def _operational_error() -> OperationalError:
    return OperationalError("SELECT", {}, Exception("connection reset"))


# ── Fallback ─────────────────────────────────────────────────────────────


class TestFallback:
    def test_unavailable_serves_catalog(self, access, probe):
        probe.available = False
        result = access.reader.read_many(ACHIEVEMENTS)
        assert result.source is Source.FALLBACK
        assert result.message == MSG_UNAVAILABLE
        assert len(result.records) == 5
        assert result.pagination.to_dict() == {"page": 1, "pages": 1, "total": 5, "limit": 5}

    def test_unavailable_never_touches_store(self, access, probe):
        probe.available = False
        access.reader.read_many(TEAM)
        probe.available = True
        assert _count(access, TeamMemberTable) == 0

    def test_fallback_ignores_pagination(self, access, probe):
        probe.available = False
        result = access.reader.read_many(ACHIEVEMENTS, None, PageRequest(page=3, limit=2))
        assert len(result.records) == 5
        assert result.pagination.page == 1

    def test_query_error_serves_catalog(self, access, monkeypatch):
        def broken(kind):
            raise _operational_error()

        monkeypatch.setattr(access.reader, "_count_all", broken)
        result = access.reader.read_many(PROJECTS)
        assert result.source is Source.FALLBACK
        assert result.message == MSG_QUERY_FAILED
        assert [r.id for r in result.records] == ["1", "2"]

    def test_kind_without_catalog_falls_back_empty(self, access, probe):
        probe.available = False
        result = access.reader.read_many(CONTACTS)
        assert result.records == []
        assert result.pagination.total == 0

    def test_read_one_from_catalog(self, access, probe):
        probe.available = False
        result = access.reader.read_one(TEAM, "fallback-2")
        assert result.source is Source.FALLBACK
        assert result.record.id == "fallback-2"

    def test_read_one_unknown_catalog_id(self, access, probe):
        probe.available = False
        with pytest.raises(NotFound):
            access.reader.read_one(TEAM, "nope")


# ── Provisioning ─────────────────────────────────────────────────────────


class TestProvisioning:
    def test_empty_kind_is_provisioned(self, access):
        result = access.reader.read_many(TEAM)
        assert result.source is Source.CREATED
        assert [r.id for r in result.records] == ["fallback-1", "fallback-2", "fallback-3"]
        assert _count(access, TeamMemberTable) == 3

    def test_second_read_comes_from_store(self, access):
        access.reader.read_many(ACHIEVEMENTS)
        result = access.reader.read_many(ACHIEVEMENTS)
        assert result.source is Source.DATABASE
        assert result.message is None
        assert result.pagination.total == 5

    def test_created_records_keep_catalog_content(self, access):
        result = access.reader.read_many(ACHIEVEMENTS)
        catalog = {r.id: r.title for r in get_fallback(ACHIEVEMENTS)}
        assert {r.id: r.title for r in result.records} == catalog

    def test_provision_twice_is_idempotent(self, access):
        first = access.reader.provision(PROJECTS)
        second = access.reader.provision(PROJECTS)
        assert len(first.created) == 2
        assert second.created == []
        assert second.conflicts == 2
        assert _count(access, PROJECTS.table) == 2

    def test_kind_without_catalog_stays_empty(self, access):
        result = access.reader.read_many(CONTACTS)
        assert result.source is Source.DATABASE
        assert result.records == []
        assert _count(access, ContactTable) == 0

    def test_partial_failure_serves_what_was_created(self, access, monkeypatch):
        original = access.writer.persist_seed

        def flaky(kind, record):
            if record.id == "fallback-2":
                return SeedResult(SeedOutcome.FAILED, record.id, error="boom")
            return original(kind, record)

        monkeypatch.setattr(access.writer, "persist_seed", flaky)
        result = access.reader.read_many(TEAM)
        assert result.source is Source.CREATED
        assert sorted(r.id for r in result.records) == ["fallback-1", "fallback-3"]
        assert _count(access, TeamMemberTable) == 2

    def test_total_failure_serves_catalog(self, access, monkeypatch):
        monkeypatch.setattr(
            access.writer,
            "persist_seed",
            lambda kind, record: SeedResult(SeedOutcome.FAILED, record.id, error="boom"),
        )
        result = access.reader.read_many(ACHIEVEMENTS)
        assert result.source is Source.FALLBACK
        assert result.message == MSG_PROVISION_FAILED
        assert len(result.records) == 5

    def test_lost_race_requeries(self, access, monkeypatch):
        access.reader.provision(TEAM)
        # this request saw an empty table just before another one seeded it
        monkeypatch.setattr(access.reader, "_count_all", lambda kind: 0)
        result = access.reader.read_many(TEAM)
        assert result.source is Source.DATABASE
        assert len(result.records) == 3
        assert _count(access, TeamMemberTable) == 3


class TestEveryKind:
    @pytest.mark.parametrize("kind", ALL_KINDS, ids=lambda k: k.name)
    def test_fallback_listing_is_the_catalog(self, access, probe, kind):
        probe.available = False
        catalog = get_fallback(kind)
        result = access.reader.read_many(kind)
        assert result.source is Source.FALLBACK
        assert [r.id for r in result.records] == [r.id for r in catalog]
        assert result.pagination.total == len(catalog)
        assert result.pagination.page == 1
        assert result.pagination.pages == 1

    @pytest.mark.parametrize("kind", SEEDED_KINDS, ids=lambda k: k.name)
    def test_first_read_provisions_catalog(self, access, kind):
        catalog = get_fallback(kind)
        result = access.reader.read_many(kind)
        assert result.source is Source.CREATED
        assert sorted(r.id for r in result.records) == sorted(r.id for r in catalog)
        assert _count(access, kind.table) == len(catalog)

    @pytest.mark.parametrize("kind", SEEDED_KINDS, ids=lambda k: k.name)
    def test_second_read_has_no_duplicates(self, access, kind):
        catalog = get_fallback(kind)
        access.reader.read_many(kind)
        again = access.reader.read_many(kind)
        ids = [r.id for r in again.records]
        assert again.source is Source.DATABASE
        assert sorted(ids) == sorted(r.id for r in catalog)
        assert again.pagination.total == len(catalog)
        assert _count(access, kind.table) == len(catalog)


@pytest.mark.integration
class TestConcurrentProvisioning:
    def test_parallel_first_reads_seed_once(self, tmp_path):
        url = f"sqlite:///{tmp_path / 'race.db'}"
        engine = create_showcase_engine(url, connect_timeout_s=30)
        access = build_access(ShowcaseSettings(database_url=url), engine=engine, probe=StaticProbe())
        access.create_tables()

        workers = 8
        barrier = threading.Barrier(workers)
        results = []
        errors = []

        def first_read():
            barrier.wait()
            try:
                results.append(access.reader.read_many(TEAM))
            except Exception as e:  # noqa: BLE001
                errors.append(e)

        threads = [threading.Thread(target=first_read) for _ in range(workers)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        try:
            assert errors == []
            assert len(results) == workers
            assert _count(access, TeamMemberTable) == 3
            expected = {"fallback-1", "fallback-2", "fallback-3"}
            for result in results:
                ids = [r.id for r in result.records]
                assert result.source in (Source.CREATED, Source.DATABASE, Source.FALLBACK)
                assert len(ids) == len(set(ids))
                assert set(ids) <= expected

            settled = access.reader.read_many(TEAM)
            assert settled.source is Source.DATABASE
            assert sorted(r.id for r in settled.records) == sorted(expected)
        finally:
            engine.dispose()


# ── Single records ───────────────────────────────────────────────────────


class TestReadOne:
    def test_read_one_never_provisions(self, access):
        with pytest.raises(NotFound):
            access.reader.read_one(ACHIEVEMENTS, "673d1234567890abcdef0001")
        assert _count(access, AchievementTable) == 0

    def test_read_one_from_store(self, access):
        access.reader.read_many(ACHIEVEMENTS)
        result = access.reader.read_one(ACHIEVEMENTS, "673d1234567890abcdef0003")
        assert result.source is Source.DATABASE
        assert result.record.category == "award"

    def test_read_one_store_error_uses_catalog(self, access, monkeypatch):
        def broken(*args, **kwargs):
            raise _operational_error()

        monkeypatch.setattr(access.reader, "_session_factory", broken)
        result = access.reader.read_one(PROJECTS, "1")
        assert result.source is Source.FALLBACK
        assert result.message == MSG_QUERY_FAILED


class TestReadSingleton:
    def test_missing_customization_is_created(self, access):
        result = access.reader.read_singleton(CUSTOMIZATION)
        assert result.source is Source.CREATED
        assert result.record.version == 1
        again = access.reader.read_singleton(CUSTOMIZATION)
        assert again.source is Source.DATABASE
        assert again.record.id == result.record.id

    def test_customization_fallback_when_unavailable(self, access, probe):
        probe.available = False
        result = access.reader.read_singleton(CUSTOMIZATION)
        assert result.source is Source.FALLBACK
        assert result.record.id == "default-customization"

    def test_content_section_created_on_demand(self, access):
        result = access.reader.read_singleton(CONTENT, "about")
        assert result.source is Source.CREATED
        assert result.record.section == "about"
        assert _count(access, CONTENT.table) == 1

    def test_singleton_conflict_requeries(self, access, monkeypatch):
        access.reader.read_singleton(CUSTOMIZATION)
        monkeypatch.setattr(access.reader, "_query_singleton", _none_then_real(access))
        result = access.reader.read_singleton(CUSTOMIZATION)
        assert result.source is Source.DATABASE


def _none_then_real(access):
    real = access.reader._query_singleton
    calls = {"n": 0}

    def query(kind, key):
        calls["n"] += 1
        return None if calls["n"] == 1 else real(kind, key)

    return query


# ── Derived reads ────────────────────────────────────────────────────────


class TestDerive:
    def test_from_store(self, access):
        access.reader.read_many(PROJECTS)
        value, source = access.reader.derive(
            PROJECTS,
            lambda repo: repo.count([]),
            lambda records: -1,
        )
        assert (value, source) == (2, Source.DATABASE)

    def test_from_fallback_when_unavailable(self, access, probe):
        probe.available = False
        value, source = access.reader.derive(PROJECTS, lambda repo: -1, len)
        assert (value, source) == (2, Source.FALLBACK)

    def test_from_fallback_on_error(self, access):
        def broken(repo):
            raise _operational_error()

        value, source = access.reader.derive(TEAM, broken, len)
        assert (value, source) == (3, Source.FALLBACK)
