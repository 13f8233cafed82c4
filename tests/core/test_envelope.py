"""Tests for response envelope construction."""

from __future__ import annotations

from showcase.core.envelope import (
    envelope_for_error,
    error_envelope,
    item_envelope,
    list_envelope,
    record_envelope,
    success_envelope,
)
from showcase.core.errors import FieldError, NotFound, ValidationFailed
from showcase.core.reader import ReadManyResult, ReadOneResult, Source
from showcase.core.repository import PageInfo, PageRequest
from showcase.kinds import PROJECTS, TEAM


class TestSuccessEnvelopes:
    def test_minimal(self):
        assert success_envelope() == {"success": True}

    def test_source_enum_is_rendered(self):
        body = success_envelope({"x": 1}, source=Source.FALLBACK, message="m")
        assert body == {"success": True, "message": "m", "data": {"x": 1}, "source": "fallback"}

    def test_list_envelope(self):
        records = PROJECTS.fallback()
        result = ReadManyResult(records, PageInfo.of(PageRequest(page=1, limit=10), 2), Source.DATABASE)
        body = list_envelope(PROJECTS, result)
        assert body["source"] == "database"
        assert [p["id"] for p in body["data"]["projects"]] == ["1", "2"]
        assert body["data"]["pagination"] == {"page": 1, "pages": 1, "total": 2, "limit": 10}
        assert "message" not in body

    def test_item_envelope(self):
        record = TEAM.fallback()[0]
        body = item_envelope(TEAM, ReadOneResult(record, Source.FALLBACK, "offline"))
        assert body["data"]["teamMember"]["id"] == "fallback-1"
        assert body["source"] == "fallback"
        assert body["message"] == "offline"

    def test_record_envelope_has_no_source(self):
        body = record_envelope(TEAM, TEAM.fallback()[0], "Team member created successfully")
        assert "source" not in body
        assert body["message"] == "Team member created successfully"


class TestErrorEnvelopes:
    def test_without_field_errors(self):
        assert error_envelope("nope") == {"success": False, "message": "nope"}

    def test_with_field_errors(self):
        body = error_envelope("Validation failed", [FieldError("title", "required")])
        assert body["errors"] == [{"field": "title", "message": "required"}]

    def test_from_exception(self):
        assert envelope_for_error(NotFound("Project not found")) == {
            "success": False,
            "message": "Project not found",
        }
        exc = ValidationFailed("Validation failed", errors=[FieldError("progress", "too big")])
        assert envelope_for_error(exc)["errors"][0]["field"] == "progress"


class TestPageInfo:
    def test_pages_round_up(self):
        assert PageInfo.of(PageRequest(page=2, limit=4), 9).pages == 3

    def test_empty_is_one_page(self):
        assert PageInfo.of(PageRequest(), 0).pages == 1

    def test_offset(self):
        assert PageRequest(page=3, limit=10).offset == 20
