"""Tests for resource kind schemas and the kind registry."""

from __future__ import annotations

import datetime

import pytest
from pydantic import ValidationError

from showcase.core.errors import NotFound
from showcase.core.kinds import KindRegistry
from showcase.kinds import ACHIEVEMENTS, TEAM, default_registry
from showcase.kinds.contacts import ContactCreate
from showcase.kinds.customization import CustomizationRecord, merge_sections
from showcase.kinds.projects import ProjectCreate, status_for_progress
from showcase.kinds.services import ReorderRequest
from showcase.kinds.team import TeamMemberCreate, TeamMemberRecord, TeamMemberUpdate


# ── Registry ─────────────────────────────────────────────────────────────


class TestRegistry:
    def test_default_registry_has_every_kind(self):
        assert default_registry().names() == [
            "achievements", "content", "team", "projects", "services", "contacts", "customization",
        ]

    def test_unknown_kind(self):
        with pytest.raises(NotFound, match="Unknown resource kind: blog"):
            default_registry().get_kind("blog")

    def test_duplicate_registration(self):
        registry = KindRegistry()
        registry.register(TEAM)
        with pytest.raises(ValueError):
            registry.register(TEAM)

    def test_serialize_uses_camel_case(self):
        record = TEAM.fallback()[0]
        body = TEAM.serialize(record)
        assert "joinDate" in body
        assert "isLeader" in body
        assert "socialLinks" in body


# ── Team ─────────────────────────────────────────────────────────────────


class TestTeamSchemas:
    def test_minimal_member(self):
        member = TeamMemberCreate.model_validate({"name": "Li Wei", "position": "Designer"})
        assert member.department == "General"
        assert member.is_active is True

    def test_name_too_short(self):
        with pytest.raises(ValidationError):
            TeamMemberCreate.model_validate({"name": "L", "position": "Designer"})

    def test_blank_email_becomes_none(self):
        member = TeamMemberCreate.model_validate(
            {"name": "Li Wei", "position": "Designer", "email": ""}
        )
        assert member.email is None

    def test_email_is_lower_cased(self):
        member = TeamMemberCreate.model_validate(
            {"name": "Li Wei", "position": "Designer", "email": "Li.Wei@Example.COM"}
        )
        assert member.email == "li.wei@example.com"

    def test_bad_phone(self):
        with pytest.raises(ValidationError):
            TeamMemberCreate.model_validate(
                {"name": "Li Wei", "position": "Designer", "phone": "call me"}
            )

    def test_join_date_in_future(self):
        tomorrow = datetime.datetime.now(datetime.UTC) + datetime.timedelta(days=1)
        with pytest.raises(ValidationError):
            TeamMemberCreate.model_validate(
                {"name": "Li Wei", "position": "Designer", "joinDate": tomorrow.isoformat()}
            )

    def test_skills_are_cleaned(self):
        member = TeamMemberCreate.model_validate(
            {"name": "Li Wei", "position": "Designer", "skills": [" Figma ", "", "Figma", "CSS"]}
        )
        assert member.skills == ["Figma", "CSS"]

    def test_social_link_must_be_url(self):
        with pytest.raises(ValidationError):
            TeamMemberCreate.model_validate(
                {"name": "Li Wei", "position": "Designer", "socialLinks": {"github": "not a url"}}
            )

    def test_update_omits_unset(self):
        update = TeamMemberUpdate.model_validate({"position": "Lead Designer"})
        assert update.model_dump(exclude_unset=True) == {"position": "Lead Designer"}

    def test_record_serializes_missing_contact_as_empty(self):
        record = TeamMemberRecord(id="x", name="Li Wei", position="Designer")
        body = TEAM.serialize(record)
        assert body["email"] == ""
        assert body["phone"] == ""


# ── Other kinds ──────────────────────────────────────────────────────────


class TestProjectSchemas:
    @pytest.mark.parametrize(
        ("progress", "status"), [(0, "planning"), (1, "in-progress"), (99, "in-progress"), (100, "completed")]
    )
    def test_status_for_progress(self, progress, status):
        assert status_for_progress(progress) == status

    def test_end_before_start(self):
        with pytest.raises(ValidationError):
            ProjectCreate.model_validate(
                {
                    "title": "Portal",
                    "description": "Client portal",
                    "startDate": "2024-03-01T00:00:00Z",
                    "endDate": "2024-02-01T00:00:00Z",
                }
            )

    def test_progress_bounds(self):
        with pytest.raises(ValidationError):
            ProjectCreate.model_validate(
                {"title": "Portal", "description": "x", "startDate": "2024-03-01T00:00:00Z", "progress": 101}
            )


class TestContactSchemas:
    def test_phone_is_sanitized(self):
        contact = ContactCreate.model_validate(
            {
                "name": "Sam",
                "email": "sam@example.com",
                "phone": "+1 (555) 010-9999",
                "subject": "Hello",
                "message": "Hi there",
            }
        )
        assert contact.phone == "+15550109999"

    def test_invalid_email(self):
        with pytest.raises(ValidationError):
            ContactCreate.model_validate(
                {"name": "Sam", "email": "sam", "subject": "Hello", "message": "Hi"}
            )


class TestServiceSchemas:
    def test_reorder_requires_items(self):
        with pytest.raises(ValidationError):
            ReorderRequest.model_validate({"serviceOrders": []})


class TestAchievementSchemas:
    def test_category_is_restricted(self):
        with pytest.raises(ValidationError):
            ACHIEVEMENTS.create_model.model_validate(
                {"title": "x", "description": "y", "date": "2024-01-01", "category": "party"}
            )

    def test_aware_dates_are_stored_naive_utc(self):
        model = ACHIEVEMENTS.create_model.model_validate(
            {"title": "x", "description": "y", "date": "2024-01-01T02:00:00+02:00"}
        )
        assert model.date == datetime.datetime(2024, 1, 1, 0, 0)


class TestCustomizationMerge:
    def test_first_write_passes_through(self):
        assert merge_sections({"colors": {"primary": "#000"}}, None) == {"colors": {"primary": "#000"}}

    def test_sections_merge_shallowly(self):
        row = CustomizationRecord(id="c", version=4)
        row_dump = row.model_dump()

        class Row:
            version = row_dump["version"]
            colors = row_dump["colors"]
            custom_css = row_dump["custom_css"]

        merged = merge_sections({"colors": {"primary": "#000"}, "custom_css": "a{}"}, Row())
        assert merged["colors"]["primary"] == "#000"
        assert merged["colors"]["accent"] == "#8b5cf6"
        assert merged["custom_css"] == "a{}"
        assert merged["version"] == 5
