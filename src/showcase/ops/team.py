"""
Team operations beyond plain CRUD: stats, departments, search, deactivation.

Aggregates are computed from records (stored rows or the catalog) by the
same function, so a ``fallback`` stats payload has exactly the shape of a
``database`` one.
"""

from __future__ import annotations

from collections import Counter
from typing import Any

from sqlalchemy import or_

from showcase.core.access import ContentAccess
from showcase.core.logging import get_logger
from showcase.core.reader import ReadManyResult, Source
from showcase.core.repository import KindRepository, PageInfo, PageRequest
from showcase.kinds.team import TEAM, TeamMemberRecord

logger = get_logger(__name__)


def _all_records(repo: KindRepository) -> list[TeamMemberRecord]:
    return [repo.to_record(r) for r in repo.all()]  # type: ignore[misc]


def compute_stats(members: list[TeamMemberRecord]) -> dict[str, Any]:
    active = [m for m in members if m.is_active]
    departments = Counter(m.department for m in active)
    skills = Counter(skill for m in active for skill in m.skills)
    recent = sorted(
        (m for m in active if m.join_date is not None),
        key=lambda m: m.join_date,
        reverse=True,
    )[:5]
    return {
        "totalMembers": len(members),
        "activeMembers": len(active),
        "inactiveMembers": len(members) - len(active),
        "departmentStats": [
            {"department": name, "count": count} for name, count in departments.most_common()
        ],
        "recentJoins": [TEAM.serialize(m) for m in recent],
        "topSkills": [{"skill": name, "count": count} for name, count in skills.most_common(10)],
    }


def compute_departments(members: list[TeamMemberRecord]) -> list[dict[str, Any]]:
    counts = Counter(m.department for m in members if m.is_active)
    return [{"name": name, "count": counts[name]} for name in sorted(counts)]


def team_stats(access: ContentAccess) -> tuple[dict[str, Any], Source]:
    return access.reader.derive(
        TEAM,
        lambda repo: compute_stats(_all_records(repo)),
        compute_stats,  # type: ignore[arg-type]
    )


def team_departments(access: ContentAccess) -> tuple[list[dict[str, Any]], Source]:
    return access.reader.derive(
        TEAM,
        lambda repo: compute_departments(_all_records(repo)),
        compute_departments,  # type: ignore[arg-type]
    )


def _matches(
    member: TeamMemberRecord,
    q: str | None,
    department: str | None,
    skills: list[str],
) -> bool:
    if not member.is_active:
        return False
    if q:
        needle = q.lower()
        haystack = (member.name, member.position, member.bio or "")
        if not any(needle in field.lower() for field in haystack):
            return False
    if department and department.lower() not in member.department.lower():
        return False
    if skills:
        have = {s.lower() for s in member.skills}
        if not any(s.lower() in have for s in skills):
            return False
    return True


def search_team(
    access: ContentAccess,
    *,
    q: str | None = None,
    department: str | None = None,
    skills: str | None = None,
    page: PageRequest | None = None,
) -> ReadManyResult:
    """Active members matching text, department and any of the listed skills."""
    page = page or PageRequest()
    wanted = [s.strip() for s in (skills or "").split(",") if s.strip()]

    def from_store(repo: KindRepository) -> list[TeamMemberRecord]:
        table = repo.table
        clauses = [table.is_active.is_(True)]
        if q:
            pattern = f"%{q}%"
            clauses.append(
                or_(table.name.ilike(pattern), table.position.ilike(pattern), table.bio.ilike(pattern))
            )
        if department:
            clauses.append(table.department.ilike(f"%{department}%"))
        rows = [repo.to_record(r) for r in repo.all(clauses)]
        # skills live in a JSON column; matched here rather than in SQL
        return [m for m in rows if _matches(m, None, None, wanted)]  # type: ignore[arg-type]

    def from_fallback(records: list[Any]) -> list[TeamMemberRecord]:
        return [m for m in records if _matches(m, q, department, wanted)]

    matches, source = access.reader.derive(TEAM, from_store, from_fallback)
    logger.debug("team_search", q=q, department=department, skills=wanted, hits=len(matches))
    window = matches[page.offset : page.offset + page.limit]
    return ReadManyResult(window, PageInfo.of(page, len(matches)), source)


def deactivate_member(access: ContentAccess, member_id: str) -> TeamMemberRecord:
    """Soft delete: the member stays readable by id but leaves listings."""
    return access.writer.update(TEAM, member_id, {"isActive": False})  # type: ignore[return-value]


__all__ = [
    "compute_departments",
    "compute_stats",
    "deactivate_member",
    "search_team",
    "team_departments",
    "team_stats",
]
