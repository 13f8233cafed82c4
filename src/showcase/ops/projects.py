"""Project stats and progress updates."""

from __future__ import annotations

from collections import Counter
from typing import Any

from showcase.core.access import ContentAccess
from showcase.core.reader import Source
from showcase.core.writer import validate_payload
from showcase.kinds.projects import PROJECTS, STATUSES, ProgressUpdate, ProjectRecord, status_for_progress


def compute_stats(projects: list[ProjectRecord]) -> dict[str, Any]:
    by_status = Counter(p.status for p in projects)
    average = round(sum(p.progress for p in projects) / len(projects), 1) if projects else 0
    recent = sorted(projects, key=lambda p: p.created_at or p.start_date, reverse=True)[:5]
    return {
        "totalProjects": len(projects),
        "statusCounts": {status: by_status.get(status, 0) for status in STATUSES},
        "averageProgress": average,
        "recentProjects": [PROJECTS.serialize(p) for p in recent],
    }


def project_stats(access: ContentAccess) -> tuple[dict[str, Any], Source]:
    return access.reader.derive(
        PROJECTS,
        lambda repo: compute_stats([repo.to_record(r) for r in repo.all()]),  # type: ignore[misc]
        compute_stats,  # type: ignore[arg-type]
    )


def set_progress(access: ContentAccess, project_id: str, payload: Any) -> ProjectRecord:
    """Set ``progress`` and derive ``status`` from it (0 planning, 100 completed)."""
    update = validate_payload(ProgressUpdate, payload)
    patch = {"progress": update.progress, "status": status_for_progress(update.progress)}
    return access.writer.update(PROJECTS, project_id, patch)  # type: ignore[return-value]


__all__ = ["compute_stats", "project_stats", "set_progress"]
