"""HTTP tests for the resource routers."""

from __future__ import annotations

import pytest

ACHIEVEMENT = {
    "title": "Opened Berlin office",
    "description": "Our second office in Europe.",
    "date": "2024-05-01T00:00:00Z",
    "category": "milestone",
    "featured": True,
}

CONTACT = {
    "name": "Sam Lee",
    "email": "sam@example.com",
    "phone": "+1 555 0100",
    "subject": "Quote",
    "message": "Can you build us a shop?",
}


# ── Achievements ─────────────────────────────────────────────────────────


class TestAchievements:
    def test_crud(self, client, admin_headers):
        created = client.post("/api/achievements", json=ACHIEVEMENT, headers=admin_headers)
        assert created.status_code == 201
        body = created.json()
        assert body["message"] == "Achievement created successfully"
        achievement_id = body["data"]["achievement"]["id"]

        got = client.get(f"/api/achievements/{achievement_id}").json()
        assert got["source"] == "database"
        assert got["data"]["achievement"]["title"] == ACHIEVEMENT["title"]

        updated = client.put(
            f"/api/achievements/{achievement_id}", json={"featured": False}, headers=admin_headers
        )
        assert updated.json()["data"]["achievement"]["featured"] is False

        deleted = client.delete(f"/api/achievements/{achievement_id}", headers=admin_headers)
        assert deleted.status_code == 200
        assert client.get(f"/api/achievements/{achievement_id}").status_code == 404

    def test_filter_and_paginate(self, client):
        client.get("/api/achievements")
        body = client.get("/api/achievements", params={"category": "milestone", "limit": 2}).json()
        assert body["data"]["pagination"] == {"page": 1, "pages": 2, "total": 3, "limit": 2}
        assert all(a["category"] == "milestone" for a in body["data"]["achievements"])

    def test_sorted_newest_first(self, client):
        client.get("/api/achievements")
        dates = [a["date"] for a in client.get("/api/achievements").json()["data"]["achievements"]]
        assert dates == sorted(dates, reverse=True)

    def test_validation_errors(self, client, admin_headers):
        resp = client.post("/api/achievements", json={"title": ""}, headers=admin_headers)
        assert resp.status_code == 400
        body = resp.json()
        assert body["success"] is False
        assert body["message"] == "Validation failed"
        assert {"title", "description", "date"} <= {e["field"] for e in body["errors"]}

    def test_bad_query_value(self, client):
        resp = client.get("/api/achievements", params={"category": "party"})
        assert resp.status_code == 400

    def test_limit_capped(self, client):
        assert client.get("/api/achievements", params={"limit": 500}).status_code == 400


# ── Content ──────────────────────────────────────────────────────────────


class TestContent:
    def test_list_provisions_all_sections(self, client):
        body = client.get("/api/content").json()
        assert body["source"] == "created"
        assert {c["section"] for c in body["data"]["content"]} == {"hero", "about", "services", "home"}

    def test_section_provisioned_on_demand(self, client):
        body = client.get("/api/content/hero").json()
        assert body["source"] == "created"
        assert body["data"]["content"]["metadata"]["buttonText"] == "Get Started"
        assert client.get("/api/content/hero").json()["source"] == "database"

    def test_unknown_section(self, client):
        resp = client.get("/api/content/footer")
        assert resp.status_code == 400
        assert resp.json()["errors"][0]["field"] == "section"

    def test_upsert(self, client, admin_headers):
        resp = client.put(
            "/api/content/about", json={"title": "Who we are"}, headers=admin_headers
        )
        assert resp.status_code == 200
        assert resp.json()["data"]["content"]["title"] == "Who we are"
        assert client.get("/api/content/about").json()["data"]["content"]["title"] == "Who we are"

    def test_section_fallback(self, client, probe):
        probe.available = False
        body = client.get("/api/content/services").json()
        assert body["source"] == "fallback"
        assert body["data"]["content"]["id"] == "fallback-services"


# ── Team ─────────────────────────────────────────────────────────────────


class TestTeam:
    def test_static_routes_before_id(self, client):
        client.get("/api/team")
        assert client.get("/api/team/stats").json()["data"]["stats"]["totalMembers"] == 3
        departments = client.get("/api/team/departments").json()["data"]["departments"]
        assert sum(d["count"] for d in departments) == 3

    def test_search(self, client):
        client.get("/api/team")
        body = client.get("/api/team/search", params={"q": "smith"}).json()
        assert [m["id"] for m in body["data"]["team"]] == ["fallback-1"]

    def test_stats_fallback(self, client, probe):
        probe.available = False
        body = client.get("/api/team/stats").json()
        assert body["source"] == "fallback"

    def test_create_and_permanent_delete(self, client, admin_headers):
        client.get("/api/team")
        created = client.post(
            "/api/team",
            json={"name": "Ada Park", "position": "Engineer", "department": "Engineering"},
            headers=admin_headers,
        )
        assert created.status_code == 201
        member_id = created.json()["data"]["teamMember"]["id"]
        assert client.delete(f"/api/team/{member_id}/permanent", headers=admin_headers).status_code == 200
        assert client.get(f"/api/team/{member_id}").status_code == 404

    def test_leaders_filter(self, client):
        client.get("/api/team")
        body = client.get("/api/team", params={"isLeader": "true"}).json()
        assert {m["id"] for m in body["data"]["team"]} == {"fallback-1", "fallback-2"}


# ── Projects ─────────────────────────────────────────────────────────────


class TestProjects:
    def test_progress_patch(self, client, admin_headers):
        client.get("/api/projects")
        resp = client.patch("/api/projects/2/progress", json={"progress": 100}, headers=admin_headers)
        assert resp.status_code == 200
        assert resp.json()["data"]["project"]["status"] == "completed"

    def test_stats(self, client):
        client.get("/api/projects")
        stats = client.get("/api/projects/stats").json()["data"]["stats"]
        assert stats["totalProjects"] == 2

    def test_missing_project(self, client):
        client.get("/api/projects")
        resp = client.get("/api/projects/999")
        assert resp.status_code == 404
        assert resp.json() == {"success": False, "message": "Project not found"}


# ── Services ─────────────────────────────────────────────────────────────


class TestServices:
    def test_listing_sorted_by_order(self, client):
        orders = [s["order"] for s in client.get("/api/services").json()["data"]["services"]]
        assert orders == sorted(orders)

    def test_toggle(self, client, admin_headers):
        client.get("/api/services")
        resp = client.patch("/api/services/fallback-service-1/toggle", headers=admin_headers)
        assert resp.json()["data"]["service"]["active"] is False
        assert resp.json()["message"] == "Service deactivated successfully"
        hidden = client.get("/api/services", params={"active": "true"}).json()["data"]["services"]
        assert "fallback-service-1" not in {s["id"] for s in hidden}

    def test_reorder(self, client, admin_headers):
        client.get("/api/services")
        resp = client.post(
            "/api/services/reorder",
            json={"serviceOrders": [{"id": "fallback-service-6", "order": 0}, {"id": "nope", "order": 1}]},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        body = resp.json()
        assert [s["id"] for s in body["data"]["services"]] == ["fallback-service-6"]
        assert body["data"]["failed"] == [{"id": "nope", "message": "Service not found"}]


# ── Contacts ─────────────────────────────────────────────────────────────


class TestContacts:
    def test_public_submit(self, client):
        resp = client.post("/api/contact", json=CONTACT)
        assert resp.status_code == 201
        contact = resp.json()["data"]["contact"]
        assert contact["phone"] == "+15550100"
        assert contact["status"] == "new"

    def test_submit_refused_when_store_down(self, client, probe):
        probe.available = False
        assert client.post("/api/contact", json=CONTACT).status_code == 503

    def test_inbox_is_admin_only(self, client):
        assert client.get("/api/contact").status_code == 401
        assert client.get("/api/contact/stats").status_code == 401

    def test_inbox_never_provisions(self, client, admin_headers):
        body = client.get("/api/contact", headers=admin_headers).json()
        assert body["source"] == "database"
        assert body["data"]["contacts"] == []

    def test_status_changes(self, client, admin_headers):
        first = client.post("/api/contact", json=CONTACT).json()["data"]["contact"]["id"]
        second = client.post("/api/contact", json={**CONTACT, "subject": "Again"}).json()["data"]["contact"]["id"]

        resp = client.put(f"/api/contact/{first}/status", json={"status": "in-progress"}, headers=admin_headers)
        assert resp.json()["data"]["contact"]["status"] == "in-progress"

        bulk = client.put(
            "/api/contact/bulk/status", json={"ids": [first, second], "status": "resolved"}, headers=admin_headers
        )
        assert bulk.json()["data"]["modifiedCount"] == 2
        stats = client.get("/api/contact/stats", headers=admin_headers).json()["data"]["stats"]
        assert stats["resolvedContacts"] == 2

    def test_search_before_id_route(self, client, admin_headers):
        client.post("/api/contact", json=CONTACT)
        client.post("/api/contact", json={**CONTACT, "subject": "Careers", "queryType": "career"})
        resp = client.get("/api/contact/search", params={"q": "careers"}, headers=admin_headers)
        assert resp.status_code == 200
        body = resp.json()
        assert [c["subject"] for c in body["data"]["contacts"]] == ["Careers"]
        assert body["data"]["pagination"]["total"] == 1
        assert client.get("/api/contact/search").status_code == 401

    def test_search_rejects_bad_date(self, client, admin_headers):
        resp = client.get(
            "/api/contact/search", params={"startDate": "yesterday"}, headers=admin_headers
        )
        assert resp.status_code == 400

    def test_mark_read(self, client, admin_headers):
        contact_id = client.post("/api/contact", json=CONTACT).json()["data"]["contact"]["id"]
        resp = client.patch(f"/api/contact/{contact_id}/read", headers=admin_headers)
        assert resp.status_code == 200
        contact = resp.json()["data"]["contact"]
        assert contact["status"] == "in-progress"
        assert contact["readAt"] is not None
        assert client.patch(f"/api/contact/{contact_id}/read").status_code == 401
        assert client.patch("/api/contact/missing/read", headers=admin_headers).status_code == 404


# ── Customization ────────────────────────────────────────────────────────


class TestCustomization:
    def test_get_provisions_default(self, client):
        body = client.get("/api/customizations").json()
        assert body["source"] == "created"
        assert body["data"]["customization"]["version"] == 1

    def test_fonts(self, client):
        fonts = client.get("/api/customizations/fonts").json()["data"]["fonts"]
        assert {"name": "Inter", "value": "Inter", "category": "Sans Serif"} in fonts

    def test_update_and_reset(self, client, admin_headers):
        resp = client.put(
            "/api/customizations",
            json={"colors": {"primary": "#101010"}, "customCSS": "h1{}"},
            headers=admin_headers,
        )
        assert resp.status_code == 200
        doc = resp.json()["data"]["customization"]
        assert doc["colors"]["primary"] == "#101010"
        assert doc["customCSS"] == "h1{}"

        reset = client.post("/api/customizations/reset", headers=admin_headers).json()
        assert reset["message"] == "Customization reset to defaults"
        assert reset["data"]["customization"]["colors"]["primary"] == "#3b82f6"

    @pytest.mark.parametrize("method", ["put", "post"])
    def test_writes_need_admin(self, client, method):
        path = "/api/customizations" if method == "put" else "/api/customizations/reset"
        assert getattr(client, method)(path, json={}).status_code == 401
