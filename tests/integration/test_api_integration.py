"""End-to-end tests for the HTTP API against the seeded in-memory repository."""

import json

import pytest


def _new_ioc(**overrides):
    payload = {
        "type": "domain",
        "value": "evil.example",
        "description": "Command and control domain",
        "severity": "high",
        "source": "Sandbox",
        "reporter": "Integration",
        "reporterEmail": "integration@example.com",
        "tags": ["c2"],
        "confidence": 75,
    }
    payload.update(overrides)
    return payload


class TestHealth:
    @pytest.mark.asyncio
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert "refresher" in data

    @pytest.mark.asyncio
    async def test_request_id_echoed(self, client):
        resp = await client.get("/health", headers={"X-Request-ID": "abc123"})
        assert resp.headers["X-Request-ID"] == "abc123"


class TestAuth:
    @pytest.mark.asyncio
    async def test_login_success(self, client):
        resp = await client.post(
            "/api/v1/auth/login", json={"username": "analyst", "password": "analyst123"}
        )
        assert resp.status_code == 200
        data = resp.json()
        assert data["token_type"] == "bearer"
        assert data["access_token"]
        assert data["user"]["username"] == "analyst"
        assert data["user"]["role"] == "user"
        assert "ioc_console_token=" in resp.headers["set-cookie"]
        assert "httponly" in resp.headers["set-cookie"].lower()

    @pytest.mark.asyncio
    async def test_login_failure(self, client):
        resp = await client.post(
            "/api/v1/auth/login", json={"username": "admin", "password": "nope"}
        )
        assert resp.status_code == 401
        body = resp.json()
        assert body["error"] is True
        assert body["detail"] == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_login_overlong_password(self, client):
        resp = await client.post(
            "/api/v1/auth/login", json={"username": "admin", "password": "x" * 100}
        )
        assert resp.status_code == 401
        assert resp.json()["detail"] == "Invalid credentials"

    @pytest.mark.asyncio
    async def test_cookie_session_and_logout(self, client):
        login = await client.post(
            "/api/v1/auth/login", json={"username": "admin", "password": "admin123"}
        )
        client.cookies.clear()
        cookie = {"Cookie": f"ioc_console_token={login.json()['access_token']}"}

        me = await client.get("/api/v1/auth/me", headers=cookie)
        assert me.status_code == 200
        assert me.json()["username"] == "admin"

        resp = await client.post("/api/v1/auth/logout", headers=cookie)
        assert resp.status_code == 200
        assert resp.json() == {"message": "Logged out"}
        assert "ioc_console_token=" in resp.headers["set-cookie"]

        client.cookies.clear()
        assert (await client.get("/api/v1/auth/me")).status_code == 401

    @pytest.mark.asyncio
    async def test_me_with_bearer(self, client, auth_headers):
        resp = await client.get("/api/v1/auth/me", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["email"] == "admin@fortinet.com"

    @pytest.mark.asyncio
    async def test_protected_routes_require_auth(self, client):
        for path in ("/api/v1/ioc/", "/api/v1/dashboard/stats", "/api/v1/export/txt"):
            resp = await client.get(path)
            assert resp.status_code == 401
            assert resp.json()["detail"] == "Not authenticated"

    @pytest.mark.asyncio
    async def test_tampered_bearer(self, client):
        resp = await client.get(
            "/api/v1/auth/me", headers={"Authorization": "Bearer not-a-token"}
        )
        assert resp.status_code == 401


class TestIoCRoutes:
    @pytest.mark.asyncio
    async def test_list_seeded(self, client, auth_headers):
        resp = await client.get("/api/v1/ioc/", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["total"] == 4
        assert data["matched"] == 4
        assert [i["id"] for i in data["items"]] == ["4", "3", "2", "1"]

    @pytest.mark.asyncio
    async def test_list_filters_and_sort(self, client, auth_headers):
        resp = await client.get(
            "/api/v1/ioc/",
            params={"severity": "high", "sort_by": "confidence", "order": "asc"},
            headers=auth_headers,
        )
        data = resp.json()
        assert [i["id"] for i in data["items"]] == ["1", "4"]
        assert data["total"] == 4

    @pytest.mark.asyncio
    async def test_list_bad_sort_field(self, client, auth_headers):
        resp = await client.get("/api/v1/ioc/", params={"sort_by": "nope"}, headers=auth_headers)
        assert resp.status_code == 422
        assert "sort_by" in resp.json()["errors"]

    @pytest.mark.asyncio
    async def test_crud_lifecycle(self, client, auth_headers):
        resp = await client.post("/api/v1/ioc/", json=_new_ioc(), headers=auth_headers)
        assert resp.status_code == 201
        created = resp.json()
        assert created["status"] == "pending"
        assert created["reporterEmail"] == "integration@example.com"
        ioc_id = created["id"]

        resp = await client.get(f"/api/v1/ioc/{ioc_id}", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json()["value"] == "evil.example"

        resp = await client.patch(
            f"/api/v1/ioc/{ioc_id}", json={"status": "approved"}, headers=auth_headers
        )
        assert resp.status_code == 200
        assert resp.json()["status"] == "approved"
        assert resp.json()["id"] == ioc_id

        resp = await client.delete(f"/api/v1/ioc/{ioc_id}", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.json() == {"deleted": ioc_id}

        resp = await client.delete(f"/api/v1/ioc/{ioc_id}", headers=auth_headers)
        assert resp.status_code == 404

    @pytest.mark.asyncio
    async def test_create_field_errors(self, client, auth_headers):
        resp = await client.post(
            "/api/v1/ioc/",
            json=_new_ioc(type="ip", value="not-an-ip", confidence=150),
            headers=auth_headers,
        )
        assert resp.status_code == 422
        errors = resp.json()["errors"]
        assert set(errors) == {"value", "confidence"}

        listing = await client.get("/api/v1/ioc/", headers=auth_headers)
        assert listing.json()["total"] == 4

    @pytest.mark.asyncio
    async def test_create_schema_error(self, client, auth_headers):
        resp = await client.post(
            "/api/v1/ioc/", json=_new_ioc(severity="apocalyptic"), headers=auth_headers
        )
        assert resp.status_code == 422
        assert resp.json()["detail"] == "Validation error"

    @pytest.mark.asyncio
    async def test_missing_ioc(self, client, auth_headers):
        resp = await client.get("/api/v1/ioc/missing", headers=auth_headers)
        assert resp.status_code == 404
        assert resp.json()["detail"] == "IoC 'missing' not found"

        resp = await client.patch(
            "/api/v1/ioc/missing", json={"status": "approved"}, headers=auth_headers
        )
        assert resp.status_code == 404


class TestDashboardRoutes:
    @pytest.mark.asyncio
    async def test_stats(self, client, auth_headers):
        resp = await client.get("/api/v1/dashboard/stats", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["totalIoCs"] == 4
        assert data["iocsByStatus"] == {"approved": 3, "pending": 1}
        assert len(data["weeklyTrend"]) == 7
        assert data["topReporters"][0]["count"] == 1

    @pytest.mark.asyncio
    async def test_snapshot(self, client, auth_headers):
        resp = await client.get("/api/v1/dashboard/snapshot", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["stats"]["totalIoCs"] == 4
        assert data["refresher"]["refresh_count"] == 1


class TestExportRoutes:
    @pytest.mark.asyncio
    async def test_download_csv(self, client, auth_headers):
        resp = await client.get("/api/v1/export/csv", headers=auth_headers)
        assert resp.status_code == 200
        assert resp.headers["content-type"].startswith("text/csv")
        disposition = resp.headers["content-disposition"]
        assert disposition.startswith('attachment; filename="fortigate_iocs_')
        assert disposition.endswith('.csv"')
        assert resp.text.splitlines()[0].startswith("id,type,value")

    @pytest.mark.asyncio
    async def test_download_json_filtered(self, client, auth_headers):
        resp = await client.get(
            "/api/v1/export/json", params={"status": "approved"}, headers=auth_headers
        )
        document = json.loads(resp.text)
        assert document["metadata"]["total"] == 3
        assert {i["status"] for i in document["iocs"]} == {"approved"}

    @pytest.mark.asyncio
    async def test_preview(self, client, auth_headers):
        resp = await client.get("/api/v1/export/txt/preview", headers=auth_headers)
        assert resp.status_code == 200
        data = resp.json()
        assert data["format"] == "txt"
        assert data["filename"].endswith(".txt")
        assert data["summary"] == {"total": 4, "approved": 3, "high_or_critical": 3}
        assert data["content"].startswith("# IoC export\n")

    @pytest.mark.asyncio
    async def test_unsupported_format(self, client, auth_headers):
        resp = await client.get("/api/v1/export/xml", headers=auth_headers)
        assert resp.status_code == 400
        assert "xml" in resp.json()["detail"]
