"""Tests for /health and / endpoints."""


class TestHealth:

    def test_health_returns_200(self, client):
        resp = client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "healthy"
        assert data["store"] == "ok"
        assert "uptime_seconds" in data
        assert "version" in data
        assert data["document_count"] == 0

    def test_health_counts_approved_and_pending(self, client):
        client.post("/api/documents", json={
            "title": "Doc", "fileName": "d.pdf", "fileSize": 1, "externalRef": "d",
        })
        client.post("/api/contribute", json={
            "title": "Draft", "fileName": "p.pdf", "fileSize": 1,
            "uploaderName": "A", "uploaderEmail": "a@x.com",
        })
        data = client.get("/health").json()
        assert data["document_count"] == 1
        assert data["pending_count"] == 1

    def test_root_returns_api_info(self, client):
        resp = client.get("/")
        assert resp.status_code == 200
        assert resp.json()["name"] == "Document Library API"


class TestStats:

    def test_stats(self, client):
        client.post("/api/folders", json={"name": "F"})
        doc_id = client.post("/api/documents", json={
            "title": "Doc", "fileName": "d.pdf", "fileSize": 1, "externalRef": "d",
        }).json()["id"]
        client.post(f"/api/documents/{doc_id}/download")

        assert client.get("/api/stats").json() == {
            "folders": 1,
            "approvedDocuments": 1,
            "pendingDocuments": 0,
            "rejectedDocuments": 0,
            "users": 0,
            "totalDownloads": 1,
        }


class TestResponseHeaders:

    def test_response_includes_middleware_headers(self, client):
        resp = client.get("/health")
        assert "x-request-id" in resp.headers
        assert "x-response-time" in resp.headers

    def test_request_id_is_propagated(self, client):
        resp = client.get("/api/folders", headers={"X-Request-ID": "abc123"})
        assert resp.headers["x-request-id"] == "abc123"

    def test_generated_request_ids_are_distinct(self, client):
        first = client.get("/api/folders").headers["x-request-id"]
        second = client.get("/api/folders").headers["x-request-id"]
        assert first != second

    def test_sustained_traffic_is_not_throttled(self, client):
        statuses = {client.get("/api/folders").status_code for _ in range(200)}
        assert statuses == {200}
