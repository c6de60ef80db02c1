"""Integration tests for key issuance and verification endpoints."""

import re

import pytest

KEY_RE = re.compile(r"^[0-9a-f]{18}$")


class TestHealthEndpoint:
    async def test_health(self, client):
        resp = await client.get("/health")
        assert resp.status_code == 200
        data = resp.json()
        assert data["status"] == "ok"
        assert data["service"] == "ckey-engine"


class TestCreateKeys:
    async def test_create_single(self, client, admin_headers):
        resp = await client.post("/keys", json={"name": "charles"}, headers=admin_headers)
        assert resp.status_code == 201
        data = resp.json()
        assert data["name"] == "charles"
        assert len(data["keys"]) == 1
        assert KEY_RE.match(data["keys"][0])

    async def test_create_batch(self, client, admin_headers):
        resp = await client.post("/keys", json={"name": "张三", "count": 5}, headers=admin_headers)
        assert resp.status_code == 201
        assert len(resp.json()["keys"]) == 5

    async def test_missing_api_key(self, client):
        resp = await client.post("/keys", json={"name": "charles"})
        assert resp.status_code == 403

    async def test_wrong_api_key(self, client):
        resp = await client.post(
            "/keys", json={"name": "charles"}, headers={"X-Ckey-Api-Key": "wrong"}
        )
        assert resp.status_code == 403

    async def test_zero_count_rejected(self, client, admin_headers):
        resp = await client.post("/keys", json={"name": "charles", "count": 0}, headers=admin_headers)
        assert resp.status_code == 422

    async def test_batch_limit(self, client, admin_headers):
        resp = await client.post("/keys", json={"name": "charles", "count": 101}, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["code"] == "LIMIT_EXCEEDED"

    async def test_name_limit(self, client, admin_headers):
        resp = await client.post("/keys", json={"name": "x" * 1025}, headers=admin_headers)
        assert resp.status_code == 400
        assert resp.json()["code"] == "LIMIT_EXCEEDED"


class TestOpenIssuance:
    @pytest.fixture
    def app(self, monkeypatch):
        monkeypatch.setenv("CKEY_API_KEY", "test-admin-api-key")
        monkeypatch.setenv("CKEY_REQUIRE_API_KEY_FOR_GENERATE", "false")
        from ckey_engine.common.config import get_settings
        get_settings.cache_clear()

        from ckey_engine.app import create_app
        yield create_app()
        get_settings.cache_clear()

    async def test_no_header_needed(self, client):
        resp = await client.post("/keys", json={"name": "charles"})
        assert resp.status_code == 201


class TestVerifyKey:
    async def test_roundtrip(self, client, admin_headers):
        created = await client.post("/keys", json={"name": "charles"}, headers=admin_headers)
        key = created.json()["keys"][0]

        resp = await client.post("/keys/verify", json={"name": "charles", "key": key})
        assert resp.status_code == 200
        data = resp.json()
        assert data["valid"] is True
        assert data["code"] == "VALID"

    async def test_known_key(self, client):
        resp = await client.post(
            "/keys/verify", json={"name": "charles", "key": "9300ccb563c81840cb"}
        )
        assert resp.json()["valid"] is True

    async def test_other_name(self, client):
        resp = await client.post(
            "/keys/verify", json={"name": "different", "key": "9300ccb563c81840cb"}
        )
        data = resp.json()
        assert data["valid"] is False
        assert data["code"] == "NAME_MISMATCH"

    @pytest.mark.parametrize("key", ["", "123", "g" * 18, "0" * 18])
    async def test_invalid_keys(self, client, key):
        resp = await client.post("/keys/verify", json={"name": "charles", "key": key})
        assert resp.status_code == 200
        assert resp.json()["valid"] is False

    async def test_missing_field(self, client):
        resp = await client.post("/keys/verify", json={"name": "charles"})
        assert resp.status_code == 422
