"""
Tests for the /api/v1/transform and /api/v1/maps endpoints.
"""

import inspect

import pytest
import httpx
from fastapi import FastAPI

from jsontransform.api.routes.transform import transform_document


@pytest.mark.asyncio
async def test_health_check(client: httpx.AsyncClient) -> None:
    """Health endpoint should return 200 with app info."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "healthy"
    assert "version" in data


@pytest.mark.asyncio
async def test_transform_with_inline_map(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/api/v1/transform/",
        json={
            "document": {"firstname": "Jane", "lastname": "Doe"},
            "map": {"person": {"first": "firstname", "last": "lastname"}},
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["output"] == {"person": {"first": "Jane", "last": "Doe"}}
    assert data["diagnostics"] == []
    assert list(data["output"]["person"]) == ["first", "last"]


@pytest.mark.asyncio
async def test_transform_with_default_map(
    client: httpx.AsyncClient, person_document: dict
) -> None:
    response = await client.post(
        "/api/v1/transform/", json={"document": person_document})
    assert response.status_code == 200
    data = response.json()
    assert list(data["output"]) == ["person", "card"]
    assert data["output"]["person"]["sgs"] == person_document["sgs"]


@pytest.mark.asyncio
async def test_transform_reports_missing_field(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/api/v1/transform/",
        json={"document": {"a": "x"}, "map": {"g": {"missing": "b"}}},
    )
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "partial"
    assert data["output"] == {"g": {"missing": ""}}
    assert data["diagnostics"][0]["error_code"] == "MISSING_SOURCE_FIELD"
    assert data["diagnostics"][0]["source_field"] == "b"


@pytest.mark.asyncio
async def test_transform_strict_returns_422(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/api/v1/transform/",
        json={"document": {"a": "x"}, "map": {"g": {"missing": "b"}}, "strict": True},
    )
    assert response.status_code == 422
    data = response.json()
    assert data["error"] is True
    assert data["error_code"] == "TRANSFORMATION_ERROR"
    assert data["details"]["diagnostics"][0]["field"] == "missing"
    assert "request_id" in data


@pytest.mark.asyncio
async def test_transform_malformed_map(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/api/v1/transform/",
        json={"document": {"a": "x"}, "map": {"g": ["a"]}},
    )
    assert response.status_code == 422
    data = response.json()
    assert data["error_code"] == "MALFORMED_MAP"
    assert data["details"]["path"] == "g"


@pytest.mark.asyncio
async def test_transform_missing_document(client: httpx.AsyncClient) -> None:
    """Transform should return 422 when the document is missing."""
    response = await client.post("/api/v1/transform/", json={})
    assert response.status_code == 422
    data = response.json()
    assert data["error"] is True
    assert data["error_code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_transform_without_default_map(
    app: FastAPI, client: httpx.AsyncClient
) -> None:
    app.state.default_map = None
    response = await client.post("/api/v1/transform/", json={"document": {"a": "x"}})
    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_transform_batch(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/api/v1/transform/batch",
        json={
            "documents": [{"a": "1"}, {"a": "2"}, {}],
            "map": {"g": {"out": "a"}},
        },
    )
    assert response.status_code == 200
    data = response.json()
    assert data["total_count"] == 3
    assert [r["output"]["g"]["out"] for r in data["results"]] == ["1", "2", ""]
    assert data["metadata"]["diagnostic_count"] == 1


@pytest.mark.asyncio
async def test_transform_batch_empty(client: httpx.AsyncClient) -> None:
    response = await client.post("/api/v1/transform/batch", json={"documents": []})
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_default_map(client: httpx.AsyncClient) -> None:
    response = await client.get("/api/v1/maps/default")
    assert response.status_code == 200
    data = response.json()
    assert data["total_count"] == 2
    assert data["groups"][1]["name"] == "card"
    assert data["groups"][1]["field_specs"][0] == {
        "destination": "mifare", "source": "currentMifareID"}


@pytest.mark.asyncio
async def test_default_map_not_configured(
    app: FastAPI, client: httpx.AsyncClient
) -> None:
    app.state.default_map = None
    response = await client.get("/api/v1/maps/default")
    assert response.status_code == 404
    assert response.json()["error_code"] == "NOT_FOUND"


@pytest.mark.asyncio
async def test_request_id_is_echoed(client: httpx.AsyncClient) -> None:
    response = await client.get("/health", headers={"X-Request-ID": "req-42"})
    assert response.headers["X-Request-ID"] == "req-42"


@pytest.mark.asyncio
async def test_transform_rejects_repeated_inline_destination_field(
    client: httpx.AsyncClient,
) -> None:
    """The later of two equal destination fields must not silently win."""
    response = await client.post(
        "/api/v1/transform/",
        content='{"document":{"a":"1","b":"2"},"map":{"g":{"x":"a","x":"b"}}}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
    data = response.json()
    assert data["error_code"] == "DUPLICATE_DESTINATION_FIELD"
    assert data["details"]["group"] == "g"
    assert data["details"]["field"] == "x"


@pytest.mark.asyncio
async def test_batch_rejects_repeated_inline_destination_field(
    client: httpx.AsyncClient,
) -> None:
    response = await client.post(
        "/api/v1/transform/batch",
        content='{"documents":[{"a":"1"}],"map":{"g":{"x":"a","x":"a"}}}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert response.json()["error_code"] == "DUPLICATE_DESTINATION_FIELD"


@pytest.mark.asyncio
async def test_transform_rejects_repeated_inline_group(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/api/v1/transform/",
        content='{"document":{"a":"1"},"map":{"g":{"x":"a"},"g":{"y":"a"}}}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert response.json()["error_code"] == "MALFORMED_MAP"


@pytest.mark.asyncio
async def test_repeated_keys_in_document_keep_last(client: httpx.AsyncClient) -> None:
    """Only the map gets duplicate checks; the document decodes as plain JSON."""
    response = await client.post(
        "/api/v1/transform/",
        content='{"document":{"a":"1","a":"2"},"map":{"g":{"x":"a"}}}',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 200
    assert response.json()["output"] == {"g": {"x": "2"}}


@pytest.mark.asyncio
async def test_transform_invalid_json_body(client: httpx.AsyncClient) -> None:
    response = await client.post(
        "/api/v1/transform/",
        content='{"document": ',
        headers={"Content-Type": "application/json"},
    )
    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"


def test_single_transform_route_runs_in_threadpool() -> None:
    """A sync endpoint is run off the event loop by FastAPI."""
    assert not inspect.iscoroutinefunction(transform_document)


@pytest.mark.asyncio
async def test_openapi_documents_request_body(client: httpx.AsyncClient) -> None:
    response = await client.get("/openapi.json")
    assert response.status_code == 200
    operation = response.json()["paths"]["/api/v1/transform/"]["post"]
    schema = operation["requestBody"]["content"]["application/json"]["schema"]
    assert "document" in schema["properties"]
    assert "map" in schema["properties"]
