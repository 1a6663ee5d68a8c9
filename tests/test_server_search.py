"""Tests for the /api/search, /api/lookup, /api/index and /api/health endpoints."""

from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

import hybrid_search.server as server_module
from hybrid_search.server import app


@pytest.fixture(autouse=True)
def fresh_tools():
    server_module.reset_tools()
    yield
    server_module.reset_tools()


def test_search_endpoint_returns_ranked_results(planning_documents) -> None:
    client = TestClient(app)

    response = client.post(
        "/api/search",
        json={"query": "forecast risk", "documents": planning_documents, "top_k": 2},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["tool_name"] == "HybridSearch"
    assert [match["id"] for match in data["output"]["results"]] == ["doc-1", "doc-3"]
    assert data["output"]["results"][0]["breakdown"] == {"text_score": 1.0, "vector_score": 0.0}


def test_search_endpoint_tolerates_malformed_parameters(planning_documents) -> None:
    client = TestClient(app)

    response = client.post(
        "/api/search",
        json={
            "query": "risk",
            "documents": planning_documents + [{"id": None}, 42],
            "top_k": "lots",
            "text_weight": 0,
            "vector_weight": 0,
        },
    )

    assert response.status_code == 200
    output = response.json()["output"]
    assert output["strategy"] == {"text_weight": 0.6, "vector_weight": 0.4}
    assert {match["id"] for match in output["results"]} == {"doc-1", "doc-3"}


def test_index_then_lookup(vector_records) -> None:
    client = TestClient(app)

    loaded = client.post("/api/index", json={"records": vector_records + [{"id": "bad"}]})
    assert loaded.status_code == 200
    assert loaded.json() == {"stored": 2, "used_index_size": 2}

    response = client.post(
        "/api/lookup",
        json={"query": "ignored", "query_embedding": [0.9, 0.1, 0.1, 0.2], "min_score": 0.5},
    )

    assert response.status_code == 200
    output = response.json()["output"]
    assert output["used_index_size"] == 2
    assert [match["id"] for match in output["matches"]] == ["vec-2"]


def test_health_endpoint_reports_both_tools(planning_documents) -> None:
    client = TestClient(app)
    client.post("/api/search", json={"query": "risk", "documents": planning_documents})

    response = client.get("/api/health")

    assert response.status_code == 200
    tools = {tool["tool_name"]: tool for tool in response.json()["tools"]}
    assert set(tools) == {"HybridSearch", "EmbeddingLookup"}
    assert tools["HybridSearch"]["status"] == "healthy"
    assert tools["HybridSearch"]["success_rate"] == 1.0
    assert tools["EmbeddingLookup"]["avg_latency_ms"] == 11
