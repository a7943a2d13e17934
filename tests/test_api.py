from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from memory_vault.core.config import Settings
from memory_vault.main import MCP_OPERATIONS, create_app
from memory_vault.services.memory_service import MemoryService

from .conftest import SPRING_CHUNKS

BASE = "/api/v1/memories"


@pytest.fixture
def client(store, config):
    app = create_app(MemoryService(store, config=config), instrument=False)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def memory_id(client) -> str:
    response = client.post(BASE, json={"title": "Spring Boot Basics", "description": "Intro notes"})
    assert response.status_code == 201
    return response.json()["id"]


def test_health(client):
    assert client.get("/health").json()["status"] == "healthy"


def test_create_ingest_build_and_chat(client, memory_id):
    added = client.post(f"{BASE}/{memory_id}/chunks", json={"chunks": SPRING_CHUNKS})
    assert added.status_code == 200
    assert added.json()["total_chunks"] == 3
    assert added.json()["status"] == "CREATED"

    built = client.post(f"{BASE}/{memory_id}/build")
    assert built.status_code == 200
    assert built.json()["status"] == "BUILT"

    chat = client.post(f"{BASE}/{memory_id}/chat", json={"question": "What is Spring Boot?"})
    assert chat.status_code == 200
    assert "Chunk 0: Spring Boot simplifies Java development." in chat.json()["response"]
    assert "Spring Boot Basics" in chat.json()["response"]

    detail = client.get(f"{BASE}/{memory_id}").json()
    assert [c["chunk_index"] for c in detail["chunks"]] == [0, 1, 2]
    assert detail["index"]["total_words"] == 13
    assert detail["index"]["keywords"][:2] == ["spring", "boot"]


def test_chat_before_build_conflicts(client, memory_id):
    response = client.post(f"{BASE}/{memory_id}/chat", json={"question": "What is Spring Boot?"})

    assert response.status_code == 409
    assert response.json()["error_code"] == "2001"


def test_build_without_chunks_conflicts(client, memory_id):
    assert client.post(f"{BASE}/{memory_id}/build").status_code == 409
    assert client.get(f"{BASE}/{memory_id}").json()["status"] == "CREATED"


@pytest.mark.parametrize(
    ("path", "body"),
    [
        ("", {"title": "   "}),
        ("", {"title": "x" * 256}),
        ("/{id}/chunks", {"chunks": []}),
        ("/{id}/chunks", {"chunks": ["fine", " "]}),
        ("/{id}/chat", {"question": " "}),
    ],
)
def test_invalid_bodies_are_rejected_as_invalid_arguments(client, memory_id, path, body):
    response = client.post(BASE + path.format(id=memory_id), json=body)

    assert response.status_code == 400
    assert response.json()["error_code"] == "1001"


def test_unknown_memory_is_404(client):
    missing = uuid4()
    assert client.get(f"{BASE}/{missing}").status_code == 404
    assert client.post(f"{BASE}/{missing}/chunks", json={"chunks": ["text"]}).status_code == 404
    assert client.post(f"{BASE}/{missing}/build").status_code == 404
    assert client.delete(f"{BASE}/{missing}").status_code == 404


def test_listing_search_and_status(client, memory_id):
    client.post(BASE, json={"title": "Cooking", "description": "Spring onions"})
    client.post(BASE, json={"title": "Travel"})
    client.post(f"{BASE}/{memory_id}/chunks", json={"chunks": SPRING_CHUNKS})
    client.post(f"{BASE}/{memory_id}/build")

    page = client.get(BASE, params={"page": 0, "size": 2}).json()
    assert page["total"] == 3
    assert [item["title"] for item in page["items"]] == ["Travel", "Cooking"]

    found = client.get(f"{BASE}/search", params={"query": "spring"}).json()
    assert {item["title"] for item in found} == {"Spring Boot Basics", "Cooking"}

    built = client.get(f"{BASE}/status/BUILT").json()
    assert [item["id"] for item in built] == [memory_id]

    system = client.get("/status").json()
    assert system["total_memories"] == 3
    assert system["ready_for_chat"] == 1
    assert system["status_counts"]["CREATED"] == 2


def test_oversized_page_is_rejected(client):
    assert client.get(BASE, params={"size": 1000}).status_code == 400


def test_delete(client, memory_id):
    assert client.delete(f"{BASE}/{memory_id}").status_code == 204
    assert client.get(f"{BASE}/{memory_id}").status_code == 404


def test_memory_operations_are_mcp_tools(store, config):
    app = create_app(MemoryService(store, config=config), instrument=False)

    tools = {tool.name for tool in app.state.mcp.tools}

    assert tools == set(MCP_OPERATIONS)
    assert "health" not in tools


def test_sample_data_is_seeded_at_startup(store):
    config = Settings(seed_sample_data=True)
    app = create_app(MemoryService(store, config=config), instrument=False)

    with TestClient(app) as test_client:
        system = test_client.get("/status").json()

    assert system["total_memories"] == 4
    assert system["ready_for_chat"] == 3
    assert system["status_counts"]["CREATED"] == 1
