"""
API tests for /api/v1/library and /api/v1/history routes.

System role: Verification of the library/history HTTP surface and error mapping
"""

from datetime import datetime
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
from fastapi.testclient import TestClient

from dreamgen.api.deps.dependencies import get_history_service, get_library_service
from dreamgen.api.main import create_app
from dreamgen.core.exceptions import (
    GenerationNotFoundError,
    LibraryEntryNotFoundError,
    PermissionDeniedError,
)

USER = {"X-User-Id": "user-1"}


def make_entry(**overrides) -> dict:
    now = datetime(2025, 3, 9, 12, 0, 0)
    entry = {
        "id": uuid4(),
        "user_id": "user-1",
        "title": "Sunset",
        "prompt": "golden hour beach",
        "category": None,
        "is_public": True,
        "source_generation_id": None,
        "like_count": 0,
        "created_at": now,
        "updated_at": now,
    }
    entry.update(overrides)
    return entry


@pytest.fixture
def client():
    app = create_app()
    return TestClient(app)


@pytest.fixture
def mock_library_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_library_service] = lambda: service
    return service


@pytest.fixture
def mock_history_service(client):
    service = AsyncMock()
    client.app.dependency_overrides[get_history_service] = lambda: service
    return service


def test_list_public_entries(client, mock_library_service):
    mock_library_service.list_entries.return_value = [make_entry(), make_entry(title="Forest")]

    response = client.get("/api/v1/library", params={"q": "sun"})

    assert response.status_code == 200
    assert [e["title"] for e in response.json()] == ["Sunset", "Forest"]
    kwargs = mock_library_service.list_entries.await_args.kwargs
    assert kwargs["user_id"] is None
    assert kwargs["query"] == "sun"


def test_list_mine_uses_caller(client, mock_library_service):
    mock_library_service.list_entries.return_value = []

    response = client.get("/api/v1/library", params={"mine": "true"}, headers=USER)

    assert response.status_code == 200
    assert mock_library_service.list_entries.await_args.kwargs["user_id"] == "user-1"


def test_list_mine_requires_user(client, mock_library_service):
    response = client.get("/api/v1/library", params={"mine": "true"})

    assert response.status_code == 401
    mock_library_service.list_entries.assert_not_awaited()


def test_create_entry(client, mock_library_service):
    mock_library_service.create_entry.return_value = make_entry(category="travel")

    response = client.post(
        "/api/v1/library",
        json={"title": "Sunset", "prompt": "golden hour beach", "category": "travel"},
        headers=USER,
    )

    assert response.status_code == 201
    assert response.json()["category"] == "travel"
    assert mock_library_service.create_entry.await_args.kwargs["user_id"] == "user-1"


def test_create_entry_requires_user(client, mock_library_service):
    response = client.post("/api/v1/library", json={"title": "t", "prompt": "p"})

    assert response.status_code == 401


def test_create_entry_rejects_empty_title(client, mock_library_service):
    response = client.post("/api/v1/library", json={"title": "", "prompt": "p"}, headers=USER)

    assert response.status_code == 422


def test_get_entry_with_images(client, mock_library_service):
    entry = make_entry(source_generation_id=uuid4())
    mock_library_service.get_entry.return_value = {
        **entry,
        "input_images": ["https://img/in"],
        "output_images": ["https://img/out"],
    }

    response = client.get(f"/api/v1/library/{entry['id']}")

    assert response.status_code == 200
    assert response.json()["output_images"] == ["https://img/out"]


def test_get_entry_passes_caller(client, mock_library_service):
    entry = make_entry()
    mock_library_service.get_entry.return_value = {**entry, "input_images": [], "output_images": []}

    client.get(f"/api/v1/library/{entry['id']}", headers=USER)
    client.get(f"/api/v1/library/{entry['id']}")

    calls = mock_library_service.get_entry.await_args_list
    assert calls[0].args == (entry["id"], "user-1")
    assert calls[1].args == (entry["id"], None)


def test_private_entry_of_other_user_returns_404(client, mock_library_service):
    entry_id = uuid4()
    mock_library_service.get_entry.side_effect = LibraryEntryNotFoundError(str(entry_id))

    response = client.get(f"/api/v1/library/{entry_id}", headers={"X-User-Id": "stranger"})

    assert response.status_code == 404
    mock_library_service.get_entry.assert_awaited_once_with(entry_id, "stranger")


def test_get_missing_entry_returns_404(client, mock_library_service):
    entry_id = uuid4()
    mock_library_service.get_entry.side_effect = LibraryEntryNotFoundError(str(entry_id))

    response = client.get(f"/api/v1/library/{entry_id}")

    assert response.status_code == 404


def test_update_by_non_owner_returns_403(client, mock_library_service):
    mock_library_service.update_entry.side_effect = PermissionDeniedError(
        "Only the owner can modify this library entry"
    )

    response = client.put(f"/api/v1/library/{uuid4()}", json={"title": "x"}, headers=USER)

    assert response.status_code == 403
    assert response.json()["detail"] == "Only the owner can modify this library entry"


def test_update_passes_only_sent_fields(client, mock_library_service):
    entry = make_entry(is_public=False)
    mock_library_service.update_entry.return_value = entry

    response = client.put(f"/api/v1/library/{entry['id']}", json={"is_public": False}, headers=USER)

    assert response.status_code == 200
    call = mock_library_service.update_entry.await_args
    assert call.args[1] == "user-1"
    assert call.kwargs == {"is_public": False}


def test_delete_entry(client, mock_library_service):
    entry_id = uuid4()

    response = client.delete(f"/api/v1/library/{entry_id}", headers=USER)

    assert response.status_code == 204
    mock_library_service.delete_entry.assert_awaited_once_with(entry_id, "user-1")


def test_toggle_like(client, mock_library_service):
    mock_library_service.toggle_like.return_value = {"liked": True, "like_count": 3}

    response = client.post(f"/api/v1/library/{uuid4()}/like", headers=USER)

    assert response.status_code == 200
    assert response.json() == {"liked": True, "like_count": 3}


def test_like_private_entry_of_other_user_returns_404(client, mock_library_service):
    entry_id = uuid4()
    mock_library_service.toggle_like.side_effect = LibraryEntryNotFoundError(str(entry_id))

    response = client.post(f"/api/v1/library/{entry_id}/like", headers={"X-User-Id": "stranger"})

    assert response.status_code == 404
    mock_library_service.toggle_like.assert_awaited_once_with(entry_id, "stranger")


def test_liked_ids(client, mock_library_service):
    ids = [str(uuid4()), str(uuid4())]
    mock_library_service.liked_ids.return_value = ids

    response = client.get("/api/v1/library/likes", headers=USER)

    assert response.status_code == 200
    assert response.json() == {"ids": ids}


def test_unexpected_error_returns_500(client, mock_library_service):
    mock_library_service.list_entries.side_effect = RuntimeError("connection lost")

    response = client.get("/api/v1/library")

    assert response.status_code == 500


def test_history_requires_user(client, mock_history_service):
    response = client.get("/api/v1/history")

    assert response.status_code == 401


def test_list_history(client, mock_history_service):
    mock_history_service.list_history.return_value = [
        {
            "id": uuid4(),
            "prompt_text": "a red fox",
            "created_at": datetime(2025, 3, 9, 12, 0, 0),
            "input_images": [],
            "output_images": ["https://img/out"],
        }
    ]

    response = client.get("/api/v1/history", headers=USER)

    assert response.status_code == 200
    assert response.json()[0]["prompt_text"] == "a red fox"
    mock_history_service.list_history.assert_awaited_once_with("user-1")


def test_add_generation_to_library(client, mock_history_service):
    generation_id = uuid4()
    mock_history_service.add_to_library.return_value = make_entry(source_generation_id=generation_id)

    response = client.post(f"/api/v1/history/{generation_id}/library", headers=USER)

    assert response.status_code == 201
    assert response.json()["source_generation_id"] == str(generation_id)


def test_add_missing_generation_returns_404(client, mock_history_service):
    generation_id = uuid4()
    mock_history_service.add_to_library.side_effect = GenerationNotFoundError(str(generation_id))

    response = client.post(f"/api/v1/history/{generation_id}/library", headers=USER)

    assert response.status_code == 404
