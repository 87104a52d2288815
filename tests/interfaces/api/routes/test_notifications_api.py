"""Tests for the notification endpoints."""

from __future__ import annotations

import pytest

pytest.importorskip("fastapi")
from fastapi.testclient import TestClient
from jose import jwt

from bms_notifications.application.services import NotificationService
from bms_notifications.domain.entities import NotificationType
from bms_notifications.domain.exceptions import NOT_FOUND_OR_FORBIDDEN_MESSAGE
from bms_notifications.infrastructure.database import (
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from bms_notifications.infrastructure.repositories import NotificationRepository
from bms_notifications.interfaces.api.dependencies import get_notification_service
from main import create_app

OWNER_ID = 1
OTHER_ID = 2


@pytest.fixture(autouse=True)
def reset_database():
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def app():
    return create_app()


@pytest.fixture()
def client(app):
    with TestClient(app) as test_client:
        yield test_client


def _auth_headers(user_id: int) -> dict[str, str]:
    token = jwt.encode({"sub": str(user_id)}, "test-secret", algorithm="HS256")
    return {"Authorization": f"Bearer {token}"}


def _seed(user_id: int, *titles: str) -> list[int]:
    with SessionLocal() as session:
        service = NotificationService(NotificationRepository(session))
        return [
            service.create_notification(
                user_id=user_id,
                organization_id=9,
                type=NotificationType.GENERAL,
                title=title,
                message=f"{title} message",
            ).id
            for title in titles
        ]


def test_notification_flow(client: TestClient) -> None:
    """Exercise listing, acknowledging and deleting through the API."""

    t1, t2, _ = _seed(OWNER_ID, "T1", "T2", "T3")
    headers = _auth_headers(OWNER_ID)

    response = client.get("/notifications/unread-count", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"unread_count": 3}

    response = client.put(f"/notifications/{t2}/read", headers=headers)
    assert response.status_code == 200
    assert response.json()["is_read"] is True
    assert response.json()["id"] == t2

    response = client.get("/notifications/", params={"skip": 0, "take": 2}, headers=headers)
    assert response.status_code == 200
    body = response.json()
    assert [item["title"] for item in body["notifications"]] == ["T3", "T2"]
    assert body["pagination"] == {"total": 3, "skip": 0, "take": 2, "pages": 2}

    response = client.put("/notifications/read-all", headers=headers)
    assert response.status_code == 200
    assert response.json() == {"updated": 2}

    response = client.delete(f"/notifications/{t1}", headers=headers)
    assert response.status_code == 204

    response = client.get("/notifications/", headers=headers)
    assert response.json()["pagination"]["total"] == 2
    assert response.json()["pagination"]["take"] == 50


def test_foreign_and_missing_notifications_return_same_404(client: TestClient) -> None:
    (notification_id,) = _seed(OWNER_ID, "Private")
    headers = _auth_headers(OTHER_ID)

    foreign_read = client.put(f"/notifications/{notification_id}/read", headers=headers)
    foreign_delete = client.delete(f"/notifications/{notification_id}", headers=headers)
    missing = client.delete(f"/notifications/{notification_id + 100}", headers=headers)

    for response in (foreign_read, foreign_delete, missing):
        assert response.status_code == 404
        assert response.json() == {"detail": NOT_FOUND_OR_FORBIDDEN_MESSAGE}

    owner_view = client.get("/notifications/unread-count", headers=_auth_headers(OWNER_ID))
    assert owner_view.json() == {"unread_count": 1}


def test_take_zero_is_rejected(client: TestClient) -> None:
    response = client.get(
        "/notifications/", params={"take": 0}, headers=_auth_headers(OWNER_ID)
    )

    assert response.status_code == 400


@pytest.mark.parametrize(
    "headers",
    [
        {},
        {"Authorization": "Bearer not-a-token"},
        {"Authorization": f"Bearer {jwt.encode({'sub': '1'}, 'wrong-secret', algorithm='HS256')}"},
        {"Authorization": f"Bearer {jwt.encode({'role': 'admin'}, 'test-secret', algorithm='HS256')}"},
    ],
)
def test_requests_without_valid_token_are_rejected(client: TestClient, headers) -> None:
    response = client.get("/notifications/unread-count", headers=headers)

    assert response.status_code == 401
    if headers:
        assert response.json() == {"detail": "Could not validate credentials"}


def test_storage_failures_map_to_service_unavailable(app, failing_store) -> None:
    app.dependency_overrides[get_notification_service] = lambda: NotificationService(
        failing_store
    )
    headers = _auth_headers(OWNER_ID)

    with TestClient(app) as client:
        responses = [
            client.get("/notifications/", headers=headers),
            client.get("/notifications/unread-count", headers=headers),
            client.put("/notifications/read-all", headers=headers),
            client.put("/notifications/5/read", headers=headers),
            client.delete("/notifications/5", headers=headers),
        ]

    assert [response.status_code for response in responses] == [503] * 5
    assert {response.json()["detail"] for response in responses} == {
        "Notification service is temporarily unavailable"
    }


def test_out_of_range_identifiers_are_rejected(client: TestClient) -> None:
    _seed(OWNER_ID, "Kept")
    headers = _auth_headers(OWNER_ID)
    oversized = 2**70

    responses = [
        client.put(f"/notifications/{oversized}/read", headers=headers),
        client.delete(f"/notifications/{oversized}", headers=headers),
        client.put("/notifications/0/read", headers=headers),
        client.get("/notifications/", params={"skip": oversized, "take": 1}, headers=headers),
        client.get("/notifications/", params={"skip": -1}, headers=headers),
        client.get("/notifications/", params={"take": oversized}, headers=headers),
    ]

    assert [response.status_code for response in responses] == [422] * 6
    assert client.get("/notifications/unread-count", headers=headers).json() == {
        "unread_count": 1
    }


def test_largest_identifier_is_reported_as_not_found(client: TestClient) -> None:
    largest = 2**63 - 1
    headers = _auth_headers(OWNER_ID)

    read = client.put(f"/notifications/{largest}/read", headers=headers)
    listed = client.get("/notifications/", params={"skip": largest, "take": 1}, headers=headers)

    assert read.status_code == 404
    assert read.json() == {"detail": NOT_FOUND_OR_FORBIDDEN_MESSAGE}
    assert listed.status_code == 200
    assert listed.json()["notifications"] == []
