"""Integration tests covering the connection request workflow."""
from __future__ import annotations

from uuid import UUID, uuid4

import pytest
from sqlalchemy import func, select

from proconnect.database import SessionLocal
from proconnect.models import Connection
from proconnect.services import (
    AlreadyResolved,
    RequestAlreadyPending,
    is_connected,
    respond_to_request,
    send_connection_request,
)
from proconnect.services import connection_service


def _connection_count() -> int:
    with SessionLocal() as session:
        return session.scalar(select(func.count()).select_from(Connection))


def test_request_shows_up_in_recipient_inbox(authed_client, user_factory):
    ada = user_factory("ada")
    ben = user_factory("ben")

    response = authed_client(ada).post(f"/api/connection/send/{ben.id}", json={"message": "Hi"})
    assert response.status_code == 201, response.text
    body = response.json()
    assert body["success"] is True
    assert body["connection"]["status"] == "pending"

    inbox = authed_client(ben).get("/api/connection/requests")
    assert inbox.status_code == 200
    received = inbox.json()["received_requests"]
    assert len(received) == 1
    assert received[0]["requester"]["id"] == str(ada.id)
    assert received[0]["requester"]["username"] == "ada"
    assert received[0]["message"] == "Hi"
    assert received[0]["status"] == "pending"
    assert "hashed_password" not in received[0]["requester"]

    sent = authed_client(ada).get("/api/connection/sent")
    assert [item["recipient"]["id"] for item in sent.json()["sent_requests"]] == [str(ben.id)]


def test_request_without_body_is_accepted(authed_client, user_factory):
    ada = user_factory("ada")
    ben = user_factory("ben")

    response = authed_client(ada).post(f"/api/connection/send/{ben.id}")
    assert response.status_code == 201
    assert response.json()["connection"]["message"] is None


def test_reverse_request_does_not_create_second_connection(authed_client, user_factory):
    ada = user_factory("ada")
    ben = user_factory("ben")

    first = authed_client(ada).post(f"/api/connection/send/{ben.id}", json={"message": "Hi"})
    assert first.status_code == 201

    reverse = authed_client(ben).post(f"/api/connection/send/{ada.id}", json={"message": "Hello"})
    assert reverse.status_code == 409
    assert reverse.json() == {
        "success": False,
        "message": "A connection request is already pending between you and this user",
        "code": "request_already_pending",
    }
    assert _connection_count() == 1


def test_simultaneous_requests_are_settled_by_pair_key(user_factory, monkeypatch):
    ada = user_factory("ada")
    ben = user_factory("ben")

    with SessionLocal() as session:
        send_connection_request(session, requester=ada, recipient_id=ben.id)

    # Simulate the second request passing its lookup before the first insert landed.
    real_lookup = connection_service._active_connection
    calls = {"count": 0}

    def _stale_lookup(db, first, second):
        calls["count"] += 1
        if calls["count"] == 1:
            return None
        return real_lookup(db, first, second)

    monkeypatch.setattr(connection_service, "_active_connection", _stale_lookup)

    with SessionLocal() as session:
        with pytest.raises(RequestAlreadyPending):
            send_connection_request(session, requester=ben, recipient_id=ada.id)

    assert calls["count"] == 2
    assert _connection_count() == 1


def test_cannot_connect_with_self_or_unknown_user(authed_client, user_factory):
    ada = user_factory("ada")
    client = authed_client(ada)

    to_self = client.post(f"/api/connection/send/{ada.id}", json={})
    assert to_self.status_code == 400
    assert to_self.json()["code"] == "invalid_target"

    unknown = client.post(f"/api/connection/send/{uuid4()}", json={})
    assert unknown.status_code == 404
    assert unknown.json()["code"] == "not_found"


def test_accepting_connects_both_sides(authed_client, user_factory):
    ada = user_factory("ada")
    ben = user_factory("ben")

    sent = authed_client(ada).post(f"/api/connection/send/{ben.id}", json={"message": "Hi"})
    connection_id = sent.json()["connection"]["id"]

    accepted = authed_client(ben).put(f"/api/connection/respond/{connection_id}", json={"status": "accepted"})
    assert accepted.status_code == 200
    payload = accepted.json()["connection"]
    assert payload["status"] == "accepted"
    assert payload["responded_at"] is not None

    ada_list = authed_client(ada).get("/api/connection/list").json()["connections"]
    ben_list = authed_client(ben).get("/api/connection/list").json()["connections"]
    assert [item["user"]["id"] for item in ada_list] == [str(ben.id)]
    assert [item["user"]["id"] for item in ben_list] == [str(ada.id)]

    # Accepted requests leave the pending inbox.
    assert authed_client(ben).get("/api/connection/requests").json()["received_requests"] == []
    history = authed_client(ben).get("/api/connection/requests", params={"status": "all"}).json()
    assert len(history["received_requests"]) == 1


def test_responding_twice_fails_with_already_resolved(user_factory):
    ada = user_factory("ada")
    ben = user_factory("ben")

    with SessionLocal() as session:
        pending = send_connection_request(session, requester=ada, recipient_id=ben.id, message="Hi")
        respond_to_request(session, connection_id=pending.id, responder=ben, decision="accepted")
        with pytest.raises(AlreadyResolved):
            respond_to_request(session, connection_id=pending.id, responder=ben, decision="rejected")
        assert session.get(Connection, pending.id).status == "accepted"


def test_only_recipient_may_respond(authed_client, user_factory):
    ada = user_factory("ada")
    ben = user_factory("ben")
    cleo = user_factory("cleo")

    sent = authed_client(ada).post(f"/api/connection/send/{ben.id}", json={})
    connection_id = sent.json()["connection"]["id"]

    by_requester = authed_client(ada).put(f"/api/connection/respond/{connection_id}", json={"status": "accepted"})
    assert by_requester.status_code == 403
    assert by_requester.json()["code"] == "forbidden"

    by_stranger = authed_client(cleo).put(f"/api/connection/respond/{connection_id}", json={"status": "accepted"})
    assert by_stranger.status_code == 403


def test_respond_validates_target_and_decision(authed_client, user_factory):
    ada = user_factory("ada")
    ben = user_factory("ben")
    client = authed_client(ben)

    missing = client.put(f"/api/connection/respond/{uuid4()}", json={"status": "accepted"})
    assert missing.status_code == 404

    sent = authed_client(ada).post(f"/api/connection/send/{ben.id}", json={})
    connection_id = sent.json()["connection"]["id"]
    bad = authed_client(ben).put(f"/api/connection/respond/{connection_id}", json={"status": "maybe"})
    assert bad.status_code == 400
    assert bad.json()["success"] is False
    assert bad.json()["code"] == "invalid_input"


def test_connected_users_cannot_request_again(authed_client, user_factory, connect):
    ada = user_factory("ada")
    ben = user_factory("ben")
    connect(ada, ben)

    again = authed_client(ben).post(f"/api/connection/send/{ada.id}", json={})
    assert again.status_code == 409
    assert again.json()["code"] == "already_connected"


def test_rejection_allows_a_fresh_request(authed_client, user_factory):
    ada = user_factory("ada")
    ben = user_factory("ben")

    sent = authed_client(ada).post(f"/api/connection/send/{ben.id}", json={})
    connection_id = sent.json()["connection"]["id"]
    rejected = authed_client(ben).put(f"/api/connection/respond/{connection_id}", json={"status": "rejected"})
    assert rejected.json()["connection"]["status"] == "rejected"

    with SessionLocal() as session:
        assert session.get(Connection, UUID(connection_id)).active_pair_key is None
        assert is_connected(session, ada.id, ben.id) is False

    retry = authed_client(ada).post(f"/api/connection/send/{ben.id}", json={"message": "Second try"})
    assert retry.status_code == 201
    assert _connection_count() == 2


def test_is_connected_is_symmetric(user_factory, connect):
    ada = user_factory("ada")
    ben = user_factory("ben")
    cleo = user_factory("cleo")
    connect(ada, ben)

    with SessionLocal() as session:
        assert is_connected(session, ada.id, ben.id) is True
        assert is_connected(session, ben.id, ada.id) is True
        assert is_connected(session, ada.id, cleo.id) is False
        assert is_connected(session, cleo.id, ada.id) is False
        assert is_connected(session, ada.id, ada.id) is False


def test_connection_status_labels(authed_client, user_factory, connect):
    ada = user_factory("ada")
    ben = user_factory("ben")
    cleo = user_factory("cleo")
    dev = user_factory("dev")
    connect(ada, ben)
    authed_client(ada).post(f"/api/connection/send/{cleo.id}", json={})
    authed_client(dev).post(f"/api/connection/send/{ada.id}", json={})

    client = authed_client(ada)
    labels = {
        user.username: client.get(f"/api/connection/status/{user.id}").json()["status"]
        for user in (ada, ben, cleo, dev)
    }
    assert labels == {"ada": "self", "ben": "connected", "cleo": "outgoing", "dev": "incoming"}


def test_unknown_status_filter_is_rejected(authed_client, user_factory):
    ada = user_factory("ada")
    response = authed_client(ada).get("/api/connection/sent", params={"status": "archived"})
    assert response.status_code == 400
    assert response.json()["code"] == "invalid_input"
