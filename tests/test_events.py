"""
Tests for the public event catalog, the seat map and admin event creation.
"""

from __future__ import annotations

import pytest

from conftest import ANON_KEY, auth

NEW_EVENT = {
    "title": "O Auto da Compadecida",
    "description": "Comédia de Ariano Suassuna",
    "date": "2030-04-01",
    "time": "19:30",
    "spaceId": "space-main",
    "price": 80.0,
    "totalSeats": 120,
    "category": "Comédia",
    "duration": "1h40",
}


def test_list_is_public(client, event):
    resp = client.get("/api/events")

    assert resp.status_code == 200
    events = resp.get_json()["events"]
    assert events[0]["id"] == "event-hamlet"
    assert events[0]["availableSeats"] == 100
    assert events[0]["spaceId"] == "space-main"


class TestCatalogFilters:
    @pytest.fixture
    def comedy(self, backend, event):
        comedy = event.model_copy(update={
            "id": "event-auto",
            "title": "O Auto da Compadecida",
            "description": "Comédia nordestina",
            "category": "Comédia",
        })
        backend.events[comedy.id] = comedy
        return comedy

    def titles(self, client, **query):
        resp = client.get("/api/events", query_string=query)
        return [e["title"] for e in resp.get_json()["events"]]

    def test_search_matches_title_or_description(self, client, comedy):
        assert self.titles(client, search="hamlet") == ["Hamlet"]
        assert self.titles(client, search="NORDESTINA") == ["O Auto da Compadecida"]

    def test_category(self, client, comedy):
        assert self.titles(client, category="Comédia") == ["O Auto da Compadecida"]

    def test_all_category_and_blank_search_keep_everything(self, client, comedy):
        assert len(self.titles(client, category="all", search=" ")) == 2

    def test_filters_combine(self, client, comedy):
        assert self.titles(client, category="Teatro", search="auto") == []


def test_anon_key_reads_as_anonymous(client, event):
    resp = client.get("/api/events", headers=auth(ANON_KEY))
    assert resp.status_code == 200


def test_get_event(client, event):
    resp = client.get("/api/events/event-hamlet")

    assert resp.status_code == 200
    assert resp.get_json()["event"]["title"] == "Hamlet"


def test_get_unknown_event(client):
    resp = client.get("/api/events/missing")

    assert resp.status_code == 404
    assert resp.get_json() == {"error": "Evento não encontrado"}


def test_seat_map(client, event):
    resp = client.get("/api/events/event-hamlet/seats")

    assert resp.status_code == 200
    seat_map = resp.get_json()["seatMap"]
    assert seat_map["totalSeats"] == 100
    assert len(seat_map["rows"]) == 10
    assert seat_map["rows"][0][0]["id"] == "A1"
    assert seat_map["rows"][0][0]["price"] == 50.0


class TestCreateEvent:
    def test_admin_creates_event(self, client, backend, space, admin_token):
        resp = client.post("/api/events", json=NEW_EVENT, headers=auth(admin_token))

        assert resp.status_code == 201
        event = resp.get_json()["event"]
        assert event["availableSeats"] == 120
        assert event["totalSeats"] == 120
        assert event["space"] == "Sala Principal"
        assert event["id"] in backend.events

    def test_regular_user_forbidden(self, client, backend, space, user_token):
        resp = client.post("/api/events", json=NEW_EVENT, headers=auth(user_token))

        assert resp.status_code == 403
        assert resp.get_json()["error"] == "Acesso negado"
        assert backend.events == {}

    def test_anonymous_rejected(self, client, space):
        assert client.post("/api/events", json=NEW_EVENT).status_code == 401

    def test_bad_time(self, client, space, admin_token):
        resp = client.post("/api/events", json={**NEW_EVENT, "time": "7pm"}, headers=auth(admin_token))
        assert resp.status_code == 400

    def test_unknown_space(self, client, space, admin_token):
        resp = client.post("/api/events", json={**NEW_EVENT, "spaceId": "nowhere"}, headers=auth(admin_token))
        assert resp.status_code == 404

    def test_seats_must_be_positive(self, client, space, admin_token):
        resp = client.post("/api/events", json={**NEW_EVENT, "totalSeats": 0}, headers=auth(admin_token))
        assert resp.status_code == 400


def test_root_and_health(client):
    assert client.get("/api/").get_json()["status"] == "online"
    assert client.get("/health").get_json()["status"] == "healthy"


def test_non_object_body(client, user_token):
    resp = client.post("/api/bookings", json=["A1"], headers=auth(user_token))
    assert resp.status_code == 400
