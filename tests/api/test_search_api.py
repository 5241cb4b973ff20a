"""
Tests for the HTTP API.

Uses FastAPI's TestClient against an app built around an in-memory
dataset, so no file or network access is needed.
"""

import pytest
from fastapi.testclient import TestClient

from src.api.search_api import create_app
from src.skypath.application import SearchItineraries
from src.skypath.config import Settings
from tests.factories import airport, dataset, flight


@pytest.fixture
def client(north_america_dataset) -> TestClient:
    north_america_dataset["airports"].append(airport("AAA"))
    north_america_dataset["flights"].append(
        flight("BAD1", "AAA", "XXX", "2024-06-01T08:00:00", "2024-06-01T09:00:00")
    )
    north_america_dataset["flights"].append(
        flight("BAD2", "XXX", "JFK", "2024-06-01T10:00:00", "2024-06-01T11:00:00")
    )
    searcher = SearchItineraries(dataset=north_america_dataset)
    app = create_app(searcher=searcher, settings=Settings())
    return TestClient(app)


class TestHealth:
    def test_ok(self, client):
        response = client.get("/api/health")
        assert response.status_code == 200
        assert response.json() == {"ok": True}


class TestSearchEndpoint:
    def test_camel_case_results(self, client):
        response = client.get(
            "/api/search", params={"origin": "jfk", "destination": "LAX", "date": "2024-06-01"}
        )
        assert response.status_code == 200

        body = response.json()
        assert body["origin"] == "JFK"
        assert body["destination"] == "LAX"
        assert body["date"] == "2024-06-01"
        assert body["count"] == 3

        first = body["itineraries"][0]
        assert first["totalDurationMinutes"] == 360
        assert first["totalPrice"] == 200.0
        assert first["layoversMinutes"] == []
        segment = first["segments"][0]
        assert segment["flightNumber"] == "SP100"
        assert segment["departureLocal"] == "2024-06-01T08:00:00"
        assert segment["arrivalLocal"] == "2024-06-01T11:00:00"

        assert body["itineraries"][1]["layoversMinutes"] == [60]

    def test_same_airport(self, client):
        response = client.get(
            "/api/search", params={"origin": "JFK", "destination": "jfk", "date": "2024-06-01"}
        )
        assert response.status_code == 200
        assert response.json()["count"] == 0

    @pytest.mark.parametrize(
        "params",
        [
            {},
            {"origin": "JFK", "destination": "LAX"},
            {"origin": "", "destination": "LAX", "date": "2024-06-01"},
        ],
    )
    def test_missing_params(self, client, params):
        response = client.get("/api/search", params=params)
        assert response.status_code == 400
        assert response.json() == {
            "message": "origin, destination, and date are required",
            "kind": None,
        }

    def test_invalid_airport_code(self, client):
        response = client.get(
            "/api/search", params={"origin": "J1K", "destination": "LAX", "date": "2024-06-01"}
        )
        assert response.status_code == 400
        assert response.json() == {
            "message": "invalid origin airport code: J1K",
            "kind": "invalid_airport_code",
        }

    def test_invalid_date(self, client):
        response = client.get(
            "/api/search", params={"origin": "JFK", "destination": "LAX", "date": "2024-6-1"}
        )
        assert response.status_code == 400
        assert response.json()["kind"] == "invalid_date"

    def test_dataset_problem_aborts_query(self, client):
        response = client.get(
            "/api/search", params={"origin": "AAA", "destination": "JFK", "date": "2024-06-01"}
        )
        assert response.status_code == 400
        assert response.json() == {"message": "unknown airport: XXX", "kind": "unknown_airport"}

    def test_cors_header(self, client):
        response = client.get("/api/health", headers={"Origin": "http://example.com"})
        assert response.headers["access-control-allow-origin"] == "*"


class TestAirportsEndpoint:
    def test_sorted_airports(self, client):
        response = client.get("/api/airports")
        assert response.status_code == 200
        body = response.json()
        assert [a["code"] for a in body] == ["AAA", "JFK", "LAX", "ORD", "YYZ"]
        assert body[-1]["country"] == "CA"
        assert body[-1]["timezone"] == "America/Toronto"
