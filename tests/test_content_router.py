from __future__ import annotations

from unittest.mock import patch

from pix_api.core.cache import cache
from tests.utils import airtable_response, challenge_record


def test_list_course_groups(client):
    airtable_payload = {
        "records": [
            {"id": "recG1", "fields": {"Nom": "Groupe 1", "Tests": ["recC1"]}},
            {"id": "recG2", "fields": {"Nom": "Groupe 2"}},
        ]
    }
    with patch("pix_api.services.airtable.client.requests.get") as requests_get:
        requests_get.return_value = airtable_response(airtable_payload)

        first = client.get("/api/course-groups")
        second = client.get("/api/course-groups")

    assert first.status_code == 200
    assert first.json() == second.json()
    assert requests_get.call_count == 1
    assert first.json()["data"] == [
        {
            "type": "course-groups",
            "id": "recG1",
            "attributes": {"name": "Groupe 1"},
            "relationships": {"courses": {"data": [{"type": "courses", "id": "recC1"}]}},
        },
        {
            "type": "course-groups",
            "id": "recG2",
            "attributes": {"name": "Groupe 2"},
            "relationships": {"courses": {"data": []}},
        },
    ]


def test_get_challenge_hides_solution(client):
    record = challenge_record("recChallenge", **{"Consigne": "Combien font 1 + 1 ?"})
    with patch("pix_api.services.airtable.client.requests.get") as requests_get:
        requests_get.return_value = airtable_response(record)
        response = client.get("/api/challenges/recChallenge")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["id"] == "recChallenge"
    assert data["attributes"]["instruction"] == "Combien font 1 + 1 ?"
    assert data["attributes"]["type"] == "QCU"
    assert "solution" not in data["attributes"]
    assert "challenge-repository_get_recChallenge" in cache


def test_get_unknown_challenge(client):
    with patch("pix_api.services.airtable.client.requests.get") as requests_get:
        requests_get.return_value = airtable_response({"error": "NOT_FOUND"}, status_code=404)
        response = client.get("/api/challenges/recUnknown")

    assert response.status_code == 404
    assert response.json()["errors"][0]["title"] == "Not Found"
