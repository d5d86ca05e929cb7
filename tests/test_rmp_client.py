"""
Unit Tests for the Rate My Professors Client

HTTP calls are mocked through a fake requests session.
"""

import pytest
import requests
from unittest.mock import Mock

from clients.rmp_client import (
    RateMyProfessorClient,
    ProfessorLookupError,
    format_professor,
)


TEACHER_NODE = {
    "id": "VGVhY2hlci0x",
    "legacyId": 1,
    "firstName": "Ada",
    "lastName": "Lovelace",
    "department": "Computer Science",
    "avgRating": 4.8,
    "avgDifficulty": 3.1,
    "numRatings": 120,
    "wouldTakeAgainPercent": 95.0,
    "school": {"name": "State University"},
}


def graphql_response(edges=None, errors=None, status=200):
    response = Mock()
    response.status_code = status
    body = {"data": {"newSearch": {"teachers": {"edges": edges or []}}}}
    if errors:
        body["errors"] = errors
    response.json.return_value = body
    if status >= 400:
        response.raise_for_status.side_effect = requests.HTTPError(f"{status} error")
    return response


@pytest.fixture
def session():
    session = Mock()
    session.headers = {}
    return session


class TestSearchProfessor:
    """Test RateMyProfessorClient.search_professor."""

    def test_found(self, session):
        session.post.return_value = graphql_response(edges=[{"node": TEACHER_NODE}])
        client = RateMyProfessorClient(url="https://rmp.test/graphql", school_id="U2Nob29sLTE=", session=session)

        professor = client.search_professor("Ada Lovelace")

        assert professor["name"] == "Ada Lovelace"
        assert professor["avg_rating"] == 4.8
        assert professor["school"] == "State University"

        _, kwargs = session.post.call_args
        assert kwargs["json"]["variables"] == {"text": "Ada Lovelace", "schoolID": "U2Nob29sLTE="}
        assert session.headers["Authorization"].startswith("Basic ")

    def test_not_found(self, session):
        session.post.return_value = graphql_response(edges=[])
        client = RateMyProfessorClient(session=session)

        assert client.search_professor("Nobody Atall") is None

    def test_http_error(self, session):
        session.post.return_value = graphql_response(status=503)
        client = RateMyProfessorClient(session=session)

        with pytest.raises(ProfessorLookupError, match="request failed"):
            client.search_professor("Ada Lovelace")

    def test_connection_error(self, session):
        session.post.side_effect = requests.ConnectionError("no route to host")
        client = RateMyProfessorClient(session=session)

        with pytest.raises(ProfessorLookupError):
            client.search_professor("Ada Lovelace")

    def test_graphql_errors(self, session):
        session.post.return_value = graphql_response(errors=[{"message": "Unauthorized"}])
        client = RateMyProfessorClient(session=session)

        with pytest.raises(ProfessorLookupError, match="Unauthorized"):
            client.search_professor("Ada Lovelace")


class TestGetManyProfessorsData:
    """Test batch lookups."""

    def test_keeps_order_and_marks_missing(self, session):
        session.post.side_effect = [
            graphql_response(edges=[{"node": TEACHER_NODE}]),
            graphql_response(edges=[]),
        ]
        client = RateMyProfessorClient(session=session)

        results = client.get_many_professors_data(["Ada Lovelace", "Nobody"])

        assert [r["query"] for r in results] == ["Ada Lovelace", "Nobody"]
        assert results[0]["found"] is True
        assert results[0]["department"] == "Computer Science"
        assert results[1] == {"query": "Nobody", "found": False}

    def test_empty_list(self, session):
        client = RateMyProfessorClient(session=session)

        assert client.get_many_professors_data([]) == []
        session.post.assert_not_called()


def test_format_professor_handles_missing_school():
    node = dict(TEACHER_NODE, school=None)

    assert format_professor(node)["school"] is None
