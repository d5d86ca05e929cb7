"""Shared fixtures: a scripted completion client and a mock-backed tool registry."""

import copy

import pytest
from unittest.mock import Mock

from ai import AssistantMessage, CompletionClient, CompletionError
from core.registry import build_registry


class ScriptedCompletionClient(CompletionClient):
    """
    Completion client that replays canned replies.

    Each item in ``replies`` is an AssistantMessage to return or an exception
    to raise. Every request is recorded with a snapshot of its messages.
    """

    def __init__(self, replies):
        self.replies = list(replies)
        self.requests = []

    def complete(self, messages, tool_declarations, model):
        self.requests.append({
            "messages": copy.deepcopy(list(messages)),
            "tool_declarations": list(tool_declarations),
            "model": model,
        })
        reply = self.replies.pop(0)
        if isinstance(reply, Exception):
            raise reply
        return reply


@pytest.fixture
def course_handler():
    return Mock(return_value=[{"subject_code": "CS", "course_number": "101", "section": "001"}])


@pytest.fixture
def professor_handler():
    return Mock(return_value=[{"query": "Ada Lovelace", "found": True, "avg_rating": 4.9}])


@pytest.fixture
def registry(course_handler, professor_handler):
    return build_registry({
        "get_courses": course_handler,
        "get_rate_my_professor_data": professor_handler,
    })


@pytest.fixture
def make_client():
    return ScriptedCompletionClient


@pytest.fixture
def service_failure():
    return CompletionError("503 Service Unavailable")


@pytest.fixture
def text_reply():
    return lambda text: AssistantMessage(content=text)
