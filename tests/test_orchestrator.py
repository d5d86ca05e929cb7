"""
Unit Tests for the Exchange Orchestrator

Tests the two-round exchange: direct answers, tool dispatch, synthesis
and the degraded results on completion failures.
"""

import json

import pytest
from unittest.mock import Mock

from ai import AssistantMessage, CompletionError, ToolCallRequest
from config import SYSTEM_PROMPT, RESPONSE_FORMAT_PROMPT
from core.orchestrator import (
    ExchangeOrchestrator,
    ExchangeSetup,
    ExchangeStatus,
    run_exchange,
)


def courses_call(call_id="call_1", prompt="CS101"):
    return ToolCallRequest(id=call_id, name="get_courses", arguments=json.dumps({"prompt": prompt}))


class TestNoToolCalls:
    """First completion answers directly."""

    def test_returns_content_and_initial_messages(self, registry, make_client):
        client = make_client([AssistantMessage(content="Hi! Ask me about courses.")])
        setup = ExchangeSetup(client=client, registry=registry, model="test-model")
        history = [
            {"role": "user", "content": "Hello"},
            {"role": "assistant", "content": "Hi there"},
        ]

        text, messages = run_exchange(setup, "What can you do?", history)

        assert text == "Hi! Ask me about courses."
        assert messages == client.requests[0]["messages"]
        assert len(messages) == len(history) + 2
        assert len(client.requests) == 1

    def test_request_carries_declarations_and_model(self, registry, make_client):
        client = make_client([AssistantMessage(content="ok")])
        setup = ExchangeSetup(client=client, registry=registry, model="test-model")

        run_exchange(setup, "hi", [])

        request = client.requests[0]
        assert request["model"] == "test-model"
        assert [d.name for d in request["tool_declarations"]] == [
            "get_courses", "get_rate_my_professor_data",
        ]
        assert request["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}


class TestWithToolCalls:
    """First completion requests tools."""

    def test_cs101_scenario(self, registry, make_client, course_handler):
        """One tool result tagged call_1, then a synthesis completion."""
        course_handler.return_value = [{
            "subject_code": "CS", "course_number": "101", "section": "001",
            "primary_instructor_full_name": "Ada Lovelace",
        }]
        client = make_client([
            AssistantMessage(tool_calls=[courses_call()]),
            AssistantMessage(content="Ada Lovelace teaches CS101.\ncited courses:\n1. CS101-001 ..."),
        ])
        setup = ExchangeSetup(client=client, registry=registry)

        text, messages = run_exchange(setup, "Who teaches CS101?", [])

        assert text.startswith("Ada Lovelace teaches CS101.")
        assert len(client.requests) == 2

        roles = [m["role"] for m in messages]
        assert roles == ["system", "user", "assistant", "tool", "system", "user"]

        tool_msg = messages[3]
        assert tool_msg["tool_call_id"] == "call_1"
        assert json.loads(tool_msg["content"]) == course_handler.return_value

        assert messages[2]["tool_calls"][0]["id"] == "call_1"
        assert messages[4] == {"role": "system", "content": RESPONSE_FORMAT_PROMPT}
        assert messages[5] == {"role": "user", "content": "Prompt: Who teaches CS101?"}

        # Synthesis request sees everything including the tool result
        assert client.requests[1]["messages"] == messages

    def test_n_tool_results_before_synthesis(self, registry, make_client):
        client = make_client([
            AssistantMessage(tool_calls=[
                courses_call("call_1", "CS101"),
                ToolCallRequest(id="call_2", name="get_rate_my_professor_data", arguments='{"names": ["Ada Lovelace"]}'),
                courses_call("call_3", "MATH221"),
            ]),
            AssistantMessage(content="answer"),
        ])
        setup = ExchangeSetup(client=client, registry=registry)

        _, messages = run_exchange(setup, "Compare these", [])

        synthesis_messages = client.requests[1]["messages"]
        tool_ids = [m["tool_call_id"] for m in synthesis_messages if m["role"] == "tool"]
        assert tool_ids == ["call_1", "call_2", "call_3"]

    def test_unknown_tool_only_still_synthesizes(self, registry, make_client):
        client = make_client([
            AssistantMessage(tool_calls=[ToolCallRequest(id="call_9", name="get_weather", arguments="{}")]),
            AssistantMessage(content="I could not look that up."),
        ])
        setup = ExchangeSetup(client=client, registry=registry)

        text, messages = run_exchange(setup, "Weather?", [])

        assert text == "I could not look that up."
        assert not any(m["role"] == "tool" for m in messages)

    def test_single_hop_ignores_second_round_tool_calls(self, registry, make_client, course_handler):
        client = make_client([
            AssistantMessage(tool_calls=[courses_call()]),
            AssistantMessage(content="partial", tool_calls=[courses_call("call_2", "CS340")]),
        ])
        setup = ExchangeSetup(client=client, registry=registry)

        text, _ = run_exchange(setup, "Who teaches CS101?", [])

        assert text == "partial"
        assert len(client.requests) == 2
        course_handler.assert_called_once()


class TestCompletionFailures:
    """Service failures degrade to an empty answer."""

    def test_first_completion_error(self, registry, make_client, service_failure):
        client = make_client([service_failure])
        setup = ExchangeSetup(client=client, registry=registry)
        history = [{"role": "user", "content": "earlier"}]

        text, messages = run_exchange(setup, "Who teaches CS101?", history)

        assert text == ""
        assert messages == [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": "earlier"},
            {"role": "user", "content": "Who teaches CS101?"},
        ]

    def test_synthesis_error_keeps_tool_results(self, registry, make_client, service_failure):
        client = make_client([
            AssistantMessage(tool_calls=[courses_call()]),
            service_failure,
        ])
        setup = ExchangeSetup(client=client, registry=registry)

        text, messages = run_exchange(setup, "Who teaches CS101?", [])

        assert text == ""
        assert any(m["role"] == "tool" and m["tool_call_id"] == "call_1" for m in messages)
        assert messages[-1] == {"role": "user", "content": "Prompt: Who teaches CS101?"}
        assert not any(m["role"] == "assistant" and m["content"] for m in messages)

    def test_state_records_error(self, registry, make_client):
        client = make_client([CompletionError("quota exceeded")])
        state = ExchangeOrchestrator(ExchangeSetup(client=client, registry=registry)).run("hi")

        assert state.status == ExchangeStatus.DONE
        assert state.success is False
        assert state.error_message == "quota exceeded"
        assert state.get_execution_summary()["used_tools"] is False


class TestExchangeState:
    """Test execution summaries."""

    def test_summary_lists_tools(self, registry, make_client):
        client = make_client([
            AssistantMessage(tool_calls=[
                courses_call(),
                ToolCallRequest(id="call_2", name="get_rate_my_professor_data", arguments='{"names": 3}'),
            ]),
            AssistantMessage(content="answer"),
        ])
        state = ExchangeOrchestrator(ExchangeSetup(client=client, registry=registry)).run("q")
        summary = state.get_execution_summary()

        assert summary["success"] is True
        assert summary["tools_used"] == ["get_courses"]
        assert summary["failed_tools"] == ["get_rate_my_professor_data"]
        assert summary["num_tool_calls"] == 2
