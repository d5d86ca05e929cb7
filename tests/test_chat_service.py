"""
Unit Tests for Chat Service

Tests the main chat coordinator and conversation flow.
"""

import pytest
from unittest.mock import Mock, patch

from ai import AssistantMessage, CompletionError, ToolCallRequest
from services.chat_service import ChatService, process_user_message


class TestChatService:
    """Test ChatService class."""

    @pytest.fixture
    def chat_service_factory(self, registry, make_client):
        """Fixture building a ChatService around scripted replies."""
        def factory(replies):
            client = make_client(replies)
            return ChatService(client=client, tool_registry=registry, model="test-model"), client
        return factory

    def test_process_message_success(self, chat_service_factory):
        """Test successful message processing."""
        chat_service, _ = chat_service_factory([AssistantMessage(content="CS101 is an intro course.")])

        response = chat_service.process_message(
            user_message="What is CS101?",
            session_id="test_session_123",
        )

        assert response.success is True
        assert response.message == "CS101 is an intro course."
        assert response.metadata["session_id"] == "test_session_123"
        assert response.metadata["model"] == "test-model"
        assert response.metadata["used_tools"] is False

    def test_process_message_with_conversation_history(self, chat_service_factory):
        """Conversation history is passed through to the exchange."""
        chat_service, client = chat_service_factory([AssistantMessage(content="Yes, section 002.")])
        history = [
            {"role": "user", "content": "Tell me about CS101"},
            {"role": "assistant", "content": "CS101 has two sections..."},
        ]

        response = chat_service.process_message(
            user_message="Is there an afternoon section?",
            conversation_history=history,
        )

        sent = client.requests[0]["messages"]
        assert sent[1:3] == history
        assert response.messages == sent

    def test_process_message_with_tools(self, chat_service_factory):
        chat_service, _ = chat_service_factory([
            AssistantMessage(tool_calls=[
                ToolCallRequest(id="call_1", name="get_courses", arguments='{"prompt": "CS101"}'),
            ]),
            AssistantMessage(content="Ada Lovelace teaches CS101."),
        ])

        response = chat_service.process_message(user_message="Who teaches CS101?")

        assert response.success is True
        assert response.metadata["tools_used"] == ["get_courses"]
        assert any(m["role"] == "tool" for m in response.messages)

    def test_process_message_error_handling(self, chat_service_factory):
        """A failed completion is reported as an unsuccessful response."""
        chat_service, _ = chat_service_factory([CompletionError("503")])

        response = chat_service.process_message(user_message="Who teaches CS101?")

        assert response.success is False
        assert response.metadata["error"] == "503"
        assert response.message  # friendly fallback text
        assert response.exchange_state.final_text == ""

    def test_empty_answer_is_failure(self, chat_service_factory):
        chat_service, _ = chat_service_factory([AssistantMessage(content="")])

        response = chat_service.process_message(user_message="?")

        assert response.success is False

    @patch('tools.get_tool_registry')
    @patch('services.chat_service.GeminiCompletionClient')
    def test_default_collaborators(self, mock_client_class, mock_get_registry):
        """Without arguments the Gemini client and the tool registry are used."""
        service = ChatService()

        mock_client_class.assert_called_once_with()
        mock_get_registry.assert_called_once_with()
        assert service.setup.client is mock_client_class.return_value
        assert service.setup.registry is mock_get_registry.return_value


class TestProcessUserMessage:
    """Test convenience function."""

    @patch('services.chat_service.ChatService')
    def test_process_user_message_convenience(self, mock_service_class):
        """Test the convenience function wrapper."""
        mock_service = Mock()
        mock_service.process_message.return_value = Mock(
            success=True,
            message="Response",
        )
        mock_service_class.return_value = mock_service

        response = process_user_message(
            user_message="Hello",
            session_id="test123",
        )

        mock_service_class.assert_called_once()
        mock_service.process_message.assert_called_once_with(
            user_message="Hello",
            conversation_history=None,
            session_id="test123",
        )
        assert response.message == "Response"


# ============================================================================
# INTEGRATION TESTS
# ============================================================================

class TestChatServiceIntegration:
    """Integration tests for complete chat flow (require GOOGLE_API_KEY)."""

    @pytest.mark.integration
    def test_course_question_flow(self):
        chat_service = ChatService()

        response = chat_service.process_message(
            user_message="Who teaches CS101?",
            session_id="integration_test",
        )

        assert response.success is True
        assert len(response.message) > 0
