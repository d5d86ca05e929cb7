"""
Chat Service - Main Coordinator

Wires the exchange loop to its collaborators and runs one exchange per
user message:
1. Receives the user message and the caller's conversation history
2. Runs the tool-calling exchange
3. Returns the answer, the updated messages and execution metadata

The caller owns the conversation history; nothing is kept between calls.
This is the main entry point for the Streamlit UI.
"""

import logging
from typing import Dict, List, Optional, Any
from dataclasses import dataclass, field
import uuid

from ai import CompletionClient, GeminiCompletionClient
from config import GEMINI_MODEL
from core import ExchangeOrchestrator, ExchangeSetup, ExchangeState, ToolRegistry

logger = logging.getLogger(__name__)


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass
class ChatResponse:
    """
    Response from the chat service.

    Attributes:
        message: The response text to display to the user
        success: Whether the exchange produced an answer
        messages: Updated conversation to pass back on the next turn
        metadata: Additional metadata about the response
        exchange_state: Full exchange record (for debugging)
    """
    message: str
    success: bool
    messages: List[Dict[str, Any]] = field(default_factory=list)
    metadata: Dict[str, Any] = field(default_factory=dict)
    exchange_state: Optional[ExchangeState] = None


# ============================================================================
# CHAT SERVICE
# ============================================================================

class ChatService:
    """
    Main chat service coordinator.

    Builds the exchange setup (completion client, tool registry, model) once
    and runs an independent exchange for every message.
    """

    def __init__(
        self,
        client: Optional[CompletionClient] = None,
        tool_registry: Optional[ToolRegistry] = None,
        model: str = GEMINI_MODEL,
    ):
        """Initialize the chat service."""
        if tool_registry is None:
            from tools import get_tool_registry
            tool_registry = get_tool_registry()

        self.setup = ExchangeSetup(
            client=client or GeminiCompletionClient(),
            registry=tool_registry,
            model=model,
        )
        logger.info("✅ ChatService initialized")

    def process_message(
        self,
        user_message: str,
        conversation_history: Optional[List[Dict]] = None,
        session_id: Optional[str] = None,
    ) -> ChatResponse:
        """
        Process a user message and generate a response.

        Args:
            user_message: The user's input text
            conversation_history: Previous conversation messages
            session_id: Session identifier (for logs and metadata)

        Returns:
            ChatResponse with the reply, updated messages and metadata
        """
        if not session_id:
            session_id = str(uuid.uuid4())

        logger.info(f"💬 Processing message (session: {session_id}): {user_message[:50]}...")

        state = ExchangeOrchestrator(self.setup).run(user_message, conversation_history or [])

        metadata = {
            **state.get_execution_summary(),
            "session_id": session_id,
            "model": self.setup.model,
        }

        if not state.success:
            logger.error(f"❌ Exchange failed: {state.error_message or 'empty answer'}")
            return ChatResponse(
                message=self._get_error_message(),
                success=False,
                messages=state.messages,
                metadata=metadata,
                exchange_state=state,
            )

        return ChatResponse(
            message=state.final_text,
            success=True,
            messages=state.messages,
            metadata=metadata,
            exchange_state=state,
        )

    def _get_error_message(self) -> str:
        """Get a friendly error message."""
        return (
            "I couldn't get an answer right now. "
            "This could be a temporary issue; please try again or rephrase your question."
        )


# ============================================================================
# CONVENIENCE FUNCTION
# ============================================================================

def process_user_message(
    user_message: str,
    conversation_history: Optional[List[Dict]] = None,
    session_id: Optional[str] = None,
    **kwargs
) -> ChatResponse:
    """
    Convenience function to process a user message.

    Args:
        user_message: The user's message
        conversation_history: Previous conversation
        session_id: Session ID
        **kwargs: Arguments for ChatService (client, tool_registry, model)

    Returns:
        ChatResponse
    """
    service = ChatService(**kwargs)
    return service.process_message(
        user_message=user_message,
        conversation_history=conversation_history,
        session_id=session_id,
    )
