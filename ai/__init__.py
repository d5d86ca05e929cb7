"""
AI Infrastructure Module

This module provides the completion boundary for ClassScout:
- The CompletionClient interface and its Gemini implementation
- Message translation between chat-style messages and Gemini contents
- Langfuse observability integration

All LLM calls should go through this module to ensure consistent
observability, error handling, and configuration.
"""

from .llm_service import (
    # Clients
    CompletionClient,
    GeminiCompletionClient,

    # Data structures
    AssistantMessage,
    ToolCallRequest,
    CompletionError,

    # Translation
    to_gemini_contents,
    parse_gemini_response,

    # Observability
    get_langfuse_client,
)

__all__ = [
    "CompletionClient",
    "GeminiCompletionClient",
    "AssistantMessage",
    "ToolCallRequest",
    "CompletionError",
    "to_gemini_contents",
    "parse_gemini_response",
    "get_langfuse_client",
]
