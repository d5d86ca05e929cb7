"""
Response Synthesizer

Second round of an exchange: once tool results are in the conversation,
append the answer-format instruction and restate the user's prompt, then
ask the model for the final plain-text answer.
"""

import logging
from typing import Any, Dict, List, Sequence

from ai import CompletionClient
from config import RESPONSE_FORMAT_PROMPT, RESTATED_PROMPT_TEMPLATE, format_prompt
from .messages import system_message, user_message
from .registry import ToolDeclaration

logger = logging.getLogger(__name__)


def append_synthesis_instructions(messages: List[Dict[str, Any]], prompt: str) -> None:
    """Append the response-format instruction and the restated prompt."""
    messages.append(system_message(RESPONSE_FORMAT_PROMPT))
    messages.append(user_message(format_prompt(RESTATED_PROMPT_TEMPLATE, prompt=prompt)))


def synthesize_response(
    client: CompletionClient,
    messages: List[Dict[str, Any]],
    tool_declarations: Sequence[ToolDeclaration],
    model: str,
    prompt: str,
) -> str:
    """
    Produce the final answer for an exchange.

    Mutates ``messages`` by appending the synthesis instructions. Tool calls
    requested by this completion are not executed.

    Raises:
        CompletionError: If the completion fails
    """
    append_synthesis_instructions(messages, prompt)

    reply = client.complete(messages, tool_declarations, model)

    if reply.has_tool_calls:
        logger.warning(
            f"⚠️  Synthesis requested {len(reply.tool_calls)} more tool calls; ignoring"
        )

    return reply.content
