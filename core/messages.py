"""
Conversation messages.

Messages are plain dictionaries in chat-completion shape:

    {"role": "system" | "user" | "assistant" | "tool", "content": str}

Assistant messages may also carry ``tool_calls`` (a list of
``{"id", "name", "arguments"}`` dicts) and tool messages carry the
``tool_call_id`` of the call they answer. Order is meaningful: the full
list is the model's context on every completion.
"""

from typing import Any, Dict, List, Optional, Sequence

from ai import AssistantMessage

Message = Dict[str, Any]


def system_message(content: str) -> Message:
    return {"role": "system", "content": content}


def user_message(content: str) -> Message:
    return {"role": "user", "content": content}


def assistant_message(reply: AssistantMessage) -> Message:
    """Record a completion reply, including any tool calls it requested."""
    message: Message = {"role": "assistant", "content": reply.content or ""}
    if reply.tool_calls:
        message["tool_calls"] = [call.to_dict() for call in reply.tool_calls]
    return message


def tool_message(tool_call_id: str, content: str) -> Message:
    return {"role": "tool", "tool_call_id": tool_call_id, "content": content}


def build_conversation(
    system_prompt: str,
    prior_messages: Optional[Sequence[Message]],
    prompt: str,
) -> List[Message]:
    """
    Assemble the messages for a new exchange.

    The system prompt comes first, then the prior messages in their original
    order, then the new user prompt. ``prior_messages`` is not modified.

    Args:
        system_prompt: Fixed system instruction
        prior_messages: Earlier conversation (may be empty or None)
        prompt: The new user prompt, used as-is

    Returns:
        A fresh list of len(prior_messages) + 2 messages
    """
    messages = [system_message(system_prompt)]
    messages.extend(dict(message) for message in (prior_messages or []))
    messages.append(user_message(prompt))
    return messages
