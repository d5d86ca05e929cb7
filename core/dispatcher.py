"""
Tool Dispatcher

Runs the tool calls requested by one completion, strictly in request
order, and folds each successful result into the conversation as a tool
message tagged with the originating call id.

A call that cannot be served (bad arguments, unknown tool, failing tool)
is logged and skipped; the rest of the batch still runs.
"""

import json
import logging
from typing import Any, Dict, List, Sequence

from ai import ToolCallRequest
from .messages import tool_message
from .registry import ToolRegistry, ToolResult, timed_invoke

logger = logging.getLogger(__name__)


def serialize_result(result: Any) -> str:
    """Serialize a tool result to JSON for the tool message."""
    return json.dumps(result, default=str, ensure_ascii=False)


def dispatch_tool_calls(
    tool_calls: Sequence[ToolCallRequest],
    messages: List[Dict[str, Any]],
    registry: ToolRegistry,
) -> List[ToolResult]:
    """
    Execute tool calls and append their results to ``messages`` in place.

    Args:
        tool_calls: Calls from the assistant message, in request order
        messages: Conversation to append tool messages to
        registry: Tools available for dispatch

    Returns:
        One ToolResult per call that reached a registered tool
    """
    results: List[ToolResult] = []

    for call in tool_calls:
        spec = registry.get(call.name)
        if spec is None:
            logger.warning(f"⚠️  Unknown tool '{call.name}' (call {call.id}), skipping")
            continue

        args, error = spec.parse_arguments(call.arguments)
        if error:
            logger.warning(f"⚠️  Invalid arguments for {call.name} (call {call.id}): {error}")
            results.append(ToolResult(
                tool_call_id=call.id,
                tool_name=call.name,
                success=False,
                error=error,
            ))
            continue

        logger.info(f"🔧 {call.name}({args})")

        result = timed_invoke(spec, call.id, args)
        results.append(result)
        if not result.success:
            logger.error(f"❌ {call.name} failed (call {call.id}): {result.error}")
            continue

        messages.append(tool_message(call.id, serialize_result(result.result)))
        logger.debug(f"📥 {call.name} result appended ({result.execution_time:.2f}s)")

    return results
