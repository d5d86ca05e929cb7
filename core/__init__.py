"""
Core Orchestration Module

This module contains the tool-calling exchange loop:
- Conversation building
- Tool registry and typed argument parsing
- Tool dispatch and result folding
- Final answer synthesis
"""

from .messages import (
    build_conversation,
    system_message,
    user_message,
    assistant_message,
    tool_message,
)

from .registry import (
    ToolDeclaration,
    ToolRegistry,
    ToolSpec,
    ToolResult,
    CoursesArgs,
    ProfessorArgs,
    parse_tool_arguments,
    build_registry,
)

from .dispatcher import dispatch_tool_calls
from .synthesizer import synthesize_response

from .orchestrator import (
    ExchangeOrchestrator,
    ExchangeSetup,
    ExchangeState,
    ExchangeStatus,
    run_exchange,
)

__all__ = [
    # Messages
    "build_conversation",
    "system_message",
    "user_message",
    "assistant_message",
    "tool_message",

    # Registry
    "ToolDeclaration",
    "ToolRegistry",
    "ToolSpec",
    "ToolResult",
    "CoursesArgs",
    "ProfessorArgs",
    "parse_tool_arguments",
    "build_registry",

    # Loop
    "dispatch_tool_calls",
    "synthesize_response",
    "ExchangeOrchestrator",
    "ExchangeSetup",
    "ExchangeState",
    "ExchangeStatus",
    "run_exchange",
]
