"""
Exchange Orchestrator - Tool-Calling Exchange Loop

Runs one exchange, from user prompt to final answer:
1. Build: system prompt + prior messages + user prompt
2. Complete: ask the model, advertising the registered tools
3. Dispatch: if the model asked for tools, run them and fold in results
4. Synthesize: ask once more for a formatted answer

The protocol is single-hop: tools requested by the synthesis completion
are not run. Any completion failure ends the exchange with an empty answer
and the conversation as built so far.
"""

import logging
import time
from typing import List, Dict, Any, Optional, Sequence, Tuple
from dataclasses import dataclass, field
from enum import Enum

from ai import CompletionClient, CompletionError
from config import SYSTEM_PROMPT, GEMINI_MODEL
from .messages import build_conversation, assistant_message
from .registry import ToolRegistry, ToolResult
from .dispatcher import dispatch_tool_calls
from .synthesizer import synthesize_response

logger = logging.getLogger(__name__)


# ============================================================================
# DATA STRUCTURES
# ============================================================================

class ExchangeStatus(Enum):
    """Exchange state machine."""
    BUILD = "build"
    FIRST_COMPLETE = "first_complete"
    DISPATCH = "dispatch"
    SYNTHESIZE = "synthesize"
    DONE = "done"


@dataclass
class ExchangeSetup:
    """
    Everything an exchange needs besides the prompt.

    Attributes:
        client: Completion service capability
        registry: Tools the model may call
        model: Model identifier sent with every completion
        system_prompt: Leading system instruction
    """
    client: CompletionClient
    registry: ToolRegistry
    model: str = GEMINI_MODEL
    system_prompt: str = SYSTEM_PROMPT


@dataclass
class ExchangeState:
    """
    Record of one exchange.

    Tracks the conversation, tool outcomes, final text and status.
    """
    prompt: str
    messages: List[Dict[str, Any]] = field(default_factory=list)
    status: ExchangeStatus = ExchangeStatus.BUILD
    used_tools: bool = False
    tool_results: List[ToolResult] = field(default_factory=list)
    final_text: str = ""
    error_message: Optional[str] = None
    start_time: float = field(default_factory=time.time)
    total_execution_time: float = 0.0

    @property
    def success(self) -> bool:
        return self.status == ExchangeStatus.DONE and bool(self.final_text)

    def get_execution_summary(self) -> Dict[str, Any]:
        """Get a summary of the execution."""
        return {
            "status": self.status.value,
            "used_tools": self.used_tools,
            "num_tool_calls": len(self.tool_results),
            "tools_used": [tr.tool_name for tr in self.tool_results if tr.success],
            "failed_tools": [tr.tool_name for tr in self.tool_results if not tr.success],
            "success": self.success,
            "error": self.error_message,
            "execution_time": self.total_execution_time,
        }


# ============================================================================
# ORCHESTRATOR
# ============================================================================

class ExchangeOrchestrator:
    """Runs exchanges against one setup."""

    def __init__(self, setup: ExchangeSetup):
        self.setup = setup

    def run(
        self,
        prompt: str,
        prior_messages: Optional[Sequence[Dict[str, Any]]] = None,
    ) -> ExchangeState:
        """
        Execute one exchange.

        Args:
            prompt: The user's new prompt
            prior_messages: Earlier conversation, owned by the caller

        Returns:
            ExchangeState with the final text and updated messages
        """
        setup = self.setup
        state = ExchangeState(prompt=prompt)

        state.messages = build_conversation(setup.system_prompt, prior_messages, prompt)
        declarations = setup.registry.declarations()

        state.status = ExchangeStatus.FIRST_COMPLETE
        try:
            reply = setup.client.complete(state.messages, declarations, setup.model)
        except CompletionError as e:
            logger.error(f"❌ Error creating chat completion: {e}")
            return self._finish(state, error=str(e))

        if not reply.has_tool_calls:
            logger.info("💬 No function call")
            state.final_text = reply.content
            return self._finish(state)

        logger.info(f"🔧 Function calls: {[call.name for call in reply.tool_calls]}")
        state.used_tools = True

        state.status = ExchangeStatus.DISPATCH
        state.messages.append(assistant_message(reply))
        state.tool_results = dispatch_tool_calls(reply.tool_calls, state.messages, setup.registry)

        state.status = ExchangeStatus.SYNTHESIZE
        try:
            state.final_text = synthesize_response(
                setup.client, state.messages, declarations, setup.model, prompt,
            )
        except CompletionError as e:
            logger.error(f"❌ Error creating synthesis completion: {e}")
            return self._finish(state, error=str(e))

        return self._finish(state)

    def _finish(self, state: ExchangeState, error: Optional[str] = None) -> ExchangeState:
        if error is not None:
            state.error_message = error
            state.final_text = ""
        state.status = ExchangeStatus.DONE
        state.total_execution_time = time.time() - state.start_time
        logger.info(
            f"✅ Exchange done in {state.total_execution_time:.2f}s "
            f"({len(state.tool_results)} tool calls, success={state.success})"
        )
        return state


# ============================================================================
# ENTRY POINT
# ============================================================================

def run_exchange(
    setup: ExchangeSetup,
    prompt: str,
    prior_messages: Optional[Sequence[Dict[str, Any]]] = None,
) -> Tuple[str, List[Dict[str, Any]]]:
    """
    Run one exchange and return (final_text, updated_messages).

    An empty final_text means the exchange failed; the caller decides
    whether to persist the returned messages for the next turn.
    """
    state = ExchangeOrchestrator(setup).run(prompt, prior_messages)
    return state.final_text, state.messages
