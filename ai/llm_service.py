"""
LLM Service - Completion Client Adapter with Langfuse Observability

This module is the only place that talks to the chat completion service.
It provides:
- The CompletionClient interface consumed by the orchestration loop
- A Gemini implementation translating chat-style messages to Gemini contents
- Langfuse tracing and token usage tracking for every completion
- Tool-call extraction from Gemini function_call parts

Retries are intentionally not performed here: a failed completion raises
CompletionError and the caller decides what to do with the exchange.
"""

import json
import time
import uuid
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict, List, Any, Sequence, Tuple

import google.generativeai as genai
from google.generativeai.types import GenerationConfig, HarmCategory, HarmBlockThreshold
from langfuse import Langfuse, observe

from config import (
    GOOGLE_API_KEY,
    GEMINI_MODEL,
    TEMPERATURE,
    MAX_TOKENS,
    TOP_P,
    TOP_K,
    LANGFUSE_PUBLIC_KEY,
    LANGFUSE_SECRET_KEY,
    LANGFUSE_HOST,
    LANGFUSE_ENABLED,
)

logger = logging.getLogger(__name__)

# ============================================================================
# INITIALIZATION
# ============================================================================

_langfuse_client: Optional[Langfuse] = None

if LANGFUSE_ENABLED:
    try:
        _langfuse_client = Langfuse(
            public_key=LANGFUSE_PUBLIC_KEY,
            secret_key=LANGFUSE_SECRET_KEY,
            host=LANGFUSE_HOST,
        )
        logger.info("✅ Langfuse observability initialized")
    except Exception as e:
        logger.warning(f"⚠️  Langfuse initialization failed: {e}. Continuing without tracing.")
        _langfuse_client = None
else:
    logger.info("ℹ️  Langfuse observability disabled")


def get_langfuse_client() -> Optional[Langfuse]:
    """Get the Langfuse client instance."""
    return _langfuse_client


# ============================================================================
# SAFETY SETTINGS
# ============================================================================

SAFETY_SETTINGS = {
    HarmCategory.HARM_CATEGORY_HARASSMENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_HATE_SPEECH: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_SEXUALLY_EXPLICIT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
    HarmCategory.HARM_CATEGORY_DANGEROUS_CONTENT: HarmBlockThreshold.BLOCK_MEDIUM_AND_ABOVE,
}


# ============================================================================
# DATA STRUCTURES
# ============================================================================

class CompletionError(Exception):
    """Raised when the completion service fails or returns nothing usable."""


@dataclass
class ToolCallRequest:
    """
    A tool invocation requested by the model.

    Attributes:
        id: Opaque call identifier; tool results must echo it back
        name: Name of the requested tool
        arguments: Raw JSON string with the call arguments
    """
    id: str
    name: str
    arguments: str = "{}"

    def to_dict(self) -> Dict[str, str]:
        return {"id": self.id, "name": self.name, "arguments": self.arguments}


@dataclass
class AssistantMessage:
    """Reply from one completion: free text and/or requested tool calls."""
    content: str = ""
    tool_calls: List[ToolCallRequest] = field(default_factory=list)

    @property
    def has_tool_calls(self) -> bool:
        return len(self.tool_calls) > 0


# ============================================================================
# GENERATION CONFIGURATION
# ============================================================================

def get_generation_config(
    temperature: Optional[float] = None,
    max_tokens: Optional[int] = None,
    top_p: Optional[float] = None,
    top_k: Optional[int] = None,
) -> GenerationConfig:
    """
    Create a generation configuration for Gemini API calls.

    Args:
        temperature: Sampling temperature (0.0 - 2.0). Defaults to config value.
        max_tokens: Maximum tokens to generate. Defaults to config value.
        top_p: Nucleus sampling parameter. Defaults to config value.
        top_k: Top-k sampling parameter. Defaults to config value.

    Returns:
        GenerationConfig object
    """
    return GenerationConfig(
        temperature=temperature if temperature is not None else TEMPERATURE,
        max_output_tokens=max_tokens or MAX_TOKENS,
        top_p=top_p or TOP_P,
        top_k=top_k or TOP_K,
    )


# ============================================================================
# MESSAGE TRANSLATION
# ============================================================================

def _text_part(text: str) -> "genai.protos.Part":
    return genai.protos.Part(text=text)


def _response_payload(content: str) -> Dict[str, Any]:
    # function_response.response must be an object
    try:
        return {"content": json.loads(content)}
    except (json.JSONDecodeError, TypeError):
        return {"content": content}


def _function_response_part(name: str, response: Dict[str, Any]) -> "genai.protos.Part":
    return genai.protos.Part(
        function_response=genai.protos.FunctionResponse(name=name, response=response)
    )


def _append_function_response(contents: List["genai.protos.Content"], part: "genai.protos.Part") -> None:
    previous = contents[-1] if contents else None
    if previous is not None and previous.parts and "function_response" in previous.parts[-1]:
        previous.parts.append(part)
    else:
        contents.append(genai.protos.Content(role="user", parts=[part]))


def _answer_pending_calls(
    contents: List["genai.protos.Content"],
    pending: List[str],
    call_names: Dict[str, str],
) -> None:
    """Add a placeholder response for each call left without a tool message."""
    for call_id in pending:
        logger.debug(f"No tool result for {call_id}, sending placeholder response")
        _append_function_response(
            contents, _function_response_part(call_names[call_id], {"error": "no result"})
        )
    pending.clear()


def to_gemini_contents(
    messages: Sequence[Dict[str, Any]],
) -> Tuple[Optional[str], List["genai.protos.Content"]]:
    """
    Translate chat-style messages into a Gemini system instruction and contents.

    The leading system message becomes the system instruction; any later
    system message is sent as a user turn so its position in the conversation
    is preserved. Consecutive tool messages are folded into a single turn of
    function_response parts, named after the call they answer.

    Gemini requires one function_response per function_call, so a call the
    dispatcher skipped gets a ``{"error": "no result"}`` placeholder. The
    messages themselves are not modified.

    Args:
        messages: Ordered conversation messages

    Returns:
        Tuple of (system_instruction, contents)
    """
    system_instruction = None
    contents: List[genai.protos.Content] = []
    call_names: Dict[str, str] = {}
    pending: List[str] = []

    for index, message in enumerate(messages):
        role = message.get("role")
        content = message.get("content") or ""

        if role != "tool" and pending:
            _answer_pending_calls(contents, pending, call_names)

        if role == "system":
            if index == 0:
                system_instruction = content
            else:
                contents.append(genai.protos.Content(role="user", parts=[_text_part(content)]))

        elif role == "user":
            contents.append(genai.protos.Content(role="user", parts=[_text_part(content)]))

        elif role == "assistant":
            parts = [_text_part(content)] if content else []
            for call in message.get("tool_calls") or []:
                call_names[call["id"]] = call["name"]
                pending.append(call["id"])
                try:
                    args = json.loads(call.get("arguments") or "{}")
                except json.JSONDecodeError:
                    args = {}
                parts.append(genai.protos.Part(
                    function_call=genai.protos.FunctionCall(name=call["name"], args=args)
                ))
            if parts:
                contents.append(genai.protos.Content(role="model", parts=parts))

        elif role == "tool":
            call_id = message.get("tool_call_id", "")
            if call_id in pending:
                pending.remove(call_id)
            _append_function_response(
                contents,
                _function_response_part(call_names.get(call_id, call_id), _response_payload(content)),
            )

        else:
            logger.warning(f"⚠️  Skipping message with unknown role: {role}")

    if pending:
        _answer_pending_calls(contents, pending, call_names)

    return system_instruction, contents


def _to_plain(value: Any) -> Any:
    """Convert proto-plus map/repeated composites into JSON-serializable values."""
    if isinstance(value, (str, bytes)):
        return value
    if hasattr(value, "items"):
        return {key: _to_plain(item) for key, item in value.items()}
    if hasattr(value, "__iter__"):
        return [_to_plain(item) for item in value]
    return value


def parse_gemini_response(response: Any) -> AssistantMessage:
    """
    Extract text and function calls from a Gemini response.

    Gemini function calls carry no identifier, so each one is given a fresh
    ``call_`` id here.

    Raises:
        CompletionError: If the response has no candidates
    """
    if not response.candidates:
        raise CompletionError("No response candidates returned from Gemini API")

    candidate = response.candidates[0]
    texts: List[str] = []
    tool_calls: List[ToolCallRequest] = []

    for part in candidate.content.parts:
        if getattr(part, "text", None):
            texts.append(part.text)

        func_call = getattr(part, "function_call", None)
        if func_call and func_call.name:
            tool_calls.append(ToolCallRequest(
                id=f"call_{uuid.uuid4().hex[:24]}",
                name=func_call.name,
                arguments=json.dumps(_to_plain(func_call.args or {})),
            ))

    return AssistantMessage(content="".join(texts), tool_calls=tool_calls)


# ============================================================================
# COMPLETION CLIENTS
# ============================================================================

class CompletionClient:
    """
    Interface to a chat completion service.

    Implementations submit the full conversation plus the tool declarations
    and return the assistant's reply, raising CompletionError on failure.
    """

    def complete(
        self,
        messages: Sequence[Dict[str, Any]],
        tool_declarations: Sequence[Any],
        model: str,
    ) -> AssistantMessage:
        raise NotImplementedError


class GeminiCompletionClient(CompletionClient):
    """Completion client backed by the Gemini API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ):
        """
        Configure the Gemini SDK.

        Args:
            api_key: Google API key. Defaults to GOOGLE_API_KEY.
            temperature: Sampling temperature (overrides default)
            max_tokens: Max output tokens (overrides default)

        Raises:
            ValueError: If no API key is available
        """
        api_key = api_key or GOOGLE_API_KEY
        if not api_key:
            raise ValueError(
                "GOOGLE_API_KEY not found in environment variables. "
                "Please set it in your .env file."
            )
        genai.configure(api_key=api_key)
        self.generation_config = get_generation_config(temperature, max_tokens)

    @observe(name="gemini_completion", as_type="generation")
    def complete(
        self,
        messages: Sequence[Dict[str, Any]],
        tool_declarations: Sequence[Any],
        model: str = GEMINI_MODEL,
    ) -> AssistantMessage:
        """
        Run one completion over the conversation.

        Args:
            messages: Ordered conversation messages
            tool_declarations: ToolDeclaration objects advertised to the model
            model: Gemini model name

        Returns:
            AssistantMessage with text content and/or tool calls

        Raises:
            CompletionError: If the API call fails or returns no candidates
        """
        system_instruction, contents = to_gemini_contents(messages)

        tools = None
        if tool_declarations:
            tools = [{
                "function_declarations": [
                    declaration.to_function_declaration() for declaration in tool_declarations
                ]
            }]

        start_time = time.time()
        try:
            gemini_model = genai.GenerativeModel(
                model_name=model,
                generation_config=self.generation_config,
                safety_settings=SAFETY_SETTINGS,
                system_instruction=system_instruction,
                tools=tools,
            )
            response = gemini_model.generate_content(contents)
        except Exception as e:
            raise CompletionError(f"{type(e).__name__}: {e}") from e
        latency = time.time() - start_time

        try:
            reply = parse_gemini_response(response)
        except CompletionError:
            raise
        except Exception as e:
            raise CompletionError(f"Unexpected response shape: {type(e).__name__}: {e}") from e

        # Track token usage
        usage = getattr(response, "usage_metadata", None)
        if usage is not None:
            if _langfuse_client:
                _langfuse_client.update_current_generation(
                    model=model,
                    usage_details={
                        "input": usage.prompt_token_count,
                        "output": usage.candidates_token_count,
                        "total": usage.total_token_count,
                    },
                )

            logger.debug(
                f"📊 Tokens: {usage.prompt_token_count} in, "
                f"{usage.candidates_token_count} out, "
                f"🔧 {len(reply.tool_calls)} tool calls, "
                f"⏱️  {latency:.2f}s"
            )

        return reply
