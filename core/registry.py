"""
Tool Registry

Static mapping from tool name to its declaration (advertised to the model)
and its invocation function. Tool-call arguments arrive as raw JSON; each
tool decodes them into its own typed record before anything is invoked, so a
bad argument becomes a named validation error instead of a crash.
"""

import json
import time
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Tuple, Union

from config import get_tool_by_name

logger = logging.getLogger(__name__)


# ============================================================================
# TOOL DECLARATIONS
# ============================================================================

@dataclass(frozen=True)
class ToolDeclaration:
    """
    Schema advertised to the model for one callable tool.

    Attributes:
        name: Tool name the model uses in its calls
        description: Human-readable description
        parameters: JSON-schema-shaped parameter spec (Gemini type names)
        required: Names of required parameters
    """
    name: str
    description: str
    parameters: Dict[str, Any]
    required: Tuple[str, ...] = ()

    @classmethod
    def from_definition(cls, definition: Dict[str, Any]) -> "ToolDeclaration":
        return cls(
            name=definition["name"],
            description=definition.get("description", ""),
            parameters=definition.get("parameters", {"type": "OBJECT", "properties": {}}),
            required=tuple(definition.get("required", ())),
        )

    def to_function_declaration(self) -> Dict[str, Any]:
        """Render as a Gemini function declaration."""
        parameters = dict(self.parameters)
        if self.required:
            parameters["required"] = list(self.required)
        return {
            "name": self.name,
            "description": self.description,
            "parameters": parameters,
        }


# ============================================================================
# TYPED ARGUMENTS
# ============================================================================

@dataclass(frozen=True)
class CoursesArgs:
    """Arguments for get_courses."""
    prompt: str


@dataclass(frozen=True)
class ProfessorArgs:
    """Arguments for get_rate_my_professor_data."""
    names: Tuple[str, ...]


ToolArgs = Union[CoursesArgs, ProfessorArgs]


def _decode_object(raw_arguments: str) -> Tuple[Optional[Dict[str, Any]], Optional[str]]:
    try:
        data = json.loads(raw_arguments or "{}")
    except (json.JSONDecodeError, TypeError) as e:
        return None, f"arguments are not valid JSON: {e}"
    if not isinstance(data, dict):
        return None, f"arguments must be a JSON object, got {type(data).__name__}"
    return data, None


def parse_courses_args(data: Dict[str, Any]) -> Tuple[Optional[CoursesArgs], Optional[str]]:
    prompt = data.get("prompt")
    if not isinstance(prompt, str):
        return None, "'prompt' must be a string"
    return CoursesArgs(prompt=prompt), None


def parse_professor_args(data: Dict[str, Any]) -> Tuple[Optional[ProfessorArgs], Optional[str]]:
    names = data.get("names")
    if not isinstance(names, list):
        return None, "'names' must be a list of strings"
    for idx, name in enumerate(names):
        if not isinstance(name, str):
            return None, f"'names[{idx}]' must be a string, got {type(name).__name__}"
    return ProfessorArgs(names=tuple(names)), None


# ============================================================================
# REGISTRY
# ============================================================================

@dataclass
class ToolResult:
    """
    Outcome of one dispatched tool call.

    Attributes:
        tool_call_id: Id of the call this result answers
        tool_name: Name of the tool that was called
        success: Whether a result was produced and appended
        result: The tool's return value
        error: Error message if unsuccessful
        execution_time: Time taken to execute (seconds)
    """
    tool_call_id: str
    tool_name: str
    success: bool
    result: Any = None
    error: Optional[str] = None
    execution_time: float = 0.0


@dataclass
class ToolSpec:
    """A registered tool: its declaration, argument parser and handler."""
    declaration: ToolDeclaration
    parse: Callable[[Dict[str, Any]], Tuple[Optional[Any], Optional[str]]]
    handler: Callable[[Any], Any]

    @property
    def name(self) -> str:
        return self.declaration.name

    def parse_arguments(self, raw_arguments: str) -> Tuple[Optional[Any], Optional[str]]:
        """
        Decode raw JSON arguments into this tool's typed record.

        Never raises; returns (args, None) or (None, error_message).
        """
        data, error = _decode_object(raw_arguments)
        if error:
            return None, error
        return self.parse(data)

    def invoke(self, args: Any) -> Tuple[Any, Optional[str]]:
        """Call the handler, returning (result, None) or (None, error_message)."""
        try:
            return self.handler(args), None
        except Exception as e:
            logger.error(f"❌ Tool {self.name} failed: {e}", exc_info=True)
            return None, f"{type(e).__name__}: {e}"


@dataclass
class ToolRegistry:
    """Fixed set of tools the orchestrator may dispatch to."""
    tools: Dict[str, ToolSpec] = field(default_factory=dict)

    def register(self, spec: ToolSpec) -> None:
        self.tools[spec.name] = spec

    def get(self, name: str) -> Optional[ToolSpec]:
        return self.tools.get(name)

    def declarations(self) -> List[ToolDeclaration]:
        return [spec.declaration for spec in self.tools.values()]

    def __contains__(self, name: str) -> bool:
        return name in self.tools

    def __len__(self) -> int:
        return len(self.tools)


def parse_tool_arguments(
    registry: ToolRegistry,
    name: str,
    raw_arguments: str,
) -> Tuple[Optional[ToolArgs], Optional[str]]:
    """
    Decode the arguments of a call to ``name``.

    Returns:
        (typed_args, None) on success, (None, error_message) when the tool is
        unknown or the arguments do not match its schema
    """
    spec = registry.get(name)
    if spec is None:
        return None, f"unknown tool '{name}'"
    return spec.parse_arguments(raw_arguments)


def build_registry(handlers: Dict[str, Callable[[Any], Any]]) -> ToolRegistry:
    """
    Build the registry from the declared tool definitions and the given handlers.

    Args:
        handlers: Tool name -> function taking the tool's typed args

    Returns:
        ToolRegistry with one entry per parseable tool

    Raises:
        ValueError: If a parseable tool has no definition in TOOL_DEFINITIONS
    """
    parsers = {
        "get_courses": parse_courses_args,
        "get_rate_my_professor_data": parse_professor_args,
    }
    registry = ToolRegistry()
    for name, parse in parsers.items():
        registry.register(ToolSpec(
            declaration=ToolDeclaration.from_definition(get_tool_by_name(name)),
            parse=parse,
            handler=handlers[name],
        ))
    logger.debug(f"Registered tools: {list(registry.tools)}")
    return registry


def timed_invoke(spec: ToolSpec, tool_call_id: str, args: Any) -> ToolResult:
    """Invoke a tool and wrap the outcome in a ToolResult."""
    start_time = time.time()
    result, error = spec.invoke(args)
    return ToolResult(
        tool_call_id=tool_call_id,
        tool_name=spec.name,
        success=error is None,
        result=result,
        error=error,
        execution_time=time.time() - start_time,
    )
