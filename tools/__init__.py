"""
Function Calling Tools Module

This module contains all tools (functions) that the LLM can invoke
through function calling:
- get_courses: search the university course catalog
- get_rate_my_professor_data: look up professors on Rate My Professors

Tools are registered in the tool registry for the orchestrator to use.
"""

from .course_tools import (
    get_courses,
    get_rate_my_professor_data,
)


# Tool registry for the orchestrator
def get_tool_registry():
    """
    Get the complete registry of available tools.

    Returns:
        ToolRegistry mapping tool names to declarations and handlers
    """
    from core.registry import build_registry

    return build_registry({
        "get_courses": lambda args: get_courses(args.prompt),
        "get_rate_my_professor_data": lambda args: get_rate_my_professor_data(list(args.names)),
    })


__all__ = [
    "get_courses",
    "get_rate_my_professor_data",
    "get_tool_registry",
]
