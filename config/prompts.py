"""
Prompt templates and tool definitions for ClassScout.

This module contains:
- The system prompt for the assistant
- The response-format instruction used by the synthesis step
- Function calling tool definitions

All prompts should be maintained here (not hardcoded in core/tools).
"""

from typing import Dict, List

# ============================================================================
# SYSTEM PROMPTS
# ============================================================================

SYSTEM_PROMPT = """You are a Retrieval Augmented Generation model that assists university students using course information."""

# ============================================================================
# SYNTHESIS PROMPTS
# ============================================================================

RESPONSE_FORMAT_PROMPT = """Task: Generate an answer that corresponds to the provided question, mimicking the question's structure and format. Ensure the response is succinct, directly relevant to the query, and excludes any extraneous details.

Response Format:
    [answer to the question]
    cited courses:
    [course details]

Course Details: If relevant courses are involved in the answer, format them as follows:
- Format: (subject_code)(course_number)-(section) title_short_desc by primary_instructor_full_name (relevant course details).
- Ensure each course listed accurately responds to the original question.

Response Guidelines:
- Provide responses in plain text format, avoiding markdown.
- List course details in a numbered format for clarity.
- Ensure the response directly addresses the question."""

RESTATED_PROMPT_TEMPLATE = "Prompt: {prompt}"

# ============================================================================
# TOOL DEFINITIONS (Function Calling)
# ============================================================================

TOOL_DEFINITIONS: List[Dict] = [
    {
        "name": "get_courses",
        "description": "Get course information (sections, titles, instructors, schedules) from the university course catalog.",
        "parameters": {
            "type": "OBJECT",
            "properties": {
                "prompt": {
                    "type": "STRING",
                    "description": "Search text describing the courses to look up, e.g. 'CS101' or 'intro to databases'"
                }
            },
        },
        "required": ["prompt"],
    },
    {
        "name": "get_rate_my_professor_data",
        "description": "Get professor information (ratings, difficulty, department) from Rate My Professors.",
        "parameters": {
            "type": "OBJECT",
            "properties": {
                "names": {
                    "type": "ARRAY",
                    "items": {"type": "STRING"},
                    "description": "Full names of the professors to look up"
                }
            },
        },
        "required": ["names"],
    },
]

# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def format_prompt(template: str, **kwargs) -> str:
    """
    Format a prompt template with provided variables.

    Args:
        template: Prompt template string with {placeholders}
        **kwargs: Variables to substitute into the template

    Returns:
        Formatted prompt string
    """
    try:
        return template.format(**kwargs)
    except KeyError as e:
        raise ValueError(f"Missing required prompt variable: {e}")


def get_tool_by_name(tool_name: str) -> Dict:
    """
    Retrieve tool definition by name.

    Args:
        tool_name: Name of the tool to retrieve

    Returns:
        Tool definition dictionary

    Raises:
        ValueError: If tool name not found
    """
    tool = next((t for t in TOOL_DEFINITIONS if t["name"] == tool_name), None)
    if not tool:
        available = [t["name"] for t in TOOL_DEFINITIONS]
        raise ValueError(f"Tool '{tool_name}' not found. Available: {available}")
    return tool
