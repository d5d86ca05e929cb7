"""
Configuration module for ClassScout.

This module provides centralized configuration management including:
- Application settings (models, API keys, paths)
- Prompt templates and system instructions
- Tool definitions and schemas

All configurable values should be imported from this module to ensure
consistency across the application.
"""

from .settings import (
    # Paths
    BASE_DIR,
    DATA_DIR,
    COURSES_FILE,

    # API Keys
    GOOGLE_API_KEY,

    # LLM Settings
    GEMINI_MODEL,
    TEMPERATURE,
    MAX_TOKENS,
    TOP_P,
    TOP_K,

    # Langfuse Settings
    LANGFUSE_PUBLIC_KEY,
    LANGFUSE_SECRET_KEY,
    LANGFUSE_HOST,
    LANGFUSE_ENABLED,

    # Tool Settings
    COURSE_SEARCH_LIMIT,
    RMP_GRAPHQL_URL,
    RMP_AUTH_TOKEN,
    RMP_SCHOOL_ID,
    RMP_TIMEOUT,

    # Application Settings
    APP_TITLE,
    APP_SUBTITLE,
    LOG_LEVEL,

    # Data Loaders
    load_courses,
    CourseCatalogError,
)

from .prompts import (
    # System Prompts
    SYSTEM_PROMPT,
    RESPONSE_FORMAT_PROMPT,
    RESTATED_PROMPT_TEMPLATE,

    # Tool Definitions
    TOOL_DEFINITIONS,

    # Utilities
    format_prompt,
    get_tool_by_name,
)

__all__ = [
    # Settings
    "BASE_DIR",
    "DATA_DIR",
    "COURSES_FILE",
    "GOOGLE_API_KEY",
    "GEMINI_MODEL",
    "TEMPERATURE",
    "MAX_TOKENS",
    "TOP_P",
    "TOP_K",
    "LANGFUSE_PUBLIC_KEY",
    "LANGFUSE_SECRET_KEY",
    "LANGFUSE_HOST",
    "LANGFUSE_ENABLED",
    "COURSE_SEARCH_LIMIT",
    "RMP_GRAPHQL_URL",
    "RMP_AUTH_TOKEN",
    "RMP_SCHOOL_ID",
    "RMP_TIMEOUT",
    "APP_TITLE",
    "APP_SUBTITLE",
    "LOG_LEVEL",
    "load_courses",
    "CourseCatalogError",

    # Prompts
    "SYSTEM_PROMPT",
    "RESPONSE_FORMAT_PROMPT",
    "RESTATED_PROMPT_TEMPLATE",
    "TOOL_DEFINITIONS",
    "format_prompt",
    "get_tool_by_name",
]
