"""
Application settings and configuration values.

This module centralizes all configuration values including:
- File paths
- API keys and credentials
- Model parameters
- Course catalog loading
- Rate My Professors connection settings

Environment variables are loaded via python-dotenv.
"""

import os
import json
from pathlib import Path
from typing import Dict, List, Optional
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

# ============================================================================
# PATHS
# ============================================================================

BASE_DIR = Path(__file__).parent.parent
DATA_DIR = BASE_DIR / "data"

COURSES_FILE = Path(os.getenv("COURSES_FILE", str(DATA_DIR / "courses.json")))

# ============================================================================
# LLM CONFIGURATION
# ============================================================================

# Gemini API Settings
GEMINI_MODEL = os.getenv("GEMINI_MODEL", "gemini-2.5-flash")
GOOGLE_API_KEY = os.getenv("GOOGLE_API_KEY")

# Model Parameters
TEMPERATURE = float(os.getenv("TEMPERATURE", "0.7"))
MAX_TOKENS = int(os.getenv("MAX_TOKENS", "8192"))
TOP_P = float(os.getenv("TOP_P", "0.95"))
TOP_K = int(os.getenv("TOP_K", "40"))

# ============================================================================
# LANGFUSE OBSERVABILITY
# ============================================================================

LANGFUSE_PUBLIC_KEY = os.getenv("LANGFUSE_PUBLIC_KEY")
LANGFUSE_SECRET_KEY = os.getenv("LANGFUSE_SECRET_KEY")
LANGFUSE_HOST = os.getenv("LANGFUSE_HOST", "https://cloud.langfuse.com")

# Enable/disable Langfuse tracing
LANGFUSE_ENABLED = os.getenv("LANGFUSE_ENABLED", "true").lower() == "true"

if LANGFUSE_ENABLED and (not LANGFUSE_PUBLIC_KEY or not LANGFUSE_SECRET_KEY):
    LANGFUSE_ENABLED = False

# ============================================================================
# TOOL SETTINGS
# ============================================================================

# Maximum number of catalog sections returned by a single course lookup
COURSE_SEARCH_LIMIT = int(os.getenv("COURSE_SEARCH_LIMIT", "10"))

# Rate My Professors GraphQL endpoint
RMP_GRAPHQL_URL = os.getenv("RMP_GRAPHQL_URL", "https://www.ratemyprofessors.com/graphql")
RMP_AUTH_TOKEN = os.getenv("RMP_AUTH_TOKEN", "dGVzdDp0ZXN0")  # public "test:test" basic auth
RMP_SCHOOL_ID = os.getenv("RMP_SCHOOL_ID")
RMP_TIMEOUT = int(os.getenv("RMP_TIMEOUT", "10"))  # seconds

# ============================================================================
# APPLICATION SETTINGS
# ============================================================================

APP_TITLE = "ClassScout 📚"
APP_SUBTITLE = "Ask about courses, sections and professors"

# ============================================================================
# COURSE CATALOG
# ============================================================================

# Cache for catalog data to avoid repeated file reads
_COURSES_CACHE: Optional[List[Dict]] = None


class CourseCatalogError(Exception):
    """Raised when the course catalog cannot be loaded."""


def load_courses(force_reload: bool = False, path: Optional[Path] = None) -> List[Dict]:
    """
    Load course sections from the JSON catalog with caching.

    Args:
        force_reload: If True, bypass cache and reload from disk
        path: Alternate catalog location (bypasses the cache)

    Returns:
        List of course section dictionaries

    Raises:
        CourseCatalogError: If the file is missing or malformed
    """
    global _COURSES_CACHE

    if path is None and _COURSES_CACHE is not None and not force_reload:
        return _COURSES_CACHE

    courses_file = Path(path) if path else COURSES_FILE

    if not courses_file.exists():
        raise CourseCatalogError(
            f"Course catalog not found at {courses_file}. "
            f"Set COURSES_FILE or create data/courses.json."
        )

    try:
        with open(courses_file, "r", encoding="utf-8") as f:
            courses = json.load(f)
    except json.JSONDecodeError as e:
        raise CourseCatalogError(f"Invalid JSON in {courses_file.name}: {e}")

    if not isinstance(courses, list):
        raise CourseCatalogError(f"{courses_file.name} must contain a list of course sections")

    # Validate each section has required fields
    required_fields = ["subject_code", "course_number", "title"]
    for idx, course in enumerate(courses):
        missing = [f for f in required_fields if f not in course]
        if missing:
            raise CourseCatalogError(
                f"Course at index {idx} is missing required fields: {missing}"
            )

    if path is None:
        _COURSES_CACHE = courses
    return courses


# ============================================================================
# DEVELOPMENT / DEBUG SETTINGS
# ============================================================================

DEBUG = os.getenv("DEBUG", "false").lower() == "true"
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Print configuration summary on import (only in debug mode)
if DEBUG:
    print("\n" + "="*60)
    print("🔧 ClassScout Configuration Loaded")
    print("="*60)
    print(f"Model: {GEMINI_MODEL}")
    print(f"Temperature: {TEMPERATURE}")
    print(f"Langfuse: {'✅ Enabled' if LANGFUSE_ENABLED else '❌ Disabled'}")
    print(f"Course Catalog: {COURSES_FILE}")
    print("="*60 + "\n")
