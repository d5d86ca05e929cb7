"""
Course and Professor Tools

Function calling tools the model can request:
- get_courses: course catalog lookup
- get_rate_my_professor_data: professor ratings lookup

Tools raise on failure; the dispatcher records the error and moves on to
the next call.
"""

import logging
from typing import Dict, List, Any, Optional

from services.course_service import search_courses
from clients.rmp_client import RateMyProfessorClient

logger = logging.getLogger(__name__)

_rmp_client: Optional[RateMyProfessorClient] = None


def get_rmp_client() -> RateMyProfessorClient:
    """Shared Rate My Professors client (created on first use)."""
    global _rmp_client
    if _rmp_client is None:
        _rmp_client = RateMyProfessorClient()
    return _rmp_client


# ============================================================================
# COURSE TOOLS
# ============================================================================

def get_courses(prompt: str) -> List[Dict[str, Any]]:
    """
    Get course sections relevant to a search prompt.

    Args:
        prompt: Search text from the model (e.g. "CS101", "evening statistics sections")

    Returns:
        List of course section dicts with subject_code, course_number, section,
        title_short_desc, primary_instructor_full_name and schedule details

    Raises:
        CourseCatalogError: If the catalog cannot be loaded

    Example:
        >>> get_courses("CS101")[0]["primary_instructor_full_name"]
        'Ada Lovelace'
    """
    logger.info(f"🔍 Looking up courses for: {prompt}")
    courses = search_courses(prompt)
    logger.info(f"✅ Found {len(courses)} course sections")
    return courses


# ============================================================================
# PROFESSOR TOOLS
# ============================================================================

def get_rate_my_professor_data(names: List[str]) -> List[Dict[str, Any]]:
    """
    Get professor information from Rate My Professors.

    Args:
        names: Full names of the professors to look up

    Returns:
        One dict per name, in order, with ratings when the professor was found

    Raises:
        ProfessorLookupError: If the Rate My Professors service fails
    """
    logger.info(f"🔍 Looking up professors: {names}")
    professors = get_rmp_client().get_many_professors_data(list(names))
    logger.info(f"✅ Professor info: {sum(1 for p in professors if p['found'])}/{len(professors)} found")
    return professors
