"""
Course Service - Course Catalog Search

Handles course-catalog lookups for the get_courses tool:
- Course code matching (e.g. "CS101" -> subject CS, number 101)
- Keyword scoring over titles, descriptions and instructors
- Shaping catalog rows into the fields the answer template cites
"""

import logging
from typing import List, Dict, Optional
from dataclasses import dataclass, field

from config import load_courses, COURSE_SEARCH_LIMIT
from utils.course_codes import extract_course_codes, extract_keywords, normalize_course_code

logger = logging.getLogger(__name__)


# ============================================================================
# DATA STRUCTURES
# ============================================================================

@dataclass
class CourseMatch:
    """
    A catalog section with scoring information.

    Attributes:
        course: The catalog row
        score: Match score (higher is better)
        matched_on: What the section matched (course code or keywords)
    """
    course: Dict
    score: float
    matched_on: List[str] = field(default_factory=list)

    @property
    def code(self) -> str:
        return f"{self.course['subject_code']}{self.course['course_number']}"


# ============================================================================
# COURSE SERVICE
# ============================================================================

class CourseService:
    """Service for course catalog search operations."""

    def __init__(self, courses: Optional[List[Dict]] = None):
        """
        Args:
            courses: Catalog rows to search. Defaults to the configured catalog.
        """
        self._courses = courses

    @property
    def courses(self) -> List[Dict]:
        if self._courses is None:
            self._courses = load_courses()
        return self._courses

    def search(self, prompt: str, limit: int = COURSE_SEARCH_LIMIT) -> List[CourseMatch]:
        """
        Find catalog sections relevant to a free-text prompt.

        Sections whose course code appears in the prompt always rank first;
        when the prompt names a code, only sections of that code (optionally
        narrowed by keywords) are returned.

        Args:
            prompt: Search text from the model, e.g. "CS101" or "intro databases"
            limit: Maximum number of sections to return

        Returns:
            List of CourseMatch objects, sorted by score (highest first)
        """
        # "Fall 2025" or "over 50" read as codes; keep only catalog subjects
        subjects = {course["subject_code"].strip().upper() for course in self.courses}
        codes = {code for code in extract_course_codes(prompt) if code[0] in subjects}
        keywords = extract_keywords(prompt)
        matches = []

        for course in self.courses:
            score = 0.0
            matched_on = []

            code = normalize_course_code(course["subject_code"], course["course_number"])
            if code in codes:
                score += 10.0
                matched_on.append(f"{code[0]}{code[1]}")
            elif codes:
                continue

            searchable = " ".join(
                str(course.get(key, ""))
                for key in ("title", "title_short_desc", "description", "primary_instructor_full_name", "subject_code")
            ).lower()
            keyword_hits = [kw for kw in keywords if kw in searchable]
            if keyword_hits:
                score += len(keyword_hits) / max(len(keywords), 1)
                matched_on.extend(keyword_hits)

            if score > 0:
                matches.append(CourseMatch(course=course, score=score, matched_on=matched_on))

        matches.sort(key=lambda m: m.score, reverse=True)
        logger.info(f"📚 Course search '{prompt[:50]}': {len(matches)} matches")
        return matches[:limit]


def format_course(course: Dict) -> Dict:
    """Shape a catalog row into the fields cited in answers."""
    return {
        "subject_code": course["subject_code"],
        "course_number": course["course_number"],
        "section": course.get("section", ""),
        "title": course["title"],
        "title_short_desc": course.get("title_short_desc", course["title"]),
        "primary_instructor_full_name": course.get("primary_instructor_full_name", "Staff"),
        "credits": course.get("credits"),
        "schedule": course.get("schedule"),
        "location": course.get("location"),
        "description": course.get("description", ""),
    }


# ============================================================================
# CONVENIENCE FUNCTIONS
# ============================================================================

def search_courses(prompt: str, limit: int = COURSE_SEARCH_LIMIT) -> List[Dict]:
    """Search the configured catalog and return formatted sections."""
    return [format_course(match.course) for match in CourseService().search(prompt, limit)]
