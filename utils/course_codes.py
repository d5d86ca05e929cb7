"""
Course code parsing utilities.

Finds course codes such as "CS101", "cs 101" or "MATH-221A" in free text
and normalizes them to the (subject_code, course_number) form used by the
course catalog.
"""

import re
from typing import List, Set, Tuple


COURSE_CODE_PATTERN = re.compile(r"\b([A-Za-z]{2,5})\s*[-_ ]?\s*(\d{2,4}[A-Za-z]?)\b")

# Words that look like subject codes but are ordinary English
NON_SUBJECT_WORDS = {
    "in", "at", "on", "for", "top", "the", "and", "of", "to", "room", "from", "after", "before", "year",
    "fall", "spring", "summer", "winter", "term", "over", "under", "above", "below", "than", "about",
    "least", "most", "by", "until", "past", "max", "min",
}

STOPWORDS = {
    "a", "an", "and", "are", "about", "any", "by", "can", "course", "courses",
    "class", "classes", "do", "does", "for", "give", "i", "in", "is", "it",
    "me", "of", "on", "or", "show", "tell", "that", "the", "this", "to",
    "what", "which", "who", "whom", "with", "teach", "teaches", "teaching",
    "taught", "offered", "section", "sections", "find", "list", "there",
}


def normalize_course_code(subject: str, number: str) -> Tuple[str, str]:
    """
    Normalize a subject/number pair.

    Example:
        >>> normalize_course_code("cs", "101a")
        ('CS', '101A')
    """
    return subject.strip().upper(), str(number).strip().upper()


def extract_course_codes(text: str) -> List[Tuple[str, str]]:
    """
    Extract course codes from free text, in order of appearance, without duplicates.

    Example:
        >>> extract_course_codes("Who teaches CS101 and math 221?")
        [('CS', '101'), ('MATH', '221')]
    """
    seen: Set[Tuple[str, str]] = set()
    codes = []
    for subject, number in COURSE_CODE_PATTERN.findall(text or ""):
        if subject.lower() in NON_SUBJECT_WORDS:
            continue
        code = normalize_course_code(subject, number)
        if code not in seen:
            seen.add(code)
            codes.append(code)
    return codes


def extract_keywords(text: str) -> List[str]:
    """Lowercase search keywords from free text, with stopwords and course codes removed."""
    stripped = COURSE_CODE_PATTERN.sub(" ", text or "")
    words = re.findall(r"[a-z0-9]+", stripped.lower())
    return [w for w in words if w not in STOPWORDS and len(w) > 1]
