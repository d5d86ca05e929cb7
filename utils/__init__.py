"""
Utilities package for shared helper functions.
"""

from utils.course_codes import normalize_course_code, extract_course_codes, extract_keywords

__all__ = ['normalize_course_code', 'extract_course_codes', 'extract_keywords']
