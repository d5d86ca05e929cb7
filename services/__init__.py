"""
Business Logic Services Module

This module contains the business logic for ClassScout:
- Chat service: Main coordinator for user interactions
- Course service: Course catalog search

Services orchestrate tools and apply domain-specific rules.
"""

from .chat_service import (
    ChatService,
    ChatResponse,
    process_user_message,
)

from .course_service import (
    CourseService,
    CourseMatch,
    search_courses,
    format_course,
)

__all__ = [
    # Chat Service
    "ChatService",
    "ChatResponse",
    "process_user_message",

    # Course Service
    "CourseService",
    "CourseMatch",
    "search_courses",
    "format_course",
]
