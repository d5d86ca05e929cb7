"""
External API Clients Module

Clients for the external services ClassScout's tools rely on:
- Rate My Professors GraphQL search
"""

from .rmp_client import (
    RateMyProfessorClient,
    ProfessorLookupError,
    format_professor,
)

__all__ = [
    "RateMyProfessorClient",
    "ProfessorLookupError",
    "format_professor",
]
