"""
Rate My Professors Client

Looks up professors through the Rate My Professors GraphQL teacher search.
One request is made per name; the best match for each name is returned.
"""

import logging
from typing import Optional, Dict, Any, List

import requests

from config import RMP_GRAPHQL_URL, RMP_AUTH_TOKEN, RMP_SCHOOL_ID, RMP_TIMEOUT

logger = logging.getLogger(__name__)


TEACHER_SEARCH_QUERY = """
query TeacherSearchQuery($text: String!, $schoolID: ID) {
  newSearch {
    teachers(query: {text: $text, schoolID: $schoolID}, first: 1) {
      edges {
        node {
          id
          legacyId
          firstName
          lastName
          department
          avgRating
          avgDifficulty
          numRatings
          wouldTakeAgainPercent
          school { name }
        }
      }
    }
  }
}
"""


class ProfessorLookupError(Exception):
    """Raised when Rate My Professors cannot be queried."""


# ============================================================================
# CLIENT
# ============================================================================

class RateMyProfessorClient:
    """Thin client over the Rate My Professors GraphQL endpoint."""

    def __init__(
        self,
        url: str = RMP_GRAPHQL_URL,
        auth_token: str = RMP_AUTH_TOKEN,
        school_id: Optional[str] = RMP_SCHOOL_ID,
        timeout: int = RMP_TIMEOUT,
        session: Optional[requests.Session] = None,
    ):
        self.url = url
        self.school_id = school_id
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({
            "Authorization": f"Basic {auth_token}",
            "Content-Type": "application/json",
        })

    def search_professor(self, name: str) -> Optional[Dict[str, Any]]:
        """
        Look up a single professor by name.

        Args:
            name: Professor's full name

        Returns:
            Professor summary dict, or None if no professor matched

        Raises:
            ProfessorLookupError: On HTTP, JSON or GraphQL errors
        """
        payload = {
            "query": TEACHER_SEARCH_QUERY,
            "variables": {"text": name, "schoolID": self.school_id},
        }

        try:
            response = self.session.post(self.url, json=payload, timeout=self.timeout)
            response.raise_for_status()
            data = response.json()
        except requests.RequestException as e:
            raise ProfessorLookupError(f"Rate My Professors request failed for '{name}': {e}") from e
        except ValueError as e:
            raise ProfessorLookupError(f"Rate My Professors returned invalid JSON for '{name}': {e}") from e

        if data.get("errors"):
            messages = "; ".join(err.get("message", "unknown error") for err in data["errors"])
            raise ProfessorLookupError(f"Rate My Professors query failed for '{name}': {messages}")

        edges = (
            ((data.get("data") or {}).get("newSearch") or {}).get("teachers") or {}
        ).get("edges") or []
        if not edges:
            logger.info(f"🔍 No Rate My Professors entry for {name}")
            return None

        return format_professor(edges[0]["node"])

    def get_many_professors_data(self, names: List[str]) -> List[Dict[str, Any]]:
        """
        Look up several professors, in order.

        Names with no match are reported with ``found: False`` so the model
        can say so instead of guessing.
        """
        results = []
        for name in names:
            professor = self.search_professor(name)
            if professor is None:
                results.append({"query": name, "found": False})
            else:
                results.append({"query": name, "found": True, **professor})
        return results


def format_professor(node: Dict[str, Any]) -> Dict[str, Any]:
    """Flatten a GraphQL teacher node."""
    return {
        "name": f"{node.get('firstName', '')} {node.get('lastName', '')}".strip(),
        "department": node.get("department"),
        "school": (node.get("school") or {}).get("name"),
        "avg_rating": node.get("avgRating"),
        "avg_difficulty": node.get("avgDifficulty"),
        "num_ratings": node.get("numRatings"),
        "would_take_again_percent": node.get("wouldTakeAgainPercent"),
        "legacy_id": node.get("legacyId"),
    }
