# =============================================================================
# core/models.py  -  Data Models (the "nouns" of the system)
# =============================================================================
#
# Two shapes flow through the system:
#   - Course:         one catalog entry, fixed for the life of the process
#   - SearchCriteria: one query's filters, thrown away after the query
#
# Both are frozen dataclasses.  A Course can be shared between concurrent
# tool calls because nothing can change it after construction.
# =============================================================================

from dataclasses import dataclass, fields
from typing import Any, Optional


# -----------------------------------------------------------------------------
# Course - a single catalog entry
# -----------------------------------------------------------------------------
# Field order matters: it is the key order of the JSON the tool returns
# (asdict() keeps declaration order).
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class Course:
    """One offered course."""

    id: str                            # Unique within a catalog
    title: str
    description: str
    instructor: str
    duration: int                      # Weeks
    level: str                         # "beginner" / "intermediate" / "advanced" (not enforced)
    subject: str                       # e.g. "Computer Science"
    provider: str                      # e.g. "Coursera"
    url: str                           # Never fetched or validated


# -----------------------------------------------------------------------------
# SearchCriteria - the filters of a single search_courses call
# -----------------------------------------------------------------------------
# None means "not supplied".  Empty strings and a zero duration also count
# as not supplied, so from_arguments() folds them into None.
# -----------------------------------------------------------------------------
@dataclass(frozen=True)
class SearchCriteria:
    """Optional filters for a catalog search.

    query matches title, description or instructor (substring, any case).
    subject, level and provider are case-insensitive exact matches.
    duration is an inclusive upper bound in weeks.
    """

    query: Optional[str] = None
    subject: Optional[str] = None
    level: Optional[str] = None
    duration: Optional[float] = None
    provider: Optional[str] = None

    @classmethod
    def from_arguments(cls, **arguments: Any) -> "SearchCriteria":
        """Build criteria from raw tool arguments, dropping falsy values."""
        known = {f.name for f in fields(cls)}
        return cls(**{
            name: value
            for name, value in arguments.items()
            if name in known and value
        })

    def active_filters(self) -> dict[str, Any]:
        """The supplied filters only, in declaration order."""
        return {
            f.name: getattr(self, f.name)
            for f in fields(self)
            if getattr(self, f.name)
        }
