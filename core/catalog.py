# =============================================================================
# core/catalog.py  -  Catalog Store
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Holds the course records that search_courses filters.  The catalog is
#   built once at startup, either from the built-in sample data or from a
#   JSON file named by COURSE_CATALOG_PATH, and is never changed afterwards.
#
# IMMUTABILITY:
#   CourseCatalog stores a tuple of frozen Course objects and has no
#   mutating methods.  load_catalog() finishes building the whole tuple
#   before the catalog exists, so a query can never see half a catalog.
# =============================================================================

import json
import logging
from pathlib import Path
from typing import Iterable, Iterator, Optional

from core.config import Settings
from core.models import Course

log = logging.getLogger(__name__)


class CatalogError(ValueError):
    """Raised when catalog data is malformed or has duplicate ids."""


class CourseCatalog:
    """An ordered, read-only collection of courses with unique ids."""

    def __init__(self, courses: Iterable[Course]):
        courses = tuple(courses)
        seen: set[str] = set()
        for course in courses:
            if course.id in seen:
                raise CatalogError(f"Duplicate course id: {course.id!r}")
            seen.add(course.id)
        self._courses = courses
        self._by_id = {course.id: course for course in courses}

    @property
    def courses(self) -> tuple[Course, ...]:
        return self._courses

    def get(self, course_id: str) -> Optional[Course]:
        return self._by_id.get(course_id)

    def __iter__(self) -> Iterator[Course]:
        return iter(self._courses)

    def __len__(self) -> int:
        return len(self._courses)

    def __repr__(self) -> str:
        return f"CourseCatalog({len(self._courses)} courses)"


# -----------------------------------------------------------------------------
# Built-in sample catalog
# -----------------------------------------------------------------------------
# Used whenever no catalog file is configured.  The tests rely on these
# exact records (ids, durations, levels), so treat them as fixtures.
# -----------------------------------------------------------------------------
SAMPLE_COURSES: tuple[Course, ...] = (
    Course(
        id="1",
        title="Introduction to Machine Learning",
        description="Learn the basics of machine learning algorithms and applications.",
        instructor="Dr. Jane Smith",
        duration=8,
        level="beginner",
        subject="Computer Science",
        provider="Coursera",
        url="https://coursera.org/course/ml-intro",
    ),
    Course(
        id="2",
        title="Advanced Python Programming",
        description="Deep dive into Python programming with advanced concepts.",
        instructor="Prof. John Doe",
        duration=12,
        level="advanced",
        subject="Computer Science",
        provider="edX",
        url="https://edx.org/course/python-adv",
    ),
    Course(
        id="3",
        title="Data Structures and Algorithms",
        description="Master fundamental data structures and algorithms.",
        instructor="Dr. Alice Johnson",
        duration=10,
        level="intermediate",
        subject="Computer Science",
        provider="Udacity",
        url="https://udacity.com/course/dsa",
    ),
    Course(
        id="4",
        title="Calculus I",
        description="Introduction to differential and integral calculus.",
        instructor="Prof. Bob Wilson",
        duration=16,
        level="beginner",
        subject="Mathematics",
        provider="Khan Academy",
        url="https://khanacademy.org/calculus1",
    ),
    Course(
        id="5",
        title="Web Development with React",
        description="Build modern web applications using React.js.",
        instructor="Ms. Carol Brown",
        duration=6,
        level="intermediate",
        subject="Computer Science",
        provider="freeCodeCamp",
        url="https://freecodecamp.org/react",
    ),
)


def default_catalog() -> CourseCatalog:
    """The built-in five-course sample catalog."""
    return CourseCatalog(SAMPLE_COURSES)


_STRING_FIELDS = ("id", "title", "description", "instructor", "level", "subject", "provider", "url")


def _parse_course(raw: object, index: int) -> Course:
    if not isinstance(raw, dict):
        raise CatalogError(f"Entry {index} is not an object")

    missing = [name for name in (*_STRING_FIELDS, "duration") if name not in raw]
    if missing:
        raise CatalogError(f"Entry {index} is missing fields: {', '.join(missing)}")

    for name in _STRING_FIELDS:
        if not isinstance(raw[name], str):
            raise CatalogError(f"Entry {index}: field {name!r} must be a string")

    duration = raw["duration"]
    # bool is an int subclass; reject it explicitly
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise CatalogError(f"Entry {index}: duration must be a positive integer")

    return Course(duration=duration, **{name: raw[name] for name in _STRING_FIELDS})


def load_catalog(path: str | Path) -> CourseCatalog:
    """Load a catalog snapshot from a JSON array of course objects.

    Args:
        path: File containing ``[{"id": ..., "title": ..., ...}, ...]``.

    Returns:
        A fully built CourseCatalog.

    Raises:
        CatalogError: If the document is not a list, an entry is malformed,
            or two entries share an id.
        OSError: If the file cannot be read.
    """
    path = Path(path)
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise CatalogError(f"{path} is not valid JSON: {e}") from e

    if not isinstance(data, list):
        raise CatalogError(f"{path} must contain a JSON array of courses")

    catalog = CourseCatalog(_parse_course(raw, i) for i, raw in enumerate(data))
    log.info("Loaded %d courses from %s", len(catalog), path)
    return catalog


def build_catalog(settings: Settings) -> CourseCatalog:
    """The catalog selected by configuration: a file if set, else the sample."""
    if settings.catalog_path:
        return load_catalog(settings.catalog_path)
    return default_catalog()
