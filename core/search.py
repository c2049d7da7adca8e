# =============================================================================
# core/search.py  -  Query Engine
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Narrows a catalog down to the courses matching every supplied filter.
#
# MATCHING RULES:
#   - query    -> substring of title OR description OR instructor (any case)
#   - subject  -> equal, ignoring case
#   - level    -> equal, ignoring case
#   - duration -> course.duration <= bound
#   - provider -> equal, ignoring case
#   Filters combine with AND.  A filter that is None, "" or 0 is skipped.
#
#   Results keep catalog order.  No scoring, no sorting, no I/O.
# =============================================================================

from typing import Callable, Iterable

from core.models import Course, SearchCriteria

Predicate = Callable[[Course], bool]


def _contains_term(term: str) -> Predicate:
    needle = term.lower()
    return lambda c: (
        needle in c.title.lower()
        or needle in c.description.lower()
        or needle in c.instructor.lower()
    )


def _equals_ignoring_case(attr: str, value: str) -> Predicate:
    expected = value.lower()
    return lambda c: getattr(c, attr).lower() == expected


def build_predicates(criteria: SearchCriteria) -> list[Predicate]:
    """One predicate per supplied filter, in a fixed order."""
    predicates: list[Predicate] = []

    if criteria.query:
        predicates.append(_contains_term(criteria.query))
    if criteria.subject:
        predicates.append(_equals_ignoring_case("subject", criteria.subject))
    if criteria.level:
        predicates.append(_equals_ignoring_case("level", criteria.level))
    if criteria.duration:
        bound = criteria.duration
        predicates.append(lambda c: c.duration <= bound)
    if criteria.provider:
        predicates.append(_equals_ignoring_case("provider", criteria.provider))

    return predicates


def search_courses(criteria: SearchCriteria, catalog: Iterable[Course]) -> list[Course]:
    """Return the courses that satisfy every filter in ``criteria``.

    Args:
        criteria: The filters to apply.  Unset filters are ignored.
        catalog: A CourseCatalog, or any iterable of courses.

    Returns:
        A new list of matching courses in catalog order.  With no filters
        set this is every course.  A value that matches nothing (say an
        unknown provider) gives an empty list.
    """
    predicates = build_predicates(criteria)
    return [course for course in catalog if all(p(course) for p in predicates)]
