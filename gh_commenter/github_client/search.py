"""GitHub search query building with safety qualifiers."""

from datetime import datetime, timedelta


class QueryConflictError(ValueError):
    """Raised when the raw query contradicts an --include-* flag."""


# (flag, qualifier the flag unlocks, qualifier appended when the flag is off)
INCLUSION_QUALIFIERS = (
    ("--include-archived", "archived:true", "archived:false"),
    ("--include-closed", "is:closed", "is:open"),
    ("--include-locked", "is:locked", "is:unlocked"),
)


def format_updated_qualifier(latest: datetime) -> str:
    """Format an ``updated:<=`` qualifier for GitHub search.

    Args:
        latest: Timezone-aware datetime; issues updated after it are excluded

    Returns:
        Qualifier such as ``updated:<=2024-01-01T10:00:00+00:00``
    """
    return "updated:<=" + latest.isoformat(timespec="seconds")


def build_search_query(
    query: str,
    include_archived: bool = False,
    include_closed: bool = False,
    include_locked: bool = False,
    min_updated: timedelta = timedelta(0),
    now: datetime | None = None,
) -> str:
    """Build the final GitHub search query string.

    Issues that are archived, closed or locked are excluded unless the matching
    include flag is set. A raw query that asks for the excluded kind of issue
    without the flag, or for the opposite kind with it, is rejected.

    Args:
        query: Raw user query
        include_archived: Allow issues from archived repositories
        include_closed: Allow closed issues
        include_locked: Allow locked issues
        min_updated: Only match issues unmodified for at least this long;
            zero disables the filter
        now: Reference time for ``min_updated``, defaults to the current time

    Returns:
        Space-separated GitHub search query

    Raises:
        QueryConflictError: If the query contradicts one of the include flags

    Example:
        >>> build_search_query("is:issue label:bug")
        "is:issue label:bug archived:false is:open is:unlocked"
    """
    # GitHub returns no results at all for queries containing newlines
    query = query.replace("\r\n", " ").replace("\n", " ")
    parts = [query]

    toggles = (include_archived, include_closed, include_locked)
    for included, (flag, unlocked, restricted) in zip(toggles, INCLUSION_QUALIFIERS):
        if not included:
            if unlocked in query:
                raise QueryConflictError(f"{unlocked} requires {flag}")
            parts.append(restricted)
        elif restricted in query:
            raise QueryConflictError(f"{restricted} conflicts with {flag}")

    if min_updated:
        reference = now or datetime.now().astimezone()
        parts.append(format_updated_qualifier(reference - min_updated))

    return " ".join(parts)


def search_order(min_updated: timedelta) -> tuple[str | None, bool]:
    """Choose the search sort for a minimum update age.

    Least recently updated issues come first when filtering by age, so a low
    ceiling reaches the stalest issues. Otherwise GitHub's best-match order is
    kept.

    Returns:
        Tuple of (sort field or None, ascending)
    """
    if min_updated > timedelta(0):
        return "updated", True
    return None, False
