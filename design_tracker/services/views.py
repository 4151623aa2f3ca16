"""Derived views over an in-memory list of requests.

The input list is expected in store order (newest first); every view keeps
that order.
"""
from datetime import date, datetime, time, timezone

from design_tracker.models.design_request import STATUS_DONE, VALID_STATUSES
from design_tracker.services.lifecycle import visible_requests

ALL = 'All'
UNASSIGNED = 'Unassigned'

END_OF_DAY = time(23, 59, 59, 999000)


def matches_query(request, query):
    """Case-insensitive substring match on outlet name or design type."""
    if not query:
        return True
    needle = query.lower()
    return needle in (request.outlet_name or '').lower() or needle in (request.design_type or '').lower()


def matches_designer(request, designer):
    if not designer or designer == ALL:
        return True
    if designer == UNASSIGNED:
        return not request.designer_name
    return request.designer_name == designer


def dashboard_view(requests, actor, query=None, status=None, designer=None):
    result = []
    for request in visible_requests(requests, actor):
        if status and status != ALL and request.status != status:
            continue
        if matches_query(request, query) and matches_designer(request, designer):
            result.append(request)
    return result


def _as_start(bound):
    if isinstance(bound, datetime):
        return bound
    return datetime.combine(bound, time.min)


def _as_end(bound):
    # A plain date covers the whole day
    if isinstance(bound, datetime):
        return bound
    return datetime.combine(bound, END_OF_DAY)


def history_view(requests, actor, start=None, end=None, query=None):
    """
    Completed requests created inside [start, end].

    Args:
        start, end: date or datetime bounds, either may be None (unbounded).
            A date end bound is extended to 23:59:59.999 of that day.
    """
    start_at = _as_start(start) if start is not None else None
    end_at = _as_end(end) if end is not None else None

    result = []
    for request in visible_requests(requests, actor):
        if request.status != STATUS_DONE:
            continue
        if start_at is not None and request.created_at < start_at:
            continue
        if end_at is not None and request.created_at > end_at:
            continue
        if matches_query(request, query):
            result.append(request)
    return result


def designer_roster(requests):
    """Sorted distinct designer names, for the designer filter."""
    return sorted({r.designer_name for r in requests if r.designer_name})


def status_counts(requests, actor):
    counts = {status: 0 for status in VALID_STATUSES}
    for request in visible_requests(requests, actor):
        if request.status in counts:
            counts[request.status] += 1
    return counts


def parse_date(value):
    """Parse an ISO date (or datetime) query value; empty means no bound."""
    if not value:
        return None
    if isinstance(value, (date, datetime)):
        return value
    if len(value) == 10:
        return date.fromisoformat(value)
    parsed = datetime.fromisoformat(value.replace('Z', '+00:00'))
    if parsed.tzinfo is not None:
        # Stored timestamps are naive UTC
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed
