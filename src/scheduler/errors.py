"""Error hierarchy for the scheduling core.

Validation failures are raised as exceptions; detected conflicts are not
errors and are returned as results by ``src.scheduler.conflicts``.

Example usage:
    try:
        entry = ScheduleEntry.from_payload(form_data)
    except InvalidScheduleEntry as e:
        show_validation_error(str(e))
"""


class SchedulingError(Exception):
    """Base exception for all scheduling core errors."""

    pass


class InvalidScheduleEntry(SchedulingError):
    """Schedule entry violates a structural invariant.

    Examples: non-positive duration, session crossing midnight, in-person
    session without a room, day of week outside 1..7, malformed "HH:MM".
    """

    pass


class InvalidLayoutWindow(SchedulingError):
    """Calendar visible window is misconfigured.

    Examples: start hour not before end hour, hours outside 0..24,
    negative minimum cell height.
    """

    pass
