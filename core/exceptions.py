# core/exceptions.py


class ChamberError(Exception):
    """Base class for chamber scheduling errors"""


class MalformedPatternError(ChamberError):
    """
    Raised for a schedule type outside the known variants.
    This is a data-integrity problem, not something a user can correct.
    """

    def __init__(self, schedule_type):
        self.schedule_type = schedule_type
        super().__init__(f"Unrecognized schedule type: {schedule_type!r}")


class SchedulingConflict(ChamberError):
    """A chamber collides with another active chamber of the same doctor"""

    def __init__(self, conflict):
        self.conflict = conflict
        super().__init__(conflict.message)


class ChamberInUseError(ChamberError):
    """Chamber still has pending or confirmed appointments"""
