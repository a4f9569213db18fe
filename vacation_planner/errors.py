# vacation_planner/errors.py


class VacationPlannerError(Exception):
    """Base class for planner errors."""


class InvalidTag(VacationPlannerError, ValueError):
    """Slot tag is empty, too long, or holds symbols other than E/V."""

    def __init__(self, tag):
        self.tag = tag
        super().__init__(f"Slot tag {tag!r} is invalid.")


class PlaceSourceError(VacationPlannerError):
    """The places provider failed or answered with an error status."""


class GeocodingError(PlaceSourceError):
    """A city/country pair could not be resolved to coordinates."""
