# vacation_planner/__init__.py
from .data_models import (
    CategorizedPlaces, Category, DayPlanRequest, KnapsackItem, KnapsackSelection, Place,
    SlotRequest, SlotSolution, SlotSolutionCandidate, TimeInterval, Weekday,
)
from .errors import InvalidTag, PlaceSourceError, GeocodingError
from .optimization_engine import select_day_places
from .slot_solution import generate_slot_solution

__version__ = "0.1.0"
