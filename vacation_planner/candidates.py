# vacation_planner/candidates.py
from typing import Callable, List, Sequence

from .data_models import CategorizedPlaces, Place, SlotSolutionCandidate, SlotTag
from .scoring import score_places
from .travel_time import travel_time_minutes

ScoreFunction = Callable[[Sequence[Place]], float]
TravelTimeFunction = Callable[[Sequence[Place]], float]

INVALID_CANDIDATE = SlotSolutionCandidate(places=(), score=0.0, is_valid=False)


def build_candidate(tag: SlotTag, places: CategorizedPlaces, index_tuple: Sequence[int],
                    score: ScoreFunction = score_places) -> SlotSolutionCandidate:
    """
    Materializes the places an index tuple points at.

    A place id may appear only once per candidate, across both categories.
    A repeat yields an invalid candidate rather than an error.
    """
    if len(index_tuple) != len(tag):
        return INVALID_CANDIDATE

    used = set()
    chosen: List[Place] = []
    for category, idx in zip(tag, index_tuple):
        place = places.cluster(category)[idx]
        if place.place_id in used:
            return INVALID_CANDIDATE
        used.add(place.place_id)
        chosen.append(place)

    return SlotSolutionCandidate(places=tuple(chosen), score=score(chosen), is_valid=True)


def is_feasible(candidate: SlotSolutionCandidate, available_minutes: float,
                travel_time: TravelTimeFunction = travel_time_minutes) -> bool:
    """True when the travel between the candidate's events fits in the slot."""
    if not candidate.is_valid:
        return False
    return travel_time(candidate.places) <= available_minutes
