# vacation_planner/slot_solution.py
import logging
from typing import Optional

from . import config
from .cache import SolutionCache, SolutionCacheKey
from .candidates import ScoreFunction, TravelTimeFunction, build_candidate, is_feasible
from .data_models import CategorizedPlaces, SlotRequest, SlotSolution, SlotTag, TimeInterval, split_location, tag_to_str
from .enumeration import CombinationEnumerator
from .place_source import PlaceSource
from .scoring import score_places
from .selection import TopKSelector
from .tags import parse_tag
from .travel_time import travel_time_minutes


def find_best_candidates(tag: SlotTag, places: CategorizedPlaces, available_minutes: float,
                         score: ScoreFunction = score_places,
                         travel_time: TravelTimeFunction = travel_time_minutes,
                         selector: Optional[TopKSelector] = None):
    """
    Streams every index tuple through build -> feasibility -> top-K.

    Returns the shortlist best first; empty when nothing is feasible.
    """
    selector = selector or TopKSelector()
    enumerator = CombinationEnumerator.for_tag(tag, places)
    while enumerator.has_next():
        candidate = build_candidate(tag, places, enumerator.current(), score)
        if is_feasible(candidate, available_minutes, travel_time):
            selector.offer(candidate)
        enumerator.advance()
    return selector.best()


def generate_slot_solution(request: SlotRequest, place_source: PlaceSource,
                           cache: Optional[SolutionCache] = None,
                           score: ScoreFunction = score_places,
                           travel_time: TravelTimeFunction = travel_time_minutes,
                           logger: Optional[logging.Logger] = None) -> SlotSolution:
    """
    Generates slot solution candidates for a slot request.

    Raises:
        InvalidTag: the tag is malformed; nothing is computed.
        ValueError: the stay times do not line up with the tag, or the
            location is not "city,country".
    """
    log = logger or logging.getLogger(__name__)

    # --- 1. Validate the request ---
    tag = parse_tag(request.tag)
    if len(request.stay_times) != len(tag):
        raise ValueError("User designated stay time does not match tag.")
    city, country = split_location(request.location)

    radius = request.radius if request.radius > 0 else config.DEFAULT_RADIUS
    key = SolutionCacheKey(
        city=city,
        country=country,
        radius=radius,
        tags=tuple(c.value for c in tag),
        intervals=tuple(request.stay_times),
        weekday=request.weekday,
    )

    # --- 2. Cache lookup ---
    if cache is not None:
        cached = cache.get(key)
        if cached is not None:
            log.debug("Slot solution cache hit for %s", key)
            return cached

    # --- 3. Match places to the whole slot ---
    slot = TimeInterval(request.stay_times[0].start, request.stay_times[-1].end)
    places = place_source.categorized_places(request.location, radius, request.weekday, slot)
    log.debug("Matched %d eateries and %d visits for %s",
              len(places.eatery), len(places.visit), request.location)

    # --- 4. Enumerate, filter and select ---
    best = find_best_candidates(tag, places, slot.minutes, score, travel_time)
    if not best:
        log.info("No feasible candidate for tag %s in %s", tag_to_str(tag), request.location)
    solution = SlotSolution(slot_tag=tag_to_str(tag), candidates=best)

    # --- 5. Offer the result to the cache ---
    if cache is not None:
        cache.put(key, solution)
    return solution
