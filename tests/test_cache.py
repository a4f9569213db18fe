import json

import pytest

from vacation_planner.cache import (
    InMemorySolutionCache, JsonFilePlaceCache, JsonFileSolutionCache, PlaceCacheKey, SolutionCacheKey,
)
from vacation_planner.data_models import Category, SlotSolution, SlotSolutionCandidate, TimeInterval, Weekday


def make_key(**overrides):
    fields = dict(city="Toronto", country="Canada", radius=2000, tags=("E", "V"),
                  intervals=(TimeInterval(9, 10), TimeInterval(10, 12)), weekday=Weekday.MONDAY)
    fields.update(overrides)
    return SolutionCacheKey(**fields)


def make_solution(make_place):
    candidate = SlotSolutionCandidate(places=(make_place(1, "E"), make_place(2, "V")), score=4.2, is_valid=True)
    return SlotSolution(slot_tag="EV", candidates=[candidate])


def test_key_string():
    assert str(make_key()) == "slot_solution:toronto:canada:2000:EV:9-10_10-12:monday"
    assert str(make_key(city=" toronto ")) == str(make_key())
    assert str(make_key(weekday=Weekday.FRIDAY)) != str(make_key())


def test_in_memory_round_trip(make_place):
    cache = InMemorySolutionCache()
    assert cache.get(make_key()) is None
    cache.put(make_key(), make_solution(make_place))
    cached = cache.get(make_key())
    assert cached.slot_tag == "EV"
    assert cached.candidates[0].place_ids == ["1", "2"]
    assert cached.candidates[0].is_valid


def test_json_file_cache_persists(tmp_path, make_place):
    path = str(tmp_path / "cache.json")
    JsonFileSolutionCache(path).put(make_key(), make_solution(make_place))
    cached = JsonFileSolutionCache(path).get(make_key())
    assert cached.candidates[0].places[1].name == "Place 2"
    assert cached.candidates[0].score == 4.2


def test_corrupt_json_cache_is_a_miss(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text("{not json")
    assert JsonFileSolutionCache(str(path)).get(make_key()) is None


def test_non_object_json_cache_is_a_miss(tmp_path, make_place):
    path = tmp_path / "cache.json"
    path.write_text("[]")
    cache = JsonFileSolutionCache(str(path))
    assert cache.get(make_key()) is None
    cache.put(make_key(), make_solution(make_place))
    assert cache.get(make_key()).slot_tag == "EV"


def test_entry_without_places_is_rebuilt_from_lists(tmp_path):
    path = tmp_path / "cache.json"
    path.write_text(json.dumps({str(make_key()): {"slot_tag": "EV", "solution": [{
        "place_ids": ["e1", "v1"],
        "place_names": ["Cafe", "Museum"],
        "place_locations": [[43.65, -79.38], [43.66, -79.39]],
        "score": 3.5,
    }]}}))
    candidate = JsonFileSolutionCache(str(path)).get(make_key()).candidates[0]
    assert candidate.place_ids == ["e1", "v1"]
    assert candidate.place_names == ["Cafe", "Museum"]
    assert [p.category for p in candidate.places] == [Category.EATERY, Category.VISIT]
    assert candidate.places[1].location == (43.66, -79.39)


@pytest.mark.parametrize("entry", [
    {"score": 3.5},
    {"place_ids": ["e1"], "place_names": ["Cafe"], "place_locations": [[43.65, -79.38]], "score": 3.5},
])
def test_entry_not_matching_tag_is_a_miss(tmp_path, entry):
    path = tmp_path / "cache.json"
    path.write_text(json.dumps({str(make_key()): {"slot_tag": "EV", "solution": [entry]}}))
    assert JsonFileSolutionCache(str(path)).get(make_key()) is None


def test_place_key_string():
    key = PlaceCacheKey(43.65107, -79.347015, Category.EATERY)
    assert str(key) == "places:43.6511,-79.3470:eatery"


def test_json_place_cache_persists(tmp_path, make_place):
    path = str(tmp_path / "places.json")
    key = PlaceCacheKey(43.65, -79.38, Category.VISIT)
    assert JsonFilePlaceCache(path).get(key) == []
    JsonFilePlaceCache(path).put(key, [make_place(1, "V"), make_place(2, "V")])
    cached = JsonFilePlaceCache(path).get(key)
    assert [p.place_id for p in cached] == ["1", "2"]
    assert cached[0] == make_place(1, "V")
    assert JsonFilePlaceCache(path).get(PlaceCacheKey(43.65, -79.38, Category.EATERY)) == []
