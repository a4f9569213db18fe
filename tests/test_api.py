import pytest

from vacation_planner.api import create_app
from vacation_planner.cache import InMemorySolutionCache
from vacation_planner.errors import PlaceSourceError
from vacation_planner.place_source import PlaceSource, StaticPlaceSource, load_places


class FailingSource(PlaceSource):
    def search(self, location, radius):
        raise PlaceSourceError("Maps API error 500 for place/nearbysearch")


@pytest.fixture
def cache():
    return InMemorySolutionCache()


@pytest.fixture
def client(ev_places, visit_pool_path, cache):
    places = list(ev_places.eatery) + list(ev_places.visit) + load_places(visit_pool_path)
    app = create_app(place_source=StaticPlaceSource(places), solution_cache=cache)
    app.config["TESTING"] = True
    return app.test_client()


def test_health(client):
    assert client.get("/health").get_json() == {"status": "ok"}


def test_slot_solution(client, cache):
    resp = client.post("/slot_solution", json={
        "location": "New York,US",
        "tag": "ev",
        "stay_times": [[10, 11], {"start": 11, "end": 13}],
        "weekday": "saturday",
        "radius": 0,
    })
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["slot_tag"] == "EV"
    assert 0 < len(body["solution"]) <= 15
    scores = [c["score"] for c in body["solution"]]
    assert scores == sorted(scores, reverse=True)
    assert len(cache) == 1


@pytest.mark.parametrize("payload", [
    {"location": "New York,US", "tag": "EVVVV", "stay_times": [[9, 10]] * 5},
    {"location": "New York,US", "tag": "EV", "stay_times": [[9, 10]]},
    {"location": "New York", "tag": "EV", "stay_times": [[9, 10], [10, 11]]},
    {"location": "New York,US", "tag": "EV", "stay_times": [[11, 10], [10, 11]]},
    {"tag": "EV"},
])
def test_slot_solution_bad_input(client, payload):
    resp = client.post("/slot_solution", json=payload)
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_slot_solution_without_json(client):
    assert client.post("/slot_solution", data="tag=EV").status_code == 400


def test_day_plan(client):
    resp = client.post("/day_plan", json={
        "location": "Orlando,US",
        "weekday": "Monday",
        "start_hour": 8,
        "end_hour": 24,
        "time_budget": 8,
        "money_budget": 80,
    })
    assert resp.status_code == 200
    body = resp.get_json()
    assert body["day"] == "Monday"
    assert body["places"]
    assert body["total_time_spent"] <= 8
    assert body["total_cost"] <= 80


@pytest.mark.parametrize("time_budget, money_budget", [(-1, 10), (8, 10**9), (10**6, 80)])
def test_day_plan_bad_budget(client, time_budget, money_budget):
    resp = client.post("/day_plan", json={
        "location": "Orlando,US", "time_budget": time_budget, "money_budget": money_budget})
    assert resp.status_code == 400
    assert "error" in resp.get_json()


def test_upstream_failure_is_502(cache):
    app = create_app(place_source=FailingSource(), solution_cache=cache)
    client = app.test_client()
    resp = client.post("/day_plan", json={"location": "Orlando,US", "time_budget": 8, "money_budget": 80})
    assert resp.status_code == 502
    resp = client.post("/slot_solution", json={
        "location": "Orlando,US", "tag": "E", "stay_times": [[12, 13]]})
    assert resp.status_code == 502
