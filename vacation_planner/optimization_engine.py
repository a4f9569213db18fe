# vacation_planner/optimization_engine.py

import logging
import math
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from .config import MAX_MONEY_BUDGET, MAX_TIME_BUDGET, STAY_HOURS
from .data_models import KnapsackItem, KnapsackSelection, Place, Weekday
from .opening_hours import is_open

OpeningHoursPredicate = Callable[[Place, Weekday, int, int], bool]
KnapsackSolver = Callable[[Sequence[KnapsackItem], int, int], KnapsackSelection]


def to_knapsack_item(place: Place, stay_hours: Dict[str, int] = STAY_HOURS) -> KnapsackItem:
    """Time cost is the stay length for the category, value is the rating in tenths."""
    return KnapsackItem(
        place=place,
        time_cost=stay_hours[place.category.value],
        money_cost=max(0, int(math.ceil(place.price))),
        value=int(round(place.rating * 10)),
    )


def _selection(items: Sequence[KnapsackItem], chosen: List[int]) -> KnapsackSelection:
    picked = [items[i] for i in sorted(chosen)]
    return KnapsackSelection(
        items=picked,
        total_cost=sum(item.money_cost for item in picked),
        total_time=sum(item.time_cost for item in picked),
    )


def knapsack_reference(items: Sequence[KnapsackItem], time_budget: int, money_budget: int) -> KnapsackSelection:
    """
    Plain two-constraint 0/1 knapsack over a full (item, time, money) table.

    dp[i][t][b] is the best value using the first i items within time t and
    money b. An item is only taken when that is strictly better, so ties keep
    the smaller selection.
    """
    n = len(items)
    dp = [[[0] * (money_budget + 1) for _ in range(time_budget + 1)] for _ in range(n + 1)]

    for i, item in enumerate(items, start=1):
        prev, cur = dp[i - 1], dp[i]
        for t in range(time_budget + 1):
            for b in range(money_budget + 1):
                best = prev[t][b]
                if item.time_cost <= t and item.money_cost <= b:
                    take = prev[t - item.time_cost][b - item.money_cost] + item.value
                    if take > best:
                        best = take
                cur[t][b] = best

    chosen = []
    t, b = time_budget, money_budget
    for i in range(n, 0, -1):
        if dp[i][t][b] != dp[i - 1][t][b]:
            chosen.append(i - 1)
            t -= items[i - 1].time_cost
            b -= items[i - 1].money_cost
    return _selection(items, chosen)


def knapsack(items: Sequence[KnapsackItem], time_budget: int, money_budget: int) -> KnapsackSelection:
    """
    Same contract as knapsack_reference, on a rolling numpy (time, money) table.

    Only one value layer is kept; a boolean trace per item records where taking
    the item won, which is enough to walk the choices back from the full budget.
    """
    n = len(items)
    best = np.zeros((time_budget + 1, money_budget + 1), dtype=np.int64)
    trace = np.zeros((n, time_budget + 1, money_budget + 1), dtype=bool)

    for i, item in enumerate(items):
        wt, wc = item.time_cost, item.money_cost
        if wt > time_budget or wc > money_budget or item.value <= 0:
            continue
        candidate = np.full_like(best, -1)
        candidate[wt:, wc:] = best[:time_budget + 1 - wt, :money_budget + 1 - wc] + item.value
        take = candidate > best
        trace[i] = take
        best = np.where(take, candidate, best)

    chosen = []
    t, b = time_budget, money_budget
    for i in range(n - 1, -1, -1):
        if trace[i, t, b]:
            chosen.append(i)
            t -= items[i].time_cost
            b -= items[i].money_cost
    return _selection(items, chosen)


def select_day_places(places: Sequence[Place], weekday: Weekday, start_hour: int, end_hour: int,
                      time_budget: int, money_budget: int,
                      open_predicate: OpeningHoursPredicate = is_open,
                      solver: KnapsackSolver = knapsack,
                      stay_hours: Dict[str, int] = STAY_HOURS,
                      logger: Optional[logging.Logger] = None) -> KnapsackSelection:
    """
    Picks the whole-day subset of places with the best total rating.

    Args:
        places: candidate pool, in the order results should come back.
        weekday, start_hour, end_hour: places closed over this window are dropped.
        time_budget: hours available for the day.
        money_budget: money available for the day.

    Returns:
        KnapsackSelection with total_time <= time_budget and
        total_cost <= money_budget. Empty when nothing fits.
    """
    if time_budget > MAX_TIME_BUDGET or money_budget > MAX_MONEY_BUDGET:
        raise ValueError(f"Budget of {time_budget} hours and {money_budget} money exceeds the day limits")
    log = logger or logging.getLogger(__name__)

    # --- 1. Opening hours filter ---
    open_places = [p for p in places if open_predicate(p, weekday, start_hour, end_hour)]
    log.debug("%d of %d places open on %s %d-%d", len(open_places), len(places),
              weekday.name, start_hour, end_hour)

    # --- 2. Knapsack over (time, money) ---
    items = [to_knapsack_item(p, stay_hours) for p in open_places]
    selection = solver(items, max(0, time_budget), max(0, money_budget))

    if not selection.items:
        log.info("No place fits a budget of %d hours and %d money", time_budget, money_budget)
    return selection
