import os

import pytest

from vacation_planner.data_models import CategorizedPlaces, Category, Place

DATA_DIR = os.path.join(os.path.dirname(__file__), "data")

WEEKDAY_HOURS = tuple(
    f"{day}: 9:00 AM – 9:00 PM"
    for day in ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")
)


@pytest.fixture
def make_place():
    def _make(place_id, category="V", rating=4.0, location=(40.7128, -74.0060),
              price=10.0, price_level=1, hours=WEEKDAY_HOURS, name=None):
        return Place(
            place_id=str(place_id),
            name=name or f"Place {place_id}",
            location=location,
            category=Category.from_symbol(category),
            price=price,
            rating=rating,
            hours=tuple(hours),
            price_level=price_level,
        )
    return _make


@pytest.fixture
def ev_places(make_place):
    """Eateries A(1), B(2); visits C(3), D(4), all a few hundred meters apart."""
    return CategorizedPlaces(
        eatery=(make_place(1, "E", 4.0, (40.7128, -74.0060), name="A"),
                make_place(2, "E", 4.5, (40.7138, -74.0050), name="B")),
        visit=(make_place(3, "V", 4.2, (40.7148, -74.0070), name="C"),
               make_place(4, "V", 4.8, (40.7118, -74.0040), name="D")),
    )


@pytest.fixture
def visit_pool_path():
    return os.path.join(DATA_DIR, "test_visit_random_gen.json")
