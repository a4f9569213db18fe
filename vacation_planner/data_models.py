# vacation_planner/data_models.py
from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import List, Tuple, Dict, Any

from .config import MAX_MONEY_BUDGET, MAX_TIME_BUDGET


class Category(Enum):
    """Kind of event a place can fill in a slot."""
    EATERY = "E"
    VISIT = "V"

    @classmethod
    def from_symbol(cls, symbol: str) -> "Category":
        return cls(symbol.upper())


class Weekday(IntEnum):
    MONDAY = 0
    TUESDAY = 1
    WEDNESDAY = 2
    THURSDAY = 3
    FRIDAY = 4
    SATURDAY = 5
    SUNDAY = 6

    @classmethod
    def coerce(cls, value: Any) -> "Weekday":
        """Accepts an index or a day name; anything else falls back to Saturday."""
        if isinstance(value, str):
            name = value.strip().upper()
            if name in cls.__members__:
                return cls[name]
            if name.isdigit():
                value = int(name)
        if isinstance(value, int) and not isinstance(value, bool) and 0 <= value <= 6:
            return cls(value)
        return cls.SATURDAY


@dataclass(frozen=True)
class TimeInterval:
    """Hours of a day, e.g. 9 -> 11."""
    start: int
    end: int

    def __post_init__(self):
        if not (0 <= self.start <= self.end <= 24):
            raise ValueError(f"Invalid time interval {self.start}-{self.end}")

    @property
    def minutes(self) -> int:
        return (self.end - self.start) * 60


@dataclass(frozen=True)
class Place:
    """Standardized model for a point of interest."""
    place_id: str
    name: str
    location: Tuple[float, float]   # (lat, lng)
    category: Category
    price: float = 0.0              # estimated spend at the place
    rating: float = 0.0             # e.g., 4.5
    hours: Tuple[str, ...] = ()     # weekday text, e.g. "Monday: 9:00 AM – 5:00 PM"
    price_level: int = 0            # 0 to 4 ($ to $$$$)
    address: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            "place_id": self.place_id,
            "name": self.name,
            "location": list(self.location),
            "category": self.category.value,
            "price": self.price,
            "rating": self.rating,
            "hours": list(self.hours),
            "price_level": self.price_level,
            "address": self.address,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Place":
        lat, lng = data["location"]
        return cls(
            place_id=str(data["place_id"]),
            name=data.get("name", ""),
            location=(float(lat), float(lng)),
            category=Category.from_symbol(data["category"]),
            price=float(data.get("price") or 0.0),
            rating=float(data.get("rating") or 0.0),
            hours=tuple(data.get("hours") or ()),
            price_level=int(data.get("price_level") or 0),
            address=data.get("address") or "",
        )


@dataclass(frozen=True)
class CategorizedPlaces:
    """Eatery and visit clusters, in the order the place source supplied them."""
    eatery: Tuple[Place, ...] = ()
    visit: Tuple[Place, ...] = ()

    def cluster(self, category: Category) -> Tuple[Place, ...]:
        if category is Category.EATERY:
            return self.eatery
        if category is Category.VISIT:
            return self.visit
        raise ValueError(f"Unknown place category: {category!r}")


SlotTag = Tuple[Category, ...]


def tag_to_str(tag: SlotTag) -> str:
    return "".join(c.value for c in tag)


@dataclass(frozen=True)
class SlotSolutionCandidate:
    places: Tuple[Place, ...]
    score: float
    is_valid: bool

    @property
    def place_ids(self) -> List[str]:
        return [p.place_id for p in self.places]

    @property
    def place_names(self) -> List[str]:
        return [p.name for p in self.places]

    @property
    def place_locations(self) -> List[Tuple[float, float]]:
        return [p.location for p in self.places]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "place_names": self.place_names,
            "place_ids": self.place_ids,
            "place_locations": [list(loc) for loc in self.place_locations],
            "score": self.score,
            "places": [p.to_dict() for p in self.places],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any], slot_tag: str = "") -> "SlotSolutionCandidate":
        """
        Rebuilds a candidate from `places`, or from the parallel id/name/location
        lists, taking each place's category from the slot tag.
        """
        if data.get("places"):
            places = tuple(Place.from_dict(p) for p in data["places"])
        else:
            ids = data.get("place_ids") or []
            names = data.get("place_names") or []
            locations = data.get("place_locations") or []
            if not ids or not (len(ids) == len(names) == len(locations) == len(slot_tag)):
                raise ValueError(f"Candidate does not match slot tag {slot_tag!r}: {data!r}")
            places = tuple(
                Place(place_id=str(pid), name=name, location=(float(loc[0]), float(loc[1])),
                      category=Category.from_symbol(symbol))
                for pid, name, loc, symbol in zip(ids, names, locations, slot_tag)
            )
        if slot_tag and len(places) != len(slot_tag):
            raise ValueError(f"Candidate does not match slot tag {slot_tag!r}: {data!r}")
        return cls(places=places, score=float(data["score"]), is_valid=True)


@dataclass
class SlotSolution:
    """Best candidates for one slot tag, best first."""
    slot_tag: str
    candidates: List[SlotSolutionCandidate] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "slot_tag": self.slot_tag,
            "solution": [c.to_dict() for c in self.candidates],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SlotSolution":
        slot_tag = data["slot_tag"]
        return cls(
            slot_tag=slot_tag,
            candidates=[SlotSolutionCandidate.from_dict(c, slot_tag) for c in data.get("solution", [])],
        )


@dataclass(frozen=True)
class KnapsackItem:
    place: Place
    time_cost: int      # whole hours
    money_cost: int     # whole currency units
    value: int


@dataclass
class KnapsackSelection:
    items: List[KnapsackItem] = field(default_factory=list)
    total_cost: int = 0
    total_time: int = 0

    @property
    def places(self) -> List[Place]:
        return [item.place for item in self.items]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "places": [p.to_dict() for p in self.places],
            "total_cost": self.total_cost,
            "total_time_spent": self.total_time,
        }


def _interval(value) -> TimeInterval:
    if isinstance(value, TimeInterval):
        return value
    if isinstance(value, dict):
        return TimeInterval(int(value["start"]), int(value["end"]))
    start, end = value
    return TimeInterval(int(start), int(end))


@dataclass
class SlotRequest:
    """User input model for a slot solution request."""
    location: str                       # "city,country"
    tag: str                            # e.g. "EVV"
    stay_times: List[TimeInterval]      # one interval per tag position
    weekday: Weekday = Weekday.SATURDAY
    radius: int = 2000                  # meters

    def __post_init__(self):
        self.stay_times = [_interval(s) for s in self.stay_times]
        self.weekday = Weekday.coerce(self.weekday)
        self.radius = int(self.radius)


@dataclass
class DayPlanRequest:
    """User input model for a whole-day selection."""
    location: str
    time_budget: int        # hours
    money_budget: int
    weekday: Weekday = Weekday.SATURDAY
    start_hour: int = 8
    end_hour: int = 24
    radius: int = 2000

    def __post_init__(self):
        self.weekday = Weekday.coerce(self.weekday)
        self.time_budget = int(self.time_budget)
        self.money_budget = int(self.money_budget)
        if self.time_budget < 0 or self.money_budget < 0:
            raise ValueError("Budgets must be non-negative")
        if self.time_budget > MAX_TIME_BUDGET or self.money_budget > MAX_MONEY_BUDGET:
            raise ValueError(
                f"Budgets must be at most {MAX_TIME_BUDGET} hours and {MAX_MONEY_BUDGET} money"
            )
        self.start_hour = int(self.start_hour)
        self.end_hour = int(self.end_hour)
        TimeInterval(self.start_hour, self.end_hour)
        self.radius = int(self.radius)
        split_location(self.location)


def split_location(location: str) -> Tuple[str, str]:
    """'city,country' -> ('city', 'country')."""
    parts = [p.strip() for p in location.split(",")] if isinstance(location, str) else []
    if len(parts) != 2 or not all(parts):
        raise ValueError(f"Location must be 'city,country', got {location!r}")
    return parts[0], parts[1]
