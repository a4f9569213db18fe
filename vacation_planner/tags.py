# vacation_planner/tags.py
from .config import TAG_LENGTH_LIMIT
from .data_models import Category, SlotTag
from .errors import InvalidTag

_SYMBOLS = {c.value for c in Category}


def is_valid_tag(tag: str) -> bool:
    """A tag is 1 to 4 symbols, each E or V in either case."""
    if not tag or len(tag) > TAG_LENGTH_LIMIT:
        return False
    return all(c.upper() in _SYMBOLS for c in tag)


def parse_tag(tag: str) -> SlotTag:
    if not isinstance(tag, str) or not is_valid_tag(tag):
        raise InvalidTag(tag)
    return tuple(Category.from_symbol(c) for c in tag)
