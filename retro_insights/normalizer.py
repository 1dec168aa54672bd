"""Normalize loosely-typed export rows into canonical work items.

Rows come straight from a spreadsheet or CSV decoder, so column names vary
by source tool and values may be strings, numbers or missing. Every field
has a default, so a row is never rejected: malformed or missing values
degrade to that default.
"""

import logging
import math
import numbers
import re

from .columns import (
    ASSIGNEE,
    DEFAULT_ALIASES,
    EPIC,
    FIELD_DEFAULTS,
    MODULE,
    POINTS,
    RELEASE,
    SPRINT_COUNT,
    TICKET_ID,
)
from .exceptions import EmptyInputError
from .models import WorkItem

logger = logging.getLogger(__name__)

ABSENT = object()


def is_absent(value):
    """True for values that count as a missing cell.

    Decoders represent an empty cell as ``None`` or a float NaN.
    """
    if value is None:
        return True
    return isinstance(value, float) and math.isnan(value)


def first_present(row, keys):
    """Return the value of the first key in `keys` that is present in `row`.

    Falsy values such as ``""`` or ``0`` count as present. Returns the
    ``ABSENT`` sentinel when none of the keys has a value.
    """
    for key in keys:
        value = row.get(key)
        if not is_absent(value):
            return value
    return ABSENT


# Leading numeric prefix of a cell; trailing text such as units is ignored
POINTS_PATTERN = re.compile(r"^\s*[+-]?(\d+\.?\d*|\.\d+)([eE][+-]?\d+)?")
SPRINT_COUNT_PATTERN = re.compile(r"^\s*[+-]?\d+")


def parse_points(value):
    """Parse an effort estimate as a float, or return None if malformed.

    Text is read up to the end of its leading number, so ``"3 pts"`` is 3.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Real):
        result = float(value)
    else:
        match = POINTS_PATTERN.match(str(value))
        if match is None:
            return None
        result = float(match.group(0))
    return result if math.isfinite(result) else None


def parse_sprint_count(value):
    """Parse a sprint count as an int, truncating any fractional part.

    Text is read up to the end of its leading integer, so ``"2.7"`` is 2
    and ``"1e3"`` is 1. Returns None if there is no leading integer.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, numbers.Integral):
        return int(value)
    if isinstance(value, numbers.Real):
        return int(value) if math.isfinite(value) else None

    match = SPRINT_COUNT_PATTERN.match(str(value))
    if match is None:
        return None
    return int(match.group(0))


def to_text(value):
    """Render a cell as text. Integral floats lose their trailing ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def resolve_aliases(overrides=None):
    """Merge per-field alias overrides into the default alias table."""
    aliases = {name: list(keys) for name, keys in DEFAULT_ALIASES.items()}
    for name, keys in (overrides or {}).items():
        if name not in aliases:
            raise KeyError(f"Unknown work item field `{name}`")
        aliases[name] = list(keys)
    return aliases


def normalize(rows, aliases=None, warn_on_malformed=False):
    """Map raw rows to a list of `WorkItem`, one per row, in input order.

    Args:
        rows: Sequence of mappings from source column name to cell value.
        aliases: Optional mapping of field name to replacement alias list.
        warn_on_malformed: Log a warning for every numeric cell that could
            not be parsed. The value still falls back to zero.

    Raises:
        EmptyInputError: If `rows` is empty.
    """
    rows = list(rows)
    if len(rows) == 0:
        raise EmptyInputError("The uploaded file is empty.")

    lookup = resolve_aliases(aliases)
    items = [
        _normalize_row(index, row, lookup, warn_on_malformed)
        for index, row in enumerate(rows)
    ]

    logger.debug("Normalized %d rows into work items", len(items))
    return items


def _normalize_row(index, row, lookup, warn_on_malformed):
    def text(name):
        value = first_present(row, lookup[name])
        return FIELD_DEFAULTS[name] if value is ABSENT else to_text(value)

    def number(name, parser):
        value = first_present(row, lookup[name])
        if value is ABSENT:
            return FIELD_DEFAULTS[name]
        parsed = parser(value)
        if parsed is None:
            if warn_on_malformed:
                logger.warning(
                    "Row %d: could not parse %s value %r, using %s",
                    index,
                    name,
                    value,
                    FIELD_DEFAULTS[name],
                )
            return FIELD_DEFAULTS[name]
        return parsed

    return WorkItem(
        epic=text(EPIC),
        ticket_id=text(TICKET_ID),
        module=text(MODULE),
        assignee=text(ASSIGNEE),
        points=number(POINTS, parse_points),
        release=text(RELEASE),
        sprint_count=number(SPRINT_COUNT, parse_sprint_count),
    )
