"""Backend-neutral filter expressions for record store queries.

Gateways describe what they want with these small value objects. The
Airtable client renders them to ``filterByFormula`` strings and the local
store turns them into SQLAlchemy clauses, so both backends see the same
query.

    Equals("State", "NC").to_formula()           -> '{State} = "NC"'
    All(Equals("Bioguide_ID", "A000370"),
        AtLeast("Date_Created", "2025-06-01")).to_formula()
        -> 'AND({Bioguide_ID} = "A000370", {Date_Created} >= "2025-06-01")'
"""

from dataclasses import dataclass
from typing import Any, Union


def quote(value: Any) -> str:
    """Render a literal for an Airtable formula."""
    if isinstance(value, bool):
        return "TRUE()" if value else "FALSE()"
    if isinstance(value, (int, float)):
        return repr(value)
    text = str(value).replace("\\", "\\\\").replace('"', '\\"')
    return f'"{text}"'


@dataclass(frozen=True)
class Equals:
    field: str
    value: Any

    def to_formula(self) -> str:
        return f"{{{self.field}}} = {quote(self.value)}"


@dataclass(frozen=True)
class AtLeast:
    field: str
    value: Any

    def to_formula(self) -> str:
        return f"{{{self.field}}} >= {quote(self.value)}"


@dataclass(frozen=True)
class Contains:
    """Substring match, e.g. an office location containing a city name."""

    field: str
    value: str

    def to_formula(self) -> str:
        return f"SEARCH({quote(self.value)}, {{{self.field}}}) > 0"


@dataclass(frozen=True, init=False)
class All:
    filters: tuple

    def __init__(self, *filters):
        object.__setattr__(self, "filters", tuple(filters))

    def to_formula(self) -> str:
        if len(self.filters) == 1:
            return self.filters[0].to_formula()
        return "AND(" + ", ".join(f.to_formula() for f in self.filters) + ")"


Filter = Union[Equals, AtLeast, Contains, All]


@dataclass(frozen=True)
class Sort:
    field: str
    direction: str = "asc"

    @property
    def descending(self) -> bool:
        return self.direction.lower() == "desc"
