"""Person query and source selection models."""
from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

YEAR_PATTERN = r"^\d{4}$"


class SourceName(str, Enum):
    """Selectable sources for a cross-reference search."""

    NEWSPAPERS = "newspapers"
    WIKITREE = "wikitree"
    OPENARCH = "openarch"
    ALL = "all"


# Fixed fan-out order; also the order of keys in an aggregate report
SEARCHABLE_SOURCES: tuple[SourceName, ...] = (
    SourceName.NEWSPAPERS,
    SourceName.WIKITREE,
    SourceName.OPENARCH,
)


class PersonQuery(BaseModel):
    """The person being looked up across every source.

    Immutable once built. ``person_id`` links cached matches to a local
    person record; it is absent for open-ended searches.
    """

    model_config = ConfigDict(frozen=True)

    given_name: str = Field(min_length=1, description="Given/first name")
    surname: str = Field(min_length=1, description="Surname/last name")
    birth_year: str | None = Field(default=None, pattern=YEAR_PATTERN, description="Birth year (YYYY)")
    birth_place: str | None = Field(default=None, description="Birth place")
    death_year: str | None = Field(default=None, pattern=YEAR_PATTERN, description="Death year (YYYY)")
    death_place: str | None = Field(default=None, description="Death place")
    person_id: str | None = Field(default=None, description="Local person ID to associate results with")

    @property
    def full_name(self) -> str:
        return f"{self.given_name} {self.surname}"
