"""Normalized provider result shapes.

Each adapter returns one of these. The orchestrator and the match cache only
rely on the four cache fields exposed by every shape: ``external_id``,
``link``, ``label`` and ``snippet_text``.
"""
from __future__ import annotations

from pydantic import BaseModel, Field


class NewspaperItem(BaseModel):
    """One digitized newspaper page matching a search."""

    id: str = ""
    title: str = "Unknown"
    date: str = ""
    page: int = 1
    edition: int = 1
    lccn: str = ""
    url: str = ""
    snippet: str = ""

    @property
    def external_id(self) -> str:
        return self.id

    @property
    def link(self) -> str:
        return self.url

    @property
    def label(self) -> str:
        return self.title

    @property
    def snippet_text(self) -> str:
        return self.snippet


class NewspaperSearchResult(BaseModel):
    total_items: int = 0
    items: list[NewspaperItem] = Field(default_factory=list)


class NewspaperPage(BaseModel):
    """A single newspaper page with its full OCR text."""

    url: str
    image_url: str = ""
    ocr_text: str = ""


class WikiTreePerson(BaseModel):
    """A WikiTree profile."""

    id: str = ""
    name: str = "Unknown"
    first_name: str = ""
    last_name: str = ""
    birth_date: str = ""
    death_date: str = ""
    birth_location: str = ""
    death_location: str = ""
    privacy: int = 0
    url: str = ""

    @property
    def external_id(self) -> str:
        return self.id

    @property
    def link(self) -> str:
        return self.url

    @property
    def label(self) -> str:
        return self.name

    @property
    def snippet_text(self) -> str:
        return f"{self.first_name} {self.last_name}, b. {self.birth_date}, d. {self.death_date}"


class OpenArchivesRecord(BaseModel):
    """A civil, church or notary record from Open Archives."""

    id: str = ""
    title: str = "Unknown"
    date: str = ""
    place: str = ""
    source_type: str = "unknown"
    person_names: list[str] = Field(default_factory=list)
    archive_url: str = ""
    image_url: str | None = None

    @property
    def external_id(self) -> str:
        return self.id

    @property
    def link(self) -> str:
        return self.archive_url

    @property
    def label(self) -> str:
        return self.title

    @property
    def snippet_text(self) -> str:
        return f"{self.date} - {self.place}"

    @property
    def detailed_snippet(self) -> str:
        """Snippet including the named persons, used by direct searches."""
        return f"{self.date} - {self.place} - {', '.join(self.person_names)}"
