"""
Search models for SkillStack.

Defines the records that flow through the search subsystem: the searchable
skill record, its snapshot form carrying a positional id, and the ranked
query result handed to renderers.
"""

from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field

# Fields copied verbatim from each record into the index side table.
STORED_FIELDS = ("source", "skillId", "name", "description", "installs", "technologies")


class SearchableRecord(BaseModel):
    """A skill as it appears in search.

    Identity is the pair (source, record_id). Only ``name`` is tokenized;
    everything else is stored for display and ranking.

    Incoming records are validated with ``strict=True`` so a wrong-typed
    value is rejected instead of coerced.
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    source: str = Field(..., description="Origin repository, e.g. owner/repo")
    record_id: str = Field(..., alias="skillId", description="Identifier unique within source")
    name: str = Field(..., description="Display name, the only indexed field")
    description: str | None = Field(default=None, description="Short description")
    installs: int = Field(..., ge=0, description="Install count used for ranking")
    technologies: list[str] = Field(..., description="Ordered technology tags")

    @classmethod
    def from_wire(cls, data: Any) -> Self:
        """Validate a record from its JSON form without type coercion.

        Raises:
            pydantic.ValidationError: If a field is missing, wrong-typed or
                out of range.
        """
        return cls.model_validate(data, strict=True)

    @property
    def key(self) -> tuple[str, str]:
        """Get the (source, record_id) identity pair."""
        return (self.source, self.record_id)

    def stored_fields(self) -> dict[str, Any]:
        """Get the wire-format stored fields.

        An absent description is omitted rather than written as null so the
        stored fields match the originating record exactly.
        """
        data = self.model_dump(by_alias=True, include=set(SearchableRecord.model_fields))
        if data.get("description") is None:
            data.pop("description", None)
        return data


class SnapshotRecord(SearchableRecord):
    """A searchable record as published in a snapshot."""

    id: int = Field(..., ge=0, description="Positional id, stable within one snapshot")

    def to_wire(self) -> dict[str, Any]:
        """Get the published JSON form, id first."""
        return {"id": self.id, **self.stored_fields()}


class QueryResult(SearchableRecord):
    """A searchable record enriched with its match score."""

    score: float = Field(..., description="Match score, used only for ordering")
