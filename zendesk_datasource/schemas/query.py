"""Query, batch and frame models exchanged with the visualization host.

JSON field names follow the host's camelCase convention (``refId``,
``queryType``); Python attributes are snake_case and either form is
accepted on input.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Batch Queries
# =============================================================================

class QueryRequest(BaseModel):
    """One sub-query of a batch request.

    ``query_type`` is kept as a free string: unknown types are reported
    per sub-query by the batch executor instead of rejecting the batch.
    """

    model_config = ConfigDict(populate_by_name=True)

    query_type: str = Field(..., alias="queryType", description="tickets, users or organizations")
    params: dict[str, str] = Field(default_factory=dict, description="Upstream query parameters")


class BatchQueryRequest(BaseModel):
    """Ordered list of sub-queries executed concurrently."""

    queries: list[QueryRequest] = Field(default_factory=list)


class BatchQueryResponse(BaseModel):
    """Aggregate batch outcome.

    Absent results and empty errors are dropped, so the two lists are not
    index-aligned with the request or with each other.
    """

    results: list[Any] = Field(default_factory=list)
    errors: list[str] = Field(default_factory=list)


# =============================================================================
# Frames
# =============================================================================

class FrameField(BaseModel):
    """A typed column of a data frame."""

    name: str
    type: str = Field(..., description="number, string or boolean")
    values: list[Any] = Field(default_factory=list)


class DataFrame(BaseModel):
    """Column-oriented table handed to the visualization host."""

    name: str
    fields: list[FrameField] = Field(default_factory=list)

    @property
    def row_count(self) -> int:
        """Number of rows (length of the first column)."""
        if not self.fields:
            return 0
        return len(self.fields[0].values)

    def field(self, name: str) -> FrameField:
        """Return the column called ``name``.

        Raises:
            KeyError: If no column has that name
        """
        for frame_field in self.fields:
            if frame_field.name == name:
                return frame_field
        raise KeyError(name)


# =============================================================================
# Query Data
# =============================================================================

class DataQuery(BaseModel):
    """A single panel query."""

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    ref_id: str = Field(default="A", alias="refId")
    query_type: str | None = Field(default=None, alias="queryType")
    status: str | None = Field(default=None, description="Ticket status filter")
    priority: str | None = Field(default=None, description="Ticket priority filter")


class QueryDataRequest(BaseModel):
    """Panel queries submitted together."""

    queries: list[DataQuery] = Field(default_factory=list)


class DataResponse(BaseModel):
    """Outcome of one panel query: frames on success, error otherwise."""

    frames: list[DataFrame] = Field(default_factory=list)
    error: str | None = Field(default=None)
    status: int = Field(default=200, description="HTTP-style status of this query")


class QueryDataResponse(BaseModel):
    """Responses keyed by query refId."""

    responses: dict[str, DataResponse] = Field(default_factory=dict)
