from typing import Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

# Row limits accept numbers or numeric strings; `coerce_limit` normalizes them.
LimitValue = Union[int, float, str]


class RelationshipIn(BaseModel):
    """Relationship descriptor; incomplete entries are ignored, not rejected."""
    model_config = ConfigDict(populate_by_name=True)

    source: Optional[str] = Field(default=None, alias="from")
    target: Optional[str] = Field(default=None, alias="to")
    type: Optional[str] = None

    def as_descriptor(self) -> Dict[str, Optional[str]]:
        return {"from": self.source, "to": self.target, "type": self.type}


class WriteRequest(BaseModel):
    """Entity write request"""
    text: str = Field(..., min_length=1)
    label: Optional[str] = "Memory"
    context: Any = Field(default_factory=dict)
    relationships: List[RelationshipIn] = Field(default_factory=list)
    mode: Literal["create", "overwrite", "skip"] = "create"


class WriteResponse(BaseModel):
    status: str
    label: str
    mode: str
    nodeId: Optional[str] = None


class SkippedResponse(BaseModel):
    status: Literal["skipped"]
    node: str


class QueryRequest(BaseModel):
    """Ad-hoc Cypher or named preset"""
    cypher: Optional[str] = None
    params: Dict[str, Any] = Field(default_factory=dict)
    format: Literal["records", "json"] = "records"
    preset: Optional[str] = None
    limit: Optional[LimitValue] = 250


class QueryResponse(BaseModel):
    status: str
    records: int
    format: str
    preset: str
    results: List[Dict[str, Any]] = Field(default_factory=list)


class GraphRequest(BaseModel):
    """Visualization snapshot request"""
    limit: Optional[LimitValue] = 500
    filterLabel: Optional[str] = None


class GraphNode(BaseModel):
    id: Any = None
    label: str
    text: Any = None
    context: Any = None


class GraphLink(BaseModel):
    source: Any = None
    target: Any = None
    type: str


class GraphResponse(BaseModel):
    status: str
    nodes: List[GraphNode] = Field(default_factory=list)
    links: List[GraphLink] = Field(default_factory=list)


class HealthResponse(BaseModel):
    status: Literal["ok", "error"]
    error: Optional[str] = None


class ErrorResponse(BaseModel):
    error: str
    details: Optional[List[Dict[str, Any]]] = None
