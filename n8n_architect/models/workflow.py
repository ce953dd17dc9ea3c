"""Workflow document models for n8n Architect.

Mirror the node/connection graph accepted by the n8n public API. Edges point at
nodes by name, not id.
"""

import json
from typing import Any, Dict, List, Optional, Tuple, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

Number = Union[int, float]


class WorkflowNode(BaseModel):
    """A single step in an n8n workflow."""

    # n8n nodes carry optional fields (credentials, disabled, notes, ...) we pass through untouched
    model_config = ConfigDict(extra="allow")

    id: str
    name: str
    type: str = Field(..., description="Namespaced node type, e.g. 'n8n-nodes-base.httpRequest'")
    typeVersion: Number
    position: Tuple[Number, Number]
    parameters: Dict[str, Any] = Field(default_factory=dict)

    @field_validator("id", mode="before")
    @classmethod
    def _coerce_id(cls, value: Any) -> Any:
        if isinstance(value, int):
            return str(value)
        return value


class ConnectionTarget(BaseModel):
    """Downstream end of an edge.

    Extra keys and the index as written (int or numeric string) are passed through.
    """

    model_config = ConfigDict(extra="allow")

    node: str
    type: str
    index: Union[int, str]


# connection type ("main", "ai_tool", ...) -> output slot -> targets; an open slot is null
NodeConnections = Dict[str, List[Optional[List[ConnectionTarget]]]]


class WorkflowDocument(BaseModel):
    """Node/connection graph for one automation."""

    name: Optional[str] = None
    nodes: List[WorkflowNode]
    connections: Dict[str, NodeConnections] = Field(default_factory=dict)
    meta: Optional[Dict[str, Any]] = Field(
        None,
        description="Free-form fields merged into the submission payload at the top level",
    )

    @model_validator(mode="after")
    def _check_graph(self) -> "WorkflowDocument":
        ids = [node.id for node in self.nodes]
        duplicates = sorted({node_id for node_id in ids if ids.count(node_id) > 1})
        if duplicates:
            raise ValueError(f"Duplicate node ids: {', '.join(duplicates)}")

        names = self.node_names()
        for source, outputs in self.connections.items():
            if source not in names:
                raise ValueError(f"Connection source '{source}' is not a node in this workflow")
            for slots in outputs.values():
                for slot in slots:
                    if slot is None:
                        continue
                    for target in slot:
                        if target.node not in names:
                            raise ValueError(
                                f"Connection from '{source}' targets unknown node '{target.node}'"
                            )
        return self

    def node_names(self) -> set:
        return {node.name for node in self.nodes}

    def to_wire(self) -> Dict[str, Any]:
        """Nodes and connections as plain JSON-ready data."""
        data = self.model_dump(mode="json", include={"nodes", "connections"})
        return {"nodes": data["nodes"], "connections": data["connections"]}

    def to_export_json(self, indent: int = 2) -> str:
        """Pretty-printed JSON for copying into n8n's import dialog."""
        return json.dumps(self.model_dump(mode="json", exclude_none=True), indent=indent, ensure_ascii=False)
