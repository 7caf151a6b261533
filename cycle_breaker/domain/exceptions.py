"""Domain exceptions.

Graph validation errors are ValueError subclasses so that every surface which
already maps ValueError to a client error (HTTP 400, CLI usage error) treats a
malformed graph the same way.
"""


class GraphError(ValueError):
    """Base exception for malformed dependency graph input."""

    pass


class DuplicateEdgeError(GraphError):
    """The same (from, to, injection_kind) triple was supplied twice."""

    def __init__(self, source_id: str, target_id: str, injection_kind: str):
        self.source_id = source_id
        self.target_id = target_id
        self.injection_kind = injection_kind
        super().__init__(
            f"Duplicate edge {source_id} -> {target_id} ({injection_kind})"
        )


class DanglingReferenceError(GraphError):
    """An edge names a component that is not part of the graph."""

    def __init__(self, component_id: str, source_id: str, target_id: str):
        self.component_id = component_id
        self.source_id = source_id
        self.target_id = target_id
        super().__init__(
            f"Edge {source_id} -> {target_id} references unknown component "
            f"'{component_id}'"
        )


class DuplicateComponentError(GraphError):
    """The same component id was supplied twice."""

    def __init__(self, component_id: str):
        self.component_id = component_id
        super().__init__(f"Duplicate component id '{component_id}'")
