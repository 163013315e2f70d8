"""Dictionary backed objects for resources without a generated model."""


class Unstructured:
    """A single resource kept as its raw JSON-compatible dictionary."""

    def __init__(self, obj: dict | None = None):
        self.object = obj if obj is not None else {}

    def get_api_version(self) -> str:
        return self.object.get("apiVersion", "")

    def get_kind(self) -> str:
        return self.object.get("kind", "")

    def get_name(self) -> str:
        return self.object.get("metadata", {}).get("name", "")

    def get_namespace(self) -> str:
        return self.object.get("metadata", {}).get("namespace", "")

    def get_resource_version(self) -> str:
        return self.object.get("metadata", {}).get("resourceVersion", "")

    def __eq__(self, other):
        if not isinstance(other, Unstructured):
            return NotImplemented
        return self.object == other.object

    def __repr__(self):
        return f"{type(self).__name__}({self.object!r})"


class UnstructuredList(Unstructured):
    """A list resource; ``items`` holds ``Unstructured`` entries."""

    def __init__(self, obj: dict | None = None, items: list | None = None):
        super().__init__(obj)
        self.items = items if items is not None else []

    def __eq__(self, other):
        if not isinstance(other, UnstructuredList):
            return NotImplemented
        return self.object == other.object and self.items == other.items
