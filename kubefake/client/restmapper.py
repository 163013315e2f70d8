"""Maps kinds to the lower-case plural resource names used by the API."""

from dataclasses import dataclass

from kubefake.client.scheme import GroupVersionKind, Scheme


@dataclass(frozen=True)
class GroupResource:
    group: str
    resource: str

    def __str__(self):
        return f"{self.resource}.{self.group}" if self.group else self.resource


def guess_resource_for_kind(kind: str) -> str:
    plural = kind.lower()
    if not plural or plural == "endpoints":
        return plural
    if plural.endswith("s"):
        return plural + "es"
    if plural.endswith("y") and plural[-2:-1] not in ("a", "e", "i", "o", "u"):
        return plural[:-1] + "ies"
    return plural + "s"


class RESTMapper:
    """Resolves resources for the kinds known to a scheme."""

    def __init__(self, scheme: Scheme):
        self._scheme = scheme

    def resource_for(self, gvk: GroupVersionKind) -> GroupResource:
        return GroupResource(gvk.group, guess_resource_for_kind(gvk.kind))

    def kind_for(self, group: str, version: str, resource: str) -> GroupVersionKind | None:
        for gvk in self._scheme.all_known_types():
            if (gvk.group, gvk.version) == (group, version) and guess_resource_for_kind(gvk.kind) == resource:
                return gvk
        return None
