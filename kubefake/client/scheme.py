"""Type registry mapping Python model classes to GroupVersionKinds."""

from dataclasses import dataclass

from kubernetes import client

from kubefake.client.errors import UnregisteredKindError
from kubefake.client.unstructured import Unstructured

LIST_SUFFIX = "List"


@dataclass(frozen=True)
class GroupVersionKind:
    group: str = ""
    version: str = ""
    kind: str = ""

    @classmethod
    def from_api_version_and_kind(cls, api_version: str, kind: str) -> "GroupVersionKind":
        group, _, version = api_version.rpartition("/")
        return cls(group, version, kind)

    @property
    def api_version(self) -> str:
        return f"{self.group}/{self.version}" if self.group else self.version

    def is_list(self) -> bool:
        return self.kind.endswith(LIST_SUFFIX) and self.kind != LIST_SUFFIX

    def item_gvk(self) -> "GroupVersionKind":
        """Return the GVK of the elements of a list kind."""
        return GroupVersionKind(self.group, self.version, self.kind[: -len(LIST_SUFFIX)])

    def list_gvk(self) -> "GroupVersionKind":
        return GroupVersionKind(self.group, self.version, self.kind + LIST_SUFFIX)

    def __str__(self):
        return f"{self.api_version}, Kind={self.kind}"


class Scheme:
    """Knows which GroupVersionKind each registered model class represents."""

    def __init__(self):
        self._gvk_to_type: dict[GroupVersionKind, type] = {}
        self._type_to_gvk: dict[type, GroupVersionKind] = {}

    def add_known_type(self, gvk: GroupVersionKind, model: type):
        self._gvk_to_type[gvk] = model
        self._type_to_gvk[model] = gvk

    def add_known_types(self, group: str, version: str, *models: type):
        """Register generated models whose class name is ``<Version><Kind>``."""
        prefix = version.capitalize()
        for model in models:
            kind = model.__name__
            if kind.startswith(prefix):
                kind = kind[len(prefix) :]
            self.add_known_type(GroupVersionKind(group, version, kind), model)

    def all_known_types(self) -> dict[GroupVersionKind, type]:
        return dict(self._gvk_to_type)

    def recognizes(self, gvk: GroupVersionKind) -> bool:
        return gvk in self._gvk_to_type

    def type_for(self, gvk: GroupVersionKind) -> type | None:
        return self._gvk_to_type.get(gvk)

    def object_kind(self, obj) -> GroupVersionKind:
        """Resolve an object, or a model class, to its GroupVersionKind.

        Unstructured objects carry their own apiVersion and kind. Anything
        else must be registered, otherwise ``UnregisteredKindError`` is raised.
        """
        if isinstance(obj, Unstructured):
            kind = obj.get_kind()
            if not kind:
                raise UnregisteredKindError("Object 'Kind' is missing in unstructured object")
            return GroupVersionKind.from_api_version_and_kind(obj.get_api_version(), kind)

        model = obj if isinstance(obj, type) else type(obj)
        try:
            return self._type_to_gvk[model]
        except KeyError:
            raise UnregisteredKindError(f"no kind is registered for the type {model.__module__}.{model.__qualname__}")


def add_core_v1_to_scheme(scheme: Scheme):
    scheme.add_known_types(
        "",
        "v1",
        client.V1Binding,
        client.V1ConfigMap,
        client.V1ConfigMapList,
        client.V1Endpoints,
        client.V1EndpointsList,
        client.V1Namespace,
        client.V1NamespaceList,
        client.V1Node,
        client.V1NodeList,
        client.V1PersistentVolume,
        client.V1PersistentVolumeList,
        client.V1PersistentVolumeClaim,
        client.V1PersistentVolumeClaimList,
        client.V1Pod,
        client.V1PodList,
        client.V1Secret,
        client.V1SecretList,
        client.V1Service,
        client.V1ServiceList,
        client.V1ServiceAccount,
        client.V1ServiceAccountList,
    )


def add_apps_v1_to_scheme(scheme: Scheme):
    scheme.add_known_types(
        "apps",
        "v1",
        client.V1DaemonSet,
        client.V1DaemonSetList,
        client.V1Deployment,
        client.V1DeploymentList,
        client.V1ReplicaSet,
        client.V1ReplicaSetList,
        client.V1StatefulSet,
        client.V1StatefulSetList,
    )


def add_coordination_v1_to_scheme(scheme: Scheme):
    scheme.add_known_types("coordination.k8s.io", "v1", client.V1Lease, client.V1LeaseList)


def new_scheme(*add_to_scheme) -> Scheme:
    scheme = Scheme()
    for add in add_to_scheme:
        add(scheme)
    return scheme


DEFAULT_SCHEME = new_scheme(add_core_v1_to_scheme, add_apps_v1_to_scheme, add_coordination_v1_to_scheme)
