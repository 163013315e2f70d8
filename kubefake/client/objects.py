"""Object identity and conversion between models and their JSON form."""

import copy
import json
from dataclasses import dataclass

from kubernetes.client import ApiClient

from kubefake.client.unstructured import Unstructured, UnstructuredList


@dataclass(frozen=True)
class ObjectKey:
    """Namespace and name of a resource instance.

    ``is_wildcard`` marks the key that matches every object, so an object with
    an empty namespace and name can still be targeted exactly.
    """

    namespace: str = ""
    name: str = ""
    is_wildcard: bool = False

    def __str__(self):
        if self.is_wildcard:
            return "*"
        return f"{self.namespace}/{self.name}" if self.namespace else self.name


ANY_OBJECT = ObjectKey(is_wildcard=True)


class _Response:
    """Minimal stand-in for the urllib3 response ApiClient.deserialize reads."""

    def __init__(self, data: dict):
        self.data = json.dumps(data)


_api_client = None


def _serializer() -> ApiClient:
    global _api_client
    if _api_client is None:
        _api_client = ApiClient()
    return _api_client


def to_dict(obj) -> dict:
    """Return a deep copy of the object's wire representation."""
    if isinstance(obj, Unstructured):
        return copy.deepcopy(obj.object)
    return _serializer().sanitize_for_serialization(obj)


def from_dict(model: type, data: dict):
    if issubclass(model, Unstructured):
        return model(copy.deepcopy(data))
    return _serializer().deserialize(_Response(data), model.__name__)


def copy_into(dst, data: dict):
    """Overwrite ``dst`` in place with the object described by ``data``."""
    if isinstance(dst, Unstructured):
        dst.object = copy.deepcopy(data)
        return
    src = from_dict(type(dst), data)
    for attr in dst.openapi_types:
        setattr(dst, attr, getattr(src, attr))


def set_list_items(list_obj, model: type, items: list[dict]):
    if isinstance(list_obj, UnstructuredList):
        list_obj.items = [Unstructured(copy.deepcopy(item)) for item in items]
        return
    list_obj.items = [from_dict(model, item) for item in items]


def metadata_of(data: dict) -> dict:
    return data.get("metadata") or {}


def object_key_from_object(obj) -> ObjectKey:
    if isinstance(obj, Unstructured):
        return ObjectKey(obj.get_namespace(), obj.get_name())
    meta = getattr(obj, "metadata", None)
    if meta is None:
        return ObjectKey()
    return ObjectKey(meta.namespace or "", meta.name or "")
