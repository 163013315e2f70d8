"""In-memory client used as the delegate in tests."""

import copy
import json
import logging
import random
from typing import List

from kubefake.client import errors
from kubefake.client.interfaces import Client, StatusWriter
from kubefake.client.objects import (
    ObjectKey,
    copy_into,
    metadata_of,
    object_key_from_object,
    set_list_items,
    to_dict,
)
from kubefake.client.options import (
    MERGE_PATCH_TYPE,
    STRATEGIC_MERGE_PATCH_TYPE,
    apply_merge_patch,
    collect_options,
)
from kubefake.client.restmapper import RESTMapper
from kubefake.client.scheme import DEFAULT_SCHEME, GroupVersionKind, Scheme

logger = logging.getLogger("all.kubefake.fake")
logger.propagate = True
logger.setLevel(logging.DEBUG)

# Same alphabet the API server uses for generateName suffixes
NAME_SUFFIX_ALPHABET = "bcdfghjklmnpqrstvwxz2456789"
NAME_SUFFIX_LENGTH = 5

MERGE_PATCH_TYPES = frozenset({MERGE_PATCH_TYPE, STRATEGIC_MERGE_PATCH_TYPE})


def _next_resource_version(current: str) -> str:
    return str(int(current or 0) + 1)


class FakeClient(Client):
    """Keeps objects as their serialized dictionaries, keyed by kind and identity."""

    def __init__(self, scheme: Scheme | None = None, objects=()):
        self._scheme = scheme if scheme is not None else DEFAULT_SCHEME
        self._rest_mapper = RESTMapper(self._scheme)
        self._tracker: dict[GroupVersionKind, dict[ObjectKey, dict]] = {}

        for obj in objects:
            self._add(obj)

    def _add(self, obj):
        gvk = self._scheme.object_kind(obj)
        if gvk.is_list():
            for item in obj.items:
                self._add(item)
            return
        data = self._normalize(gvk, to_dict(obj))
        self._objects(gvk)[self._key(data)] = data

    def _objects(self, gvk: GroupVersionKind) -> dict[ObjectKey, dict]:
        return self._tracker.setdefault(gvk, {})

    @staticmethod
    def _key(data: dict) -> ObjectKey:
        meta = metadata_of(data)
        return ObjectKey(meta.get("namespace", ""), meta.get("name", ""))

    @staticmethod
    def _normalize(gvk: GroupVersionKind, data: dict) -> dict:
        data["apiVersion"] = gvk.api_version
        data["kind"] = gvk.kind
        data.setdefault("metadata", {})
        return data

    def _resource(self, gvk: GroupVersionKind):
        return self._rest_mapper.resource_for(gvk)

    def scheme(self) -> Scheme:
        return self._scheme

    def rest_mapper(self) -> RESTMapper:
        return self._rest_mapper

    def get(self, key: ObjectKey, obj):
        gvk = self._scheme.object_kind(obj)
        stored = self._objects(gvk).get(ObjectKey(key.namespace, key.name))
        if stored is None:
            raise errors.new_not_found(self._resource(gvk), key.name)
        copy_into(obj, stored)

    def _select(self, gvk: GroupVersionKind, options) -> List[dict]:
        selected = []
        for key, data in self._objects(gvk).items():
            if options.namespace is not None and key.namespace != options.namespace:
                continue
            if not options.matches_labels(metadata_of(data).get("labels")):
                continue
            selected.append(data)
        return selected

    def list(self, list_obj, *opts):
        list_gvk = self._scheme.object_kind(list_obj)
        if not list_gvk.is_list():
            raise errors.new_bad_request(f"non-list type {list_gvk} passed to List")
        gvk = list_gvk.item_gvk()
        options = collect_options(*opts)
        items = [copy.deepcopy(data) for data in self._select(gvk, options)]
        set_list_items(list_obj, self._scheme.type_for(gvk), items)

    def create(self, obj, *opts):
        gvk = self._scheme.object_kind(obj)
        if collect_options(*opts).is_dry_run():
            return
        data = self._normalize(gvk, to_dict(obj))
        meta = data["metadata"]

        if meta.get("resourceVersion"):
            raise errors.new_bad_request("resourceVersion can not be set for Create requests")
        if not meta.get("name") and meta.get("generateName"):
            suffix = "".join(random.choice(NAME_SUFFIX_ALPHABET) for _ in range(NAME_SUFFIX_LENGTH))
            meta["name"] = meta["generateName"] + suffix
        if not meta.get("name"):
            raise errors.new_invalid(gvk.kind, "", "metadata.name", "name is required")

        key = self._key(data)
        objects = self._objects(gvk)
        if key in objects:
            raise errors.new_already_exists(self._resource(gvk), key.name)

        meta["resourceVersion"] = _next_resource_version("")
        objects[key] = data
        logger.debug(f"Created {gvk.kind} {key}")
        copy_into(obj, data)

    def update(self, obj, *opts):
        gvk = self._scheme.object_kind(obj)
        if collect_options(*opts).is_dry_run():
            return
        data = self._normalize(gvk, to_dict(obj))
        meta = data["metadata"]

        if not meta.get("name"):
            raise errors.new_invalid(gvk.kind, "", "metadata.name", "name is required")

        key = self._key(data)
        objects = self._objects(gvk)
        stored = objects.get(key)
        if stored is None:
            raise errors.new_not_found(self._resource(gvk), key.name)

        stored_version = metadata_of(stored).get("resourceVersion", "")
        if meta.get("resourceVersion") and meta["resourceVersion"] != stored_version:
            raise errors.new_conflict(
                self._resource(gvk),
                key.name,
                "the object has been modified; please apply your changes to the latest version and try again",
            )

        meta["resourceVersion"] = _next_resource_version(stored_version)
        objects[key] = data
        logger.debug(f"Updated {gvk.kind} {key} to resourceVersion {meta['resourceVersion']}")
        copy_into(obj, data)

    def patch(self, obj, patch, *opts):
        gvk = self._scheme.object_kind(obj)
        key = object_key_from_object(obj)
        options = collect_options(*opts)

        if patch.patch_type not in MERGE_PATCH_TYPES:
            raise errors.new_bad_request(f"patch type {patch.patch_type!r} is not supported")

        objects = self._objects(gvk)
        stored = objects.get(key)
        if stored is None:
            raise errors.new_not_found(self._resource(gvk), key.name)

        try:
            patch_data = json.loads(patch.data(obj))
        except ValueError as e:
            raise errors.new_bad_request(f"invalid patch: {e}")

        patched = self._normalize(gvk, apply_merge_patch(copy.deepcopy(stored), patch_data))
        meta = patched["metadata"]
        for field in ("name", "namespace"):
            if field in stored["metadata"]:
                meta[field] = stored["metadata"][field]
            else:
                meta.pop(field, None)
        if options.is_dry_run():
            return

        meta["resourceVersion"] = _next_resource_version(metadata_of(stored).get("resourceVersion", ""))
        objects[key] = patched
        logger.debug(f"Patched {gvk.kind} {key}")
        copy_into(obj, patched)

    def delete(self, obj, *opts):
        gvk = self._scheme.object_kind(obj)
        key = object_key_from_object(obj)
        options = collect_options(*opts)

        objects = self._objects(gvk)
        if key not in objects:
            raise errors.new_not_found(self._resource(gvk), key.name)
        if options.is_dry_run():
            return

        del objects[key]
        logger.debug(f"Deleted {gvk.kind} {key}")

    def delete_all_of(self, obj, *opts):
        gvk = self._scheme.object_kind(obj)
        options = collect_options(*opts)
        if options.is_dry_run():
            return

        objects = self._objects(gvk)
        for data in self._select(gvk, options):
            del objects[self._key(data)]
            logger.debug(f"Deleted {gvk.kind} {self._key(data)}")

    def status(self) -> StatusWriter:
        return FakeStatusWriter(self)

    def _update_status(self, obj, *opts):
        gvk = self._scheme.object_kind(obj)
        data = to_dict(obj)
        key = self._key(data)
        options = collect_options(*opts)

        stored = self._objects(gvk).get(key)
        if stored is None:
            raise errors.new_not_found(self._resource(gvk), key.name)
        if options.is_dry_run():
            return

        updated = copy.deepcopy(stored)
        if "status" in data:
            updated["status"] = data["status"]
        else:
            updated.pop("status", None)
        updated["metadata"]["resourceVersion"] = _next_resource_version(metadata_of(stored).get("resourceVersion", ""))
        self._objects(gvk)[key] = updated
        copy_into(obj, updated)


class FakeStatusWriter(StatusWriter):
    def __init__(self, client: FakeClient):
        self.client = client

    def update(self, obj, *opts):
        self.client._update_status(obj, *opts)

    def patch(self, obj, patch, *opts):
        self.client.patch(obj, patch, *opts)


def new_fake_client(*objects) -> FakeClient:
    """Return a fake client using the default scheme, seeded with ``objects``."""
    return FakeClient(DEFAULT_SCHEME, objects)


def new_fake_client_with_scheme(scheme: Scheme, *objects) -> FakeClient:
    return FakeClient(scheme, objects)
