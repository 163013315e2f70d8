"""Per-call options and patches accepted by ``Client`` operations."""

import json
from dataclasses import dataclass, field

JSON_PATCH_TYPE = "application/json-patch+json"
MERGE_PATCH_TYPE = "application/merge-patch+json"
STRATEGIC_MERGE_PATCH_TYPE = "application/strategic-merge-patch+json"

DRY_RUN_ALL_VALUE = "All"


@dataclass
class CallOptions:
    """The combined effect of every option passed to one call."""

    namespace: str | None = None
    match_labels: dict[str, str] = field(default_factory=dict)
    has_labels: list[str] = field(default_factory=list)
    dry_run: list[str] = field(default_factory=list)

    def is_dry_run(self) -> bool:
        return DRY_RUN_ALL_VALUE in self.dry_run

    def matches_labels(self, labels: dict | None) -> bool:
        labels = labels or {}
        if any(labels.get(k) != v for k, v in self.match_labels.items()):
            return False
        return all(k in labels for k in self.has_labels)


@dataclass(frozen=True)
class InNamespace:
    namespace: str

    def apply(self, opts: CallOptions):
        opts.namespace = self.namespace


@dataclass(frozen=True)
class MatchingLabels:
    labels: dict

    def apply(self, opts: CallOptions):
        opts.match_labels.update(self.labels)


class HasLabels:
    def __init__(self, *keys: str):
        self.keys = tuple(keys)

    def apply(self, opts: CallOptions):
        opts.has_labels.extend(self.keys)


@dataclass(frozen=True)
class DryRun:
    values: tuple = (DRY_RUN_ALL_VALUE,)

    def apply(self, opts: CallOptions):
        opts.dry_run.extend(self.values)


DRY_RUN_ALL = DryRun()


def collect_options(*opts) -> CallOptions:
    combined = CallOptions()
    for opt in opts:
        opt.apply(combined)
    return combined


class Patch:
    """Base for patches passed to ``Client.patch``."""

    patch_type = ""

    def data(self, obj) -> bytes:
        raise NotImplementedError


class RawPatch(Patch):
    def __init__(self, patch_type: str, data: bytes | str):
        self.patch_type = patch_type
        self._data = data.encode() if isinstance(data, str) else data

    def data(self, obj) -> bytes:
        return self._data


class MergePatch(RawPatch):
    """A JSON merge patch built from a dictionary."""

    def __init__(self, patch: dict):
        super().__init__(MERGE_PATCH_TYPE, json.dumps(patch))


def apply_merge_patch(target, patch):
    """Apply an RFC 7386 JSON merge patch and return the merged document."""
    if not isinstance(patch, dict):
        return patch
    result = dict(target) if isinstance(target, dict) else {}
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = apply_merge_patch(result.get(key), value)
    return result
