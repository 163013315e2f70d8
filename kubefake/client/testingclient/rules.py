"""Keys, table and matching order for injected errors."""

from dataclasses import dataclass
from enum import Enum

from kubefake.client.objects import ANY_OBJECT, ObjectKey
from kubefake.client.scheme import GroupVersionKind


class Action(str, Enum):
    GET = "get"
    CREATE = "create"
    DELETE = "delete"
    UPDATE = "update"
    PATCH = "patch"
    ANY = "*"

    @classmethod
    def parse(cls, value) -> "Action | None":
        """Return the Action for ``value``, or None when it is not one."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except (ValueError, TypeError):
            return None

    @classmethod
    def is_valid(cls, value) -> bool:
        return cls.parse(value) is not None


class _AnyKind:
    """Passed instead of an object to match every resource type."""

    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "ANY_KIND"


ANY_KIND = _AnyKind()
ANY_KIND_GVK = GroupVersionKind(kind="*")


@dataclass(frozen=True)
class RuleKey:
    action: Action
    gvk: GroupVersionKind
    object_key: ObjectKey


@dataclass(frozen=True)
class InjectedError:
    """A rule to register: raise ``error`` for (action, kind, object_key)."""

    action: Action
    kind: object
    object_key: ObjectKey
    error: Exception


def candidate_keys(action: Action, gvk: GroupVersionKind, object_key: ObjectKey) -> list[RuleKey]:
    """Rule keys that can match a concrete call, most specific first."""
    return [
        RuleKey(action, gvk, object_key),  # (1) 0 wildcards
        RuleKey(action, gvk, ANY_OBJECT),  # (2) 1 wildcard
        RuleKey(Action.ANY, gvk, object_key),  # (3) 1 wildcard
        RuleKey(action, ANY_KIND_GVK, object_key),  # (4) 1 wildcard
        RuleKey(Action.ANY, gvk, ANY_OBJECT),  # (5) 2 wildcards
        RuleKey(action, ANY_KIND_GVK, ANY_OBJECT),  # (6) 2 wildcards
        RuleKey(Action.ANY, ANY_KIND_GVK, object_key),  # (7) 2 wildcards
        RuleKey(Action.ANY, ANY_KIND_GVK, ANY_OBJECT),  # (8) 3 wildcards
    ]


class RuleTable:
    def __init__(self):
        self._errors: dict[RuleKey, Exception] = {}

    def set(self, key: RuleKey, err: Exception):
        self._errors[key] = err

    def lookup(self, candidates) -> tuple[Exception | None, bool]:
        for key in candidates:
            if key in self._errors:
                return self._errors[key], True
        return None, False

    def match(self, action: Action, gvk: GroupVersionKind, object_key: ObjectKey) -> Exception | None:
        err, _ = self.lookup(candidate_keys(action, gvk, object_key))
        return err

    def __contains__(self, key: RuleKey) -> bool:
        return key in self._errors

    def __len__(self):
        return len(self._errors)
