"""Kubernetes-style API errors raised by clients in this package."""

import json

from kubernetes.client.rest import ApiException

REASON_NOT_FOUND = "NotFound"
REASON_ALREADY_EXISTS = "AlreadyExists"
REASON_CONFLICT = "Conflict"
REASON_BAD_REQUEST = "BadRequest"
REASON_INVALID = "Invalid"


class KubefakeError(Exception):
    """Base class for configuration and usage errors in kubefake."""


class UnregisteredKindError(KubefakeError):
    """The object's type is not registered in the scheme."""


class OperationNotSupportedError(KubefakeError, NotImplementedError):
    """The client does not implement the requested operation."""


class StatusError(ApiException):
    """An API error carrying a Kubernetes ``Status`` payload.

    ``status`` is the HTTP code and ``reason`` the machine readable
    StatusReason, the same attributes ``ApiException`` exposes for responses
    from a real API server. ``str()`` returns the human message.
    """

    def __init__(self, code: int, reason: str, message: str, details: dict | None = None):
        super().__init__(status=code, reason=reason)
        self.message = message
        self.details = details or {}
        self.body = json.dumps(
            {
                "kind": "Status",
                "apiVersion": "v1",
                "status": "Failure",
                "message": message,
                "reason": reason,
                "details": self.details,
                "code": code,
            }
        )

    def __str__(self):
        return self.message


def new_not_found(qualified_resource, name: str) -> StatusError:
    return StatusError(
        404,
        REASON_NOT_FOUND,
        f'{qualified_resource} "{name}" not found',
        {"name": name, "group": qualified_resource.group, "kind": qualified_resource.resource},
    )


def new_already_exists(qualified_resource, name: str) -> StatusError:
    return StatusError(
        409,
        REASON_ALREADY_EXISTS,
        f'{qualified_resource} "{name}" already exists',
        {"name": name, "group": qualified_resource.group, "kind": qualified_resource.resource},
    )


def new_conflict(qualified_resource, name: str, cause: str) -> StatusError:
    return StatusError(
        409,
        REASON_CONFLICT,
        f'Operation cannot be fulfilled on {qualified_resource} "{name}": {cause}',
        {"name": name, "group": qualified_resource.group, "kind": qualified_resource.resource},
    )


def new_bad_request(message: str) -> StatusError:
    return StatusError(400, REASON_BAD_REQUEST, message)


def new_invalid(kind: str, name: str, field: str, detail: str) -> StatusError:
    return StatusError(
        422,
        REASON_INVALID,
        f'{kind} "{name}" is invalid: {field}: Required value: {detail}',
        {"name": name, "kind": kind, "causes": [{"reason": "FieldValueRequired", "field": field}]},
    )


def new_status_error(code: int, reason: str = "", message: str = "") -> StatusError:
    """Build an arbitrary API error, e.g. for injected failures."""
    return StatusError(code, reason, message)


def reason_for_error(err) -> str:
    if isinstance(err, ApiException):
        return err.reason or ""
    return ""


def is_not_found(err) -> bool:
    return reason_for_error(err) == REASON_NOT_FOUND


def is_already_exists(err) -> bool:
    return reason_for_error(err) == REASON_ALREADY_EXISTS


def is_conflict(err) -> bool:
    return reason_for_error(err) == REASON_CONFLICT


def is_bad_request(err) -> bool:
    return reason_for_error(err) == REASON_BAD_REQUEST


def is_invalid(err) -> bool:
    return reason_for_error(err) == REASON_INVALID
