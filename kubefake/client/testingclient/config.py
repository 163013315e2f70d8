"""Declare injected errors in YAML instead of code."""

import logging
import os
from pathlib import Path

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, field_validator, model_validator

from kubefake.client.errors import new_status_error
from kubefake.client.objects import ANY_OBJECT, ObjectKey
from kubefake.client.scheme import GroupVersionKind
from kubefake.client.testingclient.rules import ANY_KIND, Action, InjectedError

load_dotenv()

DEFAULT_INJECTED_ERRORS_PATH = Path(os.environ.get("KUBEFAKE_INJECTED_ERRORS", "injected_errors.yaml"))

logger = logging.getLogger("all.kubefake.config")
logger.propagate = True
logger.setLevel(logging.DEBUG)


class ErrorSpec(BaseModel):
    code: int
    reason: str = ""
    message: str = ""


class InjectedErrorSpec(BaseModel):
    action: str
    kind: str = "*"
    namespace: str | None = None
    name: str | None = None
    error: ErrorSpec

    @field_validator("action")
    @classmethod
    def action_must_be_valid(cls, value: str) -> str:
        if not Action.is_valid(value):
            raise ValueError(f"unknown action {value!r}, expected one of {[a.value for a in Action]}")
        return value

    @field_validator("kind")
    @classmethod
    def kind_must_be_qualified(cls, value: str) -> str:
        if value == "*":
            return value
        parts = value.split("/")
        if len(parts) not in (2, 3) or not all(parts):
            raise ValueError(f"kind {value!r} must look like '<group>/<version>/<Kind>' or '<version>/<Kind>'")
        return value

    @model_validator(mode="after")
    def name_required_with_namespace(self):
        if self.namespace is not None and self.name is None:
            raise ValueError("namespace is set without a name")
        return self

    def to_injected_error(self) -> InjectedError:
        if self.kind == "*":
            kind = ANY_KIND
        else:
            api_version, _, kind_name = self.kind.rpartition("/")
            kind = GroupVersionKind.from_api_version_and_kind(api_version, kind_name)

        object_key = ANY_OBJECT
        if self.name is not None:
            object_key = ObjectKey(self.namespace or "", self.name)

        return InjectedError(
            action=Action(self.action),
            kind=kind,
            object_key=object_key,
            error=new_status_error(self.error.code, self.error.reason, self.error.message),
        )


class InjectedErrorsFile(BaseModel):
    injected_errors: list[InjectedErrorSpec] = []


def load_injected_errors(path: Path = DEFAULT_INJECTED_ERRORS_PATH) -> list[InjectedError]:
    path = Path(path)
    if not path.exists():
        logger.debug(f"No injected errors file at {path}")
        return []
    data = yaml.safe_load(path.read_text()) or {}
    parsed = InjectedErrorsFile.model_validate(data)
    logger.info(f"Loaded {len(parsed.injected_errors)} injected errors from {path}")
    return [entry.to_injected_error() for entry in parsed.injected_errors]


def apply_injected_errors(injector, path: Path = DEFAULT_INJECTED_ERRORS_PATH) -> int:
    """Register every error declared in ``path`` on ``injector``."""
    injected_errors = load_injected_errors(path)
    injector.inject_errors(injected_errors)
    return len(injected_errors)
