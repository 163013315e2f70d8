import logging
from typing import List

from kubefake.client.errors import OperationNotSupportedError
from kubefake.client.fake import new_fake_client_with_scheme
from kubefake.client.interfaces import Client, StatusWriter
from kubefake.client.objects import ObjectKey, object_key_from_object
from kubefake.client.scheme import GroupVersionKind
from kubefake.client.testingclient.rules import ANY_KIND, ANY_KIND_GVK, Action, InjectedError, RuleKey, RuleTable

logger = logging.getLogger("all.kubefake.testingclient")
logger.propagate = True
logger.setLevel(logging.DEBUG)


class ErrorInjector(Client):
    """Client that raises registered errors instead of calling its delegate.

    Calls that match no rule are forwarded to the delegate unchanged.
    """

    def __init__(self, delegate: Client):
        self.delegate = delegate
        self.errors_to_return = RuleTable()

    def scheme(self):
        return self.delegate.scheme()

    def rest_mapper(self):
        return self.delegate.rest_mapper()

    def get(self, key: ObjectKey, obj):
        self._raise_stubbed_error(Action.GET, obj, key)
        return self.delegate.get(key, obj)

    def list(self, list_obj, *opts):
        raise OperationNotSupportedError("ErrorInjector does not implement list")

    def create(self, obj, *opts):
        self._raise_stubbed_error(Action.CREATE, obj, object_key_from_object(obj))
        return self.delegate.create(obj, *opts)

    def delete(self, obj, *opts):
        self._raise_stubbed_error(Action.DELETE, obj, object_key_from_object(obj))
        return self.delegate.delete(obj, *opts)

    def update(self, obj, *opts):
        self._raise_stubbed_error(Action.UPDATE, obj, object_key_from_object(obj))
        return self.delegate.update(obj, *opts)

    def patch(self, obj, patch, *opts):
        self._raise_stubbed_error(Action.PATCH, obj, object_key_from_object(obj))
        return self.delegate.patch(obj, patch, *opts)

    def delete_all_of(self, obj, *opts):
        raise OperationNotSupportedError("ErrorInjector does not implement delete_all_of")

    def status(self) -> StatusWriter:
        raise OperationNotSupportedError("ErrorInjector does not implement status")

    def _raise_stubbed_error(self, action: Action, obj, object_key: ObjectKey):
        err = self.get_stubbed_error(action, obj, object_key)
        if err is not None:
            logger.debug(f"Returning injected error for {action.value} {type(obj).__name__} {object_key}: {err!r}")
            raise err

    def get_stubbed_error(self, action: Action, obj, object_key: ObjectKey) -> Exception | None:
        gvk = self.scheme().object_kind(obj)
        return self.errors_to_return.match(action, gvk, object_key)

    def _resolve_kind(self, kind) -> GroupVersionKind:
        if kind is ANY_KIND:
            return ANY_KIND_GVK
        if isinstance(kind, GroupVersionKind):
            return kind
        return self.scheme().object_kind(kind)

    def inject_error(self, action, kind, object_key: ObjectKey, injected_error: Exception) -> bool:
        """Make the client raise ``injected_error`` for (action, kind, object_key).

        Each part of the tuple accepts a wildcard:
        pass object_key=ANY_OBJECT to match any object identity,
        kind=ANY_KIND to match any type of object,
        action=Action.ANY to match any client action.

        ``kind`` is otherwise an object, a model class or a GroupVersionKind.
        An unregistered type raises UnregisteredKindError. An invalid action
        stores nothing and returns False.
        """
        gvk = self._resolve_kind(kind)
        parsed = Action.parse(action)
        if parsed is None:
            logger.warning(f"Ignoring injected error for invalid action {action!r}")
            return False

        self.errors_to_return.set(RuleKey(parsed, gvk, object_key), injected_error)
        logger.debug(f"Injected error for {parsed.value} {gvk.kind} {object_key}: {injected_error!r}")
        return True

    def inject_errors(self, injected_errors):
        for injected in injected_errors:
            self.inject_error(injected.action, injected.kind, injected.object_key, injected.error)


class FakeClientWithInjectedErrors(ErrorInjector):
    """ErrorInjector over a FakeClient that keeps the whole client surface.

    get, create, delete, update and patch still check the rule table first.
    list, delete_all_of and status go straight to the fake store.
    """

    def list(self, list_obj, *opts):
        return self.delegate.list(list_obj, *opts)

    def delete_all_of(self, obj, *opts):
        return self.delegate.delete_all_of(obj, *opts)

    def status(self) -> StatusWriter:
        return self.delegate.status()


def new_fake_client_with_injected_errors(
    scheme, injected_errors: List[InjectedError], *objects
) -> FakeClientWithInjectedErrors:
    """Return a fake client seeded with ``objects`` that raises ``injected_errors``."""
    injector = FakeClientWithInjectedErrors(new_fake_client_with_scheme(scheme, *objects))
    injector.inject_errors(injected_errors)
    return injector
