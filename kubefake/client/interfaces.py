from abc import ABC, abstractmethod


class StatusWriter(ABC):
    """
    Writes the status subresource of an object.
    """

    @abstractmethod
    def update(self, obj, *opts):
        pass

    @abstractmethod
    def patch(self, obj, patch, *opts):
        pass


class Client(ABC):
    """
    Reads and writes Kubernetes objects.
    Implemented by FakeClient and by ErrorInjector, which wraps another Client.
    Errors are raised, never returned; options are passed positionally.
    """

    @abstractmethod
    def scheme(self):
        """
        Return the Scheme this client resolves object types with.
        """
        pass

    @abstractmethod
    def rest_mapper(self):
        pass

    @abstractmethod
    def get(self, key, obj):
        """
        Fetch the object identified by `key` into `obj`.
        """
        pass

    @abstractmethod
    def list(self, list_obj, *opts):
        """
        Fill `list_obj.items` with the objects matching the list options.
        """
        pass

    @abstractmethod
    def create(self, obj, *opts):
        pass

    @abstractmethod
    def delete(self, obj, *opts):
        pass

    @abstractmethod
    def update(self, obj, *opts):
        pass

    @abstractmethod
    def patch(self, obj, patch, *opts):
        pass

    @abstractmethod
    def delete_all_of(self, obj, *opts):
        """
        Delete every object of obj's type matching the options.
        """
        pass

    @abstractmethod
    def status(self) -> StatusWriter:
        pass
