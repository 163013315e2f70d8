from kubefake.client.testingclient.error import (
    ErrorInjector,
    FakeClientWithInjectedErrors,
    new_fake_client_with_injected_errors,
)
from kubefake.client.testingclient.rules import ANY_KIND, ANY_KIND_GVK, Action, InjectedError
