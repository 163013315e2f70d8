import pytest

from kubefake.client.fake import new_fake_client
from kubefake.client.scheme import (
    add_apps_v1_to_scheme,
    add_coordination_v1_to_scheme,
    add_core_v1_to_scheme,
    new_scheme,
)
from tests.client.fixtures import make_config_map, make_deployment


@pytest.fixture
def dep():
    return make_deployment()


@pytest.fixture
def dep2():
    return make_deployment("test-deployment-2", labels={"test-label": "label-value"})


@pytest.fixture
def cm():
    return make_config_map()


@pytest.fixture
def scheme():
    return new_scheme(add_core_v1_to_scheme, add_apps_v1_to_scheme, add_coordination_v1_to_scheme)


@pytest.fixture
def fake_client(dep, dep2, cm):
    return new_fake_client(dep, dep2, cm)
