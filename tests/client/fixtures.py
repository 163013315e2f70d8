from kubernetes import client


def make_deployment(name="test-deployment", namespace="ns1", labels=None):
    return client.V1Deployment(
        api_version="apps/v1",
        kind="Deployment",
        metadata=client.V1ObjectMeta(name=name, namespace=namespace, labels=labels),
    )


def make_config_map(name="test-cm", namespace="ns2", data=None, resource_version=None, labels=None):
    return client.V1ConfigMap(
        api_version="v1",
        kind="ConfigMap",
        metadata=client.V1ObjectMeta(
            name=name, namespace=namespace, resource_version=resource_version, labels=labels
        ),
        data=data if data is not None else {"test-key": "test-value"},
    )
