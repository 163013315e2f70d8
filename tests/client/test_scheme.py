import json

import pytest
from kubernetes import client

from kubefake.client import errors
from kubefake.client.objects import ObjectKey, from_dict, object_key_from_object, to_dict
from kubefake.client.restmapper import GroupResource, RESTMapper, guess_resource_for_kind
from kubefake.client.scheme import DEFAULT_SCHEME, GroupVersionKind, Scheme, add_apps_v1_to_scheme, new_scheme
from kubefake.client.unstructured import Unstructured, UnstructuredList

DEPLOYMENT = GroupVersionKind("apps", "v1", "Deployment")


class TestGroupVersionKind:
    def test_api_version(self):
        assert DEPLOYMENT.api_version == "apps/v1"
        assert GroupVersionKind("", "v1", "ConfigMap").api_version == "v1"

    def test_from_api_version(self):
        assert GroupVersionKind.from_api_version_and_kind("apps/v1", "Deployment") == DEPLOYMENT
        assert GroupVersionKind.from_api_version_and_kind("v1", "Pod") == GroupVersionKind("", "v1", "Pod")

    def test_list_kinds(self):
        assert DEPLOYMENT.list_gvk() == GroupVersionKind("apps", "v1", "DeploymentList")
        assert DEPLOYMENT.list_gvk().is_list()
        assert DEPLOYMENT.list_gvk().item_gvk() == DEPLOYMENT
        assert not DEPLOYMENT.is_list()


class TestScheme:
    @pytest.mark.parametrize(
        "obj, gvk",
        [
            (client.V1Deployment(), DEPLOYMENT),
            (client.V1Deployment, DEPLOYMENT),
            (client.V1DeploymentList(items=[]), GroupVersionKind("apps", "v1", "DeploymentList")),
            (client.V1ConfigMap(), GroupVersionKind("", "v1", "ConfigMap")),
            (client.V1Lease(), GroupVersionKind("coordination.k8s.io", "v1", "Lease")),
            (client.V1Endpoints(), GroupVersionKind("", "v1", "Endpoints")),
        ],
    )
    def test_object_kind(self, obj, gvk):
        assert DEFAULT_SCHEME.object_kind(obj) == gvk
        assert DEFAULT_SCHEME.type_for(gvk) is (obj if isinstance(obj, type) else type(obj))

    def test_unstructured(self):
        obj = Unstructured({"apiVersion": "example.com/v1alpha1", "kind": "Widget"})
        assert Scheme().object_kind(obj) == GroupVersionKind("example.com", "v1alpha1", "Widget")

        listing = UnstructuredList({"apiVersion": "apps/v1", "kind": "DeploymentList"})
        assert Scheme().object_kind(listing).item_gvk() == DEPLOYMENT

    def test_unstructured_without_kind(self):
        with pytest.raises(errors.UnregisteredKindError):
            DEFAULT_SCHEME.object_kind(Unstructured({"apiVersion": "v1"}))

    def test_unregistered_type(self):
        scheme = new_scheme(add_apps_v1_to_scheme)
        assert scheme.recognizes(DEPLOYMENT)
        with pytest.raises(errors.UnregisteredKindError):
            scheme.object_kind(client.V1ConfigMap())

    def test_add_known_type(self):
        class Widget:
            pass

        scheme = Scheme()
        gvk = GroupVersionKind("example.com", "v1", "Widget")
        scheme.add_known_type(gvk, Widget)
        assert scheme.object_kind(Widget()) == gvk
        assert scheme.all_known_types() == {gvk: Widget}


class TestRESTMapper:
    @pytest.mark.parametrize(
        "kind, resource",
        [
            ("Deployment", "deployments"),
            ("Ingress", "ingresses"),
            ("NetworkPolicy", "networkpolicies"),
            ("Gateway", "gateways"),
            ("Endpoints", "endpoints"),
        ],
    )
    def test_guess_resource(self, kind, resource):
        assert guess_resource_for_kind(kind) == resource

    def test_resource_for(self):
        mapper = RESTMapper(DEFAULT_SCHEME)
        assert mapper.resource_for(DEPLOYMENT) == GroupResource("apps", "deployments")
        assert str(mapper.resource_for(DEPLOYMENT)) == "deployments.apps"
        assert str(mapper.resource_for(GroupVersionKind("", "v1", "ConfigMap"))) == "configmaps"

    def test_kind_for(self):
        mapper = RESTMapper(DEFAULT_SCHEME)
        assert mapper.kind_for("apps", "v1", "deployments") == DEPLOYMENT
        assert mapper.kind_for("apps", "v1", "widgets") is None


class TestGeneratedModels:
    def test_models_expose_openapi_types(self):
        assert "metadata" in client.V1Deployment.openapi_types
        assert client.V1Deployment.attribute_map["api_version"] == "apiVersion"

    def test_round_trip_through_api_client(self):
        dep = client.V1Deployment(api_version="apps/v1", kind="Deployment", metadata=client.V1ObjectMeta(name="d"))
        assert from_dict(client.V1Deployment, to_dict(dep)) == dep


class TestObjectKey:
    def test_from_typed_object(self):
        obj = client.V1Pod(metadata=client.V1ObjectMeta(name="p", namespace="ns"))
        assert object_key_from_object(obj) == ObjectKey("ns", "p")

    def test_from_cluster_scoped_object(self):
        obj = client.V1Namespace(metadata=client.V1ObjectMeta(name="ns"))
        assert object_key_from_object(obj) == ObjectKey("", "ns")

    def test_without_metadata(self):
        assert object_key_from_object(client.V1Pod()) == ObjectKey()

    def test_from_unstructured(self):
        obj = Unstructured({"metadata": {"name": "u", "namespace": "ns"}})
        assert object_key_from_object(obj) == ObjectKey("ns", "u")


class TestStatusErrors:
    def test_not_found(self):
        err = errors.new_not_found(GroupResource("apps", "deployments"), "web")
        assert str(err) == 'deployments.apps "web" not found'
        assert err.status == 404
        assert errors.is_not_found(err)
        assert not errors.is_conflict(err)

    def test_conflict(self):
        err = errors.new_conflict(GroupResource("", "configmaps"), "cm", "object was modified")
        assert str(err) == 'Operation cannot be fulfilled on configmaps "cm": object was modified'
        assert errors.is_conflict(err)

    def test_predicates_accept_any_exception(self):
        assert not errors.is_not_found(ValueError("not found"))
        assert not errors.is_bad_request(None)

    def test_body_is_a_status(self):
        body = json.loads(errors.new_bad_request("bad").body)
        assert body["kind"] == "Status"
        assert body["code"] == 400
        assert body["reason"] == "BadRequest"
