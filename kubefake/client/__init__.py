from kubefake.client.fake import FakeClient, new_fake_client, new_fake_client_with_scheme
from kubefake.client.interfaces import Client, StatusWriter
from kubefake.client.objects import ANY_OBJECT, ObjectKey, object_key_from_object
from kubefake.client.options import (
    DRY_RUN_ALL,
    HasLabels,
    InNamespace,
    MatchingLabels,
    MergePatch,
    RawPatch,
)
from kubefake.client.scheme import DEFAULT_SCHEME, GroupVersionKind, Scheme, new_scheme
from kubefake.client.unstructured import Unstructured, UnstructuredList
