from collections.abc import Callable
from typing import Any

import pytest
from werkzeug import Request

from rosa.test.fixtures import OcmUrl
from rosa.utils.ocm.base import OCMClusterGroupId
from rosa.utils.ocm.cluster_groups import (
    add_group_member,
    get_group_members,
    get_user_groups,
    group_users_url,
    remove_group_member,
)
from rosa.utils.ocm_base_client import OCMBaseClient

GROUPS_URI = "/api/clusters_mgmt/v1/clusters/cluster_id/groups"


@pytest.fixture
def register_groups(
    register_ocm_url_responses: Callable[[list[OcmUrl]], int],
) -> None:
    register_ocm_url_responses([
        OcmUrl(method="GET", uri=GROUPS_URI).add_list_response([
            {
                "id": "dedicated-admins",
                "users": {"items": [{"id": "user-2"}, {"id": "user-1"}]},
            },
            {"id": "cluster-admins", "users": {"items": [{"id": "user-2"}]}},
            {"id": "unmanaged-group", "users": {"items": [{"id": "user-3"}]}},
        ])
    ])


def test_group_users_url() -> None:
    assert (
        group_users_url("cluster_id", OCMClusterGroupId.CLUSTER_ADMINS)
        == f"{GROUPS_URI}/cluster-admins/users"
    )
    assert (
        group_users_url("cluster_id", OCMClusterGroupId.DEDICATED_ADMINS, "jdoe")
        == f"{GROUPS_URI}/dedicated-admins/users/jdoe"
    )


@pytest.mark.usefixtures("register_groups")
def test_get_group_members(ocm_api: OCMBaseClient) -> None:
    assert get_group_members(ocm_api, "cluster_id") == {
        OCMClusterGroupId.DEDICATED_ADMINS: {"user-1", "user-2"},
        OCMClusterGroupId.CLUSTER_ADMINS: {"user-2"},
    }


def test_get_group_members_missing_group(
    ocm_api: OCMBaseClient,
    register_ocm_url_responses: Callable[[list[OcmUrl]], int],
) -> None:
    register_ocm_url_responses([
        OcmUrl(method="GET", uri=GROUPS_URI).add_list_response([
            {"id": "cluster-admins"},
        ])
    ])

    assert get_group_members(ocm_api, "cluster_id") == {
        OCMClusterGroupId.DEDICATED_ADMINS: set(),
        OCMClusterGroupId.CLUSTER_ADMINS: set(),
    }


@pytest.mark.usefixtures("register_groups")
def test_get_user_groups(ocm_api: OCMBaseClient) -> None:
    user_groups = get_user_groups(ocm_api, "cluster_id")

    assert list(user_groups) == ["user-1", "user-2"]
    assert user_groups["user-1"] == [OCMClusterGroupId.DEDICATED_ADMINS]
    assert set(user_groups["user-2"]) == {
        OCMClusterGroupId.DEDICATED_ADMINS,
        OCMClusterGroupId.CLUSTER_ADMINS,
    }


def test_add_group_member(
    ocm_api: OCMBaseClient,
    register_ocm_url_responses: Callable[[list[OcmUrl]], int],
    find_ocm_http_request: Callable[[str, str], Request | None],
    read_json: Callable[[Request], Any],
) -> None:
    uri = f"{GROUPS_URI}/cluster-admins/users"
    register_ocm_url_responses([
        OcmUrl(method="POST", uri=uri).add_response({
            "id": "jdoe",
            "href": f"{uri}/jdoe",
        })
    ])

    user = add_group_member(
        ocm_api, "cluster_id", OCMClusterGroupId.CLUSTER_ADMINS, "jdoe"
    )

    assert user.href == f"{uri}/jdoe"
    req = find_ocm_http_request("POST", uri)
    assert req is not None
    assert read_json(req) == {"id": "jdoe"}


def test_remove_group_member(
    ocm_api: OCMBaseClient,
    register_ocm_url_responses: Callable[[list[OcmUrl]], int],
    find_ocm_http_request: Callable[[str, str], Request | None],
) -> None:
    uri = f"{GROUPS_URI}/dedicated-admins/users/jdoe"
    register_ocm_url_responses([OcmUrl(method="DELETE", uri=uri)])

    remove_group_member(
        ocm_api, "cluster_id", OCMClusterGroupId.DEDICATED_ADMINS, "jdoe"
    )

    assert find_ocm_http_request("DELETE", uri) is not None
