from collections.abc import Callable
from datetime import (
    UTC,
    datetime,
)
from ipaddress import ip_network
from typing import Any

import pytest
from werkzeug import Request

from rosa.test.fixtures import (
    CREATOR_ARN,
    OcmUrl,
    build_ocm_cluster,
    cluster_json,
)
from rosa.utils.ocm.base import (
    OCMIngress,
    OCMListeningMethod,
)
from rosa.utils.ocm.clusters import (
    ClusterNotFoundError,
    ClusterSpec,
    InvalidClusterKeyError,
    cluster_key_filter,
    create_cluster,
    creator_filter,
    delete_cluster,
    get_cluster,
    get_install_logs,
    is_private,
    is_valid_cluster_key,
    update_cluster_nodes,
    validate_cluster_key,
)
from rosa.utils.ocm_base_client import OCMBaseClient

CLUSTERS_URI = "/api/clusters_mgmt/v1/clusters"


@pytest.mark.parametrize(
    "cluster_key, valid",
    [
        ("my-cluster", True),
        ("my_cluster_01", True),
        ("1a2b3c", True),
        ("", False),
        ("my cluster", False),
        ("cl'uster", False),
        ("cluster\n", False),
    ],
)
def test_is_valid_cluster_key(cluster_key: str, valid: bool) -> None:
    assert is_valid_cluster_key(cluster_key) == valid


def test_validate_cluster_key_error() -> None:
    with pytest.raises(InvalidClusterKeyError) as e:
        validate_cluster_key("a b")
    assert "'a b' isn't valid" in str(e.value)


def test_cluster_search() -> None:
    search = creator_filter(CREATOR_ARN) & cluster_key_filter("c1")
    assert search.render() == (
        "(external_id='c1' or id='c1' or name='c1') and "
        f"properties.rosa_creator_arn='{CREATOR_ARN}'"
    )


def test_get_cluster(
    ocm_api: OCMBaseClient,
    register_ocm_url_responses: Callable[[list[OcmUrl]], int],
    find_ocm_http_request: Callable[[str, str], Request | None],
) -> None:
    cluster = build_ocm_cluster("c1")
    register_ocm_url_responses([
        OcmUrl(method="GET", uri=CLUSTERS_URI).add_list_response([
            cluster_json(cluster)
        ])
    ])

    assert get_cluster(ocm_api, "c1", CREATOR_ARN) == cluster

    req = find_ocm_http_request("GET", CLUSTERS_URI)
    assert req is not None
    assert req.args["search"] == (
        creator_filter(CREATOR_ARN) & cluster_key_filter("c1")
    ).render()
    assert req.args["order"] == "creation_timestamp"


def test_get_cluster_not_found(
    ocm_api: OCMBaseClient,
    register_ocm_url_responses: Callable[[list[OcmUrl]], int],
) -> None:
    register_ocm_url_responses([
        OcmUrl(method="GET", uri=CLUSTERS_URI).add_list_response([])
    ])
    with pytest.raises(ClusterNotFoundError) as e:
        get_cluster(ocm_api, "c1", CREATOR_ARN)
    assert str(e.value) == "There is no cluster with identifier or name 'c1'"


def test_get_cluster_ambiguous(
    ocm_api: OCMBaseClient,
    register_ocm_url_responses: Callable[[list[OcmUrl]], int],
) -> None:
    register_ocm_url_responses([
        OcmUrl(method="GET", uri=CLUSTERS_URI).add_list_response([
            cluster_json(build_ocm_cluster("c1")),
            cluster_json(build_ocm_cluster("c1", id="other_id")),
        ])
    ])
    with pytest.raises(ClusterNotFoundError) as e:
        get_cluster(ocm_api, "c1", CREATOR_ARN)
    assert str(e.value) == "There are 2 clusters with identifier or name 'c1'"


def test_cluster_spec_render_minimal() -> None:
    spec = ClusterSpec(
        name="c1",
        region="us-east-1",
        creator_arn=CREATOR_ARN,
        account_id="123456789012",
    )
    assert spec.render() == {
        "name": "c1",
        "product": {"id": "rosa"},
        "cloud_provider": {"id": "aws"},
        "region": {"id": "us-east-1"},
        "multi_az": False,
        "ccs": {"enabled": True},
        "aws": {"account_id": "123456789012"},
        "properties": {"rosa_creator_arn": CREATOR_ARN},
    }


def test_cluster_spec_render_full() -> None:
    spec = ClusterSpec(
        name="c1",
        region="us-east-1",
        creator_arn=CREATOR_ARN,
        account_id="123456789012",
        multi_az=True,
        version="openshift-v4.12.1",
        expiration=datetime(2030, 1, 2, 3, 4, 5, tzinfo=UTC),
        compute_machine_type="m5.xlarge",
        compute_nodes=6,
        machine_cidr=ip_network("10.0.0.0/16"),
        service_cidr=ip_network("172.30.0.0/16"),
        pod_cidr=ip_network("10.128.0.0/14"),
        host_prefix=23,
        private=True,
    )
    body = spec.render()
    assert body["version"] == {"id": "openshift-v4.12.1"}
    assert body["expiration_timestamp"] == "2030-01-02T03:04:05+00:00"
    assert body["nodes"] == {"compute": 6, "compute_machine_type": {"id": "m5.xlarge"}}
    assert body["network"] == {
        "machine_cidr": "10.0.0.0/16",
        "service_cidr": "172.30.0.0/16",
        "pod_cidr": "10.128.0.0/14",
        "host_prefix": 23,
    }
    assert body["api"] == {"listening": "internal"}
    assert body["multi_az"] is True


def test_create_cluster(
    ocm_api: OCMBaseClient,
    register_ocm_url_responses: Callable[[list[OcmUrl]], int],
    find_ocm_http_request: Callable[[str, str], Request | None],
    read_json: Callable[[Request], Any],
) -> None:
    cluster = build_ocm_cluster("c1")
    register_ocm_url_responses([
        OcmUrl(method="POST", uri=CLUSTERS_URI).add_response(cluster_json(cluster))
    ])
    spec = ClusterSpec(
        name="c1",
        region="us-east-1",
        creator_arn=CREATOR_ARN,
        account_id="123456789012",
    )

    assert create_cluster(ocm_api, spec) == cluster

    req = find_ocm_http_request("POST", CLUSTERS_URI)
    assert req is not None
    assert read_json(req) == spec.render()


def test_delete_cluster(
    ocm_api: OCMBaseClient,
    register_ocm_url_responses: Callable[[list[OcmUrl]], int],
    find_ocm_http_request: Callable[[str, str], Request | None],
) -> None:
    register_ocm_url_responses([OcmUrl(method="DELETE", uri=f"{CLUSTERS_URI}/c1_id")])
    delete_cluster(ocm_api, "c1_id")
    assert find_ocm_http_request("DELETE", f"{CLUSTERS_URI}/c1_id") is not None


def test_update_cluster_nodes(
    ocm_api: OCMBaseClient,
    register_ocm_url_responses: Callable[[list[OcmUrl]], int],
    find_ocm_http_request: Callable[[str, str], Request | None],
    read_json: Callable[[Request], Any],
) -> None:
    register_ocm_url_responses([OcmUrl(method="PATCH", uri=f"{CLUSTERS_URI}/c1_id")])
    update_cluster_nodes(ocm_api, "c1_id", {"compute": 4})
    req = find_ocm_http_request("PATCH", f"{CLUSTERS_URI}/c1_id")
    assert req is not None
    assert read_json(req) == {"nodes": {"compute": 4}}


@pytest.mark.parametrize(
    "ingresses, private",
    [
        ([], False),
        (
            [OCMIngress(id="a", default=True, listening=OCMListeningMethod.EXTERNAL)],
            False,
        ),
        (
            [
                OCMIngress(id="a", default=False, listening=OCMListeningMethod.INTERNAL),
                OCMIngress(id="b", default=True, listening=OCMListeningMethod.EXTERNAL),
            ],
            False,
        ),
        (
            [OCMIngress(id="a", default=True, listening=OCMListeningMethod.INTERNAL)],
            True,
        ),
    ],
)
def test_is_private(ingresses: list[OCMIngress], private: bool) -> None:
    assert is_private(ingresses) == private


def test_get_install_logs_offset(
    ocm_api: OCMBaseClient,
    register_ocm_url_responses: Callable[[list[OcmUrl]], int],
    find_ocm_http_request: Callable[[str, str], Request | None],
) -> None:
    uri = f"{CLUSTERS_URI}/c1_id/logs/install"
    register_ocm_url_responses([
        OcmUrl(method="GET", uri=uri).add_response({"id": "install", "content": "x\n"})
    ])

    log = get_install_logs(ocm_api, "c1_id", offset=3)

    assert log.content == "x\n"
    req = find_ocm_http_request("GET", uri)
    assert req is not None
    assert req.args["offset"] == "3"
