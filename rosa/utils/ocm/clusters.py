import re
from collections.abc import Generator
from dataclasses import dataclass
from datetime import datetime
from ipaddress import IPv4Network, IPv6Network
from typing import Any

from rosa.utils.ocm.base import (
    CLOUD_PROVIDER_AWS,
    CREATOR_ARN_PROPERTY,
    CS_API_BASE,
    PRODUCT_ID_ROSA,
    OCMCluster,
    OCMClusterLog,
    OCMIngress,
    OCMListeningMethod,
    build_cluster_url,
    drop_empty,
)
from rosa.utils.ocm.search_filters import Filter
from rosa.utils.ocm_base_client import OCMBaseClient

CLUSTER_KEY_RE = re.compile(r"[a-zA-Z0-9\-_]+")

IPNetwork = IPv4Network | IPv6Network


class ClusterNotFoundError(Exception):
    pass


class InvalidClusterKeyError(Exception):
    pass


def is_valid_cluster_key(cluster_key: str) -> bool:
    """
    Cluster names, identifiers and external identifiers are interpolated
    into search queries, so only letters, digits, dashes and underscores
    are accepted.
    """
    return bool(CLUSTER_KEY_RE.fullmatch(cluster_key))


def validate_cluster_key(cluster_key: str) -> str:
    if not is_valid_cluster_key(cluster_key):
        raise InvalidClusterKeyError(
            f"Cluster name, identifier or external identifier '{cluster_key}' "
            "isn't valid: it must contain only letters, digits, dashes and "
            "underscores"
        )
    return cluster_key


def cluster_key_filter(cluster_key: str) -> Filter:
    return (
        Filter().eq("id", cluster_key)
        | Filter().eq("name", cluster_key)
        | Filter().eq("external_id", cluster_key)
    )


def creator_filter(creator_arn: str) -> Filter:
    return Filter().eq(f"properties.{CREATOR_ARN_PROPERTY}", creator_arn)


def get_clusters(
    ocm_api: OCMBaseClient,
    creator_arn: str,
    cluster_filter: Filter | None = None,
) -> Generator[OCMCluster, None, None]:
    search = creator_filter(creator_arn) & cluster_filter
    for cluster_dict in ocm_api.get_paginated(
        api_path=f"{CS_API_BASE}/clusters",
        params={"search": search.render(), "order": "creation_timestamp"},
    ):
        yield OCMCluster(**cluster_dict)


def get_cluster(ocm_api: OCMBaseClient, cluster_key: str, creator_arn: str) -> OCMCluster:
    """
    Finds the single cluster created by creator_arn whose id, name or
    external id equals cluster_key.
    """
    clusters = list(
        get_clusters(ocm_api, creator_arn, cluster_filter=cluster_key_filter(cluster_key))
    )
    if not clusters:
        raise ClusterNotFoundError(
            f"There is no cluster with identifier or name '{cluster_key}'"
        )
    if len(clusters) > 1:
        raise ClusterNotFoundError(
            f"There are {len(clusters)} clusters with identifier or name '{cluster_key}'"
        )
    return clusters[0]


@dataclass
class ClusterSpec:
    name: str
    region: str
    creator_arn: str
    account_id: str
    multi_az: bool = False
    version: str = ""
    expiration: datetime | None = None
    compute_machine_type: str = ""
    compute_nodes: int = 0
    machine_cidr: IPNetwork | None = None
    service_cidr: IPNetwork | None = None
    pod_cidr: IPNetwork | None = None
    host_prefix: int = 0
    private: bool = False

    def render(self) -> dict[str, Any]:
        """Renders the cluster creation body, leaving out unset values."""
        nodes = drop_empty({
            "compute": self.compute_nodes or None,
            "compute_machine_type": (
                {"id": self.compute_machine_type}
                if self.compute_machine_type
                else None
            ),
        })
        network = drop_empty({
            "machine_cidr": str(self.machine_cidr) if self.machine_cidr else None,
            "service_cidr": str(self.service_cidr) if self.service_cidr else None,
            "pod_cidr": str(self.pod_cidr) if self.pod_cidr else None,
            "host_prefix": self.host_prefix or None,
        })
        return drop_empty({
            "name": self.name,
            "product": {"id": PRODUCT_ID_ROSA},
            "cloud_provider": {"id": CLOUD_PROVIDER_AWS},
            "region": {"id": self.region},
            "multi_az": self.multi_az,
            "ccs": {"enabled": True},
            "aws": {"account_id": self.account_id},
            "version": {"id": self.version} if self.version else None,
            "expiration_timestamp": (
                self.expiration.isoformat() if self.expiration else None
            ),
            "nodes": nodes,
            "network": network,
            "api": (
                {"listening": OCMListeningMethod.INTERNAL.value}
                if self.private
                else None
            ),
            "properties": {CREATOR_ARN_PROPERTY: self.creator_arn},
        })


def create_cluster(ocm_api: OCMBaseClient, spec: ClusterSpec) -> OCMCluster:
    return OCMCluster(**ocm_api.post(f"{CS_API_BASE}/clusters", spec.render()))


def delete_cluster(ocm_api: OCMBaseClient, cluster_id: str) -> None:
    ocm_api.delete(build_cluster_url(cluster_id))


def update_cluster_nodes(
    ocm_api: OCMBaseClient, cluster_id: str, nodes: dict[str, Any]
) -> None:
    """
    Patches the compute settings of a cluster. This is how the Default
    machine pool is scaled.
    """
    ocm_api.patch(build_cluster_url(cluster_id), {"nodes": nodes})


def get_ingresses(ocm_api: OCMBaseClient, cluster_id: str) -> list[OCMIngress]:
    return [
        OCMIngress(**ingress)
        for ingress in ocm_api.get_paginated(
            f"{build_cluster_url(cluster_id)}/ingresses"
        )
    ]


def is_private(ingresses: list[OCMIngress]) -> bool:
    return any(
        ingress.default and ingress.listening == OCMListeningMethod.INTERNAL
        for ingress in ingresses
    )


def get_install_logs(
    ocm_api: OCMBaseClient, cluster_id: str, offset: int = 0
) -> OCMClusterLog:
    params = {"offset": offset} if offset else None
    return OCMClusterLog(
        **ocm_api.get(f"{build_cluster_url(cluster_id)}/logs/install", params=params)
    )
