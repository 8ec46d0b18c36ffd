from datetime import (
    UTC,
    datetime,
)

from rosa.utils.ocm.base import (
    UpgradePolicy,
    build_cluster_url,
)
from rosa.utils.ocm_base_client import OCMBaseClient

UPGRADE_TYPE_OSD = "OSD"


def _build_upgrade_policy(response: dict) -> UpgradePolicy:
    return UpgradePolicy(
        id=response.get("id"),
        schedule_type=response["schedule_type"],
        schedule=response.get("schedule"),
        next_run=response.get("next_run"),
        upgrade_type=response.get("upgrade_type"),
        version=response["version"],
    )


def get_upgrade_policies(
    ocm_api: OCMBaseClient,
    cluster_id: str,
) -> list[UpgradePolicy]:
    """Returns a list of details of Upgrade Policies

    :param ocm_api: OCM API client
    :param cluster_id: cluster id

    :return: list of UpgradePolicy
    """
    return [
        _build_upgrade_policy(policy)
        for policy in ocm_api.get_paginated(
            f"{build_cluster_url(cluster_id)}/upgrade_policies"
        )
    ]


def parse_next_run(policy: UpgradePolicy) -> datetime | None:
    if not policy["next_run"]:
        return None
    return datetime.fromisoformat(policy["next_run"].replace("Z", "+00:00"))


def get_scheduled_upgrade(
    ocm_api: OCMBaseClient, cluster_id: str, now: datetime | None = None
) -> tuple[UpgradePolicy, datetime] | None:
    """
    Returns the first cluster upgrade policy that runs in the future,
    together with its next run time.
    """
    now = now or datetime.now(tz=UTC)
    for policy in get_upgrade_policies(ocm_api, cluster_id):
        if policy["upgrade_type"] != UPGRADE_TYPE_OSD:
            continue
        next_run = parse_next_run(policy)
        if next_run and next_run > now:
            return policy, next_run
    return None
