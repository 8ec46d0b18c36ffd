"""
Membership of the admin groups of a cluster. Groups other than the ones in
OCMClusterGroupId are ignored.
"""

from rosa.utils.ocm.base import (
    OCMClusterGroup,
    OCMClusterGroupId,
    OCMClusterUser,
    build_cluster_url,
)
from rosa.utils.ocm_base_client import OCMBaseClient


def group_users_url(
    cluster_id: str, group: OCMClusterGroupId, user_name: str | None = None
) -> str:
    url = f"{build_cluster_url(cluster_id)}/groups/{group.value}/users"
    return f"{url}/{user_name}" if user_name else url


def get_group_members(
    ocm_api: OCMBaseClient, cluster_id: str
) -> dict[OCMClusterGroupId, set[str]]:
    members: dict[OCMClusterGroupId, set[str]] = {
        group: set() for group in OCMClusterGroupId
    }
    for item in ocm_api.get_paginated(
        f"{build_cluster_url(cluster_id)}/groups", max_page_size=10
    ):
        if item.get("id") not in OCMClusterGroupId.values():
            continue
        group = OCMClusterGroup(**item)
        members[group.id] = group.user_ids()
    return members


def get_user_groups(
    ocm_api: OCMBaseClient, cluster_id: str
) -> dict[str, list[OCMClusterGroupId]]:
    """
    Every user of the admin groups together with the groups it belongs to,
    ordered by user name.
    """
    user_groups: dict[str, list[OCMClusterGroupId]] = {}
    for group, users in get_group_members(ocm_api, cluster_id).items():
        for user in users:
            user_groups.setdefault(user, []).append(group)
    return dict(sorted(user_groups.items()))


def add_group_member(
    ocm_api: OCMBaseClient,
    cluster_id: str,
    group: OCMClusterGroupId,
    user_name: str,
) -> OCMClusterUser:
    created = ocm_api.post(group_users_url(cluster_id, group), {"id": user_name})
    return OCMClusterUser(**created) if created else OCMClusterUser(id=user_name)


def remove_group_member(
    ocm_api: OCMBaseClient,
    cluster_id: str,
    group: OCMClusterGroupId,
    user_name: str,
) -> None:
    ocm_api.delete(group_users_url(cluster_id, group, user_name))
