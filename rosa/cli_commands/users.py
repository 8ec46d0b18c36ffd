from dataclasses import dataclass

import requests

from rosa.cli_commands.common import error_reason
from rosa.utils import interactive
from rosa.utils.interactive import (
    Input,
    InteractiveInputError,
)
from rosa.utils.ocm.base import OCMClusterGroupId
from rosa.utils.ocm.cluster_groups import (
    add_group_member,
    remove_group_member,
)
from rosa.utils.ocm_base_client import OCMBaseClient
from rosa.utils.reporter import Reporter

# group -> singular role name used in messages
ROLES = {
    OCMClusterGroupId.CLUSTER_ADMINS: "cluster-admin",
    OCMClusterGroupId.DEDICATED_ADMINS: "dedicated-admin",
}


class UsersError(Exception):
    pass


def split_usernames(usernames: str) -> list[str]:
    return [u.strip() for u in usernames.split(",") if u.strip()]


@dataclass
class UsersCommandData:
    cluster_key: str
    cluster_id: str
    cluster_admins: str = ""
    dedicated_admins: str = ""


class UsersCommand:
    """
    Adds or removes users from the admin groups of a cluster. Users are
    handled one at a time and a failure for one user does not stop the others.
    """

    def __init__(
        self,
        ocm_api: OCMBaseClient,
        reporter: Reporter,
        command_data: UsersCommandData,
    ):
        self._ocm_api = ocm_api
        self._reporter = reporter
        self._command_data = command_data

    def _ask_usernames(self, action: str) -> None:
        data = self._command_data
        if data.cluster_admins or data.dedicated_admins:
            return
        try:
            data.cluster_admins = interactive.get_input(
                Input(
                    question=f"Comma-separated list of cluster-admins to {action}"
                )
            )
            data.dedicated_admins = interactive.get_input(
                Input(
                    question=f"Comma-separated list of dedicated-admins to {action}"
                )
            )
        except InteractiveInputError:
            raise UsersError("Expected a comma-separated list of usernames") from None

    def _groups(self) -> list[tuple[OCMClusterGroupId, list[str]]]:
        data = self._command_data
        groups = [
            (OCMClusterGroupId.CLUSTER_ADMINS, split_usernames(data.cluster_admins)),
            (
                OCMClusterGroupId.DEDICATED_ADMINS,
                split_usernames(data.dedicated_admins),
            ),
        ]
        if not any(users for _, users in groups):
            raise UsersError(
                "Expected at least one of 'cluster-admins' or 'dedicated-admins'"
            )
        return groups

    def add(self) -> int:
        """Returns the number of users that could not be added."""
        self._ask_usernames("add to your cluster")
        data = self._command_data
        failures = 0
        for group, users in self._groups():
            if not users:
                continue
            role = ROLES[group]
            self._reporter.info(f"Adding {role} users to cluster '{data.cluster_key}'")
            for user in users:
                try:
                    add_group_member(self._ocm_api, data.cluster_id, group, user)
                except requests.RequestException as e:
                    failures += 1
                    self._reporter.error(
                        f"Failed to add {role} user '{user}' to cluster "
                        f"'{data.cluster_key}': {error_reason(e)}"
                    )
        return failures

    def remove(self) -> int:
        """Returns the number of users that could not be removed."""
        self._ask_usernames("remove from your cluster")
        data = self._command_data
        failures = 0
        for group, users in self._groups():
            if not users:
                continue
            role = ROLES[group]
            self._reporter.info(
                f"Removing {role} users from cluster '{data.cluster_key}'"
            )
            for user in users:
                try:
                    remove_group_member(
                        self._ocm_api, data.cluster_id, group, user
                    )
                except requests.RequestException as e:
                    failures += 1
                    self._reporter.error(
                        f"Failed to remove {role} user '{user}' from cluster "
                        f"'{data.cluster_key}': {error_reason(e)}"
                    )
        return failures
