import time
from collections.abc import Callable
from dataclasses import dataclass

import requests

from rosa.utils.ocm.base import (
    OCMCluster,
    OCMClusterState,
)
from rosa.utils.ocm.clusters import get_install_logs
from rosa.utils.ocm_base_client import OCMBaseClient

# cluster states during which the installation can still produce logs
INSTALLING_STATES = {
    OCMClusterState.PENDING,
    OCMClusterState.VALIDATING,
    OCMClusterState.WAITING,
    OCMClusterState.INSTALLING,
}


def is_not_found(e: requests.HTTPError) -> bool:
    return e.response is not None and e.response.status_code == requests.codes.not_found


@dataclass
class InstallLogsCommandData:
    cluster: OCMCluster
    watch: bool = False
    poll_interval: float = 5.0


class InstallLogsCommand:
    """
    Prints the installation log of a cluster. In watch mode the log is
    polled and only the new lines are printed until the cluster has left
    the installing states. A log that does not exist yet counts as empty
    while watching; otherwise the HTTPError is raised to the caller.
    """

    def __init__(
        self,
        ocm_api: OCMBaseClient,
        command_data: InstallLogsCommandData,
        reload_cluster: Callable[[], OCMCluster],
        sleep: Callable[[float], None] = time.sleep,
    ):
        self._ocm_api = ocm_api
        self._command_data = command_data
        self._reload_cluster = reload_cluster
        self._sleep = sleep

    def _print_new_lines(self, offset: int) -> int:
        try:
            log = get_install_logs(
                self._ocm_api, self._command_data.cluster.id, offset=offset
            )
        except requests.HTTPError as e:
            if self._command_data.watch and is_not_found(e):
                return offset
            raise
        lines = log.content.splitlines()
        for line in lines:
            print(line)
        return offset + len(lines)

    def execute(self) -> OCMCluster:
        data = self._command_data
        cluster = data.cluster
        offset = self._print_new_lines(0)
        # fetch after every reload so lines written before the last state change are shown
        while data.watch and cluster.state in INSTALLING_STATES:
            self._sleep(data.poll_interval)
            cluster = self._reload_cluster()
            offset = self._print_new_lines(offset)
        return cluster
