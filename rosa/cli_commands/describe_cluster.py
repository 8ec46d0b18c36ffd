from dataclasses import dataclass
from datetime import (
    UTC,
    datetime,
)

from rosa.utils.aws_helper import (
    InvalidArnError,
    get_account_uid_from_arn,
)
from rosa.utils.ocm.base import (
    OCMCluster,
    OCMClusterState,
    UpgradePolicy,
)

STAGE_ENV = "https://api.stage.openshift.com"
PRODUCTION_ENV = "https://api.openshift.com"
DETAILS_PAGES = {
    STAGE_ENV: "https://qaprodauth.cloud.redhat.com/openshift/details/",
    PRODUCTION_ENV: "https://cloud.redhat.com/openshift/details/",
}

LABEL_WIDTH = 28


class DescribeClusterError(Exception):
    pass


def details_page(ocm_url: str) -> str:
    """Returns the web console details page base for known environments."""
    return DETAILS_PAGES.get(ocm_url.rstrip("/"), "")


def cluster_phase(cluster: OCMCluster) -> str:
    phase = ""
    if cluster.state == OCMClusterState.PENDING:
        phase = "(Preparing account)"
    if cluster.state == OCMClusterState.INSTALLING:
        if not cluster.status.dns_ready:
            phase = "(DNS setup in progress)"
        if cluster.status.provision_error_message:
            error_code = ""
            if cluster.status.provision_error_code:
                error_code = f"{cluster.status.provision_error_code} - "
            phase = f"({error_code}Install is taking longer than expected)"
    return phase


def format_created(timestamp: datetime | None) -> str:
    # e.g. "Jan  2 2006 15:04:05 UTC"
    if timestamp is None:
        return ""
    ts = timestamp.astimezone(UTC)
    return f"{ts:%b} {ts.day:>2} {ts:%Y %H:%M:%S} {ts.tzname()}"


def format_next_run(next_run: datetime) -> str:
    ts = next_run.astimezone(UTC)
    return f"{ts:%Y-%m-%d %H:%M} {ts.tzname()}"


def format_nodes(cluster: OCMCluster) -> str:
    nodes = cluster.nodes
    if nodes.autoscale_compute is not None:
        return (
            f"Master: {nodes.master}, Infra: {nodes.infra}, "
            f"Compute (Autoscaled): {nodes.autoscale_compute.min_replicas}"
            f"-{nodes.autoscale_compute.max_replicas}"
        )
    return f"Master: {nodes.master}, Infra: {nodes.infra}, Compute: {nodes.compute}"


def _line(label: str, value: str) -> str:
    return f"{label + ':':<{LABEL_WIDTH}}{value}".rstrip() + "\n"


@dataclass
class DescribeClusterCommandData:
    cluster: OCMCluster
    ocm_url: str
    private: bool = False
    scheduled_upgrade: tuple[UpgradePolicy, datetime] | None = None


class DescribeClusterCommand:
    """
    Renders the human readable description of a cluster.
    """

    def __init__(self, command_data: DescribeClusterCommandData):
        self._command_data = command_data

    def _account_id(self) -> str:
        cluster = self._command_data.cluster
        try:
            return get_account_uid_from_arn(cluster.creator_arn)
        except InvalidArnError:
            raise DescribeClusterError(
                f"Failed to parse creator ARN for cluster '{cluster.name}'"
            ) from None

    def execute(self) -> str:
        data = self._command_data
        cluster = data.cluster
        account_id = self._account_id()
        state = cluster.state.value
        phase = cluster_phase(cluster)

        text = (
            _line("Name", cluster.display_name or cluster.name)
            + _line("DNS", f"{cluster.name}.{cluster.base_domain}")
            + _line("ID", cluster.id)
            + _line("External ID", cluster.external_id)
            + _line("AWS Account", account_id)
            + _line("API URL", cluster.api_url)
            + _line("Console URL", cluster.console_url)
            + _line("Nodes", format_nodes(cluster))
            + _line("Region", cluster.region_id)
            + _line("State", f"{state} {phase}")
            + _line("Channel Group", cluster.channel_group)
            + _line("Private", "Yes" if data.private else "No")
            + _line("Created", format_created(cluster.creation_timestamp))
        )

        page = details_page(data.ocm_url)
        if page:
            text += _line("Details Page", f"{page}{cluster.id}")
        if data.scheduled_upgrade is not None:
            policy, next_run = data.scheduled_upgrade
            text += _line(
                "Scheduled upgrade", f"{policy['version']} on {format_next_run(next_run)}"
            )
        if cluster.status.state == OCMClusterState.ERROR:
            text += _line("Provisioning Error Code", cluster.status.provision_error_code)
            text += _line(
                "Provisioning Error Message", cluster.status.provision_error_message
            )
        return text
