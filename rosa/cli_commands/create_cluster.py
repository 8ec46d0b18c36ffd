from collections.abc import Callable
from dataclasses import (
    dataclass,
    field,
)
from ipaddress import (
    IPv4Network,
    IPv6Network,
)
from typing import (
    Any,
    TypeVar,
)

from rosa.utils import interactive
from rosa.utils.aws_api import Creator
from rosa.utils.expiration import (
    ExpirationError,
    validate_expiration,
)
from rosa.utils.interactive import Input
from rosa.utils.ocm.base import ValidationError
from rosa.utils.ocm.clusters import (
    ClusterSpec,
    is_valid_cluster_key,
)
from rosa.utils.ocm.machine_types import validate_machine_type
from rosa.utils.ocm.regions import validate_region
from rosa.utils.ocm.versions import validate_version

HELP_NAME = (
    "Name of the cluster. This will be used when generating a sub-domain for "
    "your cluster on openshiftapps.com."
)
HELP_REGION = (
    "AWS region where your worker pool will be located. "
    "(overrides the AWS_REGION environment variable)"
)
HELP_VERSION = (
    'Version of OpenShift that will be used to install the cluster, for example "4.3.10"'
)
HELP_MULTI_AZ = "Deploy to multiple data centers."
HELP_EXPIRATION_TIME = (
    "Specific time when cluster should expire (RFC3339). "
    "Only one of expiration-time / expiration may be used."
)
HELP_EXPIRATION = (
    "Expire cluster after a relative duration like 2h, 8h, 72h. "
    "Only one of expiration-time / expiration may be used."
)
HELP_COMPUTE_MACHINE_TYPE = (
    "Instance type for the compute nodes. Determines the amount of memory and "
    "vCPU allocated to each compute node."
)
HELP_COMPUTE_NODES = (
    "Number of worker nodes to provision per zone. Single zone clusters need at "
    "least 4 nodes, while multizone clusters need at least 9 nodes (3 per zone) "
    "for resiliency."
)
HELP_MACHINE_CIDR = (
    "Block of IP addresses used by OpenShift while installing the cluster, "
    'for example "10.0.0.0/16".'
)
HELP_SERVICE_CIDR = 'Block of IP addresses for services, for example "172.30.0.0/16".'
HELP_POD_CIDR = (
    "Block of IP addresses from which Pod IP addresses are allocated, "
    'for example "10.128.0.0/14".'
)
HELP_HOST_PREFIX = (
    "Subnet prefix length to assign to each individual node. For example, if "
    'host prefix is set to "23", then each node is assigned a /23 subnet out of '
    "the given CIDR."
)
HELP_PRIVATE = (
    "Restrict master API endpoint and application routes to direct, "
    "private connectivity."
)

IPNetwork = IPv4Network | IPv6Network

T = TypeVar("T")


class CreateClusterError(Exception):
    pass


@dataclass
class CreateClusterCommandData:
    name: str = ""
    region: str = ""
    version: str = ""
    multi_az: bool = False
    compute_machine_type: str = ""
    compute_nodes: int = 0
    machine_cidr: IPNetwork | None = None
    service_cidr: IPNetwork | None = None
    pod_cidr: IPNetwork | None = None
    host_prefix: int = 0
    private: bool = False
    expiration_time: str = ""
    expiration: str = ""
    interactive: bool = False
    regions: list[str] = field(default_factory=list)
    versions: list[str] = field(default_factory=list)
    machine_types: list[str] = field(default_factory=list)


class CreateClusterCommand:
    """
    Collects the cluster settings from the flags, asking for each of them
    in interactive mode with the flag value as default, and validates them
    against the values the API accepts.
    """

    def __init__(self, command_data: CreateClusterCommandData):
        self._command_data = command_data

    def _ask(self, getter: Callable[[Input], T], error: str, **kwargs: Any) -> T:
        try:
            return getter(Input(**kwargs))
        except interactive.InteractiveInputError as e:
            raise CreateClusterError(f"{error}: {e}") from None

    def _name(self) -> str:
        name = self._command_data.name
        if self._command_data.interactive:
            name = self._ask(
                interactive.get_string,
                "Expected a valid cluster name",
                question="Cluster name",
                help=HELP_NAME,
                default=name,
                required=True,
            )
        if not is_valid_cluster_key(name):
            raise CreateClusterError("Expected a valid cluster name")
        return name

    def _region(self) -> str:
        data = self._command_data
        region = data.region
        if data.interactive:
            region = self._ask(
                interactive.get_option,
                "Expected a valid AWS region",
                question="AWS region",
                help=HELP_REGION,
                options=data.regions,
                default=region,
                required=True,
            )
        if not region:
            raise CreateClusterError("Expected a valid AWS region")
        try:
            return validate_region(region, data.regions)
        except ValidationError as e:
            raise CreateClusterError(f"Expected a valid AWS region: {e}") from None

    def _version(self) -> str:
        data = self._command_data
        version = data.version
        if data.interactive:
            version = self._ask(
                interactive.get_option,
                "Expected a valid OpenShift version",
                question="OpenShift version",
                help=HELP_VERSION,
                options=data.versions,
                default=version,
            )
        try:
            return validate_version(version, data.versions)
        except ValidationError as e:
            raise CreateClusterError(f"Expected a valid OpenShift version: {e}") from None

    def _machine_type(self) -> str:
        data = self._command_data
        machine_type = data.compute_machine_type
        if data.interactive:
            machine_type = self._ask(
                interactive.get_option,
                "Expected a valid machine type",
                question="Compute nodes instance type",
                help=HELP_COMPUTE_MACHINE_TYPE,
                options=data.machine_types,
                default=machine_type,
            )
        try:
            return validate_machine_type(machine_type, data.machine_types)
        except ValidationError as e:
            raise CreateClusterError(f"Expected a valid machine type: {e}") from None

    def execute(self, creator: Creator) -> ClusterSpec:
        data = self._command_data
        name = self._name()
        region = self._region()
        version = self._version()

        multi_az = data.multi_az
        if data.interactive:
            multi_az = self._ask(
                interactive.get_bool,
                "Expected a valid multi-AZ value",
                question="Multiple availability zones",
                help=HELP_MULTI_AZ,
                default=multi_az,
            )

        machine_type = self._machine_type()

        compute_nodes = data.compute_nodes
        if data.interactive:
            compute_nodes = self._ask(
                interactive.get_int,
                "Expected a valid number of compute nodes",
                question="Compute nodes",
                help=HELP_COMPUTE_NODES,
                default=compute_nodes or None,
            )

        try:
            expiration = validate_expiration(data.expiration_time, data.expiration)
        except ExpirationError as e:
            raise CreateClusterError(str(e)) from None

        cidrs: dict[str, IPNetwork | None] = {}
        for attr, question, help in (
            ("machine_cidr", "Machine CIDR", HELP_MACHINE_CIDR),
            ("service_cidr", "Service CIDR", HELP_SERVICE_CIDR),
            ("pod_cidr", "Pod CIDR", HELP_POD_CIDR),
        ):
            cidrs[attr] = getattr(data, attr)
            if data.interactive:
                cidrs[attr] = self._ask(
                    interactive.get_ipnet,
                    "Expected a valid CIDR value",
                    question=question,
                    help=help,
                    default=cidrs[attr],
                )

        host_prefix = data.host_prefix
        if data.interactive:
            host_prefix = self._ask(
                interactive.get_int,
                "Expected a valid host prefix value",
                question="Host prefix",
                help=HELP_HOST_PREFIX,
                default=host_prefix or None,
            )

        private = data.private
        if data.interactive:
            private = self._ask(
                interactive.get_bool,
                "Expected a valid private value",
                question="Private cluster",
                help=HELP_PRIVATE,
                default=private,
            )

        return ClusterSpec(
            name=name,
            region=region,
            creator_arn=creator.arn,
            account_id=creator.account_id,
            multi_az=multi_az,
            version=version,
            expiration=expiration,
            compute_machine_type=machine_type,
            compute_nodes=compute_nodes,
            machine_cidr=cidrs["machine_cidr"],
            service_cidr=cidrs["service_cidr"],
            pod_cidr=cidrs["pod_cidr"],
            host_prefix=host_prefix,
            private=private,
        )
