from __future__ import annotations

from datetime import datetime
from enum import Enum, StrEnum
from typing import (
    Any,
    TypedDict,
)

from pydantic import (
    BaseModel,
    Field,
)

CS_API_BASE = "/api/clusters_mgmt/v1"

PRODUCT_ID_ROSA = "rosa"
CLOUD_PROVIDER_AWS = "aws"
CREATOR_ARN_PROPERTY = "rosa_creator_arn"
VERSION_PREFIX = "openshift-v"
DEFAULT_MACHINE_POOL = "Default"


class OCMCollectionLink(BaseModel):
    kind: str | None = None
    href: str | None = None


class OCMModelLink(OCMCollectionLink):
    id: str


class OCMClusterState(Enum):
    ERROR = "error"
    HIBERNATING = "hibernating"
    INSTALLING = "installing"
    PENDING = "pending"
    POWERING_DOWN = "powering_down"
    READY = "ready"
    RESUMING = "resuming"
    UNINSTALLING = "uninstalling"
    UNKNOWN = "unknown"
    VALIDATING = "validating"
    WAITING = "waiting"


class OCMListeningMethod(StrEnum):
    EXTERNAL = "external"
    INTERNAL = "internal"


class OCMClusterVersion(BaseModel):
    id: str
    raw_id: str | None = None
    channel_group: str = "stable"


class OCMClusterConsole(BaseModel):
    url: str = ""


class OCMClusterAPI(BaseModel):
    url: str = ""
    listening: OCMListeningMethod | None = None


class OCMClusterDns(BaseModel):
    base_domain: str = ""


class OCMClusterAutoscaling(BaseModel):
    min_replicas: int = 0
    max_replicas: int = 0


class OCMClusterNodes(BaseModel):
    master: int = 0
    infra: int = 0
    compute: int = 0
    compute_machine_type: OCMModelLink | None = None
    autoscale_compute: OCMClusterAutoscaling | None = None
    availability_zones: list[str] = Field(default_factory=list)


class OCMClusterStatus(BaseModel):
    state: OCMClusterState | None = None
    dns_ready: bool = False
    provision_error_code: str = ""
    provision_error_message: str = ""


class OCMCluster(BaseModel):
    kind: str = "Cluster"
    id: str
    href: str | None = None
    external_id: str = ""
    """
    This is sometimes also called the cluster UUID.
    """

    name: str
    display_name: str = ""

    state: OCMClusterState
    multi_az: bool = False

    region: OCMModelLink | None = None
    product: OCMModelLink | None = None
    identity_providers: OCMCollectionLink = Field(default_factory=OCMCollectionLink)

    version: OCMClusterVersion | None = None
    console: OCMClusterConsole | None = None
    api: OCMClusterAPI | None = None
    dns: OCMClusterDns | None = None
    nodes: OCMClusterNodes = Field(default_factory=OCMClusterNodes)
    status: OCMClusterStatus = Field(default_factory=OCMClusterStatus)

    properties: dict[str, str] = Field(default_factory=dict)
    creation_timestamp: datetime | None = None

    def ready(self) -> bool:
        return self.state == OCMClusterState.READY

    @property
    def console_url(self) -> str:
        return self.console.url if self.console else ""

    @property
    def api_url(self) -> str:
        return self.api.url if self.api else ""

    @property
    def base_domain(self) -> str:
        return self.dns.base_domain if self.dns else ""

    @property
    def region_id(self) -> str:
        return self.region.id if self.region else ""

    @property
    def channel_group(self) -> str:
        return self.version.channel_group if self.version else ""

    @property
    def creator_arn(self) -> str:
        return self.properties.get(CREATOR_ARN_PROPERTY, "")


class OCMIngress(BaseModel):
    kind: str = "Ingress"
    id: str
    default: bool = False
    listening: OCMListeningMethod | None = None
    dns_name: str | None = None


class OCMClusterLog(BaseModel):
    id: str
    content: str = ""


class OCMVersion(BaseModel):
    kind: str = "Version"
    id: str
    raw_id: str | None = None
    enabled: bool = True
    default: bool = False
    channel_group: str = "stable"

    @property
    def short_id(self) -> str:
        return self.id.removeprefix(VERSION_PREFIX)


class OCMRegion(BaseModel):
    kind: str = "CloudRegion"
    id: str
    display_name: str = ""
    enabled: bool = True
    supports_multi_az: bool = False


class OCMMachineTypeQuantity(BaseModel):
    value: float = 0
    unit: str = ""


class OCMMachineType(BaseModel):
    kind: str = "MachineType"
    id: str
    name: str = ""
    category: str = ""
    cpu: OCMMachineTypeQuantity | None = None
    memory: OCMMachineTypeQuantity | None = None


class OCMTaintEffect(StrEnum):
    NO_SCHEDULE = "NoSchedule"
    PREFER_NO_SCHEDULE = "PreferNoSchedule"
    NO_EXECUTE = "NoExecute"


class OCMTaint(BaseModel):
    key: str
    value: str = ""
    effect: OCMTaintEffect

    def __str__(self) -> str:
        return f"{self.key}={self.value}:{self.effect.value}"


class OCMMachinePoolAutoscaling(BaseModel):
    min_replicas: int
    max_replicas: int


class OCMMachinePool(BaseModel):
    kind: str = "MachinePool"
    id: str
    href: str | None = None
    instance_type: str | None = None
    replicas: int | None = None
    autoscaling: OCMMachinePoolAutoscaling | None = None
    labels: dict[str, str] = Field(default_factory=dict)
    taints: list[OCMTaint] = Field(default_factory=list)
    availability_zones: list[str] = Field(default_factory=list)


class OCMClusterGroupId(Enum):
    """
    Cluster groups managable by OCM.
    """

    DEDICATED_ADMINS = "dedicated-admins"
    CLUSTER_ADMINS = "cluster-admins"

    @classmethod
    def values(cls) -> list[str]:
        return [group.value for group in cls]


class OCMClusterUser(BaseModel):
    """
    Represents a cluster user.
    """

    id: str
    """
    The id represents the user name.
    """

    href: str | None = None
    kind: str = "User"


class OCMClusterUserList(BaseModel):
    kind: str = "UserList"
    href: str | None = None
    items: list[OCMClusterUser] = Field(default_factory=list)


class OCMClusterGroup(BaseModel):
    id: OCMClusterGroupId
    href: str | None = None
    users: OCMClusterUserList | None = None

    def user_ids(self) -> set[str]:
        if self.users is None:
            return set()
        return {user.id for user in self.users.items}


class OCMOIdentityProviderMappingMethod(StrEnum):
    ADD = "add"
    CLAIM = "claim"
    LOOKUP = "lookup"
    GENERATE = "generate"


class OCMOIdentityProvider(BaseModel):
    type: str
    name: str
    id: str | None = None
    href: str | None = None
    mapping_method: OCMOIdentityProviderMappingMethod = (
        OCMOIdentityProviderMappingMethod.CLAIM
    )


class OCMOIdentityProviderGithubSettings(BaseModel):
    client_id: str
    client_secret: str | None = None
    hostname: str | None = None
    organizations: list[str] | None = None
    teams: list[str] | None = None


class OCMOIdentityProviderGithub(OCMOIdentityProvider):
    type: str = "GithubIdentityProvider"
    github: OCMOIdentityProviderGithubSettings | None = None


class OCMOIdentityProviderGitlabSettings(BaseModel):
    client_id: str
    client_secret: str | None = None
    url: str


class OCMOIdentityProviderGitlab(OCMOIdentityProvider):
    type: str = "GitlabIdentityProvider"
    gitlab: OCMOIdentityProviderGitlabSettings | None = None


class OCMOIdentityProviderGoogleSettings(BaseModel):
    client_id: str
    client_secret: str | None = None
    hosted_domain: str | None = None


class OCMOIdentityProviderGoogle(OCMOIdentityProvider):
    type: str = "GoogleIdentityProvider"
    google: OCMOIdentityProviderGoogleSettings | None = None


class OCMOIdentityProviderOidcOpenIdClaims(BaseModel):
    email: list[str] = Field(default_factory=lambda: ["email"])
    name: list[str] = Field(default_factory=lambda: ["name"])
    preferred_username: list[str] = Field(
        default_factory=lambda: ["preferred_username"]
    )
    groups: list[str] = Field(default_factory=list)


class OCMOIdentityProviderOidcOpenId(BaseModel):
    client_id: str
    client_secret: str | None = None
    issuer: str
    claims: OCMOIdentityProviderOidcOpenIdClaims = Field(
        default_factory=OCMOIdentityProviderOidcOpenIdClaims
    )


class OCMOIdentityProviderOidc(OCMOIdentityProvider):
    type: str = "OpenIDIdentityProvider"
    open_id: OCMOIdentityProviderOidcOpenId | None = None


class OCMOIdentityProviderHtpasswdSettings(BaseModel):
    username: str | None = None
    password: str | None = None


class OCMOIdentityProviderHtpasswd(OCMOIdentityProvider):
    type: str = "HTPasswdIdentityProvider"
    htpasswd: OCMOIdentityProviderHtpasswdSettings | None = None


IDENTITY_PROVIDER_TYPES: dict[str, type[OCMOIdentityProvider]] = {
    "github": OCMOIdentityProviderGithub,
    "gitlab": OCMOIdentityProviderGitlab,
    "google": OCMOIdentityProviderGoogle,
    "openid": OCMOIdentityProviderOidc,
    "htpasswd": OCMOIdentityProviderHtpasswd,
}


class OCMAddOnParameter(BaseModel):
    id: str
    name: str = ""
    description: str = ""
    value_type: str = "string"
    validation: str = ""
    required: bool = False
    editable: bool = True
    default_value: str = ""


class OCMAddOnParameterList(BaseModel):
    items: list[OCMAddOnParameter] = Field(default_factory=list)


class OCMAddOn(BaseModel):
    kind: str = "AddOn"
    id: str
    name: str = ""
    description: str = ""
    enabled: bool = True
    parameters: OCMAddOnParameterList | None = None

    def parameter_items(self) -> list[OCMAddOnParameter]:
        return self.parameters.items if self.parameters else []


class OCMAddOnParameterValue(BaseModel):
    id: str
    value: str


class OCMAddonInstallation(BaseModel):
    kind: str = "AddOnInstallation"
    id: str
    addon: OCMModelLink
    state: str = ""


class UpgradePolicy(TypedDict):
    id: str | None
    next_run: str | None
    schedule: str | None
    schedule_type: str
    upgrade_type: str | None
    version: str


def build_cluster_url(cluster_id: str) -> str:
    return f"{CS_API_BASE}/clusters/{cluster_id}"


def drop_empty(data: dict[str, Any]) -> dict[str, Any]:
    """Removes keys whose value is None or an empty container."""
    return {k: v for k, v in data.items() if v is not None and v != {} and v != []}


class ValidationError(Exception):
    """A value is not one of those the API accepts."""
