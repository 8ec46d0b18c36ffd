import ipaddress
from collections.abc import Callable
from typing import Any

import click
import jwt
import requests

from rosa import __version__
from rosa.cli_commands.common import (
    error_reason,
    init_creator,
    init_ocm_api,
    load_cluster,
    require_cluster_key,
)
from rosa.cli_commands.create_cluster import (
    HELP_COMPUTE_MACHINE_TYPE,
    HELP_COMPUTE_NODES,
    HELP_EXPIRATION,
    HELP_EXPIRATION_TIME,
    HELP_HOST_PREFIX,
    HELP_MACHINE_CIDR,
    HELP_MULTI_AZ,
    HELP_NAME,
    HELP_POD_CIDR,
    HELP_PRIVATE,
    HELP_REGION,
    HELP_SERVICE_CIDR,
    HELP_VERSION,
    CreateClusterCommand,
    CreateClusterCommandData,
    CreateClusterError,
)
from rosa.cli_commands.create_idp import (
    CreateIdpCommand,
    CreateIdpCommandData,
    CreateIdpError,
)
from rosa.cli_commands.describe_cluster import (
    DescribeClusterCommand,
    DescribeClusterCommandData,
    DescribeClusterError,
)
from rosa.cli_commands.install_addon import (
    AddonParameterError,
    InstallAddonCommand,
    InstallAddonCommandData,
)
from rosa.cli_commands.logs import (
    InstallLogsCommand,
    InstallLogsCommandData,
    is_not_found,
)
from rosa.cli_commands.machine_pools import (
    MachinePoolCommand,
    MachinePoolCommandData,
    MachinePoolError,
)
from rosa.cli_commands.users import (
    UsersCommand,
    UsersCommandData,
    UsersError,
)
from rosa.utils import (
    config,
    interactive,
)
from rosa.utils.aws_api import (
    Creator,
    get_region,
)
from rosa.utils.config import OCMConfig
from rosa.utils.environment import init_env
from rosa.utils.interactive import (
    Input,
    InteractiveInputError,
)
from rosa.utils.ocm.addons import (
    get_addon,
    get_addon_parameters,
    get_addons,
    get_cluster_addons,
    install_addon,
    uninstall_addon,
)
from rosa.utils.ocm.base import (
    DEFAULT_MACHINE_POOL,
    OCMCluster,
    OCMMachinePool,
    OCMMachinePoolAutoscaling,
)
from rosa.utils.ocm.cluster_groups import get_user_groups
from rosa.utils.ocm.clusters import (
    create_cluster,
    delete_cluster,
    get_clusters,
    get_ingresses,
    is_private,
    update_cluster_nodes,
)
from rosa.utils.ocm.identity_providers import (
    IdentityProviderNotFoundError,
    add_identity_provider,
    delete_identity_provider,
    get_identity_provider_by_name,
    get_identity_providers,
)
from rosa.utils.ocm.machine_pools import (
    create_machine_pool,
    delete_machine_pool,
    get_machine_pools,
    update_machine_pool,
)
from rosa.utils.ocm.machine_types import (
    get_machine_type_ids,
    get_machine_types,
)
from rosa.utils.ocm.regions import (
    get_region_ids,
    get_regions,
)
from rosa.utils.ocm.upgrades import get_scheduled_upgrade
from rosa.utils.ocm.versions import (
    get_version_ids,
    get_versions,
)
from rosa.utils.ocm_base_client import (
    ConnectionBuildError,
    OCMBaseClient,
    init_ocm_base_client,
    token_claims,
)
from rosa.utils.output import (
    OUTPUT_FORMATS,
    format_table,
    print_output,
)
from rosa.utils.reporter import Reporter

TOKEN_PAGE = "https://cloud.redhat.com/openshift/token/rosa"
REFRESH_TOKEN_TYPES = {"Refresh", "Offline"}


class IPNetworkParamType(click.ParamType):
    name = "cidr"

    def convert(
        self, value: Any, param: click.Parameter | None, ctx: click.Context | None
    ) -> ipaddress.IPv4Network | ipaddress.IPv6Network:
        if isinstance(value, ipaddress.IPv4Network | ipaddress.IPv6Network):
            return value
        try:
            return ipaddress.ip_network(value, strict=False)
        except ValueError as e:
            self.fail(f"'{value}' is not a valid CIDR: {e}", param, ctx)


IP_NETWORK = IPNetworkParamType()


def cluster_option(required: bool = True) -> Callable:
    def decorator(function: Callable) -> Callable:
        return click.option(
            "--cluster",
            "-c",
            "cluster_key",
            required=required,
            default=None if required else "",
            help="Name or ID of the cluster.",
        )(function)

    return decorator


def yes(function: Callable) -> Callable:
    function = click.option(
        "--yes",
        "-y",
        "yes",
        is_flag=True,
        default=False,
        help="Automatically answer yes to confirm operation.",
    )(function)
    return function


def output(function: Callable) -> Callable:
    function = click.option(
        "--output",
        "-o",
        help="output type",
        default="table",
        type=click.Choice(OUTPUT_FORMATS),
    )(function)
    return function


def get_reporter(ctx: click.Context) -> Reporter:
    return ctx.obj["reporter"]


@click.group()
@click.option("--debug", is_flag=True, default=False, help="Enable debug mode.")
@click.version_option(version=__version__, prog_name="rosa")
@click.pass_context
def root(ctx: click.Context, debug: bool) -> None:
    """Command line tool for Red Hat OpenShift Service on AWS."""
    ctx.ensure_object(dict)
    init_env(log_level="DEBUG" if debug else None)
    ctx.obj["reporter"] = Reporter(debug=debug)


#
# LOGIN
#


@root.command()
@click.option(
    "--token",
    "-t",
    default="",
    help=f"Access or refresh token. Get one at {TOKEN_PAGE}",
)
@click.option(
    "--env",
    default="production",
    help="Environment of the API gateway: production, staging, integration or a URL.",
)
@click.option("--token-url", default=config.DEFAULT_TOKEN_URL, help="OpenID token URL.")
@click.option("--client-id", default=config.DEFAULT_CLIENT_ID, help="OpenID client id.")
@click.option("--client-secret", default="", help="OpenID client secret.")
@click.option(
    "--scope", "scopes", multiple=True, help="OpenID scope, can be repeated."
)
@click.option(
    "--insecure",
    is_flag=True,
    default=False,
    help="Enables insecure communication with the server.",
)
@click.pass_context
def login(
    ctx: click.Context,
    token: str,
    env: str,
    token_url: str,
    client_id: str,
    client_secret: str,
    scopes: tuple[str, ...],
    insecure: bool,
) -> None:
    """Log in to your Red Hat account."""
    reporter = get_reporter(ctx)
    if not token and not client_secret:
        reporter.info(
            f"To login to your Red Hat account, get an offline access token at {TOKEN_PAGE}"
        )
        try:
            token = interactive.get_string(
                Input(question="Copy the token and paste it here", required=True)
            )
        except InteractiveInputError as e:
            reporter.exit_error(f"Failed to get token: {e}")

    cfg = OCMConfig(
        url=config.resolve_url(env),
        token_url=token_url,
        client_id=client_id,
        client_secret=client_secret or None,
        scopes=list(scopes) or list(config.DEFAULT_SCOPES),
        insecure=insecure,
    )
    if token:
        try:
            token_type = token_claims(token).get("typ", "Bearer")
        except jwt.PyJWTError as e:
            reporter.exit_error(f"Failed to parse token: {e}")
        if token_type in REFRESH_TOKEN_TYPES:
            cfg.refresh_token = token
        else:
            cfg.access_token = token

    try:
        with init_ocm_base_client(cfg=cfg) as ocm_api:
            cfg.access_token, cfg.refresh_token = ocm_api.tokens
    except ConnectionBuildError as e:
        reporter.exit_error(f"Failed to create OCM connection: {e}")

    try:
        config.save(cfg)
    except OSError as e:
        reporter.exit_error(f"Failed to save config file: {e}")

    username = ""
    if cfg.access_token:
        username = token_claims(cfg.access_token).get("username", "")
    reporter.info(f"Logged in as '{username}' on '{cfg.url}'")


@root.command()
@click.pass_context
def logout(ctx: click.Context) -> None:
    """Log out, removing the stored configuration."""
    reporter = get_reporter(ctx)
    try:
        config.remove()
    except OSError as e:
        reporter.exit_error(f"Failed to remove config file: {e}")


@root.command()
@click.pass_context
def whoami(ctx: click.Context) -> None:
    """Display user account information."""
    reporter = get_reporter(ctx)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        access_token, _ = ocm_api.tokens
        claims = token_claims(access_token) if access_token else {}

    print(f"{'AWS Account ID:':<24}{creator.account_id}")
    print(f"{'AWS Default Region:':<24}{get_region()}")
    print(f"{'AWS ARN:':<24}{creator.arn}")
    print(f"{'OCM API:':<24}{ocm_api.url}")
    print(f"{'OCM Account Username:':<24}{claims.get('username', '')}")
    print(f"{'OCM Account Email:':<24}{claims.get('email', '')}")


#
# CREATE
#


@root.group()
def create() -> None:
    """Create a resource from stdin."""


@create.command(name="cluster")
@click.option("--name", "-n", default="", help=HELP_NAME)
@click.option("--region", "-r", default="", help=HELP_REGION)
@click.option("--version", "version", default="", help=HELP_VERSION)
@click.option("--multi-az", is_flag=True, default=False, help=HELP_MULTI_AZ)
@click.option("--expiration-time", default="", hidden=True, help=HELP_EXPIRATION_TIME)
@click.option("--expiration", default="", hidden=True, help=HELP_EXPIRATION)
@click.option(
    "--compute-machine-type", default="", help=HELP_COMPUTE_MACHINE_TYPE
)
@click.option("--compute-nodes", default=0, type=int, help=HELP_COMPUTE_NODES)
@click.option("--machine-cidr", type=IP_NETWORK, default=None, help=HELP_MACHINE_CIDR)
@click.option("--service-cidr", type=IP_NETWORK, default=None, help=HELP_SERVICE_CIDR)
@click.option("--pod-cidr", type=IP_NETWORK, default=None, help=HELP_POD_CIDR)
@click.option("--host-prefix", default=0, type=int, help=HELP_HOST_PREFIX)
@click.option("--private", is_flag=True, default=False, help=HELP_PRIVATE)
@click.option(
    "--interactive",
    "-i",
    "interactive_mode",
    is_flag=True,
    default=False,
    help="Enable interactive mode.",
)
@click.option("--watch", is_flag=True, default=False, help="Watch cluster installation logs.")
@click.pass_context
def create_cluster_cmd(
    ctx: click.Context,
    name: str,
    region: str,
    version: str,
    multi_az: bool,
    expiration_time: str,
    expiration: str,
    compute_machine_type: str,
    compute_nodes: int,
    machine_cidr: ipaddress.IPv4Network | ipaddress.IPv6Network | None,
    service_cidr: ipaddress.IPv4Network | ipaddress.IPv6Network | None,
    pod_cidr: ipaddress.IPv4Network | ipaddress.IPv6Network | None,
    host_prefix: int,
    private: bool,
    interactive_mode: bool,
    watch: bool,
) -> None:
    """Create cluster."""
    reporter = get_reporter(ctx)
    creator = init_creator(reporter, region=region or None)

    with init_ocm_api(reporter) as ocm_api:
        if interactive_mode:
            reporter.info(
                "Interactive mode enabled.\n"
                "Any optional fields can be left empty and a default will be selected."
            )
        try:
            regions = get_region_ids(ocm_api)
        except requests.RequestException as e:
            reporter.exit_error(f"Failed to retrieve AWS regions: {error_reason(e)}")
        try:
            versions = get_version_ids(ocm_api)
        except requests.RequestException as e:
            reporter.exit_error(f"Failed to retrieve versions: {error_reason(e)}")
        try:
            machine_types = get_machine_type_ids(ocm_api)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to retrieve machine types: {error_reason(e)}"
            )

        command_data = CreateClusterCommandData(
            name=name,
            region=get_region(region),
            version=version,
            multi_az=multi_az,
            compute_machine_type=compute_machine_type,
            compute_nodes=compute_nodes,
            machine_cidr=machine_cidr,
            service_cidr=service_cidr,
            pod_cidr=pod_cidr,
            host_prefix=host_prefix,
            private=private,
            expiration_time=expiration_time,
            expiration=expiration,
            interactive=interactive_mode,
            regions=regions,
            versions=versions,
            machine_types=machine_types,
        )
        try:
            spec = CreateClusterCommand(command_data).execute(creator)
        except CreateClusterError as e:
            reporter.exit_error(str(e))

        try:
            cluster = create_cluster(ocm_api, spec)
        except requests.RequestException as e:
            reporter.exit_error(f"Failed to create cluster: {error_reason(e)}")

        reporter.info(f"Cluster '{cluster.name}' has been created.")
        reporter.info(
            "Once the cluster is installed you will need to add an Identity Provider "
            "before you can login into the cluster. See 'rosa create idp --help' "
            "for more information."
        )
        if watch:
            _print_install_logs(
                reporter, ocm_api, cluster, cluster.name, creator=creator, watch=True
            )
        else:
            reporter.info(
                "To determine when your cluster is Ready, run "
                f"'rosa describe cluster -c {cluster.name}'."
            )
            reporter.info(
                "To watch your cluster installation logs, run "
                f"'rosa logs install -c {cluster.name} --watch'."
            )


@create.command(name="idp")
@cluster_option()
@click.option(
    "--type",
    "-t",
    "idp_type",
    default="",
    help="Type of identity provider: github, gitlab, google, openid, htpasswd.",
)
@click.option("--name", default="", help="Name for the identity provider.")
@click.option(
    "--mapping-method",
    default="claim",
    help="Specifies how new identities are mapped to users when they log in.",
)
@click.option("--client-id", default="", help="Client ID from the registered application.")
@click.option(
    "--client-secret", default="", help="Client Secret from the registered application."
)
@click.option("--organizations", default="", help="GitHub: organizations allowed to log in.")
@click.option("--teams", default="", help="GitHub: teams allowed to log in, as org/team.")
@click.option("--hostname", default="", help="GitHub: hosted instance hostname.")
@click.option("--host-url", default="", help="GitLab: URL of the GitLab instance.")
@click.option("--hosted-domain", default="", help="Google: restrict users to this domain.")
@click.option("--issuer-url", default="", help="OpenID: issuer identifier URL.")
@click.option("--email-claims", default="", help="OpenID: claims used as email address.")
@click.option("--name-claims", default="", help="OpenID: claims used as display name.")
@click.option(
    "--username-claims", default="", help="OpenID: claims used as preferred username."
)
@click.option("--groups-claims", default="", help="OpenID: claims used as groups.")
@click.option("--username", default="", help="HTPasswd: username.")
@click.option("--password", default="", help="HTPasswd: password.")
@click.pass_context
def create_idp(
    ctx: click.Context,
    cluster_key: str,
    idp_type: str,
    name: str,
    mapping_method: str,
    client_id: str,
    client_secret: str,
    organizations: str,
    teams: str,
    hostname: str,
    host_url: str,
    hosted_domain: str,
    issuer_url: str,
    email_claims: str,
    name_claims: str,
    username_claims: str,
    groups_claims: str,
    username: str,
    password: str,
) -> None:
    """Add an identity provider to a cluster."""
    reporter = get_reporter(ctx)
    cluster_key = require_cluster_key(reporter, cluster_key)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
        try:
            existing = list(get_identity_providers(ocm_api, cluster))
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to get identity providers for cluster '{cluster_key}': "
                f"{error_reason(e)}"
            )
        command_data = CreateIdpCommandData(
            idp_type=idp_type,
            name=name,
            mapping_method=mapping_method,
            client_id=client_id,
            client_secret=client_secret,
            organizations=organizations,
            teams=teams,
            hostname=hostname,
            host_url=host_url,
            hosted_domain=hosted_domain,
            issuer_url=issuer_url,
            email_claims=email_claims,
            name_claims=name_claims,
            username_claims=username_claims,
            groups_claims=groups_claims,
            username=username,
            password=password,
            existing=existing,
        )
        try:
            idp = CreateIdpCommand(command_data).execute()
        except CreateIdpError as e:
            reporter.exit_error(str(e))

        reporter.debug(f"Creating identity provider '{idp.name}' on cluster '{cluster_key}'")
        try:
            add_identity_provider(ocm_api, cluster, idp)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to add identity provider to cluster '{cluster_key}': "
                f"{error_reason(e)}"
            )
        reporter.info(
            f"Identity Provider '{idp.name}' has been created. It will take up to "
            "1 minute for this configuration to be enabled. To add cluster "
            "administrators, see 'rosa create user --help'."
        )


@create.command(name="user")
@cluster_option()
@click.option(
    "--cluster-admins", default="", help="Grant cluster-admin permission to these users."
)
@click.option(
    "--dedicated-admins",
    default="",
    help="Grant dedicated-admin permission to these users.",
)
@click.pass_context
def create_user(
    ctx: click.Context, cluster_key: str, cluster_admins: str, dedicated_admins: str
) -> None:
    """Configure user access for cluster."""
    reporter = get_reporter(ctx)
    cluster_key = require_cluster_key(reporter, cluster_key)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(
            reporter, ocm_api, cluster_key, creator, require_ready=True
        )
        command = UsersCommand(
            ocm_api,
            reporter,
            UsersCommandData(
                cluster_key=cluster_key,
                cluster_id=cluster.id,
                cluster_admins=cluster_admins,
                dedicated_admins=dedicated_admins,
            ),
        )
        try:
            command.add()
        except UsersError as e:
            reporter.exit_error(str(e))


@create.command(name="machinepool")
@cluster_option()
@click.option("--name", required=True, help="Name for the machine pool.")
@click.option("--replicas", type=int, default=None, help="Count of machines for this machine pool.")
@click.option(
    "--enable-autoscaling",
    is_flag=True,
    default=None,
    help="Enable autoscaling for the machine pool.",
)
@click.option("--min-replicas", type=int, default=None, help="Minimum number of machines.")
@click.option("--max-replicas", type=int, default=None, help="Maximum number of machines.")
@click.option("--instance-type", default="", help="Instance type for the machine pool.")
@click.option("--labels", default=None, help="Labels in the format key=value,key2=value2.")
@click.option(
    "--taints", default=None, help="Taints in the format key=value:Effect,key2=value2:Effect."
)
@click.pass_context
def create_machinepool(
    ctx: click.Context,
    cluster_key: str,
    name: str,
    replicas: int | None,
    enable_autoscaling: bool | None,
    min_replicas: int | None,
    max_replicas: int | None,
    instance_type: str,
    labels: str | None,
    taints: str | None,
) -> None:
    """Add a machine pool to the cluster."""
    reporter = get_reporter(ctx)
    cluster_key = require_cluster_key(reporter, cluster_key)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
        try:
            machine_types = get_machine_type_ids(ocm_api)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to retrieve machine types: {error_reason(e)}"
            )
        command = MachinePoolCommand(
            MachinePoolCommandData(
                machine_pool_id=name,
                replicas=replicas,
                enable_autoscaling=enable_autoscaling,
                min_replicas=min_replicas,
                max_replicas=max_replicas,
                instance_type=instance_type,
                labels=labels,
                taints=taints,
            )
        )
        try:
            machine_pool = command.build_machine_pool(machine_types)
        except MachinePoolError as e:
            reporter.exit_error(str(e))
        try:
            create_machine_pool(ocm_api, cluster.id, machine_pool)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to add machine pool to cluster '{cluster_key}': "
                f"{error_reason(e)}"
            )
        reporter.info(
            f"Machine pool '{name}' created successfully on cluster '{cluster_key}'"
        )


#
# DELETE
#


@root.group(name="delete")
def delete() -> None:
    """Delete a specific resource."""


@delete.command(name="cluster")
@cluster_option()
@yes
@click.pass_context
def delete_cluster_cmd(ctx: click.Context, cluster_key: str, yes: bool) -> None:
    """Delete cluster."""
    reporter = get_reporter(ctx)
    cluster_key = require_cluster_key(reporter, cluster_key)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
        if not interactive.confirm(f"delete cluster {cluster_key}", yes=yes):
            return
        reporter.debug(f"Deleting cluster '{cluster_key}'")
        try:
            delete_cluster(ocm_api, cluster.id)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to delete cluster '{cluster_key}': {error_reason(e)}"
            )
        reporter.info(f"Cluster '{cluster_key}' will start uninstalling now")


@delete.command(name="idp")
@cluster_option()
@yes
@click.argument("names", nargs=-1)
@click.pass_context
def delete_idp(
    ctx: click.Context, cluster_key: str, yes: bool, names: tuple[str, ...]
) -> None:
    """Delete cluster IDPs."""
    reporter = get_reporter(ctx)
    if len(names) != 1:
        reporter.exit_error(
            "Expected exactly one command line parameter containing the name "
            "of the identity provider"
        )
    idp_name = names[0]
    cluster_key = require_cluster_key(reporter, cluster_key)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
        reporter.debug(f"Loading identity provider '{idp_name}'")
        try:
            idp = get_identity_provider_by_name(ocm_api, cluster, idp_name)
        except IdentityProviderNotFoundError:
            reporter.exit_error(
                f"Failed to get identity provider '{idp_name}' for cluster "
                f"'{cluster_key}'"
            )
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to get identity providers for cluster '{cluster_key}': "
                f"{error_reason(e)}"
            )
        if not interactive.confirm(
            f"delete identity provider {idp_name} on cluster {cluster_key}", yes=yes
        ):
            return
        reporter.debug(
            f"Deleting identity provider '{idp_name}' on cluster '{cluster_key}'"
        )
        try:
            delete_identity_provider(ocm_api, cluster, idp)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to delete identity provider '{idp_name}' on cluster "
                f"'{cluster_key}': {error_reason(e)}"
            )
        reporter.info(
            f"Successfully deleted identity provider '{idp_name}' from cluster "
            f"'{cluster_key}'"
        )


@delete.command(name="user")
@cluster_option()
@click.option(
    "--cluster-admins", default="", help="Revoke cluster-admin permission from these users."
)
@click.option(
    "--dedicated-admins",
    default="",
    help="Revoke dedicated-admin permission from these users.",
)
@yes
@click.pass_context
def delete_user(
    ctx: click.Context,
    cluster_key: str,
    cluster_admins: str,
    dedicated_admins: str,
    yes: bool,
) -> None:
    """Remove user access from cluster."""
    reporter = get_reporter(ctx)
    cluster_key = require_cluster_key(reporter, cluster_key)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
        if not interactive.confirm(
            f"remove users from cluster {cluster_key}", yes=yes
        ):
            return
        command = UsersCommand(
            ocm_api,
            reporter,
            UsersCommandData(
                cluster_key=cluster_key,
                cluster_id=cluster.id,
                cluster_admins=cluster_admins,
                dedicated_admins=dedicated_admins,
            ),
        )
        try:
            command.remove()
        except UsersError as e:
            reporter.exit_error(str(e))


@delete.command(name="machinepool")
@cluster_option()
@yes
@click.argument("machine_pool_id")
@click.pass_context
def delete_machinepool(
    ctx: click.Context, cluster_key: str, yes: bool, machine_pool_id: str
) -> None:
    """Delete a machine pool."""
    reporter = get_reporter(ctx)
    cluster_key = require_cluster_key(reporter, cluster_key)
    if machine_pool_id == DEFAULT_MACHINE_POOL:
        reporter.exit_error(
            f"Machine pool '{DEFAULT_MACHINE_POOL}' cannot be deleted from cluster "
            f"'{cluster_key}'"
        )
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
        if not interactive.confirm(
            f"delete machine pool {machine_pool_id} on cluster {cluster_key}", yes=yes
        ):
            return
        try:
            delete_machine_pool(ocm_api, cluster.id, machine_pool_id)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to delete machine pool '{machine_pool_id}' on cluster "
                f"'{cluster_key}': {error_reason(e)}"
            )
        reporter.info(
            f"Successfully deleted machine pool '{machine_pool_id}' from cluster "
            f"'{cluster_key}'"
        )


#
# EDIT
#


@root.group()
def edit() -> None:
    """Edit a specific resource."""


@edit.command(name="machinepool")
@cluster_option()
@click.argument("machine_pool_id")
@click.option("--replicas", type=int, default=None, help="Count of machines for this machine pool.")
@click.option(
    "--enable-autoscaling/--disable-autoscaling",
    default=None,
    help="Enable or disable autoscaling for the machine pool.",
)
@click.option("--min-replicas", type=int, default=None, help="Minimum number of machines.")
@click.option("--max-replicas", type=int, default=None, help="Maximum number of machines.")
@click.option("--labels", default=None, help="Labels in the format key=value,key2=value2.")
@click.option(
    "--taints", default=None, help="Taints in the format key=value:Effect,key2=value2:Effect."
)
@click.pass_context
def edit_machinepool(
    ctx: click.Context,
    cluster_key: str,
    machine_pool_id: str,
    replicas: int | None,
    enable_autoscaling: bool | None,
    min_replicas: int | None,
    max_replicas: int | None,
    labels: str | None,
    taints: str | None,
) -> None:
    """Edit the replicas, autoscaling or labels of a machine pool."""
    reporter = get_reporter(ctx)
    cluster_key = require_cluster_key(reporter, cluster_key)
    command = MachinePoolCommand(
        MachinePoolCommandData(
            machine_pool_id=machine_pool_id,
            replicas=replicas,
            enable_autoscaling=enable_autoscaling,
            min_replicas=min_replicas,
            max_replicas=max_replicas,
            labels=labels,
            taints=taints,
        )
    )
    try:
        update = command.build_update()
    except MachinePoolError as e:
        reporter.exit_error(str(e))
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
        reporter.debug(
            f"Updating machine pool '{machine_pool_id}' on cluster '{cluster_key}'"
        )
        try:
            if command.is_default:
                update_cluster_nodes(ocm_api, cluster.id, update)
            else:
                update_machine_pool(ocm_api, cluster.id, machine_pool_id, update)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to update machine pool '{machine_pool_id}' on cluster "
                f"'{cluster_key}': {error_reason(e)}"
            )
        reporter.info(
            f"Updated machine pool '{machine_pool_id}' on cluster '{cluster_key}'"
        )


#
# DESCRIBE
#


@root.group()
def describe() -> None:
    """Show details of a specific resource."""


@describe.command(name="cluster")
@click.argument("cluster_arg", required=False, default=None)
@cluster_option(required=False)
@click.pass_context
def describe_cluster(
    ctx: click.Context, cluster_arg: str | None, cluster_key: str
) -> None:
    """Show details of a cluster."""
    reporter = get_reporter(ctx)
    if not cluster_key:
        if not cluster_arg:
            reporter.exit_error(
                "Expected exactly one command line argument or flag containing the "
                "name or identifier of the cluster"
            )
        cluster_key = cluster_arg
    cluster_key = require_cluster_key(reporter, cluster_key)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
        try:
            private = is_private(get_ingresses(ocm_api, cluster.id))
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to get ingresses for cluster '{cluster_key}': "
                f"{error_reason(e)}"
            )
        try:
            scheduled_upgrade = get_scheduled_upgrade(ocm_api, cluster.id)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to get scheduled upgrades for cluster '{cluster_key}': "
                f"{error_reason(e)}"
            )
        command = DescribeClusterCommand(
            DescribeClusterCommandData(
                cluster=cluster,
                ocm_url=ocm_api.url,
                private=private,
                scheduled_upgrade=scheduled_upgrade,
            )
        )
        try:
            text = command.execute()
        except DescribeClusterError as e:
            reporter.exit_error(str(e))
    print(text)


@describe.command(name="addon")
@click.argument("addon_id")
@click.pass_context
def describe_addon(ctx: click.Context, addon_id: str) -> None:
    """Show details of an add-on."""
    reporter = get_reporter(ctx)
    with init_ocm_api(reporter) as ocm_api:
        try:
            addon = get_addon(ocm_api, addon_id)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to get add-on '{addon_id}': {error_reason(e)}"
            )
    print(f"{'ID:':<14}{addon.id}")
    print(f"{'Name:':<14}{addon.name}")
    print(f"{'Description:':<14}{addon.description}")
    parameters = addon.parameter_items()
    if parameters:
        print()
        print(
            format_table(
                [p.model_dump() for p in parameters],
                ["id", "value_type", "required", "default_value", "description"],
            )
        )


#
# LIST
#


@root.group(name="list")
@output
@click.pass_context
def list_group(ctx: click.Context, output: str) -> None:
    """List all resources of a specific type."""
    ctx.obj["options"] = {
        "output": output,
        "sort": False,
    }


@list_group.command(name="clusters")
@click.pass_context
def list_clusters(ctx: click.Context) -> None:
    """List clusters."""
    reporter = get_reporter(ctx)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        try:
            clusters = list(get_clusters(ocm_api, creator.arn))
        except requests.RequestException as e:
            reporter.exit_error(f"Failed to get clusters: {error_reason(e)}")
    if not clusters and ctx.obj["options"]["output"] == "table":
        reporter.info("No clusters available")
        return
    content = [{"id": c.id, "name": c.name, "state": c.state.value} for c in clusters]
    print_output(ctx.obj["options"], content, ["id", "name", "state"])


@list_group.command(name="idps")
@cluster_option()
@click.pass_context
def list_idps(ctx: click.Context, cluster_key: str) -> None:
    """List cluster identity providers."""
    reporter = get_reporter(ctx)
    cluster_key = require_cluster_key(reporter, cluster_key)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
        try:
            idps = list(get_identity_providers(ocm_api, cluster))
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to get identity providers for cluster '{cluster_key}': "
                f"{error_reason(e)}"
            )
    if not idps and ctx.obj["options"]["output"] == "table":
        reporter.info(
            f"There are no identity providers configured for cluster '{cluster_key}'"
        )
        return
    content = [
        {"name": idp.name, "type": idp.type, "mapping_method": idp.mapping_method.value}
        for idp in idps
    ]
    print_output(ctx.obj["options"], content, ["name", "type", "mapping_method"])


@list_group.command(name="users")
@cluster_option()
@click.pass_context
def list_users(ctx: click.Context, cluster_key: str) -> None:
    """List cluster users."""
    reporter = get_reporter(ctx)
    cluster_key = require_cluster_key(reporter, cluster_key)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
        try:
            user_groups = get_user_groups(ocm_api, cluster.id)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to get users for cluster '{cluster_key}': {error_reason(e)}"
            )
    if not user_groups and ctx.obj["options"]["output"] == "table":
        reporter.info(f"There are no users configured for cluster '{cluster_key}'")
        return
    content = [
        {"id": user, "groups": [g.value for g in groups]}
        for user, groups in user_groups.items()
    ]
    print_output(ctx.obj["options"], content, ["id", "groups"])


def _default_machine_pool(cluster: OCMCluster) -> OCMMachinePool:
    nodes = cluster.nodes
    autoscaling = None
    if nodes.autoscale_compute is not None:
        autoscaling = OCMMachinePoolAutoscaling(
            min_replicas=nodes.autoscale_compute.min_replicas,
            max_replicas=nodes.autoscale_compute.max_replicas,
        )
    return OCMMachinePool(
        id=DEFAULT_MACHINE_POOL,
        instance_type=nodes.compute_machine_type.id if nodes.compute_machine_type else None,
        replicas=nodes.compute,
        autoscaling=autoscaling,
        availability_zones=nodes.availability_zones,
    )


def _machine_pool_row(machine_pool: OCMMachinePool) -> dict[str, Any]:
    if machine_pool.autoscaling is not None:
        replicas = (
            f"{machine_pool.autoscaling.min_replicas}-"
            f"{machine_pool.autoscaling.max_replicas}"
        )
    else:
        replicas = str(machine_pool.replicas or 0)
    return {
        "id": machine_pool.id,
        "autoscaling": "Yes" if machine_pool.autoscaling else "No",
        "replicas": replicas,
        "instance_type": machine_pool.instance_type or "",
        "labels": machine_pool.labels,
        "taints": [str(t) for t in machine_pool.taints],
        "availability_zones": machine_pool.availability_zones,
    }


@list_group.command(name="machinepools")
@cluster_option()
@click.pass_context
def list_machinepools(ctx: click.Context, cluster_key: str) -> None:
    """List cluster machine pools."""
    reporter = get_reporter(ctx)
    cluster_key = require_cluster_key(reporter, cluster_key)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
        try:
            machine_pools = get_machine_pools(ocm_api, cluster.id)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to get machine pools for cluster '{cluster_key}': "
                f"{error_reason(e)}"
            )
    content = [_machine_pool_row(_default_machine_pool(cluster))] + [
        _machine_pool_row(mp) for mp in machine_pools
    ]
    print_output(
        ctx.obj["options"],
        content,
        [
            "id",
            "autoscaling",
            "replicas",
            "instance_type",
            "labels",
            "taints",
            "availability_zones",
        ],
    )


@list_group.command(name="addons")
@cluster_option(required=False)
@click.pass_context
def list_addons(ctx: click.Context, cluster_key: str) -> None:
    """List add-on installations."""
    reporter = get_reporter(ctx)
    creator = None
    if cluster_key:
        cluster_key = require_cluster_key(reporter, cluster_key)
        creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        try:
            addons = list(get_addons(ocm_api))
        except requests.RequestException as e:
            reporter.exit_error(f"Failed to fetch add-ons: {error_reason(e)}")
        if creator is None:
            content = [{"id": a.id, "name": a.name} for a in addons]
            columns = ["id", "name"]
        else:
            cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
            try:
                installations = get_cluster_addons(ocm_api, cluster.id)
            except requests.RequestException as e:
                reporter.exit_error(
                    f"Failed to get add-ons for cluster '{cluster_key}': "
                    f"{error_reason(e)}"
                )
            content = [
                {
                    "id": a.id,
                    "name": a.name,
                    "state": (
                        installations[a.id].state or "installing"
                        if a.id in installations
                        else "not installed"
                    ),
                }
                for a in addons
            ]
            columns = ["id", "name", "state"]
    if not content and ctx.obj["options"]["output"] == "table":
        reporter.info("There are no add-ons available")
        return
    print_output(ctx.obj["options"], content, columns)


@list_group.command(name="regions")
@click.pass_context
def list_regions(ctx: click.Context) -> None:
    """List available regions."""
    reporter = get_reporter(ctx)
    with init_ocm_api(reporter) as ocm_api:
        try:
            regions = get_regions(ocm_api)
        except requests.RequestException as e:
            reporter.exit_error(f"Failed to retrieve AWS regions: {error_reason(e)}")
    content = [
        {
            "id": r.id,
            "name": r.display_name,
            "multi_az_support": r.supports_multi_az,
        }
        for r in sorted(regions, key=lambda r: r.id)
        if r.enabled
    ]
    print_output(ctx.obj["options"], content, ["id", "name", "multi_az_support"])


@list_group.command(name="versions")
@click.pass_context
def list_versions(ctx: click.Context) -> None:
    """List available versions."""
    reporter = get_reporter(ctx)
    with init_ocm_api(reporter) as ocm_api:
        try:
            versions = get_versions(ocm_api)
        except requests.RequestException as e:
            reporter.exit_error(f"Failed to retrieve versions: {error_reason(e)}")
    content = [
        {"version": v.short_id, "default": "yes" if v.default else "no"}
        for v in versions
    ]
    print_output(ctx.obj["options"], content, ["version", "default"])


@list_group.command(name="instance-types")
@click.pass_context
def list_instance_types(ctx: click.Context) -> None:
    """List available instance types."""
    reporter = get_reporter(ctx)
    with init_ocm_api(reporter) as ocm_api:
        try:
            machine_types = get_machine_types(ocm_api)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to retrieve machine types: {error_reason(e)}"
            )
    content = [
        {
            "id": m.id,
            "category": m.category,
            "cpu_cores": int(m.cpu.value) if m.cpu else "",
            "memory": f"{m.memory.value / 2**30:g} GiB" if m.memory else "",
        }
        for m in machine_types
    ]
    print_output(ctx.obj["options"], content, ["id", "category", "cpu_cores", "memory"])


#
# ADD-ONS
#


@root.group()
def install() -> None:
    """Install a resource from stdin."""


@install.command(name="addon")
@cluster_option()
@yes
@click.argument("addon_id")
@click.pass_context
def install_addon_cmd(
    ctx: click.Context, cluster_key: str, yes: bool, addon_id: str
) -> None:
    """Install Red Hat managed add-ons on a cluster."""
    reporter = get_reporter(ctx)
    cluster_key = require_cluster_key(reporter, cluster_key)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(
            reporter, ocm_api, cluster_key, creator, require_ready=True
        )
        if not interactive.confirm(
            f"install add-on '{addon_id}' on cluster '{cluster_key}'", yes=yes
        ):
            return
        try:
            parameters = get_addon_parameters(ocm_api, addon_id)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to get add-on '{addon_id}' parameters: {error_reason(e)}"
            )
        try:
            values = InstallAddonCommand(
                InstallAddonCommandData(addon_id=addon_id, parameters=parameters)
            ).execute()
        except AddonParameterError as e:
            reporter.exit_error(str(e))

        reporter.debug(f"Installing add-on '{addon_id}' on cluster '{cluster_key}'")
        try:
            install_addon(ocm_api, cluster.id, addon_id, values)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to add add-on installation '{addon_id}' for cluster "
                f"'{cluster_key}': {error_reason(e)}"
            )
        reporter.info(
            f"Add-on '{addon_id}' is now installing. To check the status run "
            f"'rosa list addons -c {cluster_key}'"
        )


@root.group()
def uninstall() -> None:
    """Uninstall a resource from a cluster."""


@uninstall.command(name="addon")
@cluster_option()
@yes
@click.argument("addon_id")
@click.pass_context
def uninstall_addon_cmd(
    ctx: click.Context, cluster_key: str, yes: bool, addon_id: str
) -> None:
    """Uninstall add-on from a cluster."""
    reporter = get_reporter(ctx)
    cluster_key = require_cluster_key(reporter, cluster_key)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
        if not interactive.confirm(
            f"uninstall add-on '{addon_id}' from cluster '{cluster_key}'", yes=yes
        ):
            return
        try:
            uninstall_addon(ocm_api, cluster.id, addon_id)
        except requests.RequestException as e:
            reporter.exit_error(
                f"Failed to remove add-on installation '{addon_id}' from cluster "
                f"'{cluster_key}': {error_reason(e)}"
            )
        reporter.info(
            f"Add-on '{addon_id}' will start uninstalling now. To check the status "
            f"run 'rosa list addons -c {cluster_key}'"
        )


#
# LOGS
#


@root.group()
def logs() -> None:
    """Show installation or uninstallation logs for a cluster."""


def _print_install_logs(
    reporter: Reporter,
    ocm_api: OCMBaseClient,
    cluster: OCMCluster,
    cluster_key: str,
    creator: Creator,
    watch: bool,
) -> None:
    command = InstallLogsCommand(
        ocm_api,
        InstallLogsCommandData(cluster=cluster, watch=watch),
        reload_cluster=lambda: load_cluster(reporter, ocm_api, cluster_key, creator),
    )
    try:
        command.execute()
    except requests.HTTPError as e:
        if is_not_found(e):
            reporter.warn(f"Logs for cluster '{cluster_key}' are not available yet")
            return
        reporter.exit_error(
            f"Failed to get logs for cluster '{cluster_key}': {error_reason(e)}"
        )
    except requests.RequestException as e:
        reporter.exit_error(
            f"Failed to get logs for cluster '{cluster_key}': {error_reason(e)}"
        )


@logs.command(name="install")
@cluster_option()
@click.option("--watch", is_flag=True, default=False, help="Watch cluster installation logs.")
@click.pass_context
def logs_install(ctx: click.Context, cluster_key: str, watch: bool) -> None:
    """Show cluster installation logs."""
    reporter = get_reporter(ctx)
    cluster_key = require_cluster_key(reporter, cluster_key)
    creator = init_creator(reporter)
    with init_ocm_api(reporter) as ocm_api:
        cluster = load_cluster(reporter, ocm_api, cluster_key, creator)
        _print_install_logs(
            reporter, ocm_api, cluster, cluster_key, creator=creator, watch=watch
        )


if __name__ == "__main__":
    root()  # pylint: disable=no-value-for-parameter
