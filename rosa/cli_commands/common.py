import requests

from rosa.utils.aws_api import (
    AWSApi,
    AWSClientError,
    Creator,
)
from rosa.utils.ocm.base import OCMCluster
from rosa.utils.ocm.clusters import (
    ClusterNotFoundError,
    InvalidClusterKeyError,
    get_cluster,
    validate_cluster_key,
)
from rosa.utils.ocm_base_client import (
    ConnectionBuildError,
    NotLoggedInError,
    OCMBaseClient,
    init_ocm_base_client,
)
from rosa.utils.reporter import Reporter


def require_cluster_key(reporter: Reporter, cluster_key: str) -> str:
    try:
        return validate_cluster_key(cluster_key)
    except InvalidClusterKeyError as e:
        reporter.exit_error(str(e))


def init_creator(reporter: Reporter, region: str | None = None) -> Creator:
    try:
        aws_api = AWSApi(region=region)
    except AWSClientError as e:
        reporter.exit_error(str(e))
    try:
        return aws_api.get_creator()
    except AWSClientError as e:
        reporter.exit_error(str(e))


def init_ocm_api(reporter: Reporter) -> OCMBaseClient:
    try:
        return init_ocm_base_client()
    except NotLoggedInError as e:
        reporter.exit_error(str(e))
    except ConnectionBuildError as e:
        reporter.exit_error(f"Failed to create OCM connection: {e}")


def load_cluster(
    reporter: Reporter,
    ocm_api: OCMBaseClient,
    cluster_key: str,
    creator: Creator,
    require_ready: bool = False,
) -> OCMCluster:
    reporter.debug(f"Loading cluster '{cluster_key}'")
    try:
        cluster = get_cluster(ocm_api, cluster_key, creator.arn)
    except ClusterNotFoundError as e:
        reporter.exit_error(f"Failed to get cluster '{cluster_key}': {e}")
    except requests.RequestException as e:
        reporter.exit_error(
            f"Failed to get cluster '{cluster_key}': {error_reason(e)}"
        )
    if require_ready and not cluster.ready():
        reporter.exit_error(f"Cluster '{cluster_key}' is not yet ready")
    return cluster


def error_reason(e: requests.RequestException) -> str:
    """
    Returns the reason given by the API in the error body, falling back to
    the text of the exception.
    """
    if e.response is not None:
        try:
            reason = e.response.json().get("reason")
        except ValueError:
            reason = None
        if reason:
            return reason
    return str(e)
