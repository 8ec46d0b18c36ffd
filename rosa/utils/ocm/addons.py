from collections.abc import Generator

from rosa.utils.ocm.base import (
    CS_API_BASE,
    OCMAddOn,
    OCMAddonInstallation,
    OCMAddOnParameter,
    OCMAddOnParameterValue,
    build_cluster_url,
)
from rosa.utils.ocm_base_client import OCMBaseClient


def build_addon_url(addon_id: str) -> str:
    return f"{CS_API_BASE}/addons/{addon_id}"


def build_cluster_addons_url(cluster_id: str) -> str:
    return f"{build_cluster_url(cluster_id)}/addons"


def get_addons(ocm_api: OCMBaseClient) -> Generator[OCMAddOn, None, None]:
    """
    Returns the add-ons that are enabled for installation.
    """
    for addon_dict in ocm_api.get_paginated(
        f"{CS_API_BASE}/addons",
        params={"search": "enabled='t'", "order": "name asc"},
    ):
        yield OCMAddOn(**addon_dict)


def get_addon(ocm_api: OCMBaseClient, addon_id: str) -> OCMAddOn:
    return OCMAddOn(**ocm_api.get(build_addon_url(addon_id)))


def get_addon_parameters(
    ocm_api: OCMBaseClient, addon_id: str
) -> list[OCMAddOnParameter]:
    return get_addon(ocm_api, addon_id).parameter_items()


def get_cluster_addons(
    ocm_api: OCMBaseClient, cluster_id: str
) -> dict[str, OCMAddonInstallation]:
    """
    Returns the add-on installations of a cluster keyed by add-on id.
    """
    return {
        installation.addon.id: installation
        for installation in (
            OCMAddonInstallation(**addon_dict)
            for addon_dict in ocm_api.get_paginated(
                build_cluster_addons_url(cluster_id)
            )
        )
    }


def install_addon(
    ocm_api: OCMBaseClient,
    cluster_id: str,
    addon_id: str,
    parameters: list[OCMAddOnParameterValue] | None = None,
) -> None:
    data: dict = {"addon": {"id": addon_id}}
    if parameters:
        data["parameters"] = {"items": [p.model_dump() for p in parameters]}
    ocm_api.post(build_cluster_addons_url(cluster_id), data)


def uninstall_addon(ocm_api: OCMBaseClient, cluster_id: str, addon_id: str) -> None:
    ocm_api.delete(f"{build_cluster_addons_url(cluster_id)}/{addon_id}")
