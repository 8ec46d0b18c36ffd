from collections.abc import Generator

from rosa.utils.ocm.base import (
    IDENTITY_PROVIDER_TYPES,
    OCMCluster,
    OCMOIdentityProvider,
    build_cluster_url,
)
from rosa.utils.ocm_base_client import OCMBaseClient

_TYPE_CLASSES = {
    cls.model_fields["type"].default: cls for cls in IDENTITY_PROVIDER_TYPES.values()
}


class IdentityProviderNotFoundError(Exception):
    pass


def build_identity_providers_url(ocm_cluster: OCMCluster) -> str:
    return ocm_cluster.identity_providers.href or (
        f"{build_cluster_url(ocm_cluster.id)}/identity_providers"
    )


def get_identity_providers(
    ocm_api: OCMBaseClient, ocm_cluster: OCMCluster
) -> Generator[OCMOIdentityProvider, None, None]:
    """Get all identity providers."""
    for idp_dict in ocm_api.get_paginated(
        api_path=build_identity_providers_url(ocm_cluster)
    ):
        idp_class = _TYPE_CLASSES.get(idp_dict.get("type", ""), OCMOIdentityProvider)
        yield idp_class(**idp_dict)


def get_identity_provider_by_name(
    ocm_api: OCMBaseClient, ocm_cluster: OCMCluster, name: str
) -> OCMOIdentityProvider:
    for idp in get_identity_providers(ocm_api, ocm_cluster):
        if idp.name == name:
            return idp
    raise IdentityProviderNotFoundError(
        f"Identity provider '{name}' not found on cluster '{ocm_cluster.name}'"
    )


def next_identity_provider_name(
    idp_type: str, existing: list[OCMOIdentityProvider]
) -> str:
    """
    Returns the first free name of the form <type>-<n>, starting at 1.
    """
    taken = {idp.name for idp in existing}
    n = 1
    while f"{idp_type}-{n}" in taken:
        n += 1
    return f"{idp_type}-{n}"


def add_identity_provider(
    ocm_api: OCMBaseClient,
    ocm_cluster: OCMCluster,
    idp: OCMOIdentityProvider,
) -> OCMOIdentityProvider:
    """Creates a new identity provider."""
    created = ocm_api.post(
        api_path=build_identity_providers_url(ocm_cluster),
        data=idp.model_dump(mode="json", exclude_none=True),
    )
    return type(idp)(**created) if created else idp


def delete_identity_provider(
    ocm_api: OCMBaseClient, ocm_cluster: OCMCluster, idp: OCMOIdentityProvider
) -> None:
    """Delete a identity provider."""
    api_path = idp.href
    if not api_path:
        if not idp.id:
            raise ValueError(f"IDP {idp.name} does not have a href!")
        api_path = f"{build_identity_providers_url(ocm_cluster)}/{idp.id}"
    ocm_api.delete(api_path=api_path)
