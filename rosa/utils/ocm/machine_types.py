from rosa.utils.ocm.base import (
    CLOUD_PROVIDER_AWS,
    CS_API_BASE,
    OCMMachineType,
    ValidationError,
)
from rosa.utils.ocm.search_filters import Filter
from rosa.utils.ocm_base_client import OCMBaseClient


def get_machine_types(ocm_api: OCMBaseClient) -> list[OCMMachineType]:
    search = Filter().eq("cloud_provider.id", CLOUD_PROVIDER_AWS)
    return [
        OCMMachineType(**machine_type)
        for machine_type in ocm_api.get_paginated(
            f"{CS_API_BASE}/machine_types",
            params={"search": search.render(), "order": "category asc"},
        )
    ]


def get_machine_type_ids(ocm_api: OCMBaseClient) -> list[str]:
    return [machine_type.id for machine_type in get_machine_types(ocm_api)]


def validate_machine_type(machine_type: str, valid_machine_types: list[str]) -> str:
    """
    An empty machine type passes through so the service default applies.
    """
    if machine_type and machine_type not in valid_machine_types:
        raise ValidationError(
            "A valid machine type number must be specified\n"
            f"Valid machine types: {' '.join(valid_machine_types)}"
        )
    return machine_type
