from rosa.utils.ocm.base import (
    CLOUD_PROVIDER_AWS,
    CS_API_BASE,
    OCMRegion,
    ValidationError,
)
from rosa.utils.ocm_base_client import OCMBaseClient


def get_regions(ocm_api: OCMBaseClient) -> list[OCMRegion]:
    return [
        OCMRegion(**region)
        for region in ocm_api.get_paginated(
            f"{CS_API_BASE}/cloud_providers/{CLOUD_PROVIDER_AWS}/regions",
            params={"search": "enabled='true'"},
        )
    ]


def get_region_ids(ocm_api: OCMBaseClient) -> list[str]:
    return sorted(region.id for region in get_regions(ocm_api) if region.enabled)


def validate_region(region: str, valid_regions: list[str]) -> str:
    if region not in valid_regions:
        raise ValidationError(
            "A valid region must be specified\n"
            f"Valid regions: {' '.join(valid_regions)}"
        )
    return region
