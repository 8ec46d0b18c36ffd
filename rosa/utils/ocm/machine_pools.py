from typing import Any

from rosa.utils.ocm.base import (
    OCMMachinePool,
    OCMTaint,
    OCMTaintEffect,
    build_cluster_url,
)
from rosa.utils.ocm_base_client import OCMBaseClient


class MachinePoolSpecError(Exception):
    pass


def build_machine_pools_url(cluster_id: str) -> str:
    return f"{build_cluster_url(cluster_id)}/machine_pools"


def parse_labels(labels: str) -> dict[str, str]:
    """
    Parses labels given as "key=value,key2=value2".
    """
    result: dict[str, str] = {}
    for label in labels.split(","):
        label = label.strip()
        if not label:
            continue
        if "=" not in label:
            raise MachinePoolSpecError(
                f"Expected key=value format for labels, got '{label}'"
            )
        key, value = label.split("=", 1)
        if not key:
            raise MachinePoolSpecError(f"Label '{label}' has an empty key")
        result[key] = value
    return result


def parse_taints(taints: str) -> list[OCMTaint]:
    """
    Parses taints given as "key=value:Effect,key2=value2:Effect".
    """
    result: list[OCMTaint] = []
    for taint in taints.split(","):
        taint = taint.strip()
        if not taint:
            continue
        key_value, sep, effect = taint.rpartition(":")
        if not sep or "=" not in key_value:
            raise MachinePoolSpecError(
                f"Expected key=value:scheduleType format for taints, got '{taint}'"
            )
        key, value = key_value.split("=", 1)
        try:
            taint_effect = OCMTaintEffect(effect)
        except ValueError:
            valid = ", ".join(e.value for e in OCMTaintEffect)
            raise MachinePoolSpecError(
                f"Invalid taint effect '{effect}', expected one of: {valid}"
            ) from None
        result.append(OCMTaint(key=key, value=value, effect=taint_effect))
    return result


def get_machine_pools(ocm_api: OCMBaseClient, cluster_id: str) -> list[OCMMachinePool]:
    return [
        OCMMachinePool(**pool)
        for pool in ocm_api.get_paginated(build_machine_pools_url(cluster_id))
    ]


def render_machine_pool(machine_pool: OCMMachinePool) -> dict[str, Any]:
    return machine_pool.model_dump(
        mode="json", exclude_none=True, exclude={"kind", "href"}
    )


def create_machine_pool(
    ocm_api: OCMBaseClient, cluster_id: str, machine_pool: OCMMachinePool
) -> OCMMachinePool:
    created = ocm_api.post(
        build_machine_pools_url(cluster_id), render_machine_pool(machine_pool)
    )
    return OCMMachinePool(**created) if created else machine_pool


def update_machine_pool(
    ocm_api: OCMBaseClient,
    cluster_id: str,
    machine_pool_id: str,
    update: dict[str, Any],
) -> None:
    ocm_api.patch(f"{build_machine_pools_url(cluster_id)}/{machine_pool_id}", update)


def delete_machine_pool(
    ocm_api: OCMBaseClient, cluster_id: str, machine_pool_id: str
) -> None:
    ocm_api.delete(f"{build_machine_pools_url(cluster_id)}/{machine_pool_id}")
