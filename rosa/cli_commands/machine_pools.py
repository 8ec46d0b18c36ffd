from dataclasses import dataclass
from typing import Any

from rosa.utils.ocm.base import (
    DEFAULT_MACHINE_POOL,
    OCMMachinePool,
    OCMMachinePoolAutoscaling,
    ValidationError,
)
from rosa.utils.ocm.machine_pools import (
    MachinePoolSpecError,
    parse_labels,
    parse_taints,
)
from rosa.utils.ocm.machine_types import validate_machine_type

DEFAULT_INSTANCE_TYPE = "m5.xlarge"


class MachinePoolError(Exception):
    pass


@dataclass
class MachinePoolCommandData:
    machine_pool_id: str
    replicas: int | None = None
    enable_autoscaling: bool | None = None
    min_replicas: int | None = None
    max_replicas: int | None = None
    instance_type: str = ""
    labels: str | None = None
    taints: str | None = None


class MachinePoolCommand:
    """
    Turns the machine pool flags into the bodies of create and update
    requests. The Default machine pool lives in the compute settings of
    the cluster, so updates to it are rendered as cluster node changes.
    """

    def __init__(self, command_data: MachinePoolCommandData):
        self._command_data = command_data

    @property
    def is_default(self) -> bool:
        return self._command_data.machine_pool_id == DEFAULT_MACHINE_POOL

    def _autoscaling(self) -> OCMMachinePoolAutoscaling | None:
        data = self._command_data
        autoscaling = data.enable_autoscaling
        if autoscaling is None and (
            data.min_replicas is not None or data.max_replicas is not None
        ):
            autoscaling = True
        if not autoscaling:
            if data.min_replicas is not None or data.max_replicas is not None:
                raise MachinePoolError(
                    "Autoscaling must be enabled in order to set min and max replicas"
                )
            return None
        if data.replicas is not None:
            raise MachinePoolError(
                "Replicas can't be set when autoscaling is enabled"
            )
        if data.min_replicas is None or data.max_replicas is None:
            raise MachinePoolError(
                "Both min-replicas and max-replicas are required when autoscaling "
                "is enabled"
            )
        if data.min_replicas < 0 or data.max_replicas < data.min_replicas:
            raise MachinePoolError(
                "max-replicas must be greater than or equal to min-replicas"
            )
        return OCMMachinePoolAutoscaling(
            min_replicas=data.min_replicas, max_replicas=data.max_replicas
        )

    def _replicas(self) -> int | None:
        replicas = self._command_data.replicas
        if replicas is not None and replicas < 0:
            raise MachinePoolError(
                "The number of machine pool replicas needs to be a non-negative integer"
            )
        return replicas

    def _labels(self) -> dict[str, str] | None:
        if self._command_data.labels is None:
            return None
        try:
            return parse_labels(self._command_data.labels)
        except MachinePoolSpecError as e:
            raise MachinePoolError(str(e)) from None

    def build_machine_pool(self, machine_types: list[str]) -> OCMMachinePool:
        data = self._command_data
        if self.is_default:
            raise MachinePoolError(
                f"Machine pool '{DEFAULT_MACHINE_POOL}' already exists"
            )
        autoscaling = self._autoscaling()
        replicas = self._replicas()
        if autoscaling is None and replicas is None:
            raise MachinePoolError(
                "Either replicas or autoscaling with min and max replicas must be set"
            )
        instance_type = data.instance_type or DEFAULT_INSTANCE_TYPE
        try:
            validate_machine_type(instance_type, machine_types)
        except ValidationError as e:
            raise MachinePoolError(f"Expected a valid instance type: {e}") from None
        try:
            taints = parse_taints(data.taints) if data.taints else []
        except MachinePoolSpecError as e:
            raise MachinePoolError(str(e)) from None
        return OCMMachinePool(
            id=data.machine_pool_id,
            instance_type=instance_type,
            replicas=replicas,
            autoscaling=autoscaling,
            labels=self._labels() or {},
            taints=taints,
        )

    def build_update(self) -> dict[str, Any]:
        data = self._command_data
        autoscaling = self._autoscaling()
        replicas = self._replicas()
        labels = self._labels()
        if self.is_default and data.taints is not None:
            raise MachinePoolError(
                f"Taints are not supported on the '{DEFAULT_MACHINE_POOL}' "
                "machine pool"
            )
        update: dict[str, Any] = {}
        if self.is_default:
            if replicas is not None:
                update["compute"] = replicas
            if autoscaling is not None:
                update["autoscale_compute"] = autoscaling.model_dump()
            if labels is not None:
                update["compute_labels"] = labels
        else:
            if replicas is not None:
                update["replicas"] = replicas
            if autoscaling is not None:
                update["autoscaling"] = autoscaling.model_dump()
            if labels is not None:
                update["labels"] = labels
            if data.taints is not None:
                try:
                    update["taints"] = [
                        t.model_dump(mode="json") for t in parse_taints(data.taints)
                    ]
                except MachinePoolSpecError as e:
                    raise MachinePoolError(str(e)) from None
        if not update:
            raise MachinePoolError(
                "At least one of replicas, autoscaling, labels or taints must be set"
            )
        return update
