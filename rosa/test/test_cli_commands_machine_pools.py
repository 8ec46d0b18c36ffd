import pytest

from rosa.cli_commands.machine_pools import (
    MachinePoolCommand,
    MachinePoolCommandData,
    MachinePoolError,
)
from rosa.utils.ocm.base import (
    OCMMachinePoolAutoscaling,
    OCMTaint,
    OCMTaintEffect,
)

MACHINE_TYPES = ["m5.xlarge", "r5.xlarge"]


def test_build_machine_pool_replicas() -> None:
    machine_pool = MachinePoolCommand(
        MachinePoolCommandData(
            machine_pool_id="mp1",
            replicas=3,
            labels="a=1",
            taints="b=2:NoSchedule",
        )
    ).build_machine_pool(MACHINE_TYPES)

    assert machine_pool.id == "mp1"
    assert machine_pool.instance_type == "m5.xlarge"
    assert machine_pool.replicas == 3
    assert machine_pool.autoscaling is None
    assert machine_pool.labels == {"a": "1"}
    assert machine_pool.taints == [
        OCMTaint(key="b", value="2", effect=OCMTaintEffect.NO_SCHEDULE)
    ]


def test_build_machine_pool_autoscaling() -> None:
    machine_pool = MachinePoolCommand(
        MachinePoolCommandData(
            machine_pool_id="mp1",
            enable_autoscaling=True,
            min_replicas=1,
            max_replicas=4,
            instance_type="r5.xlarge",
        )
    ).build_machine_pool(MACHINE_TYPES)

    assert machine_pool.replicas is None
    assert machine_pool.autoscaling == OCMMachinePoolAutoscaling(
        min_replicas=1, max_replicas=4
    )
    assert machine_pool.instance_type == "r5.xlarge"


@pytest.mark.parametrize(
    "data, error",
    [
        (
            MachinePoolCommandData(machine_pool_id="Default", replicas=1),
            "Machine pool 'Default' already exists",
        ),
        (
            MachinePoolCommandData(machine_pool_id="mp1"),
            "Either replicas or autoscaling",
        ),
        (
            MachinePoolCommandData(machine_pool_id="mp1", replicas=-1),
            "The number of machine pool replicas needs to be a non-negative integer",
        ),
        (
            MachinePoolCommandData(
                machine_pool_id="mp1",
                replicas=2,
                enable_autoscaling=True,
                min_replicas=1,
                max_replicas=2,
            ),
            "Replicas can't be set when autoscaling is enabled",
        ),
        (
            MachinePoolCommandData(
                machine_pool_id="mp1", enable_autoscaling=True, min_replicas=1
            ),
            "Both min-replicas and max-replicas are required",
        ),
        (
            MachinePoolCommandData(
                machine_pool_id="mp1",
                enable_autoscaling=True,
                min_replicas=3,
                max_replicas=2,
            ),
            "max-replicas must be greater than or equal to min-replicas",
        ),
        (
            MachinePoolCommandData(
                machine_pool_id="mp1",
                enable_autoscaling=False,
                min_replicas=1,
                max_replicas=2,
            ),
            "Autoscaling must be enabled in order to set min and max replicas",
        ),
        (
            MachinePoolCommandData(
                machine_pool_id="mp1", replicas=1, instance_type="t2.micro"
            ),
            "Expected a valid instance type",
        ),
        (
            MachinePoolCommandData(machine_pool_id="mp1", replicas=1, labels="a"),
            "Expected key=value format for labels",
        ),
        (
            MachinePoolCommandData(machine_pool_id="mp1", replicas=1, taints="a=b"),
            "Expected key=value:scheduleType format for taints",
        ),
    ],
)
def test_build_machine_pool_invalid(data: MachinePoolCommandData, error: str) -> None:
    with pytest.raises(MachinePoolError) as e:
        MachinePoolCommand(data).build_machine_pool(MACHINE_TYPES)
    assert str(e.value).startswith(error)


def test_build_update_default_machine_pool() -> None:
    command = MachinePoolCommand(
        MachinePoolCommandData(
            machine_pool_id="Default",
            min_replicas=2,
            max_replicas=5,
            labels="a=1",
        )
    )
    assert command.is_default
    assert command.build_update() == {
        "autoscale_compute": {"min_replicas": 2, "max_replicas": 5},
        "compute_labels": {"a": "1"},
    }


def test_build_update_default_machine_pool_taints() -> None:
    with pytest.raises(MachinePoolError):
        MachinePoolCommand(
            MachinePoolCommandData(machine_pool_id="Default", taints="a=b:NoSchedule")
        ).build_update()


def test_build_update_machine_pool() -> None:
    update = MachinePoolCommand(
        MachinePoolCommandData(
            machine_pool_id="mp1",
            replicas=4,
            labels="",
            taints="a=b:NoExecute",
        )
    ).build_update()
    assert update == {
        "replicas": 4,
        "labels": {},
        "taints": [{"key": "a", "value": "b", "effect": "NoExecute"}],
    }


def test_build_update_nothing() -> None:
    with pytest.raises(MachinePoolError) as e:
        MachinePoolCommand(MachinePoolCommandData(machine_pool_id="mp1")).build_update()
    assert str(e.value) == (
        "At least one of replicas, autoscaling, labels or taints must be set"
    )
