import copy

from gcpprovider.core import (
    CoreVolume,
    DataVolume,
    Machine,
    ShootMachineImage,
    Worker,
    WorkerKubernetes,
    find_worker_by_name,
)


def _workers():
    return [
        Worker(name="foo", zones=["zone1"], volume=CoreVolume(type="some-type", volume_size="40Gi")),
        Worker(name="bar", zones=["zone1", "zone2"], minimum=2, maximum=4),
        Worker(name="foo", zones=["zone3"]),
    ]


def test_find_worker_by_name_returns_first_match():
    workers = _workers()
    found = find_worker_by_name(workers, "foo")
    assert found is workers[0]
    assert found.zones == ["zone1"]


def test_find_worker_by_name_finds_other_entry():
    workers = _workers()
    assert find_worker_by_name(workers, "bar") is workers[1]


def test_find_worker_by_name_missing():
    assert find_worker_by_name(_workers(), "baz") is None


def test_find_worker_by_name_with_no_workers():
    assert find_worker_by_name(None, "foo") is None
    assert find_worker_by_name([], "foo") is None


def test_workers_compare_by_value():
    worker = Worker(
        name="worker-test",
        machine=Machine(type="n1-standard-2", image=ShootMachineImage(name="gardenlinux", version="318.8.0")),
        zones=["europe-west1-b"],
        data_volumes=[DataVolume(type="SCRATCH", volume_size="30G")],
        kubernetes=WorkerKubernetes(version="1.18.0"),
    )
    other = copy.deepcopy(worker)
    assert other == worker
    other.zones.append("europe-west1-c")
    assert other != worker
    assert worker.zones == ["europe-west1-b"]


def test_default_lists_are_independent():
    first = Worker()
    second = Worker()
    first.zones.append("zone1")
    assert second.zones == []