import pytest

from stores.ids import EntityKind, IdAllocator


def test_counters_are_independent_and_zero_padded():
    allocator = IdAllocator()
    assert allocator.next_id(EntityKind.WORKER) == "W001"
    assert allocator.next_id(EntityKind.WORKER) == "W002"
    assert allocator.next_id(EntityKind.TASK) == "T001"
    assert allocator.next_worker_seq == 3
    assert allocator.next_task_seq == 2


def test_width_grows_past_999():
    allocator = IdAllocator(next_worker_seq=999, next_task_seq=1000)
    assert allocator.next_id("worker") == "W999"
    assert allocator.next_id("worker") == "W1000"
    assert allocator.next_id("task") == "T1000"


@pytest.mark.parametrize("bad", [0, -1, "3", True, None])
def test_restore_rejects_invalid_counters(bad):
    with pytest.raises(ValueError):
        IdAllocator(next_worker_seq=bad)


def test_reserve_existing_moves_counter_past_used_ids():
    allocator = IdAllocator(next_worker_seq=2)
    allocator.reserve_existing(EntityKind.WORKER, ["W001", "W007", "X100", "Wabc"])
    assert allocator.next_id(EntityKind.WORKER) == "W008"


def test_reserve_existing_keeps_counter_that_is_ahead():
    allocator = IdAllocator(next_task_seq=20)
    allocator.reserve_existing(EntityKind.TASK, ["T003"])
    assert allocator.next_task_seq == 20
