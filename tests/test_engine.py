import random
from decimal import Decimal

import pytest

from errors import CapacityError, ErrorKind, ValidationError
from utils.validators import check_hours_consistency


def test_add_worker_defaults(engine, gateway):
    worker = engine.add_worker("Ana").unwrap()
    assert worker.id == "W001"
    assert worker.availability is True
    assert worker.total_assigned_hours == 0
    assert gateway.save_count == 1


@pytest.mark.parametrize("name", ["", "   ", None])
def test_add_worker_rejects_blank_name_without_consuming_id(engine, gateway, name):
    result = engine.add_worker(name)
    assert result.kind is ErrorKind.VALIDATION
    assert gateway.save_count == 0
    assert engine.add_worker("Ben").unwrap().id == "W001"


@pytest.mark.parametrize(
    "description, priority, hours, deadline",
    [
        ("", "high", 2, "2025-01-10"),
        ("Mop Room 202", "high", 0, "2025-01-10"),
        ("Mop Room 202", "high", -1, "2025-01-10"),
        ("Mop Room 202", "high", "two", "2025-01-10"),
        ("Mop Room 202", "high", "1e30", "2025-01-10"),
        ("Mop Room 202", "high", 1e30, "2025-01-10"),
        ("Mop Room 202", "urgent", 2, "2025-01-10"),
        ("Mop Room 202", "high", 2, "not a date"),
        ("Mop Room 202", "high", 2, ""),
    ],
)
def test_add_task_validation(engine, description, priority, hours, deadline):
    result = engine.add_task(description, priority, hours, deadline)
    assert result.kind is ErrorKind.VALIDATION
    assert engine.list_tasks() == []


def test_add_task_defaults(engine, add_task):
    task = add_task(description="  Vacuum Hallway  ", priority="HIGH", hours=1.5)
    assert task.id == "T001"
    assert task.description == "Vacuum Hallway"
    assert task.assigned_to is None
    assert task.completed is False
    assert task.time_estimate == Decimal("1.5")
    assert task.deadline.tzinfo is not None


def test_set_availability_unknown_worker(engine):
    assert engine.set_availability("W404", False).kind is ErrorKind.NOT_FOUND


def test_unavailable_worker_keeps_existing_assignments(engine, add_task):
    worker = engine.add_worker("Ana").unwrap()
    task = add_task(hours=3)
    engine.assign(task.id, worker.id).unwrap()

    engine.set_availability(worker.id, False).unwrap()

    assert engine.get_worker(worker.id).total_assigned_hours == 3
    assert engine.find_task(task.id).assigned_to == worker.id
    other = add_task(hours=1)
    assert engine.assign(other.id, worker.id).kind is ErrorKind.AVAILABILITY


def test_list_available_excludes_unavailable_and_full(engine, add_task):
    ana = engine.add_worker("Ana").unwrap()
    ben = engine.add_worker("Ben").unwrap()
    cy = engine.add_worker("Cy").unwrap()
    engine.set_availability(ben.id, False)
    engine.assign(add_task(hours=8).id, cy.id).unwrap()

    assert [w.id for w in engine.list_available_workers()] == [ana.id]


def test_assign_up_to_exactly_the_ceiling(engine, add_task):
    worker = engine.add_worker("Ana").unwrap()
    engine.assign(add_task(hours=5).id, worker.id).unwrap()
    assert engine.assign(add_task(hours=3).id, worker.id).ok
    assert engine.get_worker(worker.id).total_assigned_hours == 8

    extra = add_task(hours=0.5)
    result = engine.assign(extra.id, worker.id)
    assert result.kind is ErrorKind.CAPACITY
    assert engine.find_task(extra.id).assigned_to is None
    assert engine.get_worker(worker.id).total_assigned_hours == 8


def test_fractional_hours_do_not_drift(engine, add_task):
    worker = engine.add_worker("Ana").unwrap()
    for _ in range(80):
        assert engine.assign(add_task(hours=0.1).id, worker.id).ok
    assert engine.get_worker(worker.id).total_assigned_hours == Decimal("8")
    assert engine.assign(add_task(hours=0.1).id, worker.id).kind is ErrorKind.CAPACITY


def test_assign_unknown_task_or_worker(engine, add_task):
    worker = engine.add_worker("Ana").unwrap()
    task = add_task()
    assert engine.assign("T999", worker.id).kind is ErrorKind.NOT_FOUND
    assert engine.assign(task.id, "W999").kind is ErrorKind.NOT_FOUND


def test_reassign_moves_hours_between_workers(engine, add_task):
    a = engine.add_worker("Ana").unwrap()
    b = engine.add_worker("Ben").unwrap()
    task = add_task(hours=2.5)
    engine.assign(task.id, a.id).unwrap()

    moved = engine.assign(task.id, b.id).unwrap()

    assert moved.assigned_to == b.id
    assert moved.time_estimate == Decimal("2.5")
    assert engine.get_worker(a.id).total_assigned_hours == 0
    assert engine.get_worker(b.id).total_assigned_hours == Decimal("2.5")


def test_reassign_checks_capacity_of_new_worker_only(engine, add_task):
    a = engine.add_worker("Ana").unwrap()
    b = engine.add_worker("Ben").unwrap()
    engine.assign(add_task(hours=7).id, b.id).unwrap()
    task = add_task(hours=2)
    engine.assign(task.id, a.id).unwrap()

    assert engine.assign(task.id, b.id).kind is ErrorKind.CAPACITY
    assert engine.get_worker(a.id).total_assigned_hours == 2
    assert engine.get_worker(b.id).total_assigned_hours == 7
    assert engine.find_task(task.id).assigned_to == a.id


def test_reassign_to_current_owner_is_noop(engine, gateway, add_task):
    worker = engine.add_worker("Ana").unwrap()
    task = add_task(hours=3)
    engine.assign(task.id, worker.id).unwrap()
    saves = gateway.save_count

    assert engine.assign(task.id, worker.id).ok
    assert engine.get_worker(worker.id).total_assigned_hours == 3
    assert gateway.save_count == saves


def test_reassign_to_current_owner_still_checks_capacity(engine, add_task):
    worker = engine.add_worker("Ana").unwrap()
    task = add_task(hours=6)
    engine.assign(task.id, worker.id).unwrap()

    assert engine.assign(task.id, worker.id).kind is ErrorKind.CAPACITY
    assert engine.get_worker(worker.id).total_assigned_hours == 6
    assert engine.find_task(task.id).assigned_to == worker.id


def test_unassign_credits_worker(engine, add_task):
    worker = engine.add_worker("Ana").unwrap()
    task = add_task(hours=4)
    engine.assign(task.id, worker.id).unwrap()

    released = engine.unassign(task.id).unwrap()

    assert released.assigned_to is None
    assert engine.get_worker(worker.id).total_assigned_hours == 0
    assert [t.id for t in engine.list_unassigned_tasks()] == [task.id]


def test_unassign_when_unassigned_is_noop(engine, gateway, add_task):
    task = add_task()
    saves = gateway.save_count
    assert engine.unassign(task.id).ok
    assert gateway.save_count == saves
    assert engine.unassign("T999").kind is ErrorKind.NOT_FOUND


def test_complete_keeps_hours_counted(engine, add_task):
    worker = engine.add_worker("Ana").unwrap()
    task = add_task(hours=3)
    engine.assign(task.id, worker.id).unwrap()

    done = engine.complete(task.id).unwrap()

    assert done.completed is True
    assert done.assigned_to == worker.id
    assert engine.get_worker(worker.id).total_assigned_hours == 3
    assert engine.list_unassigned_tasks() == []


def test_complete_unassigned_and_twice_is_allowed(engine, add_task):
    task = add_task()
    assert engine.complete(task.id).ok
    assert engine.complete(task.id).ok
    assert engine.complete("T999").kind is ErrorKind.NOT_FOUND


def test_completed_task_can_still_move(engine, add_task):
    a = engine.add_worker("Ana").unwrap()
    b = engine.add_worker("Ben").unwrap()
    task = add_task(hours=2)
    engine.assign(task.id, a.id).unwrap()
    engine.complete(task.id).unwrap()

    assert engine.assign(task.id, b.id).ok
    assert engine.get_worker(a.id).total_assigned_hours == 0
    assert engine.get_worker(b.id).total_assigned_hours == 2


def test_unwrap_raises_the_error(engine, add_task):
    worker = engine.add_worker("Ana").unwrap()
    with pytest.raises(CapacityError):
        engine.assign(add_task(hours=9).id, worker.id).unwrap()
    with pytest.raises(ValidationError):
        engine.add_worker("").unwrap()


def test_returned_records_are_copies(engine, add_task):
    worker = engine.add_worker("Ana").unwrap()
    worker.total_assigned_hours = Decimal("100")
    task = add_task()
    task.assigned_to = worker.id

    assert engine.get_worker(worker.id).total_assigned_hours == 0
    assert engine.find_task(task.id).assigned_to is None


def test_rejected_operations_do_not_save(engine, gateway, add_task):
    worker = engine.add_worker("Ana").unwrap()
    task = add_task(hours=9)
    saves = gateway.save_count
    engine.assign(task.id, worker.id)
    engine.assign("T999", worker.id)
    assert gateway.save_count == saves


def test_save_failure_keeps_the_mutation(engine, gateway, add_task):
    worker = engine.add_worker("Ana").unwrap()
    task = add_task(hours=2)
    gateway.fail_saves = True

    result = engine.assign(task.id, worker.id)

    assert result.ok
    assert result.save_error is not None
    assert result.save_error.kind is ErrorKind.PERSISTENCE
    assert engine.get_worker(worker.id).total_assigned_hours == 2


def test_add_task_and_assign(engine):
    worker = engine.add_worker("Ana").unwrap()
    task = engine.add_task("Dust Lobby", "low", 2, "2025-01-10", assign_to=worker.id).unwrap()
    assert task.assigned_to == worker.id
    assert engine.get_worker(worker.id).total_assigned_hours == 2


def test_add_task_keeps_task_when_assignment_is_rejected(engine):
    worker = engine.add_worker("Ana").unwrap()
    engine.set_availability(worker.id, False)

    result = engine.add_task("Dust Lobby", "low", 2, "2025-01-10", assign_to=worker.id)

    assert result.kind is ErrorKind.AVAILABILITY
    assert result.value.id == "T001"
    assert engine.find_task("T001").assigned_to is None


def test_auto_assign_respects_capacity_and_priority(engine, add_task):
    worker = engine.add_worker("Ana").unwrap()
    low = add_task(description="Low", priority="low", hours=6)
    high = add_task(description="High", priority="high", hours=6)

    applied = engine.auto_assign().unwrap()

    assert applied == {high.id: worker.id}
    assert engine.find_task(low.id).assigned_to is None
    assert engine.get_worker(worker.id).total_assigned_hours == 6


def test_auto_assign_with_nothing_to_do(engine, gateway):
    assert engine.auto_assign().unwrap() == {}
    assert gateway.save_count == 0


def test_hours_are_conserved_across_random_operations(engine, add_task):
    rng = random.Random(7)
    workers = [engine.add_worker(f"Worker {i}").unwrap().id for i in range(4)]
    tasks = [add_task(hours=rng.choice([0.5, 1, 1.5, 2, 3, 4])).id for _ in range(15)]

    for _ in range(300):
        op = rng.random()
        task_id = rng.choice(tasks)
        if op < 0.6:
            engine.assign(task_id, rng.choice(workers))
        elif op < 0.9:
            engine.unassign(task_id)
        else:
            engine.set_availability(rng.choice(workers), rng.random() < 0.8)

        assert check_hours_consistency(engine.list_workers(), engine.list_tasks()) == []
