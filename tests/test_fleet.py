import pytest

from salvo.errors import InvariantViolation
from salvo.fleet import FleetTracker


def test_derived_sizes():
    fleet = FleetTracker([4, 3, 3, 2])
    assert (fleet.max_size, fleet.second_max_size, fleet.min_size) == (4, 3, 2)
    assert not fleet.is_single_size_fleet()
    assert len(fleet) == 4


def test_second_max_is_distinct():
    fleet = FleetTracker([3, 3, 1])
    assert fleet.second_max_size == 1


def test_single_size_fleet():
    fleet = FleetTracker([2, 2, 2])
    assert fleet.second_max_size == 0
    assert fleet.is_single_size_fleet()


def test_remove_one_occurrence():
    fleet = FleetTracker([3, 3, 2])
    fleet.remove(3)
    assert fleet.remaining == (3, 2)
    fleet.remove(3)
    assert fleet.remaining == (2,)
    assert (fleet.max_size, fleet.second_max_size, fleet.min_size) == (2, 0, 2)


def test_remove_is_monotone():
    fleet = FleetTracker([4, 3, 3, 2, 2, 1])
    for length in (3, 1, 4, 2, 3, 2):
        before = (len(fleet), fleet.max_size, fleet.second_max_size, fleet.min_size)
        fleet.remove(length)
        assert len(fleet) == before[0] - 1
        assert fleet.max_size <= before[1]
        assert fleet.second_max_size <= before[2]
        # the smallest size can only grow as ships leave
        assert fleet.min_size >= before[3] or fleet.is_empty()


def test_empty_fleet_sizes_are_zero():
    fleet = FleetTracker([1])
    fleet.remove(1)
    assert fleet.is_empty()
    assert (fleet.max_size, fleet.second_max_size, fleet.min_size) == (0, 0, 0)


def test_remove_absent_length():
    fleet = FleetTracker([3, 2])
    with pytest.raises(InvariantViolation):
        fleet.remove(4)
    assert fleet.remaining == (3, 2)


def test_rejects_non_positive_lengths():
    with pytest.raises(InvariantViolation):
        FleetTracker([3, 0])
