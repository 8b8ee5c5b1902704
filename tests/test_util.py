from collections import Counter

import pytest

from blockfall.util import (
    MAX_SORT_LENGTH,
    Vector2,
    Vector3,
    num_to_power,
    random_range,
    seed_rng,
    sort_list,
)


def test_vector2_add_then_subtract_round_trips():
    a = Vector2(7, -3)
    b = Vector2(2, 5)
    assert (a + b) - b == a
    assert (a - b) + b == a


def test_vector2_add_componentwise():
    assert Vector2(1, 2) + Vector2(3, 4) == Vector2(4, 6)


def test_vector2_add_is_commutative():
    a = Vector2(9, 1)
    b = Vector2(-4, 8)
    assert a + b == b + a


def test_vector2_rejects_other_types():
    with pytest.raises(TypeError):
        Vector2(1, 1) + (1, 1)


def test_vector3_equality_by_value():
    assert Vector3(100, 181, 246) == Vector3(100, 181, 246)
    assert Vector3(100, 181, 246).z == 246


def test_random_range_stays_inclusive_in_bounds():
    seed_rng(1)
    seen = {random_range(0, 6) for _ in range(500)}
    assert seen <= set(range(7))
    assert 0 in seen and 6 in seen


def test_random_range_single_value():
    assert random_range(3, 3) == 3


def test_random_range_empty_raises():
    with pytest.raises(ValueError):
        random_range(5, 4)


def test_seed_rng_reproducible():
    seed_rng(42)
    first = [random_range(0, 100) for _ in range(20)]
    seed_rng(42)
    second = [random_range(0, 100) for _ in range(20)]
    assert first == second


def test_sort_list_small_example():
    assert sort_list([3, 1, 2]) == [1, 2, 3]


def test_sort_list_invariants():
    values = [5, -2, 9, 0, 5, 3, -2, 11, 7]
    result = sort_list(values)
    assert all(a <= b for a, b in zip(result, result[1:]))
    assert Counter(result) == Counter(values)


def test_sort_list_does_not_mutate_input():
    values = [4, 3, 2, 1]
    sort_list(values)
    assert values == [4, 3, 2, 1]


def test_sort_list_empty():
    assert sort_list([]) == []


def test_sort_list_over_limit_is_unchanged():
    values = list(range(MAX_SORT_LENGTH + 1, 0, -1))
    assert sort_list(values) == values


def test_num_to_power_base_ten():
    assert num_to_power(10, 3) == 1000


def test_num_to_power_power_one_is_identity():
    assert num_to_power(7, 1) == 7


def test_num_to_power_below_one_leaves_num():
    assert num_to_power(7, 0) == 7
    assert num_to_power(7, -2) == 7


def test_num_to_power_matches_repeated_product():
    assert num_to_power(3, 4) == num_to_power(3, 2) * num_to_power(3, 2)