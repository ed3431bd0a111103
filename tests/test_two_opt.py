import random

from src.route_planner.models.domain import Waypoint
from src.route_planner.services.routing.matrix import build_distance_matrix, path_length
from src.route_planner.services.routing.two_opt import optimize_order, two_opt_swap


def _waypoint(wid: str, lat: float, lng: float) -> Waypoint:
    return Waypoint(id=wid, name=f"Place {wid}", lat=lat, lng=lng)


def _random_waypoints(count: int, seed: int) -> list[Waypoint]:
    rng = random.Random(seed)
    return [
        _waypoint(f"W{index}", 37.45 + rng.random() * 0.2, 126.85 + rng.random() * 0.3)
        for index in range(count)
    ]


def test_build_distance_matrix_is_symmetric_with_zero_diagonal():
    waypoints = _random_waypoints(6, seed=1)
    matrix = build_distance_matrix(waypoints)

    assert len(matrix) == 6
    for i in range(6):
        assert matrix[i][i] == 0
        for j in range(6):
            assert matrix[i][j] == matrix[j][i]
            assert matrix[i][j] >= 0


def test_build_distance_matrix_empty():
    assert build_distance_matrix([]) == []


def test_path_length_is_open_path_sum():
    matrix = [
        [0, 1, 5],
        [1, 0, 2],
        [5, 2, 0],
    ]
    assert path_length([0, 1, 2], matrix) == 3
    assert path_length([2, 0, 1], matrix) == 6
    assert path_length([1], matrix) == 0
    assert path_length([], matrix) == 0


def test_two_opt_swap_reverses_inner_segment():
    assert two_opt_swap([0, 1, 2, 3, 4], 0, 3) == [0, 3, 2, 1, 4]
    assert two_opt_swap([0, 1, 2, 3, 4], 1, 4) == [0, 1, 4, 3, 2]
    original = [0, 1, 2, 3]
    two_opt_swap(original, 0, 2)
    assert original == [0, 1, 2, 3]


def test_small_inputs_are_returned_unchanged():
    assert optimize_order([]).order == []
    assert optimize_order([[0.0]]).order == [0]

    result = optimize_order([[0.0, 4.0], [4.0, 0.0]])
    assert result.order == [0, 1]
    assert result.length == 4.0
    assert result.iterations == 0
    assert result.converged


def test_untangles_crossed_path():
    waypoints = [
        _waypoint("A", 37.50, 127.0),
        _waypoint("C", 37.52, 127.0),
        _waypoint("B", 37.51, 127.0),
        _waypoint("D", 37.53, 127.0),
    ]
    matrix = build_distance_matrix(waypoints)

    result = optimize_order(matrix)

    assert [waypoints[index].id for index in result.order] == ["A", "B", "C", "D"]
    assert result.iterations == 2
    assert result.converged
    assert result.length < path_length([0, 1, 2, 3], matrix)


def test_local_optimum_is_left_unchanged():
    waypoints = [
        _waypoint("A", 37.50, 127.0),
        _waypoint("B", 37.51, 127.0),
        _waypoint("C", 37.52, 127.0),
        _waypoint("D", 37.53, 127.0),
    ]
    matrix = build_distance_matrix(waypoints)
    identity_length = path_length([0, 1, 2, 3], matrix)

    result = optimize_order(matrix)

    assert result.order == [0, 1, 2, 3]
    assert result.length == identity_length
    assert result.iterations == 1
    assert result.converged


def test_first_improvement_takes_first_pair_in_scan_order():
    # (0, 2) saves 1 and is scanned first; (0, 3) would save 9.
    matrix = [
        [0, 10, 5, 1],
        [10, 0, 1, 5],
        [5, 1, 0, 1],
        [1, 5, 1, 0],
    ]
    assert path_length([0, 1, 2, 3], matrix) == 12
    assert path_length([0, 2, 1, 3], matrix) == 11
    assert path_length([0, 3, 2, 1], matrix) == 3

    one_pass = optimize_order(matrix, max_iterations=1)

    assert one_pass.order == [0, 2, 1, 3]
    assert one_pass.length == 11
    assert one_pass.iterations == 1
    assert not one_pass.converged

    # [0, 2, 1, 3] -> (0, 3) gives [0, 3, 1, 2] -> (1, 3) gives [0, 3, 2, 1]
    full = optimize_order(matrix)

    assert full.order == [0, 3, 2, 1]
    assert full.length == 3
    assert full.iterations == 4
    assert full.converged


def test_never_longer_than_identity():
    for seed in range(5):
        matrix = build_distance_matrix(_random_waypoints(12, seed=seed))
        result = optimize_order(matrix)

        assert sorted(result.order) == list(range(12))
        assert result.length <= path_length(list(range(12)), matrix)
        assert result.length == path_length(result.order, matrix)


def test_respects_seeded_initial_order():
    matrix = build_distance_matrix(_random_waypoints(8, seed=3))
    seed_order = [7, 6, 5, 4, 3, 2, 1, 0]

    result = optimize_order(matrix, seed_order)

    assert sorted(result.order) == list(range(8))
    assert result.length <= path_length(seed_order, matrix)


def test_iteration_cap_terminates_with_valid_permutation():
    matrix = build_distance_matrix(_random_waypoints(30, seed=7))

    result = optimize_order(matrix, max_iterations=3)

    assert result.iterations == 3
    assert not result.converged
    assert sorted(result.order) == list(range(30))
    assert result.length < path_length(list(range(30)), matrix)


def test_default_cap_bounds_large_inputs():
    matrix = build_distance_matrix(_random_waypoints(40, seed=11))

    result = optimize_order(matrix)

    assert result.iterations <= 100
    assert sorted(result.order) == list(range(40))
    assert result.length <= path_length(list(range(40)), matrix)


def test_repeated_runs_are_identical():
    matrix = build_distance_matrix(_random_waypoints(15, seed=5))

    first = optimize_order(matrix)
    second = optimize_order(matrix)

    assert first == second


def test_stop_hook_does_not_change_completed_runs():
    matrix = build_distance_matrix(_random_waypoints(15, seed=9))

    plain = optimize_order(matrix)
    hooked = optimize_order(matrix, should_stop=lambda: False)

    assert plain == hooked


def test_stop_hook_cancels_between_passes():
    matrix = build_distance_matrix(_random_waypoints(15, seed=9))
    calls = []

    def stop_after_two_passes() -> bool:
        calls.append(1)
        return len(calls) > 2

    result = optimize_order(matrix, should_stop=stop_after_two_passes)

    assert result.cancelled
    assert not result.converged
    assert result.iterations == 2
    assert sorted(result.order) == list(range(15))
    assert result.length <= path_length(list(range(15)), matrix)
