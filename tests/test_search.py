"""
Unit and property tests for the four grid searches and the dispatch boundary.
"""

import random
from collections import deque

import pytest

from pathviz.errors import InvalidGrid, MissingEndpoint, UnknownAlgorithm
from pathviz.grid import CellType, Grid, is_adjacent, parse_grid
from pathviz.search import ALGORITHMS, astar, bfs, dfs, dijkstra, get_algorithm, run, solve

ALL_ALGORITHMS = list(ALGORITHMS)


def reference_distances(grid: Grid, start):
    """Edge distance from start to every reachable non-wall cell."""
    dist = {start: 0}
    queue = deque([start])
    while queue:
        r, c = queue.popleft()
        for nr, nc in ((r - 1, c), (r + 1, c), (r, c - 1), (r, c + 1)):
            if 0 <= nr < grid.rows and 0 <= nc < grid.cols and grid[nr, nc] != CellType.WALL:
                if (nr, nc) not in dist:
                    dist[(nr, nc)] = dist[(r, c)] + 1
                    queue.append((nr, nc))
    return dist


def random_grid(rng: random.Random, rows: int, cols: int, density: float) -> Grid:
    """Random walls with START and END on distinct open cells."""
    cells = [[1 if rng.random() < density else 0 for _ in range(cols)] for _ in range(rows)]
    open_cells = [(r, c) for r in range(rows) for c in range(cols) if cells[r][c] == 0]
    if len(open_cells) < 2:
        cells[0][0], cells[rows - 1][cols - 1] = 0, 0
        open_cells = [(0, 0), (rows - 1, cols - 1)]
    (sr, sc), (er, ec) = rng.sample(open_cells, 2)
    cells[sr][sc] = int(CellType.START)
    cells[er][ec] = int(CellType.END)
    return Grid.from_rows(cells)


@pytest.fixture(scope="module")
def random_grids() -> list[Grid]:
    """Deterministic batch of random grids, solvable and not."""
    rng = random.Random(1234)
    return [random_grid(rng, rng.randint(2, 12), rng.randint(2, 12), rng.choice([0.0, 0.2, 0.35])) for _ in range(60)]


class TestScenarios:
    """Hand-checked scenarios."""

    def test_open_3x3_bfs(self, open_grid):
        """BFS on an empty 3x3 grid finds a 4-edge path."""
        result = bfs(open_grid, (0, 0), (2, 2))
        assert len(result.path) == 5
        assert result.path_length == 4
        assert len(result.visited) <= 9

    def test_open_3x3_bfs_exact_order(self, open_grid):
        """BFS visited order follows the FIFO queue and canonical neighbor order."""
        result = bfs(open_grid, (0, 0), (2, 2))
        assert result.visited == (
            (0, 0), (1, 0), (0, 1), (2, 0), (1, 1), (0, 2), (2, 1), (1, 2), (2, 2),
        )
        assert result.path == ((0, 0), (1, 0), (2, 0), (2, 1), (2, 2))

    def test_open_3x3_dfs_exact_order(self, open_grid):
        """DFS explores Up, Down, Left, Right depth-first."""
        result = dfs(open_grid, (0, 0), (2, 2))
        expected = ((0, 0), (1, 0), (2, 0), (2, 1), (1, 1), (0, 1), (0, 2), (1, 2), (2, 2))
        assert result.visited == expected
        assert result.path == expected

    def test_open_3x3_dijkstra_ties_in_push_order(self, open_grid):
        """Equal distances pop in push order on an open grid."""
        result = dijkstra(open_grid, (0, 0), (2, 2))
        assert result.visited == (
            (0, 0), (1, 0), (0, 1), (2, 0), (1, 1), (0, 2), (2, 1), (1, 2), (2, 2),
        )
        assert result.path == ((0, 0), (1, 0), (2, 0), (2, 1), (2, 2))

    def test_astar_goes_straight_when_unobstructed(self):
        """A* on an open grid should only expand cells on optimal routes."""
        grid = Grid.empty(5, 5)
        result = astar(grid, (0, 0), (0, 4))
        assert result.visited == ((0, 0), (0, 1), (0, 2), (0, 3), (0, 4))

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_wall_column_blocks_everything(self, walled_grid, algorithm):
        """A full wall column makes the end unreachable for every algorithm."""
        result = run(algorithm, walled_grid, (0, 0), (0, 4))
        assert result.path == ()
        assert not result.found
        assert result.path_length is None
        assert set(result.visited) == {(r, c) for r in range(5) for c in range(2)}

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_straight_row_identical_paths(self, algorithm):
        """A single unobstructed row gives the same 5-cell path everywhere."""
        grid = parse_grid("S...E")
        result = run(algorithm, grid, (0, 0), (0, 4))
        assert result.path == ((0, 0), (0, 1), (0, 2), (0, 3), (0, 4))

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_start_equals_end(self, algorithm):
        """Searching from a cell to itself returns a one-cell path."""
        grid = Grid.empty(3)
        result = run(algorithm, grid, (1, 1), (1, 1))
        assert result.path == ((1, 1),)
        assert result.visited == ((1, 1),)
        assert result.path_length == 0

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_enclosed_end_visits_whole_component(self, algorithm):
        """An end boxed in by walls leaves visited equal to start's component."""
        grid = parse_grid(
            """
            S....
            ...#.
            ..#E#
            ...#.
            .....
            """
        )
        result = run(algorithm, grid, (0, 0), (2, 3))
        assert result.path == ()
        assert set(result.visited) == set(reference_distances(grid, (0, 0)))
        assert len(result.visited) == len(set(result.visited))

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_maze_shortest_paths(self, maze_grid, algorithm):
        """Shortest-path algorithms match the reference distance on a maze."""
        start, end = maze_grid.endpoints()
        result = run(algorithm, maze_grid, start, end)
        assert result.found
        if ALGORITHMS[algorithm].shortest_path:
            assert result.path_length == reference_distances(maze_grid, start)[end]

    def test_result_records_algorithm(self, open_grid):
        """Each result should carry the algorithm's display name."""
        for name in ALL_ALGORITHMS:
            assert solve(name, open_grid).algorithm == name

    def test_result_to_dict(self, open_grid):
        """to_dict should give JSON-friendly lists."""
        data = bfs(open_grid, (0, 0), (2, 2)).to_dict()
        assert data["found"] is True
        assert data["path"][0] == [0, 0]
        assert data["visited"][-1] == [2, 2]


class TestProperties:
    """Invariants checked over a batch of random grids."""

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_visited_in_bounds_non_wall_unique(self, random_grids, algorithm):
        """Visited cells are in bounds, never walls, and never repeated."""
        for grid in random_grids:
            start, end = grid.endpoints()
            result = run(algorithm, grid, start, end)
            assert result.visited[0] == start
            assert len(result.visited) == len(set(result.visited))
            for r, c in result.visited:
                assert grid.in_bounds(r, c)
                assert grid[r, c] != CellType.WALL

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_paths_are_valid_routes(self, random_grids, algorithm):
        """Paths run start to end through adjacent, open, distinct cells."""
        for grid in random_grids:
            start, end = grid.endpoints()
            result = run(algorithm, grid, start, end)
            if not result.found:
                continue
            assert result.path[0] == start
            assert result.path[-1] == end
            assert len(result.path) == len(set(result.path))
            for a, b in zip(result.path, result.path[1:]):
                assert is_adjacent(a, b)
                assert grid[b] != CellType.WALL

    def test_bfs_is_optimal(self, random_grids):
        """BFS path length equals the reference shortest distance."""
        for grid in random_grids:
            start, end = grid.endpoints()
            dist = reference_distances(grid, start)
            result = bfs(grid, start, end)
            if end in dist:
                assert result.path_length == dist[end]
            else:
                assert result.path == ()
                assert set(result.visited) == set(dist)

    def test_bfs_and_dijkstra_agree_on_length(self, random_grids):
        """Uniform cost makes Dijkstra and BFS paths equally long."""
        for grid in random_grids:
            start, end = grid.endpoints()
            assert bfs(grid, start, end).path_length == dijkstra(grid, start, end).path_length

    def test_astar_optimal_and_no_wider_than_dijkstra(self, random_grids):
        """A* finds optimal paths while visiting no more cells than Dijkstra."""
        for grid in random_grids:
            start, end = grid.endpoints()
            a = astar(grid, start, end)
            d = dijkstra(grid, start, end)
            assert a.path_length == d.path_length
            assert len(a.visited) <= len(d.visited)

    @pytest.mark.parametrize("algorithm", ALL_ALGORITHMS)
    def test_deterministic(self, random_grids, algorithm):
        """Identical inputs give identical results."""
        grid = random_grids[0]
        start, end = grid.endpoints()
        first = run(algorithm, grid, start, end)
        second = run(algorithm, grid, start, end)
        assert first.visited == second.visited
        assert first.path == second.path

    def test_grid_not_mutated(self, random_grids):
        """Searches never write to the grid."""
        grid = random_grids[1]
        before = grid.to_rows()
        for name in ALL_ALGORITHMS:
            solve(name, grid)
        assert grid.to_rows() == before


class TestDispatch:
    """Test run/solve validation and algorithm lookup."""

    @pytest.mark.parametrize(
        "name, expected",
        [("BFS", "BFS"), ("bfs", "BFS"), ("DFS", "DFS"), ("dijkstra", "Dijkstra"),
         ("A*", "A*"), ("astar", "A*"), ("a-star", "A*"), (" Dijkstra ", "Dijkstra")],
    )
    def test_lookup_aliases(self, name, expected):
        """Names are case-insensitive and accept A* aliases."""
        assert get_algorithm(name).name == expected

    def test_unknown_algorithm(self, open_grid):
        """Unknown names are rejected at the dispatch boundary."""
        with pytest.raises(UnknownAlgorithm, match="Available"):
            run("greedy", open_grid, (0, 0), (2, 2))

    def test_unknown_algorithm_checked_before_grid(self):
        """Dispatch rejects the name even if the grid is also bad."""
        with pytest.raises(UnknownAlgorithm):
            solve("greedy", Grid.empty(2))

    def test_start_out_of_bounds(self, open_grid):
        """Endpoints outside the grid raise InvalidGrid."""
        with pytest.raises(InvalidGrid, match="Start"):
            run("BFS", open_grid, (5, 0), (2, 2))

    def test_end_on_wall(self, walled_grid):
        """Endpoints on walls raise InvalidGrid."""
        with pytest.raises(InvalidGrid, match="wall"):
            run("BFS", walled_grid, (0, 0), (0, 2))

    def test_not_a_grid(self):
        """Raw matrices must go through Grid.from_rows first."""
        with pytest.raises(InvalidGrid):
            run("BFS", [[2, 3]], (0, 0), (0, 1))

    def test_solve_missing_endpoint(self):
        """solve() needs START and END cells."""
        with pytest.raises(MissingEndpoint):
            solve("BFS", parse_grid("S.."))

    def test_errors_are_value_errors(self, open_grid):
        """Engine errors can be caught as ValueError."""
        with pytest.raises(ValueError):
            run("nope", open_grid, (0, 0), (2, 2))

    def test_catalogue(self):
        """Every algorithm is described, and only DFS lacks the optimality guarantee."""
        assert list(ALGORITHMS) == ["BFS", "DFS", "Dijkstra", "A*"]
        assert [name for name, info in ALGORITHMS.items() if not info.shortest_path] == ["DFS"]
        assert ALGORITHMS["DFS"].frontier == "stack"
        assert set(ALGORITHMS["A*"].to_dict()) == {"name", "frontier", "shortest_path", "description", "best_for"}
