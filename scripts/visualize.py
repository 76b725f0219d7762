#!/usr/bin/env python3
"""
Pathfinding CLI - Run a grid search and replay it in the terminal.

Usage:
    python scripts/visualize.py --grid maze.txt --algorithm bfs
    python scripts/visualize.py --grid maze.txt --algorithm astar --animate --speed 80
    python scripts/visualize.py --grid maze.txt --compare --html comparison.html
    python scripts/visualize.py --grid maze.txt --save "Maze 1"
    python scripts/visualize.py --layout 3f2a... --algorithm dijkstra
    python scripts/visualize.py --list-layouts

Grid files use one character per cell:
    .  empty    #  wall    S  start    E  end

Algorithms:
    bfs       - Breadth-first search (shortest path)
    dfs       - Depth-first search
    dijkstra  - Uniform-cost search (shortest path)
    astar     - A* with Manhattan heuristic (shortest path)

Exit codes:
    0    search ran (whether or not a path exists)
    1    invalid grid, unknown layout or unreadable file
    130  replay interrupted
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path

from dotenv import load_dotenv

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from pathviz.config import (  # noqa: E402
    DEFAULT_SPEED,
    LOG_DATEFMT,
    LOG_FORMAT,
    MAX_SPEED,
    MIN_SPEED,
    NO_PATH_MESSAGE,
    speed_to_delay,
)
from pathviz.errors import PathvizError  # noqa: E402
from pathviz.grid import Grid, parse_grid, render_grid  # noqa: E402
from pathviz.replay import AsyncioScheduler, ReplayDriver, ReplayOutcome, record_timeline  # noqa: E402
from pathviz.search import ALGORITHMS, SearchResult, solve  # noqa: E402
from pathviz.storage import LayoutStore  # noqa: E402

logger = logging.getLogger("visualize")

CLEAR_SCREEN = "\033[2J\033[H"


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Run and replay grid pathfinding algorithms",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )

    source = parser.add_mutually_exclusive_group(required=True)
    source.add_argument(
        "--grid",
        type=Path,
        help="Plain-text grid file",
    )
    source.add_argument(
        "--layout",
        type=str,
        help="Id of a saved layout",
    )
    source.add_argument(
        "--list-layouts",
        action="store_true",
        help="List saved layouts and exit",
    )

    parser.add_argument(
        "--algorithm",
        "-a",
        type=str,
        default="bfs",
        choices=["bfs", "dfs", "dijkstra", "astar"],
        help="Algorithm to run (default: bfs)",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Run every algorithm and print a summary table",
    )
    parser.add_argument(
        "--animate",
        action="store_true",
        help="Replay the search cell by cell in the terminal",
    )
    parser.add_argument(
        "--speed",
        type=int,
        default=DEFAULT_SPEED,
        help=f"Replay speed {MIN_SPEED}-{MAX_SPEED} (default: {DEFAULT_SPEED})",
    )
    parser.add_argument(
        "--save",
        type=str,
        metavar="NAME",
        help="Save the grid as a named layout",
    )
    parser.add_argument(
        "--html",
        type=Path,
        help="Write a Plotly HTML figure of the result (or comparison)",
    )
    parser.add_argument(
        "--store",
        type=Path,
        default=None,
        help="Layout store file (default: data/layouts.msgpack)",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose logging",
    )

    return parser.parse_args(argv)


async def animate(grid: Grid, result: SearchResult, delay_ms: float) -> ReplayOutcome:
    """Replay result in the terminal, redrawing the grid on every reveal."""
    loop = asyncio.get_running_loop()
    finished: asyncio.Future[ReplayOutcome] = loop.create_future()

    def redraw(_event) -> None:
        print(CLEAR_SCREEN + render_grid(driver.display), flush=True)

    driver = ReplayDriver(
        AsyncioScheduler(loop),
        grid=grid,
        on_reveal=redraw,
        on_finish=finished.set_result,
        delay_ms=delay_ms,
    )
    driver.start(result)
    return await finished


def print_result(grid: Grid, result: SearchResult, delay_ms: float) -> None:
    """Print the final replay state and a short summary."""
    events, outcome = record_timeline(grid, result, delay_ms=delay_ms)
    final = grid.with_cells((e.coordinate, e.cell_type) for e in events)

    print(render_grid(final))
    print()
    print(f"Algorithm: {result.algorithm}")
    print(f"Visited:   {outcome.visited_count} cells")
    if outcome.found:
        print(f"Path:      {outcome.path_length} steps")
    else:
        print(NO_PATH_MESSAGE)
    if events:
        print(f"Replay:    {events[-1].at_ms / 1000:.2f}s at {delay_ms:g} ms/cell")


def print_comparison(results: list[SearchResult]) -> None:
    """Print one row per algorithm."""
    print(f"{'Algorithm':<10} {'Visited':>8} {'Path':>6}")
    print("-" * 26)
    for r in results:
        path = str(r.path_length) if r.found else "-"
        print(f"{r.algorithm:<10} {len(r.visited):>8} {path:>6}")


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    load_dotenv()
    args = parse_args(argv)

    # Set up logging
    log_level = logging.DEBUG if args.verbose else logging.WARNING
    logging.basicConfig(level=log_level, format=LOG_FORMAT, datefmt=LOG_DATEFMT)

    store = LayoutStore(args.store) if args.store else LayoutStore()

    if args.list_layouts:
        layouts = store.list()
        if not layouts:
            print("No saved layouts")
        for summary in layouts:
            print(f"{summary.id}  {summary.created_at:%Y-%m-%d %H:%M}  {summary.name}")
        return 0

    try:
        if args.grid:
            grid = parse_grid(args.grid.read_text(encoding="utf-8"))
        else:
            grid = store.load(args.layout).grid

        if args.save:
            layout_id = store.save(args.save, grid)
            print(f"Saved layout '{args.save}' as {layout_id}")

        delay_ms = speed_to_delay(args.speed)

        if args.compare:
            results = [solve(name, grid) for name in ALGORITHMS]
            print_comparison(results)
            if args.html:
                from ui.components.charts import create_comparison_chart

                create_comparison_chart(results).write_html(str(args.html))
                print(f"\nWrote {args.html}")
            return 0

        result = solve(args.algorithm, grid)
    except PathvizError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    if args.animate:
        try:
            outcome = asyncio.run(animate(grid, result, delay_ms))
        except KeyboardInterrupt:
            print("\n\nReplay interrupted by user")
            return 130
        print()
        print(NO_PATH_MESSAGE if not outcome.found else f"Path: {outcome.path_length} steps")
    else:
        print_result(grid, result, delay_ms)

    if args.html:
        from ui.components.charts import create_grid_figure

        events, _ = record_timeline(grid, result, delay_ms=delay_ms)
        final = grid.with_cells((e.coordinate, e.cell_type) for e in events)
        create_grid_figure(final, title=result.algorithm).write_html(str(args.html))
        print(f"\nWrote {args.html}")

    return 0


if __name__ == "__main__":
    sys.exit(main())
