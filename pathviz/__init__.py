"""
Grid Pathfinding Visualizer.

Runs breadth-first, depth-first, Dijkstra and A* searches over an editable
grid and replays their exploration order cell by cell.
"""

__version__ = "0.1.0"
