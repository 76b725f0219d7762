"""
Web UI module.

Provides the browser front end for the Grid Pathfinding Visualizer:
- flask_app: Grid editor page and JSON API
- components.charts: Plotly grid and comparison figures
"""
