"""
Plotly figures for grids and algorithm comparisons.
"""

import plotly.graph_objects as go

from pathviz.grid import CellType, Grid
from pathviz.search import SearchResult

# Same palette as the web page
CELL_COLORS = {
    CellType.EMPTY: "#ffffff",
    CellType.WALL: "#1f2937",
    CellType.START: "#22c55e",
    CellType.END: "#ef4444",
    CellType.VISITED: "#93c5fd",
    CellType.PATH: "#fde047",
}


def _discrete_colorscale() -> list[list]:
    """Step colorscale mapping each CellType value to its own color band."""
    n = len(CELL_COLORS)
    scale = []
    for i, cell in enumerate(CellType):
        scale.append([i / n, CELL_COLORS[cell]])
        scale.append([(i + 1) / n, CELL_COLORS[cell]])
    return scale


def create_grid_figure(grid: Grid, title: str = "Grid") -> go.Figure:
    """Heatmap of a grid with one color per cell type, row 0 at the top."""
    names = [[CellType(int(v)).name.lower() for v in row] for row in grid.cells]

    fig = go.Figure(data=go.Heatmap(
        z=grid.cells.tolist(),
        customdata=names,
        colorscale=_discrete_colorscale(),
        zmin=-0.5,
        zmax=len(CELL_COLORS) - 0.5,
        showscale=False,
        xgap=1,
        ygap=1,
        hovertemplate="(%{y}, %{x}) %{customdata}<extra></extra>",
    ))

    size = max(300, min(800, 24 * max(grid.rows, grid.cols)))
    fig.update_layout(
        title=title,
        height=size,
        width=size,
        margin=dict(t=40, b=20, l=20, r=20),
        plot_bgcolor="#e5e7eb",
    )
    fig.update_yaxes(autorange="reversed", showticklabels=False, scaleanchor="x")
    fig.update_xaxes(showticklabels=False)
    return fig


def create_comparison_chart(results: list[SearchResult]) -> go.Figure:
    """Grouped bars: cells visited and path length per algorithm."""
    names = [r.algorithm for r in results]

    fig = go.Figure(data=[
        go.Bar(name="Visited", x=names, y=[len(r.visited) for r in results], marker_color="#3498db"),
        go.Bar(name="Path", x=names, y=[r.path_length or 0 for r in results], marker_color="#f1c40f"),
    ])

    fig.update_layout(
        title="Algorithm Comparison",
        yaxis_title="Cells",
        barmode="group",
        height=280,
        margin=dict(t=35, b=45, l=45, r=15),
    )
    return fig
