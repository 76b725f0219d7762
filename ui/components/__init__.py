"""
UI components: Plotly figure builders.
"""
