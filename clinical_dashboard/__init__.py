"""Plotly figure data for clinical review sessions: action timelines, visual attention and local session folders."""

__version__ = "0.1.0"