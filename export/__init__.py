"""Export-Modul: Terminal-Darstellung (Rich) des Wochenrasters."""

from export.tui_renderer import build_grid_table, render_cell, render_grid_rows

__all__ = ["build_grid_table", "render_cell", "render_grid_rows"]
