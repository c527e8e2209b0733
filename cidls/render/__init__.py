"""Text rendering of listing output."""

from .tabwriter import ColumnWriter
from .tabular import TabularRenderer, render_unit, write_unit

__all__ = [
    'ColumnWriter',
    'TabularRenderer',
    'render_unit',
    'write_unit',
]
