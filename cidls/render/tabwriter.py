"""Column-aligning text writer.

Rows are lists of cells. Every cell but the last one of a row belongs to a
column; consecutive rows that have a cell in the same column form a column
block and share its width. The last cell of a row is written as-is, and a
row with a single cell (a label, a blank line) ends every open block.

Nothing is written until flush(), which is what lets a batch listing get
exact alignment while an incremental one only aligns within each flush.
"""

from typing import List, TextIO


class ColumnWriter:
    """Buffers rows and writes them with aligned, left-justified columns."""

    def __init__(
        self,
        output: TextIO,
        min_width: int = 0,
        padding: int = 1,
        pad_char: str = ' '
    ):
        """Initialize writer.

        Args:
            output: Text stream receiving aligned lines
            min_width: Minimum column width, padding included
            padding: Spaces added to the widest cell of a column
            pad_char: Character used for padding
        """
        self.output = output
        self.min_width = min_width
        self.padding = padding
        self.pad_char = pad_char
        self._lines: List[List[str]] = []

    def write_row(self, *cells: str):
        """Buffer a row of cells."""
        self._lines.append([str(cell) for cell in cells] or [''])

    def write_line(self, text: str = ''):
        """Buffer a single-cell line, such as a label or a blank line."""
        self._lines.append([text])

    def flush(self):
        """Write every buffered row and reset the buffer."""
        out: List[str] = []
        self._format(0, len(self._lines), [], out)
        self._lines = []
        self.output.write(''.join(out))

    def _format(self, line0: int, line1: int, widths: List[int], out: List[str]):
        column = len(widths)
        this = line0
        while this < line1:
            if column >= len(self._lines[this]) - 1:
                this += 1
                continue

            # This row opens a block in `column`; rows before it are done
            self._write_lines(line0, this, widths, out)
            line0 = this

            width = self.min_width
            while this < line1:
                line = self._lines[this]
                if column >= len(line) - 1:
                    break
                width = max(width, len(line[column]) + self.padding)
                this += 1

            self._format(line0, this, widths + [width], out)
            line0 = this

        self._write_lines(line0, line1, widths, out)

    def _write_lines(self, line0: int, line1: int, widths: List[int], out: List[str]):
        for line in self._lines[line0:line1]:
            parts = []
            for j, cell in enumerate(line):
                parts.append(cell)
                if j < len(widths) and j < len(line) - 1:
                    parts.append(self.pad_char * max(widths[j] - len(cell), 0))
            parts.append('\n')
            out.append(''.join(parts))
