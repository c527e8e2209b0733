"""Human-readable rendering of listing output.

Turns OutputUnits into aligned text. Rendering is a pure function of the
unit, the options and the last group key seen by the previous call; the
key is returned so callers rendering a stream of units one at a time can
thread it through and avoid repeating group labels and headers.
"""

import io
import warnings
from typing import Callable, Optional, TextIO, Tuple

from ..config import RenderOptions, CELL_PADDING
from ..encoding import IdentityEncoder, escape_non_printable
from ..errors import MalformedEntryWarning
from ..model import EntryRecord, OutputUnit
from .tabwriter import ColumnWriter


def render_unit(
    unit: OutputUnit,
    last_group_key: str = '',
    options: Optional[RenderOptions] = None,
    encode: Optional[Callable[[str], str]] = None
) -> Tuple[str, str]:
    """Render one OutputUnit as aligned text.

    Args:
        unit: Unit to render
        last_group_key: Group key of the last group rendered by a previous
            call ('' if none)
        options: Layout switches (defaults to RenderOptions())
        encode: Identifier encoder (identity if None)

    Returns:
        Tuple of (text, new last group key)
    """
    buffer = io.StringIO()
    last_group_key = write_unit(buffer, unit, last_group_key, options, encode)
    return buffer.getvalue(), last_group_key


def write_unit(
    output: TextIO,
    unit: OutputUnit,
    last_group_key: str = '',
    options: Optional[RenderOptions] = None,
    encode: Optional[Callable[[str], str]] = None
) -> str:
    """Render one OutputUnit straight to a text stream.

    Returns:
        New last group key
    """
    options = options or RenderOptions()
    encode = encode or IdentityEncoder()
    writer = ColumnWriter(output, min_width=options.min_cell_width, padding=CELL_PADDING)

    for group in unit.groups:
        if not options.ignore_breaks and group.group_key != last_group_key:
            if options.multiple_groups:
                if last_group_key != '':
                    writer.write_line()
                writer.write_line(f"{group.group_key}:")
            if options.headers:
                if options.size:
                    writer.write_row('Hash', 'Size', 'Name')
                else:
                    writer.write_row('Hash', 'Name')
            last_group_key = group.group_key

        for entry in group.entries:
            writer.write_row(*_entry_cells(entry, options, encode))

    writer.flush()
    return last_group_key


def _entry_cells(entry: EntryRecord, options: RenderOptions, encode) -> Tuple[str, ...]:
    name = entry.name
    if not isinstance(name, str) or not name:
        warnings.warn(f"Entry without a name (hash {entry.identifier!r})", MalformedEntryWarning)
        name = name if isinstance(name, str) else ''

    identifier = entry.identifier
    if not isinstance(identifier, str) or not identifier:
        warnings.warn(f"Entry {name!r} has no hash", MalformedEntryWarning)
        display_hash = ''
    else:
        display_hash = encode(identifier)

    name = escape_non_printable(name)

    if entry.is_directory:
        if options.size:
            return display_hash, '-', name + '/'
        return display_hash, name + '/'

    if not options.size:
        return display_hash, name

    size = entry.size
    if not isinstance(size, int) or isinstance(size, bool) or size < 0:
        warnings.warn(f"Entry {name!r} has invalid size {size!r}", MalformedEntryWarning)
        size = 0
    return display_hash, str(size), name


class TabularRenderer:
    """Renders a sequence of units to a text stream.

    Keeps the last group key between calls so units arriving one by one
    (streaming) still get a single label and header per group.
    """

    def __init__(
        self,
        output: TextIO,
        options: Optional[RenderOptions] = None,
        encode: Optional[Callable[[str], str]] = None,
        last_group_key: str = ''
    ):
        self.output = output
        self.options = options or RenderOptions()
        self.encode = encode or IdentityEncoder()
        self.last_group_key = last_group_key

    def render(self, unit: OutputUnit) -> str:
        """Render one unit and return the new last group key."""
        self.last_group_key = write_unit(
            self.output, unit, self.last_group_key, self.options, self.encode
        )
        return self.last_group_key
