"""Display encodings for identifiers and entry names.

Identifiers are stored as given by the store and only encoded at output
time. Entry names are escaped so control characters can't corrupt the
terminal or the column layout.
"""

import base64
from abc import ABC, abstractmethod

from .config import SUPPORTED_CID_BASES


class CidEncoder(ABC):
    """Turns a stored identifier into its display string."""

    @abstractmethod
    def encode(self, identifier: str) -> str:
        pass

    def __call__(self, identifier: str) -> str:
        return self.encode(identifier)


class IdentityEncoder(CidEncoder):
    """Shows identifiers exactly as the store reported them."""

    def encode(self, identifier: str) -> str:
        return identifier


class MultibaseEncoder(CidEncoder):
    """Re-encodes identifiers in a multibase form.

    Hex identifiers (as produced by hashing stores) are decoded to their
    digest bytes first; anything else is encoded from its UTF-8 bytes.
    """

    PREFIXES = {
        'base16': 'f',
        'base32': 'b',
    }

    def __init__(self, base: str = 'base32'):
        if base not in self.PREFIXES:
            raise ValueError(f"Unknown multibase: {base}")
        self.base = base

    def encode(self, identifier: str) -> str:
        raw = _identifier_bytes(identifier)
        if self.base == 'base16':
            body = raw.hex()
        else:
            body = base64.b32encode(raw).decode('ascii').rstrip('=').lower()
        return self.PREFIXES[self.base] + body


def _identifier_bytes(identifier: str) -> bytes:
    if identifier and len(identifier) % 2 == 0:
        try:
            return bytes.fromhex(identifier)
        except ValueError:
            pass
    return identifier.encode('utf-8')


def get_encoder(name: str = 'identity') -> CidEncoder:
    """Get the encoder registered under ``name``.

    Args:
        name: One of ``identity``, ``base16``, ``base32``

    Returns:
        CidEncoder instance

    Raises:
        ValueError: If the name is not supported
    """
    if name not in SUPPORTED_CID_BASES:
        raise ValueError(f"Unknown cid base: {name}")
    if name == 'identity':
        return IdentityEncoder()
    return MultibaseEncoder(name)


_SIMPLE_ESCAPES = {
    '\a': '\\a',
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
    '\v': '\\v',
    '\\': '\\\\',
    '"': '\\"',
}


def escape_non_printable(name: str) -> str:
    """Escape a name for display if it holds non-printable characters.

    Names without backslashes and made only of printable characters are
    returned unchanged. Otherwise the whole name is escaped the way a
    double-quoted string literal would be, minus the quotes.

    Args:
        name: Entry name as stored

    Returns:
        Display-safe name
    """
    if '\\' not in name and name.isprintable():
        return name

    out = []
    for ch in name:
        if ch in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[ch])
        elif ch.isprintable():
            out.append(ch)
        else:
            code = ord(ch)
            if code < 0x80:
                out.append(f'\\x{code:02x}')
            elif 0xdc80 <= code <= 0xdcff:
                # Undecodable byte carried through surrogateescape
                out.append(f'\\x{code - 0xdc00:02x}')
            elif code < 0x10000:
                out.append(f'\\u{code:04x}')
            else:
                out.append(f'\\U{code:08x}')
    return ''.join(out)
