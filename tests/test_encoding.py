"""Tests for identifier encoders, name escaping and configuration."""

import pytest

from cidls.config import ListConfig, RenderOptions
from cidls.encoding import (
    IdentityEncoder,
    MultibaseEncoder,
    escape_non_printable,
    get_encoder,
)


class TestEscapeNonPrintable:
    """Names are escaped only when they need it."""

    @pytest.mark.parametrize("name", ["plain.txt", "with space", "ünïcödé", 'quote"d', ""])
    def test_printable_names_unchanged(self, name):
        assert escape_non_printable(name) == name

    @pytest.mark.parametrize("name,expected", [
        ("a\nb", "a\\nb"),
        ("tab\there", "tab\\there"),
        ("bell\a", "bell\\a"),
        ("back\\slash", "back\\\\slash"),
        ('back\\and"quote', 'back\\\\and\\"quote'),
        ("nul\x00", "nul\\x00"),
        ("del\x7f", "del\\x7f"),
        ("zw\u200b", "zw\\u200b"),
        ("raw\udcff", "raw\\xff"),
        ("caf\udce9", "caf\\xe9"),
        ("lone\ud800", "lone\\ud800"),
    ])
    def test_escaped_names(self, name, expected):
        assert escape_non_printable(name) == expected


class TestEncoders:
    """Test identifier display encodings."""

    def test_identity(self):
        assert IdentityEncoder().encode('QmAnything') == 'QmAnything'
        assert get_encoder()('abc') == 'abc'

    def test_base16_of_hex_digest(self):
        assert MultibaseEncoder('base16').encode('DEADBEEF') == 'fdeadbeef'

    def test_base32_of_hex_digest(self):
        # 0x00 0x00 0x00 0x00 0x00 -> 8 base32 zeros ('a')
        assert MultibaseEncoder('base32').encode('0000000000') == 'baaaaaaaa'

    def test_non_hex_identifier_uses_utf8_bytes(self):
        assert MultibaseEncoder('base16').encode('Qm') == 'f516d'

    def test_unknown_base(self):
        with pytest.raises(ValueError):
            get_encoder('base58btc')
        with pytest.raises(ValueError):
            MultibaseEncoder('identity')


class TestConfig:
    """Test ListConfig and RenderOptions."""

    def test_defaults(self):
        config = ListConfig()
        assert config.resolve_type and config.resolve_size
        assert not config.stream
        assert not config.headers
        assert config.validate() == []

    @pytest.mark.parametrize("resolve_type,resolve_size,expected", [
        (True, True, True),
        (True, False, True),
        (False, True, True),
        (False, False, False),
    ])
    def test_resolve_children_couples_both_flags(self, resolve_type, resolve_size, expected):
        config = ListConfig(resolve_type=resolve_type, resolve_size=resolve_size)
        assert config.resolve_children is expected

    def test_validate_reports_problems(self):
        errors = ListConfig(cid_base='base58', feed_size=-1).validate()
        assert len(errors) == 2

    def test_constructors(self):
        assert ListConfig.streaming(headers=True).stream
        assert not ListConfig.batch().stream

    def test_render_options(self):
        options = ListConfig(headers=True, resolve_size=False, stream=True).render_options(2)
        assert options == RenderOptions(
            headers=True, size=False, stream=True, multiple_groups=True, ignore_breaks=False
        )
        assert options.min_cell_width == 10
        assert RenderOptions().min_cell_width == 1
