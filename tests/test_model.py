"""Tests for the listing data model and its structured encoding."""

import json
from datetime import datetime, timezone

import pytest

from cidls.model import EntryKind, EntryRecord, GroupResult, OutputUnit
from cidls.encoding import MultibaseEncoder


class TestEntryKind:
    """Test mapping of external type codes."""

    @pytest.mark.parametrize("code,expected", [
        (1, EntryKind.DIRECTORY),
        (2, EntryKind.FILE),
        (4, EntryKind.SYMLINK),
        (5, EntryKind.HAMT_SHARD),
        ("file", EntryKind.FILE),
        ("Dir", EntryKind.DIRECTORY),
        ("hamt_shard", EntryKind.HAMT_SHARD),
        (EntryKind.METADATA, EntryKind.METADATA),
    ])
    def test_known_codes(self, code, expected):
        assert EntryKind.from_code(code) is expected

    @pytest.mark.parametrize("code", [99, -1, "socket", None, 2.0, True, object()])
    def test_unrecognised_codes_are_unknown(self, code):
        """Unknown codes never raise."""
        assert EntryKind.from_code(code) is EntryKind.UNKNOWN

    def test_directory_like_kinds(self):
        directory_like = {kind for kind in EntryKind if kind.is_directory_like}
        assert directory_like == {EntryKind.DIRECTORY, EntryKind.HAMT_SHARD, EntryKind.METADATA}


class TestEntryRecord:
    """Test EntryRecord construction."""

    def test_kind_is_normalised(self):
        entry = EntryRecord(name='x', identifier='h', kind='symlink', target='/y')
        assert entry.kind is EntryKind.SYMLINK
        assert entry.target == '/y'

    def test_target_only_kept_for_symlinks(self):
        entry = EntryRecord(name='x', identifier='h', kind=EntryKind.FILE, target='/y')
        assert entry.target is None

    def test_records_are_immutable(self):
        entry = EntryRecord(name='x', identifier='h')
        with pytest.raises(AttributeError):
            entry.name = 'y'

    def test_zero_size_is_kept(self):
        entry = EntryRecord(name='empty', identifier='h', size=0, kind='file')
        assert entry.size == 0
        assert not entry.is_directory


class TestStructuredEncoding:
    """Test the machine-readable shape of OutputUnit."""

    def test_shape_is_stable_without_resolution(self):
        """Unresolved fields are present as zero values."""
        unit = OutputUnit.single('/a', EntryRecord(name='x', identifier='h'))
        link = unit.to_dict()['Objects'][0]['Links'][0]

        assert set(link) == {'Name', 'Hash', 'Size', 'Type', 'Target', 'Mode', 'ModTime'}
        assert link['Size'] == 0
        assert link['Type'] == 0
        assert link['Target'] == ''
        assert link['ModTime'] is None

    def test_group_key_and_encoded_hash(self):
        entry = EntryRecord(name='f', identifier='00ff', size=3, kind='file')
        data = OutputUnit([GroupResult('/docs', [entry])]).to_dict(MultibaseEncoder('base16'))

        assert data['Objects'][0]['Hash'] == '/docs'
        assert data['Objects'][0]['Links'][0]['Hash'] == 'f00ff'
        assert data['Objects'][0]['Links'][0]['Type'] == 2

    def test_empty_group_keeps_its_slot(self):
        data = OutputUnit([GroupResult('/empty')]).to_dict()
        assert data == {'Objects': [{'Hash': '/empty', 'Links': []}]}

    def test_json_round_trip(self):
        when = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)
        unit = OutputUnit([
            GroupResult('/a', [
                EntryRecord('link', 'h1', 0, EntryKind.SYMLINK, target='../b', mode=0o777, mod_time=when),
                EntryRecord('sub', 'h2', 0, EntryKind.DIRECTORY),
            ]),
        ])

        decoded = OutputUnit.from_json(unit.to_json())

        assert decoded == unit
        assert json.loads(unit.to_json())['Objects'][0]['Links'][0]['ModTime'] == when.isoformat()

    def test_iter_entries_and_count(self):
        unit = OutputUnit([
            GroupResult('/a', [EntryRecord('x', 'h')]),
            GroupResult('/b', [EntryRecord('y', 'h'), EntryRecord('z', 'h')]),
        ])
        assert unit.entry_count == 3
        assert [(key, e.name) for key, e in unit.iter_entries()] == [
            ('/a', 'x'), ('/b', 'y'), ('/b', 'z'),
        ]
