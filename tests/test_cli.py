"""Tests for the cidls command line."""

import argparse
import hashlib
import io
import json
import shutil
import tempfile
from pathlib import Path

import pytest

from cidls import cli


@pytest.fixture
def root():
    """Directory with two listable folders.

    Structure:
        root/
        ├── a/
        │   └── z      ("1")
        └── b/
            └── m/
    """
    test_dir = tempfile.mkdtemp()
    path = Path(test_dir)
    (path / 'a').mkdir()
    (path / 'a' / 'z').write_bytes(b'1')
    (path / 'b' / 'm').mkdir(parents=True)
    yield path
    shutil.rmtree(test_dir, ignore_errors=True)


class TestArguments:
    """Option parsing and defaults."""

    def test_defaults(self):
        args = cli.build_parser().parse_args(['x'])
        assert args.resolve_type is True
        assert args.size is True
        assert args.stream is False
        assert args.headers is False
        assert args.enc == 'text'

    def test_negated_flags(self):
        args = cli.build_parser().parse_args(['-v', '-s', '--no-size', '--no-resolve-type', 'x', 'y'])
        assert args.headers and args.stream
        assert not args.size and not args.resolve_type
        assert args.paths == ['x', 'y']

    def test_paths_from_stdin(self):
        args = argparse.Namespace(paths=[])
        assert cli.read_paths(args, io.StringIO("a\n\nb/c\n")) == ['a', 'b/c']

    def test_no_paths_is_usage_error(self, monkeypatch):
        monkeypatch.setattr('sys.stdin', io.StringIO(""))
        with pytest.raises(SystemExit) as exc_info:
            cli.main([])
        assert exc_info.value.code == 2


class TestMain:
    """End-to-end runs against a temporary directory."""

    def test_text_listing(self, root, capsys):
        assert cli.main(['--root', str(root), '-v', 'a', 'b']) == cli.EXIT_OK

        out = capsys.readouterr().out
        lines = out.splitlines()
        assert lines[0] == 'a:'
        assert lines[1].split() == ['Hash', 'Size', 'Name']
        assert lines[2].split() == [hashlib.sha256(b'1').hexdigest(), '1', 'z']
        assert lines[3] == ''
        assert lines[4] == 'b:'
        assert lines[6].split()[1:] == ['-', 'm/']

    def test_stream_listing(self, root, capsys):
        assert cli.main(['--root', str(root), '-s', '--no-size', 'a']) == cli.EXIT_OK
        out = capsys.readouterr().out
        assert out.split() == [hashlib.sha256(b'1').hexdigest(), 'z']

    def test_json_listing(self, root, capsys):
        assert cli.main(['--root', str(root), '--enc', 'json', '--cid-base', 'base16', 'a']) == cli.EXIT_OK

        (line,) = capsys.readouterr().out.splitlines()
        data = json.loads(line)
        link = data['Objects'][0]['Links'][0]
        assert data['Objects'][0]['Hash'] == 'a'
        assert link['Name'] == 'z'
        assert link['Hash'] == 'f' + hashlib.sha256(b'1').hexdigest()
        assert link['Size'] == 1

    def test_error_after_partial_stream(self, root, capsys):
        code = cli.main(['--root', str(root), '-s', '--enc', 'json', 'a', 'missing'])

        captured = capsys.readouterr()
        assert code == cli.EXIT_ERROR
        assert len(captured.out.splitlines()) == 1
        assert captured.err.startswith('Error: missing')

    def test_batch_error_prints_nothing(self, root, capsys):
        code = cli.main(['--root', str(root), 'a', 'missing'])

        captured = capsys.readouterr()
        assert code == cli.EXIT_ERROR
        assert captured.out == ''
        assert 'no such file or directory' in captured.err
