"""Tests for the command line entry point (no GUI)."""

import pytest

from insolepreview.main import main, parse_args, print_summary


class TestSummary:
    def test_defaults(self):
        args = parse_args([])
        assert (args.width, args.length, args.thickness) == (1.0, 1.75, 0.2)
        assert not args.summary

    def test_prints_mesh_size(self, capsys):
        assert print_summary(parse_args(["--summary", "--relief"])) == 0
        out = capsys.readouterr().out
        assert "vertices:" in out
        assert "faces:" in out

    def test_bad_dimension(self, capsys):
        assert print_summary(parse_args(["--summary", "--width", "0"])) == 2
        assert "width" in capsys.readouterr().err

    def test_main_exits_with_status(self):
        with pytest.raises(SystemExit) as info:
            main(["--summary", "--thickness", "-1"])
        assert info.value.code == 2
