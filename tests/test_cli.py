"""Tests for clonekit.cli main() dispatch and exit codes."""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from clonekit import __version__
from clonekit.errors import ClonekitError, UserCancelled


def _run_main_with(side_effect=None, return_value=0):
    from clonekit.cli import main

    with (
        patch("clonekit.cli.build_parser") as mock_parser,
        pytest.raises(SystemExit) as exc_info,
    ):
        args = MagicMock()
        args.command = "list"
        if side_effect is not None:
            args.func.side_effect = side_effect
        else:
            args.func.return_value = return_value
        mock_parser.return_value.parse_args.return_value = args
        main(["list"])
    return exc_info.value.code


class TestMainExitCodes:
    def test_success(self):
        assert _run_main_with(return_value=0) == 0

    def test_command_return_code_passed_through(self):
        assert _run_main_with(return_value=1) == 1

    def test_user_cancelled_exits_2(self, capsys):
        assert _run_main_with(side_effect=UserCancelled("Copy of Library cancelled")) == 2
        assert "Copy of Library cancelled" in capsys.readouterr().out

    def test_user_cancelled_default_message(self, capsys):
        assert _run_main_with(side_effect=UserCancelled()) == 2
        assert "Aborted." in capsys.readouterr().out

    def test_clonekit_error_exits_1(self, capsys):
        assert _run_main_with(side_effect=ClonekitError("boom")) == 1
        assert "Error: boom" in capsys.readouterr().err

    def test_keyboard_interrupt_exits_130(self):
        assert _run_main_with(side_effect=KeyboardInterrupt()) == 130


class TestTopLevel:
    def test_no_args_prints_help(self, capsys):
        from clonekit.cli import main

        with pytest.raises(SystemExit) as exc_info:
            main([])
        assert exc_info.value.code == 0
        assert "usage: clonekit" in capsys.readouterr().out

    def test_version(self, capsys):
        from clonekit.cli import main

        with pytest.raises(SystemExit) as exc_info:
            main(["--version"])
        assert exc_info.value.code == 0
        assert capsys.readouterr().out.strip() == f"clonekit {__version__}"

    def test_verbose_stripped(self):
        from clonekit.cli import main

        with (
            patch("clonekit.cli.build_parser") as mock_parser,
            patch("clonekit.log.setup_logging") as mock_setup,
            pytest.raises(SystemExit),
        ):
            args = MagicMock()
            args.func.return_value = 0
            mock_parser.return_value.parse_args.return_value = args
            main(["-v", "list"])
        mock_setup.assert_called_once_with(verbose=True)
        mock_parser.return_value.parse_args.assert_called_once_with(["list"])


class TestBuildParser:
    @pytest.mark.parametrize("argv", [
        ["create"], ["list"], ["open", "x"], ["delete", "x"], ["arg"],
        ["status"], ["persist", "x"], ["config"],
    ])
    def test_subcommands_registered(self, argv):
        from clonekit.cli import build_parser

        args = build_parser().parse_args(argv)
        assert args.command == argv[0]
        assert callable(args.func)

    def test_create_flags(self):
        from clonekit.cli import build_parser

        args = build_parser().parse_args(["create", "--copy-assets", "-p", "/work/Game", "/work/G2"])
        assert args.copy_assets is True
        assert args.copy_settings is False
        assert args.project == "/work/Game"
        assert args.path == "/work/G2"
