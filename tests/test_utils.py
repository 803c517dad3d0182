"""Tests for clonekit.utils and clonekit.log."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from clonekit.errors import UserCancelled
from clonekit.log import get_logger, setup_logging
from clonekit.utils import confirm_prompt


class TestConfirmPrompt:
    def test_yes(self):
        with patch("builtins.input", return_value=" yes "):
            confirm_prompt("Sure? ")

    def test_anything_else(self):
        with patch("builtins.input", return_value="y"):
            with pytest.raises(UserCancelled):
                confirm_prompt("Sure? ")

    def test_eof(self):
        with patch("builtins.input", side_effect=EOFError):
            with pytest.raises(UserCancelled):
                confirm_prompt("Sure? ")


class TestLogging:
    def test_child_logger_name(self):
        assert get_logger("mirror").name == "clonekit.mirror"

    def test_levels(self):
        setup_logging(verbose=True)
        assert logging.getLogger("clonekit").level == logging.DEBUG
        setup_logging(verbose=False)
        assert logging.getLogger("clonekit").level == logging.WARNING

    def test_single_handler(self):
        setup_logging()
        setup_logging()
        assert len(logging.getLogger("clonekit").handlers) == 1
