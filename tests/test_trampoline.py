"""Tests for sshfast.trampoline module."""

from __future__ import annotations

import logging
from unittest.mock import patch

import pytest

from sshfast.schema import LauncherConfig
from sshfast.trampoline import configure_logging, main


class TestTrampolineMain:
    """Tests for the trampoline main() function."""

    def test_exits_with_launch_status(self):
        """main() exits with whatever launch() returns."""
        with patch("sshfast.trampoline.launch", return_value=121) as mock_launch, \
             patch("sys.argv", ["ssh", "alpha"]):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 121
        args, _kwargs = mock_launch.call_args
        assert args[0] == ["ssh", "alpha"]
        assert isinstance(args[2], LauncherConfig)

    def test_config_from_environment(self, monkeypatch):
        monkeypatch.setenv("SSHFAST_GRAMMAR", "9.2")
        monkeypatch.delenv("SSHFAST_LOG_LEVEL", raising=False)
        with patch("sshfast.trampoline.launch", return_value=121) as mock_launch, \
             patch("sys.argv", ["ssh"]):
            with pytest.raises(SystemExit):
                main()
        config = mock_launch.call_args[0][2]
        assert config.grammar == "9.2"
        assert config.log_level is None

    def test_not_found_message(self, monkeypatch, tmp_path, capsys):
        """With no ssh on PATH the fixed message and status come out."""
        monkeypatch.setenv("PATH", str(tmp_path))
        monkeypatch.delenv("HOME", raising=False)
        with patch("sys.argv", [str(tmp_path / "ssh"), "alpha"]):
            with pytest.raises(SystemExit) as exc_info:
                main()
        assert exc_info.value.code == 121
        assert capsys.readouterr().err == "fatal: ssh not found\n"


class TestLauncherConfig:
    def test_defaults(self):
        config = LauncherConfig.from_environ({})
        assert config.program == "ssh"
        assert config.grammar == "8.2"
        assert config.log_level is None

    def test_blank_values_ignored(self):
        config = LauncherConfig.from_environ({"SSHFAST_GRAMMAR": " ", "SSHFAST_LOG_LEVEL": ""})
        assert config.grammar == "8.2"
        assert config.log_level is None


class TestConfigureLogging:
    def test_unset_does_nothing(self):
        with patch("logging.basicConfig") as mock_config:
            configure_logging(None)
        mock_config.assert_not_called()

    def test_unknown_level_ignored(self):
        with patch("logging.basicConfig") as mock_config:
            configure_logging("chatty")
        mock_config.assert_not_called()

    def test_valid_level(self):
        with patch("logging.basicConfig") as mock_config:
            configure_logging("debug")
        assert mock_config.call_args.kwargs["level"] == logging.DEBUG
