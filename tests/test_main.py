"""Tests for the example command line script."""

import json
import sys
from unittest.mock import patch

import pytest
import requests

import main
from bankwestpy import Account, SessionExpired


class TestMain:
    """Test how the script reports failures."""

    @pytest.fixture
    def cookies_file(self, tmp_path):
        path = tmp_path / "cookies.json"
        cookies = [{"name": "ASP.NET_SessionId", "value": "abc", "domain": "ibs.bankwest.com.au"}]
        path.write_text(json.dumps(cookies))
        return path

    def run(self, monkeypatch, *args):
        monkeypatch.setattr(sys, "argv", ["main.py", *args])
        with pytest.raises(SystemExit) as excinfo:
            main.main()
        return excinfo.value.code

    @pytest.fixture
    def session(self):
        with patch("main.Session") as session_class:
            session = session_class.return_value
            session.list_accounts.return_value = [Account("Hero Saver", "303-111 0054321")]
            yield session

    def test_bad_account_is_reported(self, monkeypatch, capsys, cookies_file, session):
        """Test that a badly formatted account exits cleanly instead of a traceback."""
        session.export_transactions.side_effect = ValueError(
            "Account must be in 'BBB-BBB AAAAAAA' format, got '303111'"
        )

        code = self.run(monkeypatch, "--cookies-file", str(cookies_file), "--account", "303111")

        assert code == 1
        assert "Invalid argument" in capsys.readouterr().out
        session.logout.assert_not_called()

    def test_bad_base_url_is_reported(self, monkeypatch, capsys, cookies_file):
        """Test that a relative base URL is rejected with a message."""
        code = self.run(monkeypatch, "--cookies-file", str(cookies_file), "--base-url", "not-a-url")

        assert code == 1
        assert "must be an absolute URI" in capsys.readouterr().out

    def test_network_error_is_reported(self, monkeypatch, capsys, cookies_file, session):
        session.list_accounts.side_effect = requests.ConnectionError("connection refused")

        code = self.run(monkeypatch, "--cookies-file", str(cookies_file))

        assert code == 1
        assert "Network error: connection refused" in capsys.readouterr().out

    def test_session_expired_exit_code(self, monkeypatch, capsys, cookies_file, session):
        session.list_accounts.side_effect = SessionExpired("Login page returned")

        assert self.run(monkeypatch, "--cookies-file", str(cookies_file)) == 2
        assert "Session expired" in capsys.readouterr().out

    def test_missing_cookies_file(self, monkeypatch, tmp_path):
        assert self.run(monkeypatch, "--cookies-file", str(tmp_path / "missing.json")) == 1
