"""
Tests for the command line test runner.
"""
import subprocess
import sys

import run_tests


class TestRunTests:
    """Test argument forwarding and exit codes"""

    def test_defaults_when_no_args(self):
        assert run_tests.build_command([]) == [sys.executable, "-m", "pytest", "tests/", "-v", "--tb=short"]

    def test_args_replace_defaults(self):
        assert run_tests.build_command(["-k", "storage"])[-2:] == ["-k", "storage"]
        assert "-v" not in run_tests.build_command(["-k", "storage"])

    def test_returns_pytest_exit_code(self, monkeypatch):
        calls = []

        def fake_run(command, cwd):
            calls.append(command)
            return subprocess.CompletedProcess(command, 1)

        monkeypatch.setattr(run_tests.subprocess, "run", fake_run)

        assert run_tests.run_tests(["-x"]) == 1
        assert calls[0][-1] == "-x"
