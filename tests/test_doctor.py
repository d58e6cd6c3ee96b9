"""Tests for the ``cratectl doctor`` command (cli/doctor.py).

The platform, the binary directory and privileges are mocked — results
do not depend on the machine running the suite.

Coverage:
* Individual check functions return correct tuples.
* ``run_doctor`` returns GENERAL_ERROR only when a check fails.
* Plain-text rendering when Rich is missing.
* CLI routing dispatches to ``run_doctor``.
"""

from __future__ import annotations

from pathlib import Path
from unittest.mock import MagicMock, patch

import pytest

from cratectl.cli import exit_codes
from cratectl.version import __version__


# ---------------------------------------------------------------------------
# Individual check functions
# ---------------------------------------------------------------------------

class TestVersionChecks:
    def test_cratectl_version(self) -> None:
        from cratectl.cli.doctor import _cratectl_version_check

        assert _cratectl_version_check() == ("cratectl", __version__, "OK")

    def test_python_version(self) -> None:
        from cratectl.cli.doctor import _python_version_check

        label, value, status = _python_version_check()
        assert label == "Python"
        assert isinstance(value, str)
        assert status == "OK"


class TestRequestsCheck:
    def test_installed(self) -> None:
        from cratectl.cli.doctor import _requests_check

        label, _value, status = _requests_check()
        assert label == "requests"
        assert status == "OK"

    @patch.dict("sys.modules", {"requests": None})
    def test_not_installed(self) -> None:
        from cratectl.cli.doctor import _requests_check

        assert _requests_check() == ("requests", "NOT INSTALLED", "FAIL")


class TestOsCheck:
    @patch("cratectl.cli.doctor.platform.machine", return_value="arm64")
    @patch("cratectl.cli.doctor.platform.release", return_value="23.4.0")
    @patch("cratectl.cli.doctor.platform.system", return_value="Darwin")
    def test_darwin_is_displayed_as_macos(
        self,
        _mock_system: MagicMock,
        _mock_release: MagicMock,
        _mock_machine: MagicMock,
    ) -> None:
        from cratectl.cli.doctor import _os_check

        label, value, status = _os_check()
        assert label == "OS"
        assert value == "macOS 23.4.0 (arm64)"
        assert status == "OK"


class TestBinDirCheck:
    def test_existing_dir(self, tmp_path: Path) -> None:
        from cratectl.cli.doctor import _bin_dir_check

        with patch("cratectl.cli.doctor.SYSTEM_BIN_DIR", tmp_path), \
                patch("cratectl.cli.doctor.platform.system", return_value="Linux"):
            assert _bin_dir_check() == ("Install dir", str(tmp_path), "OK")

    def test_missing_dir_warns(self, tmp_path: Path) -> None:
        from cratectl.cli.doctor import _bin_dir_check

        with patch("cratectl.cli.doctor.SYSTEM_BIN_DIR", tmp_path / "nope"), \
                patch("cratectl.cli.doctor.platform.system", return_value="Linux"):
            _label, _value, status = _bin_dir_check()
        assert status == "WARN"

    def test_windows_warns(self, tmp_path: Path) -> None:
        from cratectl.cli.doctor import _bin_dir_check

        with patch("cratectl.cli.doctor.SYSTEM_BIN_DIR", tmp_path), \
                patch("cratectl.cli.doctor.platform.system", return_value="Windows"):
            _label, value, status = _bin_dir_check()
        assert status == "WARN"
        assert "unsupported" in value


class TestPrivilegeCheck:
    @pytest.mark.parametrize(("elevated", "status"), [(True, "OK"), (False, "WARN")])
    def test_status(self, elevated: bool, status: str) -> None:
        from cratectl.cli.doctor import _privilege_check

        checker = MagicMock()
        checker.is_elevated.return_value = elevated
        with patch("cratectl.cli.doctor.default_privilege_checker", return_value=checker):
            assert _privilege_check()[2] == status


# ---------------------------------------------------------------------------
# run_doctor integration
# ---------------------------------------------------------------------------

_PASSING = [("cratectl", __version__, "OK"), ("Install dir", "/bin", "WARN")]
_FAILING = [("cratectl", __version__, "OK"), ("requests", "NOT INSTALLED", "FAIL")]


class TestRunDoctor:
    @patch("cratectl.cli.doctor.collect_checks", return_value=_PASSING)
    def test_warnings_still_succeed(self, _mock_checks: MagicMock) -> None:
        from cratectl.cli.doctor import run_doctor

        assert run_doctor() == exit_codes.SUCCESS

    @patch("cratectl.cli.doctor.collect_checks", return_value=_FAILING)
    def test_failure_returns_general_error(self, _mock_checks: MagicMock) -> None:
        from cratectl.cli.doctor import run_doctor

        assert run_doctor() == exit_codes.GENERAL_ERROR

    def test_collect_checks_labels(self) -> None:
        from cratectl.cli.doctor import collect_checks

        labels = [label for label, _, _ in collect_checks()]
        assert labels == ["cratectl", "Python", "requests", "OS", "Install dir", "Privileges"]

    @patch("cratectl.cli.doctor.platform.machine", return_value="arm64")
    @patch("cratectl.cli.doctor.platform.release", return_value="23.4.0")
    @patch("cratectl.cli.doctor.platform.system", return_value="Darwin")
    @patch.dict("sys.modules", {"rich": None, "rich.table": None, "rich.console": None})
    def test_plain_output_without_rich(
        self,
        _mock_system: MagicMock,
        _mock_release: MagicMock,
        _mock_machine: MagicMock,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        from cratectl.cli.doctor import run_doctor

        _ = run_doctor()
        captured = capsys.readouterr()
        assert "cratectl doctor" in captured.err
        assert "macOS" in captured.err
        assert "[green]" not in captured.err


# ---------------------------------------------------------------------------
# CLI routing
# ---------------------------------------------------------------------------

class TestDoctorRouting:
    @patch("cratectl.cli.doctor.run_doctor", return_value=exit_codes.SUCCESS)
    def test_doctor_dispatches(self, mock_run: MagicMock) -> None:
        from cratectl.cli.app import main

        code = main(["doctor"])
        assert code == exit_codes.SUCCESS
        mock_run.assert_called_once()

    @patch("cratectl.cli.doctor.run_doctor", return_value=exit_codes.GENERAL_ERROR)
    def test_doctor_failure_propagates(self, mock_run: MagicMock) -> None:
        from cratectl.cli.app import main

        assert main(["DOCTOR"]) == exit_codes.GENERAL_ERROR
