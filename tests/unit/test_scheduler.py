"""Tests for overdue sweep scheduling and the sweep CLI."""

from datetime import date
from unittest.mock import MagicMock, patch

import pytest

from rentledger.cli import sweep as sweep_cli
from rentledger.config import settings
from rentledger.scheduler import SWEEP_JOB_ID, build_scheduler, run_overdue_sweep


class TestBuildScheduler:
    def test_registers_daily_sweep_job(self):
        scheduler = build_scheduler(hour=3, minute=15)

        job = scheduler.get_job(SWEEP_JOB_ID)
        assert job is not None
        assert job.func is run_overdue_sweep
        trigger = str(job.trigger)
        assert "hour='3'" in trigger
        assert "minute='15'" in trigger

    def test_scheduler_not_started(self):
        scheduler = build_scheduler()
        assert scheduler.running is False


class TestRunOverdueSweep:
    def test_returns_count_and_closes_session(self):
        session = MagicMock()
        with (
            patch("rentledger.services.SessionLocal", return_value=session),
            patch("rentledger.services.overdue_service.OverdueSweeper") as sweeper_cls,
        ):
            sweeper_cls.return_value.sweep_overdue.return_value = 4

            assert run_overdue_sweep() == 4

        sweeper_cls.assert_called_once_with(session)
        session.close.assert_called_once()

    def test_failure_is_reraised(self):
        session = MagicMock()
        with (
            patch("rentledger.services.SessionLocal", return_value=session),
            patch("rentledger.services.overdue_service.OverdueSweeper") as sweeper_cls,
        ):
            sweeper_cls.return_value.sweep_overdue.side_effect = RuntimeError("db down")

            with pytest.raises(RuntimeError, match="db down"):
                run_overdue_sweep()

        session.close.assert_called_once()


class TestSweepCli:
    def test_parse_as_of(self):
        args = sweep_cli.parse_args(["--as-of", "2025-03-01"])
        assert args.as_of == date(2025, 3, 1)

    def test_as_of_defaults_to_none(self):
        assert sweep_cli.parse_args([]).as_of is None

    def test_exit_code_success(self):
        session = MagicMock()
        with (
            patch("rentledger.services.SessionLocal", return_value=session),
            patch("rentledger.services.overdue_service.OverdueSweeper") as sweeper_cls,
            patch("rentledger.services.logging.setup_server_logging") as setup_logging,
        ):
            sweeper_cls.return_value.sweep_overdue.return_value = 2

            assert sweep_cli.main(["--as-of", "2025-03-01"]) == 0

        setup_logging.assert_called_once_with(settings.log_file, settings.log_level)
        sweeper_cls.return_value.sweep_overdue.assert_called_once_with(date(2025, 3, 1))
        session.close.assert_called_once()

    def test_exit_code_failure(self):
        session = MagicMock()
        with (
            patch("rentledger.services.SessionLocal", return_value=session),
            patch("rentledger.services.overdue_service.OverdueSweeper") as sweeper_cls,
            patch("rentledger.services.logging.setup_server_logging"),
        ):
            sweeper_cls.return_value.sweep_overdue.side_effect = RuntimeError("locked")

            assert sweep_cli.main([]) == 1

        session.close.assert_called_once()
