import io
import tempfile
import unittest
from contextlib import redirect_stderr
from pathlib import Path
from unittest.mock import patch

from control import ControlCallError, ControlNotRunningError, ControlStatus
from control.cli import NOT_RUNNING_MESSAGE, build_parser, run_command
from control.labels import format_clock, resolve_language
import main


class _FakeClient:
    def __init__(self, *, error: Exception | None = None, status: ControlStatus | None = None):
        self.error = error
        self.sent: list[tuple[str, int]] = []
        self._status = status

    def send(self, command: str, *, seconds: int = 60) -> None:
        if self.error is not None:
            raise self.error
        self.sent.append((command, seconds))

    def status(self) -> ControlStatus:
        if self.error is not None:
            raise self.error
        assert self._status is not None
        return self._status


def _run(argv: list[str], client: _FakeClient, language: str = "en") -> tuple[int, str, str]:
    out, err = io.StringIO(), io.StringIO()
    args = build_parser().parse_args(argv)
    code = run_command(args, client=client, language=language, stdout=out, stderr=err)
    return code, out.getvalue().strip(), err.getvalue().strip()


class ControlCliTests(unittest.TestCase):
    def test_commands_print_confirmation(self) -> None:
        expected = {
            "toggle": "Timer toggled.",
            "start": "Timer started.",
            "stop": "Timer stopped.",
            "skip": "Session skipped.",
            "reset": "Timer reset.",
        }
        for command, message in expected.items():
            with self.subTest(command=command):
                client = _FakeClient()
                code, out, err = _run([command], client)

                self.assertEqual(0, code)
                self.assertEqual(message, out)
                self.assertEqual("", err)
                self.assertEqual(command, client.sent[0][0])

    def test_extend_defaults_to_sixty_seconds(self) -> None:
        client = _FakeClient()
        code, out, _ = _run(["extend"], client)

        self.assertEqual(0, code)
        self.assertEqual([("extend", 60)], client.sent)
        self.assertEqual("Timer extended by 60 seconds.", out)

    def test_extend_accepts_explicit_seconds(self) -> None:
        client = _FakeClient()
        _, out, _ = _run(["extend", "300"], client)

        self.assertEqual([("extend", 300)], client.sent)
        self.assertEqual("Timer extended by 300 seconds.", out)

    def test_extend_rejects_values_outside_u32(self) -> None:
        parser = build_parser()
        for raw in ("-5", "4294967296", "soon"):
            with self.subTest(raw=raw):
                with redirect_stderr(io.StringIO()):
                    with self.assertRaises(SystemExit) as context:
                        parser.parse_args(["extend", raw])
                self.assertEqual(2, context.exception.code)

    def test_not_running_exits_with_error(self) -> None:
        client = _FakeClient(error=ControlNotRunningError("no owner"))
        code, out, err = _run(["status"], client)

        self.assertEqual(1, code)
        self.assertEqual("", out)
        self.assertEqual(NOT_RUNNING_MESSAGE, err)

    def test_call_failure_reports_bus_error(self) -> None:
        client = _FakeClient(error=ControlCallError("org.example.Error: boom"))
        code, _, err = _run(["toggle"], client)

        self.assertEqual(1, code)
        self.assertEqual("D-Bus error: org.example.Error: boom", err)

    def test_status_prints_one_line(self) -> None:
        client = _FakeClient(status=ControlStatus("work", 1500, False, 0))
        code, out, _ = _run(["status"], client)

        self.assertEqual(0, code)
        self.assertEqual("Mode: Focus | Paused | 25:00 | Sessions: 0", out)

    def test_status_uses_turkish_labels(self) -> None:
        client = _FakeClient(status=ControlStatus("shortBreak", 299, True, 4))
        _, out, _ = _run(["status"], client, language="tr")

        self.assertEqual("Mod: Kısa Mola | Çalışıyor | 04:59 | Oturum: 4", out)

    def test_no_command_leaves_command_unset(self) -> None:
        args = build_parser().parse_args(["--config", "custom.toml"])

        self.assertIsNone(args.command)
        self.assertEqual("custom.toml", args.config)


    def test_common_options_accepted_after_command(self) -> None:
        args = build_parser().parse_args(["status", "-v", "--config", "custom.toml"])

        self.assertEqual("status", args.command)
        self.assertTrue(args.verbose)
        self.assertEqual("custom.toml", args.config)

    def test_common_options_before_command_survive(self) -> None:
        args = build_parser().parse_args(["-v", "--config", "custom.toml", "extend", "5"])

        self.assertTrue(args.verbose)
        self.assertEqual("custom.toml", args.config)
        self.assertEqual(5, args.seconds)


class MainDispatchTests(unittest.TestCase):
    def _write_config(self, content: str) -> str:
        temp_dir = tempfile.TemporaryDirectory()
        self.addCleanup(temp_dir.cleanup)
        path = Path(temp_dir.name) / "config.toml"
        path.write_text(content, encoding="utf-8")
        return str(path)

    def test_command_uses_configured_connect_timeout(self) -> None:
        config_path = self._write_config("[control]\nconnect_timeout_seconds = 0.5\n")

        for argv in (
            ["--config", config_path, "status"],
            ["status", "--config", config_path],
        ):
            with self.subTest(argv=argv):
                with patch("main.run_command", return_value=0) as run:
                    self.assertEqual(0, main.main(argv))

                client = run.call_args.kwargs["client"]
                self.assertEqual(0.5, client.config.connect_timeout_seconds)

    def test_invalid_config_exits_with_error(self) -> None:
        config_path = self._write_config("[control]\nconnect_timeout_seconds = 0\n")
        err = io.StringIO()

        with patch("main.run_command") as run, redirect_stderr(err):
            self.assertEqual(1, main.main(["--config", config_path, "toggle"]))

        run.assert_not_called()
        self.assertIn("Configuration error", err.getvalue())

    def test_missing_config_file_exits_with_error(self) -> None:
        with patch("main.run_command") as run, redirect_stderr(io.StringIO()):
            self.assertEqual(1, main.main(["--config", "/nonexistent/pomodoro.toml", "status"]))

        run.assert_not_called()

class StatusLabelTests(unittest.TestCase):
    def test_format_clock_pads_minutes_and_seconds(self) -> None:
        self.assertEqual("00:00", format_clock(0))
        self.assertEqual("01:05", format_clock(65))
        self.assertEqual("100:00", format_clock(6000))

    def test_resolve_language_prefers_override(self) -> None:
        self.assertEqual("tr", resolve_language({"POMODORO_LANG": "tr", "LANG": "en_US.UTF-8"}))
        self.assertEqual("tr", resolve_language({"LANG": "tr_TR.UTF-8"}))
        self.assertEqual("en", resolve_language({"LANG": "de_DE.UTF-8"}))
        self.assertEqual("en", resolve_language({}))


if __name__ == "__main__":
    unittest.main()
