"""CLI behavior tests for the replay and config subcommands."""

from __future__ import annotations

import io
import json
import tempfile
import unittest
from pathlib import Path
from unittest import mock

from tabrecency import cli
from tabrecency.highlight import DEFAULT_STYLE
from tabrecency.replay import ReplayResult

EVENT_LOG = "\n".join(
    [
        "# three tabs, last one credited by a refocus",
        '{"at": 0, "event": "open", "tab": 1, "window": 1}',
        '{"at": 300, "event": "open", "tab": 2, "window": 1}',
        '{"at": 600, "event": "open", "tab": 3, "window": 1}',
        '{"at": 900, "event": "focus", "window": -1}',
        '{"at": 900, "event": "focus", "window": 1}',
        '{"at": 1000, "event": "back"}',
        "",
    ]
)


class _TtyStringIO(io.StringIO):
    def isatty(self) -> bool:
        return True


class CliReplayTests(unittest.TestCase):
    def setUp(self) -> None:
        self._tmp = tempfile.TemporaryDirectory()
        self.addCleanup(self._tmp.cleanup)
        self.root = Path(self._tmp.name)
        self.config_path = self.root / "config.json"
        self.log_path = self.root / "events.jsonl"
        self.log_path.write_text(EVENT_LOG, encoding="utf-8")

    def _run(self, *argv: str, stdout: io.StringIO | None = None) -> str:
        stdout = stdout if stdout is not None else io.StringIO()
        with mock.patch("sys.stdout", stdout):
            cli.main(["--config", str(self.config_path), *argv])
        return stdout.getvalue()

    def test_replay_prints_plain_summary(self) -> None:
        output = self._run("replay", str(self.log_path))

        self.assertEqual(output, "ranking: 3 2 1\ncurrent: 2\nactivations: 2\n")

    def test_replay_json_output_without_tty_is_uncolored(self) -> None:
        output = self._run("replay", str(self.log_path), "--json")

        self.assertNotIn("\x1b[", output)
        self.assertEqual(json.loads(output)["activations"], [2])

    def test_replay_json_output_is_colored_on_tty(self) -> None:
        output = self._run("replay", str(self.log_path), "--json", stdout=_TtyStringIO())

        self.assertIn("\x1b[", output)

    def test_no_color_flag_wins_over_tty(self) -> None:
        output = self._run("replay", str(self.log_path), "--json", "--no-color", stdout=_TtyStringIO())

        self.assertEqual(json.loads(output)["ranking"], [3, 2, 1])

    def test_style_defaults_to_highlight_default(self) -> None:
        args = cli._build_parser().parse_args(["replay", str(self.log_path)])

        self.assertEqual(args.style, DEFAULT_STYLE)

    def test_replay_reads_stdin_for_dash(self) -> None:
        with mock.patch("sys.stdin", io.StringIO(EVENT_LOG)):
            output = self._run("replay", "-")

        self.assertTrue(output.startswith("ranking: 3 2 1\n"))

    def test_debounce_comes_from_config_unless_overridden(self) -> None:
        self.config_path.write_text('{"debounce_ms": 1000}\n', encoding="utf-8")

        from_config = self._run("replay", str(self.log_path))
        overridden = self._run("replay", str(self.log_path), "--debounce-ms", "250")

        self.assertTrue(from_config.startswith("ranking: -\n"))
        self.assertTrue(overridden.startswith("ranking: 3 2 1\n"))

    def test_missing_event_log_exits_with_message(self) -> None:
        with self.assertRaises(SystemExit) as ctx:
            self._run("replay", str(self.root / "nope.jsonl"))

        self.assertIn("Event log not found", str(ctx.exception.code))

    def test_malformed_event_log_exits_with_line_number(self) -> None:
        self.log_path.write_text('{"event": "warp"}\n', encoding="utf-8")

        with self.assertRaises(SystemExit) as ctx:
            self._run("replay", str(self.log_path))

        self.assertEqual(ctx.exception.code, "Invalid event log: line 1: unknown event 'warp'")

    def test_negative_debounce_is_rejected_by_argparse(self) -> None:
        with mock.patch("sys.stderr", io.StringIO()), self.assertRaises(SystemExit) as ctx:
            self._run("replay", str(self.log_path), "--debounce-ms", "-1")

        self.assertEqual(ctx.exception.code, 2)


class CliConfigTests(unittest.TestCase):
    def test_config_set_debounce_persists_and_prints_settings(self) -> None:
        with tempfile.TemporaryDirectory() as tmp:
            config_path = Path(tmp) / "config.json"
            stdout = io.StringIO()
            with mock.patch("sys.stdout", stdout):
                cli.main(["--config", str(config_path), "config", "--set-debounce-ms", "500"])

            saved = json.loads(config_path.read_text(encoding="utf-8"))

        self.assertEqual(saved, {"debounce_ms": 500})
        self.assertIn("debounce_ms: 500\n", stdout.getvalue())
        self.assertIn("log_level: WARNING\n", stdout.getvalue())

    def test_format_result_lists_unknown_commands(self) -> None:
        text = cli.format_result(ReplayResult(ranking=[], current_tab=None, unknown_commands=["x", "y"]))

        self.assertEqual(text, "ranking: -\ncurrent: -\nactivations: -\nunknown commands: x, y\n")


if __name__ == "__main__":
    unittest.main()
