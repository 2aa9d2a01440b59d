import datetime as dt
import json
import sys
import types
import unittest
from pathlib import Path

# Import server.events without executing src/server/__init__.py.
_SERVER_DIR = Path(__file__).resolve().parents[2] / "src" / "server"
if "server" not in sys.modules:
    _pkg = types.ModuleType("server")
    _pkg.__path__ = [str(_SERVER_DIR)]  # type: ignore[attr-defined]
    sys.modules["server"] = _pkg

from server.events import UIMessageError, decode_message, make_event


class ServerEventsTests(unittest.TestCase):
    def test_make_event_serializes_timestamp_and_payload(self) -> None:
        now = dt.datetime(2026, 2, 21, 10, 0, tzinfo=dt.timezone.utc)
        raw = make_event("extend", now_fn=lambda: now, seconds=300)
        payload = json.loads(raw)

        self.assertEqual("extend", payload["type"])
        self.assertEqual(now.isoformat(), payload["timestamp"])
        self.assertEqual(300, payload["seconds"])

    def test_make_event_without_payload(self) -> None:
        payload = json.loads(make_event("idle-pause"))

        self.assertEqual({"type", "timestamp"}, set(payload))

    def test_decode_message_splits_type_from_fields(self) -> None:
        message_type, fields = decode_message(
            '{"type": "set_idle_detection", "enabled": true}'
        )

        self.assertEqual("set_idle_detection", message_type)
        self.assertEqual({"enabled": True}, fields)

    def test_decode_message_accepts_bytes(self) -> None:
        message_type, _ = decode_message(b'{"type": "update_timer_status"}')
        self.assertEqual("update_timer_status", message_type)

    def test_decode_message_rejects_malformed_input(self) -> None:
        for raw in ("{", "[]", '{"mode": "work"}', '{"type": ""}', '{"type": 3}'):
            with self.subTest(raw=raw):
                with self.assertRaises(UIMessageError):
                    decode_message(raw)


if __name__ == "__main__":
    unittest.main()
