import unittest
from types import SimpleNamespace

from dbus_fast import MessageFlag, MessageType, Variant

from control import (
    ControlCallError,
    ControlClient,
    ControlConfig,
    ControlNotRunningError,
    ControlStatus,
)


def _ok(*body):
    return SimpleNamespace(message_type=MessageType.METHOD_RETURN, body=list(body))


def _error(name: str, text: str):
    return SimpleNamespace(message_type=MessageType.ERROR, error_name=name, body=[text])


class _FakeClientBus:
    """Answers NameHasOwner and Properties.Get; records every message."""

    def __init__(self, *, owned: bool = True, properties=None, command_reply=None) -> None:
        self.owned = owned
        self.properties = properties or {}
        self.command_reply = command_reply
        self.messages = []
        self.disconnected = False

    async def call(self, msg):
        self.messages.append(msg)
        if msg.member == "NameHasOwner":
            return _ok(self.owned)
        if msg.member == "Get":
            _, name = msg.body
            signature, value = self.properties[name]
            return _ok(Variant(signature, value))
        return self.command_reply

    def disconnect(self) -> None:
        self.disconnected = True


def _client(bus) -> ControlClient:
    async def factory():
        return bus

    return ControlClient(ControlConfig(connect_timeout_seconds=1.0), bus_factory=factory)


class ControlClientTests(unittest.TestCase):
    def test_send_uses_fire_and_forget_method_call(self) -> None:
        bus = _FakeClientBus()

        _client(bus).send("toggle")

        self.assertEqual(["NameHasOwner", "Toggle"], [m.member for m in bus.messages])
        command = bus.messages[-1]
        self.assertEqual("com.osmandulundu.pomodoro", command.destination)
        self.assertEqual("/com/osmandulundu/pomodoro", command.path)
        self.assertEqual("com.osmandulundu.pomodoro", command.interface)
        self.assertTrue(command.flags & MessageFlag.NO_REPLY_EXPECTED)
        self.assertTrue(bus.disconnected)

    def test_extend_sends_u32_argument(self) -> None:
        bus = _FakeClientBus()

        _client(bus).send("extend", seconds=300)

        command = bus.messages[-1]
        self.assertEqual("Extend", command.member)
        self.assertEqual("u", command.signature)
        self.assertEqual([300], command.body)

    def test_extend_rejects_out_of_range_seconds(self) -> None:
        bus = _FakeClientBus()

        with self.assertRaises(ValueError):
            _client(bus).send("extend", seconds=-1)
        self.assertEqual([], bus.messages)

    def test_unknown_command_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            _client(_FakeClientBus()).send("pause")  # type: ignore[arg-type]

    def test_unowned_name_reports_not_running_without_calling_service(self) -> None:
        bus = _FakeClientBus(owned=False)

        with self.assertRaises(ControlNotRunningError):
            _client(bus).send("start")

        self.assertEqual(["NameHasOwner"], [m.member for m in bus.messages])
        self.assertTrue(bus.disconnected)

    def test_missing_session_bus_reports_not_running(self) -> None:
        async def factory():
            raise OSError("no session bus")

        client = ControlClient(bus_factory=factory)
        with self.assertRaises(ControlNotRunningError):
            client.status()

    def test_status_reads_all_properties(self) -> None:
        bus = _FakeClientBus(
            properties={
                "State": ("s", "shortBreak"),
                "TimeLeft": ("u", 299),
                "IsActive": ("b", True),
                "SessionsCompleted": ("u", 4),
            }
        )

        status = _client(bus).status()

        self.assertEqual(ControlStatus("shortBreak", 299, True, 4), status)
        gets = [m for m in bus.messages if m.member == "Get"]
        self.assertEqual(
            ["State", "TimeLeft", "IsActive", "SessionsCompleted"],
            [m.body[1] for m in gets],
        )
        self.assertTrue(all(m.body[0] == "com.osmandulundu.pomodoro" for m in gets))

    def test_error_reply_raises_call_error(self) -> None:
        bus = _FakeClientBus(
            command_reply=_error("org.freedesktop.DBus.Error.UnknownMethod", "nope")
        )

        with self.assertRaises(ControlCallError) as context:
            _client(bus).send("skip")

        self.assertIn("UnknownMethod", str(context.exception))


if __name__ == "__main__":
    unittest.main()
