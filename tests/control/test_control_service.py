import unittest
from typing import Any

from dbus_fast import RequestNameReply

from control import (
    ControlConfig,
    ControlRegistrationError,
    ControlService,
    ControlServiceError,
    ControlTransportError,
)
from pomodoro import StateRegister


class _NullPublisher:
    def publish(self, event_type: str, **payload: Any) -> None:
        del event_type, payload


class _FakeServiceBus:
    def __init__(self, reply: RequestNameReply = RequestNameReply.PRIMARY_OWNER) -> None:
        self._reply = reply
        self.exported: list[tuple[str, Any]] = []
        self.requested: list[str] = []
        self.disconnected = False

    def export(self, path: str, interface: Any) -> None:
        self.exported.append((path, interface))

    async def request_name(self, name: str, flags: Any) -> RequestNameReply:
        del flags
        self.requested.append(name)
        return self._reply

    def disconnect(self) -> None:
        self.disconnected = True


def _service(bus_factory) -> ControlService:
    return ControlService(
        StateRegister(),
        _NullPublisher(),
        ControlConfig(connect_timeout_seconds=1.0),
        bus_factory=bus_factory,
    )


class ControlServiceTests(unittest.TestCase):
    def test_start_exports_interface_and_claims_name(self) -> None:
        bus = _FakeServiceBus()

        async def factory():
            return bus

        service = _service(factory)
        service.start(timeout_seconds=2.0)
        try:
            self.assertTrue(service.is_running)
            self.assertEqual(
                [("/com/osmandulundu/pomodoro", service.interface)],
                bus.exported,
            )
            self.assertEqual(["com.osmandulundu.pomodoro"], bus.requested)
        finally:
            service.stop()

        self.assertFalse(service.is_running)
        self.assertTrue(bus.disconnected)

    def test_name_conflict_raises_registration_error(self) -> None:
        bus = _FakeServiceBus(RequestNameReply.EXISTS)

        async def factory():
            return bus

        service = _service(factory)
        with self.assertRaises(ControlRegistrationError):
            service.start(timeout_seconds=2.0)
        service.stop()

        self.assertFalse(service.is_running)
        self.assertTrue(bus.disconnected)

    def test_missing_session_bus_raises_transport_error(self) -> None:
        async def factory():
            raise OSError("no session bus")

        service = _service(factory)
        with self.assertRaises(ControlTransportError) as context:
            service.start(timeout_seconds=2.0)
        service.stop()

        self.assertIsInstance(context.exception, ControlServiceError)
        self.assertIn("no session bus", str(context.exception))


if __name__ == "__main__":
    unittest.main()
