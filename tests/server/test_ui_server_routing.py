import asyncio
import unittest

from websockets.datastructures import Headers
from websockets.http11 import Request

from server.config import UIServerConfig
from server.service import UIServer, serve


class UIServerRoutingTests(unittest.TestCase):
    def setUp(self) -> None:
        self.server = UIServer(UIServerConfig(websocket_path="/ws"))

    def _route(self, path: str):
        return asyncio.run(self.server._route_http(None, Request(path, Headers())))

    def test_uses_request_based_server_api(self) -> None:
        self.assertEqual("websockets.asyncio.server", serve.__module__)

    def test_websocket_path_proceeds_to_handshake(self) -> None:
        self.assertIsNone(self._route("/ws"))
        self.assertIsNone(self._route("/ws?client=tray"))

    def test_healthz_answers_ok(self) -> None:
        response = self._route("/healthz")

        self.assertEqual(200, response.status_code)
        self.assertEqual(b"ok\n", response.body)

    def test_other_paths_are_not_found(self) -> None:
        self.assertEqual(404, self._route("/index.html").status_code)

    def test_publish_before_start_is_dropped(self) -> None:
        self.server.publish("toggle")

        self.assertFalse(self.server.is_running)


if __name__ == "__main__":
    unittest.main()
