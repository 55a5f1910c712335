"""Serve an API over HTTP."""

import json
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from typing import Type

from users_api import StatusCode
from users_api.config import Config
from users_api.proxy import API
from users_api.types import Response


def handler_for(app: API) -> Type[BaseHTTPRequestHandler]:
    """Return a request handler class bound to ``app``."""

    class RequestHandler(BaseHTTPRequestHandler):
        api = app

        def _read_body(self) -> bytes:
            length = int(self.headers.get("Content-Length") or 0)
            return self.rfile.read(length) if length > 0 else b""

        def _send(self, response: Response) -> None:
            body = response.body
            if isinstance(body, str):
                body = body.encode("utf-8")

            self.send_response(response.status_code.value)
            self.send_header("Content-Type", response.content_type)
            for name, value in (response.headers or {}).items():
                self.send_header(name, value)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            if self.command != "HEAD":
                self.wfile.write(body)

        def _handle(self) -> None:
            try:
                body = self._read_body()
            except ValueError:
                self._send(
                    Response(
                        status_code=StatusCode.BAD_REQUEST,
                        content_type="application/json",
                        body=json.dumps({"errorMessage": "Invalid Content-Length"}),
                    )
                )
                return

            response = self.api(
                self.command, self.path, dict(self.headers.items()), body
            )
            self._send(response)

        # Unregistered methods still reach the router and answer 404
        do_GET = _handle
        do_POST = _handle
        do_PUT = _handle
        do_DELETE = _handle
        do_PATCH = _handle
        do_HEAD = _handle
        do_OPTIONS = _handle

        def log_message(self, format, *args) -> None:
            self.api.log.debug(f"{self.address_string()} - {format % args}")

    return RequestHandler


def make_server(
    app: API, host: str = "127.0.0.1", port: int = 3333
) -> ThreadingHTTPServer:
    """Create a threaded HTTP server; each request runs in its own thread."""
    return ThreadingHTTPServer((host, port), handler_for(app))


def serve(app: API, config: Config) -> None:
    """Serve ``app`` until interrupted."""
    server = make_server(app, config.host, config.port)
    host, port = server.server_address[:2]
    app.log.info(f"HTTP Server running on http://{host}:{port}")
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        app.log.info("Shutting down")
    finally:
        server.server_close()
