"""Live preview page for the virtual sign."""

from __future__ import annotations

from http.server import BaseHTTPRequestHandler, HTTPServer
from pathlib import Path
from typing import Any


def make_preview_handler(frame_path: Path, refresh_seconds: int) -> type[BaseHTTPRequestHandler]:
    """Handler serving the latest frame, an auto-refreshing page and /healthz."""

    class PreviewHandler(BaseHTTPRequestHandler):
        def do_GET(self) -> None:  # noqa: N802
            if self.path == "/healthz":
                self.send_response(200)
                self.send_header("Content-Type", "text/plain; charset=utf-8")
                self.end_headers()
                self.wfile.write(b"ok")
                return

            if self.path == "/sign.png":
                # The frame can be mid-swap or not written yet.
                try:
                    frame = frame_path.read_bytes()
                except OSError:
                    self.send_response(404)
                    self.end_headers()
                    return
                self.send_response(200)
                self.send_header("Content-Type", "image/png")
                self.send_header("Cache-Control", "no-store")
                self.end_headers()
                self.wfile.write(frame)
                return

            if self.path == "/":
                html = f"""<!doctype html>
<html>
  <head>
    <meta http-equiv="refresh" content="{refresh_seconds}">
    <style>
      body {{ background: #111; color: #fff; font-family: sans-serif; }}
      img {{ width: 1024px; image-rendering: pixelated; }}
    </style>
    <title>Bus Sign Preview</title>
  </head>
  <body>
    <img src="/sign.png" alt="Sign">
  </body>
</html>"""
                self.send_response(200)
                self.send_header("Content-Type", "text/html; charset=utf-8")
                self.end_headers()
                self.wfile.write(html.encode("utf-8"))
                return

            self.send_response(404)
            self.end_headers()

        def log_message(self, format: str, *args: Any) -> None:
            return

    return PreviewHandler


def make_preview_server(host: str, port: int, frame_path: Path, refresh_seconds: int) -> HTTPServer:
    return HTTPServer((host, port), make_preview_handler(frame_path, refresh_seconds))


__all__ = ["make_preview_handler", "make_preview_server"]
