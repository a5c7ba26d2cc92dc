"""Run the bus sign: poll predictions, render frames, serve a live preview."""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
import sys
import threading

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.config import load_config
from src.data.poller import SignPoller, ViewState
from src.data.prediction_client import PredictionClient
from src.log import configure_logging
from src.rendering import build_layout, compose_frame, save_frame
from src.rendering.preview_server import make_preview_server

logger = logging.getLogger("run_sign")


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("--config", default="config/config.yaml")
    parser.add_argument("--port", type=int, default=8000, help="Preview server port")
    parser.add_argument("--no-server", action="store_true", help="Disable preview web server")
    parser.add_argument("--once", action="store_true", help="Refresh and render a single frame")
    args = parser.parse_args()

    config = load_config(args.config)
    configure_logging(config.log)
    stop_ids = config.feed.stop_ids
    frame_path = Path(config.display.output_path)

    def render(state: ViewState) -> None:
        layout = build_layout(state, stop_ids)
        image = compose_frame(layout, config.display.width, config.display.height)
        save_frame(image, str(frame_path))

    client = PredictionClient(config.feed.base_url, timeout_seconds=config.feed.timeout_seconds)
    poller = SignPoller(
        client,
        stop_ids,
        refresh_interval_seconds=config.feed.refresh_interval_seconds,
        on_update=render,
    )
    logger.info("Polling %s every %d ms", client.url, config.feed.refresh_interval_ms)

    if args.once:
        if not poller.refresh():
            # Still draw the empty sign so the output file exists.
            render(poller.get_state())
            return 1
        return 0

    # Draw the placeholder sign until the first refresh lands.
    render(poller.get_state())

    if not args.no_server:
        refresh_seconds = max(1, round(config.feed.refresh_interval_seconds))
        server = make_preview_server("0.0.0.0", args.port, frame_path, refresh_seconds)
        threading.Thread(target=server.serve_forever, daemon=True).start()
        logger.info("Preview server on http://0.0.0.0:%d/", args.port)

    poller.start()
    try:
        poller.join()
    except KeyboardInterrupt:
        poller.stop()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
