"""Render a preview frame from a saved prediction feed response."""

from __future__ import annotations

import argparse
from datetime import datetime, timezone
import json
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from src.data.poller import ViewState
from src.data.prediction_client import parse_predictions
from src.logic.transformer import transform
from src.rendering import build_layout, compose_frame, save_frame

DEFAULT_STOPS = ("4407", "7117")


def main() -> int:
    parser = argparse.ArgumentParser()
    parser.add_argument("path", nargs="?", default="data/samples/predictions.json")
    parser.add_argument("--stops", nargs=2, default=list(DEFAULT_STOPS), metavar="STOP_ID")
    parser.add_argument("--output", default="emulator_output/preview.png")
    args = parser.parse_args()

    with open(args.path, "r", encoding="utf-8") as handle:
        predictions = parse_predictions(json.load(handle))

    result = transform(predictions, args.stops)
    state = ViewState(
        entries_a=result.entries_a,
        entries_b=result.entries_b,
        last_updated=datetime.now(timezone.utc),
        density=result.density,
    )
    frame = compose_frame(build_layout(state, args.stops))
    print("preview_saved", str(save_frame(frame, args.output)), flush=True)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
