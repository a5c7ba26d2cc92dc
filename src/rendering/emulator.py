"""Frame output for the virtual sign."""

from __future__ import annotations

import os
from pathlib import Path

from PIL import Image

DEFAULT_FRAME_PATH = "emulator_output/sign.png"


def save_frame(image: Image.Image, path: str = DEFAULT_FRAME_PATH) -> Path:
    """Write a frame as PNG, swapping it into place so readers never see a partial file."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = output_path.with_name(f".{output_path.name}.tmp")
    image.save(tmp_path, format="PNG")
    os.replace(tmp_path, output_path)
    return output_path


__all__ = ["DEFAULT_FRAME_PATH", "save_frame"]
