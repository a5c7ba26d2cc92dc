"""Layout and frame rendering for the bus sign."""

from src.rendering.composer import compose_frame
from src.rendering.emulator import save_frame
from src.rendering.layout import Column, ColumnEntry, SignLayout, build_layout

__all__ = ["Column", "ColumnEntry", "SignLayout", "build_layout", "compose_frame", "save_frame"]
