"""Programmatic status icons for the Voxpad window.

Generates QIcon instances for each status using QPainter.
No asset files required - all icons drawn programmatically.
"""

import math
from PySide6.QtCore import Qt
from PySide6.QtGui import QIcon, QPixmap, QPainter, QPen, QBrush, QPainterPath, QColor
from voxpad.ui.theme import get_color

VALID_STATES = {"loading", "ready", "processing", "error", "recording"}


def render_icon(state: str, phase: int = 0, size: int = 32, theme: str = "dark") -> QIcon:
    """Render icon for given status.

    Args:
        state: One of "loading", "ready", "processing", "error", "recording"
        phase: Animation phase (0-100 for pulse, 0-359 for rotation)
        size: Icon size in pixels

    Raises:
        ValueError: If state is not recognized
    """
    if state not in VALID_STATES:
        raise ValueError(f"Invalid state '{state}'. Must be one of {VALID_STATES}")

    pixmap = QPixmap(size, size)
    pixmap.fill(Qt.GlobalColor.transparent)

    painter = QPainter(pixmap)
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)

    if state == "ready":
        _draw_ready(painter, size, theme)
    elif state == "recording":
        _draw_recording(painter, size, phase, theme)
    elif state in ("loading", "processing"):
        _draw_spinner(painter, size, phase, theme)
    elif state == "error":
        _draw_error(painter, size, theme)

    painter.end()
    return QIcon(pixmap)


def _draw_ready(painter: QPainter, size: int, theme: str) -> None:
    """Green checkmark."""
    pen = QPen(QColor(get_color("SUCCESS", theme)), max(2, size // 12))
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    pen.setJoinStyle(Qt.PenJoinStyle.RoundJoin)
    painter.setPen(pen)

    scale = size / 64.0
    center = size / 2
    path = QPainterPath()
    path.moveTo(center - 14 * scale, center)
    path.lineTo(center - 3 * scale, center + 11 * scale)
    path.lineTo(center + 16 * scale, center - 12 * scale)
    painter.drawPath(path)


def _draw_recording(painter: QPainter, size: int, phase: int, theme: str) -> None:
    """Red dot pulsing between 40% and 100% opacity over phase 0-100."""
    color = QColor(get_color("RECORDING", theme))
    sine_value = math.sin(phase / 100.0 * 2 * math.pi)
    color.setAlphaF(0.4 + 0.6 * (sine_value + 1) / 2)

    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(QBrush(color))
    margin = size // 4
    painter.drawEllipse(margin, margin, size - 2 * margin, size - 2 * margin)


def _draw_spinner(painter: QPainter, size: int, phase: int, theme: str) -> None:
    """Yellow 270° arc rotated by phase degrees."""
    pen = QPen(QColor(get_color("WARNING", theme)), max(2, size // 12))
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    painter.setPen(pen)
    painter.setBrush(Qt.BrushStyle.NoBrush)

    # Qt uses 1/16th degree units
    margin = size // 6
    painter.drawArc(margin, margin, size - 2 * margin, size - 2 * margin, phase * 16, 270 * 16)


def _draw_error(painter: QPainter, size: int, theme: str) -> None:
    """Red X mark."""
    pen = QPen(QColor(get_color("ERROR", theme)), max(2, size // 12))
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    painter.setPen(pen)

    center = size / 2
    offset = size / 4
    painter.drawLine(
        int(center - offset), int(center - offset),
        int(center + offset), int(center + offset)
    )
    painter.drawLine(
        int(center + offset), int(center - offset),
        int(center - offset), int(center + offset)
    )
