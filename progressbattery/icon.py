from __future__ import annotations

from PySide6.QtCore import QRectF, Qt
from PySide6.QtGui import QColor, QIcon, QImage, QPainter, QPen, QPixmap

from progressbattery.constants import ICON_HEIGHT, ICON_WIDTH

_OUTLINE_ALPHA = 128
_OUTLINE_WIDTH = 1.5
_OUTLINE_RADIUS = 3.0
_FILL_INSET = 2.0
_FILL_RADIUS = 2.0


def render_progress_image(
    fraction: float,
    *,
    width: int = ICON_WIDTH,
    height: int = ICON_HEIGHT,
    scale: int = 2,
    color: QColor | None = None,
) -> QImage:
    """Draw the battery-style bar: a translucent rounded outline and a fill
    whose width follows ``fraction`` (clamped to [0, 1])."""
    fraction = max(0.0, min(1.0, fraction))
    color = QColor(Qt.white) if color is None else QColor(color)

    image = QImage(width * scale, height * scale, QImage.Format_ARGB32_Premultiplied)
    image.fill(Qt.transparent)
    image.setDevicePixelRatio(scale)

    painter = QPainter(image)
    try:
        painter.setRenderHint(QPainter.Antialiasing, True)

        outline = QColor(color)
        outline.setAlpha(_OUTLINE_ALPHA)
        pen = QPen(outline, _OUTLINE_WIDTH)
        painter.setPen(pen)
        painter.setBrush(Qt.NoBrush)
        half = _OUTLINE_WIDTH / 2
        painter.drawRoundedRect(
            QRectF(half, half, width - _OUTLINE_WIDTH, height - _OUTLINE_WIDTH),
            _OUTLINE_RADIUS,
            _OUTLINE_RADIUS,
        )

        fill_width = width * fraction - 2 * _FILL_INSET
        if fill_width > 0:
            painter.setPen(Qt.NoPen)
            painter.setBrush(color)
            painter.drawRoundedRect(
                QRectF(_FILL_INSET, _FILL_INSET, fill_width, height - 2 * _FILL_INSET),
                _FILL_RADIUS,
                _FILL_RADIUS,
            )
    finally:
        painter.end()

    return image


def progress_icon(fraction: float, color: QColor | None = None) -> QIcon:
    return QIcon(QPixmap.fromImage(render_progress_image(fraction, color=color)))
