"""Squares overlay — a transparent, always-on-top window that draws one
square per slot from the descriptors the refresh pipeline hands it.

While the drag modifier is held a left-button drag moves the window;
otherwise a left click on a visible square emits `slot_clicked(index)` so the
caller can target that unit.
"""
from __future__ import annotations

import logging

from PyQt6.QtCore import QPoint, QRect, QRectF, Qt, pyqtSignal
from PyQt6.QtGui import QColor, QFont, QPainter, QPen
from PyQt6.QtWidgets import QWidget

from raid_squares.models import AppConfig, BorderStyle, Color, VisualDescriptor

logger = logging.getLogger(__name__)

# (color, alpha 0-255, width px) per border style
_BORDER_PENS = {
    BorderStyle.THIN: ((0, 0, 0), 0, 1),
    BorderStyle.DAMAGED: ((255, 0, 0), 255, 2),
    BorderStyle.TARGETED: ((255, 255, 255), 255, 4),
}

_DRAG_VEIL = QColor(255, 255, 255, 26)


def _qcolor(color: Color) -> QColor:
    r, g, b = color
    return QColor.fromRgbF(r, g, b)


class SquaresOverlay(QWidget):
    """Frameless overlay holding the slot grid. Implements the SlotRenderer contract."""

    # Plain left click on a visible square, with its slot index
    slot_clicked = pyqtSignal(int)

    def __init__(self, config: AppConfig, parent: QWidget | None = None):
        super().__init__(parent)
        self._config = config
        self._descriptors: dict[int, VisualDescriptor] = {}
        self._drag_enabled = False
        self._drag_offset: QPoint | None = None
        self._label_font = QFont()
        self._label_font.setPointSize(7)

        self._setup_window()

    def _setup_window(self) -> None:
        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint
            | Qt.WindowType.WindowStaysOnTopHint
            | Qt.WindowType.Tool  # Hides from taskbar
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating)
        width, height = self._config.frame_size()
        self.setFixedSize(width, height)

    # --- SlotRenderer ---

    def apply(self, index: int, descriptor: VisualDescriptor) -> None:
        if descriptor.visible:
            self._descriptors[index] = descriptor
        else:
            self._descriptors.pop(index, None)
        self.update()

    def set_drag_enabled(self, enabled: bool) -> None:
        self._drag_enabled = bool(enabled)
        if not self._drag_enabled:
            self._drag_offset = None
        self.update()

    def center_on(self, rect: QRect) -> None:
        self.move(rect.center() - self.rect().center())

    # --- painting ---

    def cell_rect(self, index: int) -> QRect:
        x, y = self._config.cell_origin(index)
        size = self._config.cell_size
        return QRect(x, y, size, size)

    def square_rect(self, index: int, scale: float) -> QRectF:
        """Fill rect for a square at `scale`, centered in its cell."""
        cell = self.cell_rect(index)
        side = self._config.base_texture_size * scale
        cx = cell.x() + cell.width() / 2
        cy = cell.y() + cell.height() / 2
        return QRectF(cx - side / 2, cy - side / 2, side, side)

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.setFont(self._label_font)

        for index, desc in sorted(self._descriptors.items()):
            cell = self.cell_rect(index)
            painter.setOpacity(desc.alpha)
            painter.fillRect(self.square_rect(index, desc.scale), _qcolor(desc.fill_color))

            rgb, border_alpha, width = _BORDER_PENS.get(desc.border, ((0, 0, 0), 0, 1))
            if border_alpha > 0:
                pen = QPen(QColor(*rgb, border_alpha), width)
                painter.setPen(pen)
                painter.setBrush(Qt.BrushStyle.NoBrush)
                inset = width // 2
                painter.drawRect(cell.adjusted(inset, inset, -inset - 1, -inset - 1))

            painter.setOpacity(desc.alpha * self._config.label_alpha)
            painter.setPen(QPen(QColor(255, 255, 255), 1))
            painter.drawText(cell, Qt.AlignmentFlag.AlignCenter, desc.label)

        if self._drag_enabled:
            painter.setOpacity(1.0)
            painter.fillRect(self.rect(), _DRAG_VEIL)

        painter.end()

    # --- mouse: drag or click-to-target ---

    def slot_at(self, pos: QPoint) -> int | None:
        """Index of the visible square under widget-local `pos`."""
        index = self._config.slot_at(pos.x(), pos.y())
        if index is None or index not in self._descriptors:
            return None
        return index

    def mousePressEvent(self, event) -> None:
        if event.button() != Qt.MouseButton.LeftButton:
            event.ignore()
            return
        if self._drag_enabled:
            self._drag_offset = event.globalPosition().toPoint() - self.frameGeometry().topLeft()
            event.accept()
            return
        index = self.slot_at(event.position().toPoint())
        if index is None:
            event.ignore()
            return
        logger.debug("Square %d clicked", index)
        self.slot_clicked.emit(index)
        event.accept()

    def mouseMoveEvent(self, event) -> None:
        if self._drag_enabled and self._drag_offset is not None:
            self.move(event.globalPosition().toPoint() - self._drag_offset)
            event.accept()
            return
        event.ignore()

    def mouseReleaseEvent(self, event) -> None:
        if self._drag_offset is not None:
            logger.debug("Overlay moved to %s", self.pos())
        self._drag_offset = None
        event.ignore()
