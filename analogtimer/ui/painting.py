"""Replay renderer primitives on a QPainter."""

from __future__ import annotations

import math
from typing import Iterable

from PyQt6.QtCore import Qt, QPointF, QRectF
from PyQt6.QtGui import QPainter, QPen, QColor, QFont, QPainterPath

from .render import Circle, Line, Primitive, Sector, Text


def _round_pen(color: QColor, width: float) -> QPen:
    pen = QPen(color, width, Qt.PenStyle.SolidLine)
    pen.setCapStyle(Qt.PenCapStyle.RoundCap)
    return pen


def _paint_circle(painter: QPainter, circle: Circle) -> None:
    center = QPointF(*circle.center)
    if circle.filled:
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(circle.color)
        painter.drawEllipse(center, circle.radius, circle.radius)
        return

    painter.setBrush(Qt.BrushStyle.NoBrush)
    if circle.blur > 0:
        # No mask blur on QPainter: a wider, fainter halo under the stroke.
        halo = QColor(circle.color)
        halo.setAlphaF(halo.alphaF() / 2)
        painter.setPen(_round_pen(halo, circle.width + circle.blur * 2))
        painter.drawEllipse(center, circle.radius, circle.radius)
    painter.setPen(_round_pen(circle.color, circle.width))
    painter.drawEllipse(center, circle.radius, circle.radius)


def _paint_sector(painter: QPainter, sector: Sector) -> None:
    cx, cy = sector.center
    r = sector.radius
    rect = QRectF(cx - r, cy - r, 2 * r, 2 * r)
    painter.setPen(Qt.PenStyle.NoPen)
    painter.setBrush(sector.color)
    if abs(sector.sweep_angle) >= 2 * math.pi:
        painter.drawEllipse(rect)
        return
    path = QPainterPath(QPointF(cx, cy))
    path.arcTo(
        rect,
        math.degrees(-sector.start_angle),
        math.degrees(-sector.sweep_angle),
    )
    path.closeSubpath()
    painter.drawPath(path)


def _paint_text(painter: QPainter, text: Text) -> None:
    font = QFont(text.family)
    font.setStyleHint(QFont.StyleHint.Monospace)
    font.setPixelSize(max(1, int(round(text.size))))
    if text.bold:
        font.setWeight(QFont.Weight.Bold)
    painter.setFont(font)
    painter.setPen(text.color)

    cx, cy = text.center
    # Wide enough for any label that fits inside the ring.
    half = max(cx, cy)
    painter.drawText(
        QRectF(cx - half, cy - half, 2 * half, 2 * half),
        Qt.AlignmentFlag.AlignCenter,
        text.text,
    )


def paint_primitives(painter: QPainter, primitives: Iterable[Primitive]) -> None:
    """Draw *primitives* in order.  Leaves the painter's state as found."""
    painter.save()
    painter.setRenderHint(QPainter.RenderHint.Antialiasing)
    try:
        for item in primitives:
            if isinstance(item, Line):
                painter.setPen(_round_pen(item.color, item.width))
                painter.drawLine(QPointF(*item.start), QPointF(*item.end))
            elif isinstance(item, Circle):
                _paint_circle(painter, item)
            elif isinstance(item, Sector):
                _paint_sector(painter, item)
            elif isinstance(item, Text):
                _paint_text(painter, item)
            else:
                raise TypeError(f"unknown primitive {item!r}")
    finally:
        painter.restore()
