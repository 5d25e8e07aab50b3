"""Tests for the pure timer-face renderer and the repaint check."""

from __future__ import annotations

import math
from dataclasses import replace

import pytest
from PyQt6.QtGui import QColor

from analogtimer.config import (
    Direction,
    RenderRequest,
    TimerConfigError,
    TimerStyle,
    WarningConfig,
    WarningLevel,
)
from analogtimer.ui.render import (
    Circle,
    Line,
    Sector,
    Text,
    progress_color,
    render,
    should_repaint,
)


def _of(kind, primitives):
    return [p for p in primitives if isinstance(p, kind)]


def _sector(request):
    sectors = _of(Sector, render(request))
    return sectors[0] if sectors else None


# ═══════════════════════════════════════════════════════════════════════
#  LAYOUT
# ═══════════════════════════════════════════════════════════════════════


class TestLayout:

    def test_sixty_marks_every_fifth_major(self):
        lines = _of(Line, render(RenderRequest(progress=0.5)))
        assert len(lines) == 60
        assert sum(1 for l in lines if l.major) == 12
        assert all(l.major == (i % 5 == 0) for i, l in enumerate(lines))
        major, minor = lines[0], lines[1]
        assert major.width > minor.width
        assert major.color == QColor("#2C3E50")
        assert minor.color == QColor("#7F8C8D")

    def test_first_mark_points_to_twelve_o_clock(self):
        mark = _of(Line, render(RenderRequest(progress=0.5)))[0]
        # size 200 → centre (100, 100), mark radius 95, major length 8
        assert mark.end[0] == pytest.approx(100.0)
        assert mark.end[1] == pytest.approx(5.0)
        assert mark.start[1] == pytest.approx(13.0)

    def test_marks_independent_of_progress(self):
        a = _of(Line, render(RenderRequest(progress=0.0)))
        b = _of(Line, render(RenderRequest(progress=1.0)))
        assert a == b

    def test_paint_order(self):
        request = RenderRequest(
            progress=0.3,
            is_active=True,
            warning_level=WarningLevel.WARNING,
            label="18",
        )
        tail = render(request)[60:]
        assert [type(p) for p in tail] == [Circle, Sector, Circle, Circle, Text]
        ring, sector, glow, inner, text = tail
        assert ring.radius == 85
        assert ring.width == 6
        assert sector.radius == 82
        assert glow.blur > 0
        assert inner.radius == 82
        assert inner.width == 1
        assert text.text == "18"
        assert text.center == (100.0, 100.0)

    def test_render_is_deterministic(self):
        request = RenderRequest(progress=0.42, label="12")
        assert render(request) == render(request)


# ═══════════════════════════════════════════════════════════════════════
#  PROGRESS SECTOR
# ═══════════════════════════════════════════════════════════════════════


class TestSector:

    def test_no_sector_at_zero(self):
        assert _sector(RenderRequest(progress=0.0)) is None

    def test_full_circle_at_one(self):
        sector = _sector(RenderRequest(progress=1.0))
        assert sector.sweep_angle == pytest.approx(2 * math.pi)
        assert sector.start_angle == pytest.approx(-math.pi / 2)

    def test_counterclockwise_negates_sweep(self):
        cw = _sector(RenderRequest(progress=0.25))
        ccw = _sector(RenderRequest(
            progress=0.25, direction=Direction.COUNTERCLOCKWISE,
        ))
        assert cw.sweep_angle == pytest.approx(math.pi / 2)
        assert ccw.sweep_angle == pytest.approx(-cw.sweep_angle)
        assert ccw.start_angle == cw.start_angle


# ═══════════════════════════════════════════════════════════════════════
#  COLOURS
# ═══════════════════════════════════════════════════════════════════════


class TestProgressColor:

    def setup_method(self):
        self.style = TimerStyle()
        self.colors = self.style.warning_colors

    def test_full_progress_is_normal_color(self):
        assert progress_color(1.0, self.style) == self.colors.normal_color

    def test_below_critical_is_critical_color(self):
        assert progress_color(0.1, self.style) == self.colors.critical_color
        assert progress_color(0.0, self.style) == self.colors.critical_color

    def test_critical_boundary_starts_the_blend(self):
        assert progress_color(0.2, self.style) == self.colors.critical_color

    def test_warning_boundary_is_pure_warning_color(self):
        assert progress_color(0.5, self.style) == self.colors.warning_color

    def test_no_discontinuity_at_warning_boundary(self):
        below = progress_color(0.5 - 1e-9, self.style)
        at = progress_color(0.5, self.style)
        for a, b in zip(below.getRgb(), at.getRgb()):
            assert abs(a - b) <= 1

    def test_midpoint_blend(self):
        # halfway between critical (0.2) and warning (0.5)
        color = progress_color(0.35, self.style)
        crit, warn = self.colors.critical_color, self.colors.warning_color
        expected = (
            (crit.red() + warn.red()) / 2,
            (crit.green() + warn.green()) / 2,
            (crit.blue() + warn.blue()) / 2,
        )
        actual = (color.red(), color.green(), color.blue())
        for a, e in zip(actual, expected):
            assert abs(a - e) <= 1

    def test_override_wins(self):
        style = TimerStyle(progress_color=QColor("#123456"))
        assert progress_color(0.1, style) == QColor("#123456")

    def test_disabled_warning_colors_use_normal(self):
        style = TimerStyle(enable_warning_colors=False)
        assert progress_color(0.1, style) == style.warning_colors.normal_color

    def test_custom_thresholds(self):
        colors = WarningConfig(warning_threshold=0.7, critical_threshold=0.3)
        style = TimerStyle(warning_colors=colors)
        assert progress_color(0.7, style) == colors.warning_color
        assert progress_color(0.29, style) == colors.critical_color

    def test_warning_threshold_of_one(self):
        colors = WarningConfig(warning_threshold=1.0, critical_threshold=0.5)
        style = TimerStyle(warning_colors=colors)
        assert progress_color(1.0, style) == colors.warning_color

    def test_sector_uses_resolved_color(self):
        sector = _sector(RenderRequest(progress=0.1))
        assert sector.color == QColor("#E74C3C")


# ═══════════════════════════════════════════════════════════════════════
#  GLOW AND CENTRE
# ═══════════════════════════════════════════════════════════════════════


class TestGlowAndCentre:

    def _glows(self, request):
        return [c for c in _of(Circle, render(request)) if c.blur > 0]

    def test_no_glow_when_normal(self):
        request = RenderRequest(progress=0.9, is_active=True)
        assert self._glows(request) == []

    def test_no_glow_when_not_active(self):
        request = RenderRequest(
            progress=0.1, warning_level=WarningLevel.CRITICAL,
        )
        assert self._glows(request) == []

    @pytest.mark.parametrize("phase, alpha", [(0.0, 0.3), (0.5, 0.45), (1.0, 0.6)])
    def test_glow_opacity_follows_phase(self, phase, alpha):
        request = RenderRequest(
            progress=0.1,
            is_active=True,
            warning_level=WarningLevel.CRITICAL,
            animation_value=phase,
        )
        (glow,) = self._glows(request)
        assert glow.color.alphaF() == pytest.approx(alpha, abs=0.01)
        assert glow.color.red() == QColor("#E74C3C").red()

    def test_centre_dot_without_label(self):
        for label in (None, ""):
            last = render(RenderRequest(progress=0.5, label=label))[-1]
            assert isinstance(last, Circle)
            assert last.filled is True
            assert last.radius == 4

    def test_label_replaces_dot(self):
        primitives = render(RenderRequest(progress=0.5, label="01:30"))
        assert isinstance(primitives[-1], Text)
        assert not any(isinstance(p, Circle) and p.filled for p in primitives)


# ═══════════════════════════════════════════════════════════════════════
#  REPAINT CHECK
# ═══════════════════════════════════════════════════════════════════════


class TestShouldRepaint:

    BASE = RenderRequest(progress=0.5, label="30")

    def test_first_frame_always_paints(self):
        assert should_repaint(None, self.BASE) is True

    def test_identical_requests_skip(self):
        assert should_repaint(self.BASE, replace(self.BASE)) is False

    def test_style_only_change_skips(self):
        other = replace(
            self.BASE, style=TimerStyle(circle_color=QColor("#FF0000")),
        )
        assert should_repaint(self.BASE, other) is False

    @pytest.mark.parametrize("changes", [
        {"progress": 0.4},
        {"is_active": True},
        {"warning_level": WarningLevel.WARNING},
        {"animation_value": 0.5},
        {"label": "29"},
        {"direction": Direction.COUNTERCLOCKWISE},
    ])
    def test_compared_fields_force_repaint(self, changes):
        assert should_repaint(self.BASE, replace(self.BASE, **changes)) is True


# ═══════════════════════════════════════════════════════════════════════
#  VALIDATION
# ═══════════════════════════════════════════════════════════════════════


class TestValidation:

    @pytest.mark.parametrize("progress", [-0.1, 1.1])
    def test_progress_out_of_range(self, progress):
        with pytest.raises(TimerConfigError):
            RenderRequest(progress=progress)

    def test_animation_value_out_of_range(self):
        with pytest.raises(TimerConfigError):
            RenderRequest(progress=0.5, animation_value=2.0)

    def test_style_rejects_bad_size(self):
        with pytest.raises(TimerConfigError):
            TimerStyle(size=0)
        with pytest.raises(TimerConfigError):
            TimerStyle(time_text_size=-1)

    def test_warning_config_defaults(self):
        config = WarningConfig()
        assert config.normal_color == QColor("#2ECC71")
        assert config.warning_color == QColor("#F39C12")
        assert config.critical_color == QColor("#E74C3C")
        assert config.warning_threshold == 0.5
        assert config.critical_threshold == 0.2

    def test_warning_config_rejects_inverted_thresholds(self):
        with pytest.raises(TimerConfigError):
            WarningConfig(warning_threshold=0.1, critical_threshold=0.2)
