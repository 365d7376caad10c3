"""Tests for the primitive drawer: shape entries to surface calls."""

import math

import pytest

from deckrender.dsl.schema import Arc, Curve, Ellipse, Image, Line, Polygon, Rect
from deckrender.engine.color import FillStyle, StrokeStyle
from deckrender.engine.primitives import text_anchor
from deckrender.engine.units import DEFAULT_SHAPE_COLOR


class TestRectAndEllipse:
    """Filled shapes positioned by their center."""

    def test_rect_centered(self, drawer, surface):
        drawer.draw_rect(Rect(xp=50, yp=50, wp=20, hp=10))
        (call,) = surface.calls
        assert call.op == "fill_rect"
        assert call["x"] == pytest.approx(400)
        assert call["y"] == pytest.approx(450)
        assert call["width"] == pytest.approx(200)
        assert call["height"] == pytest.approx(100)
        assert call["style"] == FillStyle(DEFAULT_SHAPE_COLOR, 1.0)

    def test_height_ratio_overrides_height(self, drawer, surface):
        drawer.draw_rect(Rect(xp=50, yp=50, wp=20, hp=90, hr=50))
        call = surface.calls[0]
        assert call["width"] == pytest.approx(200)
        assert call["height"] == pytest.approx(100)

    def test_rect_color_and_opacity(self, drawer, surface):
        drawer.draw_rect(Rect(xp=10, yp=10, wp=5, hp=5, color="hsv(240,100,100)", opacity=30))
        assert surface.calls[0]["style"] == FillStyle("rgb(0,0,255)", 0.3)

    def test_ellipse_uses_radii(self, drawer, surface):
        drawer.draw_ellipse(Ellipse(xp=25, yp=75, wp=10, hp=20))
        (call,) = surface.calls
        assert call.op == "fill_ellipse"
        assert call["cx"] == pytest.approx(250)
        assert call["cy"] == pytest.approx(250)
        assert call["rx"] == pytest.approx(50)
        assert call["ry"] == pytest.approx(100)

    def test_transparent_shape(self, drawer, surface):
        drawer.draw_ellipse(Ellipse(xp=50, yp=50, wp=10, hr=100, opacity=-1))
        call = surface.calls[0]
        assert call["style"].opacity == 0
        assert call["ry"] == pytest.approx(call["rx"])


class TestStrokedShapes:
    """Lines, curves and arcs."""

    def test_line_width_from_sp(self, drawer, surface):
        drawer.draw_line(Line(xp1=0, yp1=0, xp2=100, yp2=100, sp=0.5, color="red"))
        (call,) = surface.calls
        assert call.op == "stroke_line"
        assert (call["x1"], call["y1"]) == (0, 1000)
        assert (call["x2"], call["y2"]) == (1000, 0)
        style = call["style"]
        assert style.width == pytest.approx(5.0)
        assert (style.color, style.opacity) == ("red", 1.0)

    def test_zero_width_falls_back(self, drawer, surface):
        drawer.draw_line(Line(xp1=10, yp1=10, xp2=20, yp2=20))
        assert surface.calls[0]["style"] == StrokeStyle(2.0, DEFAULT_SHAPE_COLOR, 1.0)

    def test_curve_points(self, drawer, surface):
        drawer.draw_curve(Curve(xp1=10, yp1=50, xp2=50, yp2=90, xp3=90, yp3=50))
        (call,) = surface.calls
        assert call.op == "stroke_quadratic_curve"
        assert (call["x1"], call["y1"]) == pytest.approx((100, 500))
        assert (call["cx"], call["cy"]) == pytest.approx((500, 100))
        assert (call["x2"], call["y2"]) == pytest.approx((900, 500))
        assert call["style"].width == 2.0

    def test_arc_endpoints(self, drawer, surface):
        drawer.draw_arc(Arc(xp=50, yp=50, wp=20, hp=20, a1=0, a2=90))
        (call,) = surface.calls
        assert call.op == "stroke_arc"
        assert call["rx"] == pytest.approx(100)
        assert call["ry"] == pytest.approx(100)
        assert (call["sx"], call["sy"]) == pytest.approx((600, 500))
        # 90 degrees counter-clockwise is straight up on screen
        assert (call["ex"], call["ey"]) == pytest.approx((500, 400))
        assert call["large_arc"] is False
        assert call["sweep"] is False

    def test_arc_large_flag(self, drawer, surface):
        drawer.draw_arc(Arc(xp=50, yp=50, wp=20, hp=20, a1=0, a2=180))
        drawer.draw_arc(Arc(xp=50, yp=50, wp=20, hp=20, a1=10, a2=100))
        assert [c["large_arc"] for c in surface.calls] == [True, False]

    def test_arc_height_uses_canvas_width(self, fonts, surface):
        from deckrender.engine.primitives import PrimitiveDrawer

        wide = PrimitiveDrawer(surface, 2000, 1000, fonts)
        wide.draw_arc(Arc(xp=50, yp=50, wp=10, hp=10, a1=0, a2=45))
        assert surface.calls[0]["ry"] == pytest.approx(100)


class TestPolygon:
    """Polygons need matching coordinate lists of three or more points."""

    def test_draws_points(self, drawer, surface):
        drawer.draw_polygon(Polygon(xc=[10, 50, 90], yc=[10, 90, 10], color="green"))
        (call,) = surface.calls
        assert call.op == "fill_polygon"
        assert call["xs"] == pytest.approx([100, 500, 900])
        assert call["ys"] == pytest.approx([900, 100, 900])
        assert call["style"] == FillStyle("green", 1.0)

    def test_mismatched_lengths_skipped(self, drawer, surface, diagnostics):
        drawer.draw_polygon(Polygon(xc=[10, 50, 90, 20], yc=[10, 90, 10]))
        assert surface.calls == []
        assert diagnostics.skipped_polygons == 1

    def test_too_few_points_skipped(self, drawer, surface, diagnostics):
        drawer.draw_polygon(Polygon(xc=[10, 50], yc=[10, 90]))
        drawer.draw_polygon(Polygon())
        assert surface.calls == []
        assert diagnostics.skipped_polygons == 2


class TestImage:
    """Image placement, scaling and captions."""

    def test_centered(self, drawer, surface):
        drawer.draw_image(Image(xp=50, yp=50, width=200, height=100, name="pic.png"), "black")
        (call,) = surface.calls
        assert call.op == "place_image"
        assert (call["x"], call["y"]) == pytest.approx((400, 450))
        assert (call["width"], call["height"]) == (200, 100)
        assert call["reference"] == "pic.png"

    def test_scale(self, drawer, surface):
        drawer.draw_image(Image(xp=50, yp=50, width=200, height=100, scale=50), "black")
        call = surface.calls[0]
        assert (call["width"], call["height"]) == (100, 50)

    @pytest.mark.parametrize("width,height", [(100, 50), (250, 400), (999, 10), (640, 480)])
    def test_autoscale_stretches_to_canvas_width(self, drawer, surface, width, height):
        drawer.draw_image(Image(xp=50, yp=50, width=width, height=height, autoscale="on"), "black")
        call = surface.calls[0]
        assert call["width"] == 1000
        assert call["height"] == int(height * (1000 / width))

    def test_autoscale_never_shrinks(self, drawer, surface):
        drawer.draw_image(Image(xp=50, yp=50, width=1600, height=900, autoscale=True), "black")
        call = surface.calls[0]
        assert (call["width"], call["height"]) == (1600, 900)

    def test_autoscale_after_scale(self, drawer, surface):
        drawer.draw_image(Image(xp=50, yp=50, width=1600, height=800, scale=50, autoscale=True), "black")
        call = surface.calls[0]
        assert (call["width"], call["height"]) == (1000, 500)

    def test_caption_defaults(self, drawer, surface):
        drawer.draw_image(Image(xp=50, yp=50, width=200, height=100, caption="Figure 1"), "navy")
        image, caption = surface.calls
        assert caption.op == "draw_text"
        assert caption["text"] == "Figure 1"
        # default caption size is 2% of canvas width, drawn 2 sizes below the image
        assert caption["x"] == pytest.approx(500)
        assert caption["y"] == pytest.approx(500 + 50 + 40)
        style = caption["style"]
        assert style.font_size == pytest.approx(20)
        assert style.color == "navy"
        assert style.font_family == "TestSans"
        assert style.anchor == "middle"

    def test_caption_overrides(self, drawer, surface):
        drawer.draw_image(
            Image(xp=50, yp=50, width=200, height=100, caption="c", sp=1,
                  font="serif", color="red", align="left"),
            "navy",
        )
        style = surface.calls[1]["style"]
        assert style.font_size == pytest.approx(10)
        assert (style.color, style.font_family, style.anchor) == ("red", "TestSerif", "start")


class TestMarkers:
    """Bullets and text anchors."""

    def test_bullet_geometry(self, drawer, surface):
        drawer.bullet(100, 200, 30, "black")
        (call,) = surface.calls
        assert call.op == "fill_ellipse"
        assert call["cx"] == pytest.approx(70)
        assert call["cy"] == pytest.approx(200 - 30 / 3)
        assert call["rx"] == pytest.approx(7.5)
        assert call["ry"] == pytest.approx(7.5)

    @pytest.mark.parametrize("align,anchor", [
        ("center", "middle"), ("mid", "middle"), ("c", "middle"),
        ("right", "end"), ("e", "end"), ("left", "start"), ("", "start"), ("bogus", "start"),
    ])
    def test_text_anchor(self, align, anchor):
        assert text_anchor(align) == anchor

    def test_unknown_font_falls_back(self, drawer, surface, diagnostics):
        drawer.text(0, 0, "hi", 10, "fancy", "black", "")
        assert surface.calls[0]["style"].font_family == "TestSans"
        assert diagnostics.font_fallbacks == 1


class TestBackground:
    def test_background_fills_canvas(self, drawer, surface):
        drawer.background("white")
        (call,) = surface.calls
        assert (call["x"], call["y"], call["width"], call["height"]) == (0, 0, 1000, 1000)
        assert call["style"] == FillStyle("white", 1.0)

    def test_gradient(self, drawer, surface):
        drawer.gradient("red", "hsv(240,100,100)")
        define, fill = surface.calls
        assert define.op == "define_linear_gradient"
        assert [(s.offset, s.color, s.opacity) for s in define["stops"]] == [
            (0, "red", 1.0), (100, "rgb(0,0,255)", 1.0),
        ]
        assert fill.op == "fill_with_gradient"
        assert fill["gradient_id"] == define["gradient_id"]
        assert math.isclose(fill["width"], 1000) and math.isclose(fill["height"], 1000)


class TestImagePixels:
    def test_autoscale_on_fractional_canvas_truncates(self, fonts, surface):
        from deckrender.engine.primitives import PrimitiveDrawer

        drawer = PrimitiveDrawer(surface, 1000.5, 800.0, fonts)
        drawer.draw_image(Image(xp=50, yp=50, width=100, height=50, autoscale=True), "black")
        call = surface.calls[0]
        assert call["width"] == int(1000.5)
        assert call["height"] == int(50 * (1000.5 / 100))
        assert call["x"] == pytest.approx(500.25 - 1000.5 / 2)
