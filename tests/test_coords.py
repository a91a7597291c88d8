import numpy as np
import pytest

from core.coords import REFERENCE_HEIGHT, REFERENCE_WIDTH, CoordinateSystem, clamp, fit_size


def test_percent_scales_with_frame_and_zoom():
    cs = CoordinateSystem(800, 600, scale=2.0)
    assert cs.x_dist_percent(0.25) == pytest.approx(400.0)
    assert cs.y_dist_percent(0.5) == pytest.approx(600.0)


def test_reference_pixels_span_the_frame():
    cs = CoordinateSystem(1000, 700)
    assert cs.x_dist_pixels(REFERENCE_WIDTH) == pytest.approx(1000.0)
    assert cs.y_dist_pixels(REFERENCE_HEIGHT) == pytest.approx(700.0)
    assert cs.x_dist_pixels(REFERENCE_WIDTH / 2) == pytest.approx(500.0)


def test_zero_and_negative_distances():
    cs = CoordinateSystem(1000, 700, scale=3.0)
    assert cs.x_dist_percent(0.0) == 0.0
    assert cs.y_dist_pixels(-100) == pytest.approx(-cs.y_dist_pixels(100))


def test_inverse_conversions():
    cs = CoordinateSystem(1024, 719, scale=1.7)
    assert cs.x_percent_from_screen(cs.x_dist_percent(0.3)) == pytest.approx(0.3)
    assert cs.y_pixels_from_screen(cs.y_dist_pixels(1234)) == pytest.approx(1234)


def test_to_screen_centre_and_corners():
    cs = CoordinateSystem(800, 560, scale=1.0)
    center = (500.0, 400.0)
    assert cs.to_screen((0.5, 0.5), center) == pytest.approx(center)
    assert cs.to_screen((0.0, 0.0), center) == pytest.approx((100.0, 120.0))
    assert cs.to_screen((1.0, 1.0), center) == pytest.approx((900.0, 680.0))


def test_offset_moves_content_the_other_way():
    cs = CoordinateSystem(800, 560, scale=2.0)
    x, y = cs.to_screen((0.5, 0.5), (0.0, 0.0), offset=(30.0, -10.0))
    assert (x, y) == pytest.approx((-30.0, 10.0))


def test_from_screen_inverts_to_screen():
    cs = CoordinateSystem(640, 450, scale=3.5)
    center, offset = (320.0, 240.0), (55.0, -12.0)
    p = (0.37, 0.81)
    assert cs.from_screen(cs.to_screen(p, center, offset), center, offset) == pytest.approx(p)


def test_project_matches_to_screen():
    cs = CoordinateSystem(640, 450, scale=1.25)
    center, offset = (320.0, 240.0), (10.0, 5.0)
    pts = np.array([[0.1, 0.2], [0.5, 0.5], [0.9, 0.3]])
    out = cs.project(pts, center, offset)
    assert out.shape == (3, 2)
    for row, p in zip(out, pts):
        assert tuple(row) == pytest.approx(cs.to_screen(tuple(p), center, offset), abs=1e-3)


@pytest.mark.parametrize("w,h,scale", [(0, 100, 1.0), (100, -1, 1.0), (100, 100, 0.0)])
def test_rejects_degenerate_frames(w, h, scale):
    with pytest.raises(ValueError):
        CoordinateSystem(w, h, scale)


def test_fit_size_preserves_aspect():
    w, h = fit_size(REFERENCE_WIDTH, REFERENCE_HEIGHT, 1000, 1000)
    assert w == pytest.approx(1000.0)
    assert h / w == pytest.approx(REFERENCE_HEIGHT / REFERENCE_WIDTH)
    assert fit_size(0, 10, 100, 100) == (0.0, 0.0)


def test_clamp():
    assert clamp(5, 0, 3) == 3
    assert clamp(-1, 0, 3) == 0
    assert clamp(2, 0, 3) == 2


@pytest.mark.parametrize("p", [(-0.5, -0.5), (0.0, 0.0), (0.25, -0.1), (0.5, 0.5)])
@pytest.mark.parametrize("w,h,scale", [(800, 600, 1.0), (1920, 1080, 0.25), (333, 777, 9.5)])
def test_percent_round_trip(p, w, h, scale):
    cs = CoordinateSystem(w, h, scale)
    assert cs.screen_to_percent(cs.percent_to_screen(p)) == pytest.approx(p)
