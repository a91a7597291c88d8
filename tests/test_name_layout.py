import pytest

from core.name_layout import DEFAULT_GAP, anchor_alignment, anchor_vector, layout_label
from core.types import Anchor

POINT = (200.0, 300.0)


def _authored(runs):
    return [r.text for r in sorted(runs, key=lambda r: r.y)]


def test_single_line_north_sits_above_point():
    runs = layout_label(POINT, Anchor.NORTH, (0, 0), 16, "Bank")
    assert len(runs) == 1
    r = runs[0]
    assert (r.x, r.y) == pytest.approx((200.0, 300.0 - DEFAULT_GAP))
    assert (r.h_align, r.v_align) == ("center", "bottom")


def test_single_line_east_is_vertically_centred():
    (r,) = layout_label(POINT, Anchor.EAST, (0, 0), 16, "Bank", gap=5)
    assert (r.x, r.y) == pytest.approx((205.0, 300.0))
    assert (r.h_align, r.v_align) == ("left", "center")


def test_offset_is_added_after_gap():
    (r,) = layout_label(POINT, Anchor.SOUTH, (3, -4), 16, "Bank", gap=10)
    assert (r.x, r.y) == pytest.approx((203.0, 306.0))


def test_multiline_north_grows_upwards():
    runs = layout_label(POINT, Anchor.NORTH, (0, 0), 20, ["Oxford", "Circus"], gap=0)
    # last line keeps the anchor line, earlier lines stack above
    assert [r.text for r in runs] == ["Circus", "Oxford"]
    assert runs[0].y == pytest.approx(300.0)
    assert runs[1].y == pytest.approx(280.0)
    assert _authored(runs) == ["Oxford", "Circus"]


def test_multiline_south_grows_downwards():
    runs = layout_label(POINT, Anchor.SOUTH, (0, 0), 20, ["Oxford", "Circus"], gap=0)
    ys = {r.text: r.y for r in runs}
    assert ys["Oxford"] == pytest.approx(300.0)
    assert ys["Circus"] == pytest.approx(320.0)


def test_multiline_east_is_centred_on_point():
    runs = layout_label(POINT, Anchor.EAST, (0, 0), 20, ["A", "B", "C"], gap=0)
    ys = sorted(r.y for r in runs)
    assert ys == pytest.approx([280.0, 300.0, 320.0])
    assert _authored(runs) == ["A", "B", "C"]


@pytest.mark.parametrize("diagonal,vertical", [
    (Anchor.NORTH_EAST, Anchor.NORTH), (Anchor.NORTH_WEST, Anchor.NORTH),
    (Anchor.SOUTH_EAST, Anchor.SOUTH), (Anchor.SOUTH_WEST, Anchor.SOUTH),
])
def test_diagonals_stack_like_their_vertical_neighbour(diagonal, vertical):
    lines = ["King's Cross", "St. Pancras"]
    d = layout_label(POINT, diagonal, (0, 0), 18, lines, gap=0)
    v = layout_label(POINT, vertical, (0, 0), 18, lines, gap=0)
    assert [r.y for r in d] == pytest.approx([r.y for r in v])


def test_alignment_points_away_from_marker():
    for anchor in Anchor:
        dx, dy = anchor_vector(anchor)
        h, v = anchor_alignment(anchor)
        assert h == ("left" if dx > 0 else "right" if dx < 0 else "center")
        assert v == ("bottom" if dy < 0 else "top" if dy > 0 else "center")


def test_empty_label_has_no_runs():
    assert layout_label(POINT, Anchor.NORTH, (0, 0), 16, []) == []


def test_anchor_parse_accepts_names_and_abbreviations():
    assert Anchor.parse("NorthEast") is Anchor.NORTH_EAST
    assert Anchor.parse("north_east") is Anchor.NORTH_EAST
    assert Anchor.parse("sw") is Anchor.SOUTH_WEST
    with pytest.raises(ValueError):
        Anchor.parse("Up")


def test_three_line_north_label_stays_above_anchor():
    lines = ["Tottenham", "Court", "Road"]
    runs = layout_label(POINT, Anchor.NORTH, (0, 0), 16, lines)
    assert _authored(runs) == lines
    assert all(r.y < POINT[1] for r in runs)
    assert all(r.v_align == "bottom" for r in runs)
