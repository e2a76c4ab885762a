import pytest

from tileposter.errors import NotReadyError
from tileposter.models import ZOOM_STEP
from tileposter.viewport import ViewportController


@pytest.fixture
def viewport():
    controller = ViewportController(1200, 628)
    controller.reset(2400, 1600)
    return controller


def test_reset_fits_width_and_centers(viewport):
    state = viewport.state

    assert state.scale == pytest.approx(0.5)
    assert state.min_scale == pytest.approx(0.25)
    assert state.max_scale == pytest.approx(1.5)
    assert (state.origin_x, state.origin_y) == pytest.approx((0.0, -86.0))
    assert not state.placed


def test_scroll_down_zooms_out_around_center(viewport):
    before = viewport.state
    center = (
        before.origin_x + before.scaled_width / 2,
        before.origin_y + before.scaled_height / 2,
    )

    assert viewport.zoom(120)
    after = viewport.state

    assert after.scale == pytest.approx(0.5 - ZOOM_STEP)
    assert (
        after.origin_x + after.scaled_width / 2,
        after.origin_y + after.scaled_height / 2,
    ) == pytest.approx(center)


def test_zoom_stays_within_bounds(viewport, rng):
    for delta in rng.choice([-120, 120], size=500):
        viewport.zoom(delta)
        state = viewport.state
        assert state.min_scale <= state.scale <= state.max_scale

    for _ in range(100):
        viewport.zoom(120)
    assert viewport.state.scale == pytest.approx(viewport.state.min_scale)

    for _ in range(100):
        viewport.zoom(-120)
    assert viewport.state.scale == pytest.approx(viewport.state.max_scale)


def test_drag_follows_grab_point(viewport):
    assert viewport.begin_drag(600, 314)
    assert viewport.is_dragging
    assert viewport.drag_to(650, 300)
    viewport.end_drag()

    assert (viewport.state.origin_x, viewport.state.origin_y) == pytest.approx(
        (50.0, -100.0)
    )
    assert not viewport.is_dragging


def test_drag_outside_image_is_ignored():
    controller = ViewportController(1200, 628)
    controller.reset(1200, 100)

    assert not controller.begin_drag(600, 10)
    assert not controller.drag_to(700, 10)
    assert controller.state.origin_y == pytest.approx(264.0)


def test_placement_freezes_viewport(viewport):
    placed = viewport.place()

    assert placed.placed
    assert viewport.is_placed
    assert not viewport.zoom(120)
    assert not viewport.begin_drag(600, 314)
    assert viewport.state == placed


def test_place_without_image_raises():
    with pytest.raises(NotReadyError):
        ViewportController().place()


def test_no_image_ignores_input():
    controller = ViewportController()
    assert not controller.zoom(-120)
    assert not controller.begin_drag(0, 0)
    assert not controller.contains(0, 0)
