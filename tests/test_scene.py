"""Tests for layout/scene.py placement rules and scene assembly."""
import numpy as np
import pytest

from layout import (
    BathtubSpec,
    InvalidBathtubSpec,
    SceneConfig,
    ShowerGeometry,
    build_scene,
    place_tub,
    select_innermost,
    DEFAULT_SHOWER,
)


def _spec(w, h, p=12.0, name="tub"):
    return BathtubSpec(name=name, width_cm=w, height_cm=h, corner_radius_percent=p)


# --- place_tub ---

def test_place_tub_left_aligned_and_centered():
    placement = place_tub(_spec(28, 51, 12), DEFAULT_SHOWER)
    assert placement.radius == pytest.approx(3.36)
    assert placement.center_x == pytest.approx(-16.0)
    assert placement.center_y == 0.0


def test_place_tub_oversized_is_not_corrected():
    placement = place_tub(_spec(80, 90, 5), DEFAULT_SHOWER)
    assert placement.center_x == pytest.approx(10.0)
    assert placement.center_y == 0.0


def test_place_tub_uses_injected_inner_ring():
    shower = ShowerGeometry(inner_ring=(50.0, 70.0))
    placement = place_tub(_spec(20, 40), shower)
    assert placement.center_x == pytest.approx(-15.0)


# --- select_innermost ---

def test_innermost_first_minimum_wins():
    specs = [_spec(20, 25), _spec(10, 30), _spec(15, 20)]  # areas 500, 300, 300
    assert select_innermost(specs) == 1


def test_innermost_empty():
    assert select_innermost([]) is None


# --- BathtubSpec.validate ---

@pytest.mark.parametrize(
    "w, h, p, field",
    [
        (0, 50, 12, "width_cm"),
        (-3, 50, 12, "width_cm"),
        (25, 0, 12, "height_cm"),
        (25, 50, -1, "corner_radius_percent"),
        (25, 50, 101, "corner_radius_percent"),
        (float("inf"), 50, 12, "width_cm"),
        (25, float("nan"), 12, "height_cm"),
        (25, 50, float("inf"), "corner_radius_percent"),
    ],
)
def test_validate_names_offending_field(w, h, p, field):
    with pytest.raises(InvalidBathtubSpec) as exc:
        _spec(w, h, p).validate()
    assert exc.value.field_name == field
    assert field in str(exc.value)


def test_validate_returns_spec():
    spec = _spec(25, 50)
    assert spec.validate() is spec
    assert spec.is_portrait
    assert not _spec(50, 25).is_portrait


# --- build_scene ---

def test_end_to_end_single_without_baby():
    spec = BathtubSpec(name="Test", width_cm=25, height_cm=50, corner_radius_percent=12)
    scene = build_scene([spec], with_baby=False)
    assert len(scene.shapes) == 4
    roles = [s.role for s in scene.shapes]
    assert roles == ["shower_outer", "outer_ring", "inner_ring", "tub"]
    tub = scene.shapes[-1]
    assert tub.kind == "polygon"
    assert len(tub.points) == 100
    assert tub.label == "Bathtub 25×50 cm"
    assert scene.title == "Test"


def test_end_to_end_single_with_baby():
    spec = BathtubSpec(name="Test", width_cm=25, height_cm=50, corner_radius_percent=12)
    scene = build_scene([spec], with_baby=True)
    assert len(scene.shapes) == 5
    baby = scene.shapes[-1]
    assert baby.role == "baby"
    assert baby.kind == "rect"
    # Centered on the tub at (-17.5, 0)
    assert baby.bounds == pytest.approx((-26.0, -9.0, -20.0, 20.0))
    assert baby.label == "Baby 40×17 cm"


def test_shower_shapes():
    scene = build_scene([_spec(25, 50)])
    outer, outer_ring, inner_ring = scene.shapes[:3]
    assert outer.kind == "rect"
    assert outer.bounds == pytest.approx((-42.0, 42.0, -40.5, 40.5))
    assert outer.label == "Shower Outer 84×81 cm"
    assert outer_ring.label == "Outer Ring 78×75 cm"
    assert inner_ring.label == "Inner Ring 60×60 cm"
    assert len(outer_ring.points) == 100
    assert outer_ring.points[:, 0].max() == pytest.approx(39.0)
    assert outer_ring.points[:, 1].max() == pytest.approx(37.5)
    # Ring corner radius 6.0: the top-left arc starts at y = 37.5 - 6
    assert outer_ring.points[0] == pytest.approx([-39.0, 31.5])
    assert inner_ring.points[0] == pytest.approx([-30.0, 30.0 - 4.8])
    assert scene.limits == pytest.approx((-48.0, 48.0, -46.5, 46.5))


def test_tub_polygon_left_edge_flush_with_inner_ring():
    scene = build_scene([_spec(28, 51, 12)])
    tub = scene.shapes_with_role("tub")[0]
    assert tub.points[:, 0].min() == pytest.approx(-30.0)
    assert tub.points[:, 0].max() == pytest.approx(-2.0)
    assert tub.points[:, 1].max() == pytest.approx(25.5)
    assert tub.points[:, 1].min() == pytest.approx(-25.5)


def test_stacked_palette_labels_and_baby_on_innermost():
    specs = [_spec(30, 60), _spec(20, 40), _spec(25, 50)]
    scene = build_scene(specs, with_baby=True, labels=["a", "b", "c"])
    tubs = scene.shapes_with_role("tub")
    assert [t.label for t in tubs] == ["a: 30×60 cm", "b: 20×40 cm", "c: 25×50 cm"]
    assert [t.edge_color for t in tubs] == ["crimson", "steelblue", "forestgreen"]
    assert tubs[0].fill[3] == pytest.approx(0.22)
    assert scene.innermost == 1
    baby = scene.shapes_with_role("baby")[0]
    cx = (baby.bounds[0] + baby.bounds[1]) / 2
    assert cx == pytest.approx(-20.0)
    assert scene.title == "Bathtub Comparison (stacked) — 3 model(s)"


def test_palette_cycles():
    specs = [_spec(20 + i, 40) for i in range(10)]
    scene = build_scene(specs)
    tubs = scene.shapes_with_role("tub")
    assert tubs[8].edge_color == tubs[0].edge_color
    assert tubs[9].edge_color == tubs[1].edge_color


def test_stacked_overlapping_placements():
    specs = [_spec(25, 50), _spec(25, 55)]
    scene = build_scene(specs)
    assert [p.center_x for p in scene.placements] == [pytest.approx(-17.5)] * 2


def test_stacked_single_item_and_empty():
    scene = build_scene([_spec(25, 50, name="x")], stacked=True)
    assert scene.shapes_with_role("tub")[0].label == "x: 25×50 cm"
    empty = build_scene([], with_baby=True)
    assert len(empty.shapes) == 3
    assert empty.innermost is None


def test_labels_length_mismatch():
    with pytest.raises(ValueError):
        build_scene([_spec(25, 50)], labels=["a", "b"])


def test_untitled_single_model():
    scene = build_scene([_spec(25, 50, name="  ")])
    assert scene.title == "Bathtub Model"


def test_alternate_shower_config():
    config = SceneConfig(shower=ShowerGeometry(outer_box=(100.0, 90.0), corner_segments=8))
    scene = build_scene([_spec(25, 50)], config=config)
    assert scene.shapes[0].label == "Shower Outer 100×90 cm"
    assert all(len(s.points) == 36 for s in scene.shapes if s.kind == "polygon")


def test_scene_shapes_are_frozen():
    scene = build_scene([_spec(25, 50)])
    with pytest.raises(AttributeError):
        scene.shapes[0].label = "changed"
    assert isinstance(scene.shapes[1].points, np.ndarray)


# --- labels ---

def test_labels_keep_full_precision():
    scene = build_scene([_spec(28.123456, 51.5)])
    assert scene.shapes_with_role("tub")[0].label == "Bathtub 28.123456×51.5 cm"
