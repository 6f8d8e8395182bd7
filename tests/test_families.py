"""Tests for the sketch family registry and the five generators."""

import numpy as np
import pytest

from sketches.color import Color
from sketches.config import BurstConfig, IsoConfig, LatticeConfig, SeriesConfig, SketchConfig, TransitConfig
from sketches.drawing import MoveTo
from sketches.errors import InvalidParameterError
from sketches.families import (
    get_family,
    get_family_info,
    list_all_family_info,
    list_families,
    register_family,
    render_sketch,
    _FAMILIES,
)
from sketches.families.iso import VIEW_AXIS, box_faces, faces_towards_viewer, project
from sketches.theme import index_of_max, index_of_min

FAMILY_NAMES = ["transit", "series", "burst", "lattice", "iso"]


class TestRegistry:
    def test_all_families_registered(self):
        assert set(list_families()) == set(FAMILY_NAMES)

    def test_get_family(self):
        for name in FAMILY_NAMES:
            assert get_family(name).name == name

    def test_unknown_family(self):
        with pytest.raises(InvalidParameterError):
            get_family("cubist")

    def test_info(self):
        info = get_family_info("transit")
        assert info["name"] == "transit"
        assert info["description"]
        assert get_family_info("cubist") == {}
        assert len(list_all_family_info()) == len(FAMILY_NAMES)

    def test_register_replaces_by_name(self):
        original = _FAMILIES["lattice"]
        try:
            class Stub:
                name = "lattice"
                description = "stub"
            register_family(Stub())
            assert get_family("lattice").description == "stub"
        finally:
            register_family(original)


class TestDeterminism:
    @pytest.mark.parametrize("name", FAMILY_NAMES)
    def test_same_seed_same_drawing(self, name, render_options):
        a = render_sketch(name, render_options)
        b = render_sketch(name, render_options)
        assert a == b
        assert a.ops

    @pytest.mark.parametrize("name", FAMILY_NAMES)
    def test_first_op_paints_canvas(self, name, render_options):
        drawing = render_sketch(name, render_options)
        assert (drawing.width, drawing.height) == (320, 200)
        assert drawing.ops[0].fill is not None
        assert drawing.ops[0].stroke is None

    @pytest.mark.parametrize("name", FAMILY_NAMES)
    def test_layout_is_pure(self, name, render_options):
        family = get_family(name)
        settings = SketchConfig().family(name)
        assert repr(family.layout(render_options, settings)) == repr(family.layout(render_options, settings))


class TestTransit:
    def test_layout(self, render_options):
        settings = TransitConfig()
        lay = get_family("transit").layout(render_options, settings)
        theme = render_options.themes().get(lay.theme_index)

        assert {lay.background, lay.foreground} == {theme[index_of_min(theme)], theme[index_of_max(theme)]}
        assert len(lay.pool) == 3
        assert settings.nx_range[0] <= lay.grid.nx < settings.nx_range[1]
        assert settings.ny_range[0] <= lay.grid.ny < settings.ny_range[1]
        assert lay.radius == pytest.approx(min(lay.grid.dx, lay.grid.dy) / 3)
        assert len(lay.columns) == lay.grid.nx
        for column in lay.columns:
            rows = [n.row for n in column]
            assert rows == sorted(set(rows))

    def test_show_grid_adds_overlay(self, render_options):
        plain = render_sketch("transit", render_options)
        config = SketchConfig()
        config.transit.show_grid = True
        gridded = render_sketch("transit", render_options, config)
        assert len(gridded.ops) == len(plain.ops) + 1
        assert gridded.ops[1].dash is not None

    def test_shadow_precedes_wires(self, render_options):
        ops = render_sketch("transit", render_options).ops
        shadow, wires = ops[1], ops[2]
        assert shadow.stroke.rgb() == (0, 0, 0)
        assert not shadow.stroke.is_opaque
        assert wires.cap == "round"

    def test_bernoulli_policy(self, render_options):
        config = SketchConfig()
        config.transit.policy = "bernoulli"
        config.transit.density = 0.5
        assert render_sketch("transit", render_options, config).ops


class TestSeries:
    def test_points_span_canvas(self, render_options):
        lay = get_family("series").layout(render_options, SeriesConfig())
        pts = lay.points()
        assert len(pts) == lay.grid.nw + 2
        assert pts[0][0] == 0.0
        assert pts[-1][0] == 320
        assert pts[0][1] == pts[1][1]
        assert pts[-1][1] == pts[-2][1]

    def test_fill_uses_first_pool_color(self, render_options):
        lay = get_family("series").layout(render_options, SeriesConfig())
        fill = render_sketch("series", render_options).ops[-1].fill
        assert fill.rgb() == lay.pool[0].rgb()
        assert fill.a in (152, 153)

    def test_unsmoothed_region(self, render_options):
        config = SketchConfig()
        config.series.smooth = False
        config.series.show_grid = False
        ops = render_sketch("series", render_options, config).ops
        assert len(ops) == 2
        assert list(ops[1].path)[0] == MoveTo(0.0, 0.0)


class TestBurst:
    def test_layout(self, render_options):
        settings = BurstConfig()
        lay = get_family("burst").layout(render_options, settings)
        assert lay.points % 2 == 0
        assert 8 <= lay.points < 20
        assert lay.radius == 100.0
        assert lay.inner == pytest.approx(60.0)
        assert 1.1 * lay.inner <= lay.outer <= 1.5 * lay.inner
        assert 10 <= lay.spacing < 40

    def test_paint_order(self, render_options):
        lay = get_family("burst").layout(render_options, BurstConfig())
        ops = render_sketch("burst", render_options).ops
        assert [op.fill for op in ops if op.fill] == [lay.theme[0], lay.theme[2], lay.theme[1]]
        assert ops[2].stroke == lay.theme[3]

    def test_star_vertex_count(self, render_options):
        lay = get_family("burst").layout(render_options, BurstConfig())
        # One move, 2n - 1 lines, one close
        assert len(lay.star()) == 2 * lay.points + 1


class TestLattice:
    def test_layout(self, render_options):
        _, theme, grid = get_family("lattice").layout(render_options, LatticeConfig())
        assert 20 <= grid.nw < 80
        assert 5 <= grid.nh < 20

    def test_rules(self, render_options):
        ops = render_sketch("lattice", render_options).ops
        assert len(ops) == 3
        assert ops[1].dash is None
        assert ops[2].dash == (2.0, 3.0)
        assert ops[1].stroke == ops[2].stroke


class TestIso:
    def test_visible_faces(self):
        faces = box_faces(0, 1, 0, 1, 1)
        visible = faces_towards_viewer([n for n, _ in faces])
        # top, +x and -z face the viewer
        assert list(visible) == [True, False, True, False, False, True]

    def test_view_axis_is_unit(self):
        assert np.linalg.norm(VIEW_AXIS) == pytest.approx(1.0)

    def test_projection_drops_view_axis(self):
        assert project([VIEW_AXIS])[0] == pytest.approx([0.0, 0.0], abs=1e-12)

    def test_scene_fits_canvas(self, render_options):
        lay = get_family("iso").layout(render_options, IsoConfig())
        scale, offset = lay.fit(320, 200)
        screen = project(lay.scene_points()) * scale + offset
        assert screen[:, 0].min() >= -1e-6
        assert screen[:, 0].max() <= 320 + 1e-6
        assert screen[:, 1].min() >= -1e-6
        assert screen[:, 1].max() <= 200 + 1e-6

    def test_boxes_in_grid(self, render_options):
        settings = IsoConfig()
        lay = get_family("iso").layout(render_options, settings)
        theme = render_options.themes().get(lay.theme_index)
        for box in lay.boxes:
            assert 0 <= box.column < lay.columns
            assert 0 <= box.row < lay.rows
            assert settings.height_range[0] <= box.height < settings.height_range[1]
            assert box.color in theme[1:]

    def test_background(self, render_options):
        ops = render_sketch("iso", render_options).ops
        assert ops[0].fill == Color.from_hex("#333333")

    def test_farthest_first(self, render_options):
        lay = get_family("iso").layout(render_options, IsoConfig(fill_chance=1.0))
        ordered = lay.ordered_boxes()
        assert len(ordered) == lay.columns * lay.rows
        depths = []
        for box in ordered:
            x0, x1, z0, z1, h = lay.box_corners(box)
            depths.append(float(np.dot([(x0 + x1) / 2, -h / 2, (z0 + z1) / 2], VIEW_AXIS)))
        assert depths == sorted(depths, reverse=True)
