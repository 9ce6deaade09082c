import warnings

import pytest

from identicon.render import color_engine

from identicon.render.motif_generators import (
    GENERATORS,
    WalkState,
    circle_matrix,
    polygon_edges,
    square_matrix,
    wandering_shape_count,
    wandering_shapes,
)
from identicon.render.sdk import WHITE, MainPattern, RenderWarning, ShapeKind

from conftest import digest_with, make_profile

SIZE = 1080


class TestSquareMatrix:
    """Parity-gated 3x5 grid with accent columns."""

    def test_cells_follow_parity(self, ann_lee, oracle):
        directives = square_matrix(ann_lee, SIZE, oracle)
        cell = SIZE / 5
        cells = [(round(d.x / cell), round(d.y / cell)) for d in directives]
        assert cells == [
            (2, 0),
            (0, 1), (4, 1), (2, 1),
            (1, 3), (3, 3), (2, 3),
            (1, 4), (3, 4), (2, 4),
        ]

    def test_main_squares_share_color_and_full_alpha(self, ann_lee, oracle):
        directives = square_matrix(ann_lee, SIZE, oracle)
        main = [d for d in directives if round(d.x / 216) < 3]
        expected = oracle.generate_color("A", "b", 2, ord("6"))
        assert len(main) == 7
        assert all(d.color == expected and d.alpha == 255 for d in main)

    def test_accent_colors_and_alpha(self, ann_lee, oracle):
        directives = square_matrix(ann_lee, SIZE, oracle)
        accents = {(round(d.x / 216), round(d.y / 216)): d for d in directives if round(d.x / 216) >= 3}
        assert accents[(4, 1)].color == WHITE
        assert accents[(4, 1)].alpha == 200 - ord("7")
        assert accents[(3, 3)].color == oracle.candy_color("a")
        assert accents[(3, 3)].alpha == 200 - ord("1")
        assert accents[(3, 4)].alpha == 200 - ord("a")

    def test_square_size_is_fifth_of_canvas(self, ann_lee, oracle):
        for d in square_matrix(ann_lee, 640, oracle):
            assert d.kind == ShapeKind.SQUARE
            assert d.size == pytest.approx(128.0)
            assert d.filled

    def test_no_cells_when_all_bytes_even(self, oracle):
        profile = make_profile(digest="c" * 32)
        assert square_matrix(profile, SIZE, oracle) == []


class TestWanderingShapeCount:
    """Four shapes per name character, capped at 25 and doubled up to 10."""

    @pytest.mark.parametrize(
        "length,expected",
        [(1, 16), (2, 16), (3, 12), (4, 16), (6, 24), (7, 25), (10, 25), (40, 25)],
    )
    def test_bounds(self, length, expected):
        assert wandering_shape_count(length) == expected

    def test_zero_length_rejected(self):
        with pytest.raises(ValueError):
            wandering_shape_count(0)


class TestWanderingShapes:
    """Drifting walk of double shapes."""

    def test_count_follows_full_name(self, ann_lee, oracle):
        assert len(wandering_shapes(ann_lee, SIZE, oracle)) == 25
        single = make_profile(full_name="A")
        assert len(wandering_shapes(single, SIZE, oracle)) == 16

    def test_first_steps(self, ann_lee, oracle):
        d0, d1, d2 = wandering_shapes(ann_lee, SIZE, oracle)[:3]

        # v = 'c' + 0 = 99, 99 mod 6 = 3: vertical move by 2v
        assert (d0.x, d0.y) == (540.0, 738.0)
        assert d0.kind == ShapeKind.POLYGON and d0.edges == 3
        assert d0.size == 0

        # v = 'c' + 1 = 100, 100 mod 6 = 4: left 2v, up v; even value draws an arc
        assert (d1.x, d1.y) == (340.0, 638.0)
        assert d1.kind == ShapeKind.ARC
        assert d1.start_angle == 200
        assert d1.end_angle == ord("c") * 2
        assert d1.size == ord("c")
        assert not d1.filled

        # v = '1' + 2 = 51, 51 mod 6 = 3
        assert (d2.x, d2.y) == (340.0, 740.0)
        assert d2.kind == ShapeKind.POLYGON

    def test_fill_mode_halves_alpha(self, ann_lee, oracle):
        directives = wandering_shapes(ann_lee, SIZE, oracle)
        # hash[0] is '0' (even): filled, alpha = 'b' * 2 // 2
        assert all(d.alpha == ord("b") for d in directives)
        assert all(d.filled for d in directives if d.kind != ShapeKind.ARC)

        stroked = make_profile(digest=digest_with({0: "1"}))
        assert all(d.alpha == ord("b") * 2 for d in wandering_shapes(stroked, SIZE, oracle))

    def test_stroke_width_grows(self, ann_lee, oracle):
        directives = wandering_shapes(ann_lee, SIZE, oracle)
        for i, d in enumerate(directives):
            assert d.stroke_width == pytest.approx(ord("9") * 2 + 0.05 * i)
            assert d.double

    def test_colors_derived_per_step(self, ann_lee, oracle):
        d0 = wandering_shapes(ann_lee, SIZE, oracle)[0]
        assert d0.color == oracle.generate_color("A", "L", ord("c"), 1)

    def test_arcs_disabled_by_even_toggle(self, oracle):
        profile = make_profile(digest=digest_with({1: "b"}))
        kinds = {d.kind for d in wandering_shapes(profile, SIZE, oracle)}
        assert ShapeKind.ARC not in kinds

    def test_circles_when_polygon_mode_off(self, oracle):
        # '0' (48) mod 3 == 0 switches polygons off; '1' at hash[0] means stroked
        profile = make_profile(digest=digest_with({15: "0", 0: "1", 1: "b"}))
        kinds = {d.kind for d in wandering_shapes(profile, SIZE, oracle)}
        assert kinds == {ShapeKind.CIRCLE}

    @pytest.mark.parametrize(
        "first_name,expected",
        [("Al", 0), ("Ann", 3), ("Anna", 4), ("Annie", 5), ("Ananya", 6), ("Annabel", 0)],
    )
    def test_polygon_edges_follow_first_name(self, first_name, expected):
        profile = make_profile(full_name=f"{first_name} Lee")
        assert polygon_edges(profile) == expected

    def test_walk_state_moves(self):
        state = WalkState(x=0.0, y=0.0, stroke_width=1.0)
        assert state.moved(6) == WalkState(6.0, 6.0, 1.0)
        assert state.moved(7) == WalkState(-7.0, -7.0, 1.0)
        assert state.moved(8) == WalkState(16.0, 0.0, 1.0)
        assert state.moved(9) == WalkState(0.0, 18.0, 1.0)
        assert state.moved(10) == WalkState(-20.0, -10.0, 1.0)
        assert state.moved(11) == WalkState(-11.0, -22.0, 1.0)
        assert state.widened().stroke_width == pytest.approx(1.05)


class TestCircleMatrix:
    """First-name-length squared grid of filled circles."""

    def test_grid_size_and_spacing(self, ann_lee, oracle):
        directives = circle_matrix(ann_lee, SIZE, oracle)
        assert len(directives) == 9
        positions = [(d.x, d.y) for d in directives]
        assert positions[:4] == [(0.0, 0.0), (540.0, 0.0), (1080.0, 0.0), (0.0, 540.0)]

    def test_radius_alternates_and_alpha(self, ann_lee, oracle):
        d = circle_matrix(ann_lee, SIZE, oracle)
        assert d[0].size == ord("c") * 2 and d[0].alpha == 200 - ord("c")
        assert d[1].size == ord("c") * 3 and d[1].alpha == 200 - ord("c") + 1
        assert d[2].size == ord("1") * 2 and d[2].alpha == 200 - ord("1") + 2
        assert d[3].size == ord("7") * 3 and d[3].alpha == 200 - ord("7") + 3

    def test_constant_stroke_width(self, ann_lee, oracle):
        widths = {d.stroke_width for d in circle_matrix(ann_lee, SIZE, oracle)}
        assert widths == {ord("3") * 2.0}

    def test_multi_word_names_get_candy_colors(self, ann_lee, oracle):
        d = circle_matrix(ann_lee, SIZE, oracle)
        assert d[0].color == oracle.candy_color("c")
        assert d[2].color == oracle.candy_color("1")

    def test_single_word_names_are_white(self, single_word, oracle):
        directives = circle_matrix(single_word, SIZE, oracle)
        assert {d.color for d in directives} == {WHITE}
        assert all(d.kind == ShapeKind.CIRCLE_FILLED and d.double for d in directives)

    def test_alpha_overflow_is_clamped_with_warning(self, oracle):
        profile = make_profile(full_name="Bartholomewandersonian Lee")
        with pytest.warns(RenderWarning):
            directives = circle_matrix(profile, SIZE, oracle)
        assert len(directives) == 22 * 22
        assert all(0 <= d.alpha <= 255 for d in directives)
        assert directives[-1].alpha == 255

    def test_overflow_logs_one_summary_line(self, oracle, monkeypatch):
        logged = []
        monkeypatch.setattr(color_engine.log, "warning", logged.append)
        profile = make_profile(full_name="Bartholomewandersonian Lee")
        with pytest.warns(RenderWarning):
            circle_matrix(profile, SIZE, oracle)
        assert len(logged) == 1
        assert logged[0].endswith("for circle matrix, clamped to 0..255")

    def test_short_names_do_not_warn(self, ann_lee, oracle):
        with warnings.catch_warnings(record=True) as caught:
            warnings.simplefilter("always")
            circle_matrix(ann_lee, SIZE, oracle)
        assert not [w for w in caught if issubclass(w.category, RenderWarning)]


def test_generator_table_covers_every_pattern():
    assert set(GENERATORS) == set(MainPattern)
