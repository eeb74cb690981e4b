"""Tests for square parsing, ordering and ray walking."""

import chess
import pytest

from piece_values.analysis import (
    ALL_SQUARES,
    CENTER_SQUARES,
    InvalidSquare,
    Square,
    parse_square,
    walk,
)


class TestParseSquare:
    def test_corners(self):
        assert parse_square("a1") == Square(0, 0)
        assert parse_square("h8") == Square(7, 7)

    def test_name_round_trip(self):
        assert parse_square("e4").name == "e4"
        assert str(parse_square("c7")) == "c7"

    def test_file_and_rank_accessors(self):
        sq = parse_square("f3")
        assert sq.file_name == "f"
        assert sq.rank_number == 3

    def test_uppercase_file_accepted(self):
        assert parse_square("E4") == parse_square("e4")

    @pytest.mark.parametrize("bad", ["i1", "a0", "a9", "", "e", "e44", "44", "zz"])
    def test_invalid(self, bad):
        with pytest.raises(InvalidSquare):
            parse_square(bad)

    def test_invalid_square_is_value_error(self):
        with pytest.raises(ValueError):
            parse_square("j5")

    def test_constructor_rejects_off_board(self):
        with pytest.raises(InvalidSquare):
            Square(8, 0)
        with pytest.raises(InvalidSquare):
            Square(0, -1)

    def test_python_chess_index(self):
        assert parse_square("e4").index == chess.E4
        assert Square.from_index(chess.H8) == parse_square("h8")


class TestOrdering:
    def test_scan_order_starts_a8_ends_h1(self):
        assert ALL_SQUARES[0].name == "a8"
        assert ALL_SQUARES[7].name == "h8"
        assert ALL_SQUARES[8].name == "a7"
        assert ALL_SQUARES[-1].name == "h1"
        assert len(ALL_SQUARES) == 64

    def test_higher_rank_sorts_first(self):
        assert parse_square("h5") < parse_square("a4")

    def test_same_rank_sorts_by_file(self):
        assert parse_square("b2") < parse_square("g2")
        assert parse_square("g2") > parse_square("b2")

    def test_sorted(self):
        names = ["e4", "a8", "h1", "d5"]
        assert [sq.name for sq in sorted(map(parse_square, names))] == ["a8", "d5", "e4", "h1"]

    def test_hashable(self):
        assert len({parse_square("e4"), parse_square("e4"), parse_square("d4")}) == 2


class TestWalk:
    def test_diagonal_to_edge(self):
        ray = [sq.name for sq in walk(parse_square("c1"), 1, 1)]
        assert ray == ["d2", "e3", "f4", "g5", "h6"]

    def test_origin_excluded(self):
        assert parse_square("d4") not in list(walk(parse_square("d4"), 0, 1))

    def test_stops_immediately_at_edge(self):
        assert list(walk(parse_square("a1"), -1, -1)) == []
        assert list(walk(parse_square("h8"), 0, 1)) == []

    def test_file_ray(self):
        ray = [sq.name for sq in walk(parse_square("e5"), 0, -1)]
        assert ray == ["e4", "e3", "e2", "e1"]

    def test_restartable(self):
        origin = parse_square("b2")
        first = list(walk(origin, 1, 1))
        second = list(walk(origin, 1, 1))
        assert first == second
        assert len(first) == 6

    def test_zero_step_rejected(self):
        with pytest.raises(ValueError):
            list(walk(parse_square("e4"), 0, 0))


class TestCenter:
    def test_center_squares(self):
        assert {sq.name for sq in CENTER_SQUARES} == {"d4", "e4", "d5", "e5"}
