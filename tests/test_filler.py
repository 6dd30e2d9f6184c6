"""Tests for the column-major filler and the shared search primitives."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.individual import Individual
from models.grid import GridDescriptor
from models.allocation import new_seat_matrix
from engine.classifier import classify
from engine.filler import fill_grids
from engine.patterns import get_strategy
from engine.search import fallback_search, find_cell, first_index, has_collision, scan_cells


def make_people(label, count, key="year"):
    return [Individual(f"{label}{i + 1:03d}", **{key: label}) for i in range(count)]


def make_halls(count=4, rows=4, columns=9, furniture="Bench"):
    return [GridDescriptor(f"H{i + 1}", rows, columns, furniture) for i in range(count)]


def labels_of_column(matrix, column, key="year"):
    return [cell[0].label(key) if cell else None for cell in (row[column] for row in matrix)]


class TestFallbackSearch:
    def test_walks_rotation_order_circularly(self):
        c = classify(make_people("A", 1) + make_people("B", 1) + make_people("C", 1), "year")
        c.groups["B"].pop()
        c.groups["C"].pop()
        assert fallback_search(c, "B") == "A"

    def test_target_itself_when_non_empty(self):
        c = classify(make_people("A", 1) + make_people("B", 1), "year")
        assert fallback_search(c, "B") == "B"

    def test_none_when_everything_empty(self):
        c = classify(make_people("A", 1), "year")
        c.groups["A"].pop()
        assert fallback_search(c, "A") is None


class TestLinearSearch:
    def test_scan_cells_row_major_from_start_row(self):
        matrix = new_seat_matrix(3, 2)
        assert list(scan_cells(matrix, lambda r, c, cell: c == 1, start_row=1)) == [(1, 1), (2, 1)]

    def test_find_cell_none(self):
        assert find_cell(new_seat_matrix(2, 2), lambda r, c, cell: bool(cell)) is None

    def test_first_index(self):
        people = make_people("A", 2) + make_people("B", 1)
        assert first_index(people, lambda p: p.year == "B") == 2
        assert first_index(people, lambda p: p.year == "C") is None

    def test_has_collision_checks_both_sides(self):
        matrix = new_seat_matrix(1, 3)
        a, b = make_people("A", 1)[0], make_people("B", 1)[0]
        matrix[0][2].append(a)
        assert has_collision(matrix, 0, 1, a, "year")
        assert not has_collision(matrix, 0, 1, b, "year")
        assert not has_collision(matrix, 0, 0, a, "year")


class TestFillGrids:
    def test_two_group_example(self):
        """A(60), B(60) over four 4x9 bench halls at 3 per bench."""
        c = classify(make_people("A", 60) + make_people("B", 60), "year")
        result = fill_grids(make_halls(), c, get_strategy("alternating"), density=3)

        hall0 = result.matrices["H1"]
        assert [labels_of_column(hall0, col)[0] for col in range(9)] == list("ABAABAABA")
        assert labels_of_column(result.matrices["H2"], 0) == ["B"] * 4
        assert result.placed == {"H1": 36, "H2": 36, "H3": 36, "H4": 12}

        hall3 = result.matrices["H4"]
        empty = sum(1 for row in hall3 for cell in row if not cell)
        assert empty == 24
        assert [labels_of_column(hall3, col)[0] for col in (0, 1, 2, 3)] == ["B", None, "B", "B"]
        assert c.remaining_total == 0

    def test_column_major_precedence(self):
        c = classify(make_people("A", 60) + make_people("B", 60), "year")
        result = fill_grids(make_halls(), c, get_strategy("alternating"), density=3)
        hall0 = result.matrices["H1"]
        assert [hall0[r][0][0].identifier for r in range(4)] == ["A001", "A002", "A003", "A004"]
        assert [hall0[r][2][0].identifier for r in range(4)] == ["A005", "A006", "A007", "A008"]
        assert hall0[0][1][0].identifier == "B001"

    def test_fallback_fills_from_next_group(self):
        c = classify(make_people("A", 1) + make_people("B", 5), "year")
        halls = [GridDescriptor("H1", 2, 3, "Chair")]
        result = fill_grids(halls, c, get_strategy("rotating"), density=3)

        matrix = result.matrices["H1"]
        assert [[cell[0].identifier for cell in row] for row in matrix] == [
            ["A001", "B002", "B004"],
            ["B001", "B003", "B005"],
        ]
        substituted = [t for t in result.trace if t.target != t.source]
        assert [(t.row, t.column, t.target, t.source) for t in substituted] == [
            (1, 0, "A", "B"), (0, 2, "A", "B"), (1, 2, "A", "B"),
        ]

    def test_skips_unusable_seats_at_two_per_bench(self):
        c = classify(make_people("A", 8) + make_people("B", 8), "year")
        result = fill_grids(make_halls(count=1, rows=2, columns=9), c, get_strategy("rotating"), density=2)
        matrix = result.matrices["H1"]
        assert all(not row[col] for row in matrix for col in (1, 4, 7))
        assert result.placed_total == 12

    def test_under_fill_never_over_fill(self):
        c = classify(make_people("A", 3), "year")
        result = fill_grids(make_halls(count=2, rows=2, columns=3), c, get_strategy("rotating"), density=3)
        assert result.placed == {"H1": 3, "H2": 0}
        assert all(len(cell) <= 1 for m in result.matrices.values() for row in m for cell in row)

    def test_top_n_fill(self):
        people = make_people("X", 5, "batch") + make_people("Y", 3, "batch") + make_people("Z", 2, "batch")
        c = classify(people, "batch")
        halls = [GridDescriptor("C1", 2, 3, "Chair")]
        result = fill_grids(halls, c, get_strategy("top_n"), density=2)
        matrix = result.matrices["C1"]
        assert [labels_of_column(matrix, col, "batch") for col in range(3)] == [
            ["X", "X"], ["X", "X"], ["Y", "Y"],
        ]
        assert {n: c.groups[n].remaining for n in c.rotation_order} == {"X": 1, "Y": 1, "Z": 2}

    def test_nobody_placed_twice(self):
        c = classify(make_people("A", 50) + make_people("B", 40) + make_people("C", 30), "year")
        result = fill_grids(make_halls(), c, get_strategy("rotating"), density=3)
        ids = [p.identifier for m in result.matrices.values() for row in m for cell in row for p in cell]
        assert len(ids) == len(set(ids)) == 120


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
