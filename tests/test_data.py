"""Tests for DataFrame adapters, validation and sample data."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

import logging

import pandas as pd

from models.individual import Individual
from models.grid import GridDescriptor
from data.loader import grids_from_frame, individuals_from_frame
from data.sample_data import generate_grids, generate_halls_df, generate_individuals, generate_students_df
from data.validator import (
    validate_grids, validate_hall_frame, validate_individual_frame, validate_individuals,
)


class TestLoader:
    def test_individuals_from_frame(self):
        df = pd.DataFrame([
            {"RollNumber": "21CS001", "StudentName": "Asha", "year": 1, "Batch": None},
            {"RollNumber": "21EC002", "StudentName": "Ravi", "year": 2, "Batch": "EC-A"},
        ])
        people = individuals_from_frame(df, derive_batch=True)
        assert [p.identifier for p in people] == ["21CS001", "21EC002"]
        assert [p.batch for p in people] == ["21CS", "EC-A"]
        assert people[0].year == "1"

    def test_missing_values_become_unknown(self):
        df = pd.DataFrame([{"RollNumber": "X1", "year": None}])
        person = individuals_from_frame(df)[0]
        assert person.label("year") == "Unknown"

    def test_grids_from_frame(self):
        grids = grids_from_frame(generate_halls_df())
        assert [g.name for g in grids] == ["A-101", "A-102", "B-201"]
        assert [g.furniture for g in grids] == ["Bench", "Bench", "Chair"]
        assert grids[0].rows == 5 and grids[0].columns == 9

    def test_missing_type_defaults_to_bench(self):
        df = pd.DataFrame([{"Name": "H1", "Rows": 2, "Columns": 3, "Type": float("nan")}])
        assert grids_from_frame(df)[0].furniture == "Bench"


class TestValidator:
    def test_valid_grids(self):
        assert validate_grids([GridDescriptor("H1", 4, 9), GridDescriptor("H2", 4, 6, "Chair")]).is_valid

    def test_grid_errors(self):
        result = validate_grids([GridDescriptor("H1", 4, 9), GridDescriptor("H1", -1, 9)])
        assert not result.is_valid
        assert len(result.errors) == 2

    def test_empty_grid_list(self):
        assert not validate_grids([]).is_valid

    def test_duplicate_identifiers_are_warnings(self, caplog):
        people = [Individual("A1", year="1"), Individual("A1", year="1"), Individual("", year="")]
        with caplog.at_level(logging.WARNING):
            result = validate_individuals(people, key="year")
        assert result.is_valid
        assert result.errors == []
        assert len(result.warnings) == 3
        assert "Duplicate identifiers: A1" in caplog.text

    def test_hall_frame(self):
        assert validate_hall_frame(generate_halls_df()).is_valid
        bad = pd.DataFrame([{"HallName": "H1", "Rows": 0, "Columns": 9}])
        result = validate_hall_frame(bad)
        assert not result.is_valid
        assert "Rows must be positive" in result.errors[0]

    def test_hall_frame_missing_columns(self):
        result = validate_hall_frame(pd.DataFrame([{"Hall": "H1"}]))
        assert not result.is_valid
        assert len(result.errors) == 2

    def test_individual_frame(self):
        assert validate_individual_frame(generate_students_df()).is_valid
        assert not validate_individual_frame(pd.DataFrame([{"Name": "x"}])).is_valid
        assert not validate_individual_frame(pd.DataFrame(columns=["RollNumber"])).is_valid


class TestSampleData:
    def test_counts_and_labels(self):
        people = generate_individuals({"A": 5, "B": 3}, key="year")
        assert len(people) == 8
        assert [p.year for p in people].count("A") == 5
        assert len({p.identifier for p in people}) == 8

    def test_seeded(self):
        assert generate_individuals({"1": 10}, key="batch") == generate_individuals({"1": 10}, key="batch")

    def test_generate_grids(self):
        grids = generate_grids(count=2, chair_halls=1, columns=9)
        assert [g.furniture for g in grids] == ["Bench", "Bench", "Chair"]
        assert grids[2].columns == 8


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
