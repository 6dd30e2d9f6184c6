"""Tests for the classifier."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from models.individual import Individual
from engine.classifier import classify


def make_person(identifier, year="", batch="", subject="", branch=""):
    return Individual(identifier=identifier, year=year, batch=batch, subject=subject, branch=branch)


class TestClassify:
    def test_rotation_order_is_first_seen(self):
        people = [make_person("1", "3"), make_person("2", "1"), make_person("3", "3"), make_person("4", "2")]
        result = classify(people, "year")
        assert result.rotation_order == ["3", "1", "2"]
        assert [p.identifier for p in result.groups["3"].members] == ["1", "3"]
        assert result.groups["3"].initial_size == 2

    def test_blank_labels_grouped_as_unknown(self):
        people = [make_person("1", "1"), make_person("2", ""), make_person("3", None)]
        result = classify(people, "year")
        assert result.rotation_order == ["1", "Unknown"]
        assert result.groups["Unknown"].remaining == 2

    def test_unknown_key_puts_everyone_in_one_group(self):
        people = [make_person("1", "1"), make_person("2", "2")]
        result = classify(people, "hostel")
        assert result.rotation_order == ["Unknown"]
        assert result.population == 2

    def test_deterministic(self):
        people = [make_person(str(i), str(i % 3)) for i in range(20)]
        first = classify(people, "year")
        second = classify(people, "year")
        assert first.rotation_order == second.rotation_order
        for name in first.rotation_order:
            assert list(first.groups[name].members) == list(second.groups[name].members)

    def test_input_not_mutated(self):
        people = [make_person("b", batch="B2"), make_person("a", batch="B1")]
        snapshot = list(people)
        result = classify(people, "batch", sort_fields=("batch", "identifier"))
        result.groups["B1"].pop()
        assert people == snapshot

    def test_sort_fields_change_rotation_order(self):
        people = [
            make_person("CS3", batch="B2"), make_person("CS1", batch="B1"),
            make_person("CS2", batch="B2"), make_person("CS0", batch="B1"),
        ]
        result = classify(people, "batch", sort_fields=("batch", "identifier"))
        assert result.rotation_order == ["B1", "B2"]
        assert [p.identifier for p in result.groups["B1"].members] == ["CS0", "CS1"]
        assert [p.identifier for p in result.groups["B2"].members] == ["CS2", "CS3"]

    def test_cluster_by_keeps_subject_runs_together(self):
        people = [
            make_person("1", "1", subject="Maths"),
            make_person("2", "1", subject="Physics"),
            make_person("3", "1", subject="Maths"),
            make_person("4", "2", subject="Physics"),
            make_person("5", "2", subject="Maths"),
        ]
        result = classify(people, "year", cluster_by="subject")
        assert [p.identifier for p in result.groups["1"].members] == ["1", "3", "2"]
        # global subject order: Maths first, then Physics
        assert [p.identifier for p in result.groups["2"].members] == ["5", "4"]

    def test_empty_input(self):
        result = classify([], "year")
        assert result.rotation_order == []
        assert result.remaining_total == 0


if __name__ == "__main__":
    import pytest
    pytest.main([__file__, "-v"])
