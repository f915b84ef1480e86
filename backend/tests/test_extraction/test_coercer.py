"""Tests for the shape coercer."""

import pytest

from models.schemas.extracted_record import WorkHistoryEntry
from models.schemas.field_alias import ScoreScale
from services.extraction.coercer import (
    coerce,
    to_score,
    to_string_list,
    to_text,
    to_work_history,
)


class TestStringArray:
    def test_list_of_strings_filtered(self):
        assert to_string_list(["Python", "", "  ", None, " Go "]) == ["Python", "Go"]

    def test_non_strings_are_stringified(self):
        assert to_string_list([3, 2.5, True]) == ["3", "2.5", "true"]

    def test_falsy_scalars_dropped(self):
        assert to_string_list([0, False, "SQL"]) == ["SQL"]

    def test_objects_use_label_key(self):
        flags = [
            {"description": "Gap in 2020", "severity": "high"},
            {"issue": "Job hopping"},
            {"name": "Docker", "level": "expert"},
        ]
        assert to_string_list(flags) == ["Gap in 2020", "Job hopping", "Docker"]

    def test_object_without_label_is_json(self):
        assert to_string_list([{"b": 1, "a": 2}]) == ['{"a": 2, "b": 1}']

    def test_json_array_string(self):
        assert to_string_list('["React", "Node.js"]') == ["React", "Node.js"]

    def test_json_object_string_matches_object(self):
        assert to_string_list('{"technical": ["Go"]}') == []
        assert to_string_list({"technical": ["Go"]}) == []

    def test_json_string_literal_is_decoded(self):
        assert to_string_list('"Python"') == ["Python"]
        assert to_string_list('"Python, Go"') == ["Python", "Go"]

    def test_json_scalars(self):
        assert to_string_list("null") == []
        assert to_string_list("42") == ["42"]

    def test_comma_separated_string(self):
        assert to_string_list("Python, Go ,, SQL ") == ["Python", "Go", "SQL"]

    def test_single_item_string(self):
        assert to_string_list("Kubernetes") == ["Kubernetes"]

    def test_unusable(self):
        assert to_string_list("") == []
        assert to_string_list(None) == []
        assert to_string_list(12) == []
        assert to_string_list({"technical": ["Go"]}) == []


class TestRecordArray:
    def test_capitalized_keys(self):
        entries = to_work_history([{"Title": "Engineer", "Company": "Acme"}])
        assert entries == [WorkHistoryEntry(title="Engineer", company="Acme")]

    def test_full_entry(self):
        entries = to_work_history([
            {
                "title": "Lead",
                "company": "Initech",
                "location": "Austin, TX",
                "startDate": "2020-01",
                "endDate": "Present",
                "description": "Led the platform team",
                "durationMonths": "36",
                "isCurrentRole": "true",
            }
        ])
        entry = entries[0]
        assert entry.location == "Austin, TX"
        assert entry.start_date == "2020-01"
        assert entry.end_date == "Present"
        assert entry.description == "Led the platform team"
        assert entry.duration_months == 36
        assert entry.is_current_role is True

    def test_current_role_inferred_from_end_date(self):
        entries = to_work_history([
            {"title": "A", "endDate": "Present"},
            {"title": "B", "endDate": "2019-05"},
            {"title": "C", "endDate": "Present", "isCurrentRole": False},
        ])
        assert [e.is_current_role for e in entries] == [True, False, False]

    def test_alternate_key_spellings(self):
        entries = to_work_history([
            {"position": "Analyst", "employer": "Umbrella", "start_date": "2015", "duration_months": 12.4}
        ])
        assert entries[0].title == "Analyst"
        assert entries[0].company == "Umbrella"
        assert entries[0].start_date == "2015"
        assert entries[0].duration_months == 12

    def test_negative_duration_clamped(self):
        assert to_work_history([{"title": "X", "durationMonths": -4}])[0].duration_months == 0

    def test_unusable_duration_is_absent(self):
        assert to_work_history([{"title": "X", "durationMonths": "a while"}])[0].duration_months is None

    def test_invalid_entries_dropped(self):
        entries = to_work_history([
            {"location": "Remote"},
            "Software Engineer at Acme",
            None,
            {"company": "Only Company"},
        ])
        assert entries == [WorkHistoryEntry(company="Only Company")]

    def test_single_object_is_one_entry(self):
        assert len(to_work_history({"title": "Solo"})) == 1

    def test_json_string(self):
        entries = to_work_history('[{"Title": "Engineer", "Company": "Acme"}]')
        assert entries[0].company == "Acme"

    def test_free_text_is_not_decomposed(self):
        assert to_work_history("not an array or object") == []
        assert to_work_history("Engineer at Acme 2019-2021, Lead at Globex") == []

    def test_unusable(self):
        assert to_work_history(None) == []
        assert to_work_history(5) == []
        assert to_work_history("") == []


class TestScalarString:
    def test_string_as_is(self):
        assert to_text("  keep spacing ") == "  keep spacing "

    def test_nested_text_object(self):
        assert to_text({"text": "Nested summary"}) == "Nested summary"

    def test_list_of_strings_joined(self):
        assert to_text(["Line one", "Line two"]) == "Line one\nLine two"

    def test_numbers_and_none(self):
        assert to_text(None) == ""
        assert to_text(12) == "12"

    def test_other_objects_serialized(self):
        assert to_text({"b": 1, "a": [1]}) == '{"a": [1], "b": 1}'


class TestScalarNumber:
    scale = ScoreScale()

    @pytest.mark.parametrize(
        "raw, expected",
        [
            (0.85, 85),
            (7, 70),
            (42, 42),
            (1, 100),
            (0, 0),
            (10, 100),
            ("85", 85),
            (" 7.5 ", 75),
            ("64%", 64),
            (150, 100),
        ],
    )
    def test_scale_normalization(self, raw, expected):
        assert to_score(raw, self.scale) == expected

    @pytest.mark.parametrize("raw", ["N/A", "", None, True, float("nan"), float("inf"), "inf", -5, [80], {"v": 1}])
    def test_unusable(self, raw):
        assert to_score(raw, self.scale) is None

    def test_rescaling_can_be_disabled(self):
        assert to_score(7, ScoreScale(enabled=False)) == 7
        assert to_score(0.85, ScoreScale(enabled=False)) == 0.85

    def test_custom_thresholds(self):
        scale = ScoreScale(unit_max=1.0, tenth_max=5.0)
        assert to_score(4, scale) == 40
        assert to_score(7, scale) == 7


class TestDispatch:
    def test_coerce_routes_by_shape(self):
        assert coerce("a, b", "stringArray") == ["a", "b"]
        assert coerce([{"title": "T"}], "recordArray")[0].title == "T"
        assert coerce(5, "scalarString") == "5"
        assert coerce("0.5", "scalarNumber") == 50

    def test_unknown_shape(self):
        with pytest.raises(ValueError):
            coerce([], "matrix")
