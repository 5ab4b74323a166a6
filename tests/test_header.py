"""Tests for name, room, age and gender extraction."""

import pytest

from signout.extraction.header import (
    HeaderFields,
    extract_age,
    extract_identity,
    parse_header,
    split_age_gender,
)


class TestParseHeader:
    @pytest.mark.parametrize(
        "header,name,room",
        [
            ("### 1. Jane Doe – 4B", "Jane Doe", "4B"),
            ("### 2. John Smith - 12", "John Smith", "12"),
            ("### Bob Lee — ICU 4", "Bob Lee", "ICU 4"),
            ("### 1. Bob", "Bob", ""),
            ("### Mary-Jane Watson – 7A", "Mary-Jane Watson", "7A"),
            ("### 3. Ann - B - 5C", "Ann - B", "5C"),
        ],
    )
    def test_name_and_room(self, header, name, room):
        fields = parse_header(header)

        assert fields.name == name
        assert fields.room == room

    def test_long_tail_is_not_a_room(self):
        fields = parse_header("### 3. Smith - s/p mechanical fall with hip fracture")

        assert fields.room == ""
        assert fields.name == "Smith - s/p mechanical fall with hip fracture"

    def test_room_length_limit_is_configurable(self):
        header = "### 4. Doe - Step-down unit 12"

        assert parse_header(header).room == ""
        assert parse_header(header, room_max_length=30).room == "Step-down unit 12"

    def test_age_gender_tag(self):
        fields = parse_header("### 4. Ann Lee (78F) – 5C")

        assert fields == HeaderFields(name="Ann Lee", room="5C", age="78", gender="F")

    def test_empty_header(self):
        assert parse_header("") == HeaderFields()
        assert parse_header("### 7.") == HeaderFields()


class TestAge:
    def test_extract_age_from_bold_label(self):
        assert extract_age(["**Age:** 78F", "**Age:** 90M"]) == "78F"

    def test_extract_age_is_case_insensitive(self):
        assert extract_age(["**age:**   80 "]) == "80"

    def test_extract_age_missing(self):
        assert extract_age(["Age 78", "nothing here"]) == ""

    @pytest.mark.parametrize(
        "value,expected",
        [
            ("78F", ("78", "F")),
            ("78 M", ("78", "M")),
            ("56 y/o male", ("56", "M")),
            ("56yo female", ("56", "F")),
            ("80", ("80", "")),
            ("", ("", "")),
            ("unknown", ("unknown", "")),
        ],
    )
    def test_split_age_gender(self, value, expected):
        assert split_age_gender(value) == expected


class TestIdentity:
    def test_body_label_wins_over_header_tag(self):
        fields = extract_identity("### 1. Ann Lee (80M) – 5C", ["**Age:** 78F"])

        assert (fields.age, fields.gender) == ("78", "F")
        assert (fields.name, fields.room) == ("Ann Lee", "5C")

    def test_header_tag_is_fallback(self):
        fields = extract_identity("### 1. Ann Lee (80M) – 5C", ["# Sepsis"])

        assert (fields.age, fields.gender) == ("80", "M")

    def test_to_dict(self):
        assert parse_header("### 1. Jane Doe – 4B").to_dict() == {
            "name": "Jane Doe",
            "room": "4B",
            "age": "",
            "gender": "",
        }
