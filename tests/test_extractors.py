"""Tests for the field extractors."""

from datetime import datetime, timezone

import pytest

from fieldlog.extractors import (
    ActivityMatch,
    FieldMatch,
    extract_activity,
    extract_date,
    extract_equipment,
    extract_location,
    extract_material,
    extract_measurement,
    extract_personnel,
)
from fieldlog.lexicon import DEFAULT_LEXICON, KnownLocation
from fieldlog.models import (
    UNNAMED_PERSONNEL,
    UNSPECIFIED_EQUIPMENT,
    UNSPECIFIED_MATERIAL,
    ActivityCategory,
)

ACTIVITIES = DEFAULT_LEXICON.activities


class TestExtractLocation:

    def test_exact_substring_match(self):
        text = "We set up at Sanchez Site this morning."
        assert extract_location(text, DEFAULT_LEXICON.locations) == FieldMatch("Sanchez Site", True)

    def test_first_table_entry_wins(self):
        """Table order decides, not position in the text."""
        text = "Trucks left Delta Junction for Sanchez Site."
        result = extract_location(text, DEFAULT_LEXICON.locations)
        assert result.value == "Sanchez Site"

    def test_case_sensitive(self):
        text = "We worked at sanchez site today."
        assert extract_location(text, DEFAULT_LEXICON.locations) == FieldMatch("", False)

    def test_apostrophe_in_name(self):
        text = "Pressure tests at Massey's Test Facility passed."
        assert extract_location(text, DEFAULT_LEXICON.locations).value == "Massey's Test Facility"

    def test_custom_table(self):
        locations = (KnownLocation(name="Pier 9"),)
        assert extract_location("Barge docked at Pier 9.", locations).matched is True


class TestExtractActivity:

    def test_keyword_with_following_words(self):
        text = "Engineer installed a new Pump at Sanchez Site on Mar 3rd, 2023."
        result = extract_activity(text, ACTIVITIES, 0)

        assert result == ActivityMatch(ActivityCategory.INSTALLATION, "installed a new Pump", True)

    def test_case_insensitive_keyword(self):
        result = extract_activity("REPAIR of the conveyor belt finished.", ACTIVITIES, 0)

        assert result.category == ActivityCategory.MAINTENANCE
        assert result.activity_type == "REPAIR of the conveyor"

    def test_maintenance_noun(self):
        text = "The crew will schedule maintenance on the Crane next week."
        result = extract_activity(text, ACTIVITIES, 0)

        assert result.category == ActivityCategory.MAINTENANCE
        assert result.activity_type.startswith("maintenance")

    def test_category_declaration_order_wins(self):
        """Installation is declared before Monitoring, so it wins on a tie."""
        text = "We will test the sensor after we install it."
        assert extract_activity(text, ACTIVITIES, 0).category == ActivityCategory.INSTALLATION

    def test_mid_word_keyword_falls_back_to_title_case(self):
        """A keyword buried inside a word still classifies, with a bare type."""
        text = "Crews will reinstall the fence posts."
        result = extract_activity(text, ACTIVITIES, 0)

        assert result.category == ActivityCategory.INSTALLATION
        assert result.activity_type == "Install"

    def test_unspecified_uses_first_sentence(self):
        text = "Lunch break was taken by everyone. Nothing else happened today."
        result = extract_activity(text, ACTIVITIES, 2)

        assert result == ActivityMatch(
            ActivityCategory.UNSPECIFIED, "Lunch break was taken by everyone", False
        )

    def test_unspecified_short_sentence_uses_index(self):
        text = "Lunch. Everyone sat around the fire for a while."
        result = extract_activity(text, ACTIVITIES, 2)

        assert result.activity_type == "Activity 3"

    def test_unspecified_long_sentence_uses_index(self):
        text = "word " * 30
        result = extract_activity(text, ACTIVITIES, 0)

        assert result.activity_type == "Activity 1"

    def test_first_sentence_bounds(self):
        """Ten characters is enough, ninety-nine is the longest allowed."""
        ten = "Lunch time"
        assert extract_activity(ten + ". rest", ACTIVITIES, 0).activity_type == ten

        ninety_nine = "a" * 99
        assert extract_activity(ninety_nine + ".", ACTIVITIES, 0).activity_type == ninety_nine

        hundred = "a" * 100
        assert extract_activity(hundred + ".", ACTIVITIES, 0).activity_type == "Activity 1"


class TestQualifiedExtractors:

    def test_personnel_with_qualifier(self):
        text = "The Senior Engineer signed off."
        assert extract_personnel(text, DEFAULT_LEXICON.personnel) == FieldMatch("Senior Engineer", True)

    def test_personnel_at_start(self):
        text = "Engineer installed a new Pump."
        assert extract_personnel(text, DEFAULT_LEXICON.personnel).value == "Engineer"

    def test_personnel_lowercase_not_matched(self):
        text = "The crew will schedule maintenance."
        assert extract_personnel(text, DEFAULT_LEXICON.personnel) == FieldMatch(UNNAMED_PERSONNEL, False)

    def test_plural_falls_back_to_bare_word(self):
        text = "Two Engineers arrived."
        assert extract_personnel(text, DEFAULT_LEXICON.personnel).value == "Engineer"

    def test_qualifier_may_cross_line_break(self):
        text = "Checked the gauges\nPump pressure looks fine."
        assert extract_equipment(text, DEFAULT_LEXICON.equipment).value == "gauges\nPump"

    def test_qualifier_search_ignores_case(self):
        """Presence is case-sensitive, but the earliest mention in any case wins."""
        text = "The old pump broke. A New Pump arrived."
        assert extract_equipment(text, DEFAULT_LEXICON.equipment) == FieldMatch("old pump", True)

    def test_equipment(self):
        text = "Engineer installed a new Pump at Sanchez Site."
        assert extract_equipment(text, DEFAULT_LEXICON.equipment) == FieldMatch("new Pump", True)

    def test_equipment_first_lexicon_entry_wins(self):
        """Excavator precedes Truck in the table."""
        text = "The Truck followed the Excavator."
        assert extract_equipment(text, DEFAULT_LEXICON.equipment).value == "the Excavator"

    def test_equipment_sentinel(self):
        result = extract_equipment("Nobody brought tools today.", DEFAULT_LEXICON.equipment)
        assert result == FieldMatch(UNSPECIFIED_EQUIPMENT, False)

    def test_material(self):
        text = "Poured reinforced Concrete into the footing."
        assert extract_material(text, DEFAULT_LEXICON.materials).value == "reinforced Concrete"

    def test_material_sentinel(self):
        result = extract_material("Nothing was poured.", DEFAULT_LEXICON.materials)
        assert result == FieldMatch(UNSPECIFIED_MATERIAL, False)


class TestExtractMeasurement:

    @pytest.mark.parametrize(
        "text,expected",
        [
            ("Drilled to 125 meters today.", "125 meters"),
            ("Loaded 12.5kg of samples.", "12.5kg"),
            ("Pressure held at 80 psi.", "80 psi"),
            ("Hauled 3 tons, then 4 tons.", "3 tons"),
            ("Trucks averaged 45 MPH.", "45 MPH"),
        ],
    )
    def test_first_measurement(self, text, expected):
        assert extract_measurement(text) == FieldMatch(expected, True)

    def test_number_without_unit(self):
        assert extract_measurement("We had 3 trucks on site.") == FieldMatch("", False)


class TestExtractDate:

    def test_ordinal_date(self):
        text = "Engineer installed a new Pump at Sanchez Site on Mar 3rd, 2023."
        assert extract_date(text) == datetime(2023, 3, 3, tzinfo=timezone.utc)

    def test_full_month_name_without_comma(self):
        assert extract_date("Work resumed on September 21 2024.") == datetime(
            2024, 9, 21, tzinfo=timezone.utc
        )

    def test_case_insensitive(self):
        assert extract_date("logged on jan 5th, 2022") == datetime(2022, 1, 5, tzinfo=timezone.utc)

    def test_invalid_calendar_date(self):
        assert extract_date("Scheduled for Feb 30, 2023.") is None

    def test_no_date(self):
        assert extract_date("Nothing but a normal day at the site.") is None
