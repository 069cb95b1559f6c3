"""Unit tests for regex entity extraction."""

import unittest

from src.analytics.entity_extractor import classify_intent, extract_entities, parse_dollars
from src.models.filters import SORT_AMOUNT_ASC, SORT_AMOUNT_DESC


class TestParseDollars(unittest.TestCase):
    """Dollar figures with commas and suffixes."""

    def test_plain_number_with_commas(self) -> None:
        self.assertEqual(parse_dollars("5,000"), 5000.0)

    def test_suffixes(self) -> None:
        self.assertEqual(parse_dollars("2.5", "million"), 2_500_000.0)
        self.assertEqual(parse_dollars("3", "k"), 3_000.0)
        self.assertEqual(parse_dollars("1", "bn"), 1_000_000_000.0)
        self.assertEqual(parse_dollars("4", "M"), 4_000_000.0)


class TestClassifyIntent(unittest.TestCase):
    """Coarse question types."""

    def test_guidance(self) -> None:
        self.assertEqual(classify_intent("How do I apply for an earmark?"), "guidance")

    def test_compare(self) -> None:
        self.assertEqual(classify_intent("Compare Labor versus Education"), "compare")

    def test_trend(self) -> None:
        self.assertEqual(classify_intent("Show the trend of Labor funding over time"), "trend")

    def test_analyze_before_list(self) -> None:
        self.assertEqual(classify_intent("Give me a breakdown by agency"), "analyze")

    def test_summarize(self) -> None:
        self.assertEqual(
            classify_intent("What was the total amount allocated to rural development?"),
            "summarize",
        )

    def test_list_and_default(self) -> None:
        self.assertEqual(classify_intent("Show me earmarks in Ohio"), "list")
        self.assertEqual(classify_intent("Menendez earmarks"), "search")

    def test_climate_change_is_not_a_trend(self) -> None:
        self.assertEqual(classify_intent("Find earmarks related to climate change"), "list")


class TestExtractEntities(unittest.TestCase):
    """Filters extracted from whole questions."""

    def test_empty_question(self) -> None:
        filters = extract_entities("   ")
        self.assertFalse(filters.has_filters())
        self.assertEqual(filters.intent, "search")

    def test_department_stops_before_preposition(self) -> None:
        filters = extract_entities("Show me earmarks from the Department of Education in 2022")
        self.assertEqual(filters.agencies, ["Education"])
        self.assertEqual(filters.year, 2022)
        self.assertEqual(filters.keywords, [])
        self.assertEqual(filters.intent, "list")

    def test_two_departments(self) -> None:
        filters = extract_entities(
            "Compare funding between Department of Labor and Department of Transportation"
        )
        self.assertEqual(filters.agencies, ["Labor", "Transportation"])
        self.assertEqual(filters.intent, "compare")
        self.assertIsNone(filters.min_amount)

    def test_member_with_title(self) -> None:
        filters = extract_entities("Sen. Menendez earmarks in 2022")
        self.assertEqual(filters.member, "Menendez")
        self.assertEqual(filters.year, 2022)
        self.assertIsNone(filters.location)

    def test_member_full_name_keeps_surname(self) -> None:
        filters = extract_entities("Senator Bob Casey funding for Pennsylvania")
        self.assertEqual(filters.member, "Casey")
        self.assertEqual(filters.location, "Pennsylvania")
        self.assertEqual(filters.location_code, "PA")

    def test_member_lower_case(self) -> None:
        filters = extract_entities("what did senator menendez get")
        self.assertEqual(filters.member, "Menendez")

    def test_member_followed_by_agency_abbreviation(self) -> None:
        filters = extract_entities("Sen. Murray DOT earmarks")
        self.assertEqual(filters.member, "Murray")
        self.assertEqual(filters.agencies, ["Transportation"])

    def test_member_followed_by_fiscal_year(self) -> None:
        filters = extract_entities("Rep. Smith FY2022 earmarks")
        self.assertEqual(filters.member, "Smith")
        self.assertEqual(filters.year, 2022)

    def test_member_followed_by_state(self) -> None:
        filters = extract_entities("Sen. Padilla California projects")
        self.assertEqual(filters.member, "Padilla")
        self.assertEqual(filters.location, "California")

    def test_member_followed_by_agency_name(self) -> None:
        filters = extract_entities("Sen. Brown Labor projects")
        self.assertEqual(filters.member, "Brown")
        self.assertEqual(filters.agencies, ["Labor"])
        self.assertEqual(filters.keywords, [])

    def test_member_possessive_and_punctuation(self) -> None:
        self.assertEqual(extract_entities("Rep. Smith's projects").member, "Smith")
        filters = extract_entities("Sen. Booker, 2022 earmarks")
        self.assertEqual(filters.member, "Booker")
        self.assertEqual(filters.year, 2022)

    def test_title_without_name(self) -> None:
        self.assertIsNone(extract_entities("Which senators requested the most?").member)

    def test_over_amount_and_sort(self) -> None:
        filters = extract_entities("What are the largest earmarks over $1 million?")
        self.assertEqual(filters.min_amount, 1_000_000)
        self.assertEqual(filters.sort, SORT_AMOUNT_DESC)
        self.assertEqual(filters.keywords, [])

    def test_under_amount_and_ascending_sort(self) -> None:
        filters = extract_entities("Show me the smallest earmarks under $100,000")
        self.assertEqual(filters.max_amount, 100_000)
        self.assertEqual(filters.sort, SORT_AMOUNT_ASC)

    def test_amount_is_not_a_year(self) -> None:
        filters = extract_entities("grants under $2,000 in 2021")
        self.assertEqual(filters.max_amount, 2_000)
        self.assertEqual(filters.year, 2021)

    def test_at_least_does_not_sort(self) -> None:
        filters = extract_entities("earmarks of at least $5 million")
        self.assertEqual(filters.min_amount, 5_000_000)
        self.assertIsNone(filters.sort)

    def test_between_amounts(self) -> None:
        filters = extract_entities("earmarks between $500k and $2 million")
        self.assertEqual(filters.min_amount, 500_000)
        self.assertEqual(filters.max_amount, 2_000_000)

    def test_between_shares_suffix(self) -> None:
        filters = extract_entities("earmarks between $1 and 5 million")
        self.assertEqual(filters.min_amount, 1_000_000)
        self.assertEqual(filters.max_amount, 5_000_000)

    def test_fiscal_year_prefix(self) -> None:
        self.assertEqual(extract_entities("FY2023 earmarks").year, 2023)

    def test_state_code_after_in(self) -> None:
        filters = extract_entities("Earmarks in CA for 2023")
        self.assertEqual(filters.location, "California")
        self.assertEqual(filters.location_code, "CA")
        self.assertEqual(filters.year, 2023)

    def test_in_va_is_virginia_not_veterans_affairs(self) -> None:
        filters = extract_entities("Rep. Smith projects in VA")
        self.assertEqual(filters.member, "Smith")
        self.assertEqual(filters.location, "Virginia")
        self.assertEqual(filters.agencies, [])

    def test_longest_state_name_wins(self) -> None:
        self.assertEqual(extract_entities("earmarks in West Virginia").location, "West Virginia")

    def test_abbreviation(self) -> None:
        filters = extract_entities("HUD earmarks in 2023")
        self.assertEqual(filters.agencies, ["Housing and Urban Development"])

    def test_capitalised_bare_agency(self) -> None:
        filters = extract_entities("Earmarks from Transportation in 2023")
        self.assertEqual(filters.agencies, ["Transportation"])

    def test_lower_case_agency_word_is_a_keyword(self) -> None:
        filters = extract_entities("energy efficiency projects in Ohio")
        self.assertEqual(filters.agencies, [])
        self.assertEqual(filters.location, "Ohio")
        self.assertEqual(filters.keywords, ["energy", "efficiency"])

    def test_keywords_skip_stop_words_and_short_words(self) -> None:
        filters = extract_entities("Find earmarks related to climate change initiatives")
        self.assertEqual(filters.keywords, ["climate", "change", "initiatives"])

    def test_keywords_are_unique(self) -> None:
        filters = extract_entities("broadband broadband rural broadband")
        self.assertEqual(filters.keywords, ["broadband", "rural"])


if __name__ == "__main__":
    unittest.main()
