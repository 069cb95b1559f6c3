"""Tests for query building, relaxation and the earmark repository."""

import unittest

from src.analytics import extract_entities
from src.core.exceptions import DatabaseError
from src.database.query_builder import build_earmark_query, relax_filters
from src.database.repository import EarmarkRepository
from src.models.filters import SORT_AMOUNT_ASC, SORT_AMOUNT_DESC, EarmarkFilters
from tests.earmark_data import make_database


class TestRelaxFilters(unittest.TestCase):
    """Order of the broader retries."""

    def test_all_steps(self) -> None:
        filters = EarmarkFilters(
            year=2022,
            agencies=["Labor"],
            location="Ohio",
            location_code="OH",
            keywords=["rural", "broadband"],
        )
        steps = list(relax_filters(filters))

        self.assertEqual([dropped for dropped, _ in steps], [
            ["keywords:all"],
            ["keywords"],
            ["keywords", "agency", "location"],
        ])
        self.assertTrue(steps[0][1].match_any_keyword)
        self.assertEqual(steps[1][1].keywords, [])
        self.assertEqual(steps[2][1].agencies, [])
        self.assertIsNone(steps[2][1].location)
        self.assertEqual(steps[2][1].year, 2022)

    def test_single_keyword_skips_any_step(self) -> None:
        steps = list(relax_filters(EarmarkFilters(year=2023, keywords=["zzzz"])))
        self.assertEqual([dropped for dropped, _ in steps], [["keywords"]])

    def test_never_relaxes_to_everything(self) -> None:
        self.assertEqual(list(relax_filters(EarmarkFilters(agencies=["Labor"]))), [])

    def test_no_filters(self) -> None:
        self.assertEqual(list(relax_filters(EarmarkFilters())), [])

    def test_keyword_only_is_never_dropped(self) -> None:
        self.assertEqual(list(relax_filters(EarmarkFilters(keywords=["zzzz"]))), [])

        steps = list(relax_filters(EarmarkFilters(keywords=["zzzz", "yyyy"])))
        self.assertEqual([dropped for dropped, _ in steps], [["keywords:all"]])


class TestBuildEarmarkQuery(unittest.TestCase):
    """Shape of the generated SELECT."""

    def _sql(self, filters: EarmarkFilters, limit: int = 1000) -> str:
        stmt = build_earmark_query(filters, limit)
        return str(stmt.compile(compile_kwargs={"literal_binds": True})).lower()

    def test_unfiltered_query_has_default_order(self) -> None:
        sql = self._sql(EarmarkFilters())
        self.assertNotIn("where", sql)
        self.assertIn("order by earmarks.year desc, earmarks.amount desc", sql)
        self.assertIn("limit 1000", sql)

    def test_amount_sort(self) -> None:
        self.assertIn("order by earmarks.amount desc", self._sql(EarmarkFilters(sort=SORT_AMOUNT_DESC)))
        self.assertIn("order by earmarks.amount asc", self._sql(EarmarkFilters(sort=SORT_AMOUNT_ASC)))

    def test_like_wildcards_are_escaped(self) -> None:
        params = build_earmark_query(EarmarkFilters(keywords=["100%_done"])).compile().params
        self.assertIn("%100\\%\\_done%", params.values())


class TestEarmarkRepository(unittest.TestCase):
    """Queries against a seeded SQLite database."""

    def setUp(self) -> None:
        self.db = make_database()
        self.repository = EarmarkRepository(db=self.db)

    def tearDown(self) -> None:
        self.db.close()

    def test_year_filter_and_default_order(self) -> None:
        result = self.repository.find(EarmarkFilters(year=2022))

        self.assertEqual(result.count, 3)
        self.assertEqual([row["member"] for row in result.rows], ["Padilla", "Menendez", "Booker"])
        self.assertEqual(result.total_amount, 4_250_000)
        self.assertEqual(result.relaxed, [])

    def test_member_is_case_insensitive(self) -> None:
        result = self.repository.find(EarmarkFilters(member="padilla"))
        self.assertEqual(result.count, 2)

    def test_agencies_are_ored(self) -> None:
        result = self.repository.find(EarmarkFilters(agencies=["Labor", "Transportation"]))
        self.assertEqual(sorted(row["member"] for row in result.rows), ["Booker", "Feinstein"])

    def test_location_matches_state_code(self) -> None:
        result = self.repository.find(EarmarkFilters(location="California", location_code="CA"))
        self.assertEqual(result.count, 3)

    def test_amount_range_and_sort(self) -> None:
        result = self.repository.find(EarmarkFilters(min_amount=1_000_000, sort=SORT_AMOUNT_ASC))
        self.assertEqual([row["amount"] for row in result.rows], [1_500_000, 2_000_000, 5_000_000])

        result = self.repository.find(EarmarkFilters(max_amount=300_000))
        self.assertEqual(result.count, 2)

    def test_keywords_search_text_columns(self) -> None:
        result = self.repository.find(EarmarkFilters(keywords=["telemedicine"]))
        self.assertEqual(result.count, 1)
        self.assertEqual(result.rows[0]["member"], "Brown")

    def test_relaxes_to_any_keyword(self) -> None:
        result = self.repository.find(EarmarkFilters(keywords=["climate", "broadband"]))

        self.assertEqual(result.count, 2)
        self.assertEqual(result.relaxed, ["keywords:all"])
        self.assertTrue(result.filters.match_any_keyword)

    def test_relaxes_keywords_away(self) -> None:
        result = self.repository.find(EarmarkFilters(year=2023, keywords=["zzzz"]))

        self.assertEqual(result.count, 3)
        self.assertEqual(result.relaxed, ["keywords"])
        self.assertEqual(result.filters.to_dict(), {"year": 2023})

    def test_relaxes_agency_and_location(self) -> None:
        filters = EarmarkFilters(year=2022, agencies=["Labor"], location="Ohio", location_code="OH")
        result = self.repository.find(filters)

        self.assertEqual(result.count, 3)
        self.assertEqual(result.relaxed, ["agency", "location"])

    def test_no_match_after_relaxing(self) -> None:
        filters = EarmarkFilters(year=2021, agencies=["Labor"])
        result = self.repository.find(filters)

        self.assertEqual(result.count, 0)
        self.assertEqual(result.relaxed, [])
        self.assertEqual(result.filters, filters)

    def test_unmatched_keywords_alone_find_nothing(self) -> None:
        result = self.repository.find(extract_entities("Show me earmarks for zzzunicorn"))

        self.assertEqual(result.count, 0)
        self.assertEqual(result.relaxed, [])
        self.assertEqual(result.filters.keywords, ["zzzunicorn"])

    def test_limit(self) -> None:
        self.assertEqual(self.repository.find(EarmarkFilters(), limit=2).count, 2)

    def test_search_with_filters(self) -> None:
        self.assertEqual(len(self.repository.search("climate")), 1)
        self.assertEqual(len(self.repository.search("center", year=2023)), 1)
        self.assertEqual(len(self.repository.search("training", member="booker")), 1)

    def test_search_literal_percent(self) -> None:
        self.assertEqual(self.repository.search("100%"), [])

    def test_check(self) -> None:
        self.assertTrue(self.repository.check())


class TestRepositoryErrors(unittest.TestCase):
    """A database without the earmarks table."""

    def setUp(self) -> None:
        self.db = make_database(seed=False)
        self.repository = EarmarkRepository(db=self.db)

    def tearDown(self) -> None:
        self.db.close()

    def test_find_raises_database_error(self) -> None:
        with self.assertRaises(DatabaseError):
            self.repository.find(EarmarkFilters(year=2022))

    def test_check_is_false(self) -> None:
        self.assertFalse(self.repository.check())


if __name__ == "__main__":
    unittest.main()
