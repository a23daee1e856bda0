import math
import unittest

from app.services.catalog import (
    build_facets,
    clamp_page,
    facet_choice,
    filter_catalog,
    page_count,
    page_slice,
    showing_range,
    split_genres,
)
from app.models.catalog import CatalogEntry
from tests.helpers import make_entries


class FacetTests(unittest.TestCase):
    def test_split_genres(self):
        self.assertEqual(split_genres(" Action, ,Drama ,"), ["Action", "Drama"])
        self.assertEqual(split_genres(""), [])
        self.assertEqual(split_genres(None), [])

    def test_facets_are_sorted_and_unique(self):
        facets = build_facets(make_entries(12))
        self.assertEqual(facets.types, ["Movie", "TV", "Unknown"])
        self.assertEqual(facets.genres, ["Action", "Comedy", "Drama", "Romance"])

    def test_empty_catalog(self):
        facets = build_facets([])
        self.assertEqual(facets.types, [])
        self.assertEqual(facets.genres, [])


class FilterTests(unittest.TestCase):
    def setUp(self):
        self.entries = make_entries(30)

    def assertSubsequence(self, result, source):
        positions = [source.index(e) for e in result]
        self.assertEqual(positions, sorted(positions))

    def test_no_constraints_returns_everything(self):
        self.assertEqual(filter_catalog(self.entries), self.entries)

    def test_query_matches_name_case_insensitively(self):
        result = filter_catalog(self.entries, "SHOW 2")
        self.assertEqual([e.anime_id for e in result], [2, 20, 21, 22, 23, 24, 25, 26, 27, 28, 29])

    def test_query_matches_id_text(self):
        entries = [
            CatalogEntry(anime_id=9253, name="Steins;Gate", genre="Sci-Fi"),
            CatalogEntry(anime_id=1535, name="Death Note", genre="Mystery"),
        ]
        self.assertEqual([e.anime_id for e in filter_catalog(entries, "925")], [9253])
        self.assertEqual([e.anime_id for e in filter_catalog(entries, "note")], [1535])

    def test_category_uses_unknown_for_missing_type(self):
        result = filter_catalog(self.entries, category="Unknown")
        self.assertTrue(result)
        self.assertTrue(all(e.type is None for e in result))

    def test_genre_must_be_a_whole_tag(self):
        result = filter_catalog(self.entries, genre="Comedy")
        self.assertTrue(all("Comedy" in split_genres(e.genre) for e in result))
        self.assertEqual(filter_catalog(self.entries, genre="Com"), [])

    def test_results_keep_catalog_order(self):
        for query in ["", "1", "show", "x"]:
            for category in [None, "TV", "Movie", "Unknown"]:
                for genre in [None, "Action", "Drama"]:
                    result = filter_catalog(self.entries, query, category, genre)
                    self.assertSubsequence(result, self.entries)

    def test_facet_choice(self):
        self.assertIsNone(facet_choice("All"))
        self.assertIsNone(facet_choice(None))
        self.assertEqual(facet_choice("TV"), "TV")


class PagerTests(unittest.TestCase):
    def test_page_count(self):
        for n in [0, 1, 24, 25, 26, 50, 51, 999]:
            self.assertEqual(page_count(n, 25), max(1, math.ceil(n / 25)))

    def test_slices_never_exceed_page_size(self):
        items = list(range(60))
        count = page_count(len(items), 25)
        self.assertEqual(count, 3)
        sizes = [len(page_slice(items, page, 25)) for page in range(1, count + 1)]
        self.assertEqual(sizes, [25, 25, 10])
        self.assertEqual(page_slice(items, 3, 25), list(range(50, 60)))

    def test_out_of_range_page_is_empty_not_clamped(self):
        self.assertEqual(page_slice(list(range(10)), 5, 25), [])

    def test_clamp_page(self):
        self.assertEqual(clamp_page(0, 3), 1)
        self.assertEqual(clamp_page(7, 3), 3)
        self.assertEqual(clamp_page(2, 3), 2)

    def test_showing_range(self):
        self.assertEqual(showing_range(1, 25, 60), (1, 25))
        self.assertEqual(showing_range(3, 25, 60), (51, 60))


if __name__ == "__main__":
    unittest.main()
