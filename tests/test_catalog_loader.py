import unittest

import httpx

from app.core.exceptions import CatalogLoadError
from app.services.catalog import CatalogLoader, build_facets, parse_catalog, parse_catalog_file
from tests.helpers import SAMPLE_CSV


class ParseCatalogTests(unittest.TestCase):
    def test_sample_loads_two_entries(self):
        entries = parse_catalog(SAMPLE_CSV)
        self.assertEqual([e.anime_id for e in entries], [1, 2])
        self.assertEqual(entries[0].name, "A")
        self.assertEqual(entries[0].genre, "Action, Drama")
        self.assertEqual(entries[1].type, "Movie")
        self.assertEqual(build_facets(entries).genres, ["Action", "Comedy", "Drama"])

    def test_drops_rows_without_usable_id_or_name(self):
        text = (
            "anime_id,name,genre,type\n"
            ",Missing id,Drama,TV\n"
            "abc,Text id,Drama,TV\n"
            "3.5,Fractional id,Drama,TV\n"
            "-4,Negative id,Drama,TV\n"
            "5,,Drama,TV\n"
            "6,Kept,Drama,TV\n"
        )
        entries = parse_catalog(text)
        self.assertEqual([(e.anime_id, e.name) for e in entries], [(6, "Kept")])
        for entry in entries:
            self.assertIsInstance(entry.anime_id, int)
            self.assertTrue(entry.name)

    def test_optional_columns(self):
        entries = parse_catalog("anime_id,name\n7,No Genre\n")
        self.assertEqual(len(entries), 1)
        self.assertEqual(entries[0].genre, "")
        self.assertIsNone(entries[0].type)

    def test_empty_type_is_absent(self):
        entries = parse_catalog("anime_id,name,genre,type\n8,Untyped,Drama,\n")
        self.assertIsNone(entries[0].type)

    def test_names_are_not_treated_as_missing_values(self):
        entries = parse_catalog("anime_id,name,genre,type\n9,NA,Drama,TV\n10,null,Drama,TV\n")
        self.assertEqual([e.name for e in entries], ["NA", "null"])

    def test_blank_lines_and_duplicate_ids(self):
        text = "anime_id,name,genre,type\n\n11,First,Drama,TV\n\n11,Second,Drama,TV\n12,Other,,Movie\n"
        entries = parse_catalog(text)
        self.assertEqual([(e.anime_id, e.name) for e in entries], [(11, "First"), (12, "Other")])

    def test_empty_and_headerless_input(self):
        self.assertEqual(parse_catalog(""), [])
        self.assertEqual(parse_catalog("anime_id,name,genre,type\n"), [])
        self.assertEqual(parse_catalog("id,title\n1,A\n"), [])

    def test_large_ids_are_exact(self):
        entries = parse_catalog("anime_id,name\n9007199254740993,Huge\n 42 ,Padded\n")
        self.assertEqual([e.anime_id for e in entries], [9007199254740993, 42])

    def test_missing_file(self):
        with self.assertRaises(CatalogLoadError):
            parse_catalog_file("/nonexistent/anime.csv")


class CatalogLoaderTests(unittest.IsolatedAsyncioTestCase):
    async def test_fetches_without_cache(self):
        seen = []

        def handler(request: httpx.Request) -> httpx.Response:
            seen.append(request)
            return httpx.Response(200, text=SAMPLE_CSV)

        loader = CatalogLoader(base_url="http://test", transport=httpx.MockTransport(handler))
        entries = await loader.load()
        await loader.close()

        self.assertEqual([e.anime_id for e in entries], [1, 2])
        self.assertEqual(seen[0].url.path, "/anime.csv")
        self.assertEqual(seen[0].headers["cache-control"], "no-store")
        self.assertIn("_", seen[0].url.params)

    async def test_missing_resource_is_an_error(self):
        loader = CatalogLoader(
            base_url="http://test",
            transport=httpx.MockTransport(lambda request: httpx.Response(404, text="not found")),
        )
        with self.assertRaises(CatalogLoadError) as ctx:
            await loader.load()
        self.assertEqual(ctx.exception.message, "CSV not found at /anime.csv")

    async def test_transport_failure_is_an_error(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        loader = CatalogLoader(base_url="http://test", transport=httpx.MockTransport(handler))
        with self.assertRaises(CatalogLoadError) as ctx:
            await loader.load()
        self.assertIn("connection refused", ctx.exception.message)


if __name__ == "__main__":
    unittest.main()
