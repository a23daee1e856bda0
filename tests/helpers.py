from app.models.catalog import CatalogEntry

SAMPLE_CSV = 'anime_id,name,genre,type\n1,A,"Action, Drama",TV\n2,B,Comedy,Movie\nbad,C,,TV\n'


def make_entries(count: int) -> list[CatalogEntry]:
    genres = ["Action, Comedy", "Drama", "Comedy, Romance", ""]
    types = ["TV", "Movie", None]
    return [
        CatalogEntry(
            anime_id=i,
            name=f"Show {i}",
            genre=genres[i % len(genres)],
            type=types[i % len(types)],
        )
        for i in range(1, count + 1)
    ]
