import random
import string
from typing import Any

from loguru import logger

from app.core.config import settings
from app.core.constants import ALL_FILTER, NO_TYPE_CONSTRAINT
from app.core.exceptions import CatalogLoadError, RequestValidationError
from app.models.catalog import CatalogEntry, FacetSet
from app.models.recommendation import RatedPair
from app.services.catalog import (
    CatalogLoader,
    build_facets,
    clamp_page,
    facet_choice,
    filter_catalog,
    page_count,
    page_slice,
    showing_range,
)
from app.services.ratings import RatingStore, clamp_rating
from app.services.recommendation import (
    RecommenderClient,
    build_bootstrap_request,
    error_message,
    normalize_response,
)

SESSION_KEY_ALPHABET = string.ascii_lowercase + string.digits


def new_session_key() -> str:
    """Random guest key, e.g. ``guest-k3x9a``."""
    return "guest-" + "".join(random.choices(SESSION_KEY_ALPHABET, k=5))


class RateSession:
    """
    State of one "rate from CSV" session: catalog browsing, ratings and the last result.

    Derived values (facets, filtered rows, current page, rated pairs) are recomputed from
    base state on every access so they can never go stale. Submissions are tagged with an
    increasing sequence number and only the most recently issued one may update the result.
    """

    def __init__(
        self,
        loader: CatalogLoader | None = None,
        client: RecommenderClient | None = None,
        page_size: int | None = None,
        session_key: str | None = None,
    ):
        self.loader = loader or CatalogLoader()
        self.client = client or RecommenderClient()
        self.page_size = page_size or settings.PAGE_SIZE

        self.entries: list[CatalogEntry] = []
        self.loading_catalog = False
        self.error = ""

        self.query = ""
        self.type_filter = ALL_FILTER
        self.genre_filter = ALL_FILTER
        self.page = 1

        self.session_key = session_key or new_session_key()
        self.top_k: Any = settings.DEFAULT_TOP_K
        self.allowed_genres = "Action, Adventure"
        self.only_type = "TV"

        self.ratings = RatingStore()
        self.ratings.on_clear(self._discard_result)
        self.result: dict[str, Any] | None = None

        self._issued = 0
        self._in_flight: set[int] = set()

    # catalog

    async def load_catalog(self) -> None:
        if self.loading_catalog:
            logger.info("Catalog load already in progress; ignoring")
            return
        self.loading_catalog = True
        self.error = ""
        try:
            entries = await self.loader.load()
        except CatalogLoadError as e:
            logger.warning(f"Catalog load failed: {e.message}")
            self.entries = []
            self.error = e.message
        else:
            self.entries = entries
            self.ratings.retain(e.anime_id for e in entries)
            self.page = 1
        finally:
            self.loading_catalog = False

    @property
    def facets(self) -> FacetSet:
        return build_facets(self.entries)

    @property
    def type_options(self) -> list[str]:
        return [ALL_FILTER, *self.facets.types]

    @property
    def genre_options(self) -> list[str]:
        return [ALL_FILTER, *self.facets.genres]

    @property
    def type_constraint_options(self) -> list[str]:
        return [NO_TYPE_CONSTRAINT, *self.facets.types]

    # filters and paging

    def set_query(self, query: str) -> None:
        self.query = query
        self.page = 1

    def set_type_filter(self, value: str) -> None:
        self.type_filter = value
        self.page = 1

    def set_genre_filter(self, value: str) -> None:
        self.genre_filter = value
        self.page = 1

    @property
    def filtered(self) -> list[CatalogEntry]:
        return filter_catalog(
            self.entries,
            self.query,
            category=facet_choice(self.type_filter),
            genre=facet_choice(self.genre_filter),
        )

    @property
    def page_count(self) -> int:
        return page_count(len(self.filtered), self.page_size)

    @property
    def page_rows(self) -> list[CatalogEntry]:
        return page_slice(self.filtered, self.page, self.page_size)

    @property
    def showing(self) -> tuple[int, int, int]:
        total = len(self.filtered)
        first, last = showing_range(self.page, self.page_size, total)
        return first, last, total

    def go_to_page(self, page: int) -> None:
        self.page = clamp_page(page, self.page_count)

    def next_page(self) -> None:
        self.go_to_page(self.page + 1)

    def prev_page(self) -> None:
        self.go_to_page(self.page - 1)

    # ratings

    def set_rating(self, anime_id: int, raw: Any) -> int:
        value = clamp_rating(raw)
        self.ratings.set_rating(anime_id, value)
        return value

    def clear_rating(self, anime_id: int) -> None:
        self.ratings.set_rating(anime_id, 0)

    def clear_ratings(self) -> None:
        self.ratings.clear()

    def _discard_result(self) -> None:
        # responses to requests issued before this point no longer match the ratings
        self._issued += 1
        self.result = None

    @property
    def rated_pairs(self) -> list[RatedPair]:
        return self.ratings.rated_pairs()

    # submission

    @property
    def submitting(self) -> bool:
        return bool(self._in_flight)

    async def submit(self) -> None:
        """Send the current ratings for bootstrap recommendations and store the normalized result."""
        try:
            request = build_bootstrap_request(
                session_key=self.session_key,
                rated=self.rated_pairs,
                top_k=self.top_k,
                allowed_genres=self.allowed_genres,
                only_type=self.only_type,
            )
        except RequestValidationError as e:
            self._issued += 1
            self.error = e.message
            return

        self._issued += 1
        seq = self._issued
        self._in_flight.add(seq)
        self.error = ""
        self.result = None
        logger.info(f"[{self.session_key}] Submitting {len(request.rated)} ratings (request #{seq})")
        try:
            outcome = await self.client.bootstrap_recommend(request)
        except Exception as e:
            logger.exception(f"[{self.session_key}] Request #{seq} failed: {e}")
            if seq == self._issued:
                self.error = f"Request failed: {e}"
            return
        finally:
            self._in_flight.discard(seq)

        if seq != self._issued:
            logger.warning(f"[{self.session_key}] Dropping stale response for request #{seq}")
            return
        if not outcome.ok:
            self.error = error_message(outcome.data)
            return
        if isinstance(outcome.data, str):
            # not JSON; keep the raw text visible instead of failing
            self.result = {"items": [], "raw": outcome.data}
            return
        self.result = normalize_response(outcome.data)

    async def close(self) -> None:
        await self.loader.close()
        await self.client.close()
