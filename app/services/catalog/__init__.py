from .filters import facet_choice, filter_catalog
from .index import build_facets, split_genres
from .loader import CatalogLoader, parse_catalog, parse_catalog_file
from .pager import clamp_page, page_count, page_slice, showing_range

__all__ = [
    "CatalogLoader",
    "build_facets",
    "clamp_page",
    "facet_choice",
    "filter_catalog",
    "page_count",
    "page_slice",
    "parse_catalog",
    "parse_catalog_file",
    "showing_range",
    "split_genres",
]
