from .client import RecommenderClient, error_message
from .normalizer import normalize_response, to_items
from .request_builder import (
    build_bootstrap_request,
    build_predict_request,
    build_recommend_request,
    parse_number_list,
    parse_rated_pairs,
    parse_string_list,
)

__all__ = [
    "RecommenderClient",
    "build_bootstrap_request",
    "build_predict_request",
    "build_recommend_request",
    "error_message",
    "normalize_response",
    "parse_number_list",
    "parse_rated_pairs",
    "parse_string_list",
    "to_items",
]
