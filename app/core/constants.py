"""
Core constants used across the application. Keep these simple and documented.
"""

# Facet selection meaning "no constraint" in the browse filters
ALL_FILTER: str = "All"
# Type selection meaning "no constraint" in recommendation options
NO_TYPE_CONSTRAINT: str = "None"
# Label used for catalog entries without a type
UNKNOWN_LABEL: str = "Unknown"

RATING_MIN: int = 0
RATING_MAX: int = 10

SCORE_FIELD: str = "predicted_score_0_1"
MAL_ANIME_URL: str = "https://myanimelist.net/anime/{anime_id}"
