"""Console rendering and file artifacts."""

from .presenter import (
    TABLE_COLUMNS,
    build_results_table,
    render_search_results,
    result_row,
    results_to_json,
)
from .writer import to_json, write_json_artifact, write_text_atomic

__all__ = [
    "TABLE_COLUMNS",
    "build_results_table",
    "render_search_results",
    "result_row",
    "results_to_json",
    "to_json",
    "write_json_artifact",
    "write_text_atomic",
]
