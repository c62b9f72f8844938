"""Render registry search results as JSON or as a table."""

import json
from collections.abc import Sequence

from rich.console import Console
from rich.table import Table

from studiorack.plugins.models import PluginVersion, RegistryPlugin

TABLE_COLUMNS = ("Id", "Name", "Description", "Date", "Version", "Tags")

COLUMN_STYLES: dict[str, dict] = {
    "Id": {"style": "cyan", "no_wrap": True},
    "Name": {"style": "bold"},
    "Date": {"style": "dim", "no_wrap": True},
    "Version": {"style": "green", "no_wrap": True},
    "Tags": {"style": "magenta"},
}


def results_to_json(results: Sequence[RegistryPlugin]) -> str:
    """Pretty-printed JSON for a list of search results."""
    payload = [result.model_dump(mode="json", exclude_none=True) for result in results]
    return json.dumps(payload, indent=2, ensure_ascii=False)


def result_row(result: RegistryPlugin) -> tuple[str, str, str, str, str, str]:
    """Table row for one result, taken from its current version only.

    Other stored versions are ignored even if they are newer.
    """
    current = result.current or PluginVersion()
    return (
        result.id,
        current.name,
        current.description,
        current.date.split("T")[0],
        current.version,
        ", ".join(current.tags),
    )


def build_results_table(results: Sequence[RegistryPlugin]) -> Table:
    """Create a rich table with one row per search result."""
    table = Table()
    for column in TABLE_COLUMNS:
        table.add_column(column, **COLUMN_STYLES.get(column, {}))

    for result in results:
        table.add_row(*result_row(result))

    return table


def render_search_results(
    results: Sequence[RegistryPlugin], console: Console, as_json: bool = False
) -> None:
    """Print search results to the console."""
    if as_json:
        # Plain print: rich would re-wrap long lines and break the JSON
        print(results_to_json(results))
        return

    console.print(build_results_table(results))
    console.print(f"{len(results)} results found.")
