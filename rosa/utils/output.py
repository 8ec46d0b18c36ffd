import json
from collections.abc import (
    Iterable,
    Mapping,
)

import yaml
from tabulate import tabulate

OUTPUT_FORMATS = ["table", "json", "yaml"]


def print_output(
    options: Mapping[str, str | bool],
    content: Iterable[dict],
    columns: Iterable[str] = (),
) -> str | None:
    content = list(content)
    if options.get("sort"):
        content = sorted(content, key=lambda c: tuple(str(v) for v in c.values()))

    output = options.get("output", "table")

    formatted_content = None
    if output == "table":
        formatted_content = format_table(content, columns)
    elif output == "json":
        formatted_content = json.dumps(content, indent=2, default=str)
    elif output == "yaml":
        formatted_content = yaml.safe_dump(content, sort_keys=False)
    else:
        raise ValueError(f"unknown output format {output}")

    print(formatted_content)
    return formatted_content


def _format_cell(cell: dict, column: str) -> object:
    # example: for column 'cluster.name'
    # cell = item['cluster']['name']
    raw_data = cell
    for token in column.split("."):
        raw_data = raw_data.get(token) or {}
    if raw_data == {}:
        return ""

    if isinstance(raw_data, list):
        return ", ".join(str(d) for d in raw_data)
    if isinstance(raw_data, dict):
        return ", ".join(f"{k}={v}" for k, v in raw_data.items())
    return raw_data


def format_table(
    content: Iterable[dict], columns: Iterable[str], table_format: str = "plain"
) -> str:
    columns = list(columns)
    headers = [column.split(".")[-1].replace("_", " ").upper() for column in columns]
    table_data = [[_format_cell(item, column) for column in columns] for item in content]
    return tabulate(table_data, headers=headers, tablefmt=table_format)
