"""Reading and writing JSONL payload files and field type map files."""

import json
from collections.abc import Iterable, Iterator
from pathlib import Path
from typing import Any

import yaml

from typed_form.coercion import FieldType, parse_field_types


def read_jsonl(path: Path | str) -> Iterator[Any]:
    """Yield the payload decoded from each non-blank line of a JSONL file.

    A line holds one payload object or a list of payloads.

    Raises:
        ValueError: If a line is not valid JSON. The message names the file
            and the 1-based line number.
    """
    path = Path(path)
    with path.open(encoding="utf-8") as lines:
        for line_num, line in enumerate(lines, 1):
            if line.isspace():
                continue
            try:
                yield json.loads(line)
            except json.JSONDecodeError as e:
                raise ValueError(f"{path.name}: invalid JSON on line {line_num}: {e.msg}") from e


def write_jsonl(path: Path | str, records: Iterable[Any]) -> int:
    """Serialize payloads to a JSONL file, one per line, keeping non-ASCII text as-is.

    `records` may be a generator; it is consumed while the file is written.
    Returns how many lines were written.
    """
    lines_written = 0
    with Path(path).open("w", encoding="utf-8") as out:
        for record in records:
            print(json.dumps(record, ensure_ascii=False), file=out)
            lines_written += 1
    return lines_written


def load_field_types(path: Path | str) -> dict[str, FieldType]:
    """Load a bare field type map from a JSON or YAML file.

    The file holds a single mapping of field name -> type name.

    Raises:
        ValueError: If the file does not contain a mapping.
        FieldTypeError: If the map names an unknown type.
    """
    path = Path(path)
    with open(path, encoding="utf-8") as f:
        if path.suffix in (".yaml", ".yml"):
            data = yaml.safe_load(f)
        else:
            data = json.load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Field type map in {path} must be a mapping, got {type(data).__name__}")

    return parse_field_types(data)
