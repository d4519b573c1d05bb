"""Record analysis CLI command."""

from __future__ import annotations

import importlib.util
import inspect
import re
import sys
from pathlib import Path
from typing import Any, List

from ..codec.schema import RecordLayout
from ..codec.types import SCALARS, Array, spec_name
from ..models.base import Record

_SPEC_RE = re.compile(r"^\s*([A-Za-z_][A-Za-z0-9_]*)\s*((?:\[\s*\d+\s*\])*)\s*$")


def parse_specs(text: str) -> List[Any]:
    """Parse a comma-separated list of scalar names with optional C array suffixes.

    ``int32[2][3]`` is an array of 2 arrays of 3 ``int32`` values, as in C.

    Raises:
        ValueError: If an entry cannot be parsed
    """
    specs = []
    for entry in text.split(","):
        match = _SPEC_RE.match(entry)
        if match is None:
            raise ValueError(f"Cannot parse type: {entry.strip()!r}")
        name, suffix = match.groups()
        if name not in SCALARS:
            raise ValueError(f"Unknown type {name!r}; known: {', '.join(sorted(SCALARS))}")
        spec: Any = SCALARS[name]
        for length in reversed(re.findall(r"\d+", suffix)):
            spec = Array(spec, int(length))
        specs.append(spec)
    return specs


def analyze_file(file_path: Path) -> None:
    """Analyze all Record classes in a Python file.

    Args:
        file_path: Path to Python file containing record definitions
    """
    # Load the Python module
    spec = importlib.util.spec_from_file_location("user_module", file_path)
    if spec is None or spec.loader is None:
        raise ValueError(f"Could not load module from {file_path}")

    module = importlib.util.module_from_spec(spec)
    sys.modules["user_module"] = module
    spec.loader.exec_module(module)

    # Find all Record subclasses defined in this file (not imported)
    record_classes = [
        obj
        for _name, obj in inspect.getmembers(module, inspect.isclass)
        if obj is not Record and issubclass(obj, Record) and obj.__module__ == "user_module"
    ]

    if not record_classes:
        print(f"No Record classes found in {file_path}")
        return

    print("|" * 7, "lebin: Little-Endian Binary codec", "|" * 7)
    print(f"{len(record_classes)} record{'s' if len(record_classes) != 1 else ''} loaded.")
    print("Offsets and sizes are in bytes.")
    print()

    for record_class in record_classes:
        analyze_record_class(record_class)


def analyze_record_class(record_class: type[Record]) -> None:
    """Print the layout of a single record class.

    Args:
        record_class: Record class to analyze
    """
    layout = RecordLayout.from_model(record_class)
    title = record_class.__name__ + (" (packed)" if layout.packed else "")

    print(f"{'=' * 19} {title} {'=' * 19}")
    print(f"Size: {layout.size} bytes, alignment {layout.alignment}, padding {layout.padding}")
    print()

    for i, field in enumerate(layout.fields, 1):
        if field.padding:
            print(f"        {'(padding)':<24}{field.offset - field.padding:>6}{field.padding:>6}")
        field_desc = f"{i}. {field.name}"
        print(f"        {field_desc:<24}{field.offset:>6}{field.size:>6}  {spec_name(field.spec)}")

    end = layout.fields[-1].offset + layout.fields[-1].size
    if layout.size > end:
        print(f"        {'(padding)':<24}{end:>6}{layout.size - end:>6}")
    print()
