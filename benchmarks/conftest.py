from __future__ import annotations

import json
import os
import platform
import sys
from importlib import metadata
from pathlib import Path

import pytest
from jinja2 import Environment as Jinja2Environment

from formatr import Environment

BENCHMARK_OUTPUT_DIR = Path(__file__).resolve().parent.parent / ".benchmarks"
BENCHMARK_OUTPUT_DIR.mkdir(exist_ok=True)


def _version(dist: str) -> str:
    try:
        return metadata.version(dist)
    except metadata.PackageNotFoundError:
        return "unknown"


def collect_environment_metadata() -> dict[str, object]:
    """Capture reproducibility metadata for each benchmark run."""
    return {
        "python": {
            "version": platform.python_version(),
            "implementation": platform.python_implementation(),
            "executable": sys.executable,
        },
        "os": {
            "system": platform.system(),
            "release": platform.release(),
            "machine": platform.machine(),
        },
        "cpu": {"count": os.cpu_count()},
        "formatr": _version("formatr"),
        "babel": _version("babel"),
        "jinja2": _version("jinja2"),
    }


@pytest.fixture(scope="session", autouse=True)
def environment_metadata() -> dict[str, object]:
    """Write environment metadata to .benchmarks for ingestion."""
    data = collect_environment_metadata()
    (BENCHMARK_OUTPUT_DIR / "environment.json").write_text(json.dumps(data, indent=2))
    return data


@pytest.fixture(scope="session")
def formatr_env() -> Environment:
    return Environment(
        locale="en-US",
        templates={"signature": "-- {author|upper}", "footer": "{> signature} ({year})"},
    )


@pytest.fixture(scope="session")
def jinja2_env() -> Jinja2Environment:
    return Jinja2Environment(autoescape=False)


@pytest.fixture(scope="session")
def small_context() -> dict[str, object]:
    return {
        "name": "Benchmark",
        "user": {"name": "  ada lovelace  "},
        "count": 3,
        "title": "Notes on the Analytical Engine",
        "author": "ada",
        "year": 1843,
        "total": 1234567.891,
        "ratio": 0.4567,
    }


@pytest.fixture(scope="session")
def large_source() -> str:
    lines = [f"row {i}: {{items.i{i}|upper}} / {{total|number:2}}" for i in range(200)]
    return "\n".join(lines)


@pytest.fixture(scope="session")
def large_context() -> dict[str, object]:
    return {"items": {f"i{i}": f"value {i}" for i in range(200)}, "total": 1234567.891}
