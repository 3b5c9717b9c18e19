"""GitHub Actions workflow inputs, outputs and failure reporting."""

import sys
from collections.abc import Mapping
from pathlib import Path
from uuid import uuid4


def escape_data(value: str) -> str:
    """Escape a value for use in a workflow command."""
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def in_actions(environ: Mapping[str, str]) -> bool:
    """Check whether we are running inside a GitHub Actions job."""
    return environ.get("GITHUB_ACTIONS") == "true"


def get_input(name: str, environ: Mapping[str, str]) -> str | None:
    """Get an action input, None when unset or blank."""
    key = f"INPUT_{name.replace(' ', '_').upper()}"
    value = environ.get(key, "").strip()
    return value or None


def set_output(name: str, value: str, environ: Mapping[str, str]) -> None:
    """Set an action output for later steps."""
    if output_file := environ.get("GITHUB_OUTPUT"):
        delimiter = f"ghadelimiter_{uuid4()}"
        with Path(output_file).open("a", encoding="utf-8") as f:
            f.write(f"{name}<<{delimiter}\n{value}\n{delimiter}\n")
        return

    sys.stdout.write(f"::set-output name={name}::{escape_data(value)}\n")


def set_failed(message: str) -> None:
    """Report an error annotation for the job, the caller sets the exit code."""
    sys.stdout.write(f"::error::{escape_data(message)}\n")
