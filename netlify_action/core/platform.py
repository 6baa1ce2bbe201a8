"""GitHub Actions runner boundary.

Inputs, outputs, failure reporting and console lines all go through
``ActionPlatform`` so the rest of the action never touches process state.
"""

import os
import sys
from typing import IO, Iterable, Mapping
from uuid import uuid4

from netlify_action.config import Settings
from netlify_action.utils.debug import format_error_dump
from netlify_action.utils.logging import get_logger

logger = get_logger(__name__)

DRY_RUN_PREFIX = "[Dry run]"


def _escape_data(value: str) -> str:
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def _escape_property(value: str) -> str:
    return _escape_data(value).replace(":", "%3A").replace(",", "%2C")


def input_env_name(name: str) -> str:
    """Environment variable the runner stores an input in."""
    return f"INPUT_{name.replace(' ', '_').upper()}"


class ActionPlatform:
    """Reads inputs and reports outputs/failures for one action run."""

    def __init__(
        self,
        environ: Mapping[str, str] | None = None,
        output_path: str | None = None,
        stdout: IO[str] | None = None,
        stderr: IO[str] | None = None,
    ):
        self._environ = os.environ if environ is None else environ
        self.output_path = output_path
        self.stdout = stdout or sys.stdout
        self.stderr = stderr or sys.stderr

        self.outputs: dict[str, str] = {}
        self.failures: list[str] = []

    @classmethod
    def from_settings(cls, settings: Settings, **kwargs) -> "ActionPlatform":
        kwargs.setdefault("output_path", settings.github_output)
        return cls(**kwargs)

    @property
    def failed(self) -> bool:
        return bool(self.failures)

    def get_input(self, name: str) -> str:
        """Trimmed input value, empty when the input was not given."""
        return self._environ.get(input_env_name(name), "").strip()

    def read_inputs(self, names: Iterable[str]) -> dict[str, str]:
        return {name: self.get_input(name) for name in names}

    def write(self, line: str) -> None:
        """Write one line to the step log."""
        self.stdout.write(f"{line}\n")
        self.stdout.flush()

    def write_dry_run(self, line: str) -> None:
        self.write(f"{DRY_RUN_PREFIX} {line}")

    def report_output(self, key: str, value: str) -> None:
        """Expose a named value to later workflow steps."""
        self.outputs[key] = value

        if self.output_path:
            delimiter = f"ghadelimiter_{uuid4()}"
            with open(self.output_path, "a", encoding="utf-8") as f:
                f.write(f"{key}<<{delimiter}\n{value}\n{delimiter}\n")
        else:
            self.write(f"::set-output name={_escape_property(key)}::{_escape_data(value)}")

        logger.debug("platform.output_set", key=key)

    def report_failure(self, message: str) -> None:
        """Mark the run as failed; the process exits non-zero at the end."""
        self.failures.append(message)
        self.write(f"::error::{_escape_data(message)}")

    def dump_error(self, error: BaseException, label: str | None = None) -> None:
        """Write a serialized diagnostic of an error to stderr."""
        if label:
            self.stderr.write(f"{label}\n")
        self.stderr.write(f"{format_error_dump(error)}\n")
        self.stderr.flush()

    def fail(self, error: BaseException, label: str | None = None) -> None:
        """Dump an error and report its message as a run failure."""
        self.dump_error(error, label)
        message = getattr(error, "message", None) or str(error)
        self.report_failure(message)
