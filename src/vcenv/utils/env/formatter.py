# Copyright (C) 2025 Intel Corporation
# SPDX-License-Identifier: Apache-2.0

"""
Environment report formatting utilities.

Renders an EnvInfo report as a TOML document (the default) or as JSON
indented by two spaces, and decodes either format back into an EnvInfo.
Both formats use the same key names and nesting, taken from the declared
field order of the report dataclasses.

The report is always rendered completely in memory before anything is
written, so a failure never leaves partial output behind.
"""

import json
import logging
import os
from dataclasses import fields, is_dataclass
from typing import Any, Dict, TextIO, Union

import tomli_w

try:
    import tomllib  # Python 3.11+
except ImportError:
    import tomli as tomllib

from ..core.errors import ReportWriteError
from .models import EnvInfo

logger = logging.getLogger(__name__)

Output = Union[TextIO, str, os.PathLike]


def field_key(f) -> str:
    """Rendered key of a dataclass field, e.g. ``machine_type`` -> ``MachineType``."""
    if "key" in f.metadata:
        return f.metadata["key"]
    return "".join(part[:1].upper() + part[1:] for part in f.name.split("_"))


def report_to_dict(report: Any) -> Dict[str, Any]:
    """
    Convert a report (or any descriptor) to a nested dictionary.

    Keys follow the declared field order.
    """
    result = {}
    for f in fields(report):
        value = getattr(report, f.name)
        result[field_key(f)] = report_to_dict(value) if is_dataclass(value) else value
    return result


def render_toml(report: EnvInfo) -> str:
    return tomli_w.dumps(report_to_dict(report))


def render_json(report: EnvInfo) -> str:
    return json.dumps(report_to_dict(report), indent=2) + "\n"


def write_toml_settings(report: EnvInfo, output: Output) -> None:
    """Write the report as TOML. Raises ReportWriteError if the write fails."""
    _write(render_toml(report), output)


def write_json_settings(report: EnvInfo, output: Output) -> None:
    """Write the report as JSON. Raises ReportWriteError if the write fails."""
    _write(render_json(report), output)


def write_report(report: EnvInfo, output: Output, use_json: bool = False) -> None:
    """
    Write the report in the requested format.

    Args:
        report: Report to write
        output: Open text stream, or path of the file to (over)write
        use_json: Write JSON instead of TOML

    Raises:
        ReportWriteError: If the destination cannot be written
    """
    if use_json:
        write_json_settings(report, output)
    else:
        write_toml_settings(report, output)


def load_report(text: str, use_json: bool = False) -> EnvInfo:
    """
    Decode a rendered report.

    Keys missing from the document keep their default values and unknown
    keys are ignored.

    Raises:
        ValueError: If the text is not valid TOML / JSON or not a report
    """
    data = json.loads(text) if use_json else tomllib.loads(text)
    return _from_dict(EnvInfo, data)


def _from_dict(cls, data: Any):
    if not isinstance(data, dict):
        raise ValueError(f"expected a table for {cls.__name__}, got {type(data).__name__}")

    kwargs = {}
    for f in fields(cls):
        key = field_key(f)
        if key not in data:
            continue
        value = data[key]
        kwargs[f.name] = _from_dict(f.type, value) if is_dataclass(f.type) else value
    return cls(**kwargs)


def _write(content: str, output: Output) -> None:
    if output is None:
        raise ReportWriteError("no output destination for the report")

    if isinstance(output, (str, os.PathLike)):
        try:
            with open(output, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            raise ReportWriteError(f"unable to write report to {output}: {e}") from e
        return

    if not hasattr(output, "write"):
        raise ReportWriteError(f"invalid output destination for the report: {type(output).__name__}")

    name = getattr(output, "name", type(output).__name__)
    try:
        output.write(content)
        output.flush()
    except (OSError, ValueError) as e:
        # ValueError: I/O operation on closed file
        raise ReportWriteError(f"unable to write report to {name}: {e}") from e

    logger.debug(f"Wrote {len(content)} bytes of report to {name}")
