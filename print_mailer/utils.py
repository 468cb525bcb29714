"""Utility helpers shared across modules."""

from __future__ import annotations

import base64
import os
from pathlib import Path

from .errors import InputFileError

PATH_SEPARATORS = ("\\", "/")


def read_print_file(path: Path | str, encoding: str = "utf-8") -> str:
    """Re-read the whole print, ending every line with the platform line separator."""
    try:
        with open(path, "r", encoding=encoding, errors="replace") as handle:
            return "".join(line.rstrip("\r\n") + os.linesep for line in handle)
    except OSError as exc:
        raise InputFileError(f"Unable to read print file {path}: {exc}") from exc


def encode_base64(text: str) -> str:
    """UTF-8 encode then base64 encode, as SendGrid expects attachment content."""
    return base64.b64encode(text.encode("utf-8")).decode("ascii")


def attachment_filename(path: str) -> str:
    """Flatten a path into a single attachment name."""
    for separator in PATH_SEPARATORS:
        path = path.replace(separator, "_")
    return path


def resolve_display_path(app_path: str, file_name: str) -> str:
    """Join the print file onto the directory of the application path."""
    cut = max(app_path.rfind(separator) for separator in PATH_SEPARATORS)
    return app_path[: cut + 1] + file_name
