"""Locate the recipient address inside a Cybis TUTOR/CODE print.

The address is expected near the top of block 1-b: the print contains a
dashed separator line for that block and the first line after it with an
``@`` in its text column holds the address.
"""

from __future__ import annotations

import logging
from enum import Enum
from pathlib import Path
from typing import Iterable

from .errors import InputFileError
from .models import Found, NotFound, ScanResult

logger = logging.getLogger(__name__)

MARKER_LINE = (
    "     -------------------------------------------------------------------- "
    "part= 1, block=b --------------------------- "
)
ADDRESS_OFFSET = 9
SCAN_LINE_LIMIT = 130


class ScanState(Enum):
    SEEKING_MARKER = "seeking-marker"
    SEEKING_ADDRESS = "seeking-address"


class RecipientScanner:
    """Two-state line consumer that yields the first address after the marker."""

    def __init__(self, marker: str = MARKER_LINE, offset: int = ADDRESS_OFFSET) -> None:
        self.marker = marker
        self.offset = offset
        self.state = ScanState.SEEKING_MARKER

    def feed(self, line: str) -> str | None:
        """Consume one line (terminator already stripped); return the address if found."""
        if self.state is ScanState.SEEKING_MARKER:
            if line == self.marker:
                logger.debug("Found block 1-b marker")
                self.state = ScanState.SEEKING_ADDRESS
            return None

        if "@" not in line:
            return None
        address = line[self.offset:]
        if "@" not in address:
            logger.debug("Skipping line with '@' only before the address column: %r", line)
            return None
        return address

    def not_found(self, lines_read: int) -> NotFound:
        reason = "marker-missing" if self.state is ScanState.SEEKING_MARKER else "address-missing"
        return NotFound(reason=reason, lines_read=lines_read)


def scan_lines(lines: Iterable[str], max_lines: int = SCAN_LINE_LIMIT) -> ScanResult:
    """Scan at most ``max_lines`` lines for the recipient address."""
    scanner = RecipientScanner()
    lines_read = 0
    for line in lines:
        if lines_read >= max_lines:
            break
        lines_read += 1
        address = scanner.feed(line.rstrip("\r\n"))
        if address is not None:
            return Found(address=address, line_number=lines_read)
    return scanner.not_found(lines_read)


def scan_file(
    path: Path | str, *, max_lines: int = SCAN_LINE_LIMIT, encoding: str = "utf-8"
) -> ScanResult:
    """Open ``path`` and scan its first lines for the recipient address."""
    try:
        with open(path, "r", encoding=encoding, errors="replace") as handle:
            result = scan_lines(handle, max_lines=max_lines)
    except OSError as exc:
        raise InputFileError(f"Unable to read print file {path}: {exc}") from exc

    if isinstance(result, NotFound):
        logger.debug("No address in %s (%s after %s lines)", path, result.reason, result.lines_read)
    return result
