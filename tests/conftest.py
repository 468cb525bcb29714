from __future__ import annotations

from pathlib import Path
from typing import Callable, Sequence

import pytest

from print_mailer.config import Settings
from print_mailer.scanner import MARKER_LINE

SETTINGS_ENV_VARS = (
    "SENDGRID_API_KEY",
    "SENDER_EMAIL",
    "SENDER_NAME",
    "SENDGRID_BASE_URL",
    "SENDGRID_TIMEOUT",
    "MAIL_SUBJECT",
    "MAIL_BODY",
    "STARTUP_DELAY_SECONDS",
    "SCAN_LINE_LIMIT",
    "PRINT_FILE_ENCODING",
    "OPERATOR_PROMPT",
    "LOG_LEVEL",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in SETTINGS_ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture()
def mail_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SENDGRID_API_KEY", "SG.test-key")
    monkeypatch.setenv("SENDER_EMAIL", "cybis@example.org")
    monkeypatch.setenv("SENDER_NAME", "Cybis Operator")


@pytest.fixture()
def settings(mail_env) -> Settings:
    return Settings(_env_file=None)


@pytest.fixture()
def write_print(tmp_path: Path) -> Callable[..., Path]:
    def _write(lines: Sequence[str], name: str = "print.txt") -> Path:
        path = tmp_path / name
        path.write_text("".join(f"{line}\n" for line in lines), encoding="utf-8")
        return path

    return _write


def sample_print(address_line: str = "         someone@example.com") -> list[str]:
    return [
        "  lesson  pmail   ",
        "  printed 17/04/05",
        MARKER_LINE,
        address_line,
        "   unit    begin",
    ]


@pytest.fixture()
def print_lines() -> Callable[..., list[str]]:
    return sample_print
