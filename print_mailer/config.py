"""Configuration management for the print mailer."""

from __future__ import annotations

import codecs

from dotenv import load_dotenv
from pydantic import Field, HttpUrl, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .errors import ConfigError
from .models import SenderConfig

DEFAULT_OPERATOR_PROMPT = "Operator> "

# Load .env early so BaseSettings can pick values up seamlessly.
load_dotenv()


class Settings(BaseSettings):
    """App configuration derived from environment variables."""

    sendgrid_api_key: str | None = Field(None, alias="SENDGRID_API_KEY")
    sender_email: str | None = Field(None, alias="SENDER_EMAIL")
    sender_name: str | None = Field(None, alias="SENDER_NAME")
    sendgrid_base_url: HttpUrl = Field("https://api.sendgrid.com", alias="SENDGRID_BASE_URL")

    mail_subject: str = Field("PLATO print", alias="MAIL_SUBJECT")
    mail_body: str = Field("See attached file.", alias="MAIL_BODY")

    startup_delay_seconds: float = Field(1.0, alias="STARTUP_DELAY_SECONDS", ge=0)
    scan_line_limit: int = Field(130, alias="SCAN_LINE_LIMIT", gt=0)
    print_file_encoding: str = Field("utf-8", alias="PRINT_FILE_ENCODING")
    operator_prompt: str = Field(DEFAULT_OPERATOR_PROMPT, alias="OPERATOR_PROMPT")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    @field_validator("sendgrid_api_key", "sender_email", "sender_name", mode="before")
    @classmethod
    def _empty_str_to_none(cls, value):
        if isinstance(value, str) and value.strip() == "":
            return None
        return value

    @field_validator("print_file_encoding", mode="after")
    @classmethod
    def _known_encoding(cls, value):
        try:
            codecs.lookup(value)
        except LookupError as exc:
            raise ValueError(f"Unknown encoding: {value}") from exc
        return value

    @field_validator("sender_email", mode="after")
    @classmethod
    def _normalize_sender_email(cls, value):
        if value is None:
            return value
        return value.strip()

    @property
    def api_base_url(self) -> str:
        return str(self.sendgrid_base_url).rstrip("/")

    def sender_config(self) -> SenderConfig:
        """Return the sender identity, failing fast when any part is missing."""
        required = {
            "SENDGRID_API_KEY": self.sendgrid_api_key,
            "SENDER_EMAIL": self.sender_email,
            "SENDER_NAME": self.sender_name,
        }
        missing = [name for name, value in required.items() if not value]
        if missing:
            raise ConfigError(f"Missing mail configuration: {', '.join(missing)}")
        return SenderConfig(
            api_key=self.sendgrid_api_key,
            email=self.sender_email,
            name=self.sender_name,
        )
