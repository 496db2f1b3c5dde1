"""Runtime settings loaded from environment variables."""

from functools import lru_cache
from typing import Annotated, Literal

from pydantic import Field, HttpUrl, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

NonEmptyStr = Annotated[str, Field(min_length=1)]
NonNegativeFloat = Annotated[float, Field(ge=0.0)]
PositiveInt = Annotated[int, Field(gt=0)]
BcryptRounds = Annotated[int, Field(ge=4, le=31)]


class Settings(BaseSettings):
    """Environment-driven application settings."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    reset_base_url: HttpUrl = Field(
        default="http://techstore.com/reset",
        validate_default=True,
        validation_alias="RESET_BASE_URL",
    )
    reset_message_template: NonEmptyStr = Field(
        default="Seu link: {link}",
        validation_alias="RESET_MESSAGE_TEMPLATE",
    )
    reset_token_mode: Literal["static", "issued"] = Field(
        default="static",
        validation_alias="RESET_TOKEN_MODE",
    )
    reset_static_token: NonEmptyStr = Field(default="123", validation_alias="RESET_STATIC_TOKEN")
    reset_token_ttl_seconds: PositiveInt = Field(
        default=3600,
        validation_alias="RESET_TOKEN_TTL_SECONDS",
    )
    reset_destination: Literal["email", "telephone"] = Field(
        default="email",
        validation_alias="RESET_DESTINATION",
    )
    reset_duplicate_policy: Literal["resend", "suppress_outstanding"] = Field(
        default="resend",
        validation_alias="RESET_DUPLICATE_POLICY",
    )
    notification_transport: Literal["log", "smtp", "sms"] = Field(
        default="log",
        validation_alias="NOTIFICATION_TRANSPORT",
    )
    notification_timeout_seconds: NonNegativeFloat = Field(
        default=10.0,
        validation_alias="NOTIFICATION_TIMEOUT_SECONDS",
    )
    smtp_host: NonEmptyStr | None = Field(default=None, validation_alias="SMTP_HOST")
    smtp_port: PositiveInt = Field(default=587, validation_alias="SMTP_PORT")
    smtp_username: NonEmptyStr | None = Field(default=None, validation_alias="SMTP_USERNAME")
    smtp_password: NonEmptyStr | None = Field(default=None, validation_alias="SMTP_PASSWORD")
    smtp_sender: NonEmptyStr | None = Field(default=None, validation_alias="SMTP_SENDER")
    smtp_use_tls: bool = Field(default=True, validation_alias="SMTP_USE_TLS")
    smtp_subject: NonEmptyStr = Field(
        default="Redefinição de senha",
        validation_alias="SMTP_SUBJECT",
    )
    sms_gateway_url: HttpUrl | None = Field(default=None, validation_alias="SMS_GATEWAY_URL")
    sms_gateway_token: NonEmptyStr | None = Field(
        default=None,
        validation_alias="SMS_GATEWAY_TOKEN",
    )
    database_url: NonEmptyStr | None = Field(default=None, validation_alias="DATABASE_URL")
    bcrypt_rounds: BcryptRounds = Field(default=12, validation_alias="BCRYPT_ROUNDS")
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")

    @field_validator("reset_message_template")
    @classmethod
    def _template_has_link_placeholder(cls, value: str) -> str:
        if "{link}" not in value:
            raise ValueError("RESET_MESSAGE_TEMPLATE must contain a {link} placeholder")
        return value

    @model_validator(mode="after")
    def _transport_settings_present(self) -> "Settings":
        if self.notification_transport == "smtp" and (
            self.smtp_host is None or self.smtp_sender is None
        ):
            raise ValueError("SMTP_HOST and SMTP_SENDER are required for the smtp transport")
        if self.notification_transport == "sms" and self.sms_gateway_url is None:
            raise ValueError("SMS_GATEWAY_URL is required for the sms transport")
        if self.notification_transport == "sms" and self.reset_destination != "telephone":
            raise ValueError("the sms transport requires RESET_DESTINATION=telephone")
        if self.notification_transport == "smtp" and self.reset_destination != "email":
            raise ValueError("the smtp transport requires RESET_DESTINATION=email")
        return self

    @model_validator(mode="after")
    def _issued_tokens_are_persisted(self) -> "Settings":
        # Tokens issued by a one-shot process must outlive it to be redeemable.
        if self.reset_token_mode == "issued" and self.database_url is None:
            raise ValueError("DATABASE_URL is required when RESET_TOKEN_MODE=issued")
        return self


@lru_cache(maxsize=1)
def load_settings() -> Settings:
    """Load and cache application settings."""

    return Settings()
