from pathlib import Path

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Shell-style KEY=value file shared with existing hook installs.
USER_CONFIG_FILE = Path.home() / ".config" / "claude-notify" / "config"


class Settings(BaseSettings):
    host: str = "127.0.0.1"
    port: int = 9876
    # Public base URL (tunnel/VPN) used in notification links; falls back to the local URL.
    remote_url: str = ""
    log_level: str = "info"

    action_ttl_seconds: float = 30 * 60
    session_retention_seconds: float = 24 * 60 * 60
    decision_ttl_seconds: float = 30 * 60
    sweep_interval_seconds: float = 5 * 60
    message_max_length: int = 300

    dispatcher: str = "iterm"  # iterm | none
    dispatch_timeout_seconds: float = 10.0

    # Permission gate (hook side)
    gate_timeout_seconds: float = Field(
        default=60.0,
        validation_alias=AliasChoices("CLAUDE_NOTIFY_GATE_TIMEOUT_SECONDS", "CLAUDE_NOTIFY_GATE_TIMEOUT"),
    )
    poll_interval_seconds: float = 2.0

    # Push service (ntfy-compatible)
    push_server: str = Field(
        default="https://ntfy.sh",
        validation_alias=AliasChoices("CLAUDE_NOTIFY_PUSH_SERVER", "CLAUDE_NOTIFY_SERVER"),
    )
    push_topic: str = Field(
        default="",
        validation_alias=AliasChoices("CLAUDE_NOTIFY_PUSH_TOPIC", "CLAUDE_NOTIFY_TOPIC"),
    )
    priority_permission: str = "high"
    priority_idle: str = "high"
    priority_done: str = "default"

    # Desktop banner via terminal-notifier, when installed
    local_notifications: bool = Field(
        default=True,
        validation_alias=AliasChoices("CLAUDE_NOTIFY_LOCAL_NOTIFICATIONS", "CLAUDE_NOTIFY_LOCAL"),
    )

    model_config = SettingsConfigDict(
        env_prefix="CLAUDE_NOTIFY_",
        # Later files win.
        env_file=(USER_CONFIG_FILE, ".env"),
        extra="ignore",
        populate_by_name=True,
    )

    @property
    def local_url(self) -> str:
        return f"http://127.0.0.1:{self.port}"

    @property
    def public_url(self) -> str:
        return (self.remote_url or self.local_url).rstrip("/")


settings = Settings()
