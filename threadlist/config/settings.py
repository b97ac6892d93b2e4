from pydantic import ConfigDict, Field, SecretStr
from pydantic_settings import BaseSettings


class DiscordSettings(BaseSettings):
    """Discord connection settings"""

    token: SecretStr = Field(
        default=SecretStr(""), description="Discord bot token"
    )
    guild_id: int | None = Field(
        default=None,
        description="Guild to sync slash commands to (syncs globally if None)",
    )
    sync_commands: bool = Field(
        default=True, description="Sync slash commands on startup"
    )

    model_config = ConfigDict(env_prefix="DISCORD_")  # type: ignore[assignment,typeddict-unknown-key]


class ThreadListSettings(BaseSettings):
    """Thread list aggregation settings"""

    channel_name: str = Field(
        default="thread-list", description="Name of the per-category output channel"
    )
    title: str = Field(
        default="Recently Active Threads", description="Title of the summary"
    )
    placeholder: str = Field(
        default="Active Threads:",
        description="Body of a freshly created summary message before the first edit",
    )
    ignored_categories: list[str] = Field(
        default_factory=lambda: ["Voice Channels"],
        description="Category names that are never aggregated (exact match)",
    )
    max_concurrent_fetches: int = Field(
        default=10,
        description="Maximum concurrent most-recent-message probes per refresh",
    )
    timestamp_format: str = Field(
        default="%Y-%m-%d %H:%M UTC",
        description="strftime pattern for 'last active' timestamps",
    )

    model_config = ConfigDict(env_prefix="THREAD_LIST_")  # type: ignore[assignment,typeddict-unknown-key]


class DatabaseSettings(BaseSettings):
    """Tracked-thread database settings"""

    url: str = Field(
        default="sqlite:///tracked_threads.db",
        description="SQLAlchemy connection URL",
    )
    enabled: bool = Field(default=True, description="Enable opt-in thread tracking")

    model_config = ConfigDict(env_prefix="DATABASE_")  # type: ignore[assignment,typeddict-unknown-key]


class Settings(BaseSettings):
    """Main application settings"""

    environment: str = Field(
        default="development",
        description="Application environment (development, production)",
    )
    discord: DiscordSettings = Field(default_factory=DiscordSettings)
    thread_list: ThreadListSettings = Field(default_factory=ThreadListSettings)
    database: DatabaseSettings = Field(default_factory=DatabaseSettings)
    debug: bool = False
    log_level: str = "INFO"

    model_config = ConfigDict(
        env_file=".env", extra="ignore", env_file_encoding="utf-8"
    )  # type: ignore[assignment,typeddict-unknown-key]
