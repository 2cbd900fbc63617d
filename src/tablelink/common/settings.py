from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict
from dotenv import load_dotenv

# Load environment variables from .env into os.environ
load_dotenv()


class Settings(BaseSettings):
    """Application configuration settings backed by environment variables."""

    table_prefix: str = Field(
        default="",
        validation_alias="TABLE_PREFIX",
        description="Namespace prepended to every table name of a registry."
    )
    database_url: str = Field(
        default="sqlite:///tablelink.db",
        validation_alias="DATABASE_URL",
        description="SQLAlchemy URL used by backends built from settings."
    )
    default_backend: str = Field(
        default="sqlalchemy",
        validation_alias="TABLELINK_BACKEND",
        description="Name of the 'tablelink.backends' entry point used by default."
    )
    log_level: str = Field(default="INFO", validation_alias="LOG_LEVEL")
    log_json: bool = Field(
        default=False,
        validation_alias="LOG_JSON",
        description="Emit JSON log lines instead of plain text."
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore"
    )

    def configure_env(self, env: str) -> None:
        """Loads environment-specific variables and reloads settings."""
        if not env:
            return

        load_dotenv(f".env.{env}", override=True)
        new_settings = Settings()
        self.__dict__.update(new_settings.__dict__)

settings = Settings()

# Configure logging during import, leaving a host application's handlers alone
from tablelink.common.logger import configure_logging
configure_logging(
    level=settings.log_level,
    json_format=settings.log_json,
    replace_handlers=False,
)
