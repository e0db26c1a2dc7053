"""
Configuration for SmartNotes.

Supports loading from:
1. Environment variables (highest priority)
2. YAML config file
3. Default values (fallback)
"""

import os
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv
from pydantic import BaseModel, Field


class LLMConfig(BaseModel):
    """Text-transform backend configuration."""

    provider: str = "ollama"  # ollama, openai
    model: str = "llama3.1:8b"
    base_url: str = "http://localhost:11434"
    api_key: str | None = None
    temperature: float = 0.0
    max_tokens: int = 2000
    timeout: float = 120.0


class StoreConfig(BaseModel):
    """Durable note store configuration."""

    backend: str = "sqlite"
    path: str = "data/smartnotes.db"


class BlobStoreConfig(BaseModel):
    """Avatar blob store configuration."""

    root_dir: str = "data/blobs"
    bucket: str = "avatars"
    public_base_url: str = "http://localhost:8000/static"


class EngineConfig(BaseModel):
    """Reconciliation engine tuning."""

    save_delay_seconds: float = 1.0
    default_title: str = "New Note"


class SessionConfig(BaseModel):
    """Local session used by the bundled server."""

    user_id: str | None = None
    email: str = ""
    name: str = "SmartNotes User"
    access_token: str | None = None


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    log_to_file: bool = False
    log_dir: str = "logs"
    file_rotation: str = "10 MB"
    file_retention: str = "7 days"
    compression: str = "zip"
    serialize: bool = True


class Config(BaseModel):
    """Main configuration."""

    llm: LLMConfig = Field(default_factory=LLMConfig)
    store: StoreConfig = Field(default_factory=StoreConfig)
    blob_store: BlobStoreConfig = Field(default_factory=BlobStoreConfig)
    engine: EngineConfig = Field(default_factory=EngineConfig)
    session: SessionConfig = Field(default_factory=SessionConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @classmethod
    def from_env(cls, env_file: str | Path | None = None) -> "Config":
        """
        Load configuration from environment variables.

        Priority: .env file -> system environment variables -> defaults

        Args:
            env_file: Optional path to .env file (default: .env in project root)

        Returns:
            Config instance

        Environment variables:
            SMARTNOTES_LLM_PROVIDER: LLM provider (ollama, openai)
            SMARTNOTES_LLM_MODEL: LLM model name
            SMARTNOTES_LLM_BASE_URL: LLM base URL
            SMARTNOTES_LLM_API_KEY: LLM API key (for OpenAI)
            SMARTNOTES_STORE_BACKEND: Note store backend (sqlite)
            SMARTNOTES_STORE_PATH: SQLite database path
            SMARTNOTES_BLOB_ROOT_DIR: Directory for uploaded avatars
            SMARTNOTES_SAVE_DELAY_SECONDS: Debounce delay for note saves
            SMARTNOTES_USER_ID: Owner id of the local session
            SMARTNOTES_LOG_LEVEL: Log level
        """
        # Load .env file if provided or exists
        if env_file:
            load_dotenv(env_file)
        elif Path(".env").exists():
            load_dotenv()

        def get_env(key: str, default: Any = None) -> Any:
            """Get environment variable with type conversion."""
            value = os.getenv(key)
            if value is None or value == "":
                return default
            if isinstance(default, bool):
                return str(value).lower() in ("true", "1", "yes")
            if isinstance(default, int):
                return int(value)
            if isinstance(default, float):
                return float(value)
            return value

        return cls(
            llm=LLMConfig(
                provider=get_env("SMARTNOTES_LLM_PROVIDER", "ollama"),
                model=get_env("SMARTNOTES_LLM_MODEL", "llama3.1:8b"),
                base_url=get_env("SMARTNOTES_LLM_BASE_URL", "http://localhost:11434"),
                api_key=get_env("SMARTNOTES_LLM_API_KEY"),
                temperature=get_env("SMARTNOTES_LLM_TEMPERATURE", 0.0),
                max_tokens=get_env("SMARTNOTES_LLM_MAX_TOKENS", 2000),
                timeout=get_env("SMARTNOTES_LLM_TIMEOUT", 120.0),
            ),
            store=StoreConfig(
                backend=get_env("SMARTNOTES_STORE_BACKEND", "sqlite"),
                path=get_env("SMARTNOTES_STORE_PATH", "data/smartnotes.db"),
            ),
            blob_store=BlobStoreConfig(
                root_dir=get_env("SMARTNOTES_BLOB_ROOT_DIR", "data/blobs"),
                bucket=get_env("SMARTNOTES_BLOB_BUCKET", "avatars"),
                public_base_url=get_env(
                    "SMARTNOTES_BLOB_PUBLIC_BASE_URL", "http://localhost:8000/static"
                ),
            ),
            engine=EngineConfig(
                save_delay_seconds=get_env("SMARTNOTES_SAVE_DELAY_SECONDS", 1.0),
                default_title=get_env("SMARTNOTES_DEFAULT_TITLE", "New Note"),
            ),
            session=SessionConfig(
                user_id=get_env("SMARTNOTES_USER_ID"),
                email=get_env("SMARTNOTES_USER_EMAIL", ""),
                name=get_env("SMARTNOTES_USER_NAME", "SmartNotes User"),
                access_token=get_env("SMARTNOTES_ACCESS_TOKEN"),
            ),
            logging=LoggingConfig(
                level=get_env("SMARTNOTES_LOG_LEVEL", "INFO"),
                log_to_file=get_env("SMARTNOTES_LOG_TO_FILE", False),
                log_dir=get_env("SMARTNOTES_LOG_DIR", "logs"),
                file_rotation=get_env("SMARTNOTES_LOG_FILE_ROTATION", "10 MB"),
                file_retention=get_env("SMARTNOTES_LOG_FILE_RETENTION", "7 days"),
                compression=get_env("SMARTNOTES_LOG_COMPRESSION", "zip"),
                serialize=get_env("SMARTNOTES_LOG_SERIALIZE", True),
            ),
        )

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> "Config":
        """
        Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file

        Returns:
            Config instance

        Raises:
            FileNotFoundError: If YAML file doesn't exist
            yaml.YAMLError: If YAML is invalid
        """
        yaml_path = Path(yaml_path)
        if not yaml_path.exists():
            raise FileNotFoundError(f"Config file not found: {yaml_path}")

        with open(yaml_path) as f:
            data = yaml.safe_load(f) or {}

        return cls(**data)

    @classmethod
    def from_env_or_yaml(
        cls, yaml_path: str | Path | None = None, env_file: str | Path | None = None
    ) -> "Config":
        """
        Load configuration with priority: env vars > YAML > defaults.

        Args:
            yaml_path: Optional path to YAML config
            env_file: Optional path to .env file

        Returns:
            Config instance
        """
        if yaml_path and Path(yaml_path).exists():
            with open(yaml_path) as f:
                config_dict = yaml.safe_load(f) or {}
        else:
            config_dict = {}

        env_config = cls.from_env(env_file=env_file)

        # Env sections that differ from the defaults override YAML sections
        final_dict = {**config_dict}
        default = cls()
        for section in ("llm", "store", "blob_store", "engine", "session", "logging"):
            env_section = getattr(env_config, section)
            if env_section != getattr(default, section):
                final_dict[section] = env_section.model_dump()

        return cls(**final_dict) if final_dict else env_config


# Default config instance
default_config = Config()
