import platform
from typing import Literal, Optional

from pydantic import Field, validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from toolshim import __version__


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TOOLSHIM_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    app_name: str = Field(default="toolshim", description="Application name")
    app_version: str = Field(default=__version__, description="Application version")
    environment: Literal["development", "staging", "production"] = Field(
        default="development", description="Environment mode"
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="WARNING", description="Logging level"
    )
    log_format: Literal["json", "console"] = Field(
        default="console", description="Log output format",
        validate_default=True,
    )

    shell: Literal["auto", "posix", "cmd"] = Field(
        default="auto", description="Shell family used to run tool commands"
    )
    user_agent: str = Field(
        default=f"toolshim/{__version__} ({platform.system() or 'unknown'})",
        description="User-Agent sent by the download tool",
    )
    probe_cache: bool = Field(
        default=True, description="Remember which decompressor probed successfully"
    )

    # External tools
    cp_command: str = Field(default="cp", description="Copy tool")
    rm_command: str = Field(default="rm", description="Remove tool")
    chmod_command: str = Field(default="chmod", description="Permission tool")
    mkdir_command: str = Field(default="mkdir", description="Directory creation tool")
    rmdir_command: str = Field(default="rmdir", description="Directory removal tool")
    ls_command: str = Field(default="ls", description="Listing tool")
    find_command: str = Field(default="find", description="Recursive listing tool")
    wget_command: str = Field(default="wget", description="Download tool")
    tar_command: str = Field(default="tar", description="Tar tool")
    unzip_command: str = Field(default="unzip", description="Zip extraction tool")
    gunzip_command: str = Field(default="gunzip", description="Dedicated gzip decompressor")
    gzip_command: str = Field(default="gzip", description="Generic gzip compressor")
    bunzip2_command: str = Field(default="bunzip2", description="Bzip2 decompressor")

    @validator("log_format", pre=True)
    def validate_log_format(cls, v, values):
        if "environment" in values:
            if values["environment"] == "production":
                return "json"
        return v


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


settings = get_settings()
