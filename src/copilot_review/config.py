from __future__ import annotations

from pathlib import Path
from typing import Any, Literal, Self

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, model_validator
from pydantic.fields import FieldInfo
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)

from copilot_review.constants import (
    DEFAULT_BASE_BRANCH,
    DEFAULT_GITIGNORE_ENTRY,
    DEFAULT_GITIGNORE_PATH,
    DEFAULT_MAX_FILE_SIZE,
    DEFAULT_MAX_FILES_PER_BATCH,
    DEFAULT_MAX_TOTAL_LINES,
    DEFAULT_OUTPUT_DIR,
)
from copilot_review.exceptions import ConfigError
from copilot_review.logging import get_logger

__all__ = [
    "CopilotReviewConfig",
    "OutputConfig",
    "PlannerConfig",
    "PROJECT_CONFIG_FILENAME",
    "get_user_config_path",
    "load_config",
]

logger = get_logger(__name__)

#: Project-level config file looked up in the working directory
PROJECT_CONFIG_FILENAME = "copilot-review.yaml"


class PlannerConfig(BaseModel):
    """Ceilings applied while packing changed files into review batches.

    Attributes:
        max_file_size: Diff line count above which a file is skipped entirely.
        max_files_per_batch: Maximum number of files in one batch.
        max_total_lines: Maximum cumulative diff lines in one batch.
    """

    model_config = ConfigDict(frozen=True)

    max_file_size: int = Field(default=DEFAULT_MAX_FILE_SIZE, gt=0)
    max_files_per_batch: int = Field(default=DEFAULT_MAX_FILES_PER_BATCH, gt=0)
    max_total_lines: int = Field(default=DEFAULT_MAX_TOTAL_LINES, gt=0)

    @model_validator(mode="after")
    def check_file_size_fits_batch(self) -> Self:
        # A file accepted by the size filter must always fit an empty batch.
        if self.max_file_size > self.max_total_lines:
            raise ValueError(
                f"max_file_size ({self.max_file_size}) must not exceed "
                f"max_total_lines ({self.max_total_lines})"
            )
        return self


class OutputConfig(BaseModel):
    """Settings for generated prompt files and ignore-file housekeeping."""

    directory: Path = Field(default_factory=lambda: Path(DEFAULT_OUTPUT_DIR))
    gitignore_path: Path = Field(default_factory=lambda: Path(DEFAULT_GITIGNORE_PATH))
    gitignore_entry: str = DEFAULT_GITIGNORE_ENTRY


class YamlConfigSource(PydanticBaseSettingsSource):
    """Custom settings source that loads from YAML files."""

    def __init__(
        self,
        settings_cls: type[BaseSettings],
        yaml_file: Path | None = None,
    ):
        super().__init__(settings_cls)
        self.yaml_file = yaml_file
        self._config_data: dict[str, Any] = (
            _read_yaml(yaml_file) if yaml_file is not None else {}
        )

    def get_field_value(
        self, field: FieldInfo, field_name: str
    ) -> tuple[Any, str, bool]:
        """Get value for a specific field from the YAML config."""
        if field_name in self._config_data:
            return self._config_data[field_name], field_name, False
        return None, field_name, False

    def __call__(self) -> dict[str, Any]:
        """Return the complete config data."""
        return self._config_data


class CopilotReviewConfig(BaseSettings):
    """Root configuration object containing all copilot-review settings."""

    model_config = SettingsConfigDict(
        env_prefix="COPILOT_REVIEW_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    planner: PlannerConfig = Field(default_factory=PlannerConfig)
    output: OutputConfig = Field(default_factory=OutputConfig)
    default_base_branch: str = DEFAULT_BASE_BRANCH
    verbosity: Literal["error", "warning", "info", "debug"] = "warning"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        """Customize the order of settings sources.

        Priority (highest to lowest):
        1. Environment variables (COPILOT_REVIEW_*)
        2. Init settings (the project YAML passed in by load_config)
        3. User YAML config (~/.config/copilot-review/config.yaml)
        4. Model defaults
        """
        return (
            env_settings,
            init_settings,
            YamlConfigSource(settings_cls, get_user_config_path()),
        )


def _read_yaml(path: Path) -> dict[str, Any]:
    """Read a YAML mapping, returning an empty dict for missing/empty files.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    if not path.exists():
        return {}
    try:
        with open(path, encoding="utf-8") as f:
            loaded = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(
            message=f"Invalid YAML in {path}: {e}",
            field=None,
            value=None,
        ) from e
    if loaded is None:
        logger.warning("config_file_empty", path=str(path))
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(
            message=f"Config file {path} must contain a mapping",
            value=loaded,
        )
    return loaded


def get_user_config_path() -> Path:
    """Get the path to the user configuration file.

    Returns:
        Path to ~/.config/copilot-review/config.yaml
    """
    return Path.home() / ".config" / "copilot-review" / "config.yaml"


def load_config(config_path: Path | None = None) -> CopilotReviewConfig:
    """Load configuration with hierarchy: defaults -> user -> project -> env.

    Args:
        config_path: Optional path to the project config file. Defaults to
            ./copilot-review.yaml in the working directory.

    Returns:
        CopilotReviewConfig instance with merged configuration.

    Raises:
        ConfigError: If configuration is invalid.
    """
    if config_path is None:
        config_path = Path.cwd() / PROJECT_CONFIG_FILENAME

    if not config_path.exists():
        logger.info("project_config_not_found", path=str(config_path))

    project_data = _read_yaml(config_path)

    try:
        return CopilotReviewConfig(**project_data)
    except ValidationError as e:
        first_error = e.errors()[0]
        field = ".".join(str(loc) for loc in first_error["loc"])
        raise ConfigError(
            message=f"Invalid configuration: {first_error['msg']}",
            field=field,
            value=first_error.get("input"),
        ) from e
