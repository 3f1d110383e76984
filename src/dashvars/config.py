"""Configuration management for the dashvars CLI.

The resolution engine itself reads no configuration; these settings only
shape logging and how the CLI presents results.
"""

import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

import yaml


class OutputFormat(str, Enum):
    """How the CLI renders results on stdout."""

    TABLE = "table"  # Rich tables
    JSON = "json"  # Machine readable


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: str = "WARNING"
    format: str = "console"  # "console" or "json"
    file: Path | None = None


@dataclass
class OutputConfig:
    """Presentation settings for CLI output."""

    format: OutputFormat = OutputFormat.TABLE
    show_dependencies: bool = True


@dataclass
class DashvarsConfig:
    """
    Complete configuration for the dashvars CLI.

    This combines all configuration sections.
    """

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def from_file(cls, config_path: Path) -> "DashvarsConfig":
        """
        Load configuration from YAML file.

        Args:
            config_path: Path to YAML config file

        Returns:
            DashvarsConfig instance

        Raises:
            ValueError: If the file is not valid YAML, not a mapping, or has
                unknown keys in a section
        """
        try:
            with open(config_path) as f:
                data = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in configuration file {config_path}: {e}") from e

        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ValueError(
                f"Invalid configuration file structure in {config_path}: "
                f"expected dictionary, got {type(data).__name__}"
            )

        try:
            logging_data = dict(data.get("logging") or {})
            if logging_data.get("file"):
                logging_data["file"] = Path(logging_data["file"])
            logging = LoggingConfig(**logging_data)

            output_data = dict(data.get("output") or {})
            if "format" in output_data:
                output_data["format"] = OutputFormat(output_data["format"])
            output = OutputConfig(**output_data)
        except TypeError as e:
            # Unknown keys or a section that is not a mapping
            raise ValueError(f"Invalid configuration in {config_path}: {e}") from e

        return cls(logging=logging, output=output)

    def to_file(self, config_path: Path) -> None:
        """
        Save configuration to YAML file.

        Args:
            config_path: Path to save config file
        """
        data = {
            "logging": {
                k: str(v) if isinstance(v, Path) else v
                for k, v in self.logging.__dict__.items()
                if v is not None
            },
            "output": {
                k: v.value if isinstance(v, Enum) else v for k, v in self.output.__dict__.items()
            },
        }

        config_path.parent.mkdir(parents=True, exist_ok=True)

        with open(config_path, "w") as f:
            yaml.dump(data, f, default_flow_style=False, sort_keys=False)

    @classmethod
    def from_env(cls) -> "DashvarsConfig":
        """
        Create configuration from environment variables.

        Environment variables:
            DASHVARS_LOG_LEVEL: Logging level (default: WARNING)
            DASHVARS_LOG_FORMAT: console or json (default: console)
            DASHVARS_LOG_FILE: Optional log file path
            DASHVARS_OUTPUT_FORMAT: table or json (default: table)

        Returns:
            DashvarsConfig instance

        Raises:
            ValueError: If DASHVARS_OUTPUT_FORMAT is not a known format
        """
        log_file = os.environ.get("DASHVARS_LOG_FILE")

        logging_config = LoggingConfig(
            level=os.environ.get("DASHVARS_LOG_LEVEL", "WARNING"),
            format=os.environ.get("DASHVARS_LOG_FORMAT", "console"),
            file=Path(log_file) if log_file else None,
        )

        output_config = OutputConfig(
            format=OutputFormat(os.environ.get("DASHVARS_OUTPUT_FORMAT", "table")),
        )

        return cls(logging=logging_config, output=output_config)


def load_config(config_file: Path | None = None) -> DashvarsConfig:
    """
    Load configuration from file or environment variables.

    Args:
        config_file: Optional path to YAML config file

    Returns:
        DashvarsConfig instance

    Raises:
        FileNotFoundError: If config_file is specified but doesn't exist
    """
    if config_file:
        if not config_file.exists():
            raise FileNotFoundError(f"Configuration file not found: {config_file}")
        return DashvarsConfig.from_file(config_file)
    return DashvarsConfig.from_env()
