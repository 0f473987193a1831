"""
Configuration management for code building.

Handles loading and merging configuration from JSON files,
providing defaults and validation for builder settings.
"""

import json
from dataclasses import asdict, dataclass, field, fields
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..logging_config import get_logger
from .errors import CodeBuilderError

logger = get_logger(__name__)

SUPPORTED_LINE_ENDINGS = {"\n", "\r\n"}

# Expected type of each setting; None is accepted for the optional ones
FIELD_TYPES = {
    "use_tabs": (bool, False),
    "indent_size": (int, False),
    "indent_string": (str, True),
    "line_ending": (str, False),
    "template_dir": (str, True),
    "header_comment": (str, True),
    "custom": (dict, False),
}


class ConfigError(CodeBuilderError):
    """Exception raised for configuration-related errors."""

    pass


@dataclass
class BuilderConfig:
    """Settings for a CxxBuilder and the files it produces."""

    # Code style settings
    use_tabs: bool = True
    indent_size: int = 4
    indent_string: Optional[str] = None  # overrides use_tabs/indent_size
    line_ending: str = "\n"

    # Template settings
    template_dir: Optional[str] = None

    # Emitted as a block comment at the top of generated files
    header_comment: Optional[str] = None

    # Unknown keys from configuration files
    custom: Dict[str, Any] = field(default_factory=dict)

    def resolved_indent_string(self) -> str:
        """Return the string used for one indentation level."""
        if self.indent_string is not None:
            return self.indent_string
        if self.use_tabs:
            return "\t"
        return " " * self.indent_size


class ConfigManager:
    """Manages configuration loading and merging."""

    def __init__(self):
        """Initialize configuration manager."""
        self._defaults: Dict[str, Any] = asdict(BuilderConfig())

    def get_config(
        self,
        custom_config: Optional[Dict[str, Any]] = None,
        config_file: Optional[Union[str, Path]] = None,
    ) -> BuilderConfig:
        """
        Get complete configuration.

        Args:
            custom_config: Custom configuration overrides
            config_file: Path to JSON configuration file

        Returns:
            Merged configuration
        """
        base_config = dict(self._defaults)
        base_config["custom"] = {}

        if config_file:
            base_config.update(self._load_config_file(config_file))

        if custom_config:
            base_config.update(custom_config)

        return self._dict_to_config(base_config)

    def _load_config_file(self, config_path: Union[str, Path]) -> Dict[str, Any]:
        """Load configuration from JSON file."""
        path = Path(config_path)

        if not path.exists():
            logger.error("Configuration file not found: %s", path)
            raise ConfigError(f"Configuration file not found: {path}")

        if path.suffix.lower() != ".json":
            logger.error("Configuration file is not JSON: %s", path)
            raise ConfigError(f"Configuration file must be JSON: {path}")

        try:
            with path.open("r", encoding="utf-8") as f:
                config = json.load(f)
        except json.JSONDecodeError as e:
            logger.error("Invalid JSON in configuration file %s: %s", path, e)
            raise ConfigError(
                f"Invalid JSON in configuration file {path}: {e}"
            ) from e
        except OSError as e:
            logger.error("Failed to read configuration file %s: %s", path, e)
            raise ConfigError(f"Failed to load configuration file {path}: {e}") from e

        if not isinstance(config, dict):
            logger.error("Configuration file is not a JSON object: %s", path)
            raise ConfigError(
                f"Configuration file must contain a JSON object: {path}"
            )

        logger.debug("Loaded configuration from %s", path)
        return config

    def _dict_to_config(self, config_dict: Dict[str, Any]) -> BuilderConfig:
        """Convert dictionary to BuilderConfig instance."""
        known_fields = {f.name for f in fields(BuilderConfig)}

        config_args = {}
        custom_args = {}

        for key, value in config_dict.items():
            if key in known_fields:
                config_args[key] = value
            else:
                custom_args[key] = value

        if custom_args:
            logger.warning(
                "Unknown configuration keys kept as custom settings: %s",
                ", ".join(sorted(custom_args)),
            )
            existing_custom = dict(config_args.get("custom") or {})
            existing_custom.update(custom_args)
            config_args["custom"] = existing_custom

        for key, value in config_args.items():
            self._check_type(key, value)

        return BuilderConfig(**config_args)

    @staticmethod
    def _check_type(key: str, value: Any):
        """Raise ConfigError when a setting has the wrong type."""
        expected, optional = FIELD_TYPES[key]
        if value is None and optional:
            return
        # bool is an int subclass but never a valid indent size
        if isinstance(value, expected) and not (
            expected is int and isinstance(value, bool)
        ):
            return
        logger.error("Invalid type for %s: %r", key, value)
        raise ConfigError(
            f"Configuration key {key!r} must be {expected.__name__}, "
            f"got {type(value).__name__}: {value!r}"
        )

    def save_config(self, config: BuilderConfig, output_path: Union[str, Path]):
        """Save configuration to JSON file."""
        path = Path(output_path)

        config_dict = asdict(config)
        custom = config_dict.pop("custom")
        config_dict.update(custom)

        try:
            with path.open("w", encoding="utf-8") as f:
                json.dump(config_dict, f, indent=2, ensure_ascii=False)
        except OSError as e:
            logger.error("Failed to save configuration to %s: %s", path, e)
            raise ConfigError(f"Failed to save configuration to {path}: {e}") from e

    def validate_config(self, config: BuilderConfig) -> List[str]:
        """
        Validate configuration.

        Returns:
            List of validation warnings
        """
        warnings = []

        valid_size = (
            isinstance(config.indent_size, int)
            and not isinstance(config.indent_size, bool)
            and config.indent_size > 0
        )
        if not valid_size:
            warnings.append(f"Invalid indent_size: {config.indent_size!r}")

        if config.line_ending not in SUPPORTED_LINE_ENDINGS:
            warnings.append(f"Unsupported line_ending: {config.line_ending!r}")

        if config.indent_string is not None or config.use_tabs or valid_size:
            indent_string = config.resolved_indent_string()
            if not isinstance(indent_string, str) or indent_string.strip():
                warnings.append(
                    f"indent_string should only contain whitespace: {indent_string!r}"
                )

        if config.template_dir and not Path(config.template_dir).is_dir():
            warnings.append(f"Template directory not found: {config.template_dir}")

        return warnings


# Global configuration manager instance
_config_manager = None


def get_config_manager() -> ConfigManager:
    """Get the global configuration manager instance."""
    global _config_manager
    if _config_manager is None:
        _config_manager = ConfigManager()
    return _config_manager


def load_config(
    custom_config: Optional[Dict[str, Any]] = None,
    config_file: Optional[Union[str, Path]] = None,
) -> BuilderConfig:
    """
    Convenience function to load configuration.

    Args:
        custom_config: Custom configuration overrides
        config_file: Path to JSON configuration file

    Returns:
        Merged configuration
    """
    return get_config_manager().get_config(custom_config, config_file)


# Example configuration file for reference
EXAMPLE_CONFIG = {
    "use_tabs": False,
    "indent_size": 4,
    "line_ending": "\n",
    "template_dir": "templates",
    "header_comment": "Generated file. Do not edit.",
}
