"""Configuration management module.

Resolves validator options from, in increasing precedence: dataclass
defaults, an optional TOML file, explicit arguments, and the environment.

Environment variables:
    README_PATH: README to validate, used only when no path is given
    MODULE_PATH: Module directory, overrides the README's directory
    FORMAT: document, table, or auto
    VERBOSE: "true" enables debug logging
    GITHUB_WORKSPACE: Workspace root for caller-layout scans
"""

import logging
import os
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any

try:
    import tomli  # type: ignore[import]
except ImportError:
    # Fallback for Python versions shipping tomllib
    try:
        import tomllib as tomli  # type: ignore[import]
    except ImportError as e:
        raise ImportError("toml library not available. Install with: pip install tomli") from e

from readme_validator.errors import ConfigError
from readme_validator.modules.format_detector import MarkdownFormat
from readme_validator.modules.terraform_content import ScanMode

logger = logging.getLogger(__name__)

CONFIG_TABLE = "readme_validator"
DEFAULT_CONFIG_FILE = Path(".readme-validator.toml")

LIST_FIELDS = ("provider_prefixes", "additional_sections", "additional_files")
SKIP_FIELDS = (
    "skip_sections",
    "skip_files",
    "skip_urls",
    "skip_resources",
    "skip_variables",
    "skip_outputs",
)


@dataclass
class Options:
    """Validator options.

    readme_path and module_path are absolute once resolved by ConfigManager.
    """

    readme_path: Path | None = None
    module_path: Path | None = None
    format: MarkdownFormat = MarkdownFormat.AUTO
    provider_prefixes: list[str] = field(default_factory=list)
    additional_sections: list[str] = field(default_factory=list)
    additional_files: list[str] = field(default_factory=list)
    scan_mode: ScanMode = ScanMode.MODULE
    verbose: bool = False
    skip_sections: bool = False
    skip_files: bool = False
    skip_urls: bool = False
    skip_resources: bool = False
    skip_variables: bool = False
    skip_outputs: bool = False

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Options":
        """Create options from a TOML table.

        Raises:
            ConfigError: If a key is unknown or a value has the wrong type
        """
        options = cls()
        options.apply(data)
        return options

    def apply(self, data: dict[str, Any]) -> None:
        """Overlay values onto these options, ignoring None values.

        Raises:
            ConfigError: If a key is unknown or a value has the wrong type
        """
        known = {f.name for f in fields(self)}
        for key, value in data.items():
            if value is None:
                continue
            if key not in known:
                raise ConfigError(f"Unknown configuration key: {key}")
            setattr(self, key, _coerce(key, value))


def _coerce(key: str, value: Any) -> Any:
    """Convert a raw configuration value to the type of its field."""
    if key in ("readme_path", "module_path"):
        return Path(value)
    if key == "format":
        if isinstance(value, MarkdownFormat):
            return value
        try:
            return MarkdownFormat.from_string(str(value))
        except ValueError as e:
            raise ConfigError(str(e)) from e
    if key == "scan_mode":
        if isinstance(value, ScanMode):
            return value
        try:
            return ScanMode(str(value).strip().lower())
        except ValueError as e:
            raise ConfigError(f"Unknown scan mode: {value}") from e
    if key in LIST_FIELDS:
        if isinstance(value, str) or not isinstance(value, list | tuple):
            raise ConfigError(f"{key} must be a list of strings")
        return [str(item) for item in value]
    if key == "verbose" or key in SKIP_FIELDS:
        if not isinstance(value, bool):
            raise ConfigError(f"{key} must be true or false")
        return value
    return value


class ConfigManager:
    """Resolve validator Options from file, arguments, and environment."""

    @classmethod
    def load_config(cls, config_path: str | Path | None = None) -> Options:
        """Load options from a TOML file.

        The ``[readme_validator]`` table is read. Without an explicit path,
        ``.readme-validator.toml`` in the working directory is used if present.

        Args:
            config_path: TOML file path (optional)

        Returns:
            Options with file values over defaults

        Raises:
            ConfigError: If an explicit file is missing or any file is invalid
        """
        if config_path is None:
            path = DEFAULT_CONFIG_FILE
            if not path.exists():
                logger.debug("Config file not found, using defaults")
                return Options()
        else:
            path = Path(config_path)
            if not path.exists():
                raise ConfigError(f"Config file not found: {path}")

        try:
            with open(path, "rb") as f:
                data = tomli.load(f)  # type: ignore[attr-defined]
        except (OSError, tomli.TOMLDecodeError) as e:
            raise ConfigError(f"Failed to load config: {e}") from e

        logger.debug("Loaded config from: %s", path)
        return Options.from_dict(data.get(CONFIG_TABLE, {}))

    @classmethod
    def resolve(
        cls,
        config_path: str | Path | None = None,
        environ: dict[str, str] | None = None,
        **overrides: Any,
    ) -> Options:
        """Resolve final options.

        Args:
            config_path: TOML file path (optional)
            environ: Environment mapping, defaults to os.environ
            **overrides: Explicit option values; None means "not given"

        Returns:
            Options with absolute readme_path and module_path

        Raises:
            ConfigError: If no README path can be determined or a value is invalid
        """
        options = cls.load_config(config_path)
        options.apply(overrides)
        return cls.finalize(options, environ)

    @classmethod
    def finalize(cls, options: Options, environ: dict[str, str] | None = None) -> Options:
        """Apply the environment to options and make both paths absolute.

        Args:
            options: Options built from defaults, file, and arguments
            environ: Environment mapping, defaults to os.environ

        Returns:
            The same Options instance, resolved

        Raises:
            ConfigError: If no README path can be determined
        """
        env = os.environ if environ is None else environ
        cls._apply_environment(options, env)

        if options.readme_path is None:
            raise ConfigError(
                "README path not provided and README_PATH environment variable not set"
            )
        options.readme_path = options.readme_path.expanduser().resolve()
        options.module_path = cls._resolve_module_path(options, env)

        logger.debug(
            "Resolved options: readme=%s module=%s format=%s scan_mode=%s",
            options.readme_path,
            options.module_path,
            options.format.value,
            options.scan_mode.value,
        )
        return options

    @staticmethod
    def _apply_environment(options: Options, env) -> None:
        if options.readme_path is None and env.get("README_PATH"):
            options.readme_path = Path(env["README_PATH"])
            if env.get("VERBOSE") == "true":
                logger.info("Using README_PATH from environment: %s", options.readme_path)

        if env.get("MODULE_PATH"):
            options.module_path = Path(env["MODULE_PATH"])

        env_format = env.get("FORMAT")
        if env_format:
            try:
                options.format = MarkdownFormat.from_string(env_format)
            except ValueError:
                logger.warning(
                    "Unknown format in FORMAT environment variable: %s, using auto-detection",
                    env_format,
                )
                options.format = MarkdownFormat.AUTO

        if env.get("VERBOSE") == "true":
            options.verbose = True

    @staticmethod
    def _resolve_module_path(options: Options, env) -> Path:
        if options.module_path is not None:
            return options.module_path.expanduser().resolve()
        if options.scan_mode is ScanMode.CALLER and env.get("GITHUB_WORKSPACE"):
            return Path(env["GITHUB_WORKSPACE"]).resolve()
        return options.readme_path.parent


__all__ = ["ConfigManager", "Options"]
