"""Configuration loading for git-critic.

Configuration sources are merged in priority order:
    1. Defaults (defined in CriticConfig)
    2. Global config (~/.git-critic.toml)
    3. Project config (./git-critic.toml)
    4. Explicit config file (--config)
    5. Environment variables (GIT_CRITIC_* prefix)
    6. CLI overrides (passed as kwargs)

Example:
    >>> config = load_config(severity=3)
    >>> config.severity
    3
"""

from __future__ import annotations

import os
import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Optional

from .exceptions import ConfigurationError

DEFAULT_DATABASE = "git-critic.db"


def default_profile() -> Optional[str]:
    """Return ``~/.perlcriticrc`` if it exists, else ``None``."""
    profile = Path.home() / ".perlcriticrc"
    return str(profile) if profile.exists() else None


@dataclass(frozen=True)
class CriticConfig:
    """Settings for one git-critic run.

    Attributes:
        profile: Perl::Critic profile (None = run perlcritic with --noprofile)
        severity: Minimum severity reported by the engine (1 = brutal, 5 = gentle)
        verbose: Perl::Critic verbosity template used when printing violations
        database: Path of the SQLite snapshot store
        output_format: Default encoding for detail/summary ("csv" or "json")
        perlcritic: perlcritic executable
        include_pattern: Regex selecting the files compare and --tree look at
        repo_path: Repository root (None = current directory)
    """

    profile: Optional[str] = field(default_factory=default_profile)
    severity: int = 1
    verbose: int = 11
    database: str = DEFAULT_DATABASE
    output_format: str = "json"
    perlcritic: str = "perlcritic"
    include_pattern: str = r"\.p[lm]$"
    repo_path: Optional[str] = None

    def __post_init__(self) -> None:
        if not 1 <= self.severity <= 5:
            raise ConfigurationError(
                f"severity must be between 1 and 5, got {self.severity}",
                context={"key": "severity"},
            )
        if not 1 <= self.verbose <= 11:
            raise ConfigurationError(
                f"verbose must be between 1 and 11, got {self.verbose}",
                context={"key": "verbose"},
            )
        try:
            re.compile(self.include_pattern)
        except re.error as e:
            raise ConfigurationError(
                f"include_pattern is not a valid regex: {e}",
                context={"key": "include_pattern", "value": self.include_pattern},
            )

    @property
    def file_regex(self) -> re.Pattern:
        return re.compile(self.include_pattern)


def load_config(config_file: Optional[Path] = None, **overrides) -> CriticConfig:
    """Load configuration with auto-discovery and merging.

    Args:
        config_file: Optional explicit config file path
        **overrides: Direct overrides (typically from CLI flags); None values
            are ignored so unset options keep lower-priority values

    Returns:
        Validated CriticConfig instance

    Raises:
        ConfigurationError: If a config file is invalid or missing
    """
    merged: dict = {}

    global_config = Path.home() / ".git-critic.toml"
    if global_config.exists():
        merged.update(_load_toml_file(global_config))

    project_config = Path.cwd() / "git-critic.toml"
    if project_config.exists():
        merged.update(_load_toml_file(project_config))

    if config_file is not None:
        if not config_file.exists():
            raise ConfigurationError(f"Config file not found: {config_file}")
        merged.update(_load_toml_file(config_file))

    merged.update(_load_env_vars())
    merged.update({k: v for k, v in overrides.items() if v is not None})

    known = {f.name for f in fields(CriticConfig)}
    unknown = sorted(set(merged) - known)
    if unknown:
        raise ConfigurationError(
            f"Unknown configuration keys: {', '.join(unknown)}",
            context={"keys": unknown},
        )

    return CriticConfig(**merged)


_INT_FIELDS = {"severity", "verbose"}


def _load_env_vars() -> dict[str, Any]:
    """Load configuration from GIT_CRITIC_* environment variables.

    Supported environment variables:
        GIT_CRITIC_PROFILE, GIT_CRITIC_SEVERITY, GIT_CRITIC_VERBOSE,
        GIT_CRITIC_DATABASE, GIT_CRITIC_OUTPUT_FORMAT, GIT_CRITIC_PERLCRITIC,
        GIT_CRITIC_INCLUDE_PATTERN, GIT_CRITIC_REPO_PATH
    """
    result: dict[str, Any] = {}

    for f in fields(CriticConfig):
        env_key = f"GIT_CRITIC_{f.name.upper()}"
        env_value = os.environ.get(env_key)
        if env_value is None:
            continue

        if f.name in _INT_FIELDS:
            try:
                result[f.name] = int(env_value)
            except ValueError:
                raise ConfigurationError(
                    f"Invalid {env_key}: expected an integer, got '{env_value}'"
                )
        else:
            result[f.name] = env_value

    return result


def _load_toml_file(path: Path) -> dict:
    """Load TOML file and return parsed dict.

    Raises:
        ConfigurationError: If the file cannot be parsed
    """
    try:
        import tomllib
    except ModuleNotFoundError:
        import tomli as tomllib  # type: ignore

    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Invalid config file '{path}': {e}")

    # Accept both a flat file and a [git-critic] table
    return data.get("git-critic", data)
