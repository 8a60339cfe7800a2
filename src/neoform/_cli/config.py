"""Configuration loading from pyproject.toml."""

import tomllib
from dataclasses import dataclass
from pathlib import Path

from neoform._build import OutputFormat


class ConfigError(Exception):
    """Error in neoform configuration."""


@dataclass(slots=True, frozen=True)
class NeoformConfig:
    """Configuration loaded from the ``[tool.neoform]`` table.

    All relative paths are resolved from the project root (directory containing pyproject.toml).
    """

    source: Path | None = None
    output: Path | None = None
    format: OutputFormat | None = None
    exclude: tuple[str, ...] = ()
    project_root: Path | None = None


def find_pyproject_toml(start_dir: Path | None = None) -> Path | None:
    """Find pyproject.toml by walking up from start_dir.

    Args:
        start_dir: Starting directory. Defaults to current working directory.

    Returns:
        Path to pyproject.toml if found, None otherwise.

    """
    current = (start_dir if start_dir is not None else Path.cwd()).resolve()
    for directory in (current, *current.parents):
        candidate = directory / "pyproject.toml"
        if candidate.is_file():
            return candidate
    return None


def _path_option(section: dict[str, object], key: str, project_root: Path) -> Path | None:
    if key not in section:
        return None
    value = section[key]
    if not isinstance(value, str):
        msg = f"Invalid [tool.neoform].{key}: expected string path"
        raise ConfigError(msg)
    path = Path(value)
    return path if path.is_absolute() else project_root / path


def _format_option(section: dict[str, object]) -> OutputFormat | None:
    if "format" not in section:
        return None
    value = section["format"]
    try:
        return OutputFormat(value)
    except ValueError:
        choices = ", ".join(f"'{member}'" for member in OutputFormat)
        msg = f"Invalid [tool.neoform].format: expected one of {choices}, got {value!r}"
        raise ConfigError(msg) from None


def _exclude_option(section: dict[str, object]) -> tuple[str, ...]:
    value = section.get("exclude", [])
    if not isinstance(value, list) or not all(isinstance(item, str) for item in value):
        msg = "Invalid [tool.neoform].exclude: expected a list of directory names"
        raise ConfigError(msg)
    return tuple(value)


def load_config(pyproject_path: Path) -> NeoformConfig:
    """Load and validate [tool.neoform] config from pyproject.toml.

    Args:
        pyproject_path: Path to pyproject.toml

    Returns:
        Parsed NeoformConfig

    Raises:
        ConfigError: If the configuration is invalid

    """
    project_root = pyproject_path.parent

    with pyproject_path.open("rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {pyproject_path}: {e}"
            raise ConfigError(msg) from e

    section = data.get("tool", {}).get("neoform", {})
    if not isinstance(section, dict):
        msg = "Invalid [tool.neoform]: expected a table"
        raise ConfigError(msg)
    if not section:
        return NeoformConfig(project_root=project_root)

    unknown = sorted(set(section) - {"source", "output", "format", "exclude"})
    if unknown:
        msg = f"Unknown [tool.neoform] keys: {', '.join(unknown)}"
        raise ConfigError(msg)

    return NeoformConfig(
        source=_path_option(section, "source", project_root),
        output=_path_option(section, "output", project_root),
        format=_format_option(section),
        exclude=_exclude_option(section),
        project_root=project_root,
    )


def get_config(start_dir: Path | None = None) -> NeoformConfig:
    """Get config from pyproject.toml in the given directory or its parents.

    Returns:
        NeoformConfig (may be empty if no pyproject.toml or no [tool.neoform] section)

    """
    pyproject_path = find_pyproject_toml(start_dir)
    if pyproject_path is None:
        return NeoformConfig()
    return load_config(pyproject_path)
