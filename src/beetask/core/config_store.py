"""Workspace settings data structures and loading.

Settings are resolved per workspace from, in order of precedence:
- <workspace>/.beetask/config.toml
- [tool.beetask] in <workspace>/pyproject.toml
- built-in defaults
"""

import sys
import tomllib
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import tomlkit

SETTING_KEYS = ("python_path", "beeware_path")

DEFAULT_BEEWARE_PATH = "briefcase"

SettingSource = Literal["config.toml", "pyproject.toml", "default"]


@dataclass(frozen=True)
class WorkspaceSettings:
    """Immutable settings for one workspace.

    Attributes:
        python_path: Interpreter that runs the toolchain and owns the installed modules
        beeware_path: Toolchain module name (run with -m) or path to a toolchain script
    """

    python_path: str
    beeware_path: str

    @staticmethod
    def defaults() -> "WorkspaceSettings":
        return WorkspaceSettings(python_path=sys.executable, beeware_path=DEFAULT_BEEWARE_PATH)


class ConfigStore(ABC):
    """Abstract interface for workspace settings access.

    Provides dependency injection for settings, enabling in-memory
    implementations for tests without touching the filesystem.
    """

    @abstractmethod
    def load(self, workspace: Path) -> WorkspaceSettings:
        """Load effective settings for workspace.

        Raises:
            ValueError: If a settings file is malformed or holds a non-string value
        """
        ...

    @abstractmethod
    def sources(self, workspace: Path) -> dict[str, SettingSource]:
        """Report where each effective setting came from, keyed by setting name."""
        ...

    @abstractmethod
    def set_value(self, workspace: Path, key: str, value: str) -> None:
        """Persist one setting to the workspace config file.

        Raises:
            ValueError: If key is not one of SETTING_KEYS
        """
        ...

    @abstractmethod
    def path(self, workspace: Path) -> Path:
        """Get the path to the workspace config file (for messages and debugging)."""
        ...


def _read_toml(path: Path) -> dict:
    if not path.exists():
        return {}
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"Malformed TOML in {path}: {e}") from e


def _string_values(data: dict, origin: Path) -> dict[str, str]:
    values: dict[str, str] = {}
    for key in SETTING_KEYS:
        if key not in data:
            continue
        value = data[key]
        if not isinstance(value, str):
            raise ValueError(f"Setting '{key}' in {origin} must be a string")
        values[key] = value
    return values


class RealConfigStore(ConfigStore):
    """Production implementation reading .beetask/config.toml and pyproject.toml."""

    def path(self, workspace: Path) -> Path:
        return workspace / ".beetask" / "config.toml"

    def _layers(self, workspace: Path) -> list[tuple[SettingSource, dict[str, str]]]:
        pyproject_path = workspace / "pyproject.toml"
        pyproject = _read_toml(pyproject_path).get("tool", {}).get("beetask", {})
        config_path = self.path(workspace)
        return [
            ("config.toml", _string_values(_read_toml(config_path), config_path)),
            ("pyproject.toml", _string_values(pyproject, pyproject_path)),
        ]

    def load(self, workspace: Path) -> WorkspaceSettings:
        defaults = WorkspaceSettings.defaults()
        resolved = {"python_path": defaults.python_path, "beeware_path": defaults.beeware_path}
        # Lowest precedence first so later layers win
        for _, values in reversed(self._layers(workspace)):
            resolved.update(values)
        return WorkspaceSettings(**resolved)

    def sources(self, workspace: Path) -> dict[str, SettingSource]:
        result: dict[str, SettingSource] = {key: "default" for key in SETTING_KEYS}
        for source, values in reversed(self._layers(workspace)):
            for key in values:
                result[key] = source
        return result

    def set_value(self, workspace: Path, key: str, value: str) -> None:
        """Write one key to .beetask/config.toml, preserving existing formatting.

        Creates the config directory if it doesn't exist. Other keys and
        comments already in the file are left untouched.
        """
        if key not in SETTING_KEYS:
            expected = ", ".join(SETTING_KEYS)
            raise ValueError(f"Unknown setting '{key}' (expected one of: {expected})")

        config_path = self.path(workspace)
        config_path.parent.mkdir(parents=True, exist_ok=True)

        if config_path.exists():
            doc = tomlkit.parse(config_path.read_text(encoding="utf-8"))
        else:
            doc = tomlkit.document()

        doc[key] = value
        config_path.write_text(tomlkit.dumps(doc), encoding="utf-8")
