"""Load cstfmt configuration from pyproject.toml, .cstfmt.toml, or an explicit file."""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import List, Optional

from .errors import ConfigurationError

# Local config file name searched for next to (or above) each source file.
CONFIG_FILENAME = ".cstfmt.toml"

QUOTE_STYLES = ("double", "single", "preserve")

# Smallest accepted value for each integer option.
_INT_MINIMUMS = {"indent_width": 1, "max_blank_lines": 0}


@dataclass
class FormatConfig:
    """Runtime configuration for the formatter."""

    # Indentation: number of spaces per block level
    indent_width: int = 4
    # BlankLines: longest run of consecutive blank lines kept
    max_blank_lines: int = 2
    # Quotes: "double", "single", or "preserve"
    quote_style: str = "double"

    # Rule allow-list: if non-empty, only the named rules are run.
    # Valid names: "trailing_whitespace", "blank_lines", "indentation",
    # "comments", "quotes".
    # An empty list means "run all" (the default).
    enabled_rules: List[str] = field(default_factory=list)
    # Rule deny-list: named rules are always skipped.
    # Ignored when enabled_rules is non-empty.
    disabled_rules: List[str] = field(default_factory=list)

    def should_run(self, name: str) -> bool:
        """Return True if the named rule should run.

        When ``enabled_rules`` is non-empty only names in that list run.
        Otherwise names in ``disabled_rules`` are skipped.
        """
        if self.enabled_rules:
            return name in self.enabled_rules
        return name not in self.disabled_rules


def _read_toml(path: Path) -> dict:
    """Read a TOML file; return empty dict if missing or unparseable."""
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except Exception:
        return {}


def _section(data: dict) -> dict:
    """Return the [tool.cstfmt] table, falling back to top-level keys."""
    tool = data.get("tool", {})
    if not isinstance(tool, dict):
        raise ConfigurationError(f"'tool' must be a table, not {tool!r}")
    if "cstfmt" in tool:
        section = tool["cstfmt"]
        if not isinstance(section, dict):
            raise ConfigurationError(f"'tool.cstfmt' must be a table, not {section!r}")
        return section
    return {k: v for k, v in data.items() if k != "tool"}


def _apply(cfg: FormatConfig, d: dict) -> None:
    """Overlay dict values onto cfg, ignoring unknown keys."""
    types = {f.name: f.type for f in fields(cfg)}
    for key, val in d.items():
        if key not in types:
            continue
        expected = types[key]
        if expected == "int":
            ok = (
                isinstance(val, int)
                and not isinstance(val, bool)
                and val >= _INT_MINIMUMS.get(key, 0)
            )
        elif expected == "str":
            ok = isinstance(val, str)
        else:
            ok = isinstance(val, list) and all(isinstance(v, str) for v in val)
        if not ok:
            raise ConfigurationError(f"invalid value for {key!r}: {val!r}")
        setattr(cfg, key, val)
    if cfg.quote_style not in QUOTE_STYLES:
        raise ConfigurationError(f"invalid value for 'quote_style': {cfg.quote_style!r}")


def _find_config_file(start: Path) -> Optional[Path]:
    """Return the nearest .cstfmt.toml or pyproject.toml with [tool.cstfmt]."""
    for directory in (start, *start.parents):
        local = directory / CONFIG_FILENAME
        if local.is_file():
            return local
        pyproject = directory / "pyproject.toml"
        if pyproject.is_file():
            tool = _read_toml(pyproject).get("tool", {})
            if isinstance(tool, dict) and "cstfmt" in tool:
                return pyproject
    return None


def load_config(
    for_file: Optional[str] = None, config_path: Optional[Path] = None
) -> FormatConfig:
    """Load the configuration that applies to *for_file*.

    An explicit *config_path* always wins and must exist and parse. Otherwise
    the nearest config file above *for_file* (or the working directory) is
    used, and defaults apply when none is found.
    """
    cfg = FormatConfig()
    if config_path is not None:
        try:
            with open(config_path, "rb") as f:
                data = tomllib.load(f)
        except (OSError, tomllib.TOMLDecodeError) as exc:
            raise ConfigurationError(f"{config_path}: {exc}") from exc
        _apply(cfg, _section(data))
        return cfg

    start = Path(for_file).resolve().parent if for_file else Path.cwd()
    found = _find_config_file(start)
    if found is not None:
        _apply(cfg, _section(_read_toml(found)))
    return cfg
