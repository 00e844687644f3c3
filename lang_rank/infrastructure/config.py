"""Settings loading: defaults, then the JSON config file, then explicit overrides."""

import json
import logging
import os
from dataclasses import dataclass, fields, replace
from typing import Any, Dict, List, Mapping, Optional

from lang_rank.domain.errors import ConfigurationError

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_OUTPUT = "lang-rank.svg"


@dataclass(frozen=True)
class Settings:
    """Effective settings for one run."""

    username: str = ""
    token: Optional[str] = None
    output: str = DEFAULT_OUTPUT
    include_forks: bool = False
    include_archived: bool = False
    org: bool = False
    show_other: bool = True
    exclude: tuple = ()
    top: int = 0


_FIELD_NAMES = {f.name for f in fields(Settings)}


def split_csv(value: str) -> List[str]:
    """Split a comma-separated list, trimming items and dropping blanks."""
    return [part.strip() for part in value.split(",") if part.strip()]


def load_config_file(path: Optional[str]) -> Dict[str, Any]:
    """
    Read the JSON config file.

    A missing file (or an empty path) yields an empty mapping. Keys that are not
    settings are ignored.

    Raises:
        ConfigurationError: If the file exists but cannot be read or parsed
    """
    if not path:
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            data = json.load(f)
    except FileNotFoundError:
        logger.debug(f"No config file at {path}, using defaults")
        return {}
    except OSError as e:
        raise ConfigurationError(f"read config: {e}") from e
    except ValueError as e:
        raise ConfigurationError(f"parse config: {e}") from e

    if not isinstance(data, dict):
        raise ConfigurationError(f"parse config: {path} must contain a JSON object")

    logger.info(f"Loaded config from {path}")
    return {key: value for key, value in data.items() if key in _FIELD_NAMES}


def _coerce(values: Mapping[str, Any]) -> Dict[str, Any]:
    coerced = dict(values)
    if "exclude" in coerced:
        exclude = coerced["exclude"]
        if exclude is None:
            exclude = []
        elif isinstance(exclude, str):
            exclude = split_csv(exclude)
        elif not isinstance(exclude, list) or not all(isinstance(item, str) for item in exclude):
            raise ConfigurationError(f"invalid exclude: {exclude!r} (expected a list of names)")
        coerced["exclude"] = tuple(exclude)
    if "top" in coerced:
        try:
            coerced["top"] = int(coerced["top"] or 0)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"invalid top: {coerced['top']!r}") from e
    for name in ("include_forks", "include_archived", "org", "show_other"):
        if name in coerced and coerced[name] is not None and not isinstance(coerced[name], bool):
            raise ConfigurationError(f"invalid {name}: {coerced[name]!r} (expected true or false)")
    # null in the file means "not set"
    return {key: value for key, value in coerced.items() if value is not None}


def build_settings(file_values: Mapping[str, Any], overrides: Mapping[str, Any]) -> Settings:
    """
    Merge the config file and explicitly given overrides over the defaults.

    Only keys present in ``overrides`` replace file values, so a flag that was
    not passed never clobbers the file.

    Raises:
        ConfigurationError: If no username is configured or a value has the wrong type
    """
    settings = replace(Settings(), **_coerce(file_values))
    settings = replace(settings, **_coerce(overrides))

    if not settings.output:
        settings = replace(settings, output=DEFAULT_OUTPUT)
    if not settings.token:
        settings = replace(settings, token=os.getenv("GITHUB_TOKEN") or None)

    if not settings.username:
        raise ConfigurationError("missing --username")

    return settings
