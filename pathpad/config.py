from __future__ import annotations

import dataclasses as dc
import logging
import os
import pathlib
import typing as t

try:
    import tomllib  # py311+
except ModuleNotFoundError:  # pragma: no cover
    import tomli as tomllib  # type: ignore[no-redef]

from .errors import InvalidInputError, PathPadIOError

LOG = logging.getLogger("pathpad.config")

PathLikeStr = str | os.PathLike[str]
ConfigDict = dict[str, t.Any]

STORES = ("auto", "process", "registry")
SCOPES = ("user", "machine")


def platform_config_default() -> pathlib.Path:
    """
    Determine the default config path by OS:
      - Windows: %APPDATA%/pathpad/config.toml
      - Others:  ~/.config/pathpad/config.toml
    """
    if os.name == "nt":
        appdata = os.environ.get("APPDATA") or os.path.expanduser("~\\AppData\\Roaming")
        return pathlib.Path(appdata) / "pathpad" / "config.toml"
    else:
        return pathlib.Path.home() / ".config" / "pathpad" / "config.toml"


def platform_history_default() -> pathlib.Path:
    """$XDG_CONFIG_HOME/pathpad/.path_history, else ~/.config/pathpad/.path_history."""
    xdg = os.environ.get("XDG_CONFIG_HOME")
    base = pathlib.Path(xdg) if xdg else pathlib.Path.home() / ".config"
    return base / "pathpad" / ".path_history"


@dc.dataclass
class Settings:
    variable: str = "PATH"
    store: str = "auto"             # auto, process, registry
    scope: str = "user"             # registry scope only
    history_file: str | None = None
    record_history: bool = False    # same as passing -H to every mutating command
    source: pathlib.Path | None = None

    def history_path(self) -> pathlib.Path:
        if self.history_file:
            return pathlib.Path(os.path.expanduser(self.history_file))
        return platform_history_default()


def resolve_config_path(path: PathLikeStr | None) -> tuple[pathlib.Path, bool]:
    """
    Resolve the config file (explicit path -> PATHPAD_CONFIG env -> platform default).
    The flag tells whether the location was asked for explicitly.
    """
    if path:
        return pathlib.Path(path), True
    env = os.environ.get("PATHPAD_CONFIG")
    if env:
        return pathlib.Path(env), True
    return platform_config_default(), False


def load_config(path: PathLikeStr | None = None) -> Settings:
    """
    Load settings from TOML. A missing default config just means defaults;
    a missing file that was named explicitly is an error.
    """
    candidate, explicit = resolve_config_path(path)
    if not candidate.exists():
        if explicit:
            raise PathPadIOError(f"Config file not found: {candidate}")
        LOG.debug("No config at %s; using defaults", candidate)
        return Settings()

    try:
        with candidate.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise InvalidInputError(f"Invalid config file {candidate}: {e}") from e
    except OSError as e:
        raise PathPadIOError(f"Could not read config file {candidate}: {e}") from e

    cfg = _parse_config_dict(data)
    cfg.source = candidate
    LOG.info("Loaded config from %s", candidate)
    return cfg


def _parse_config_dict(d: ConfigDict) -> Settings:
    history = d.get("history", {})
    if not isinstance(history, dict):
        raise InvalidInputError("[history] must be a table.")
    history_file = history.get("file")
    if history_file is not None and not isinstance(history_file, str):
        raise InvalidInputError("[history] file must be a string.")
    record = history.get("record", False)
    if not isinstance(record, bool):
        raise InvalidInputError("[history] record must be true or false.")

    store = str(d.get("store", "auto")).lower()
    if store not in STORES:
        raise InvalidInputError(f"Invalid store {store!r}; use one of {', '.join(STORES)}.")
    scope = str(d.get("scope", "user")).lower()
    if scope not in SCOPES:
        raise InvalidInputError(f"Invalid scope {scope!r}; use one of {', '.join(SCOPES)}.")

    variable = str(d.get("variable", "PATH")).strip()
    if not variable:
        raise InvalidInputError("`variable` cannot be empty.")

    return Settings(
        variable=variable,
        store=store,
        scope=scope,
        history_file=history_file,
        record_history=record,
    )
