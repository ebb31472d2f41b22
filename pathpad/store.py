"""
pathpad.store

Where the PATH value comes from and where the edited value goes.

- ProcessEnvStore: reads the variable from the process environment. A child
  process cannot change its parent shell's environment, so writing prints
  the new value on stdout for the shell to assign:
      export PATH="$(pad add ~/bin)"
- WindowsRegistryStore: reads/writes the User or Machine value in the
  registry and broadcasts WM_SETTINGCHANGE so new processes pick it up.
"""
from __future__ import annotations

import abc
import logging
import os
import sys
from typing import List, MutableMapping, Sequence, TextIO

from . import ui
from .config import Settings
from .entries import join_path_like, split_path_like
from .errors import InvalidInputError, PathPadIOError

LOG = logging.getLogger("pathpad.store")

IS_WINDOWS = (os.name == "nt")

HKCU_ENV = r"Environment"
HKLM_ENV = r"SYSTEM\CurrentControlSet\Control\Session Manager\Environment"


class EnvironmentPathStore(abc.ABC):
    """Reads the current PATH-like value and persists (or previews) a new one."""

    variable: str = "PATH"

    @abc.abstractmethod
    def read_raw(self) -> str:
        """Raw value of the variable, "" when unset."""

    @abc.abstractmethod
    def _persist(self, value: str) -> None:
        ...

    def read_entries(self) -> List[str]:
        return split_path_like(self.read_raw())

    def write(self, entries: Sequence[str], *, dry_run: bool = False) -> str:
        new_value = join_path_like(entries)
        if dry_run:
            ui.print_preview(self.read_raw(), new_value, variable=self.variable)
            return new_value
        self._persist(new_value)
        return new_value

    def emit_unchanged(self) -> None:
        """Called after a failed command; stores that print their result re-print the unchanged value."""


class ProcessEnvStore(EnvironmentPathStore):
    def __init__(
        self,
        variable: str = "PATH",
        environ: MutableMapping[str, str] | None = None,
        stream: TextIO | None = None,
    ):
        self.variable = variable
        self.environ = environ if environ is not None else os.environ
        self._stream = stream

    @property
    def stream(self) -> TextIO:
        return self._stream or sys.stdout

    def read_raw(self) -> str:
        return self.environ.get(self.variable, "")

    def _persist(self, value: str) -> None:
        try:
            print(value, file=self.stream)
        except OSError as e:
            raise PathPadIOError(f"Could not write the new {self.variable}: {e}") from e

    def emit_unchanged(self) -> None:
        # keep `export PATH="$(pad ...)"` harmless when the command fails
        print(self.read_raw(), file=self.stream)


class WindowsRegistryStore(EnvironmentPathStore):
    def __init__(self, scope: str = "user", variable: str = "Path"):
        if scope not in ("user", "machine"):
            raise InvalidInputError(f"Invalid registry scope {scope!r}; use user or machine.")
        self.scope = scope
        self.variable = variable

    def _key(self):
        import winreg

        if self.scope == "user":
            return winreg.HKEY_CURRENT_USER, HKCU_ENV
        return winreg.HKEY_LOCAL_MACHINE, HKLM_ENV

    def read_raw(self) -> str:
        import winreg

        root, sub = self._key()
        try:
            with winreg.OpenKey(root, sub, 0, winreg.KEY_READ) as k:
                try:
                    val, _ = winreg.QueryValueEx(k, self.variable)
                    return val
                except FileNotFoundError:
                    return ""
        except OSError as e:
            raise PathPadIOError(f"Could not read {self.scope} {self.variable} from the registry: {e}") from e

    def _persist(self, value: str) -> None:
        import winreg

        root, sub = self._key()
        try:
            with winreg.OpenKey(root, sub, 0, winreg.KEY_SET_VALUE) as k:
                winreg.SetValueEx(k, self.variable, 0, winreg.REG_EXPAND_SZ, value)
        except OSError as e:
            raise PathPadIOError(f"Could not write {self.scope} {self.variable} to the registry: {e}") from e
        _broadcast_setting_change()
        ui.log_success(f"Wrote {self.scope} {self.variable}.")


def _broadcast_setting_change() -> None:
    import ctypes
    import ctypes.wintypes as wt

    HWND_BROADCAST = 0xFFFF
    WM_SETTINGCHANGE = 0x001A
    SMTO_ABORTIFHUNG = 0x0002
    try:
        send = ctypes.windll.user32.SendMessageTimeoutW
        send.argtypes = [wt.HWND, wt.UINT, wt.WPARAM, wt.LPARAM, wt.UINT, wt.UINT, ctypes.POINTER(wt.DWORD)]
        result = wt.DWORD(0)
        send(HWND_BROADCAST, WM_SETTINGCHANGE, 0, ctypes.c_wchar_p("Environment"),
             SMTO_ABORTIFHUNG, 5000, ctypes.byref(result))
    except (AttributeError, OSError) as e:
        # value is already written; only already-running programs miss the update
        LOG.warning("WM_SETTINGCHANGE broadcast failed: %s", e)


def get_store(settings: Settings) -> EnvironmentPathStore:
    kind = settings.store
    if kind == "auto":
        kind = "registry" if IS_WINDOWS else "process"
    if kind == "registry":
        if not IS_WINDOWS:
            raise InvalidInputError("The registry store is only available on Windows.")
        variable = "Path" if settings.variable.upper() == "PATH" else settings.variable
        return WindowsRegistryStore(scope=settings.scope, variable=variable)
    return ProcessEnvStore(variable=settings.variable)
