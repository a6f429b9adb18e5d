"""Local settings stored as ``key=value`` lines in a plain text file."""

from __future__ import annotations

import os
import re
from collections.abc import Mapping
from enum import Enum
from pathlib import Path

CONFIG_FILE = "xiangqi_tui.conf"
ENGINE_PATH_ENV = "XIANGQI_ENGINE_PATH"

KEY_ENGINE_PATH = "engine_path"
KEY_ENGINE_PROTOCOL = "engine_protocol"
KEY_ENGINE_THREADS = "engine_threads"
KEY_ENGINE_HASH_MB = "engine_hash_mb"
KEY_ENGINE_SKILL = "engine_skill"
KEY_ENGINE_MULTI_PV = "engine_multi_pv"
KEY_ENGINE_MOVETIME_MS = "engine_movetime_ms"
KEY_ENGINE_SEARCH_DEPTH = "engine_search_depth"
KEY_ENGINE_SEARCH_NODES = "engine_search_nodes"
KEY_BOOK_LOCAL_PATH = "book_local_path"
KEY_BOOK_LOCAL_ENABLED = "book_local_enabled"
KEY_BOOK_CLOUD_ENABLED = "book_cloud_enabled"
KEY_BOOK_PICK_MODE = "book_pick_mode"
KEY_BOOK_MAX_HALFMOVES = "book_max_halfmoves"

PICK_OPTIMAL = "optimal"
PICK_POSITIVE_RANDOM = "positive_random"

_U8_MAX = 0xFF
_U16_MAX = 0xFFFF
_U32_MAX = 0xFFFF_FFFF
_UNSIGNED = re.compile(r"\+?[0-9]+")
_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})


class EngineProtocol(Enum):
    """The protocol spoken to the engine process."""

    UCI = "uci"
    UCCI = "ucci"


def parse_key(text: str, key: str) -> str | None:
    """The value of the first line (trimmed) that starts with ``key=``."""
    prefix = f"{key}="
    for line in text.splitlines():
        line = line.strip()
        if line.startswith(prefix):
            return line[len(prefix):]
    return None


def set_line(lines: list[str], key: str, value: str) -> None:
    """Replace the first ``key=`` line in ``lines`` or append one."""
    prefix = f"{key}="
    entry = f"{key}={value}"
    for index, line in enumerate(lines):
        if line.strip().startswith(prefix):
            lines[index] = entry
            return
    lines.append(entry)


def parse_bool(raw: str) -> bool:
    """Accept ``1``, ``true``, ``yes`` and ``on`` (any case) as true."""
    return raw.strip().lower() in _TRUE_WORDS


def normalize_book_pick_mode(mode: str) -> str:
    """Only ``positive_random`` is kept; anything else becomes ``optimal``."""
    return PICK_POSITIVE_RANDOM if mode == PICK_POSITIVE_RANDOM else PICK_OPTIMAL


def _parse_unsigned(raw: str | None, maximum: int) -> int | None:
    if raw is None or not _UNSIGNED.fullmatch(raw):
        return None
    value = int(raw)
    return value if value <= maximum else None


def _clamp(value: int, low: int, high: int) -> int:
    return max(low, min(high, value))


def _check_unsigned(name: str, value: int, maximum: int) -> None:
    if not 0 <= value <= maximum:
        raise ValueError(f"{name} must be between 0 and {maximum}, got {value}")


class SettingsStore:
    """Typed access to the settings file, with defaults and value ranges."""

    def __init__(
        self,
        path: str | os.PathLike[str] = CONFIG_FILE,
        environ: Mapping[str, str] | None = None,
    ) -> None:
        self.path = Path(path)
        self.environ = os.environ if environ is None else environ

    def read(self, key: str) -> str | None:
        """The stored value of ``key``, or ``None`` if absent or unreadable."""
        try:
            text = self.path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError):
            return None
        return parse_key(text, key)

    def write(self, key: str, value: str) -> None:
        """Set ``key`` to ``value``, keeping the other non-blank lines."""
        if self.path.exists():
            text = self.path.read_text(encoding="utf-8")
            lines = [line for line in text.splitlines() if line.strip()]
        else:
            lines = []
        set_line(lines, key, value)
        body = "\n".join(lines) + "\n" if lines else ""
        self.path.write_text(body, encoding="utf-8")

    def _read_unsigned(self, key: str, maximum: int) -> int | None:
        return _parse_unsigned(self.read(key), maximum)

    def _write_unsigned(self, key: str, value: int, maximum: int) -> None:
        _check_unsigned(key, value, maximum)
        self.write(key, str(value))

    # Engine

    def load_engine_path(self) -> str:
        """The environment override if set, else the stored path, else ``""``."""
        override = self.environ.get(ENGINE_PATH_ENV, "").strip()
        if override:
            return override
        return self.read(KEY_ENGINE_PATH) or ""

    def save_engine_path(self, path: str) -> None:
        self.write(KEY_ENGINE_PATH, path.strip())

    def load_engine_protocol(self) -> EngineProtocol:
        value = (self.read(KEY_ENGINE_PROTOCOL) or "").lower()
        return EngineProtocol.UCCI if value == "ucci" else EngineProtocol.UCI

    def save_engine_protocol(self, protocol: EngineProtocol) -> None:
        self.write(KEY_ENGINE_PROTOCOL, EngineProtocol(protocol).value)

    def load_engine_threads(self) -> int:
        value = self._read_unsigned(KEY_ENGINE_THREADS, _U8_MAX)
        return _clamp(4 if value is None else value, 1, 64)

    def save_engine_threads(self, threads: int) -> None:
        self._write_unsigned(KEY_ENGINE_THREADS, threads, _U8_MAX)

    def load_engine_hash_mb(self) -> int:
        value = self._read_unsigned(KEY_ENGINE_HASH_MB, _U32_MAX)
        return _clamp(512 if value is None else value, 64, 8192)

    def save_engine_hash_mb(self, hash_mb: int) -> None:
        self._write_unsigned(KEY_ENGINE_HASH_MB, hash_mb, _U32_MAX)

    def load_engine_skill(self) -> int:
        value = self._read_unsigned(KEY_ENGINE_SKILL, _U8_MAX)
        return min(20 if value is None else value, 20)

    def save_engine_skill(self, skill: int) -> None:
        self._write_unsigned(KEY_ENGINE_SKILL, skill, _U8_MAX)

    def load_engine_multi_pv(self) -> int:
        value = self._read_unsigned(KEY_ENGINE_MULTI_PV, _U8_MAX)
        return _clamp(1 if value is None else value, 1, 5)

    def save_engine_multi_pv(self, multi_pv: int) -> None:
        self._write_unsigned(KEY_ENGINE_MULTI_PV, multi_pv, _U8_MAX)

    def load_engine_movetime_ms(self) -> int:
        value = self._read_unsigned(KEY_ENGINE_MOVETIME_MS, _U32_MAX)
        return _clamp(3000 if value is None else value, 100, 86_400_000)

    def save_engine_movetime_ms(self, ms: int) -> None:
        self._write_unsigned(KEY_ENGINE_MOVETIME_MS, ms, _U32_MAX)

    def load_engine_search_depth(self) -> int:
        value = self._read_unsigned(KEY_ENGINE_SEARCH_DEPTH, _U8_MAX)
        return _clamp(12 if value is None else value, 1, 64)

    def save_engine_search_depth(self, depth: int) -> None:
        self._write_unsigned(KEY_ENGINE_SEARCH_DEPTH, depth, _U8_MAX)

    def load_engine_search_nodes(self) -> int:
        value = self._read_unsigned(KEY_ENGINE_SEARCH_NODES, _U32_MAX)
        return _clamp(500_000 if value is None else value, 1_000, 500_000_000)

    def save_engine_search_nodes(self, nodes: int) -> None:
        self._write_unsigned(KEY_ENGINE_SEARCH_NODES, nodes, _U32_MAX)

    # Opening book

    def load_book_local_path(self) -> str:
        return self.read(KEY_BOOK_LOCAL_PATH) or ""

    def save_book_local_path(self, path: str) -> None:
        self.write(KEY_BOOK_LOCAL_PATH, path.strip())

    def load_book_local_enabled(self) -> bool:
        value = self.read(KEY_BOOK_LOCAL_ENABLED)
        return True if value is None else parse_bool(value)

    def load_book_cloud_enabled(self) -> bool:
        value = self.read(KEY_BOOK_CLOUD_ENABLED)
        return False if value is None else parse_bool(value)

    def save_book_flags(self, local_enabled: bool, cloud_enabled: bool) -> None:
        self.write(KEY_BOOK_LOCAL_ENABLED, "1" if local_enabled else "0")
        self.write(KEY_BOOK_CLOUD_ENABLED, "1" if cloud_enabled else "0")

    def load_book_pick_mode(self) -> str:
        value = self.read(KEY_BOOK_PICK_MODE)
        return normalize_book_pick_mode(PICK_OPTIMAL if value is None else value)

    def save_book_pick_mode(self, mode: str) -> None:
        self.write(KEY_BOOK_PICK_MODE, normalize_book_pick_mode(mode))

    def load_book_max_halfmoves(self) -> int:
        value = self._read_unsigned(KEY_BOOK_MAX_HALFMOVES, _U16_MAX)
        return 999 if value is None else value

    def save_book_max_halfmoves(self, max_halfmoves: int) -> None:
        self._write_unsigned(KEY_BOOK_MAX_HALFMOVES, max_halfmoves, _U16_MAX)