"""Key file discovery, loading, and typed option lookup."""

from __future__ import annotations

import configparser
import logging
import math
import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping


CONFIG_SUBPATH = Path("termite") / "config"

OPTIONS_SECTION = "options"
COLORS_SECTION = "colors"

_INT_RE = re.compile(r"^[+-]?\d+$")
_INT32_MIN = -(2**31)
_INT32_MAX = 2**31 - 1

_BOOLEANS = {"true": True, "1": True, "false": False, "0": False}
_ESCAPES = {"s": " ", "n": "\n", "t": "\t", "r": "\r", "\\": "\\"}

logger = logging.getLogger("termite.config")


def user_config_dir() -> Path:
    base = os.environ.get("XDG_CONFIG_HOME")
    if base:
        return Path(base)
    return Path.home() / ".config"


def system_config_dirs() -> list[Path]:
    raw = os.environ.get("XDG_CONFIG_DIRS") or "/etc/xdg"
    return [Path(p) for p in raw.split(os.pathsep) if p]


def candidate_paths(explicit_path: Path | str | None = None) -> list[Path]:
    paths: list[Path] = []
    if explicit_path:
        paths.append(Path(explicit_path).expanduser())
    paths.append(user_config_dir() / CONFIG_SUBPATH)
    paths.extend(d / CONFIG_SUBPATH for d in system_config_dirs())
    return paths


def _unescape(value: str) -> str:
    out: list[str] = []
    i = 0
    while i < len(value):
        ch = value[i]
        if ch == "\\" and i + 1 < len(value) and value[i + 1] in _ESCAPES:
            out.append(_ESCAPES[value[i + 1]])
            i += 2
            continue
        out.append(ch)
        i += 1
    return "".join(out)


def _unquote(value: str) -> str:
    if len(value) >= 2 and value[0] == value[-1] and value[0] in ("'", '"'):
        return value[1:-1]
    return value


@dataclass(frozen=True)
class ConfigDocument:
    """Flat section/key store loaded from one key file."""

    sections: Mapping[str, Mapping[str, str]] = field(default_factory=dict)
    path: Path | None = None

    @classmethod
    def parse(cls, text: str, path: Path | None = None) -> "ConfigDocument":
        parser = configparser.RawConfigParser(
            delimiters=("=",),
            comment_prefixes=("#", ";"),
            inline_comment_prefixes=None,
            strict=False,
            empty_lines_in_values=False,
            interpolation=None,
            default_section="\x00",
        )
        parser.optionxform = str  # type: ignore[assignment,method-assign]
        # Indented lines are new keys, never continuations of the previous value.
        flat = "\n".join(line.lstrip() for line in text.splitlines())
        parser.read_string(flat, source=str(path) if path else "<string>")
        sections = {name: dict(parser.items(name)) for name in parser.sections()}
        return cls(sections=sections, path=path)

    def raw(self, section: str, key: str) -> str | None:
        return self.sections.get(section, {}).get(key)

    def has_key(self, section: str, key: str) -> bool:
        return self.raw(section, key) is not None

    def _malformed(self, section: str, key: str, raw: str, kind: str) -> None:
        logger.warning(
            f"invalid {kind} for {section}.{key}: {raw}",
            extra={"event": "invalid_option", "section": section, "key": key},
        )

    def get_string(self, section: str, key: str) -> str | None:
        raw = self.raw(section, key)
        if raw is None:
            return None
        return _unescape(_unquote(raw.strip()))

    def get_bool(self, section: str, key: str) -> bool | None:
        raw = self.raw(section, key)
        if raw is None:
            return None
        value = _BOOLEANS.get(raw.strip().lower())
        if value is None:
            self._malformed(section, key, raw, "boolean")
        return value

    def get_int(self, section: str, key: str) -> int | None:
        raw = self.raw(section, key)
        if raw is None:
            return None
        text = raw.strip()
        if not _INT_RE.match(text):
            self._malformed(section, key, raw, "integer")
            return None
        value = int(text)
        if not _INT32_MIN <= value <= _INT32_MAX:
            self._malformed(section, key, raw, "integer")
            return None
        return value

    def get_double(self, section: str, key: str) -> float | None:
        raw = self.raw(section, key)
        if raw is None:
            return None
        try:
            value = float(raw.strip())
        except ValueError:
            self._malformed(section, key, raw, "number")
            return None
        if math.isnan(value):
            self._malformed(section, key, raw, "number")
            return None
        return value


def load_document(path: Path) -> ConfigDocument | None:
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug(f"config not readable at {path}: {exc}", extra={"event": "config_skip"})
        return None

    try:
        return ConfigDocument.parse(text, path=path)
    except configparser.Error as exc:
        logger.warning(f"config parse failed at {path}: {exc}", extra={"event": "config_parse_failed"})
        return None


def load_config(explicit_path: Path | str | None = None) -> ConfigDocument | None:
    """Load the first key file that can be read, or None.

    The explicit path is tried first, then the user config directory, then each
    system config directory. Sources are never merged.
    """
    for path in candidate_paths(explicit_path):
        document = load_document(path)
        if document is not None:
            logger.info(f"loaded config {path}", extra={"event": "config_loaded"})
            return document
    logger.info("no config file found, using defaults", extra={"event": "config_missing"})
    return None
