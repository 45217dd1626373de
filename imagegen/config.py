"""Configuration for the image-gen skill.

Two sources:
- config/image_gen.yaml: project defaults (model, size, aspect ratio, ...)
- GEMINI_API_KEY: from the process environment, else the project .env,
  else (opt-in) ~/.env. Nothing is ever written back into os.environ.
"""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable, Mapping
from pathlib import Path
from typing import Any

import yaml
from dotenv.parser import parse_stream

from imagegen.errors import ConfigError

WORKSPACE = Path(__file__).resolve().parent.parent
CONFIG_DIR = WORKSPACE / "config"

API_KEY_NAME = "GEMINI_API_KEY"

DEFAULT_MODEL = "gemini-2.0-flash-exp-image-generation"
DEFAULT_SIZE = "2K"
DEFAULT_ASPECT_RATIO = "16:9"
DEFAULT_OUTPUT = "./generated-image.png"

MISSING_KEY_MESSAGE = (
    f"{API_KEY_NAME} not found.\n"
    "Add it to a .env file in your project root:\n\n"
    f"  {API_KEY_NAME}=your-key-here\n\n"
    "Get a free key at https://aistudio.google.com/apikey"
)

log = logging.getLogger("imagegen.config")


def load_image_gen_config() -> dict[str, Any]:
    """Load config/image_gen.yaml."""
    path = CONFIG_DIR / "image_gen.yaml"
    if not path.exists():
        return {}
    return yaml.safe_load(path.read_text()) or {}


# ── Secret resolution ────────────────────────────────────────────────


def read_env_file(path: Path) -> dict[str, str | None]:
    """Parse a .env file and keep only the first non-empty GEMINI_API_KEY.

    Comments, blank lines and quoting are handled by python-dotenv. Later
    bindings of the same key never replace an earlier value; every other
    variable in the file is dropped.
    """
    if not path.is_file():
        return {}
    try:
        with path.open(encoding="utf-8") as stream:
            for binding in parse_stream(stream):
                if binding.key == API_KEY_NAME and binding.value:
                    return {API_KEY_NAME: binding.value}
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Could not read {path}: {e}") from e
    return {}


def env_file_candidates(project_dir: Path, include_home: bool = False) -> list[Path]:
    """.env files to search, in priority order."""
    candidates = [project_dir / ".env"]
    if include_home:
        home_env = Path.home() / ".env"
        if home_env not in candidates:
            candidates.append(home_env)
    return candidates


def resolve_api_key(
    environ: Mapping[str, str],
    env_files: Iterable[Mapping[str, str | None]],
) -> str | None:
    """First non-empty GEMINI_API_KEY wins: environment, then each file in order."""
    value = environ.get(API_KEY_NAME)
    if value:
        return value
    for contents in env_files:
        value = contents.get(API_KEY_NAME)
        if value:
            return value
    return None


def load_api_key(
    project_dir: Path,
    include_home: bool = False,
    environ: Mapping[str, str] | None = None,
) -> str | None:
    """Resolve the API key for this run without touching os.environ."""
    if environ is None:
        environ = os.environ
    if environ.get(API_KEY_NAME):
        log.debug("Using %s from environment", API_KEY_NAME)
        return environ[API_KEY_NAME]

    paths = env_file_candidates(project_dir, include_home)
    # Lazy so a key found in the project .env never opens ~/.env
    parsed = (read_env_file(path) for path in paths)
    key = resolve_api_key(environ, parsed)
    if key:
        log.debug("Using %s from .env file", API_KEY_NAME)
    return key
