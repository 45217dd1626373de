"""Image generation via the Gemini REST API.

Generates a new image from a prompt, or edits an existing one when
--input-image is given, and writes the result to --output.

Usage:
    python3 -m imagegen.generate --prompt-file ./prompt.txt \\
        --model "gemini-2.0-flash-exp-image-generation" \\
        --size 2K --aspect-ratio 16:9 --output ./fox.png

    python3 -m imagegen.generate --prompt-file ./prompt.txt \\
        --input-image ./photo.png --output ./photo-edited.png

Output:
    stdout: the absolute output path, nothing else.
    stderr: diagnostics ("Error: ..."), debug logs with --verbose.

Exit codes:
    0 = image written
    1 = configuration, validation, network, API or write failure
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import os
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from imagegen.clients.gemini import GeminiClient
from imagegen.config import (
    DEFAULT_ASPECT_RATIO,
    DEFAULT_MODEL,
    DEFAULT_OUTPUT,
    DEFAULT_SIZE,
    MISSING_KEY_MESSAGE,
    load_api_key,
    load_image_gen_config,
)
from imagegen.errors import APIError, ConfigError, ImageGenError, OutputError
from imagegen.inputs import validate_input_image
from imagegen.payload import build_payload
from imagegen.prompt import PromptSource
from imagegen.response import extract_image

log = logging.getLogger("imagegen.generate")


@dataclass
class InvocationParameters:
    """Everything one run needs, already resolved from flags and config."""

    prompt_source: PromptSource
    model: str = DEFAULT_MODEL
    size: str = DEFAULT_SIZE
    aspect_ratio: str = DEFAULT_ASPECT_RATIO
    output: Path = Path(DEFAULT_OUTPUT)
    input_image: Path | None = None
    project_dir: Path | None = None
    include_home_env: bool = False
    timeout: float | None = None


async def generate_image(
    params: InvocationParameters,
    environ: Mapping[str, str] | None = None,
) -> Path:
    """Run one generation and return the path the image was written to."""
    prompt = params.prompt_source.read()

    project_dir = params.project_dir or Path.cwd()
    api_key = load_api_key(project_dir, params.include_home_env, environ)
    if not api_key:
        raise ConfigError(MISSING_KEY_MESSAGE)

    image = validate_input_image(params.input_image) if params.input_image else None

    request = build_payload(prompt, image, params.model, params.size, params.aspect_ratio)
    log.info(
        "Generating with %s (%s image part, size=%s, aspect=%s)",
        params.model,
        "1" if image else "no",
        params.size,
        params.aspect_ratio,
    )

    async with GeminiClient(api_key, timeout=params.timeout) as client:
        response = await client.generate_content(params.model, request)

    image_bytes = extract_image(response)

    try:
        params.output.parent.mkdir(parents=True, exist_ok=True)
        params.output.write_bytes(image_bytes)
    except OSError as e:
        raise OutputError(f"Could not write image to {params.output}: {e.strerror or e}") from e
    log.info("Wrote %d bytes to %s", len(image_bytes), params.output)
    return params.output


# ── CLI ──────────────────────────────────────────────────────────────

_VALUE_FLAGS = (
    ("--prompt", "Prompt text (prefer --prompt-file)"),
    ("--prompt-file", "Path to a text file holding the prompt; deleted after reading"),
    ("--model", f"Gemini model id (default: {DEFAULT_MODEL})"),
    ("--size", "1K, 2K, 4K or 1024/2048/4096 (default: 2K)"),
    ("--aspect-ratio", f"Aspect ratio, e.g. 1:1, 16:9 (default: {DEFAULT_ASPECT_RATIO})"),
    ("--input-image", "Image to edit (.png, .jpg, .jpeg, .webp, .gif)"),
    ("--output", f"Where to write the image (default: {DEFAULT_OUTPUT})"),
)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Generate or edit an image with the Gemini API",
        allow_abbrev=False,
    )
    # A value flag directly followed by another flag parses as True.
    for flag, help_text in _VALUE_FLAGS:
        parser.add_argument(flag, nargs="?", const=True, default=None, help=help_text)
    parser.add_argument(
        "--home-env",
        action="store_true",
        default=None,
        help="Also look for GEMINI_API_KEY in ~/.env",
    )
    parser.add_argument("--verbose", action="store_true", help="Debug logging on stderr")
    return parser


def parse_args(argv: Sequence[str] | None = None) -> argparse.Namespace:
    args, unknown = _build_parser().parse_known_args(argv)
    args.unknown = unknown
    return args


def _string_option(value: Any) -> str | None:
    """A bare flag (True) or empty string counts as not given."""
    if value is True or value is None:
        return None
    value = str(value)
    return value or None


def _require_value(flag: str, value: Any) -> str | None:
    if value is True:
        raise ConfigError(f"{flag} requires a value.")
    return value or None


def build_parameters(
    args: argparse.Namespace,
    settings: Mapping[str, Any] | None = None,
    cwd: Path | None = None,
) -> InvocationParameters:
    """Merge CLI flags over config/image_gen.yaml over built-in defaults."""
    settings = settings or {}
    cwd = cwd or Path.cwd()

    prompt_file = _require_value("--prompt-file", args.prompt_file)
    prompt_text = _require_value("--prompt", args.prompt)
    if prompt_file:
        if prompt_text:
            log.warning("Both --prompt-file and --prompt given; using --prompt-file")
        prompt_source = PromptSource.file(cwd / Path(prompt_file).expanduser())
    elif prompt_text:
        prompt_source = PromptSource.literal(prompt_text)
    else:
        raise ConfigError(
            "--prompt-file is required (path to a text file containing the prompt), "
            "or pass the text directly with --prompt."
        )

    input_image = _require_value("--input-image", args.input_image)
    output = _string_option(args.output) or settings.get("output") or DEFAULT_OUTPUT
    home_env = args.home_env if args.home_env is not None else settings.get("home_env", False)
    timeout = settings.get("timeout_seconds")

    return InvocationParameters(
        prompt_source=prompt_source,
        model=_string_option(args.model) or settings.get("model") or DEFAULT_MODEL,
        size=_string_option(args.size) or str(settings.get("size") or DEFAULT_SIZE),
        aspect_ratio=(
            _string_option(args.aspect_ratio)
            or str(settings.get("aspect_ratio") or DEFAULT_ASPECT_RATIO)
        ),
        output=(cwd / Path(output).expanduser()).resolve(),
        input_image=(cwd / Path(input_image).expanduser()).resolve() if input_image else None,
        project_dir=cwd,
        include_home_env=bool(home_env),
        timeout=float(timeout) if timeout is not None else None,
    )


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )
    # httpx logs the full request URL, key included, at INFO.
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def main(argv: Sequence[str] | None = None) -> int:
    args = parse_args(argv)
    _configure_logging(args.verbose)
    if args.unknown:
        log.debug("Ignoring unrecognized arguments: %s", " ".join(args.unknown))

    try:
        params = build_parameters(args, load_image_gen_config(), Path.cwd())
        output = asyncio.run(generate_image(params, os.environ))
    except APIError as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.body:
            print(e.body, file=sys.stderr)
        return e.exit_code
    except ImageGenError as e:
        print(f"Error: {e}", file=sys.stderr)
        return e.exit_code

    print(output)
    return 0


if __name__ == "__main__":
    sys.exit(main())
