"""Prompt sources.

The assistant normally writes the prompt to a temporary file and passes
--prompt-file, so long text never lands on a command line or in shell
history. The file is consumed: deleted right after a successful read.
"""

from __future__ import annotations

import contextlib
import logging
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from imagegen.errors import InputValidationError

log = logging.getLogger("imagegen.prompt")


class PromptKind(str, Enum):
    LITERAL = "LITERAL"
    FILE = "FILE"


@dataclass(frozen=True)
class PromptSource:
    kind: PromptKind
    value: str

    @classmethod
    def literal(cls, text: str) -> PromptSource:
        return cls(PromptKind.LITERAL, text)

    @classmethod
    def file(cls, path: str | Path) -> PromptSource:
        return cls(PromptKind.FILE, str(path))

    def read(self) -> str:
        """Return the stripped prompt text, consuming a prompt file."""
        if self.kind is PromptKind.LITERAL:
            prompt = self.value.strip()
            if not prompt:
                raise InputValidationError("Prompt is empty.")
            return prompt

        path = Path(self.value)
        if not path.is_file():
            raise InputValidationError(f"Prompt file not found: {path}")

        try:
            prompt = path.read_text(encoding="utf-8").strip()
        except UnicodeDecodeError as e:
            raise InputValidationError(f"Prompt file is not valid UTF-8 text: {path}") from e
        except OSError as e:
            raise InputValidationError(f"Could not read prompt file {path}: {e.strerror or e}") from e
        if not prompt:
            raise InputValidationError("Prompt file is empty.")

        with contextlib.suppress(OSError):
            path.unlink()
            log.debug("Deleted prompt file %s", path)
        return prompt
