"""Process harness: one JSON request on stdin, one JSON response on stdout.

A caller spawns one process per push, writes a single UTF-8 JSON object,
closes stdin and reads a single JSON object back. Exit codes:

    0  response written
    1  invalid input (bad UTF-8, bad JSON, schema failure)
    2  internal failure (invariant violation or unexpected error)

On failure a minimal ``{"error": ..., "message": ...}`` object is written to
stdout when possible. Output is fully serialized before a single write, so a
reader never sees a truncated document. Diagnostics go to stderr only.
"""

from __future__ import annotations

import json
import logging
import sys
from enum import Enum
from typing import BinaryIO

from pydantic import ValidationError

from pushrisk.engine import score_push
from pushrisk.exceptions import InputError, InvariantError
from pushrisk.models import ErrorResponse, ScoreRequest

logger = logging.getLogger("pushrisk.harness")

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_INTERNAL_ERROR = 2


class HarnessState(str, Enum):
    """Lifecycle of one invocation."""

    IDLE = "idle"
    READING_INPUT = "reading_input"
    PARSED = "parsed"
    COMPUTED = "computed"
    WROTE_OUTPUT = "wrote_output"
    EXIT = "exit"


def parse_request(raw: bytes) -> ScoreRequest:
    """Decode exactly one JSON value into a request.

    Trailing content after the first value is rejected rather than ignored.
    """
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise InputError(f"input is not valid UTF-8: {e}") from e

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InputError(f"malformed JSON: {e}") from e
    except RecursionError as e:
        raise InputError("malformed JSON: nesting too deep") from e

    if not isinstance(data, dict):
        raise InputError("request must be a JSON object")

    try:
        return ScoreRequest.model_validate(data)
    except ValidationError as e:
        raise InputError(f"invalid request: {e.error_count()} validation error(s)") from e


class Harness:
    """Runs a single request through the engine over byte streams."""

    def __init__(self, stdin: BinaryIO, stdout: BinaryIO) -> None:
        self.stdin = stdin
        self.stdout = stdout
        self.state = HarnessState.IDLE

    def _transition(self, state: HarnessState) -> None:
        logger.debug("%s -> %s", self.state.value, state.value)
        self.state = state

    def _write(self, payload: str) -> None:
        data = payload.encode("utf-8")
        self.stdout.write(data)
        self.stdout.flush()

    def _fail(self, kind: str, message: str, code: int) -> int:
        try:
            self._write(ErrorResponse(error=kind, message=message).model_dump_json())
        except OSError as e:
            logger.error("could not write error object: %s", e)
        self._transition(HarnessState.EXIT)
        return code

    def run(self) -> int:
        self._transition(HarnessState.READING_INPUT)
        try:
            request = parse_request(self.stdin.read())
            self._transition(HarnessState.PARSED)

            response = score_push(request)
            payload = response.to_json()
            self._transition(HarnessState.COMPUTED)
        except InputError as e:
            logger.error("rejected request: %s", e)
            return self._fail("invalid_input", str(e), EXIT_INPUT_ERROR)
        except InvariantError as e:
            logger.error("invariant violation: %s", e)
            return self._fail("internal_error", str(e), EXIT_INTERNAL_ERROR)
        except Exception as e:
            logger.exception("unexpected failure while scoring")
            return self._fail("internal_error", type(e).__name__, EXIT_INTERNAL_ERROR)

        try:
            self._write(payload)
        except OSError as e:
            logger.error("could not write response: %s", e)
            self._transition(HarnessState.EXIT)
            return EXIT_INTERNAL_ERROR

        self._transition(HarnessState.WROTE_OUTPUT)
        self._transition(HarnessState.EXIT)
        return EXIT_OK


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        stream=sys.stderr,
        level=logging.DEBUG if verbose else logging.WARNING,
        format="pushrisk: %(levelname)s %(name)s: %(message)s",
    )


def run(stdin: BinaryIO, stdout: BinaryIO) -> int:
    """Score one request read from ``stdin`` and return the exit code."""
    return Harness(stdin, stdout).run()


def main() -> int:
    configure_logging()
    return run(sys.stdin.buffer, sys.stdout.buffer)


if __name__ == "__main__":
    sys.exit(main())
