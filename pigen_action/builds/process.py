"""Subprocess execution with line-by-line output listeners.

Both output streams are read concurrently so neither pipe can fill up and
stall the child while the other one is being drained.
"""

from __future__ import annotations

import logging
import subprocess
import threading
from collections.abc import Callable, Mapping, Sequence
from pathlib import Path
from typing import IO, cast

from pigen_action.types import ExecOutput

logger = logging.getLogger(__name__)

LineListener = Callable[[str], None]

# Exit code reported when the command could not be started.
LAUNCH_FAILURE_EXIT_CODE = 127


def _pump(stream: IO[str], sink: list[str], listener: LineListener | None) -> None:
    # Always drain to EOF so the child never blocks on a full pipe.
    for raw in stream:
        line = raw.rstrip("\n")
        sink.append(line)
        if listener is None:
            continue
        try:
            listener(line)
        except Exception:
            logger.exception("Output listener failed, no longer forwarding lines")
            listener = None


def exec_output(
    cmd: Sequence[str],
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
    on_stdout: LineListener | None = None,
    on_stderr: LineListener | None = None,
) -> ExecOutput:
    """Run a command and collect its output.

    Args:
        cmd: Command and arguments.
        cwd: Working directory.
        env: Complete environment for the child (inherits when None).
        on_stdout: Called with each standard output line as it arrives.
        on_stderr: Called with each standard error line as it arrives.

    Returns:
        ExecOutput with the exit code and captured streams. A command that
        cannot be started yields exit code 127 and the reason on stderr.
    """
    logger.debug("$ %s (cwd=%s)", " ".join(cmd), cwd)
    try:
        proc = subprocess.Popen(
            list(cmd),
            cwd=cwd,
            env=dict(env) if env is not None else None,
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            text=True,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )
    except OSError as e:
        message = f"Failed to execute {cmd[0]}: {e}"
        logger.error(message)
        return ExecOutput(exit_code=LAUNCH_FAILURE_EXIT_CODE, stderr=message)

    stdout = cast(IO[str], proc.stdout)
    stderr = cast(IO[str], proc.stderr)

    out_lines: list[str] = []
    err_lines: list[str] = []
    t_out = threading.Thread(target=_pump, args=(stdout, out_lines, on_stdout))
    t_err = threading.Thread(target=_pump, args=(stderr, err_lines, on_stderr))
    t_out.start()
    t_err.start()
    t_out.join()
    t_err.join()
    exit_code = proc.wait()
    stdout.close()
    stderr.close()

    logger.debug("%s exited with code %d", cmd[0], exit_code)
    return ExecOutput(
        exit_code=exit_code,
        stdout="\n".join(out_lines),
        stderr="\n".join(err_lines),
    )


__all__ = ["LAUNCH_FAILURE_EXIT_CODE", "LineListener", "exec_output"]
