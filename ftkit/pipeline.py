"""Running a chain of shell-free commands connected by pipes.

Each command is a string split on spaces into a program and its
arguments. The program is looked up in the ``PATH`` entry of the given
environment unless it contains a slash. The first command reads from an
input file, or from lines taken from a stream up to a limiter. The last
command writes to an output file, and the exit status of the last command
is the result.
"""

from __future__ import annotations

import os
import subprocess
import sys
import tempfile
from typing import IO, Any, List, Mapping, NamedTuple, Optional, Sequence, Union

from ftkit.strings import split

__all__ = [
    "PipexError",
    "ResolvedCommand",
    "find_executable",
    "resolve_command",
    "run_pipeline",
    "run_heredoc",
    "main",
]

HEREDOC_KEYWORD = "here_doc"

_NOT_FOUND = "Command not found or not executable"
_USAGE = (
    "Usage:\n"
    "  ./pipex <file1> <cmd1> <cmd2> <...> <file2>\n"
    './pipex "here_doc" <LIMITER> <cmd> <cmd1> <...> <file>\n'
)

Environment = Optional[Mapping[str, str]]


class PipexError(Exception):
    """A failure that ends the pipeline; ``status`` is the exit code to use."""

    def __init__(self, message: str, status: int = 1) -> None:
        super().__init__(message)
        self.message = message
        self.status = status


class ResolvedCommand(NamedTuple):
    """The program to execute and the argument vector to give it."""

    path: str
    argv: List[str]


def _report(message: str) -> None:
    sys.stderr.write(f"Error: {message}\n")
    sys.stderr.flush()


def _environment(env: Environment) -> dict:
    return dict(os.environ if env is None else env)


def _search_dirs(env: Mapping[str, str]) -> Optional[List[str]]:
    """Directories of the first entry whose text starts with ``PATH``."""
    for key, value in env.items():
        entry = f"{key}={value}"
        if entry.startswith("PATH"):
            return split(entry[5:], ":")
    return None


def find_executable(cmd: str, env: Environment = None) -> Optional[str]:
    """Return the first ``dir/cmd`` that exists along the search path, or None."""
    dirs = _search_dirs(_environment(env))
    if dirs is None:
        return None
    for directory in dirs:
        candidate = f"{directory}/{cmd}"
        if os.access(candidate, os.F_OK):
            return candidate
    return None


def resolve_command(command: str, env: Environment = None) -> ResolvedCommand:
    """Split ``command`` on spaces and locate its program.

    Raises PipexError with status 127 when the program cannot be found or
    is not executable.
    """
    words = split(command, " ")
    if not words:
        raise PipexError(_NOT_FOUND, 127)
    name = words[0]
    path = name if "/" in name else find_executable(name, env)
    if path is None or not os.access(path, os.X_OK):
        raise PipexError(_NOT_FOUND, 127)
    return ResolvedCommand(path, words)


def _check_commands(commands: Sequence[str]) -> List[str]:
    commands = list(commands)
    if len(commands) < 2:
        raise PipexError("Bad argument", 1)
    if any(command == "" for command in commands):
        raise PipexError("Command arguments are empty", 1)
    return commands


def _open(path: str, flags: int, mode: int = 0o777) -> int:
    try:
        return os.open(path, flags, mode)
    except OSError as exc:
        raise PipexError("Failed to open file", 1) from exc


def _exit_status(returncode: int) -> int:
    # A child killed by a signal did not exit normally and counts as 0.
    return returncode if returncode >= 0 else 0


def _run_stages(
    source: Union[int, IO[Any]],
    commands: Sequence[str],
    out_fd: int,
    env: Environment,
) -> int:
    env_map = _environment(env)
    outcomes: List[Union[subprocess.Popen, int]] = []
    stdin: Union[int, IO[Any]] = source
    previous_pipe: Optional[IO[bytes]] = None
    last_index = len(commands) - 1

    for index, command in enumerate(commands):
        is_last = index == last_index
        stdout = out_fd if is_last else subprocess.PIPE
        proc: Optional[subprocess.Popen] = None
        try:
            resolved = resolve_command(command, env_map)
        except PipexError as exc:
            _report(exc.message)
            outcomes.append(exc.status)
        else:
            try:
                proc = subprocess.Popen(
                    resolved.argv,
                    executable=resolved.path,
                    stdin=stdin,
                    stdout=stdout,
                    env=env_map,
                )
            except OSError as exc:
                _report(exc.strerror or str(exc))
                outcomes.append(126)
            else:
                outcomes.append(proc)

        if previous_pipe is not None:
            previous_pipe.close()
        if proc is None or is_last:
            stdin = subprocess.DEVNULL
            previous_pipe = None
        else:
            stdin = proc.stdout
            previous_pipe = proc.stdout

    status = 0
    for outcome in outcomes:
        if isinstance(outcome, subprocess.Popen):
            status = _exit_status(outcome.wait())
        else:
            status = outcome
    return status


def run_pipeline(
    infile: str,
    commands: Sequence[str],
    outfile: str,
    env: Environment = None,
) -> int:
    """Run ``commands`` from ``infile`` into ``outfile``, truncating it.

    The output file is created before the input file is opened. Returns
    the exit status of the last command.
    """
    commands = _check_commands(commands)
    out_fd = _open(outfile, os.O_WRONLY | os.O_CREAT | os.O_TRUNC)
    try:
        in_fd = _open(infile, os.O_RDONLY)
        try:
            return _run_stages(in_fd, commands, out_fd, env)
        finally:
            os.close(in_fd)
    finally:
        os.close(out_fd)


def _read_heredoc(limiter: str, stream: IO[Any], sink: IO[bytes]) -> None:
    limit = limiter.encode()
    while True:
        line = stream.readline()
        if not line:
            return
        if isinstance(line, str):
            line = line.encode()
        if not line.endswith(b"\n"):
            # An unterminated last line is dropped, as is the limiter line.
            return
        if line[:-1] == limit:
            return
        sink.write(line)


def run_heredoc(
    limiter: str,
    commands: Sequence[str],
    outfile: str,
    env: Environment = None,
    stdin: Optional[IO[Any]] = None,
) -> int:
    """Feed lines read from ``stdin`` up to ``limiter`` through ``commands``.

    Output is appended to ``outfile``. ``stdin`` may yield text or bytes
    and defaults to the process's standard input. Returns the exit status
    of the last command.
    """
    commands = _check_commands(commands)
    out_fd = _open(outfile, os.O_WRONLY | os.O_CREAT | os.O_APPEND)
    try:
        if stdin is None:
            stdin = getattr(sys.stdin, "buffer", sys.stdin)
        with tempfile.TemporaryFile() as document:
            _read_heredoc(limiter, stdin, document)
            document.flush()
            document.seek(0)
            return _run_stages(document, commands, out_fd, env)
    finally:
        os.close(out_fd)


def _usage() -> int:
    sys.stderr.write("Error: Bad argument\n")
    sys.stderr.flush()
    sys.stdout.write(_USAGE)
    sys.stdout.flush()
    return 1


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Command-line entry: ``infile cmd1 cmd2 ... outfile`` or the here_doc form."""
    args = list(sys.argv[1:] if argv is None else argv)
    if len(args) < 4:
        return _usage()
    try:
        if args[0].startswith(HEREDOC_KEYWORD):
            if len(args) < 5:
                return _usage()
            return run_heredoc(args[1], args[2:-1], args[-1], os.environ)
        return run_pipeline(args[0], args[1:-1], args[-1], os.environ)
    except PipexError as exc:
        _report(exc.message)
        return exc.status


if __name__ == "__main__":
    sys.exit(main())