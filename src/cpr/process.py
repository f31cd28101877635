"""Run a helper program and capture its standard output into a Buffer.

The child's stderr goes to ``/dev/null`` so query-tool diagnostics never mix
with cpr's own output.  Stdout is read in fixed-size chunks straight into
space reserved at the tail of the caller's :class:`~cpr.buffer.Buffer`.

Every way the child can fail (not installed, crashed, non-zero exit, pipe
trouble) is reported the same way: ``capture_process`` returns ``False``.
Callers that need to distinguish a missing tool should check ``shutil.which``
themselves.
"""

from __future__ import annotations

import subprocess
from collections.abc import Sequence

from cpr.buffer import Buffer
from cpr.cli import print_error

READ_CHUNK_SIZE = 1024

_NEWLINE = ord("\n")


def _read_into(stream, output: Buffer) -> None:
    """Read *stream* until end of file, appending each chunk to *output*."""
    while True:
        with output.reserve(READ_CHUNK_SIZE) as tail:
            count = stream.readinto(tail)
        if not count:
            return
        output.commit(count)


def capture_process(args: Sequence[str], output: Buffer) -> bool:
    """Run *args* and append its stdout to *output*.

    Exactly one trailing newline of the captured text is dropped.  Returns
    ``True`` only when the child exited on its own with status 0.  On
    failure *output* may hold partial data; rolling back is up to the caller.
    """
    head = len(output)
    try:
        proc = subprocess.Popen(
            list(args),
            stdout=subprocess.PIPE,
            stderr=subprocess.DEVNULL,
            bufsize=0,
        )
    except (FileNotFoundError, PermissionError, NotADirectoryError):
        # Program missing or not executable: same as the tool failing.
        return False
    except OSError as e:
        print_error(f"could not spawn process '{args[0]}': {e}")
        return False

    assert proc.stdout is not None
    try:
        _read_into(proc.stdout, output)
    except OSError:
        print_error("could not read process output")
        proc.kill()
        proc.wait()
        return False
    finally:
        proc.stdout.close()

    if len(output) > head and output.last == _NEWLINE:
        output.truncate(len(output) - 1)

    try:
        returncode = proc.wait()
    except OSError:
        print_error("could not wait for process")
        return False

    # Negative return codes mean the child was killed by a signal.
    return returncode == 0
