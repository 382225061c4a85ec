import os
from typing import Sequence, Tuple

from errors import DuplicatePath, IOFailure

# --------------------------
# File reading/writing
# --------------------------
def read_bytes(path: str) -> bytes:
    try:
        with open(path, "rb") as f:
            return f.read()
    except OSError as e:
        raise IOFailure(path, e) from e


def read_text(path: str) -> str:
    """Read a hex text file; undecodable bytes are left for the hex check to reject"""
    return read_bytes(path).decode("ascii", errors="replace")


def check_distinct(*paths: str) -> None:
    """Reject paths that name the same file"""
    seen = {}
    for path in paths:
        real = os.path.realpath(path)
        if real in seen:
            raise DuplicatePath(f"{path} and {seen[real]} are the same file")
        seen[real] = path


def _discard(path: str) -> None:
    try:
        os.unlink(path)
    except OSError:
        pass


def write_all(outputs: Sequence[Tuple[str, bytes]]) -> None:
    """
    Write every output or none of them.
    Each file goes to a .tmp sibling first; all are renamed into place only
    after every write succeeded.
    """
    check_distinct(*(path for path, _ in outputs))

    staged = []
    try:
        for path, data in outputs:
            tmp_path = path + ".tmp"
            staged.append((tmp_path, path))
            try:
                with open(tmp_path, "wb") as f:
                    f.write(data)
            except OSError as e:
                raise IOFailure(path, e) from e

        placed = []
        for tmp_path, path in staged:
            try:
                os.replace(tmp_path, path)
            except OSError as e:
                for done in placed:
                    _discard(done)
                raise IOFailure(path, e) from e
            placed.append(path)
    finally:
        # Cleanup temporary files
        for tmp_path, _ in staged:
            _discard(tmp_path)
