# superfs/fs/errors.py

"""
Error taxonomy for filesystem operations
"""
import errno as errno_codes
from typing import Optional, Type


class SuperFSError(Exception):
    """Base class for all superfs errors"""


class NotFoundError(SuperFSError, FileNotFoundError):
    """Path does not exist"""


class AccessError(SuperFSError, PermissionError):
    """Path exists but could not be stat'ed, listed or accessed"""


class ReadWriteError(SuperFSError, OSError):
    """Reading, writing or creating a path failed"""


class RemoveError(SuperFSError, OSError):
    """Removing a file or directory failed"""


def translate_os_error(error: OSError,
                       default: Type[SuperFSError],
                       path: Optional[str] = None) -> SuperFSError:
    """
    Map an OSError onto the superfs taxonomy

    Missing paths always become NotFoundError, except for removals which keep
    their RemoveError type so callers can tell a failed delete apart.

    Args:
        error: Original error raised by the os call
        default: Error class used when no more specific class applies
        path: Path to report when the original error carries none

    Returns:
        New error instance (not raised)
    """
    filename = error.filename if error.filename is not None else path

    if default is not RemoveError and error.errno == errno_codes.ENOENT:
        cls = NotFoundError
    else:
        cls = default

    if error.errno is None:
        return cls(str(error))
    return cls(error.errno, error.strerror, filename)
