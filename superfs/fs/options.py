# superfs/fs/options.py

"""
Option records for Directory operations
"""
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping, Optional, Union

from .patterns import PatternSpec


@dataclass(frozen=True)
class ReadOptions:
    """Options for Directory.read()"""
    encoding: Optional[str] = 'utf-8'
    recursive: bool = False
    relative_path: str = ''
    skip_files: bool = False
    skip_dirs: bool = False
    add_parent: bool = False
    filter: PatternSpec = None
    ignore: PatternSpec = None


@dataclass(frozen=True)
class CopyOptions:
    """
    Options for Directory.copy()

    recursive is accepted for symmetry with read(); copy always walks the
    whole source tree.
    """
    recursive: bool = False
    overwrite: bool = False
    dir_mode: Optional[int] = None
    file_mode: Optional[int] = None


@dataclass(frozen=True)
class WatchOptions:
    """Options for Directory.watch()"""
    ignore: PatternSpec = None
    quiet_period: Optional[float] = None
    use_polling: Optional[bool] = None
    poll_interval: Optional[float] = None


def merge_options(cls, options: Union[None, Mapping[str, Any], Any],
                  base: Optional[Any] = None, **overrides: Any):
    """
    Build an options record of type cls

    Args:
        cls: Options dataclass
        options: None, an instance of cls, or a mapping of field names
        base: Defaults used for None and mappings (cls() if omitted)
        overrides: Field values taking precedence over options

    Raises:
        TypeError: On unknown option names
    """
    base = base if base is not None else cls()

    if options is None:
        values = {}
    elif isinstance(options, cls):
        base, values = options, {}
    elif isinstance(options, Mapping):
        values = dict(options)
    else:
        raise TypeError(f"Expected {cls.__name__} or mapping, got {type(options).__name__}")

    values.update(overrides)

    known = {f.name for f in fields(cls)}
    unknown = set(values) - known
    if unknown:
        raise TypeError(f"Unknown {cls.__name__} option(s): {', '.join(sorted(unknown))}")

    return replace(base, **values) if values else base
