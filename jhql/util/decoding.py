import json
import os
from typing import IO, Union

from jhql.errors.errors import DecodeError

type JSONValue = None | bool | int | float | str | list[JSONValue] | dict[str, JSONValue]

type Source = Union[str, bytes, os.PathLike[str], IO[str], IO[bytes]]


def source_kind(source: Source) -> str:
    if isinstance(source, (str, bytes)):
        return "text"
    if isinstance(source, os.PathLike):
        return "file"
    return "stream"


def decode(source: Source) -> JSONValue:
    """
    Reads a JSON value from JSON text, a path to a JSON file or an open (text or binary) stream.

    Strings are always treated as JSON text, never as file names.
    """
    try:
        if isinstance(source, (str, bytes)):
            return json.loads(source)
        if isinstance(source, os.PathLike):
            with open(source, "rb") as fp:
                return json.load(fp)
        return json.load(source)
    except (ValueError, OSError, RecursionError) as e:
        # json.JSONDecodeError and UnicodeDecodeError are both ValueErrors
        raise DecodeError(f"cannot decode JSON from {source_kind(source)}: {e}") from e
