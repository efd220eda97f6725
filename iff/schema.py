"""
JSON schema for directory specifications, and the validator used at every
entry point that accepts one.

A specification is a mapping of keys to nodes. A key is one or more
non-empty path segments joined by "/"; "." and ".." are not segments. A node
is text (str that encodes as UTF-8), binary (bytes/bytearray), or another
specification.
"""
import logging
from collections.abc import Mapping
from typing import Any, Dict

from jsonschema import Draft7Validator, FormatChecker, validators
from jsonschema.exceptions import best_match

from .errors import InvalidDirectorySpecError

logger = logging.getLogger(__name__)

_SEGMENT = r"(?!\.\.?(?:/|$))[^/]+"
KEY_PATTERN = rf"^{_SEGMENT}(/{_SEGMENT})*$"

# no "$schema": a "$ref" into a declared metaschema would be validated by the
# stock Draft7Validator instead of DirectoryValidator
DIRECTORY_SCHEMA: Dict[str, Any] = {
    "$id": "iff-directory.schema.json",
    "type": "object",
    "propertyNames": {"type": "string", "pattern": KEY_PATTERN, "format": "utf-8"},
    "additionalProperties": {
        "anyOf": [
            {"type": "string", "format": "utf-8"},
            {"type": "binary"},
            {"$ref": "#"},
        ],
    },
}


def _is_binary(checker, instance) -> bool:
    return isinstance(instance, (bytes, bytearray))


def _is_directory(checker, instance) -> bool:
    # any Mapping counts, not only dict
    return isinstance(instance, Mapping)


_TYPE_CHECKER = Draft7Validator.TYPE_CHECKER.redefine_many(
    {"binary": _is_binary, "object": _is_directory}
)

DirectoryValidator = validators.extend(Draft7Validator, type_checker=_TYPE_CHECKER)

_FORMAT_CHECKER = FormatChecker(formats=())


@_FORMAT_CHECKER.checks("utf-8", raises=UnicodeEncodeError)
def _is_utf8(instance) -> bool:
    """Lone surrogates ("\\ud800") cannot be written to disk or used in a file name."""
    if isinstance(instance, str):
        instance.encode("utf-8")
    return True


_VALIDATOR = DirectoryValidator(DIRECTORY_SCHEMA, format_checker=_FORMAT_CHECKER)


def validate_directory(directory: Any) -> None:
    """
    Raise InvalidDirectorySpecError if `directory` does not match
    DIRECTORY_SCHEMA. Does no filesystem access.
    """
    error = best_match(_VALIDATOR.iter_errors(directory))
    if error is None:
        return
    path = "/".join(str(part) for part in error.absolute_path) or None
    logger.debug("Directory specification rejected at %s: %s", path, error.message)
    where = f" at {path!r}" if path else ""
    raise InvalidDirectorySpecError(
        f"Invalid directory specification{where}: {error.message}", path=path
    )
