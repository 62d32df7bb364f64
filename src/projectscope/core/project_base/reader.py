from __future__ import annotations

"""
Project Base Reader and Validator.

Locates the persisted project base, parses it and checks it against the
ProjectBase shape. Validation never raises: it returns a ValidationResult
so callers can tell a malformed artifact apart from an I/O failure. The
loader turns both into descriptive, actionable exceptions.
"""

import logging
import os
from typing import Any, Callable, Dict, List, Tuple

from projectscope.domain.constants import DEFAULT_STRUCTURE_FILE_NAME
from projectscope.domain.errors import ProjectBaseInvalidError, ProjectBaseNotFoundError
from projectscope.domain.project_models import ProjectBase, ValidationResult
from projectscope.domain.structure_models import NODE_KINDS
from projectscope.infra.fs import read_json_safely

logger = logging.getLogger(__name__)

# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def resolve_project_base_path(base_directory: str, file_name: str = DEFAULT_STRUCTURE_FILE_NAME) -> str:
    """Join directory and file name; an absolute file name is used as is."""
    if os.path.isabs(file_name):
        return file_name
    return os.path.join(base_directory, file_name)


def load_project_base(
        base_directory: str,
        file_name: str = DEFAULT_STRUCTURE_FILE_NAME,
) -> Tuple[ProjectBase, str]:
    """
    Load and validate the persisted project base.

    Args:
        base_directory: Directory holding the artifact (the scan output dir).
        file_name: Artifact file name, or an absolute path.

    Returns:
        Tuple[ProjectBase, str]: Parsed artifact and its resolved path.

    Raises:
        ProjectBaseNotFoundError: No artifact at the expected path.
        ProjectBaseInvalidError: Artifact unreadable, empty, malformed or
                                 missing required fields.
    """
    structure_path = os.path.abspath(resolve_project_base_path(base_directory, file_name))

    if not os.path.exists(structure_path):
        raise ProjectBaseNotFoundError(
            f"Project base not found at {structure_path}. "
            f"Run 'projectscope scan' to generate the project baseline first."
        )

    try:
        raw = read_json_safely(structure_path)
    except (OSError, ValueError) as e:
        raise ProjectBaseInvalidError(f"Project base file {structure_path} is unreadable: {e}") from e

    if raw is None:
        raise ProjectBaseInvalidError(f"Project base file {structure_path} is empty or unreadable.")

    result = validate_project_base(raw)
    if not result.ok or result.value is None:
        details = "; ".join(result.errors)
        raise ProjectBaseInvalidError(f"Project base file {structure_path} is invalid: {details}")

    logger.debug(f"Project base loaded from {structure_path}")
    return result.value, structure_path


def validate_project_base(raw: Any) -> ValidationResult:
    """
    Check an untrusted document against the ProjectBase shape.

    'rootDirectory' is the only required field. Optional fields must have
    the right type when present; null is treated as absent.

    Args:
        raw: Parsed JSON value.

    Returns:
        ValidationResult: ok with the parsed ProjectBase, or the list of
                          violations.
    """
    errors: List[str] = []

    if not isinstance(raw, dict):
        return ValidationResult(ok=False, errors=[f"expected an object, found {type(raw).__name__}"])

    if "rootDirectory" not in raw:
        errors.append("missing required field 'rootDirectory'")
    elif not isinstance(raw["rootDirectory"], str):
        errors.append("field 'rootDirectory' must be a string")

    for key in ("generatedAt", "projectName", "description", "packageManager"):
        _check_optional(raw, key, _is_str, "a string", errors)

    for key in ("techStack", "componentDirectories", "entityDirectories", "notableFiles", "warnings"):
        _check_optional(raw, key, _is_str_list, "a list of strings", errors)

    _check_records(raw, "languages", _language_errors, errors)
    _check_records(raw, "primaryDirectories", _directory_errors, errors)
    _check_records(raw, "scripts", _script_errors, errors)

    options = raw.get("options")
    if options is not None:
        if isinstance(options, dict):
            errors.extend(_options_errors(options))
        else:
            errors.append("field 'options' must be an object")

    tree = raw.get("tree")
    if tree is not None:
        errors.extend(_node_errors(tree, "tree"))

    if errors:
        return ValidationResult(ok=False, errors=errors)
    return ValidationResult(ok=True, value=ProjectBase.from_dict(raw))

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: TYPE PREDICATES
# -----------------------------------------------------------------------------

def _is_str(value: Any) -> bool:
    return isinstance(value, str)


def _is_bool(value: Any) -> bool:
    return isinstance(value, bool)


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def _is_str_list(value: Any) -> bool:
    return isinstance(value, list) and all(isinstance(v, str) for v in value)


def _check_optional(
        data: Dict[str, Any],
        key: str,
        predicate: Callable[[Any], bool],
        expected: str,
        errors: List[str],
        where: str = "",
) -> None:
    value = data.get(key)
    if value is not None and not predicate(value):
        errors.append(f"field '{where}{key}' must be {expected}")


def _check_required(
        data: Dict[str, Any],
        key: str,
        predicate: Callable[[Any], bool],
        expected: str,
        errors: List[str],
        where: str,
) -> None:
    if key not in data:
        errors.append(f"missing required field '{where}{key}'")
    elif not predicate(data[key]):
        errors.append(f"field '{where}{key}' must be {expected}")

# -----------------------------------------------------------------------------
# PRIVATE HELPERS: STRUCTURE VALIDATORS
# -----------------------------------------------------------------------------

def _check_records(
        data: Dict[str, Any],
        key: str,
        validator: Callable[[Any, str], List[str]],
        errors: List[str],
) -> None:
    value = data.get(key)
    if value is None:
        return
    if not isinstance(value, list):
        errors.append(f"field '{key}' must be a list")
        return
    for i, item in enumerate(value):
        errors.extend(validator(item, f"{key}[{i}]."))


def _language_errors(item: Any, where: str) -> List[str]:
    if not isinstance(item, dict):
        return [f"entry '{where.rstrip('.')}' must be an object"]
    data: Dict[str, Any] = item
    errors: List[str] = []
    _check_required(data, "language", _is_str, "a string", errors, where)
    _check_required(data, "count", _is_number, "a number", errors, where)
    return errors


def _directory_errors(item: Any, where: str) -> List[str]:
    if not isinstance(item, dict):
        return [f"entry '{where.rstrip('.')}' must be an object"]
    data: Dict[str, Any] = item
    errors: List[str] = []
    _check_required(data, "name", _is_str, "a string", errors, where)
    _check_required(data, "path", _is_str, "a string", errors, where)
    _check_optional(data, "truncated", _is_bool, "a boolean", errors, where)
    return errors


def _script_errors(item: Any, where: str) -> List[str]:
    if not isinstance(item, dict):
        return [f"entry '{where.rstrip('.')}' must be an object"]
    data: Dict[str, Any] = item
    errors: List[str] = []
    _check_required(data, "name", _is_str, "a string", errors, where)
    _check_required(data, "command", _is_str, "a string", errors, where)
    return errors


def _options_errors(options: Dict[str, Any]) -> List[str]:
    errors: List[str] = []
    where = "options."
    _check_optional(options, "maxDepth", _is_number, "a number", errors, where)
    _check_optional(options, "maxEntriesPerDirectory", _is_number, "a number", errors, where)
    _check_optional(options, "includeHidden", _is_bool, "a boolean", errors, where)
    _check_optional(options, "projectDescription", _is_str, "a string", errors, where)
    for key in ("ignore", "manualTechStack", "manualLanguages"):
        _check_optional(options, key, _is_str_list, "a list of strings", errors, where)
    return errors


def _node_errors(node: Any, where: str) -> List[str]:
    """Validate one StructureNode and, recursively, its children."""
    if not isinstance(node, dict):
        return [f"node '{where}' must be an object"]

    errors: List[str] = []
    prefix = f"{where}."
    _check_required(node, "name", _is_str, "a string", errors, prefix)
    _check_required(node, "path", _is_str, "a string", errors, prefix)
    _check_required(node, "type", lambda v: v in NODE_KINDS, f"one of {', '.join(NODE_KINDS)}", errors, prefix)
    _check_optional(node, "extension", _is_str, "a string", errors, prefix)
    _check_optional(node, "truncated", _is_bool, "a boolean", errors, prefix)

    children = node.get("children")
    if children is None:
        return errors
    if not isinstance(children, list):
        errors.append(f"field '{prefix}children' must be a list")
        return errors
    if node.get("type") != "directory" and children:
        errors.append(f"node '{where}' of type '{node.get('type')}' cannot have children")

    for i, child in enumerate(children):
        errors.extend(_node_errors(child, f"{where}.children[{i}]"))
    return errors
