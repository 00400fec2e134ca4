"""JSON Schema validation of fleet data files."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from jsonschema import Draft7Validator

from .errors import InvalidArgument
from .loader import load_store

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"


class StringDateLoader(yaml.SafeLoader):
    """SafeLoader that leaves unquoted dates as strings, as the schema expects."""


StringDateLoader.yaml_implicit_resolvers = {
    key: [r for r in resolvers if r[0] != "tag:yaml.org,2002:timestamp"]
    for key, resolvers in yaml.SafeLoader.yaml_implicit_resolvers.items()
}


def load_schema(path: Union[str, Path] = SCHEMA_PATH) -> Dict[str, Any]:
    with open(path) as fp:
        return yaml.safe_load(fp)


def validate_data_file(
    filename: Union[str, Path], schema: Optional[Dict[str, Any]] = None
) -> List[str]:
    """
    Check a data file. Returns a list of errors, empty when the file is valid.

    Every schema violation is reported, each followed by its path. A file
    that passes the schema is then loaded, so values the schema cannot
    express (unparseable timestamps, blank text) are reported too.
    """
    schema = schema if schema is not None else load_schema()
    try:
        with open(filename) as fp:
            data = yaml.load(fp, Loader=StringDateLoader)
    except yaml.YAMLError as e:
        return [f"YAML parse error: {e}"]
    except OSError as e:
        return [f"Error: {e}"]

    errors = []
    violations = Draft7Validator(schema).iter_errors(data or {})
    for error in sorted(violations, key=lambda e: [str(p) for p in e.path]):
        errors.append(f"Schema validation error: {error.message}")
        if error.path:
            errors.append(f"  at path: {'.'.join(str(p) for p in error.path)}")
    if errors:
        return errors

    try:
        load_store(filename)
    except InvalidArgument as e:
        errors.append(f"Invalid data: {e}")
    logger.debug("Validated %s: %d error(s)", filename, len(errors))
    return errors


def find_data_files(path: Union[str, Path]) -> List[Path]:
    """A file is returned as-is; a directory yields its YAML files, sorted."""
    path = Path(path)
    if not path.is_dir():
        return [path]
    return sorted(list(path.glob("*.yaml")) + list(path.glob("*.yml")))
