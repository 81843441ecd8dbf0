"""Schema loading and validation for the bundled JSON Schemas."""

import json
from pathlib import Path

import jsonschema

SCHEMAS_DIR = Path(__file__).resolve().parent.parent / "schemas"


def load_schema(path: Path | str) -> dict:
    """Load a JSON Schema file and return as dict.

    A bare name such as ``"config"`` resolves to ``schemas/config.json``
    inside the package.
    """
    path = Path(path)
    if not path.suffix:
        path = SCHEMAS_DIR / f"{path.name}.json"
    with open(path) as f:
        return json.load(f)


def schema_error(document: object, schema: dict) -> str | None:
    """Return a readable validation error for document, or None if it is valid."""
    try:
        jsonschema.validate(document, schema)
    except jsonschema.ValidationError as e:
        where = "/".join(str(p) for p in e.absolute_path) or "<root>"
        return f"{where}: {e.message}"
    return None
