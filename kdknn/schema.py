# kdknn/schema.py
from jsonschema import Draft7Validator

from .errors import SchemaError

DATASET_SCHEMA = {
    "type": "object",
    "required": ["cols", "data"],
    "properties": {
        "cols": {"type": "integer", "minimum": 0},
        "data": {
            "type": "object",
            "additionalProperties": {"type": "array", "items": {"type": "number"}},
        },
    },
}

# [axis, split, left, right, point]; leaves carry axis -1
NODE_SCHEMA = {
    "type": "array",
    "items": [
        {"type": "integer", "minimum": -1},
        {"type": "number"},
        {"type": "integer", "minimum": -1},
        {"type": "integer", "minimum": -1},
        {"type": "integer", "minimum": -1},
    ],
    "minItems": 5,
    "additionalItems": False,
}

TREE_SCHEMA = {
    "type": "object",
    "required": ["cols", "nodes", "data"],
    "properties": {
        "cols": {"type": "integer", "minimum": 0},
        "nodes": {"type": "array", "items": NODE_SCHEMA},
        "data": DATASET_SCHEMA,
    },
}

MODEL_SCHEMA = {
    "type": "object",
    "required": ["tree", "target"],
    "properties": {"tree": TREE_SCHEMA, "target": DATASET_SCHEMA},
}

for _schema in (DATASET_SCHEMA, TREE_SCHEMA, MODEL_SCHEMA):
    Draft7Validator.check_schema(_schema)


def check_json(record, schema):
    """Validate `record` against `schema`; raise SchemaError listing every problem."""
    errors = sorted(Draft7Validator(schema).iter_errors(record),
                    key=lambda e: [str(p) for p in e.path])
    if errors:
        raise SchemaError("; ".join(
            f"{'/'.join(map(str, err.path)) or '<root>'}: {err.message}" for err in errors
        ))
