"""JSON schema for task store documents."""

TASK_SCHEMA = {
    "type": "object",
    "required": ["last_modified"],
    "properties": {
        "exchange_id": {"type": "string", "minLength": 1},
        "last_modified": {"type": "string"},
        "completed": {"type": "boolean"},
        "due_date": {"type": ["string", "null"]},
        "title": {"type": "string"},
        "notes": {"type": "string"},
        "priority": {"enum": ["high", "medium", "low", None]},
        "tags": {"type": "array", "items": {"type": "string"}},
    },
}

STORE_SCHEMA = {
    "$schema": "http://json-schema.org/draft-07/schema#",
    "type": "object",
    "properties": {
        "meta": {
            "type": "object",
            "properties": {
                "schema": {"type": "integer"},
                "source": {"type": "string"},
                "generated_at": {"type": "string"},
                "task_count": {"type": "integer", "minimum": 0},
            },
        },
        "tasks": {
            "type": "object",
            "additionalProperties": TASK_SCHEMA,
        },
    },
}
