import typing as t

import orjson


def to_json_safe(value: t.Any) -> t.Any:
    """Round-trip a value through orjson so it can be stored in a JSONField.

    UUIDs and datetimes become strings (ISO 8601 for datetimes), Decimals become strings.
    """
    return orjson.loads(orjson.dumps(value, default=str))
