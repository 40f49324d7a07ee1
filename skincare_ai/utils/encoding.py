import json
from typing import Any

from sqlalchemy.types import TypeDecorator, Text


class JSONEncodedList(TypeDecorator):
    """Stores an ordered list of strings as JSON text.

    Decoding gives back the exact list that was written, order included.
    A NULL column decodes to an empty list.
    """

    impl = Text
    cache_ok = True

    def process_bind_param(self, value: Any, dialect) -> Any:  # type: ignore[override]
        if value is None:
            return json.dumps([])
        return json.dumps(list(value), ensure_ascii=False)

    def process_result_value(self, value: Any, dialect) -> Any:  # type: ignore[override]
        if not value:
            return []
        return json.loads(value)
