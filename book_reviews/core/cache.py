# book_reviews/core/cache.py
"""
Cache key naming and payload serialization.

Keys are deterministic functions of the logical query, and every payload is
wrapped in a versioned envelope so a change to a cached response shape
shows up as a miss instead of a broken deserialization.
"""

import json
import logging
from typing import Any, Optional, Type, TypeVar, Union

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from book_reviews.core.config import settings

logger = logging.getLogger(__name__)

T = TypeVar("T")

# Bump whenever the shape of a cached response changes.
CACHE_SCHEMA_VERSION = 1


class CacheKeys:
    """Builds the cache key for each cached query."""

    def __init__(self, prefix: str = settings.CACHE_KEY_PREFIX):
        self.prefix = prefix

    def all_books(self) -> str:
        return f"{self.prefix}:books:all"

    def book_reviews(self, book_id: int) -> str:
        # int() keeps "7" and 7 from producing different keys
        return f"{self.prefix}:books:{int(book_id)}:reviews"


class CachePayloadCodec:
    """
    Encodes response models into cache payloads and back.

    Payload format: `{"v": <schema version>, "data": <json-mode dump by alias>}`.
    """

    def __init__(self, version: int = CACHE_SCHEMA_VERSION):
        self.version = version

    def encode(self, value: Any, schema: Union[Type[T], Any]) -> str:
        adapter = TypeAdapter(schema)
        data = adapter.dump_python(value, mode="json", by_alias=True)
        return json.dumps({"v": self.version, "data": data}, separators=(",", ":"))

    def decode(self, payload: Union[str, bytes], schema: Union[Type[T], Any]) -> Optional[T]:
        """Return the decoded value, or None when the payload cannot be trusted."""
        try:
            envelope = json.loads(payload)
        except (TypeError, ValueError):
            logger.warning("Discarding cache payload that is not valid JSON")
            return None

        if not isinstance(envelope, dict) or envelope.get("v") != self.version:
            logger.info(
                "Discarding cache payload with unexpected schema version",
                extra={
                    "expected_version": self.version,
                    "found_version": envelope.get("v") if isinstance(envelope, dict) else None,
                },
            )
            return None

        try:
            return TypeAdapter(schema).validate_python(envelope.get("data"))
        except PydanticValidationError:
            logger.warning(
                "Discarding cache payload that does not match its schema",
                exc_info=True,
            )
            return None


cache_keys = CacheKeys()
