"""UUID utilities for neo-access."""

import uuid
import time


def generate_uuid_v7() -> uuid.UUID:
    """
    Generate a UUIDv7 with time-based ordering.

    UUIDv7 keeps index inserts roughly append-only, which matters for the
    audit log and any table keyed by generated ids.

    Returns:
        A version 7 UUID
    """
    # Current timestamp in milliseconds (48 bits)
    timestamp_ms = int(time.time() * 1000)
    timestamp_bytes = timestamp_ms.to_bytes(6, byteorder='big')

    # Random bytes for the rest (80 bits)
    random_bytes = uuid.uuid4().bytes[6:]

    uuid_bytes = timestamp_bytes + random_bytes

    # Set version to 7 (high nibble of the 7th byte)
    uuid_bytes = uuid_bytes[:6] + bytes([(uuid_bytes[6] & 0x0f) | 0x70]) + uuid_bytes[7:]

    # Set variant to 10 (top two bits of the 9th byte)
    uuid_bytes = uuid_bytes[:8] + bytes([(uuid_bytes[8] & 0x3f) | 0x80]) + uuid_bytes[9:]

    return uuid.UUID(bytes=uuid_bytes)
