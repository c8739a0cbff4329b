"""ID generators for versions, audit records and requests."""

import uuid

from cuid2 import cuid_wrapper

cuid_generator = cuid_wrapper()


def generate_cuid() -> str:
    """Generate a collision-resistant unique identifier (CUID2).

    Used as primary key of versions and audit records.
    """
    result = cuid_generator()
    if not isinstance(result, str):
        raise TypeError(
            f"Expected str from cuid_generator, got {type(result).__name__}"
        )
    return result


def generate_request_id() -> str:
    """Return a new request id for requests that arrive without one."""
    return uuid.uuid4().hex
