"""Service-level errors translated to HTTP responses by the routers."""


class NotFoundError(ValueError):
    """Record does not exist or is not owned by the caller."""


class InvalidRecordError(ValueError):
    """Merged record fails validation."""


def describe_errors(errors) -> str:
    """
    Turn pydantic error dicts into a single human-readable message.

    Examples:
        >>> describe_errors([{"loc": ("body", "name"), "msg": "Field required"}])
        'name: Field required'
    """
    parts = []
    for error in errors:
        location = ".".join(
            str(part) for part in error.get("loc", ()) if part not in ("body", "path", "query")
        )
        parts.append(f"{location}: {error['msg']}" if location else error["msg"])
    return "; ".join(parts) or "Invalid request"
