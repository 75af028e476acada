"""Cache key builder for query results."""

from collections.abc import Mapping


def build_cache_key(
    query_type: str,
    params: Mapping[str, str],
    prefix: str = "",
) -> str:
    """Build a deterministic cache key for a query.

    Parameters are sorted by name so that two mappings with the same
    content always produce the same key.

    Args:
        query_type: Query type, e.g. "tickets"
        params: Query parameters
        prefix: Namespace, e.g. "zendesk:"

    Returns:
        Formatted cache key: "{prefix}{query_type}:{k1=v1&k2=v2}"

    Raises:
        ValueError: If query_type is empty

    Example:
        >>> build_cache_key("tickets", {"status": "open"})
        'tickets:status=open'

        >>> build_cache_key("tickets", {"status": "open", "priority": "high"}, "zendesk:")
        'zendesk:tickets:priority=high&status=open'
    """
    if not query_type:
        raise ValueError("query_type cannot be empty")

    query = "&".join(f"{name}={params[name]}" for name in sorted(params))
    return f"{prefix}{query_type}:{query}"


def query_type_pattern(query_type: str, prefix: str = "") -> str:
    """Return the prefix pattern matching every key of one query type.

    Example:
        >>> query_type_pattern("users", "zendesk:")
        'zendesk:users:'
    """
    return f"{prefix}{query_type}:"
