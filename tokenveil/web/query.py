"""Case-insensitive query-string lookup."""

from typing import Dict, Optional
from urllib.parse import urlsplit, parse_qsl


def _extract_query(query: str) -> str:
    """
    Return the query part of a URL or path, or of a bare query string.

    Only strings with a scheme and host, or starting with '/', are treated
    as links; anything else is a query whose values may themselves be URLs.
    The fragment is never part of the query.
    """
    parts = urlsplit(query)
    if (parts.scheme and parts.netloc) or query.startswith('/'):
        return parts.query

    query = query.partition('#')[0]
    return query[1:] if query.startswith('?') else query


def get_query_params_ci(query: str) -> Dict[str, str]:
    """
    Map lowercased query parameter names to their values.

    Args:
        query: Raw query string ("?a=1&B=2", "a=1") or a full URL

    Returns:
        Dictionary keyed by lowercased name. When a name repeats (in any
        case) the last occurrence wins.

    Example:
        >>> get_query_params_ci("https://example.com/?Token=AB123&x=")
        {'token': 'AB123', 'x': ''}
    """
    params = {}
    for key, value in parse_qsl(_extract_query(query), keep_blank_values=True):
        params[key.lower()] = value
    return params


def get_query_param(query: str, name: str, default: Optional[str] = None) -> Optional[str]:
    """Look up a single query parameter by name, ignoring case."""
    return get_query_params_ci(query).get(name.lower(), default)
