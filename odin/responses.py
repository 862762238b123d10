"""
Response body assembly.

Every API response body is made of a meta object, either a data payload or
an error object, and a links object. build_body() assembles and validates
those parts for a given request method.
"""

from enum import Enum
from typing import Any, Dict, List, Mapping, Optional, Sequence, Tuple

from common.logging_config import get_logger
from odin.exceptions import InvalidQueryError, ResponseBuildError

logger = get_logger(__name__)


class RequestMethod(str, Enum):
    GET = "GET"
    POST = "POST"
    PATCH = "PATCH"
    DELETE = "DELETE"
    HEAD = "HEAD"
    OPTIONS = "OPTIONS"


# Methods whose responses never carry a data payload
_BODILESS_METHODS = {RequestMethod.HEAD, RequestMethod.OPTIONS}


def default_meta() -> Dict[str, Any]:
    return {"status": "", "message": ""}


def build_body(
    kind: RequestMethod,
    meta: Mapping[str, Any],
    data: Any = None,
    error: Optional[Mapping[str, Any]] = None,
    links: Optional[Mapping[str, Any]] = None,
) -> Dict[str, Any]:
    """
    Build a response body for a request of the given method.

    Args:
        kind: Request method the response answers
        meta: Metadata about the response (status, message, paging...)
        data: Payload, a mapping or a list. Mutually exclusive with error
        error: Error details. Mutually exclusive with data
        links: Related links; defaults to an empty object

    Returns:
        {"meta", "data", "links"} on success or {"meta", "error", "links"} on error

    Raises:
        ResponseBuildError: If a part has the wrong shape or both data and error are given
    """
    try:
        kind = RequestMethod(kind)
    except ValueError:
        raise ResponseBuildError(f"Unsupported request method: {kind!r}")
    links = {} if links is None else links

    if not isinstance(meta, Mapping):
        raise ResponseBuildError("Meta is not an object.")
    if not isinstance(links, Mapping):
        raise ResponseBuildError("Links is not an object.")
    if dict(meta) == default_meta():
        logger.debug(f"Building {kind.value} response with empty meta")

    if error:
        if not isinstance(error, Mapping):
            raise ResponseBuildError("Error is not an object.")
        if data is not None:
            raise ResponseBuildError("A response cannot carry both data and an error.")
        return {"meta": dict(meta), "error": dict(error), "links": dict(links)}

    if kind in _BODILESS_METHODS:
        data = None
    elif data is None:
        data = [] if kind == RequestMethod.GET else {}

    if data is not None and not isinstance(data, (Mapping, list)):
        raise ResponseBuildError("Data is not an object or an array.")

    body = {"meta": dict(meta), "links": dict(links)}
    if data is not None:
        body["data"] = data
    return body


def add_entry(target: Dict[str, Any], key: str, value: Any) -> Dict[str, Any]:
    """
    Set one key/value pair on a meta, links or data object.

    Returns:
        target, to allow chaining
    """
    if not isinstance(target, dict):
        raise ResponseBuildError("Target is not an object.")
    if not isinstance(key, str):
        raise ResponseBuildError("Key must be a string.")
    target[key] = value
    return target


def parse_list_param(value: Optional[str]) -> List[str]:
    """
    Parse a list query parameter such as fields=name, email or populate=categories.
    """
    if not value:
        return []
    return [item for item in value.replace(' ', '').split(',') if item]


def parse_sort(value: Optional[str], allowed: Sequence[str]) -> List[Tuple[str, str]]:
    """
    Parse a sort query parameter such as sort=about DESC, created_at.

    Returns:
        List of (attribute, direction) pairs, direction being ASC or DESC

    Raises:
        InvalidQueryError: If an attribute is not sortable or a direction is unknown
    """
    order = []
    for entry in (value or "").split(','):
        parts = entry.split()
        if not parts:
            continue
        attribute = parts[0]
        direction = parts[1].upper() if len(parts) > 1 else "ASC"
        if attribute not in allowed:
            raise InvalidQueryError(f"Cannot sort by {attribute!r}")
        if direction not in ("ASC", "DESC") or len(parts) > 2:
            raise InvalidQueryError(f"Invalid sort direction in {entry.strip()!r}")
        order.append((attribute, direction))
    return order


def pagination_meta(
    criteria: Optional[Mapping[str, Any]],
    limit: int,
    skip: Optional[int] = None,
    page: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Describe the slice of a collection returned by a GET request.

    A page offset takes precedence over skip; page 0 falls back to skip.
    """
    start = (page or 0) * limit or skip or 0

    return {
        "criteria": dict(criteria or {}),
        "limit": limit,
        "start": start,
        "end": start + limit,
        "page": start // limit if limit > 0 else 0,
    }
