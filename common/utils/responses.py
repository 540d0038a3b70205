"""
Response envelopes for endpoints that return collections or status.

Single records go out bare (they are the resource); listings and health
checks are wrapped so clients can rely on ``success`` and ``data``.

Example:
    from common.utils import list_response

    @router.get("")
    async def list_applications(store: Store):
        records = await store.list()
        return list_response([r.model_dump(mode="json") for r in records])
"""

from typing import Any, Dict, List, Optional


def success_response(data: Any = None, message: Optional[str] = None) -> Dict[str, Any]:
    """Wrap a payload as {"success": true, "data": ..., "message": ...}."""
    response: Dict[str, Any] = {"success": True}

    if data is not None:
        response["data"] = data

    if message:
        response["message"] = message

    return response


def list_response(items: List[Any], message: Optional[str] = None) -> Dict[str, Any]:
    """
    Wrap a listing.

    Args:
        items: Serializable items, in the order they should be shown
        message: Optional note for the client

    Returns:
        success_response envelope plus ``count``
    """
    response = success_response(items, message)
    response["count"] = len(items)
    return response
