"""Conversion between stored card rows and the card shape exposed over HTTP.

Stored cards keep flat columns (``pos_x``, ``pos_y``, ``width``, ``height``)
and integer ids. The external shape groups coordinates under ``position`` and
dimensions under ``size`` and carries ids as strings.
"""
from __future__ import annotations
from typing import Any, Dict, Mapping, Optional


def _read(source: Any, name: str) -> Any:
    if source is None:
        return None
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def to_external(persisted: Any) -> Dict[str, Any]:
    """Map a stored card (row or mapping) to its external shape.

    ``messageId`` is left out entirely when the card has no linked message.
    """
    card: Dict[str, Any] = {
        "id": str(_read(persisted, "id")),
        "title": _read(persisted, "title"),
        "content": _read(persisted, "content"),
        "position": {
            "x": _read(persisted, "pos_x"),
            "y": _read(persisted, "pos_y"),
        },
        "size": {
            "width": _read(persisted, "width"),
            "height": _read(persisted, "height"),
        },
    }
    message_id = _read(persisted, "message_id")
    if message_id is not None:
        card["messageId"] = str(message_id)
    return card


def to_persisted(external: Any, message_id: Optional[int] = None) -> Dict[str, Any]:
    """Map an external card to stored column values.

    Missing fields become ``None``. The title is not carried, and the link
    always comes from ``message_id``, never from ``external["messageId"]``.
    """
    position = _read(external, "position")
    size = _read(external, "size")
    return {
        "content": _read(external, "content"),
        "pos_x": _read(position, "x"),
        "pos_y": _read(position, "y"),
        "width": _read(size, "width"),
        "height": _read(size, "height"),
        "message_id": message_id,
    }
