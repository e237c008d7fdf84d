"""Cached queries a finished slideout workflow may have made stale."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .registry import SlideoutType

CacheKey = tuple[Any, ...]


def _lookup(source: Any, name: str) -> Any:
    if isinstance(source, Mapping):
        return source.get(name)
    return getattr(source, name, None)


def invalidation_keys(
    panel_type: SlideoutType | str,
    result: Any = None,
    props: Mapping[str, Any] | None = None,
    *,
    tenant_id: Any = "unknown",
) -> list[CacheKey]:
    """Return the cache keys to refresh after ``panel_type`` completes.

    ``result`` is whatever the form reported on success and ``props`` are the
    properties the panel was opened with. Keys that need an identifier the
    caller did not provide are left out.
    """

    props = props or {}
    tenant = {"tenantId": tenant_id}
    panel_type = SlideoutType.coerce(panel_type)
    record_id = _lookup(result, "recordId")
    result_owner = _lookup(result, "ownerId")
    result_pet = _lookup(result, "petId")
    owner_id = props.get("ownerId")
    pet_id = props.get("petId")
    booking_id = props.get("bookingId")

    keys: list[CacheKey | None]
    if panel_type in (SlideoutType.PET_CREATE, SlideoutType.PET_EDIT):
        keys = [
            ("pets", tenant),
            ("pets", tenant, record_id) if record_id else None,
            ("owner", result_owner) if result_owner else None,
        ]
    elif panel_type in (SlideoutType.OWNER_CREATE, SlideoutType.OWNER_EDIT):
        keys = [
            ("owners", tenant),
            ("owner", record_id) if record_id else None,
        ]
    elif panel_type in (SlideoutType.BOOKING_CREATE, SlideoutType.BOOKING_EDIT):
        keys = [
            ("bookings",),
            ("dashboard",),
            ("owner", result_owner) if result_owner else None,
            ("pets", tenant, result_pet) if result_pet else None,
        ]
    elif panel_type in (SlideoutType.TASK_CREATE, SlideoutType.TASK_EDIT):
        keys = [("tasks",), ("dashboard",)]
    elif panel_type in (
        SlideoutType.COMMUNICATION_CREATE,
        SlideoutType.NOTE_CREATE,
        SlideoutType.ACTIVITY_LOG,
    ):
        keys = [
            ("communications",),
            ("owner", owner_id) if owner_id else None,
            ("customerTimeline", owner_id) if owner_id else None,
            ("notes",),
            ("activities",),
        ]
    elif panel_type is SlideoutType.MESSAGE_CREATE:
        keys = [("messages", "conversations"), ("messages",)]
    elif panel_type is SlideoutType.SEND_RECEIPT:
        keys = [
            ("communications",),
            ("owner", owner_id) if owner_id else None,
        ]
    elif panel_type is SlideoutType.VACCINATION_EDIT:
        keys = [
            ("petVaccinations", {"tenantId": tenant_id, "petId": pet_id}),
            ("vaccinations",),
            ("vaccinations", "expiring"),
            ("pets", tenant, pet_id) if pet_id else None,
        ]
    elif panel_type is SlideoutType.BOOKING_CHECK_IN:
        keys = [
            ("bookings",),
            ("calendar",),
            ("dashboard",),
            ("vaccinations", "expiring"),
            ("bookings", booking_id) if booking_id else None,
        ]
    else:
        keys = []
    return [key for key in keys if key is not None]


__all__ = ["CacheKey", "invalidation_keys"]
