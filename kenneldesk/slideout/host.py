"""Renderer side of the slideout system: picks the form for the top panel."""

from __future__ import annotations

import logging
from collections.abc import Callable, Mapping
from types import MappingProxyType
from typing import Any

from .controller import SlideoutController
from .invalidation import invalidation_keys
from .registry import SlideoutType

_LOG = logging.getLogger(__name__)

FormBuilder = Callable[[Mapping[str, Any]], dict[str, Any]]

DEFAULT_SUCCESS_MESSAGE = "Saved successfully"

SUCCESS_MESSAGES: Mapping[SlideoutType, str] = MappingProxyType(
    {
        SlideoutType.PET_CREATE: "Pet created successfully",
        SlideoutType.PET_EDIT: "Pet updated successfully",
        SlideoutType.OWNER_CREATE: "Customer created successfully",
        SlideoutType.OWNER_EDIT: "Customer updated successfully",
        SlideoutType.BOOKING_CREATE: "Booking created successfully",
        SlideoutType.BOOKING_EDIT: "Booking updated successfully",
        SlideoutType.TASK_CREATE: "Task created successfully",
        SlideoutType.TASK_EDIT: "Task updated successfully",
        SlideoutType.COMMUNICATION_CREATE: "Message sent successfully",
        SlideoutType.MESSAGE_CREATE: "Conversation started",
        SlideoutType.SEND_RECEIPT: "Receipt sent successfully",
        SlideoutType.NOTE_CREATE: "Note added successfully",
        SlideoutType.ACTIVITY_LOG: "Activity logged successfully",
        SlideoutType.VACCINATION_EDIT: "Vaccination updated successfully",
        SlideoutType.BOOKING_CHECK_IN: "Pet checked in successfully",
    }
)


def _activity_entity(props: Mapping[str, Any]) -> tuple[str, Any]:
    entity_type = props.get("entityType") or (
        "owner" if props.get("ownerId") else "pet" if props.get("petId") else "booking"
    )
    entity_id = (
        props.get("entityId") or props.get("ownerId") or props.get("petId") or props.get("bookingId")
    )
    return entity_type, entity_id


def _vaccination_list(props: Mapping[str, Any]) -> list[Any]:
    if props.get("vaccinations"):
        return list(props["vaccinations"])
    if props.get("vaccination"):
        return [props["vaccination"]]
    return []


def _activity_form(props: Mapping[str, Any]) -> dict[str, Any]:
    entity_type, entity_id = _activity_entity(props)
    return {
        "component": "LogActivityForm",
        "entityType": entity_type,
        "entityId": entity_id,
        "defaultEmail": props.get("defaultEmail"),
        "defaultPhone": props.get("defaultPhone"),
    }


FORMS: Mapping[SlideoutType, FormBuilder] = MappingProxyType(
    {
        SlideoutType.PET_CREATE: lambda p: {"component": "PetForm", "pet": None, "ownerId": p.get("ownerId")},
        SlideoutType.PET_EDIT: lambda p: {"component": "PetForm", "pet": p.get("pet")},
        SlideoutType.OWNER_CREATE: lambda p: {"component": "OwnerForm", "owner": None},
        SlideoutType.OWNER_EDIT: lambda p: {"component": "OwnerForm", "owner": p.get("owner")},
        SlideoutType.BOOKING_CREATE: lambda p: {
            "component": "BookingSlideoutForm",
            "mode": "create",
            "initialPetId": p.get("petId"),
            "initialOwnerId": p.get("ownerId"),
        },
        SlideoutType.BOOKING_EDIT: lambda p: {
            "component": "BookingSlideoutForm",
            "mode": "edit",
            "bookingId": p.get("bookingId"),
        },
        SlideoutType.BOOKING_CHECK_IN: lambda p: {
            "component": "CheckInSlideoutForm",
            "bookingId": p.get("bookingId"),
            "booking": p.get("booking"),
        },
        SlideoutType.TASK_CREATE: lambda p: {
            "component": "TaskSlideoutForm",
            "mode": "create",
            "petId": p.get("petId"),
            "bookingId": p.get("bookingId"),
        },
        SlideoutType.TASK_EDIT: lambda p: {
            "component": "TaskSlideoutForm",
            "mode": "edit",
            "taskId": p.get("taskId"),
        },
        SlideoutType.COMMUNICATION_CREATE: lambda p: {
            "component": "CommunicationSlideoutForm",
            "ownerId": p.get("ownerId"),
            "petId": p.get("petId"),
            "bookingId": p.get("bookingId"),
        },
        SlideoutType.MESSAGE_CREATE: lambda p: {"component": "NewConversationForm"},
        SlideoutType.SEND_RECEIPT: lambda p: {
            "component": "SendReceiptForm",
            "ownerId": p.get("ownerId"),
            "payment": p.get("payment"),
        },
        SlideoutType.NOTE_CREATE: lambda p: {
            "component": "NoteForm",
            "ownerId": p.get("ownerId"),
            "petId": p.get("petId"),
            "bookingId": p.get("bookingId"),
            "paymentId": p.get("paymentId"),
        },
        SlideoutType.ACTIVITY_LOG: _activity_form,
        SlideoutType.VACCINATION_EDIT: lambda p: {
            "component": "VaccinationEditForm",
            "vaccinations": _vaccination_list(p),
            "initialIndex": p.get("initialIndex") or 0,
            "petId": p.get("petId"),
            "petName": p.get("petName"),
        },
    }
)


def success_message(panel_type: SlideoutType | str | None) -> str:
    if panel_type is None:
        return DEFAULT_SUCCESS_MESSAGE
    return SUCCESS_MESSAGES.get(SlideoutType.coerce(panel_type), DEFAULT_SUCCESS_MESSAGE)


def render_form(panel_type: SlideoutType | str, props: Mapping[str, Any]) -> dict[str, Any]:
    """Return the form descriptor for ``panel_type``.

    Unregistered types produce a placeholder message instead of an error.
    """

    builder = FORMS.get(SlideoutType.coerce(panel_type))
    if builder is None:
        type_name = panel_type.value if isinstance(panel_type, SlideoutType) else panel_type
        return {"component": None, "message": f"Unknown panel type: {type_name}"}
    return builder(props)


class SlideoutHost:
    """Connects the controller to whatever draws the panel.

    ``notify`` receives the success message after a form completes (the web
    layer passes :func:`flask.flash`).
    """

    def __init__(
        self,
        controller: SlideoutController,
        *,
        tenant_id: Any = "unknown",
        notify: Callable[[str], Any] | None = None,
    ) -> None:
        self.controller = controller
        self.tenant_id = tenant_id
        self.notify = notify

    def on_form_success(self, result: Any = None) -> str:
        state = self.controller.state
        panel_type = state.type if state is not None else None
        props = state.props if state is not None else {}
        keys = invalidation_keys(panel_type, result, props, tenant_id=self.tenant_id) if state else []
        message = success_message(panel_type)
        self.controller.handle_success(
            result,
            invalidate=keys,
            on_success=props.get("onSuccess") if callable(props.get("onSuccess")) else None,
        )
        _LOG.info("%s: %s", panel_type, message)
        if self.notify is not None:
            self.notify(message)
        return message

    def render(self) -> dict[str, Any] | None:
        view = self.controller.view()
        state = view["current_panel"]
        if not view["is_open"] or state is None:
            return None
        return {
            "title": state.title,
            "description": state.description,
            "width": state.width,
            "back_label": view["previous_label"],
            "can_go_back": view["on_back"] is not None,
            "form": render_form(state.type, state.props),
        }


__all__ = [
    "DEFAULT_SUCCESS_MESSAGE",
    "FORMS",
    "SUCCESS_MESSAGES",
    "SlideoutHost",
    "render_form",
    "success_message",
]
