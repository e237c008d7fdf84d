"""Static display metadata for every slideout panel type."""

from __future__ import annotations

from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple

DEFAULT_TITLE = "Panel"
DEFAULT_WIDTH = "max-w-xl"
DEFAULT_BACK_LABEL = "Previous"


class SlideoutType(str, Enum):
    """Closed set of panels the dashboard knows how to render."""

    BOOKING_CREATE = "bookingCreate"
    BOOKING_EDIT = "bookingEdit"
    OWNER_CREATE = "ownerCreate"
    OWNER_EDIT = "ownerEdit"
    PET_CREATE = "petCreate"
    PET_EDIT = "petEdit"
    TASK_CREATE = "taskCreate"
    TASK_EDIT = "taskEdit"
    COMMUNICATION_CREATE = "communicationCreate"
    MESSAGE_CREATE = "messageCreate"
    SEND_RECEIPT = "sendReceipt"
    NOTE_CREATE = "noteCreate"
    ACTIVITY_LOG = "activityLog"
    VACCINATION_EDIT = "vaccinationEdit"
    BOOKING_CHECK_IN = "bookingCheckIn"

    @classmethod
    def coerce(cls, value: str | SlideoutType) -> SlideoutType | str:
        """Return the enum member for ``value`` or the raw string if unknown."""

        try:
            return cls(value)
        except ValueError:
            return value


class PanelConfig(NamedTuple):
    title: str
    description: str
    width: str


SLIDEOUT_CONFIG: Mapping[SlideoutType, PanelConfig] = MappingProxyType(
    {
        SlideoutType.BOOKING_CREATE: PanelConfig(
            "New Booking", "Create a new booking for a customer", "max-w-3xl"
        ),
        SlideoutType.BOOKING_EDIT: PanelConfig(
            "Edit Booking", "Update booking details", "max-w-3xl"
        ),
        SlideoutType.OWNER_CREATE: PanelConfig(
            "New Customer", "Add a new customer to your database", "max-w-2xl"
        ),
        SlideoutType.OWNER_EDIT: PanelConfig(
            "Edit Customer", "Update customer information", "max-w-2xl"
        ),
        SlideoutType.PET_CREATE: PanelConfig(
            "New Pet", "Add a new pet to your database", "max-w-2xl"
        ),
        SlideoutType.PET_EDIT: PanelConfig("Edit Pet", "Update pet information", "max-w-2xl"),
        SlideoutType.TASK_CREATE: PanelConfig("New Task", "Create a new task", "max-w-xl"),
        SlideoutType.TASK_EDIT: PanelConfig("Edit Task", "Update task details", "max-w-xl"),
        SlideoutType.COMMUNICATION_CREATE: PanelConfig(
            "New Communication", "Send a message to a customer", "max-w-2xl"
        ),
        SlideoutType.MESSAGE_CREATE: PanelConfig(
            "New Conversation", "Start a conversation with a customer", "max-w-xl"
        ),
        SlideoutType.SEND_RECEIPT: PanelConfig(
            "Send Receipt", "Email payment receipt to customer", "max-w-xl"
        ),
        SlideoutType.NOTE_CREATE: PanelConfig("Add Note", "Add a note to this record", "max-w-xl"),
        SlideoutType.ACTIVITY_LOG: PanelConfig(
            "Log Activity", "Log a manual activity or interaction", "max-w-xl"
        ),
        SlideoutType.VACCINATION_EDIT: PanelConfig(
            "Update Vaccination", "Update vaccination record", "max-w-xl"
        ),
        SlideoutType.BOOKING_CHECK_IN: PanelConfig(
            "Check In", "Confirm pet arrival and record check-in details", "max-w-2xl"
        ),
    }
)

# Shorter than the titles; only used for the back button breadcrumb.
SLIDEOUT_LABELS: Mapping[SlideoutType, str] = MappingProxyType(
    {
        SlideoutType.BOOKING_CREATE: "Booking",
        SlideoutType.BOOKING_EDIT: "Booking",
        SlideoutType.OWNER_CREATE: "Customer",
        SlideoutType.OWNER_EDIT: "Customer",
        SlideoutType.PET_CREATE: "Pet",
        SlideoutType.PET_EDIT: "Pet",
        SlideoutType.TASK_CREATE: "Task",
        SlideoutType.TASK_EDIT: "Task",
        SlideoutType.COMMUNICATION_CREATE: "Message",
        SlideoutType.MESSAGE_CREATE: "Conversation",
        SlideoutType.SEND_RECEIPT: "Receipt",
        SlideoutType.NOTE_CREATE: "Note",
        SlideoutType.ACTIVITY_LOG: "Activity",
        SlideoutType.VACCINATION_EDIT: "Vaccination",
        SlideoutType.BOOKING_CHECK_IN: "Check In",
    }
)


def config_for(panel_type: SlideoutType | str) -> PanelConfig | None:
    return SLIDEOUT_CONFIG.get(SlideoutType.coerce(panel_type))


def label_for_type(panel_type: SlideoutType | str) -> str:
    return SLIDEOUT_LABELS.get(SlideoutType.coerce(panel_type), DEFAULT_BACK_LABEL)


__all__ = [
    "DEFAULT_BACK_LABEL",
    "DEFAULT_TITLE",
    "DEFAULT_WIDTH",
    "PanelConfig",
    "SLIDEOUT_CONFIG",
    "SLIDEOUT_LABELS",
    "SlideoutType",
    "config_for",
    "label_for_type",
]
