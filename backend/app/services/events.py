"""
Push-channel events.

Every message on the channel is one of the variants below, serialised as
``{"event": <name>, "data": {...}}``. The set is closed: ``parse_event``
rejects anything else, so consumers can dispatch on the variant type.
"""

from typing import Annotated, Any, Literal, Union

from pydantic import Field, TypeAdapter

from app.schemas import ActivityOut, APIModel, NotificationOut, UserOut


class DeletedRef(APIModel):
    id: int


class OrderUpdatePayload(APIModel):
    user_id: int
    new_order_count: int
    message: str


class UserAdded(APIModel):
    event: Literal["userAdded"] = "userAdded"
    data: UserOut


class UserUpdated(APIModel):
    event: Literal["userUpdated"] = "userUpdated"
    data: UserOut


class UserDeleted(APIModel):
    event: Literal["userDeleted"] = "userDeleted"
    data: DeletedRef


class NewNotification(APIModel):
    event: Literal["newNotification"] = "newNotification"
    data: NotificationOut


class NotificationRead(APIModel):
    event: Literal["notificationRead"] = "notificationRead"
    data: NotificationOut


class NewActivity(APIModel):
    event: Literal["newActivity"] = "newActivity"
    data: ActivityOut


class OrderUpdate(APIModel):
    event: Literal["orderUpdate"] = "orderUpdate"
    data: OrderUpdatePayload


BroadcastEvent = Annotated[
    Union[
        UserAdded,
        UserUpdated,
        UserDeleted,
        NewNotification,
        NotificationRead,
        NewActivity,
        OrderUpdate,
    ],
    Field(discriminator="event"),
]

_event_adapter = TypeAdapter(BroadcastEvent)


def parse_event(message: dict[str, Any]) -> BroadcastEvent:
    """Validate a wire message into its event variant (raises pydantic.ValidationError)."""
    return _event_adapter.validate_python(message)


def to_wire(event: BroadcastEvent) -> dict[str, Any]:
    return event.model_dump(mode="json", by_alias=True)
