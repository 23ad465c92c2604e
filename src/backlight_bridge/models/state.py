from enum import Enum

import pydantic


class ConnectionState(str, Enum):
    """The status of the connection."""

    CONNECTED = "connected"
    DISCONNECTED = "disconnected"

    def __bool__(self):
        return self == ConnectionState.CONNECTED


class BrokerState(pydantic.BaseModel):
    """The MQTT broker connection information."""

    connection_status: ConnectionState = pydantic.Field(
        description="The broker connection status.",
        default=ConnectionState.DISCONNECTED,
    )
    last_connected: float = pydantic.Field(
        description="The time the last connection was acknowledged.",
        default=0,
    )
    last_disconnect_reason: str | None = pydantic.Field(
        description="The reason reported for the last lost connection.",
        default=None,
    )
    published_messages: int = pydantic.Field(
        description="Number of commands published since startup.",
        default=0,
    )
