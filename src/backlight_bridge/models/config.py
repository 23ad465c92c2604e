# SPDX-License-Identifier: MIT
# Copyright (c) 2025 Matthias Bilger <matthias@bilger.info>
import logging
from enum import Enum

import pydantic
from pydantic import BaseModel
from pydantic import Field
from pydantic import SecretStr

CUSTOM_COLOR = "custom"


class RgbValue(BaseModel):
    red: int = Field(description="Red channel value sent to the device.", ge=0)
    green: int = Field(description="Green channel value sent to the device.", ge=0)
    blue: int = Field(description="Blue channel value sent to the device.", ge=0)


def _default_colors():
    return {
        "red": RgbValue(red=1020, green=0, blue=0),
        "green": RgbValue(red=0, green=1020, blue=0),
        "blue": RgbValue(red=0, green=0, blue=1020),
        "purple": RgbValue(red=1000, green=0, blue=800),
        "off": RgbValue(red=0, green=0, blue=0),
    }


class HttpConfig(BaseModel):
    bind_address: str = Field(
        default="0.0.0.0",
        description="The IP address to bind the HTTP server to. Defaults to '0.0.0.0'.",
        examples=["0.0.0.0", "127.0.0.1"],
    )
    bind_port: int = Field(
        default=9009,
        description="The port number to bind the HTTP server to. Defaults to 9009.",
        le=65535,
        ge=1,
        examples=[9009, 8080],
    )
    prefix: str = Field(
        default="/sandbox/api",
        description="Path prefix for all API routes.",
        examples=["/sandbox/api"],
    )


class MqttConfig(BaseModel):
    host: str = Field(
        default="mqtt.bamdad.dev",
        description="Hostname of the MQTT broker.",
    )
    port: int = Field(
        default=1883,
        description="Port of the MQTT broker.",
        le=65535,
        ge=1,
    )
    keepalive: int = Field(default=60, ge=1)
    client_id: str | None = Field(
        default=None,
        description="Client id to connect with. The broker assigns one if empty.",
    )
    username: str | None = None
    password: SecretStr | None = None
    topic: str = Field(
        default="cmd/backlight1",
        description="Topic the backlight commands are published to.",
    )
    qos: int = Field(default=0, ge=0, le=2)
    retain: bool = False
    connect_timeout: float = Field(
        default=10.0,
        description="Seconds to wait for the broker to acknowledge the connection.",
        gt=0,
    )
    publish_timeout: float = Field(
        default=5.0,
        description="Seconds to wait for a publish to complete.",
        gt=0,
    )


class LoggingConfig(BaseModel):
    class LogLevel(str, Enum):
        DEBUG = "debug"
        INFO = "info"
        WARNING = "warning"
        ERROR = "error"
        CRITICAL = "critical"

        def to_logging_level(self) -> int:
            return getattr(logging, self.name)

    level: LogLevel = Field(
        default=LogLevel.INFO,
        description="The logging level for the application.",
        examples=["debug", "info"],
    )
    submodules: list[str] = Field(
        default_factory=list,
        description="List of submodules to apply specific logging configurations.",
        examples=["backlight_bridge.mqtt_client=debug"],
    )
    file_enabled: bool = Field(
        default=False,
        description="Flag to enable or disable logging to a file.",
    )
    file_path: str | None = Field(
        default=None,
        description="The file path for the log file.",
        examples=["/var/log/backlight-bridge.log"],
    )
    file_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="The logging level for the log file.",
    )
    file_max_size: int = Field(
        default=3_145_728,
        description="The maximum size of the log file in bytes before it is rotated.",
    )
    file_backup_count: int = Field(
        default=5,
        description="The number of backup log files to keep.",
    )
    console_enabled: bool = Field(
        default=True,
        description="Flag to enable or disable logging to the console.",
    )
    console_level: LogLevel = Field(
        default=LogLevel.INFO,
        description="The logging level for the console output.",
    )


class Config(BaseModel):
    """
    Bridge configuration: HTTP listener, MQTT broker, color table and logging.
    """

    http: HttpConfig = HttpConfig()
    mqtt: MqttConfig = MqttConfig()
    colors: dict[str, RgbValue] = Field(default_factory=_default_colors)
    command_template: str = Field(
        default="set/{red}/{green}/{blue}",
        description="Format of the command published for a color.",
    )
    logging: LoggingConfig = LoggingConfig()

    @pydantic.field_validator("colors")
    @classmethod
    def validate_color_names(cls, colors):
        normalized = {name.strip().lower(): value for name, value in colors.items()}
        if CUSTOM_COLOR in normalized:
            raise ValueError(f"'{CUSTOM_COLOR}' is reserved and cannot be configured.")
        return _default_colors() | normalized

    @pydantic.field_validator("command_template")
    @classmethod
    def validate_command_template(cls, template):
        # table colors format with ints, custom triplets with strings
        try:
            template.format(red=0, green=0, blue=0)
            template.format(red="0", green="0", blue="0")
        except (KeyError, IndexError, ValueError) as e:
            raise ValueError(f"Invalid command template: {e}") from e
        return template
