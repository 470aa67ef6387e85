from typing import Annotated

from pydantic import BaseModel, Field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

from tcpdemo.bootstrap.config.loader import get_configfile


class ServerSettings(BaseModel):
    host: Annotated[
        str,
        Field(
            description="Bind address for the server.",
            default="127.0.0.1"
        )
    ]

    port: Annotated[
        int,
        Field(
            description="TCP port for client requests. 0 lets the OS pick one.",
            default=4000,
            ge=0,
            le=65535,
        )
    ]

    backlog: Annotated[
        int,
        Field(
            description="Maximum number of pending TCP connections.",
            default=128,
            gt=0,
        )
    ]

    timeout_graceful_shutdown: Annotated[
        float,
        Field(
            description="Maximum time allowed for graceful shutdown.",
            default=5.0,
            ge=0,
        )
    ]

    max_buffer_size: Annotated[
        int,
        Field(
            description=(
                "Maximum number of undecoded bytes buffered per connection.\n"
                "Must hold at least one maximal request (65542 bytes)."
            ),
            default=1024 * 1024,
            ge=65542,
        )
    ]


class TcpDemoConfig(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="TCPDEMO_",
        env_nested_delimiter="__",
        extra="ignore"
    )

    server: Annotated[
        ServerSettings,
        Field(
            description=(
                "Server configuration.\n"
                "Controls where the server listens and the per-connection limits."
            ),
            default_factory=ServerSettings,
        )
    ]

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        sources: tuple[PydanticBaseSettingsSource, ...] = (init_settings, env_settings)

        configfile = cls.configfile()
        if configfile is not None:
            sources += (YamlConfigSettingsSource(settings_cls, yaml_file=configfile),)

        return sources

    @classmethod
    def configfile(cls):
        return get_configfile()
