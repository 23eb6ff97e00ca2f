from typing import Annotated

from pydantic import Field, field_validator
from pydantic_core.core_schema import ValidationInfo
from pydantic_settings import BaseSettings, SettingsConfigDict, PydanticBaseSettingsSource, YamlConfigSettingsSource

from cborstream.bootstrap.config.loader import get_configfile
from cborstream.core.models.mode import SelfDescribeMode
from cborstream.infra.registry import FORMATS


class CodecSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="CBORSTREAM_",
        extra="ignore"
    )

    format: Annotated[
        str,
        Field(
            description=(
                "Binary value encoding used on the wire.\n"
                "Either 'cbor' (default) or 'msgpack'. Both are self-delimiting,\n"
                "frames are never length-prefixed."
            ),
            default="cbor"
        )
    ]

    self_describe: Annotated[
        SelfDescribeMode,
        Field(
            description=(
                "Self-describe marker policy for outgoing frames.\n"
                "'always' tags every frame, 'once' only the first frame of each\n"
                "encoder, 'never' (default) none. MessagePack has no marker and\n"
                "only accepts 'never'."
            ),
            default=SelfDescribeMode.NEVER
        )
    ]

    packed: Annotated[
        bool,
        Field(
            description=(
                "Write record fields by index instead of by name.\n"
                "Smaller frames, but the receiver must know the exact field order."
            ),
            default=False
        )
    ]

    max_buffer_size: Annotated[
        int,
        Field(
            description="Maximum allowed size of a connection's receive buffer.",
            default=4 * 1024 * 1024,
            gt=0
        )
    ]

    chunk_size: Annotated[
        int,
        Field(
            description="Number of bytes read per call when decoding files.",
            default=64 * 1024,
            gt=0
        )
    ]

    @field_validator("format")
    @classmethod
    def validate_format(cls, v: str, _: ValidationInfo) -> str:
        v = v.lower()
        if v not in FORMATS:
            raise ValueError(f"unknown format '{v}', expected one of: {', '.join(sorted(FORMATS))}")
        return v

    @field_validator("self_describe")
    @classmethod
    def validate_self_describe(cls, v: SelfDescribeMode, info: ValidationInfo) -> SelfDescribeMode:
        fmt = info.data.get("format")
        if fmt is not None and v is not SelfDescribeMode.NEVER:
            if FORMATS[fmt].self_describe_marker is None:
                raise ValueError(f"format '{fmt}' has no self-describe marker")
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=get_configfile()),
        )
