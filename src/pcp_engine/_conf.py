import pathlib
from typing import Annotated, Optional

import annotated_types
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
)


class Settings(BaseSettings):
    """
    Command line settings. Values come from the environment (``PCP_`` prefix) and
    from the optional YAML configuration file, the environment wins.

    Attributes:
        max_password_length: Passwords longer than this are rejected without being
            checked.
        default_policy: Policy file used when none is given on the command line.
    """

    model_config = SettingsConfigDict(
        env_prefix="PCP_",
        extra="forbid",
        validate_default=False,
    )

    max_password_length: Optional[Annotated[int, annotated_types.Ge(1)]] = None
    default_policy: Optional[pathlib.Path] = None

    @classmethod
    def settings_customise_sources(
        cls,
        _: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return env_settings, file_secret_settings, init_settings
