"""
Configuration schema definition using Pydantic.

This module defines the declarative configuration schema that serves as
the single source of truth for all MoTown startup configuration. Each
leaf field documents itself, declares its constraints and default, and
optionally names the environment variable that may override it.
"""

from typing import Any, Dict, Iterator, List, Literal, Optional, Tuple, Type

from pydantic import BaseModel, Field, field_validator


_SETTINGS_CONFIG = {
    "frozen": True,
    "extra": "forbid",
    "populate_by_name": True,
}


class IrcSettings(BaseModel):
    """Connection settings for the IRC bot."""

    server: str = Field(
        "irc.mozilla.org",
        description="The host name of the server we're connecting to",
        json_schema_extra={"env_var": "IRC_HOST"},
    )

    nick: str = Field(
        "motown",
        description="The nick for the daemon to use",
        json_schema_extra={"env_var": "IRC_NICK"},
    )

    retry_delay: int = Field(
        2000,
        ge=100,
        le=10000,
        alias="retryDelay",
        description="The delay in milliseconds between connection attempts by the IRC bot",
    )

    model_config = _SETTINGS_CONFIG


class LoggerSettings(BaseModel):
    level: Literal["silent", "win", "error", "warn", "http", "info", "verbose", "silly"] = Field(
        "info",
        description="The log level",
        json_schema_extra={"env_var": "LOG_LEVEL"},
    )

    model_config = _SETTINGS_CONFIG


class RedisSettings(BaseModel):
    """Redis connection settings, possibly replaced by platform-bound credentials."""

    ignore_vcap_service_creds: bool = Field(
        False,
        description="Ignore creds discovered via VCAP_SERVICES environment variable",
        json_schema_extra={"env_var": "REDIS_IGNORE_VCAP_SERVICES"},
    )

    host: str = Field(
        "localhost",
        description="The host where redis is listening",
        json_schema_extra={"env_var": "REDIS_HOST"},
    )

    port: int = Field(
        6379,
        ge=1,
        le=65535,
        description="The port that redis is listening on",
        json_schema_extra={"env_var": "REDIS_PORT"},
    )

    password: Optional[str] = Field(
        None,
        description="The password for redis if applicable",
        json_schema_extra={"env_var": "REDIS_PASSWORD", "sensitive": True},
    )

    @field_validator("ignore_vcap_service_creds", mode="before")
    @classmethod
    def parse_bool(cls, v: Any) -> Any:
        """Parse boolean from string values."""
        if isinstance(v, str):
            v_lower = v.strip().lower()
            if v_lower in ("1", "true", "yes", "on"):
                return True
            elif v_lower in ("0", "false", "no", "off"):
                return False
            else:
                raise ValueError(f"Invalid boolean value: {v}")
        return v

    model_config = _SETTINGS_CONFIG


class MysqlSettings(BaseModel):
    user: str = Field(
        ...,
        description="The MySQL username to connect with",
        json_schema_extra={"env_var": "MYSQL_USER"},
    )

    password: str = Field(
        ...,
        description="The MySQL password",
        json_schema_extra={"env_var": "MYSQL_PASSWORD", "sensitive": True},
    )

    database: str = Field(
        "motown",
        description="The MySQL database to connect to",
        json_schema_extra={"env_var": "MYSQL_DATABASE"},
    )

    model_config = _SETTINGS_CONFIG


class BindSettings(BaseModel):
    host: str = Field(
        "127.0.0.1",
        description="The ip address the HTTP server should bind to",
        json_schema_extra={"env_var": "IP_ADDRESS"},
    )

    port: Optional[int] = Field(
        None,
        ge=1,
        le=65535,
        description="The port the HTTP server should bind to",
        json_schema_extra={"env_var": "PORT"},
    )

    model_config = _SETTINGS_CONFIG


class SocialProviderSettings(BaseModel):
    name_suffix: str = Field(
        "",
        description="The suffix to add on to the name you see in /social_provider/manifest.json",
    )

    model_config = _SETTINGS_CONFIG


class ConfigSchema(BaseModel):
    """
    Declarative configuration schema.

    This is the single source of truth for MoTown's startup configuration.
    Sections are nested models; leaf fields can be set from the config
    files or, where an ``env_var`` is declared, from the environment.
    Instances are frozen once validated.
    """

    env: Literal["production", "test", "development"] = Field(
        "production",
        description="What environment are we running in? Note: all hosted environments are 'production'.",
        json_schema_extra={"env_var": "APP_ENV"},
    )

    irc: IrcSettings = Field(default_factory=IrcSettings)
    logger: LoggerSettings = Field(default_factory=LoggerSettings)
    redis: RedisSettings = Field(default_factory=RedisSettings)
    mysql: MysqlSettings
    bind_to: BindSettings = Field(default_factory=BindSettings)

    public_url: str = Field(
        "http://motown.mozillalabs.com",
        description="The publically visible URL of the deployment",
        json_schema_extra={"env_var": "URL"},
    )

    public_ws_url: str = Field(
        "ws://motown.mozillalabs.com",
        description="The publically available URL for WebSockets",
        json_schema_extra={"env_var": "WS_URL"},
    )

    social_provider: SocialProviderSettings = Field(default_factory=SocialProviderSettings)

    model_config = _SETTINGS_CONFIG

    def get(self, path: str) -> Any:
        """
        Look up a value by dotted path, e.g. ``config.get("redis.port")``.

        Raises:
            KeyError: If the path does not name a configuration field
        """
        node: Any = self
        for segment in path.split("."):
            if not isinstance(node, BaseModel) or segment not in type(node).model_fields:
                raise KeyError(f"Unknown configuration key path: {path}")
            node = getattr(node, segment)
        return node

    def to_dict(self) -> Dict[str, Any]:
        """Return the configuration as nested plain dictionaries."""
        return self.model_dump(mode="python")

    def mask(self) -> Dict[str, Any]:
        """
        Return masked version for safe logging (hides sensitive values).

        Returns:
            Dictionary with sensitive values masked
        """
        data = self.to_dict()
        for path in sensitive_paths(type(self)):
            *parents, key = path.split(".")
            section = data
            for segment in parents:
                section = section[segment]
            if section[key] is not None:
                section[key] = "***"
        return data


def is_section(annotation: Any) -> bool:
    """True when a field annotation is a nested settings model."""
    return isinstance(annotation, type) and issubclass(annotation, BaseModel)


def iter_fields(
    schema: Type[BaseModel] = ConfigSchema, prefix: Tuple[str, ...] = ()
) -> Iterator[Tuple[str, Any]]:
    """Yield ``(dotted_path, field_info)`` for every leaf field of the schema."""
    for field_name, field_info in schema.model_fields.items():
        path = prefix + (field_name,)
        if is_section(field_info.annotation):
            yield from iter_fields(field_info.annotation, path)
        else:
            yield ".".join(path), field_info


def _field_extra(field_info: Any) -> Dict[str, Any]:
    extra = field_info.json_schema_extra
    return extra if isinstance(extra, dict) else {}


def env_bindings(schema: Type[BaseModel] = ConfigSchema) -> Dict[str, str]:
    """Map dotted field paths to the environment variable that overrides them."""
    bindings = {}
    for path, field_info in iter_fields(schema):
        env_var = _field_extra(field_info).get("env_var")
        if env_var:
            bindings[path] = env_var
    return bindings


def sensitive_paths(schema: Type[BaseModel] = ConfigSchema) -> List[str]:
    """Dotted paths of fields whose values must never be logged."""
    return [path for path, field_info in iter_fields(schema) if _field_extra(field_info).get("sensitive")]
