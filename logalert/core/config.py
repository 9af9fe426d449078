"""Pydantic-settings configuration for the log alert service.

Loads connection parameters for the HTTP server, Basic auth, Zabbix and
Elasticsearch. Values come from (highest priority first) constructor
arguments, environment variables, the ``.env`` file and the YAML config file
(``configs/config.yaml`` unless ``LOGALERT_CONFIG_FILE`` points elsewhere).

Nested sections map to environment variables with a double underscore,
e.g. ``ZABBIX__URL`` or ``ELASTICSEARCH__PASSWORD``.
"""

import os
from functools import lru_cache

from pydantic import BaseModel, computed_field
from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

DEFAULT_CONFIG_FILE = "configs/config.yaml"


class ServerSettings(BaseModel):
    addr: str = "0.0.0.0"
    port: int = 8080


class BasicAuthSettings(BaseModel):
    username: str = "admin"
    password: str = ""


class ZabbixSettings(BaseModel):
    url: str = "http://localhost/api_jsonrpc.php"
    token: str = ""
    # Host group assigned to hosts created per index pattern
    host_group_id: str = "2"
    # Agent interface port on created hosts
    agent_port: str = "22"


class ElasticsearchSettings(BaseModel):
    url: str = "http://localhost:9200"
    username: str = ""
    password: str = ""


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_nested_delimiter="__",
        case_sensitive=False,
        extra="ignore",
    )

    # Project
    project_name: str = "Log Alert Management Service"
    debug: bool = False

    server: ServerSettings = ServerSettings()
    basic: BasicAuthSettings = BasicAuthSettings()
    zabbix: ZabbixSettings = ZabbixSettings()
    elasticsearch: ElasticsearchSettings = ElasticsearchSettings()

    # HTTP timeout for calls to Zabbix and Elasticsearch
    request_timeout_seconds: float = 30.0
    # Timeout for the health check probes
    health_check_timeout_seconds: float = 3.0

    # CORS
    allowed_origins: str = ""  # Comma-separated extra CORS origins

    # slowapi default limit applied to every route
    rate_limit: str = "100/minute"

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        yaml_file = os.environ.get("LOGALERT_CONFIG_FILE", DEFAULT_CONFIG_FILE)
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls, yaml_file=yaml_file),
            file_secret_settings,
        )

    @computed_field
    @property
    def listen_address(self) -> str:
        """host:port the HTTP server binds to."""
        return f"{self.server.addr}:{self.server.port}"

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Extra CORS origins parsed from the comma-separated setting."""
        return [o.strip() for o in self.allowed_origins.split(",") if o.strip()]


@lru_cache
def get_settings() -> Settings:
    """Return the process-wide settings, loaded on first use."""
    return Settings()
