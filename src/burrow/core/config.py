"""Client configuration.

[ClientConfig][burrow.core.config.ClientConfig] is a frozen Pydantic model
holding everything a [GopherClient][burrow.client.GopherClient] needs: the
protocol variant, the default TLS policy, and transport tuning. It can be
built in code, from a dictionary, or from a YAML file:

```yaml
protocol: gopher+
tls: prefer
timeout: 10.0
verify_tls: false
```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from burrow.models.constants import GopherProtocol, TlsPolicy
from burrow.utils.transport import DEFAULT_CHUNK_SIZE, DEFAULT_TIMEOUT

from .exceptions import ConfigurationError
from .yaml import load_yaml


class ClientConfig(BaseModel):
    """Read-only client settings.

    See Also:
        [GopherClient][burrow.client.GopherClient]: The consumer of this
            configuration.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    protocol: GopherProtocol = Field(
        default=GopherProtocol.RFC1436, description="Protocol variant spoken by the client"
    )
    tls: TlsPolicy = Field(
        default=TlsPolicy.DO_NOT_USE_TLS,
        description="Default TLS policy, overridable per request",
    )
    timeout: float | None = Field(
        default=DEFAULT_TIMEOUT,
        gt=0,
        description="Seconds allowed for connecting and for each read (None = no limit)",
    )
    chunk_size: int = Field(default=DEFAULT_CHUNK_SIZE, ge=1, description="Bytes per read")
    verify_tls: bool = Field(default=True, description="Verify server certificates")

    @classmethod
    def from_dict(cls, config_dict: dict[str, Any]) -> ClientConfig:
        """Validate *config_dict* into a config.

        Raises:
            ConfigurationError: If a key is unknown or a value is invalid.
        """
        try:
            return cls.model_validate(config_dict)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid client configuration: {e}") from e

    @classmethod
    def from_yaml(cls, config_path: str | Path) -> ClientConfig:
        """Load a config from a YAML file.

        Raises:
            ConfigurationError: If the file is missing, unparsable, or invalid.
        """
        try:
            data = load_yaml(config_path)
        except (OSError, TypeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Cannot load config file {config_path}: {e}") from e
        return cls.from_dict(data)
