"""Credential model.

Credentials are stored and decrypted by the host; sqlnode only passes them
through to the connector that opens the database connection.
"""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, Field as PydanticField, SecretStr, field_validator


class Credentials(BaseModel):
    """Database credentials supplied by the host.

    Examples:
        >>> Credentials(user="hr", password="secret", connect_string="localhost/XEPDB1")
        >>> Credentials(connect_string="sqlite:///local.db")
    """

    user: str = PydanticField(
        "hr",
        description="Database user",
    )

    password: SecretStr = PydanticField(
        SecretStr(""),
        description="Database password",
    )

    connect_string: str = PydanticField(
        "localhost/XEPDB1",
        description="Oracle DSN (host/service) or a SQLAlchemy URL",
    )

    connector: Optional[str] = PydanticField(
        None,
        description="Dotted path of a Connector class overriding the default for the connect string",
    )

    model_config = {"extra": "forbid"}

    @field_validator("connect_string")
    @classmethod
    def validate_connect_string(cls, v: str) -> str:
        """Reject blank connect strings."""
        v = v.strip()
        if not v:
            raise ValueError("connect_string cannot be empty")
        return v

    def as_connector_config(self) -> dict:
        """Flatten into the plain config dict connectors are built from."""
        return {
            "user": self.user,
            "password": self.password.get_secret_value(),
            "connect_string": self.connect_string,
        }
