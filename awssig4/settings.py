"""Signer configuration loaded from the environment using pydantic-settings."""

from typing import Optional, Union

from pydantic import AliasChoices, Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .sigv4 import DEFAULT_CONTENT_TYPE, Service, SignerConfig


class SignerSettings(BaseSettings):
    """Credentials from the standard ``AWS_*`` environment variables."""

    model_config = SettingsConfigDict(
        env_prefix='AWS_',
        extra='ignore',
    )

    access_key_id: str = Field(
        description='Access key id (AWS_ACCESS_KEY_ID)',
    )
    secret_access_key: SecretStr = Field(
        description='Secret access key (AWS_SECRET_ACCESS_KEY)',
    )
    session_token: Optional[str] = Field(
        default=None,
        description='Session token for temporary credentials (AWS_SESSION_TOKEN)',
    )
    region: str = Field(
        default='us-east-1',
        validation_alias=AliasChoices('AWS_REGION', 'AWS_DEFAULT_REGION'),
        description='Region code used in the credential scope',
    )
    content_type: str = Field(
        default=DEFAULT_CONTENT_TYPE,
        validation_alias='AWSSIG4_CONTENT_TYPE',
        description='Content-Type sent with every signed request',
    )

    @field_validator('session_token')
    @classmethod
    def _blank_token_is_none(cls, value: Optional[str]) -> Optional[str]:
        return value or None

    def to_config(self, service: Union[Service, str], host: str) -> SignerConfig:
        return SignerConfig(
            service=service,
            host=host,
            region=self.region,
            access_key=self.access_key_id,
            secret_key=self.secret_access_key.get_secret_value(),
            token=self.session_token,
            content_type=self.content_type,
        )
