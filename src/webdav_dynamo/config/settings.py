# src/webdav_dynamo/config/settings.py
from typing import Optional, Dict, Any
from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache

LOCAL_MODES = ["local-dev", "aws-mock"]
VALID_MODES = ["local-dev", "aws-mock", "aws-prod"]


class Settings(BaseSettings):
    """
    Single source of truth for all storage settings.

    Configuration precedence:
    1. Environment variables (highest priority)
    2. .env file (if exists)
    3. Default values in this class (lowest priority)

    Usage:
        from webdav_dynamo.config.settings import get_settings
        settings = get_settings()
        table_name = settings.dynamodb_table_name
    """

    # Application Settings
    app_name: str = Field(
        default="webdav-dynamo",
        description="Application name"
    )

    # Deployment Mode
    deployment_mode: str = Field(
        default="local-dev",
        description="Deployment mode: local-dev, aws-mock, or aws-prod"
    )

    # AWS Core Settings
    aws_region: str = Field(
        default="us-east-1",
        alias="AWS_DEFAULT_REGION"
    )

    aws_access_key_id: Optional[str] = Field(
        default=None,
        alias="AWS_ACCESS_KEY_ID"
    )

    aws_secret_access_key: Optional[str] = Field(
        default=None,
        alias="AWS_SECRET_ACCESS_KEY"
    )

    aws_endpoint_url: Optional[str] = Field(
        default=None,
        alias="AWS_ENDPOINT_URL"
    )

    # DynamoDB Configuration
    dynamodb_table_name: str = Field(
        default="webdav-entities",
        description="DynamoDB table holding file and folder entities"
    )

    dynamodb_read_capacity: int = Field(
        default=10,
        ge=1,
        description="Provisioned read capacity units for new tables"
    )

    dynamodb_write_capacity: int = Field(
        default=10,
        ge=1,
        description="Provisioned write capacity units for new tables"
    )

    # Logging
    log_level: str = Field(
        default="INFO",
        description="Logging level"
    )

    @field_validator('deployment_mode', mode='before')
    @classmethod
    def normalize_deployment_mode(cls, v):
        """Normalize deployment mode values for backwards compatibility."""
        if v:
            mode_mapping = {
                "local-mock": "local-dev",
                "cloud": "aws-prod",
            }
            return mode_mapping.get(v, v)
        return v

    @field_validator('deployment_mode')
    @classmethod
    def validate_deployment_mode(cls, v):
        """Validate deployment mode is one of the allowed values."""
        if v not in VALID_MODES:
            raise ValueError(f"Invalid deployment_mode: {v}. Must be one of {VALID_MODES}")
        return v

    @field_validator('log_level')
    @classmethod
    def normalize_log_level(cls, v):
        return v.upper()

    @model_validator(mode='after')
    def apply_local_mode_defaults(self):
        """Auto-set endpoint URL and mock credentials for local modes if not provided."""
        if self.deployment_mode in LOCAL_MODES:
            if self.aws_endpoint_url is None:
                self.aws_endpoint_url = "http://localhost:5000"
            if self.aws_access_key_id is None:
                self.aws_access_key_id = "mock"
            if self.aws_secret_access_key is None:
                self.aws_secret_access_key = "mock"
        return self

    @property
    def is_local(self) -> bool:
        """True when boto3 should talk to a local endpoint instead of AWS."""
        return self.deployment_mode in LOCAL_MODES

    @property
    def provisioned_throughput(self) -> Dict[str, int]:
        """Throughput block used when creating tables."""
        return {
            'ReadCapacityUnits': self.dynamodb_read_capacity,
            'WriteCapacityUnits': self.dynamodb_write_capacity,
        }

    def get_environment_dict(self) -> Dict[str, Any]:
        """Get configuration as a dictionary suitable for subprocess environments.

        Returns:
            Dictionary of environment variables
        """
        return {
            'DEPLOYMENT_MODE': self.deployment_mode,
            'DYNAMODB_TABLE_NAME': self.dynamodb_table_name,
            'AWS_DEFAULT_REGION': self.aws_region,
            'AWS_ENDPOINT_URL': self.aws_endpoint_url or '',
            'AWS_ACCESS_KEY_ID': self.aws_access_key_id or 'mock',
            'AWS_SECRET_ACCESS_KEY': self.aws_secret_access_key or 'mock',
            'LOG_LEVEL': self.log_level,
        }

    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.
    This ensures we only create one Settings instance per process.
    """
    return Settings()
