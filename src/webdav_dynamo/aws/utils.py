"""AWS client management for the entity store."""
import boto3
import logging
from typing import Any, Dict
from webdav_dynamo.config.settings import get_settings

logger = logging.getLogger(__name__)

class AWSClientManager:
    """Process-wide cache of boto3 clients built from settings."""
    _instance = None
    _clients = {}

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super(AWSClientManager, cls).__new__(cls)
            cls._instance.settings = get_settings()
            logger.info(
                f"AWS clients: mode={cls._instance.settings.deployment_mode} "
                f"region={cls._instance.settings.aws_region}"
            )
        return cls._instance

    def _client_kwargs(self) -> Dict[str, Any]:
        kwargs = {'region_name': self.settings.aws_region}
        if self.settings.aws_access_key_id:
            kwargs['aws_access_key_id'] = self.settings.aws_access_key_id
        if self.settings.aws_secret_access_key:
            kwargs['aws_secret_access_key'] = self.settings.aws_secret_access_key
        # Endpoint override only applies to local/mock modes
        if self.settings.aws_endpoint_url and self.settings.is_local:
            kwargs['endpoint_url'] = self.settings.aws_endpoint_url
        return kwargs

    def get_client(self, service_name: str) -> Any:
        """Get or create an AWS service client."""
        if service_name not in self._clients:
            self._clients[service_name] = boto3.client(service_name, **self._client_kwargs())
            logger.debug(f"Created {service_name} client")
        return self._clients[service_name]

    @classmethod
    def reset(cls):
        """Drop the singleton so the next call re-reads settings."""
        cls._clients.clear()
        cls._instance = None


def get_dynamodb_client():
    """Get the DynamoDB client."""
    return AWSClientManager().get_client('dynamodb')
