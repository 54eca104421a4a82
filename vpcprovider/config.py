"""
Provider configuration loaded from environment variables.
Uses pydantic-settings so every value can be overridden via a .env file.
"""

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    # ── IBM Cloud VPC ────────────────────────────────────────────────────────
    # API key used by the IAM authenticator.  Required for any remote call.
    ibmcloud_api_key: str = ""
    vpc_service_url: str = "https://us-south.iaas.cloud.ibm.com/v1"
    # Date-based API version sent with every VPC request
    vpc_api_version: str = "2025-04-08"
    vpc_http_timeout: int = 130
    # Page size requested by every list call
    list_page_limit: int = 50

    # ── JWT ──────────────────────────────────────────────────────────────────
    # Secret used to sign/verify JWT tokens.  Change this in production!
    jwt_secret_key: str = "changeme-super-secret-key"
    jwt_algorithm: str = "HS256"
    jwt_expire_minutes: int = 60

    # ── API clients ──────────────────────────────────────────────────────────
    # Comma-separated "client_id:secret" pairs.  Secrets may be bcrypt hashes.
    api_clients: str = "terraform:secret"

    # ── State store (DynamoDB) ───────────────────────────────────────────────
    aws_region: str = "us-east-1"
    # Leave blank to use the default credential chain (IAM role, env vars, …)
    aws_access_key_id: str = ""
    aws_secret_access_key: str = ""
    dynamodb_table_name: str = "vpc_provider_state"
    # Set to a local DynamoDB endpoint for development (e.g. http://localhost:8000)
    dynamodb_endpoint_url: str = ""

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"

    def get_api_clients(self) -> dict[str, str]:
        """Return the configured client map {client_id: secret}."""
        clients: dict[str, str] = {}
        for pair in self.api_clients.split(","):
            pair = pair.strip()
            if ":" not in pair:
                continue
            client_id, secret = pair.split(":", 1)
            clients[client_id.strip()] = secret.strip()
        return clients


settings = Settings()
