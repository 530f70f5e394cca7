"""Config file."""
import os

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from routes_indexer.app.domain.errors import PreconditionError
from routes_indexer.app.domain.models import MissingL1TokenPolicy


class Settings(BaseSettings):
    """Application settings."""

    # PROJECT
    project_name: str = Field("routes-indexer", alias="PROJECT_NAME")
    log_level: str = Field("INFO", alias="LOG_LEVEL")

    # HUB POOL
    hub_pool_chain_id: int = Field(1, alias="HUB_POOL_CHAIN_ID")
    missing_l1_token_policy: MissingL1TokenPolicy = Field(
        MissingL1TokenPolicy.PASSTHROUGH, alias="MISSING_L1_TOKEN_POLICY"
    )

    # RPC
    rpc_urls: dict[int, str] = Field(default_factory=dict, alias="RPC_URLS")
    rpc_timeout_seconds: float = Field(30, alias="RPC_TIMEOUT_SECONDS")

    @field_validator("log_level")
    @classmethod
    def normalize_log_level(cls, value: str) -> str:
        return value.strip().upper()

    def rpc_url(self, chain_id: int) -> str:
        """
        RPC endpoint for a chain.

        RPC_URL_<chain_id> takes precedence over the RPC_URLS mapping.
        """
        url = os.getenv(f"RPC_URL_{chain_id}") or self.rpc_urls.get(chain_id)
        if not url:
            raise PreconditionError(
                f"No RPC url configured for chain_id={chain_id} "
                f"(set RPC_URL_{chain_id} or add it to RPC_URLS)"
            )
        return url

    model_config = SettingsConfigDict(env_file=".env", env_file_encoding="utf-8", extra="ignore")


settings: Settings = Settings()
