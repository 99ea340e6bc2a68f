"""Multichain - Core Configuration."""

from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Library settings loaded from environment variables (``MULTICHAIN_*``)."""

    model_config = SettingsConfigDict(
        env_prefix="MULTICHAIN_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # EVM-compatible chains
    eth_rpc_url: str = Field(default="", description="Ethereum JSON-RPC endpoint")
    polygon_rpc_url: str = Field(default="", description="Polygon JSON-RPC endpoint")
    arbitrum_rpc_url: str = Field(default="", description="Arbitrum JSON-RPC endpoint")
    optimism_rpc_url: str = Field(default="", description="Optimism JSON-RPC endpoint")
    base_rpc_url: str = Field(default="", description="Base JSON-RPC endpoint")
    bsc_rpc_url: str = Field(default="", description="BNB Smart Chain JSON-RPC endpoint")
    avalanche_rpc_url: str = Field(default="", description="Avalanche C-Chain JSON-RPC endpoint")
    blast_rpc_url: str = Field(default="", description="Blast JSON-RPC endpoint")

    # Other chain families
    bitcoin_rpc_url: str = Field(default="", description="Bitcoin Core JSON-RPC endpoint")
    cosmos_grpc_url: str = Field(default="", description="Cosmos SDK gRPC endpoint")
    solana_rpc_url: str = Field(
        default="https://api.mainnet-beta.solana.com",
        description="Solana RPC endpoint",
    )

    # Timeouts (seconds)
    dial_timeout: float = Field(default=10.0, gt=0, description="Node connection timeout")
    request_timeout: float = Field(default=30.0, gt=0, description="Per-RPC request timeout")

    log_level: str = Field(default="INFO", description="Log level for the multichain logger")

    def rpc_url_for(self, chain: str) -> str:
        """Return the configured endpoint for a chain code (e.g. ``ethereum``)."""
        urls = {
            "ethereum": self.eth_rpc_url,
            "polygon": self.polygon_rpc_url,
            "arbitrum": self.arbitrum_rpc_url,
            "optimism": self.optimism_rpc_url,
            "base": self.base_rpc_url,
            "bsc": self.bsc_rpc_url,
            "avalanche": self.avalanche_rpc_url,
            "blast": self.blast_rpc_url,
            "bitcoin": self.bitcoin_rpc_url,
            "cosmos": self.cosmos_grpc_url,
            "solana": self.solana_rpc_url,
        }
        return urls.get(chain, "")


@lru_cache
def get_settings() -> Settings:
    """Get cached library settings."""
    return Settings()
