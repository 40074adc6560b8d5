"""
Configuration management for the interactions webhook.

Loads environment variables from .env file and provides typed, immutable access
to configuration. Built once at startup and passed explicitly to the verifier
and the follow-up client.
"""

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv

# Load environment variables from .env file
env_path = Path(__file__).parent / ".env"
load_dotenv(env_path)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Config:
    """Process-wide settings. Never rotated at runtime."""

    # Discord application
    public_key: str
    application_id: str
    api_base_url: str = "https://discord.com/api/v8"

    # Request metadata
    client_ip_header: str = "X-Real-IP"
    edge_location: str = "unknown"

    # Follow-up delivery
    followup_timeout: float = 30.0

    # Server
    environment: str = "development"
    port: int = 8000

    @classmethod
    def from_env(cls) -> "Config":
        """Load configuration from environment variables."""
        return cls(
            public_key=os.getenv("DISCORD_PUBLIC_KEY", "").strip(),
            application_id=os.getenv("DISCORD_APPLICATION_ID", "").strip(),
            api_base_url=os.getenv("DISCORD_API_BASE_URL", "https://discord.com/api/v8").rstrip("/"),
            client_ip_header=os.getenv("CLIENT_IP_HEADER", "X-Real-IP"),
            edge_location=os.getenv("EDGE_LOCATION", "unknown"),
            followup_timeout=float(os.getenv("FOLLOWUP_TIMEOUT", "30.0")),
            environment=os.getenv("ENVIRONMENT", "development"),
            port=int(os.getenv("AGENT_PORT", "8000")),
        )

    def validate(self) -> List[str]:
        """Return the names of required settings that are missing."""
        required = {
            "DISCORD_PUBLIC_KEY": self.public_key,
            "DISCORD_APPLICATION_ID": self.application_id,
        }
        missing = [key for key, value in required.items() if not value]

        if missing:
            logger.warning(f"Missing required environment variables: {', '.join(missing)}")

        return missing
