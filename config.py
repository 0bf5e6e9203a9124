"""Configuration management with environment variable support."""

import os
import secrets
from dataclasses import dataclass, field
from typing import Literal

from engine.rules import RuleSet


def _parse_cors_origins() -> list[str]:
    """Parse CORS_ORIGINS environment variable."""
    origins = os.getenv("CORS_ORIGINS", "http://localhost:8000")
    return [o.strip() for o in origins.split(",") if o.strip()]


@dataclass(frozen=True)
class CORSConfig:
    """CORS configuration."""

    allowed_origins: list[str] = field(default_factory=_parse_cors_origins)
    allow_credentials: bool = True
    allow_methods: list[str] = field(default_factory=lambda: ["*"])
    allow_headers: list[str] = field(default_factory=lambda: ["*"])


@dataclass(frozen=True)
class RateLimitConfig:
    """Rate limiting configuration."""

    enabled: bool = field(
        default_factory=lambda: os.getenv("RATE_LIMIT_ENABLED", "true").lower() == "true"
    )
    requests_per_minute: int = field(
        default_factory=lambda: int(os.getenv("RATE_LIMIT_RPM", "60"))
    )


@dataclass(frozen=True)
class SecurityConfig:
    """Security configuration."""

    secret_key: str = field(
        default_factory=lambda: os.getenv("SECRET_KEY", secrets.token_urlsafe(32))
    )


@dataclass(frozen=True)
class RedisConfig:
    """Redis connection configuration."""

    host: str = field(default_factory=lambda: os.getenv("REDIS_HOST", "localhost"))
    port: int = field(default_factory=lambda: int(os.getenv("REDIS_PORT", "6379")))
    db: int = field(default_factory=lambda: int(os.getenv("REDIS_DB", "0")))
    password: str | None = field(default_factory=lambda: os.getenv("REDIS_PASSWORD"))

    @property
    def url(self) -> str:
        """Build Redis connection URL."""
        auth = f":{self.password}@" if self.password else ""
        return f"redis://{auth}{self.host}:{self.port}/{self.db}"


@dataclass(frozen=True)
class GameConfig:
    """Default table configuration for practice rounds."""

    min_bet: int = 5
    max_bet: int = 500
    num_seats: int = 4
    payout_config: Literal["3:2", "6:5", "mixed"] = field(
        default_factory=lambda: os.getenv("PAYOUT_CONFIG", "3:2")  # type: ignore[arg-type]
    )
    side_bet_stake: int = 5
    tip_amount: int = 1
    dealer_hits_soft_17: bool = True
    insurance_allowed: bool = True
    surrender_allowed: bool = True
    default_level: int = 1

    def rules(self) -> RuleSet:
        """Build the engine's rule set from this configuration."""
        return RuleSet(
            min_bet=self.min_bet,
            max_bet=self.max_bet,
            dealer_hits_soft_17=self.dealer_hits_soft_17,
            insurance_allowed=self.insurance_allowed,
            surrender_allowed=self.surrender_allowed,
            side_bet_stake=self.side_bet_stake,
            tip_amount=self.tip_amount,
        )


@dataclass(frozen=True)
class AppConfig:
    """Application configuration."""

    debug: bool = field(default_factory=lambda: os.getenv("DEBUG", "false").lower() == "true")
    host: str = field(default_factory=lambda: os.getenv("HOST", "0.0.0.0"))
    port: int = field(default_factory=lambda: int(os.getenv("PORT", "8000")))
    session_ttl: int = 3600  # Session timeout in seconds
    table_cache_size: int = field(default_factory=lambda: int(os.getenv("TABLE_CACHE_SIZE", "1024")))

    redis: RedisConfig = field(default_factory=RedisConfig)
    game: GameConfig = field(default_factory=GameConfig)
    cors: CORSConfig = field(default_factory=CORSConfig)
    rate_limit: RateLimitConfig = field(default_factory=RateLimitConfig)
    security: SecurityConfig = field(default_factory=SecurityConfig)


# Global configuration instance
config = AppConfig()
