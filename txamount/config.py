"""
Configuration Management Module

Provides centralized configuration using pydantic-settings for environment-based configuration.
The four-digit precision and the equality tolerance are fixed in txamount.amount
and are deliberately not part of this configuration.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict


class AmountConfig(BaseSettings):
    """txamount runtime configuration"""

    model_config = SettingsConfigDict(
        env_prefix="TXAMOUNT_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    # Logging configuration
    log_level: str = "INFO"
    log_format: str = "json"  # json or text

    # Parsing behaviour
    warn_on_non_finite: bool = True  # log a warning when "nan"/"inf" is parsed


# Global configuration instance
config = AmountConfig()


def get_config() -> AmountConfig:
    """Get global configuration instance"""
    return config


def reload_config() -> AmountConfig:
    """Reload configuration from environment"""
    global config
    config = AmountConfig()
    return config
