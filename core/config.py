# core/config.py
"""
Configuration management for the advisory backend
"""

from pydantic_settings import BaseSettings
from typing import List, Optional, Dict, Any
import os
from functools import lru_cache
from enum import Enum
from dotenv import load_dotenv

from .exceptions import AgentConfigError

load_dotenv()

class Environment(str, Enum):
    DEVELOPMENT = "development"
    TESTING = "testing"
    PRODUCTION = "production"

class LogLevel(str, Enum):
    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"

class Settings(BaseSettings):
    """Application settings with validation"""

    # Environment
    environment: Environment = Environment.DEVELOPMENT
    debug: bool = True

    # API Configuration
    api_title: str = "AgriPulse Advisory Backend"
    api_version: str = "1.0.0"
    api_host: str = "0.0.0.0"
    api_port: int = 8000

    # Logging
    log_level: LogLevel = LogLevel.INFO
    log_format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    # CORS
    cors_origins: List[str] = [
        "http://localhost:3000",
        "http://localhost:5173",
        "http://localhost:4173"
    ]
    cors_allow_credentials: bool = True
    cors_allow_methods: List[str] = ["*"]
    cors_allow_headers: List[str] = ["*"]

    # External API Keys
    openweather_api_key: Optional[str] = None
    gemini_api_key: Optional[str] = None

    # Cache Configuration
    cache_enabled: bool = True
    cache_default_ttl: int = 600  # 10 minutes, same as weather staleness

    # Agent Configurations
    weather_config: Dict[str, Any] = {
        "base_url": "https://api.openweathermap.org/data/2.5",
        "country_code": "IN",
        "units": "metric",
        "forecast_days": 5,
        "request_timeout_seconds": 10,
        "cache_ttl_seconds": 600
    }

    advisory_config: Dict[str, Any] = {
        "explanation_timeout_seconds": 8.0,
        "default_language": "en",
        "llm_model": "gemini-1.5-flash",
        "llm_temperature": 0.3
    }

    def __init__(self, **kwargs):
        super().__init__(**kwargs)

        # Gemini keys are commonly exported as GOOGLE_API_KEY
        if not self.gemini_api_key:
            self.gemini_api_key = os.getenv('GOOGLE_API_KEY')

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    def get_agent_config(self, agent_name: str) -> Dict[str, Any]:
        """Get configuration for specific agent"""
        config_map = {
            "weather": self.weather_config,
            "advisory": self.advisory_config
        }
        return config_map.get(agent_name, {})

    @property
    def is_development(self) -> bool:
        return self.environment == Environment.DEVELOPMENT

    @property
    def is_production(self) -> bool:
        return self.environment == Environment.PRODUCTION

@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance"""
    return Settings()

# Validation functions
def validate_api_keys(settings: Settings) -> None:
    """Validate required API keys based on environment"""
    required_keys = []

    if not settings.openweather_api_key:
        required_keys.append("OPENWEATHER_API_KEY")

    if required_keys and settings.is_production:
        raise AgentConfigError(f"Missing required API keys in production: {', '.join(required_keys)}")

    if required_keys and settings.is_development:
        print(f"⚠️  Warning: Missing API keys (development mode): {', '.join(required_keys)}")
        print(f"⚠️  Advisories will report weather as unavailable until the key is set")

    if not settings.gemini_api_key:
        print("ℹ️  GEMINI_API_KEY not set - advisory explanations will use fallback text")
