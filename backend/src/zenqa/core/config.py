from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
	ENVIRONMENT: Literal["dev", "prod", "test"] = "dev"
	PROJECT_NAME: str = "ZenQA Forge"
	SERVICE_NAME: str = "Zen QA Java Service"
	VERSION: str = "1.0.0"

	API_PREFIX: str = "/api/java"
	CORS_ORIGINS: list[str] = ["*"]

	# Labels echoed back in every generation response
	LANGUAGE: str = "java"
	FRAMEWORK: str = "playwright"

	# Placeholder application URL written into generated test methods
	TARGET_BASE_URL: str = "https://your-app-url.com"

	model_config = SettingsConfigDict(
		env_file=".env",
		env_file_encoding="utf-8",
		case_sensitive=True,
		extra="ignore"
	)


@lru_cache
def get_settings() -> Settings:
	return Settings()
