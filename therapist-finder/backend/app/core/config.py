"""
Configuración central de la app (fuente única de verdad).
Lee variables de entorno y expone un objeto Settings tipado.
"""
import os
from pydantic import BaseModel, Field


def _csv_env(name: str, default: str) -> list[str]:
    return [s.strip() for s in os.getenv(name, default).split(",") if s.strip()]


class Settings(BaseModel):
    MONGO_URI: str = Field(default_factory=lambda: os.getenv("MONGO_URI", "mongodb://localhost:27017"))
    MONGO_DB: str  = Field(default_factory=lambda: os.getenv("MONGO_DB", "therapist_finder"))
    MONGO_COLLECTION: str = Field(default_factory=lambda: os.getenv("MONGO_COLLECTION", "therapists"))
    MONGO_TIMEOUT_MS: int = Field(default_factory=lambda: int(os.getenv("MONGO_TIMEOUT_MS", "5000")))
    # "mongo" | "memory"
    STORE_BACKEND: str = Field(default_factory=lambda: os.getenv("STORE_BACKEND", "mongo").lower())
    SEED_CSV: str = Field(default_factory=lambda: os.getenv("SEED_CSV", ""))
    CORS_ORIGINS: list[str] = Field(default_factory=lambda: _csv_env("CORS_ORIGINS", "http://localhost:4200"))
    LOG_LEVEL: str = Field(default_factory=lambda: os.getenv("LOG_LEVEL", "INFO").upper())
    TELEMETRY_ENABLED: bool = Field(default_factory=lambda: os.getenv("TELEMETRY_ENABLED", "false").lower() == "true")
    OTEL_EXPORTER_OTLP_ENDPOINT: str = Field(default_factory=lambda: os.getenv("OTEL_EXPORTER_OTLP_ENDPOINT", ""))

settings = Settings()
