"""
OpenTelemetry (opcional):
- Si TELEMETRY_ENABLED=true y OTEL_EXPORTER_OTLP_ENDPOINT está definido,
  se inicializa la traza básica (extra "telemetry" del paquete).
- No se envían PII; usa atributos genéricos.
"""
import logging

from ..core.config import settings

logger = logging.getLogger("app.telemetry")


def setup_otel(service_name: str = "therapist-finder-api") -> bool:
    if not settings.TELEMETRY_ENABLED or not settings.OTEL_EXPORTER_OTLP_ENDPOINT:
        return False

    try:
        from opentelemetry import trace
        from opentelemetry.exporter.otlp.proto.http.trace_exporter import OTLPSpanExporter
        from opentelemetry.sdk.resources import Resource
        from opentelemetry.sdk.trace import TracerProvider
        from opentelemetry.sdk.trace.export import BatchSpanProcessor
    except ImportError:
        logger.warning("TELEMETRY_ENABLED pero opentelemetry no está instalado (pip install .[telemetry])")
        return False

    resource = Resource.create({"service.name": service_name})
    provider = TracerProvider(resource=resource)
    provider.add_span_processor(BatchSpanProcessor(OTLPSpanExporter(endpoint=settings.OTEL_EXPORTER_OTLP_ENDPOINT)))
    trace.set_tracer_provider(provider)
    logger.info(f"OpenTelemetry -> {settings.OTEL_EXPORTER_OTLP_ENDPOINT}")
    return True
