"""swagger2jmeter - Generate JMeter JMX test plans from Swagger/OpenAPI documents."""

__version__ = "1.0.0"

from swagger2jmeter.core.jmx_generator import JMXGenerator
from swagger2jmeter.core.openapi_parser import OpenAPIParser
from swagger2jmeter.core.spec_loader import SpecLoader

__all__ = [
    "OpenAPIParser",
    "JMXGenerator",
    "SpecLoader",
]
