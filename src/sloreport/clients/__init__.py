from sloreport.clients.base import BaseHTTPClient
from sloreport.clients.datadog import DatadogClient

__all__ = ["BaseHTTPClient", "DatadogClient"]
