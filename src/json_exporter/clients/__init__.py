from json_exporter.clients.base import BaseHTTPClient, build_ssl_context, is_success_status

__all__ = ["BaseHTTPClient", "build_ssl_context", "is_success_status"]
