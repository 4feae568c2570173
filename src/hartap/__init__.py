"""
HarTap

Derives a redacted, parameterized OpenAPI 3.0 description of a web API from
captured HTTP traffic (HAR files).
"""

__version__ = "1.0.0"
