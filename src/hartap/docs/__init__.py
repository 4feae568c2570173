"""
HarTap Docs Module

Static HTML documentation and a local preview server.
"""

from .generator import generate_docs, render_template, DEFAULT_SPEC_URL
from .server import DocsServer, FASTAPI_AVAILABLE

__all__ = [
    'generate_docs',
    'render_template',
    'DEFAULT_SPEC_URL',
    'DocsServer',
    'FASTAPI_AVAILABLE',
]
