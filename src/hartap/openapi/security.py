"""OpenAPI security schemes for the observed authentication headers."""

from typing import Any, Dict, List


def get_security_schemes() -> Dict[str, Dict[str, Any]]:
    """Security schemes matching the Authorization headers seen in captures."""
    return {
        'bearerAuth': {
            'type': 'http',
            'scheme': 'bearer',
            'bearerFormat': 'JWT',
        },
        'basicToken': {
            'type': 'http',
            'scheme': 'basic',
            'description': 'Observed Authorization header uses an opaque Basic token. Treat as secret.',
        },
    }


def get_default_security() -> List[Dict[str, List[str]]]:
    """Either scheme is accepted."""
    return [
        {'bearerAuth': []},
        {'basicToken': []},
    ]
