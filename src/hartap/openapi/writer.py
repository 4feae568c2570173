"""
OpenAPI document writer.

Outputs the document as YAML or JSON.
"""

import json
import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

logger = logging.getLogger("hartap.openapi")

OUTPUT_FORMATS = ('yaml', 'json')


class _SpecDumper(yaml.SafeDumper):
    """SafeDumper that never emits anchors/aliases for repeated objects."""

    def ignore_aliases(self, data: Any) -> bool:
        return True


def format_openapi_spec(spec: Mapping[str, Any], fmt: str = 'yaml') -> str:
    """
    Serialize the document.

    Raises:
        ValueError: For an unknown format
    """
    if fmt == 'yaml':
        return yaml.dump(
            dict(spec),
            Dumper=_SpecDumper,
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
            indent=2,
            width=float('inf'),
        )
    if fmt == 'json':
        return json.dumps(spec, indent=2, ensure_ascii=False) + '\n'

    raise ValueError(f'Invalid format "{fmt}". Must be "yaml" or "json".')


def write_openapi_spec(spec: Mapping[str, Any], output_path: str, fmt: str = 'yaml') -> Path:
    """
    Write the document to a file, creating parent directories.

    Returns:
        Path of the written file
    """
    content = format_openapi_spec(spec, fmt)

    output_file = Path(output_path)
    output_file.parent.mkdir(parents=True, exist_ok=True)

    with open(output_file, 'w', encoding='utf-8') as f:
        f.write(content)

    logger.info(f"Wrote OpenAPI spec ({len(content) / 1024:.1f} KB) to {output_file}")
    return output_file
