#!/usr/bin/env python3
"""
HarTap - HAR to OpenAPI converter
Derives a redacted, parameterized OpenAPI 3.0 document from captured traffic

Usage:
    hartap convert session.har --output ./docs
    hartap serve ./docs --port 8000
"""

import argparse
import logging
import sys
import traceback
from pathlib import Path
from typing import List, Optional

from .. import __version__
from ..common import URLMatcher
from ..config import ConvertConfig, OUTPUT_FORMATS
from ..docs import DocsServer, generate_docs
from ..errors import HarTapError
from ..har import RequestFilter, apply_standard_filters, load_har_files, merge_har_documents
from ..openapi import BuildConfig, build_openapi_spec, convert_har_to_openapi, write_openapi_spec
from ..redaction import redact_har_document

logger = logging.getLogger("hartap.cli")


# ============================================================================
# COMMAND-LINE INTERFACE
# ============================================================================

def build_parser() -> argparse.ArgumentParser:
    """
    Build the argument parser.

    Returns:
        Configured ArgumentParser
    """
    parser = argparse.ArgumentParser(
        prog='hartap',
        description="HarTap - derive an OpenAPI document from HAR captures",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert one capture
  %(prog)s convert session.har

  # Merge several captures into JSON output
  %(prog)s convert "captures/**/*.har" --output ./api-docs --format json

  # Only keep traffic to one API host
  %(prog)s convert session.har --filter-host "api.example.com"
  %(prog)s convert session.har --filter-host "*.example.com"
  %(prog)s convert session.har --filter-regex "/api/v[0-9]+/"

  # Settings from a YAML file (flags still win)
  %(prog)s convert session.har --config hartap.yaml

  # Preview the generated docs
  %(prog)s serve ./docs --port 8000
        """
    )
    parser.add_argument('-V', '--hartap-version', action='version', version=f'%(prog)s {__version__}')

    subparsers = parser.add_subparsers(dest='command', help='Command to run')

    # --- CONVERT command ---
    convert_parser = subparsers.add_parser('convert', help='Convert HAR files to an OpenAPI document')
    convert_parser.add_argument('har_files', nargs='+', help='HAR file(s) or glob patterns')
    convert_parser.add_argument('-o', '--output', dest='output_dir', help='Output directory (default: ./docs)')
    convert_parser.add_argument('-f', '--format', choices=OUTPUT_FORMATS, help='Output format (default: yaml)')
    convert_parser.add_argument('-v', '--version', dest='api_version', help='API version string (default: 0.1.0)')
    convert_parser.add_argument('--title', help='API title for info.title')
    convert_parser.add_argument('--server-url', help='Server URL (default: origin of the first request)')
    convert_parser.add_argument('--no-redact', dest='redact', action='store_const', const=False,
                                help='Skip sensitive data redaction')
    convert_parser.add_argument('--no-docs', dest='docs', action='store_const', const=False,
                                help='Skip HTML documentation generation')
    convert_parser.add_argument('--no-normalize', dest='normalize_paths', action='store_const', const=False,
                                help='Keep concrete paths instead of templates')
    convert_parser.add_argument('--spec-url', help='URL of the spec used by the HTML docs (default: ./openapi/openapi.yaml)')
    convert_parser.add_argument('--filter-host', help='Comma-separated hosts to keep (supports *.example.com)')
    convert_parser.add_argument('--filter-regex', help='Regex matched against request URL or host')
    convert_parser.add_argument('--include-errors', dest='successful_only', action='store_const', const=False,
                                help='Keep non-2xx/304 responses')
    convert_parser.add_argument('--config', help='YAML config file')
    convert_parser.add_argument('--verbose', action='store_true', help='Debug logging and tracebacks on error')
    convert_parser.add_argument('--quiet', action='store_true', help='Only log warnings and errors')

    # --- SERVE command ---
    serve_parser = subparsers.add_parser('serve', help='Preview generated documentation')
    serve_parser.add_argument('directory', nargs='?', default='./docs', help='Docs directory (default: ./docs)')
    serve_parser.add_argument('--host', default='127.0.0.1', help='Host to bind (default: 127.0.0.1)')
    serve_parser.add_argument('-p', '--port', type=int, default=8000, help='Port to bind (default: 8000)')
    serve_parser.add_argument('--verbose', action='store_true', help='Debug logging')

    return parser


def setup_logging(verbose: bool = False, quiet: bool = False, level: str = 'info'):
    """Configure the root logger from the command-line flags."""
    if verbose:
        log_level = logging.DEBUG
    elif quiet:
        log_level = logging.WARNING
    else:
        log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format='%(levelname)s %(name)s: %(message)s',
        force=True,
    )


def load_config(args: argparse.Namespace) -> ConvertConfig:
    """Config file (if any) with command-line flags applied on top."""
    config = ConvertConfig.from_yaml(args.config) if args.config else ConvertConfig()

    filter_hosts = None
    if args.filter_host:
        filter_hosts = [h.strip() for h in args.filter_host.split(',') if h.strip()]

    return config.merge_cli_overrides(
        output_dir=args.output_dir,
        format=args.format,
        version=args.api_version,
        title=args.title,
        server_url=args.server_url,
        redact=args.redact,
        docs=args.docs,
        normalize_paths=args.normalize_paths,
        spec_url=args.spec_url,
        filter_hosts=filter_hosts,
        filter_regex=args.filter_regex,
        successful_only=args.successful_only,
    )


def run_convert(har_patterns: List[str], config: ConvertConfig) -> Optional[Path]:
    """
    Run the convert pipeline.

    Returns:
        Path of the written spec, or None when no entries survived filtering
    """
    print("🔄 HarTap: HAR to OpenAPI conversion", flush=True)

    # Step 1: Load
    loaded = load_har_files(har_patterns)
    print(f"✓ Loaded {len(loaded)} HAR file(s)", flush=True)
    for path, _ in loaded:
        logger.debug(f"  - {path}")

    # Step 2: Filter
    request_filter = None
    if config.filter_hosts or config.filter_regex:
        request_filter = RequestFilter(config.filter_hosts, config.filter_regex)

    filtered = [
        apply_standard_filters(
            document,
            request_filter=request_filter,
            successful_only=config.successful_only,
            drop_preflight=config.drop_preflight,
        )
        for _, document in loaded
    ]
    total = sum(len(document.entries) for document in filtered)
    print(f"✓ Kept {total} request(s) after filtering", flush=True)

    if total == 0:
        print("⚠️  No requests left after filtering; nothing to convert", flush=True)
        return None

    # Step 3: Merge
    merged = merge_har_documents(filtered)
    print(f"✓ Merged into {len(merged.entries)} unique request(s)", flush=True)

    # Step 4: Redact
    if config.redact:
        processed = redact_har_document(merged)
        print("✓ Redacted sensitive data", flush=True)
    else:
        processed = merged
        print("⚠️  Skipping redaction - sensitive data will be preserved", flush=True)

    # Step 5: Convert
    draft = convert_har_to_openapi(
        processed,
        normalize_paths=config.normalize_paths,
        title=config.title,
        version=config.version,
    )

    # Step 6: Build
    server_url = config.server_url
    if not server_url and processed.entries:
        server_url = URLMatcher.extract_origin(processed.entries[0].request.url)

    spec = build_openapi_spec(draft, BuildConfig(
        version=config.version,
        title=config.title,
        description=config.description,
        server_url=server_url,
    ))
    print(f"✓ Generated spec with {len(spec['paths'])} path(s)", flush=True)

    # Step 7: Write
    spec_path = Path(config.output_dir) / 'openapi' / f'openapi.{config.format}'
    write_openapi_spec(spec, str(spec_path), config.format)
    print(f"✓ OpenAPI spec written to: {spec_path}", flush=True)

    # Step 8: Docs
    if config.docs:
        pages = generate_docs(config.output_dir, config.spec_url, config.title)
        print("✓ Documentation generated", flush=True)
        for page in pages.values():
            print(f"   - {page}", flush=True)
        print()
        print("To view the documentation:")
        print(f"  hartap serve {config.output_dir}")

    return spec_path


def cmd_convert(args: argparse.Namespace) -> int:
    try:
        config = load_config(args)
        setup_logging(args.verbose, args.quiet, config.log_level)
        run_convert(args.har_files, config)
    except (HarTapError, OSError, ValueError) as e:
        print(f"❌ {e}", file=sys.stderr, flush=True)
        if args.verbose:
            traceback.print_exc()
        return 1

    return 0


def cmd_serve(args: argparse.Namespace) -> int:
    setup_logging(args.verbose)

    try:
        server = DocsServer(args.directory, host=args.host, port=args.port)
    except (ImportError, OSError) as e:
        print(f"❌ {e}", file=sys.stderr, flush=True)
        return 1

    server.start()
    return 0


def main(argv: Optional[List[str]] = None) -> int:
    """Entry point for the hartap command."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command == 'convert':
        return cmd_convert(args)
    elif args.command == 'serve':
        return cmd_serve(args)

    parser.print_help()
    return 1


if __name__ == '__main__':
    sys.exit(main())
