"""
HarTap Command-Line Interface
"""

from .hartap_main import main, run_convert, build_parser

__all__ = ['main', 'run_convert', 'build_parser']
