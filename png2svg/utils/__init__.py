"""Cross-cutting utilities (lowest dependency layer).

This package provides shared primitives for:
    - Config validation (validators)
    - Color quantization and hex encoding (color)
    - Atomic I/O and file discovery (fs)
    - Unified logging (logging_config)

No module in utils/ may import from upper layers (vectorizer, cli).

Convenience imports:
    from png2svg.utils import fs, color, validators
    from png2svg.utils.logging_config import setup_logging, get_logger
"""

from . import color
from . import fs
from . import logging_config
from . import validators

from .logging_config import get_logger, pop_context, push_context, setup_logging

__all__ = [
    # Modules
    'color',
    'fs',
    'logging_config',
    'validators',
    # Direct exports
    'setup_logging',
    'get_logger',
    'push_context',
    'pop_context',
]
