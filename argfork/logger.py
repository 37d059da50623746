# Argfork CLI Resolver — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Argfork."""
import logging

logger: logging.Logger = logging.getLogger("argfork")
