# AAParser Argument Engine — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for aaparser."""
import logging

logger: logging.Logger = logging.getLogger("aaparser")
