# Optline Options Parser — (c) 2025 rtj.dev LLC — MIT Licensed
"""Global logger instance for Optline."""
import logging

logger: logging.Logger = logging.getLogger("optline")
