"""Logging utilities for cloudinpy modules."""

import logging

ROOT_LOGGER_NAME = 'cloudinpy'


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.
    
    This ensures that loggers work with basicConfig() without needing
    explicit setup_logging() calls. The logger will:
    - Propagate to root logger (default behavior)
    - Only set a default level if root logger has no handlers
    
    Args:
        name: Logger name (typically __name__)
        
    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True
    
    # basicConfig() not called yet
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)
    
    return logger


def set_verbose(verbose: bool) -> None:
    """Switch every cloudinpy logger between DEBUG and INFO."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.getLogger(ROOT_LOGGER_NAME).setLevel(level)
    for name in list(logging.root.manager.loggerDict):
        if name.startswith(ROOT_LOGGER_NAME + '.'):
            logging.getLogger(name).setLevel(level)
