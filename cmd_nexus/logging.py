"""
logging.py
==========

Logging utilities with automatic tagging of module and function names.

Diagnostics go to stderr through these loggers; user-facing errors are
printed by the CLI consoles instead.

Classes:
--------
- TaggedFormatter: A logging formatter that adds module and function name tags.

Functions:
----------
- setup_tagged_logger: Set up a logger with the TaggedFormatter.
- configure_global_logging: Configure global logging level for all tagged loggers.
"""

import logging
import inspect


class TaggedFormatter(logging.Formatter):
    """
    Custom formatter to include the module and function name tags
    from the *outermost caller* in package code.
    """
    def format(self, record):
        # Skip frames from the logging system and this formatter
        caller_frame = None
        for frame_info in inspect.stack():
            module_name = frame_info.frame.f_globals.get("__name__", "__main__")
            if not (module_name.startswith("logging") or module_name.startswith("cmd_nexus.logging")):
                caller_frame = frame_info
                break

        if caller_frame:
            module_name = caller_frame.frame.f_globals.get("__name__", "__main__")
            function_name = caller_frame.function
        else:
            module_name = "__unknown__"
            function_name = "__unknown__"

        record.tag = f"[{module_name}.{function_name}]"
        return super().format(record)


def setup_tagged_logger(name=None, level=None):
    """
    Set up a logger that includes module and function tags in log messages.

    Parameters:
    -----------
    name : str, optional
        Logger name (default: this module's name).
    level : int, optional
        Logging level (default: the level set by configure_global_logging,
        or WARNING).

    Returns:
    --------
    logging.Logger
        Configured logger instance.
    """
    logger = logging.getLogger(name or __name__)

    if level is None:
        level = _global_logging_level or logging.WARNING

    logger.setLevel(level)

    if not logger.handlers:  # Avoid duplicate handlers
        handler = logging.StreamHandler()
        handler.setLevel(level)
        formatter = TaggedFormatter("%(asctime)s %(tag)s %(levelname)s: %(message)s", datefmt="%Y-%m-%d %H:%M:%S")
        handler.setFormatter(formatter)
        logger.addHandler(handler)
    else:
        for handler in logger.handlers:
            handler.setLevel(level)

    return logger


def configure_global_logging(level=logging.WARNING):
    """
    Configure the logging level for every ``cmd_nexus`` logger and handler.

    Loggers created later by setup_tagged_logger pick up the same level.

    Parameters:
    -----------
    level : int or str
        Logging level (e.g., logging.DEBUG, "INFO").
    """
    global _global_logging_level
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name == "cmd_nexus" or name.startswith("cmd_nexus."):
            logger = logging.getLogger(name)
            logger.setLevel(level)
            for handler in logger.handlers:
                handler.setLevel(level)

    _global_logging_level = level


# Global variable to store the configured logging level
_global_logging_level = None
