import sys
from pathlib import Path

from loguru import logger

from sui_rpc_helper.utils.models.settings_model import LoggingConfig


FORMAT = '{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {extra[module]} | {message}'

# Library-scoped logger, sinks filter on the "library" extra
_sui_logger = logger.bind(library='sui_rpc_helper')

# Ids of the file sinks added by configure_rpc_logging
_file_handler_ids = []


def _library_filter(record):
    return record['extra'].get('library') == 'sui_rpc_helper'


def create_level_filter(level: str):
    """
    Build a loguru filter that passes only this library's records of one level.

    Args:
        level (str): Level name, e.g. ``"DEBUG"``.

    Returns:
        Callable: Filter suitable for ``logger.add(filter=...)``.
    """
    def level_filter(record):
        return _library_filter(record) and record['level'].name == level
    return level_filter


def get_logger(module_name: str = 'SuiRpcHelper'):
    """
    Get a logger instance with module binding.

    No sink configuration is performed; the host application decides where
    records go unless ``configure_rpc_logging`` is called.

    Args:
        module_name (str): Module name to bind to the logger.

    Returns:
        Logger: A bound logger instance scoped to this library.
    """
    return _sui_logger.bind(module=module_name)


def configure_rpc_logging(config: LoggingConfig):
    """
    Add file and console sinks for this library's records.

    Returns the ids of the handlers that were added so callers can remove
    them again with ``logger.remove``.

    Args:
        config (LoggingConfig): The logging configuration to apply.
    """
    handler_ids = []
    if config.log_dir is not None:
        log_dir = Path(config.log_dir)
        if not log_dir.is_absolute():
            log_dir = Path.cwd() / log_dir

        log_dir.mkdir(parents=True, exist_ok=True, mode=0o755)

        for level, enabled in config.file_levels.items():
            if enabled:
                log_file = log_dir / f'{level.lower()}.log'
                handler_id = logger.add(
                    str(log_file.absolute()),
                    level=level,
                    format=config.format,
                    filter=create_level_filter(level),
                    rotation=config.rotation,
                    retention=config.retention,
                    compression=config.compression,
                    backtrace=True,
                    diagnose=True,
                )
                _file_handler_ids.append(handler_id)
                handler_ids.append(handler_id)

    if config.enable_console_logging:
        for level, output_stream in config.console_levels.items():
            output = sys.stdout if output_stream == 'stdout' else sys.stderr
            handler_ids.append(
                logger.add(
                    output,
                    level=level,
                    format=config.format,
                    filter=create_level_filter(level),
                    colorize=True,
                ),
            )
    return handler_ids


def disable_rpc_file_logging():
    """
    Remove the file sinks added by ``configure_rpc_logging``.

    Sinks registered by the host application are left alone.
    """
    while _file_handler_ids:
        handler_id = _file_handler_ids.pop()
        try:
            logger.remove(handler_id)
        except ValueError:
            pass  # already removed


def enable_debug_logging():
    """
    Send this library's DEBUG and TRACE records to stdout.
    """
    return logger.add(
        sys.stdout,
        level='TRACE',
        format=FORMAT,
        filter=lambda record: _library_filter(record) and record['level'].name in ['DEBUG', 'TRACE'],
        colorize=True,
    )


default_logger = get_logger('SuiRpcHelper')
