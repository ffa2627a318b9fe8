"""
Logging utility module for htmlxpath.
"""

import logging
import os
import sys
import time
from contextlib import contextmanager
from typing import Dict, Iterator, Optional

# Define logging levels dictionary for easy reference
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL
}

LOGGER_NAME = "htmlxpath"


class LogFormatter(logging.Formatter):
    """Console formatter that colors the level name with ANSI codes."""
    
    RESET = '\033[0m'
    
    LEVEL_COLORS = {
        'DEBUG': '\033[34m',
        'INFO': '\033[32m',
        'WARNING': '\033[33m',
        'ERROR': '\033[31m',
        'CRITICAL': '\033[1m\033[31m'
    }
    
    def __init__(self, colored: bool = True, *args, **kwargs):
        """
        Initialize formatter.
        
        Args:
            colored: Whether to use colored output (never on Windows consoles)
            *args: Additional formatter args
            **kwargs: Additional formatter kwargs
        """
        self.colored = colored and sys.platform != 'win32'
        super().__init__(*args, **kwargs)
    
    def format(self, record: logging.LogRecord) -> str:
        formatted_msg = super().format(record)
        color = self.LEVEL_COLORS.get(record.levelname)
        if self.colored and color:
            formatted_msg = formatted_msg.replace(
                record.levelname, f"{color}{record.levelname}{self.RESET}", 1)
        return formatted_msg


def setup_logging(log_file: Optional[str] = None,
                  console_level: str = "WARNING",
                  file_level: str = "DEBUG",
                  component: Optional[str] = None,
                  colored: Optional[bool] = None) -> logging.Logger:
    """
    Set up logging for htmlxpath.
    
    Args:
        log_file: Path to log file (None for no file logging)
        console_level: Console logging level
        file_level: File logging level
        component: Optional component name for the logger
        colored: Force colored console output on or off (default: when stderr is a tty)
        
    Returns:
        logging.Logger: Configured logger
    """
    logger_name = LOGGER_NAME
    if component:
        logger_name = f"{logger_name}.{component}"
    
    logger = logging.getLogger(logger_name)
    
    # If handlers already exist, assume logger is already configured
    if logger.handlers:
        return logger
    
    # Logger level is the lowest of console and file so both handlers see their records
    console_levelno = LOG_LEVELS.get(console_level.upper(), logging.WARNING)
    file_levelno = LOG_LEVELS.get(file_level.upper(), logging.DEBUG)
    logger.setLevel(min(console_levelno, file_levelno) if log_file else console_levelno)
    
    if colored is None:
        colored = sys.stderr.isatty()
    
    console_handler = logging.StreamHandler()
    console_handler.setLevel(console_levelno)
    console_format = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
    console_handler.setFormatter(LogFormatter(colored=colored, fmt=console_format, datefmt='%H:%M:%S'))
    logger.addHandler(console_handler)
    
    if log_file:
        log_dir = os.path.dirname(log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        
        file_handler = logging.FileHandler(log_file, encoding='utf-8')
        file_handler.setLevel(file_levelno)
        
        # File records carry the source location
        file_format = ("%(asctime)s [%(levelname)s] %(name)s "
                       "(%(filename)s:%(lineno)d): %(message)s")
        file_handler.setFormatter(logging.Formatter(file_format, datefmt='%Y-%m-%d %H:%M:%S'))
        logger.addHandler(file_handler)
    
    return logger


def log_exception(logger: logging.Logger, exception: BaseException,
                  message: str = "An exception occurred") -> None:
    """
    Log an exception.
    
    Args:
        logger: Logger to use
        exception: Exception to log
        message: Message to log with the exception
    """
    exc_info = (type(exception), exception, exception.__traceback__)
    logger.error(f"{message}: {exception}", exc_info=exc_info)


class PerformanceLogger:
    """Times named operations and logs how long they took."""
    
    def __init__(self, logger: logging.Logger, component: str):
        """
        Initialize performance logger.
        
        Args:
            logger: Logger to use
            component: Component name, prefixed to every message
        """
        self.logger = logger
        self.component = component
        self.start_times: Dict[str, float] = {}
    
    def start(self, name: str) -> None:
        """Start timing an operation."""
        self.start_times[name] = time.perf_counter()
    
    def end(self, name: str, level: str = "DEBUG") -> float:
        """
        End timing an operation and log the duration.
        
        Args:
            name: Operation name
            level: Log level
            
        Returns:
            float: Duration in seconds, 0.0 if the operation was never started
        """
        if name not in self.start_times:
            self.logger.warning(f"No start time found for {name}")
            return 0.0
        
        duration = time.perf_counter() - self.start_times.pop(name)
        self.logger.log(LOG_LEVELS.get(level.upper(), logging.DEBUG),
                        f"{self.component} {name} took {duration:.4f} seconds")
        return duration
    
    @contextmanager
    def measure(self, name: str, level: str = "DEBUG") -> Iterator[None]:
        """Time the enclosed block; nothing is logged if it raises."""
        self.start(name)
        try:
            yield
        except BaseException:
            self.start_times.pop(name, None)
            raise
        self.end(name, level)
