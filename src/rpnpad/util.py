from functools import wraps
import logging


LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


class RPNError(Exception):
    pass


def wrap_user_errors(fmt):
    '''
    Decorator that converts lookup failures to RPNErrors.

    Passes through RPNErrors.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except RPNError:
                raise
            except (KeyError, ValueError, TypeError) as e:
                raise RPNError(fmt.format(*args, **kwargs), e)
        return wrapper
    return decorator


def ieee(fallback):
    '''
    Decorator that maps Python's float exceptions to IEEE 754 results.

    Python raises where IEEE arithmetic yields infinity or NaN; fallback is
    called with the same arguments and returns the IEEE value instead.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args):
            try:
                return f(*args)
            except (ArithmeticError, ValueError):
                return fallback(*args)
        return wrapper
    return decorator


def setup_logging(level=logging.WARNING, log_file=None):
    '''
    Configure the package logger.

    Logs go to stderr, stdout being reserved for the display.

    :param level: Logging level, e.g. logging.DEBUG.
    :param log_file: Optional path to also write logs to.
    '''
    logger = logging.getLogger(__package__)
    logger.setLevel(level)
    # Avoid duplicate lines when the CLI is run more than once per process.
    if logger.handlers:
        logger.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    console_handler = logging.StreamHandler()
    console_handler.setLevel(level)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        file_handler = logging.FileHandler(log_file, mode='w',
                                           encoding='utf-8')
        file_handler.setLevel(level)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    logger.debug('Logging initialized.')
    return logger
