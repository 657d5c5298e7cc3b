"""
Error helpers shared by the store and the health server
"""

from functools import wraps
import logging

from flask import jsonify

logger = logging.getLogger(__name__)


def db_error_handler(func):
    """
    Log a failed store call with its name and arguments, then re-raise

    Callers decide what the user sees; this only makes sure the failure
    and its traceback end up in the log once.
    """
    @wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except Exception as e:
            # args[0] is the store instance
            call_args = ', '.join([repr(a) for a in args[1:]] + [f"{k}={v!r}" for k, v in kwargs.items()])
            logger.error(f"Database error in {func.__name__}({call_args}): {e}", exc_info=True)
            raise
    return wrapper


def json_error(error, status_code=400, **kwargs):
    """(JSON body, status) pair for a failed request, extra fields merged in"""
    body = {'success': False, 'error': error}
    body.update(kwargs)
    return jsonify(body), status_code
