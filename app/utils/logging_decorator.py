from functools import wraps
from typing import Optional, Callable
import logging

# Activity decorators for controller functions. They record what happened
# after the wrapped call succeeds; a failure while building the log line is
# reported but never replaces the call's result.

logger = logging.getLogger("app.activity")


def log_activity(
    action: str,
    description: Optional[str] = None,
    table_name: Optional[str] = None,
    get_record_id: Optional[Callable] = None,
):
    """
    Decorator to log activities in controller functions

    Args:
        action: Action type (CREATE, UPDATE, DELETE, VIEW)
        description: Human-readable description
        table_name: Table the action touches
        get_record_id: Function to extract record ID from (result, *args, **kwargs)
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs):
            result = func(*args, **kwargs)

            try:
                record_id = None
                if get_record_id:
                    record_id = get_record_id(result, *args, **kwargs)

                message = f"{action.upper()} {table_name or '-'}"
                if record_id is not None:
                    message += f" #{record_id}"
                logger.info(f"{message}: {description or f'Performed {action.lower()} action'}")
            except Exception as e:
                logger.warning(f"Failed to log activity for {func.__name__}: {e}")

            return result

        return wrapper

    return decorator


def extract_id_from_result(result, *args, **kwargs):
    """Extract ID from function result"""
    if hasattr(result, 'id'):
        return result.id
    elif isinstance(result, dict) and 'id' in result:
        return result['id']
    return None


def log_create(table_name: str, description: Optional[str] = None):
    """
    Decorator for CREATE operations

    Usage:
        @log_create("contacts", "Created contact")
        def create_contact(db, contact_in):
            return created_item
    """
    return log_activity(
        action="CREATE",
        description=description or f"Created new {table_name}",
        table_name=table_name,
        get_record_id=extract_id_from_result,
    )


def log_update(table_name: str, description: Optional[str] = None):
    """Decorator for UPDATE operations"""
    return log_activity(
        action="UPDATE",
        description=description or f"Updated {table_name}",
        table_name=table_name,
        get_record_id=extract_id_from_result,
    )


def log_delete(table_name: str, description: Optional[str] = None):
    """Decorator for DELETE operations; the deleted id is the second positional argument"""
    return log_activity(
        action="DELETE",
        description=description or f"Deleted {table_name}",
        table_name=table_name,
        get_record_id=lambda result, *args, **kwargs: args[1] if len(args) > 1 else None,
    )


def log_view(table_name: str, description: Optional[str] = None):
    """Decorator for VIEW operations"""
    return log_activity(
        action="VIEW",
        description=description or f"Viewed {table_name}",
        table_name=table_name,
    )
