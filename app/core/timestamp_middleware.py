"""
Automatic created_at / updated_at management for SQLAlchemy models.
"""

from sqlalchemy import event, DateTime, Column

from app.utils.datetime_utils import utc_now, to_naive_utc


def utc_now_naive():
    """Current UTC datetime in the naive form stored by the models"""
    return to_naive_utc(utc_now())


class TimestampMixin:
    created_at = Column(DateTime, default=utc_now_naive, nullable=False)
    updated_at = Column(DateTime, default=utc_now_naive, nullable=False)


class TimestampMiddleware:
    """Keeps updated_at current on every flush of a modified row; inserts rely on column defaults"""

    _installed = False

    @classmethod
    def setup_timestamp_listeners(cls):
        """Set up SQLAlchemy event listeners for automatic timestamp management"""
        if cls._installed:
            return

        @event.listens_for(TimestampMixin, 'before_update', propagate=True)
        def receive_before_update(mapper, connection, target):
            target.updated_at = utc_now_naive()

        cls._installed = True


def init_timestamp_middleware():
    """Initialize timestamp middleware - call this during app startup"""
    TimestampMiddleware.setup_timestamp_listeners()
