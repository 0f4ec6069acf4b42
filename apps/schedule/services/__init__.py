"""
Schedule app services layer.

Read-only engines over products and entries. Each engine has a pure
``build_*`` function and a ``get_*`` wrapper that loads from the database.
"""

from .deadline_alerts import (
    APPROACHING_DAYS,
    is_approaching,
    is_current_product,
    is_past_product,
    build_deadline_alerts,
    get_deadline_alerts,
)

from .schedule_aggregation import (
    ScheduleEventType,
    EVENT_TYPE_PRIORITY,
    add_months,
    build_schedule,
    get_schedule,
)


__all__ = [
    # Deadline Alerts
    'APPROACHING_DAYS',
    'is_approaching',
    'is_current_product',
    'is_past_product',
    'build_deadline_alerts',
    'get_deadline_alerts',

    # Schedule Aggregation
    'ScheduleEventType',
    'EVENT_TYPE_PRIORITY',
    'add_months',
    'build_schedule',
    'get_schedule',
]
