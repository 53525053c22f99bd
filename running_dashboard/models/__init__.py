from .dashboard import ProgressMetrics, SeriesPoint, YearSeries
from .responses import OperationStatus, SubscriptionStatus
from .strava import (
    ACTIVITY_OBJECT_TYPE,
    RUN_TYPE,
    StravaActivity,
    StravaEvent,
    TokenRecord,
    WebhookSubscription,
)

__all__ = [
    'ACTIVITY_OBJECT_TYPE',
    'RUN_TYPE',
    'OperationStatus',
    'ProgressMetrics',
    'SeriesPoint',
    'StravaActivity',
    'StravaEvent',
    'SubscriptionStatus',
    'TokenRecord',
    'WebhookSubscription',
    'YearSeries',
]
