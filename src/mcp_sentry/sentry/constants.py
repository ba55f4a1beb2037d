"""Constants for the Sentry REST API integration."""

API_PREFIX = "/api/0"

ENV_SENTRY_HOST = "SENTRY_HOST"
ENV_SENTRY_ACCESS_TOKEN = "SENTRY_ACCESS_TOKEN"
ENV_SENTRY_SSL_VERIFY = "SENTRY_SSL_VERIFY"
ENV_SENTRY_TIMEOUT = "SENTRY_TIMEOUT"

DEFAULT_TIMEOUT = 30.0

# Default field sets applied when a caller does not pass ``fields``
DEFAULT_ORGANIZATION_FIELDS = "id,name,status,slug"
DEFAULT_ISSUE_FIELDS = (
    "id,title,culprit,level,status,firstSeen,lastSeen,count,userCount,shortId"
)
DEFAULT_ISSUE_EVENT_FIELDS = "id,eventID,title,culprit,platform,dateCreated,tags"
DEFAULT_PROJECT_EVENT_FIELDS = (
    "eventID,title,culprit,dateCreated,tags,entries,platform"
)
