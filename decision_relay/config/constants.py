"""
Relay constants

Wire-level values shared by the payload builder, the transport and the
directive interpreter. Deployment settings live in settings.py.
"""

# Outbound request defaults
DEFAULT_USER_AGENT = "DecisionRelay/1.0"
DEFAULT_CONNECT_TIMEOUT = 20.0  # seconds
DEFAULT_RESPONSE_TIMEOUT = 20.0  # seconds
DEFAULT_MAX_ATTEMPTS = 5
DEFAULT_RETRY_DELAY = 0.0

JSON_MEDIA_TYPE = "application/json"
NULL_IDENTIFIER = "null"  # echoed in X-UID / X-CID when an identifier is absent

# Visitor-facing query triggers
DEFAULT_DEBUG_PARAM = "_relay_debug"
DEFAULT_CAMPAIGN_PARAM = "_relay_cid"
CAMPAIGN_NOT_FOUND = "cid-not-found"

# Remote directive vocabulary
STATUS_ERROR = "error"
STATUS_NONE = "none"
METHOD_REDIRECT = "redirection"
METHOD_INLINE = "nrc"
HIDE_REFERRER_HEADER = 1
HIDE_REFERRER_PAGE = 2
DEFAULT_REDIRECT_CODE = 302
DEFAULT_ERROR_MESSAGE = "Unknown error"

# Boundary handler output
GENERIC_FAILURE_MESSAGE = "A system error occurred."

# Environment variable names
ENV_PREFIX = "DECISION_RELAY_"
ENV_ENDPOINT = ENV_PREFIX + "ENDPOINT"
ENV_VISITOR_ID = ENV_PREFIX + "VISITOR_ID"
ENV_CAMPAIGN_ID = ENV_PREFIX + "CAMPAIGN_ID"
ENV_USER_AGENT = ENV_PREFIX + "USER_AGENT"
ENV_CONNECT_TIMEOUT = ENV_PREFIX + "CONNECT_TIMEOUT"
ENV_RESPONSE_TIMEOUT = ENV_PREFIX + "RESPONSE_TIMEOUT"
ENV_MAX_ATTEMPTS = ENV_PREFIX + "MAX_ATTEMPTS"
ENV_RETRY_DELAY = ENV_PREFIX + "RETRY_DELAY"
ENV_DEBUG_PARAM = ENV_PREFIX + "DEBUG_PARAM"
ENV_CAMPAIGN_PARAM = ENV_PREFIX + "CAMPAIGN_PARAM"
