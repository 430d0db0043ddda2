"""Names of the runtime hooks this package subscribes to."""

from botmetrics.core.settings import SETTINGS_NAMESPACE

MESSAGE_SENT = "hook:chatbot:sent"
MESSAGE_RECEIVED = "hook:chatbot:received"
BLOCK_TRIGGERED = "hook:analytics:block"
PASSATION = "hook:analytics:passation"
GLOBAL_FALLBACK = "hook:analytics:fallback-global"
LOCAL_FALLBACK = "hook:analytics:fallback-local"
INTERVENTION = "hook:analytics:intervention"
STATS_ENTRY = "hook:stats:entry"
URL_CHANGED = f"hook:{SETTINGS_NAMESPACE}:url"
TOKEN_CHANGED = f"hook:{SETTINGS_NAMESPACE}:token"

ALL_HOOKS = (
    MESSAGE_SENT,
    MESSAGE_RECEIVED,
    BLOCK_TRIGGERED,
    PASSATION,
    GLOBAL_FALLBACK,
    LOCAL_FALLBACK,
    INTERVENTION,
    STATS_ENTRY,
    URL_CHANGED,
    TOKEN_CHANGED,
)
