"""Core constants: formats, defaults, and cache key structure."""

# Language codes: ISO 639-1 with optional region (nl-BE, en-US, en).
LANGUAGE_CODE_PATTERN = r"^[a-z]{2}(-[A-Z]{2})?$"
LANGUAGE_CODE_MAX_LENGTH = 10

# Message keys: upper snake case starting with a letter (WELCOME, MAIN_MENU_1).
MESSAGE_KEY_PATTERN = r"^[A-Z][A-Z0-9_]*$"
MESSAGE_KEY_MAX_LENGTH = 64

VERSION_NAME_MAX_LENGTH = 100
DISPLAY_NAME_MAX_LENGTH = 128
DESCRIPTION_MAX_LENGTH = 512
ACTION_REASON_MAX_LENGTH = 500
ACTOR_MAX_LENGTH = 100
# Actors are user names or service ids (jdoe, svc.import, jane@corp.example).
ACTOR_PATTERN = r"^[\w.@+-]+$"

# Actor recorded when the caller does not identify itself.
DEFAULT_ACTOR = "system"
IMPORT_ACTOR = "import"

# Export document format understood by import/export tooling.
EXPORT_FORMAT_VERSION = "5.0.0"

# Cache key prefixes
CACHE_PREFIX_RUNTIME_MESSAGE = "msg"
CACHE_PREFIX_RUNTIME_STORE = "msgstore"

# Delimiter for composite keys
CACHE_KEY_SEP = ":"
