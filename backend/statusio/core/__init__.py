# Core module
from .config import settings, get_settings, PROVIDER_TAGS, PROVIDER_NAMES
from .time_converter import TimeRemaining, from_absolute_epoch, from_duration
from .status_cache import InMemoryTTLCache, status_cache
from .credentials import CredentialSet, normalize_cache_minutes
