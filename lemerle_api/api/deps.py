from lemerle_api.core.db import get_session
from lemerle_api.core.i18n import get_locale

__all__ = ["get_session", "get_locale"]
