# noqa: D104 - package initialization
from .logging import configure_structured_logging  # noqa: F401
from .metrics import metrics_blueprint, record_playlist_fetch, record_token_exchange  # noqa: F401
