# talenthub/main.py
import logging
from dataclasses import dataclass, field
from typing import Dict, Optional

from talenthub.core.config import Settings, settings as default_settings
from talenthub.core.logging_config import configure_logging
from talenthub.services.data_service import DataService
from talenthub.services.retry import RetryPolicy
from talenthub.services.seed import restore_application_state
from talenthub.services.store import LocalStore

logger = logging.getLogger(__name__)


@dataclass
class Application:
    settings: Settings
    store: LocalStore
    retry_policy: RetryPolicy
    service: DataService
    counts: Dict[str, int] = field(default_factory=dict)

    def close(self) -> None:
        self.store.dispose()


# --------------------------------------------------
# APPLICATION BOOTSTRAP (SINGLE ENTRY POINT)
# --------------------------------------------------
def init_application(settings: Optional[Settings] = None, **seed_options) -> Application:
    settings = settings or default_settings
    configure_logging(settings.LOG_LEVEL)

    store = LocalStore(settings=settings)
    store.create_all()

    retry_policy = RetryPolicy.from_settings(settings)
    service = DataService(store, retry_policy)

    counts = restore_application_state(
        store,
        seed=settings.SEED_ON_EMPTY,
        settings=settings,
        **seed_options,
    )
    logger.info(f"TalentHub ready: {counts}")

    return Application(
        settings=settings,
        store=store,
        retry_policy=retry_policy,
        service=service,
        counts=counts,
    )


if __name__ == "__main__":
    init_application()
