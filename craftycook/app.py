import logging
from dataclasses import dataclass
from typing import Optional

from .assistant import AIAssistant
from .auth import AuthSession
from .clients import ApiClient
from .config import Settings, load_settings
from .interactions import InteractionStore
from .loading import LoadingSignal, Scheduler
from .notifications import Notifier
from .posts import PostStore
from .reports import ReportService
from .utils import load_dotenv

logger = logging.getLogger(__name__)


@dataclass
class CraftyCookApp:
    settings: Settings
    loading: LoadingSignal
    notifier: Notifier
    api: ApiClient
    auth: AuthSession
    interactions: InteractionStore
    posts: PostStore
    reports: ReportService
    assistant: AIAssistant

    def close(self) -> None:
        self.loading.close()
        self.api.close()
        logger.debug("CraftyCook client closed")

    def __enter__(self) -> "CraftyCookApp":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()


def build_app(settings: Optional[Settings] = None, scheduler: Optional[Scheduler] = None, session=None) -> CraftyCookApp:
    """Composition root: one loading signal, one notifier and one API client shared by every store."""
    if settings is None:
        load_dotenv()
        settings = load_settings()
    loading = LoadingSignal(
        delay_ms=settings.loading_delay_ms,
        min_visible_ms=settings.loading_min_visible_ms,
        scheduler=scheduler,
    )
    notifier = Notifier()
    api = ApiClient(
        base_url=settings.api_base_url,
        token=settings.token,
        loading=loading,
        timeout=settings.request_timeout,
        session=session,
    )
    return CraftyCookApp(
        settings=settings,
        loading=loading,
        notifier=notifier,
        api=api,
        auth=AuthSession(api, notifier),
        interactions=InteractionStore(api, notifier),
        posts=PostStore(api, notifier),
        reports=ReportService(api, notifier),
        assistant=AIAssistant(api, notifier, timeout=settings.ai_timeout, detail_timeout=settings.ai_detail_timeout),
    )
