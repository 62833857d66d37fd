from datetime import tzinfo
from functools import partial
from zoneinfo import ZoneInfo

from fastapi import FastAPI

from cf_heatmap.api.routes.heatmap import router
from cf_heatmap.codeforces_api import fetch_user_submissions
from cf_heatmap.core.middleware import HeatmapRateLimitMiddleware
from cf_heatmap.core.observability import configure_logging
from cf_heatmap.core.observability import init_sentry
from cf_heatmap.services.submission_cache import SubmissionCache
from cf_heatmap.services.submission_cache import SubmissionFetcher
from cf_heatmap.settings import Settings


def _viewer_timezone(app_settings: Settings) -> tzinfo | None:
    return ZoneInfo(app_settings.timezone) if app_settings.timezone else None


def create_submission_cache(
    app_settings: Settings, fetch: SubmissionFetcher | None = None
) -> SubmissionCache:
    """Build the process-scoped cache wired to the Codeforces API."""

    if fetch is None:
        fetch = partial(
            fetch_user_submissions,
            api_url=app_settings.codeforces_api_url,
            timeout=app_settings.request_timeout_seconds,
        )

    return SubmissionCache(
        fetch,
        tz=_viewer_timezone(app_settings),
        base_url=app_settings.codeforces_base_url,
    )


def create_app(
    app_settings: Settings | None = None, fetch: SubmissionFetcher | None = None
) -> FastAPI:
    app_settings = app_settings or Settings()
    configure_logging(app_settings)
    init_sentry(app_settings)

    app = FastAPI(title="cf-heatmap")
    app.state.settings = app_settings
    app.state.submission_cache = create_submission_cache(app_settings, fetch)
    app.add_middleware(
        HeatmapRateLimitMiddleware,
        requests_per_window=app_settings.rate_limit_per_minute,
        window_seconds=app_settings.rate_limit_window_seconds,
    )
    app.include_router(router)
    return app


app = create_app()
