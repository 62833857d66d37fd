from cf_heatmap.core.observability import init_sentry
from cf_heatmap.main import create_app
from cf_heatmap.settings import Settings


def test_init_sentry_skips_when_dsn_missing(monkeypatch) -> None:
    """Sentry initialization is skipped when DSN is absent."""

    calls: list[dict[str, object]] = []

    def fake_init(**kwargs):
        calls.append(kwargs)

    monkeypatch.setattr("cf_heatmap.core.observability.sentry_sdk.init", fake_init)

    settings = Settings(sentry_dsn=None)
    init_sentry(settings)

    assert calls == []


def test_init_sentry_initializes_sdk_with_settings(monkeypatch) -> None:
    """Sentry SDK is initialized with configured runtime settings."""

    calls: list[dict[str, object]] = []

    def fake_init(**kwargs):
        calls.append(kwargs)

    monkeypatch.setattr("cf_heatmap.core.observability.sentry_sdk.init", fake_init)

    settings = Settings(
        sentry_dsn="https://examplePublicKey@o0.ingest.sentry.io/0",
        environment="production",
        release="abc123",
        sentry_traces_sample_rate=0.2,
    )
    init_sentry(settings)

    assert calls == [
        {
            "dsn": "https://examplePublicKey@o0.ingest.sentry.io/0",
            "environment": "production",
            "release": "abc123",
            "traces_sample_rate": 0.2,
            "send_default_pii": False,
        }
    ]


def test_create_app_initializes_sentry_from_app_settings(monkeypatch) -> None:
    """The app factory reports to Sentry using the heatmap service settings."""

    calls: list[dict[str, object]] = []

    def fake_init(**kwargs):
        calls.append(kwargs)

    async def no_submissions(handle: str) -> list[dict[str, object]]:
        return []

    monkeypatch.setattr("cf_heatmap.core.observability.sentry_sdk.init", fake_init)

    settings = Settings(
        sentry_dsn="https://examplePublicKey@o0.ingest.sentry.io/0",
        environment="staging",
        timezone="UTC",
        codeforces_api_url="https://mirror.example/api",
    )
    app = create_app(settings, fetch=no_submissions)

    assert calls[0]["environment"] == "staging"
    assert app.state.settings.codeforces_api_url == "https://mirror.example/api"
    assert app.state.submission_cache.is_cached("tourist") is False
