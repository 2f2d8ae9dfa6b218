import pytest

from userpool.config import settings
from userpool.config.settings import PoolSettings, _load_secret_from_file, build_pool, load_settings
from userpool.core.cognito import BotoIdentityProvider


@pytest.fixture
def pool_env(monkeypatch, tmp_path):
    """Minimal environment, with /run/secrets pointed at an empty temp dir."""
    real_path = settings.Path

    def fake_path(target):
        if str(target) == "/run/secrets":
            return tmp_path
        return real_path(target)

    monkeypatch.setattr(settings, "Path", fake_path)
    monkeypatch.setenv("COGNITO_USER_POOL_ID", "us-east-1_abc123")
    monkeypatch.setenv("COGNITO_CLIENT_ID", "client1")
    for var in ("COGNITO_CLIENT_SECRET", "COGNITO_ENDPOINT_URL", "COGNITO_REQUEST_TIMEOUT", "COGNITO_MAX_WORKERS"):
        monkeypatch.delenv(var, raising=False)
    return tmp_path


def test_load_settings_defaults(pool_env):
    cfg = load_settings()
    assert cfg == PoolSettings(pool_id="us-east-1_abc123", client_id="client1")
    assert cfg.region == "us-east-1"
    assert cfg.request_timeout == 5
    assert cfg.max_workers == 4


def test_load_settings_reads_overrides(pool_env, monkeypatch):
    monkeypatch.setenv("COGNITO_ENDPOINT_URL", "http://localhost:4566")
    monkeypatch.setenv("COGNITO_REQUEST_TIMEOUT", "2.5")
    monkeypatch.setenv("COGNITO_MAX_WORKERS", "8")
    cfg = load_settings()
    assert cfg.endpoint_url == "http://localhost:4566"
    assert cfg.request_timeout == 2.5
    assert cfg.max_workers == 8


@pytest.mark.parametrize("missing", ["COGNITO_USER_POOL_ID", "COGNITO_CLIENT_ID"])
def test_load_settings_requires_pool_and_client(pool_env, monkeypatch, missing):
    monkeypatch.delenv(missing)
    with pytest.raises(RuntimeError, match=missing):
        load_settings()


def test_client_secret_prefers_run_secrets(pool_env, monkeypatch):
    (pool_env / "cognito_client_secret").write_text("file-secret\n")
    monkeypatch.setenv("COGNITO_CLIENT_SECRET", "env-secret")
    assert load_settings().client_secret == "file-secret"


def test_client_secret_falls_back_to_env(pool_env, monkeypatch):
    monkeypatch.setenv("COGNITO_CLIENT_SECRET", "env-secret")
    assert load_settings().client_secret == "env-secret"


def test_empty_secret_file_is_ignored(pool_env):
    (pool_env / "cognito_client_secret").write_text("   ")
    assert _load_secret_from_file("cognito_client_secret") is None


def test_build_pool_uses_given_provider(stub_provider):
    cfg = PoolSettings(pool_id="us-east-1_abc123", client_id="client1", client_secret="s3cret")
    pool = build_pool(cfg, provider=stub_provider)
    assert pool.provider is stub_provider
    assert pool.client_secret == "s3cret"


def test_build_pool_creates_boto_provider():
    cfg = PoolSettings(pool_id="eu-west-3_xyz", client_id="client1", request_timeout=9)
    pool = build_pool(cfg)
    try:
        assert isinstance(pool.provider, BotoIdentityProvider)
        assert pool.provider.client.meta.region_name == "eu-west-3"
        assert pool.provider.client.meta.config.read_timeout == 9
        assert pool.provider.client.meta.config.connect_timeout == 9
    finally:
        pool.provider.close()
