import pytest

from infrastructure.config import Settings

_ENV_VARS = [
    "DATABASE_URL",
    "DB_DRIVER",
    "DB_HOST",
    "DB_PORT",
    "DB_USER",
    "DB_PASSWORD",
    "DB_NAME",
    "DB_POOL_SIZE",
    "DB_POOL_TIMEOUT",
    "DB_CONNECT_RETRIES",
    "HOST",
    "PORT",
    "LOG_LEVEL",
    "STATIC_DIR",
    "CORS_ORIGINS",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    for name in _ENV_VARS:
        # setenv primero: así lo que cargue load_dotenv se deshace al terminar.
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    # Ningún .env del directorio de trabajo debe colarse en los tests.
    monkeypatch.chdir(tmp_path)


def test_defaults():
    settings = Settings.from_env()

    url = settings.database_url
    assert url.drivername == "postgresql+psycopg2"
    assert url.host == "localhost"
    assert url.port == 5432
    assert url.username == "postgres"
    assert url.database == "tasks_db"
    assert settings.pool_size == 10
    assert settings.pool_timeout is None
    assert settings.port == 3000
    assert settings.log_level == "info"
    assert settings.cors_origins == ["*"]


def test_db_parts_from_env(monkeypatch):
    monkeypatch.setenv("DB_HOST", "db.internal")
    monkeypatch.setenv("DB_PORT", "6543")
    monkeypatch.setenv("DB_USER", "app")
    monkeypatch.setenv("DB_PASSWORD", "s3cr3t@!")
    monkeypatch.setenv("DB_NAME", "todo")
    monkeypatch.setenv("DB_POOL_SIZE", "4")
    monkeypatch.setenv("DB_POOL_TIMEOUT", "2.5")

    settings = Settings.from_env()

    assert settings.database_url.host == "db.internal"
    assert settings.database_url.port == 6543
    assert settings.database_url.password == "s3cr3t@!"
    assert settings.database_url.database == "todo"
    assert settings.pool_size == 4
    assert settings.pool_timeout == 2.5


def test_database_url_wins_over_parts(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///data/tasks.db")
    monkeypatch.setenv("DB_HOST", "ignored")

    settings = Settings.from_env()

    assert settings.database_url.get_backend_name() == "sqlite"
    assert settings.database_url.database == "data/tasks.db"


def test_safe_url_masks_password(monkeypatch):
    monkeypatch.setenv("DB_PASSWORD", "hunter2")

    settings = Settings.from_env()

    assert "hunter2" not in settings.safe_database_url
    assert "***" in settings.safe_database_url


def test_cors_origin_list(monkeypatch):
    monkeypatch.setenv("CORS_ORIGINS", "http://a.test, http://b.test")

    assert Settings.from_env().cors_origins == ["http://a.test", "http://b.test"]


def test_dotenv_file_is_loaded(tmp_path):
    (tmp_path / ".env").write_text("PORT=4321\n")

    assert Settings.from_env().port == 4321


def test_invalid_port_raises(monkeypatch):
    monkeypatch.setenv("PORT", "not-a-port")

    with pytest.raises(ValueError):
        Settings.from_env()
