import pytest

from config import (
    DEFAULT_BACKEND_URL,
    BackendSettings,
    ConfigError,
    default_sources,
    first_match,
    load_app_settings,
    load_backend_settings,
    setup_logging,
)

LONG_KEY = "eyJhbGciOiJIUzI1NiJ9.anon-key-de-teste"


class TestFirstMatch:
    def test_first_source_wins(self):
        sources = [("environment", {"A": "env"}), ("dotenv", {"A": "file"})]
        assert first_match(["A"], sources) == "env"

    def test_names_tried_in_order_within_source(self):
        sources = [("environment", {"B": "segundo", "A": "primeiro"})]
        assert first_match(["A", "B"], sources) == "primeiro"

    def test_empty_values_are_skipped(self):
        sources = [("environment", {"A": ""}), ("dotenv", {"A": None, "B": "x"})]
        assert first_match(["A", "B"], sources) == "x"

    def test_higher_priority_name_wins_across_sources(self):
        sources = [
            ("environment", {"NEXT_PUBLIC_SUPABASE_URL": "https://next.example.co"}),
            ("dotenv", {"VITE_SUPABASE_URL": "https://vite.example.co"}),
        ]
        assert first_match(["VITE_SUPABASE_URL", "NEXT_PUBLIC_SUPABASE_URL"], sources) == "https://vite.example.co"
        assert load_backend_settings(sources).url == "https://vite.example.co"

    def test_accepts_one_shot_iterable(self):
        sources = iter([("environment", {}), ("dotenv", {"B": "x"})])
        assert first_match(["A", "B"], sources) == "x"

    def test_default_when_nothing_matches(self):
        assert first_match(["A"], [("environment", {})], "padrao") == "padrao"


class TestBackendSettings:
    def test_url_fallback_and_key_chain(self):
        sources = [("environment", {"SUPABASE_ANON_KEY": LONG_KEY})]
        s = load_backend_settings(sources)
        assert s.url == DEFAULT_BACKEND_URL
        assert s.anon_key == LONG_KEY
        assert s.is_configured()

    def test_vite_names_take_priority(self):
        sources = [("environment", {
            "NEXT_PUBLIC_SUPABASE_URL": "https://next.example.co",
            "VITE_SUPABASE_URL": "https://vite.example.co",
            "SUPABASE_ANON_KEY": "chave-antiga-aaaaaaaaaaaaaa",
            "VITE_SUPABASE_ANON_KEY": LONG_KEY,
        })]
        s = load_backend_settings(sources)
        assert s.url == "https://vite.example.co"
        assert s.anon_key == LONG_KEY

    def test_not_configured_without_key(self):
        s = load_backend_settings([("environment", {})])
        assert s.anon_key == ""
        assert not s.is_configured()

    @pytest.mark.parametrize("url,key,expected", [
        ("https://x.co", "k" * 21, True),
        ("https://x.co", "k" * 20, False),
        ("http://a.b", "k" * 21, False),
    ])
    def test_is_configured_thresholds(self, url, key, expected):
        assert BackendSettings(url, key).is_configured() is expected


class TestAppSettings:
    def test_defaults(self):
        s = load_app_settings([("environment", {})])
        assert s.api_base_url == "http://localhost:3001"
        assert s.log_level == "INFO"
        assert s.backups_dir.endswith("backups_dev_simulated")

    def test_overrides(self):
        s = load_app_settings([("environment", {
            "BELAFARMA_API_URL": "http://127.0.0.1:9000/",
            "BELAFARMA_BACKUPS_DIR": "/srv/backups",
            "LOG_LEVEL": "debug",
        })])
        assert s.api_base_url == "http://127.0.0.1:9000"
        assert s.backups_dir == "/srv/backups"
        assert s.log_level == "DEBUG"


def test_default_sources_reads_dotenv_after_environment(tmp_path, monkeypatch):
    env_file = tmp_path / ".env"
    env_file.write_text("VITE_SUPABASE_ANON_KEY=do-arquivo-env-1234567890\nLOG_LEVEL=WARNING\n")
    monkeypatch.setenv("LOG_LEVEL", "ERROR")
    monkeypatch.delenv("VITE_SUPABASE_ANON_KEY", raising=False)
    monkeypatch.delenv("NEXT_PUBLIC_SUPABASE_PUBLISHABLE_DEFAULT_KEY", raising=False)
    monkeypatch.delenv("SUPABASE_ANON_KEY", raising=False)

    sources = default_sources(str(env_file))
    assert [name for name, _ in sources] == ["environment", "dotenv"]
    assert load_app_settings(sources).log_level == "ERROR"
    assert load_backend_settings(sources).anon_key == "do-arquivo-env-1234567890"


def test_default_sources_without_env_file(tmp_path):
    sources = default_sources(str(tmp_path / "nao-existe.env"))
    assert [name for name, _ in sources] == ["environment"]


def test_setup_logging_rejects_unknown_level():
    with pytest.raises(ConfigError):
        setup_logging("BARULHENTO")


def test_setup_logging_accepts_known_level():
    setup_logging("warning")
