from pathlib import Path

from postpress.settings import Settings, choose_env_file


def test_defaults():
    s = Settings()

    assert s.POSTS_DIR == "_posts"
    assert s.BASE_URL == ""
    assert s.PAGE_SIZE == 10
    assert s.HIGHLIGHT_CODE is False


def test_settings_read_environment(monkeypatch):
    monkeypatch.setenv("BASE_URL", "/blog")
    monkeypatch.setenv("PAGE_SIZE", "25")
    monkeypatch.setenv("HIGHLIGHT_CODE", "true")

    s = Settings()

    assert s.BASE_URL == "/blog"
    assert s.PAGE_SIZE == 25
    assert s.HIGHLIGHT_CODE is True


def test_path_properties():
    s = Settings(POSTS_DIR="content/_posts", OUTPUT_DIR="public")

    assert s.posts_path == Path("content/_posts")
    assert s.output_path == Path("public")


def test_choose_env_file_prefers_env_local(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: str(self) == ".env.local")
    assert choose_env_file() == ".env.local"


def test_choose_env_file_falls_back(monkeypatch):
    monkeypatch.setattr(Path, "exists", lambda self: False)
    assert choose_env_file() == ".env"
