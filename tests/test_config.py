from pathlib import Path

import httpx
import pytest

from tutor_cli.config import ClientConfig, load_config
from tutor_cli.session import clear_session, load_session, save_session


def test_load_config_reads_yaml(tmp_path):
    path = tmp_path / "tutor.yaml"
    path.write_text(
        "base_url: https://tutor.example.com\n"
        "timeout: 5\n"
        "headers:\n"
        "  X-Client: cli\n"
        "session_file: ~/.tutor/session.json\n",
        encoding="utf-8",
    )
    config = load_config(path)
    assert config == ClientConfig(
        base_url="https://tutor.example.com",
        api_base="/api",
        timeout=5,
        headers={"X-Client": "cli"},
        session_file=Path("~/.tutor/session.json").expanduser(),
    )


def test_load_config_missing_file(tmp_path):
    assert load_config(tmp_path / "absent.yaml") is None


def test_load_config_missing_base_url(tmp_path, capsys):
    path = tmp_path / "tutor.yaml"
    path.write_text("timeout: 5\n", encoding="utf-8")
    assert load_config(path) is None
    assert "Missing key 'base_url'" in capsys.readouterr().err


def test_load_config_invalid_yaml(tmp_path, capsys):
    path = tmp_path / "tutor.yaml"
    path.write_text("base_url: [unclosed\n", encoding="utf-8")
    assert load_config(path) is None
    assert "[LOAD CONFIG] Failed to parse" in capsys.readouterr().err


def test_session_round_trip(tmp_path):
    path = tmp_path / "state" / "session.json"
    cookies = httpx.Cookies()
    cookies.set("session", "abc", domain="tutor.example.com", path="/")
    save_session(cookies, path)
    assert path.stat().st_mode & 0o777 == 0o600

    restored = httpx.Cookies()
    assert load_session(restored, path) == 1
    assert restored.get("session", domain="tutor.example.com") == "abc"

    clear_session(path)
    assert not path.exists()
    assert load_session(httpx.Cookies(), path) == 0


@pytest.mark.parametrize("content", [
    '{"session": "s1"}',
    '["session"]',
    '[{"value": "s1"}]',
    '"session=s1"',
])
def test_load_session_ignores_malformed_shape(tmp_path, capsys, content):
    path = tmp_path / "session.json"
    path.write_text(content, encoding="utf-8")
    cookies = httpx.Cookies()
    assert load_session(cookies, path) == 0
    assert list(cookies.jar) == []
    assert "[LOAD SESSION] Malformed session" in capsys.readouterr().err


def test_save_session_tightens_existing_file(tmp_path):
    path = tmp_path / "session.json"
    path.write_text("[]", encoding="utf-8")
    path.chmod(0o644)
    save_session(httpx.Cookies(), path)
    assert path.stat().st_mode & 0o777 == 0o600
