import json

import pytest
from dependency_injector import providers

from config.app_settings import settings
from core import main as cli
from core.containers import build_container
from core.enums import StorageBackend


def _no_http_client() -> None:
    raise AssertionError("http client created for the local backend")


@pytest.fixture
def local_cli(monkeypatch, tmp_path):
    def _build(app_settings):
        container = build_container(app_settings)
        container.http_client.override(providers.Callable(_no_http_client))
        return container

    monkeypatch.setattr(settings, "STORAGE_BACKEND", StorageBackend.local)
    monkeypatch.setattr(settings, "LOCAL_STORAGE_DIR", tmp_path)
    monkeypatch.setattr(settings, "DATA_API_USER_ID", "u1")
    monkeypatch.setattr(cli, "configure_loguru", lambda: None)
    monkeypatch.setattr(cli, "build_container", _build)
    return tmp_path


@pytest.mark.parametrize("value", ["15/01/2026", "2026-02-30", "tomorrow"])
def test_summary_rejects_malformed_date(local_cli, capsys, value: str) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.main(["summary", "--date", value])

    assert exc_info.value.code == 2
    assert "invalid date" in capsys.readouterr().err


def test_summary_lists_workouts_of_the_day(local_cli, capsys, make_workout) -> None:
    workout = make_workout("2026-01-05", [{"name": "Squat", "sets": [{"weight": 100, "reps": 5}]}])
    rows = [{"id": "w1", **workout.model_dump(mode="json", exclude={"id", "user_id"})}]
    (local_cli / "gym-workouts.json").write_text(json.dumps(rows), encoding="utf-8")

    cli.main(["summary", "--date", "2026-1-5"])

    out = capsys.readouterr().out
    assert "Workouts: 1" in out
    assert "2026-01-05 Push: 500 kg total volume" in out
