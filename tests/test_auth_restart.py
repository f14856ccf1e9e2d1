from __future__ import annotations

import textwrap
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from relauncher.errors import ExecutablePathUnavailable, SpawnFailed


def _config(tmp_path: Path, exit_after: bool = True) -> Path:
    p = tmp_path / "relauncher.yaml"
    p.write_text(
        textwrap.dedent(
            f"""
            http:
              host: "127.0.0.1"
              port: 8081

            auth:
              token: "test-token-123"

            relaunch:
              argv: none
              env: inherit
              exit_after: {'true' if exit_after else 'false'}
              exit_delay_s: 0.5
            """
        ).lstrip(),
        encoding="utf-8",
    )
    return p


class Recorder:
    def __init__(self, side_effect=None):
        self.calls = []
        self.side_effect = side_effect

    def __call__(self, *args, **kwargs):
        self.calls.append((args, kwargs))
        if self.side_effect is not None:
            return self.side_effect(*args, **kwargs)
        return None


@pytest.fixture()
def main(monkeypatch: pytest.MonkeyPatch, tmp_path: Path):
    # Asegura que la app en tests use este config temporal, no /etc/relauncher/...
    monkeypatch.setenv("RELAUNCHER_CONFIG", str(_config(tmp_path)))
    monkeypatch.delenv("RELAUNCHER_TOKEN", raising=False)

    import relauncher.main as main

    # Evita side effects: no queremos lanzar ni matar nada real en tests
    monkeypatch.setattr(main, "relaunch", Recorder())
    monkeypatch.setattr(main, "schedule_exit", Recorder())
    return main


@pytest.fixture()
def client(main) -> TestClient:
    return TestClient(main.app)


AUTH = {"X-Relauncher-Token": "test-token-123"}


def test_health(client: TestClient) -> None:
    r = client.get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok", "service": "relauncher"}


def test_restart_without_token_is_401(client: TestClient, main) -> None:
    r = client.post("/actions/restart")
    assert r.status_code == 401
    assert r.json()["detail"] == "Unauthorized"
    assert main.relaunch.calls == []


def test_restart_with_wrong_token_is_401(client: TestClient) -> None:
    r = client.post("/actions/restart", headers={"X-Relauncher-Token": "wrong"})
    assert r.status_code == 401


def test_restart_with_correct_token_relaunches_and_exits(client: TestClient, main) -> None:
    r = client.post("/actions/restart", headers=AUTH)
    assert r.status_code == 200
    assert r.json() == {"status": "restarting"}

    assert len(main.relaunch.calls) == 1
    (options,), _ = main.relaunch.calls[0]
    assert options.argv == "none"
    assert main.schedule_exit.calls == [((0.5,), {})]


def test_restart_without_exit_after(monkeypatch, tmp_path: Path, main) -> None:
    monkeypatch.setenv("RELAUNCHER_CONFIG", str(_config(tmp_path, exit_after=False)))
    r = TestClient(main.app).post("/actions/restart", headers=AUTH)
    assert r.json() == {"status": "relaunched"}
    assert main.schedule_exit.calls == []


def test_restart_path_unavailable_is_500(monkeypatch, client: TestClient, main) -> None:
    def fail(*_args, **_kwargs):
        raise ExecutablePathUnavailable("image deleted")

    monkeypatch.setattr(main, "relaunch", Recorder(fail))
    r = client.post("/actions/restart", headers=AUTH)
    assert r.status_code == 500
    assert r.json()["detail"].startswith("Executable path unavailable")
    assert main.schedule_exit.calls == []


def test_restart_spawn_failure_keeps_process_alive(monkeypatch, client: TestClient, main) -> None:
    def fail_spawn(_options, on_spawn_failure=None):
        on_spawn_failure(SpawnFailed("/bin/app", PermissionError("denied")))

    monkeypatch.setattr(main, "relaunch", Recorder(fail_spawn))
    r = client.post("/actions/restart", headers=AUTH)
    assert r.status_code == 200
    body = r.json()
    assert body["status"] == "not-restarted"
    assert "denied" in body["error"]
    assert main.schedule_exit.calls == []
