"""End-to-end tests running the CLI as separate processes against `serve`."""

import os
import socket
import subprocess
import sys
import time
from pathlib import Path

import httpx
import pytest

PROJECT_ROOT = Path(__file__).resolve().parents[2]


def free_port() -> int:
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


@pytest.fixture
def server_env():
    env = os.environ.copy()
    env["TASK_TRACKER_HOST"] = "127.0.0.1"
    env["TASK_TRACKER_PORT"] = str(free_port())
    env["PYTHONIOENCODING"] = "utf-8"
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(PROJECT_ROOT), env.get("PYTHONPATH")) if p
    )
    return env


@pytest.fixture
def server(server_env):
    """Run `task-tracker serve` until the test finishes."""
    process = subprocess.Popen(
        [sys.executable, "-m", "task_tracker.cli.main", "serve"],
        cwd=PROJECT_ROOT,
        env=server_env,
        stdout=subprocess.DEVNULL,
        stderr=subprocess.DEVNULL,
    )
    url = f"http://127.0.0.1:{server_env['TASK_TRACKER_PORT']}/health"
    deadline = time.monotonic() + 15
    try:
        while True:
            if process.poll() is not None:
                pytest.fail(f"server exited early with code {process.returncode}")
            try:
                if httpx.get(url, timeout=0.5).status_code == 200:
                    break
            except httpx.HTTPError:
                pass
            if time.monotonic() > deadline:
                pytest.fail("server did not become healthy in time")
            time.sleep(0.1)
        yield process
    finally:
        process.terminate()
        try:
            process.wait(timeout=10)
        except subprocess.TimeoutExpired:
            process.kill()
            process.wait()


def run_cli(env, *args) -> subprocess.CompletedProcess:
    return subprocess.run(
        [sys.executable, "-m", "task_tracker.cli.main", *args],
        cwd=PROJECT_ROOT,
        env=env,
        capture_output=True,
        text=True,
        encoding="utf-8",
        timeout=30,
    )


class TestCliAgainstServer:
    """Tasks created by one CLI process are visible to the next."""

    def test_add_then_show(self, server, server_env):
        added = run_cli(server_env, "add", "Buy milk")
        assert added.returncode == 0, added.stderr
        assert "Created task 1: Buy milk" in added.stdout

        shown = run_cli(server_env, "show", "1")
        assert shown.returncode == 0, shown.stderr
        assert "Description: Buy milk" in shown.stdout

    def test_complete_then_list(self, server, server_env):
        run_cli(server_env, "add", "First")
        run_cli(server_env, "add", "Second")
        completed = run_cli(server_env, "complete", "2")
        assert completed.returncode == 0, completed.stderr

        listed = run_cli(server_env, "list", "--completed")
        assert listed.returncode == 0, listed.stderr
        assert "Second" in listed.stdout
        assert "First" not in listed.stdout

    def test_missing_task_fails(self, server, server_env):
        result = run_cli(server_env, "show", "42")

        assert result.returncode == 1
        assert "Task not found with id 42" in result.stderr

    def test_no_server_fails(self, server_env):
        result = run_cli(server_env, "list")

        assert result.returncode == 1
        assert "Cannot reach task server" in result.stderr
