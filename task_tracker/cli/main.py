"""CLI commands for the task tracker."""

import asyncio
import json
import sys
from typing import Optional, Sequence

import click

from .. import __version__
from ..api.client import TaskApiClient
from ..container import configure_default_api_client, get_container
from ..domain.errors import TaskError
from ..domain.models import Task


def run_async(coro):
    """Run async coroutine in sync context."""
    return asyncio.run(coro)


def call_server(coro):
    """Run a call against the task server, turning task errors into a CLI failure."""
    try:
        return run_async(coro)
    except TaskError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


def task_to_dict(task: Task) -> dict:
    return {
        "id": task.id,
        "description": task.description,
        "completed": task.completed,
        "created_at": task.created_at.isoformat(),
        "updated_at": task.updated_at.isoformat(),
    }


def format_task(task: Task) -> str:
    status_icon = "✅" if task.completed else "📋"
    return f"{status_icon} [{task.id}] {task.description}"


def echo_tasks(tasks: Sequence[Task], output_json: bool = False) -> None:
    if output_json:
        output = {
            "tasks": [task_to_dict(t) for t in tasks],
            "total": len(tasks),
        }
        click.echo(json.dumps(output, indent=2, ensure_ascii=False))
        return

    if not tasks:
        click.echo("No tasks found.")
        return

    click.echo(f"Found {len(tasks)} task(s):\n")
    for task in sorted(tasks, key=lambda t: t.id):
        click.echo(format_task(task))


@click.group()
@click.version_option(version=__version__)
@click.option(
    "--server-url",
    default=None,
    help="Task server base URL (default: from TASK_TRACKER_* settings)",
)
def cli(server_url: Optional[str]):
    """Task tracker CLI.

    `serve` runs the API; the task commands talk to a running server.
    """
    if server_url:
        get_container().configure_api_client(lambda: TaskApiClient(server_url))
    configure_default_api_client()


@cli.command("add")
@click.argument("description")
def add_task(description: str):
    """Create a new task."""
    client = get_container().api_client
    task = call_server(client.create_task(description))
    click.echo(f"Created task {task.id}: {task.description}")


@cli.command("list")
@click.option(
    "--completed/--pending",
    "completed",
    default=None,
    help="Show only completed or only pending tasks",
)
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def list_tasks(completed: Optional[bool], output_json: bool):
    """List tasks."""
    client = get_container().api_client

    if completed is None:
        tasks = call_server(client.get_all_tasks())
    else:
        tasks = call_server(client.get_tasks_by_status(completed))

    echo_tasks(tasks, output_json)


@cli.command("show")
@click.argument("task_id", type=int)
def show_task(task_id: int):
    """Show task details."""
    client = get_container().api_client
    task = call_server(client.get_task_by_id(task_id))

    click.echo(f"ID: {task.id}")
    click.echo(f"Description: {task.description}")
    click.echo(f"Status: {task.status.value}")
    click.echo(f"Created: {task.created_at.isoformat()}")
    click.echo(f"Updated: {task.updated_at.isoformat()}")


@cli.command("update")
@click.argument("task_id", type=int)
@click.option("--description", "-d", default=None, help="New description")
@click.option(
    "--completed/--pending",
    "completed",
    default=None,
    help="New completion state",
)
def update_task(task_id: int, description: Optional[str], completed: Optional[bool]):
    """Update a task's description and/or completion state."""
    client = get_container().api_client
    task = call_server(
        client.update_task(task_id, description=description, completed=completed)
    )
    click.echo(f"Updated: {format_task(task)}")


@cli.command("complete")
@click.argument("task_id", type=int)
def complete_task(task_id: int):
    """Mark a task as complete."""
    client = get_container().api_client
    task = call_server(client.complete_task(task_id))
    click.echo(f"✅ Task completed: {task.description}")


@cli.command("uncomplete")
@click.argument("task_id", type=int)
def uncomplete_task(task_id: int):
    """Mark a task as pending again."""
    client = get_container().api_client
    task = call_server(client.uncomplete_task(task_id))
    click.echo(f"📋 Task reopened: {task.description}")


@cli.command("delete")
@click.argument("task_id", type=int)
def delete_task(task_id: int):
    """Delete a task."""
    client = get_container().api_client
    call_server(client.delete_task(task_id))
    click.echo(f"Deleted task {task_id}")


@cli.command("search")
@click.argument("query", default="")
@click.option("--json", "output_json", is_flag=True, help="Output as JSON")
def search_tasks(query: str, output_json: bool):
    """Search tasks by description (case-insensitive)."""
    client = get_container().api_client
    tasks = call_server(client.search_tasks(query))
    echo_tasks(tasks, output_json)


@cli.command("openapi")
def openapi():
    """Print the OpenAPI document as JSON."""
    from ..api.app import create_app

    click.echo(json.dumps(create_app().openapi(), indent=2, ensure_ascii=False))


@cli.command("serve")
@click.option("--host", "-h", default=None, help="Host to bind to")
@click.option("--port", "-p", default=None, type=int, help="Port to bind to")
@click.option("--reload", is_flag=True, help="Enable auto-reload")
def serve(host: Optional[str], port: Optional[int], reload: bool):
    """Start the API server."""
    import uvicorn

    from ..logging_setup import setup_logging

    settings = get_container().settings
    setup_logging("DEBUG" if settings.debug else settings.log_level)

    host = host or settings.host
    port = port or settings.port

    click.echo(f"Starting server at http://{host}:{port}")
    click.echo("Press Ctrl+C to stop")

    uvicorn.run(
        "task_tracker.api.app:create_app_from_settings",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        log_config=None,
    )


def main() -> None:
    cli()


if __name__ == "__main__":
    main()
