"""Command-line front end for the Tasktrack API.

Examples:
  tasktrack register --name Ada --email ada@example.com
  tasktrack login --email ada@example.com
  tasktrack add "buy milk"
  tasktrack list
  tasktrack show 6f1c...
  tasktrack toggle 6f1c...
  tasktrack edit 6f1c... "buy oat milk"
  tasktrack rm 6f1c...
  tasktrack logout

The session token is kept in TASKTRACK_SESSION_FILE
(default ~/.config/tasktrack/session.json).
"""

import argparse
import getpass
import logging
import sys
from collections.abc import Sequence

from tasktrack.client.config import ClientSettings
from tasktrack.client.errors import (
    ApiClientError,
    NotAuthenticatedError,
    SessionExpiredError,
)
from tasktrack.client.session import TasktrackClient
from tasktrack.client.todo_view import TodoListView
from tasktrack.client.token_store import FileTokenStore

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_LOGIN_REQUIRED = 2


def _format_todo(todo: dict) -> str:
    mark = "x" if todo["completed"] else " "
    return f"[{mark}] {todo['id']}  {todo['title']}"


def _password(args: argparse.Namespace) -> str:
    return args.password if args.password is not None else getpass.getpass("Password: ")


def cmd_register(client: TasktrackClient, args: argparse.Namespace) -> None:
    user = client.register(args.name, args.email, _password(args))
    print(f"Registered {user['email']}. Log in with: tasktrack login --email {user['email']}")


def cmd_login(client: TasktrackClient, args: argparse.Namespace) -> None:
    user = client.login(args.email, _password(args))
    print(f"Logged in as {user['name']} <{user['email']}>")


def cmd_logout(client: TasktrackClient, _args: argparse.Namespace) -> None:
    client.logout()
    print("Logged out")


def cmd_whoami(client: TasktrackClient, _args: argparse.Namespace) -> None:
    user = client.me()
    print(f"{user['name']} <{user['email']}>")


def cmd_list(client: TasktrackClient, _args: argparse.Namespace) -> None:
    todos = TodoListView(client).refresh()
    if not todos:
        print("No tasks yet.")
        return
    for todo in todos:
        print(_format_todo(todo))


def cmd_show(client: TasktrackClient, args: argparse.Namespace) -> None:
    print(_format_todo(client.get_todo(args.id)))


def cmd_add(client: TasktrackClient, args: argparse.Namespace) -> None:
    todo = TodoListView(client).add(args.title)
    print(_format_todo(todo))


def _loaded_view(client: TasktrackClient) -> TodoListView:
    view = TodoListView(client)
    view.refresh()
    return view


def _no_such_task(todo_id: str) -> int:
    print(f"No task with id {todo_id}", file=sys.stderr)
    return EXIT_ERROR


def cmd_toggle(client: TasktrackClient, args: argparse.Namespace) -> int | None:
    try:
        todo = _loaded_view(client).toggle(args.id)
    except KeyError:
        return _no_such_task(args.id)
    print(_format_todo(todo))
    return None


def cmd_edit(client: TasktrackClient, args: argparse.Namespace) -> int | None:
    try:
        todo = _loaded_view(client).rename(args.id, args.title)
    except KeyError:
        return _no_such_task(args.id)
    print(_format_todo(todo))
    return None


def cmd_rm(client: TasktrackClient, args: argparse.Namespace) -> int | None:
    try:
        _loaded_view(client).remove(args.id)
    except KeyError:
        return _no_such_task(args.id)
    print(f"Deleted {args.id}")
    return None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="tasktrack",
        description="Manage your Tasktrack todo list",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Examples:", 1)[1] if __doc__ else None,
    )
    parser.add_argument("--api-url", help="API root (defaults to TASKTRACK_API_URL)")
    parser.add_argument("--verbose", action="store_true", help="Log HTTP activity")

    subparsers = parser.add_subparsers(dest="command", required=True)

    register_parser = subparsers.add_parser("register", help="Create an account")
    register_parser.add_argument("--name", required=True)
    register_parser.add_argument("--email", required=True)
    register_parser.add_argument("--password", help="Prompted for when omitted")
    register_parser.set_defaults(func=cmd_register)

    login_parser = subparsers.add_parser("login", help="Log in and remember the session")
    login_parser.add_argument("--email", required=True)
    login_parser.add_argument("--password", help="Prompted for when omitted")
    login_parser.set_defaults(func=cmd_login)

    subparsers.add_parser("logout", help="End every session").set_defaults(
        func=cmd_logout
    )
    subparsers.add_parser("whoami", help="Show the logged-in user").set_defaults(
        func=cmd_whoami
    )
    subparsers.add_parser("list", help="List tasks").set_defaults(func=cmd_list)

    show_parser = subparsers.add_parser("show", help="Show one task")
    show_parser.add_argument("id")
    show_parser.set_defaults(func=cmd_show)

    add_parser = subparsers.add_parser("add", help="Add a task")
    add_parser.add_argument("title")
    add_parser.set_defaults(func=cmd_add)

    toggle_parser = subparsers.add_parser("toggle", help="Flip a task's completion")
    toggle_parser.add_argument("id")
    toggle_parser.set_defaults(func=cmd_toggle)

    edit_parser = subparsers.add_parser("edit", help="Rename a task")
    edit_parser.add_argument("id")
    edit_parser.add_argument("title")
    edit_parser.set_defaults(func=cmd_edit)

    rm_parser = subparsers.add_parser("rm", help="Delete a task")
    rm_parser.add_argument("id")
    rm_parser.set_defaults(func=cmd_rm)

    return parser


def main(argv: Sequence[str] | None = None, client: TasktrackClient | None = None) -> int:
    """Run one CLI command.

    Args:
        argv: Arguments without the program name. Defaults to sys.argv[1:].
        client: Preconfigured client (tests). Built from ClientSettings
            when omitted.

    Returns:
        Process exit code.
    """
    args = build_parser().parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if client is None:
        settings = ClientSettings()
        client = TasktrackClient(
            args.api_url or settings.api_url,
            store=FileTokenStore(settings.session_file),
            timeout=settings.timeout,
        )

    try:
        with client:
            code = args.func(client, args)
    except (NotAuthenticatedError, SessionExpiredError) as exc:
        print(f"{exc.message}. Run: tasktrack login --email <email>", file=sys.stderr)
        return EXIT_LOGIN_REQUIRED
    except ApiClientError as exc:
        print(f"Error: {exc.message}", file=sys.stderr)
        for detail in exc.details or []:
            print(f"  {detail.get('field')}: {detail.get('message')}", file=sys.stderr)
        return EXIT_ERROR
    return code or EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
