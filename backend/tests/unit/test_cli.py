"""Tests for the tasktrack command-line front end.

main() is given a TasktrackClient backed by httpx.MockTransport so no
server or session file is involved.
"""

import json

import httpx
import pytest

from tasktrack.client import MemoryTokenStore, StoredSession, TasktrackClient
from tasktrack.client.cli import (
    EXIT_ERROR,
    EXIT_LOGIN_REQUIRED,
    EXIT_OK,
    build_parser,
    main,
)

_USER = {"id": "u-1", "name": "Ada", "email": "ada@example.com"}
_TODO = {"id": "t-1", "user_id": "u-1", "title": "Buy milk", "completed": False}


def _make_client(handler, store: MemoryTokenStore) -> TasktrackClient:
    return TasktrackClient(
        "http://api.example.com/api/v1",
        store=store,
        transport=httpx.MockTransport(handler),
    )


@pytest.fixture
def store() -> MemoryTokenStore:
    return MemoryTokenStore()


@pytest.fixture
def logged_in(store: MemoryTokenStore) -> MemoryTokenStore:
    store.save(StoredSession(token="tok-1", user=_USER))
    return store


class TestParser:
    def test_command_is_required(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args([])

    def test_edit_takes_id_and_title(self):
        args = build_parser().parse_args(["edit", "t-1", "new title"])
        assert args.id == "t-1"
        assert args.title == "new title"


class TestAuthCommands:
    def test_login_saves_session(self, store, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            assert json.loads(request.content)["password"] == "secret1"
            return httpx.Response(200, json={"token": "tok-1", "user": _USER})

        code = main(
            ["login", "--email", "ada@example.com", "--password", "secret1"],
            client=_make_client(handler, store),
        )

        assert code == EXIT_OK
        assert store.load().token == "tok-1"
        assert "Logged in as Ada" in capsys.readouterr().out

    def test_login_prompts_for_password(self, store, monkeypatch):
        monkeypatch.setattr("getpass.getpass", lambda _prompt: "prompted")
        sent: list[dict] = []

        def handler(request: httpx.Request) -> httpx.Response:
            sent.append(json.loads(request.content))
            return httpx.Response(200, json={"token": "tok-1", "user": _USER})

        main(
            ["login", "--email", "ada@example.com"],
            client=_make_client(handler, store),
        )

        assert sent[0]["password"] == "prompted"

    def test_bad_credentials_exit_error(self, store, capsys):
        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                401,
                json={
                    "error": {
                        "code": "INVALID_CREDENTIALS",
                        "message": "The provided credentials are incorrect.",
                    }
                },
            )

        code = main(
            ["login", "--email", "ada@example.com", "--password", "nope"],
            client=_make_client(handler, store),
        )

        assert code == EXIT_ERROR
        assert "credentials are incorrect" in capsys.readouterr().err
        assert store.load() is None

    def test_register_prints_field_errors(self, store, capsys):
        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                422,
                json={
                    "error": {
                        "code": "VALIDATION_ERROR",
                        "message": "The given data was invalid.",
                        "details": [
                            {
                                "field": "password",
                                "message": "The password must be at least 6 characters.",
                                "type": "min_length",
                            }
                        ],
                    }
                },
            )

        code = main(
            [
                "register",
                "--name",
                "Ada",
                "--email",
                "ada@example.com",
                "--password",
                "123",
            ],
            client=_make_client(handler, store),
        )

        assert code == EXIT_ERROR
        assert "password: The password must be at least 6" in capsys.readouterr().err

    def test_logout_clears_session(self, logged_in, capsys):
        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"message": "Logged out"})

        code = main(["logout"], client=_make_client(handler, logged_in))

        assert code == EXIT_OK
        assert logged_in.load() is None
        assert "Logged out" in capsys.readouterr().out


class TestTodoCommands:
    def test_list_without_session_requires_login(self, store, capsys):
        def handler(_request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        code = main(["list"], client=_make_client(handler, store))

        assert code == EXIT_LOGIN_REQUIRED
        assert "tasktrack login" in capsys.readouterr().err

    def test_expired_session_requires_login(self, logged_in, capsys):
        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                401,
                json={"error": {"code": "UNAUTHORIZED", "message": "Authentication required"}},
            )

        code = main(["list"], client=_make_client(handler, logged_in))

        assert code == EXIT_LOGIN_REQUIRED
        assert logged_in.load() is None
        assert "Session expired" in capsys.readouterr().err

    def test_list_prints_todos(self, logged_in, capsys):
        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                200, json={"data": [_TODO, {**_TODO, "id": "t-2", "completed": True}]}
            )

        code = main(["list"], client=_make_client(handler, logged_in))

        out = capsys.readouterr().out
        assert code == EXIT_OK
        assert "[ ] t-1  Buy milk" in out
        assert "[x] t-2  Buy milk" in out

    def test_list_empty(self, logged_in, capsys):
        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": []})

        main(["list"], client=_make_client(handler, logged_in))

        assert "No tasks yet." in capsys.readouterr().out

    def test_show(self, logged_in, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            assert request.url.path == "/api/v1/todos/t-1"
            return httpx.Response(200, json={"data": _TODO})

        code = main(["show", "t-1"], client=_make_client(handler, logged_in))

        assert code == EXIT_OK
        assert "[ ] t-1  Buy milk" in capsys.readouterr().out

    def test_show_missing(self, logged_in, capsys):
        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(
                404,
                json={"error": {"code": "NOT_FOUND", "message": "Todo with id 't-9' not found"}},
            )

        code = main(["show", "t-9"], client=_make_client(handler, logged_in))

        assert code == EXIT_ERROR
        assert "not found" in capsys.readouterr().err

    def test_add(self, logged_in, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            title = json.loads(request.content)["title"]
            return httpx.Response(201, json={"data": {**_TODO, "title": title}})

        code = main(["add", "Walk dog"], client=_make_client(handler, logged_in))

        assert code == EXIT_OK
        assert "Walk dog" in capsys.readouterr().out

    def test_toggle(self, logged_in, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "GET":
                return httpx.Response(200, json={"data": [_TODO]})
            assert json.loads(request.content) == {"completed": True}
            return httpx.Response(200, json={"data": {**_TODO, "completed": True}})

        code = main(["toggle", "t-1"], client=_make_client(handler, logged_in))

        assert code == EXIT_OK
        assert "[x] t-1" in capsys.readouterr().out

    def test_toggle_unknown_id(self, logged_in, capsys):
        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": [_TODO]})

        code = main(["toggle", "t-404"], client=_make_client(handler, logged_in))

        assert code == EXIT_ERROR
        assert "No task with id t-404" in capsys.readouterr().err

    def test_edit(self, logged_in, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "GET":
                return httpx.Response(200, json={"data": [_TODO]})
            assert request.method == "PATCH"
            assert json.loads(request.content) == {"title": "Buy oat milk"}
            return httpx.Response(200, json={"data": {**_TODO, "title": "Buy oat milk"}})

        code = main(
            ["edit", "t-1", "Buy oat milk"], client=_make_client(handler, logged_in)
        )

        assert code == EXIT_OK
        assert "[ ] t-1  Buy oat milk" in capsys.readouterr().out

    def test_edit_unknown_id(self, logged_in, capsys):
        def handler(_request: httpx.Request) -> httpx.Response:
            return httpx.Response(200, json={"data": [_TODO]})

        code = main(["edit", "t-404", "x"], client=_make_client(handler, logged_in))

        assert code == EXIT_ERROR
        assert "No task with id t-404" in capsys.readouterr().err

    def test_rm(self, logged_in, capsys):
        methods: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            methods.append(request.method)
            if request.method == "GET":
                return httpx.Response(200, json={"data": [_TODO]})
            return httpx.Response(204)

        code = main(["rm", "t-1"], client=_make_client(handler, logged_in))

        assert code == EXIT_OK
        assert methods == ["GET", "DELETE"]
        assert "Deleted t-1" in capsys.readouterr().out

    def test_rm_unknown_id_sends_no_delete(self, logged_in, capsys):
        methods: list[str] = []

        def handler(request: httpx.Request) -> httpx.Response:
            methods.append(request.method)
            return httpx.Response(200, json={"data": [_TODO]})

        code = main(["rm", "t-404"], client=_make_client(handler, logged_in))

        assert code == EXIT_ERROR
        assert methods == ["GET"]
        assert "No task with id t-404" in capsys.readouterr().err

    def test_rm_forbidden(self, logged_in, capsys):
        def handler(request: httpx.Request) -> httpx.Response:
            if request.method == "GET":
                return httpx.Response(200, json={"data": [{**_TODO, "id": "t-9"}]})
            return httpx.Response(
                403,
                json={"error": {"code": "FORBIDDEN", "message": "You do not own this todo"}},
            )

        code = main(["rm", "t-9"], client=_make_client(handler, logged_in))

        assert code == EXIT_ERROR
        assert "You do not own this todo" in capsys.readouterr().err
        assert logged_in.load() is not None
