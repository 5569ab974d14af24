import logging

import httpx
import pytest

from todo_view import TodoListView


@pytest.fixture
def view(full_client):
    return TodoListView(client=full_client)


def broken_client(exc_factory):
    def handler(request):
        raise exc_factory(request)

    return httpx.Client(transport=httpx.MockTransport(handler), base_url="http://testserver")


class TestTodoListView:
    def test_mount_loads_todos(self, full_client, view):
        full_client.post("/todos", json={"text": "Existing"})
        view.mount()
        assert [t["text"] for t in view.todos] == ["Existing"]

    def test_add_appends_and_clears_input(self, full_client, view):
        view.input = "  Buy milk  "
        view.add()
        assert [t["text"] for t in view.todos] == ["Buy milk"]
        assert view.input == ""
        assert full_client.get("/todos/count").json() == {"count": 1}

    def test_add_ignores_blank_input(self, full_client, view):
        view.input = "   "
        view.add()
        assert view.todos == []
        assert view.input == "   "
        assert full_client.get("/todos/count").json() == {"count": 0}

    def test_edit_replaces_item(self, view):
        view.input = "first"
        view.add()
        view.input = "second"
        view.add()
        tid = view.todos[0]["id"]

        view.edit(tid, "f")
        view.edit(tid, "fi")
        assert [t["text"] for t in view.todos] == ["fi", "second"]

    def test_delete_removes_item(self, full_client, view):
        view.input = "gone soon"
        view.add()
        view.delete(view.todos[0]["id"])
        assert view.todos == []
        assert full_client.get("/todos").json() == []


class TestTodoListViewFailures:
    def test_mount_failure_is_logged(self, caplog):
        view = TodoListView(client=broken_client(lambda r: httpx.ConnectError("refused", request=r)))
        view.todos = [{"id": 1, "text": "stale"}]
        with caplog.at_level(logging.ERROR, logger="todo_view.view"):
            view.mount()
        assert view.todos == [{"id": 1, "text": "stale"}]
        assert "Error fetching todos" in caplog.text

    def test_add_failure_keeps_input(self, caplog):
        view = TodoListView(client=broken_client(lambda r: httpx.ConnectError("refused", request=r)))
        view.input = "keep me"
        with caplog.at_level(logging.ERROR, logger="todo_view.view"):
            view.add()
        assert view.todos == []
        assert view.input == "keep me"
        assert "Error adding todo" in caplog.text

    def test_server_error_leaves_state(self, client, caplog):
        # No todos table yet: GET /todos answers 500
        view = TodoListView(client=client)
        with caplog.at_level(logging.ERROR, logger="todo_view.view"):
            view.mount()
        assert view.todos == []
        assert "Error fetching todos" in caplog.text

    def test_delete_drops_item_on_server_error(self, client, caplog):
        # No todos table yet: DELETE answers 500, the request still completed
        view = TodoListView(client=client)
        view.todos = [{"id": 1, "text": "a"}, {"id": 2, "text": "b"}]
        with caplog.at_level(logging.ERROR, logger="todo_view.view"):
            view.delete(1)
        assert view.todos == [{"id": 2, "text": "b"}]
        assert "Error deleting todo" in caplog.text

    def test_delete_failure_keeps_item(self, caplog):
        view = TodoListView(client=broken_client(lambda r: httpx.ReadTimeout("slow", request=r)))
        view.todos = [{"id": 1, "text": "a"}]
        with caplog.at_level(logging.ERROR, logger="todo_view.view"):
            view.delete(1)
        assert view.todos == [{"id": 1, "text": "a"}]
        assert "Error deleting todo" in caplog.text
