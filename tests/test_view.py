"""
Tests for view state reconciliation, rendering and synchronization.
"""

import pytest

from todo_gateway.config.models import ViewConfig
from todo_gateway.exceptions import DecodeError, HTTPStatusError, ValidationError
from todo_gateway.graphql.models import TodoRecord
from todo_gateway.view import (
    AppendItem,
    ClearItems,
    HidePlaceholder,
    ItemView,
    RemoveItem,
    ReplaceItem,
    SetDone,
    ShowPlaceholder,
    ViewState,
    ViewSynchronizer,
    reconcile,
    render_item,
    render_list,
)

EMPTY = "There are no tasks for you today"


def todo(todo_id, text="t", done=False):
    return TodoRecord(id=todo_id, text=text, done=done)


def list_envelope(*records):
    return {"data": {"todoList": [record.model_dump() for record in records]}}


def update_envelope(record):
    return {"data": {"updateTodo": record.model_dump()}}


def create_envelope(record):
    return {"data": {"createTodo": record.model_dump()}}


class TestReconcile:
    def test_empty_state_empty_list(self):
        assert reconcile(ViewState(), [], EMPTY) == [ShowPlaceholder(EMPTY)]

    def test_placeholder_not_repeated(self):
        state = ViewState()
        state.apply(reconcile(state, [], EMPTY))
        assert reconcile(state, [], EMPTY) == []

    def test_items_cleared_for_empty_list(self):
        state = ViewState([ItemView.from_record(todo("a"))])
        assert reconcile(state, [], EMPTY) == [ClearItems(), ShowPlaceholder(EMPTY)]

    def test_appends_into_empty_state(self):
        records = [todo("a"), todo("b")]
        assert reconcile(ViewState(), records, EMPTY) == [AppendItem(r) for r in records]

    def test_placeholder_hidden_when_items_arrive(self):
        state = ViewState()
        state.placeholder = EMPTY
        patches = reconcile(state, [todo("a")], EMPTY)
        assert patches == [HidePlaceholder(), AppendItem(todo("a"))]

    def test_unchanged_items_produce_no_patch(self):
        records = [todo("a"), todo("b", done=True)]
        state = ViewState()
        state.apply(reconcile(state, records, EMPTY))
        assert reconcile(state, records, EMPTY) == []

    def test_minimal_patches(self):
        state = ViewState()
        state.apply(reconcile(state, [todo("a"), todo("b"), todo("c")], EMPTY))

        patches = reconcile(state, [todo("a", done=True), todo("c"), todo("d")], EMPTY)

        assert patches == [
            RemoveItem("b"),
            ReplaceItem(todo("a", done=True)),
            AppendItem(todo("d")),
        ]

    def test_reordered_items_rebuilt(self):
        state = ViewState()
        state.apply(reconcile(state, [todo("a"), todo("b")], EMPTY))

        patches = reconcile(state, [todo("b"), todo("a")], EMPTY)

        assert patches == [ClearItems(), AppendItem(todo("b")), AppendItem(todo("a"))]

    def test_does_not_mutate_state(self):
        state = ViewState([ItemView.from_record(todo("a"))])
        reconcile(state, [todo("b")], EMPTY)
        assert state.ids() == ["a"]

    def test_duplicate_ids_rejected(self):
        with pytest.raises(ValueError):
            reconcile(ViewState(), [todo("a"), todo("a")], EMPTY)

    def test_result_matches_records(self):
        state = ViewState()
        for records in (
            [todo("a"), todo("b")],
            [todo("b", text="new")],
            [todo("b", text="new"), todo("c", done=True)],
            [],
            [todo("z")],
        ):
            state.apply(reconcile(state, records, EMPTY))
            assert list(state.snapshot().values()) == records
            assert (state.placeholder is not None) == (not records)


class TestRender:
    def test_inline_markup(self):
        html = render_item(ItemView("a", "Milk", checked=True, done=True), ViewConfig())
        assert 'class="todo-item done"' in html
        assert '<input id="a" type="checkbox" checked="checked">Milk' in html

    def test_text_escaped(self):
        html = render_item(ItemView("a", "<b>&</b>"), ViewConfig())
        assert "&lt;b&gt;&amp;&lt;/b&gt;" in html
        assert "<b>" not in html

    def test_template_markup(self):
        config = ViewConfig(use_template=True, item_template="<li id='$id'>$text$done_class</li>")
        html = render_item(ItemView("a", "Milk", done=True), config)
        assert html == "<li id='a'>Milk done</li>"

    def test_placeholder(self):
        state = ViewState()
        state.placeholder = EMPTY
        assert render_list(state, ViewConfig()) == (
            f'<div class="todo-list-container"><p>{EMPTY}</p></div>'
        )


class TestViewSynchronizer:
    @pytest.mark.asyncio
    async def test_load_renders_one_unchecked_item(self, stub_client):
        client = stub_client({"data": {"todoList": [{"id": "1", "text": "a", "done": False}]}})
        sync = ViewSynchronizer(client)

        await sync.load()

        assert sync.state.ids() == ["1"]
        item = sync.state.get("1")
        assert item.text == "a"
        assert item.checked is False
        assert sync.state.placeholder is None
        assert client.queries == ["{todoList{id,text,done}}"]

    @pytest.mark.asyncio
    async def test_load_twice_empty_keeps_one_placeholder(self, stub_client):
        sync = ViewSynchronizer(stub_client(list_envelope()))

        await sync.load()
        await sync.load()

        assert len(sync.state) == 0
        assert sync.render().count("<p>") == 1

    @pytest.mark.asyncio
    async def test_load_replaces_previous_items(self, stub_client):
        client = stub_client(
            list_envelope(todo("a"), todo("b")),
            list_envelope(todo("c")),
        )
        sync = ViewSynchronizer(client)

        await sync.load()
        await sync.load()

        assert sync.state.ids() == ["c"]

    @pytest.mark.asyncio
    async def test_load_binds_change_handlers(self, stub_client):
        sync = ViewSynchronizer(stub_client(list_envelope(todo("a"))))
        await sync.load()
        assert sync.state.get("a").on_change == sync.toggle

    @pytest.mark.asyncio
    async def test_toggle_patches_only_target(self, stub_client):
        client = stub_client(
            list_envelope(todo("1", "a"), todo("2", "b")),
            update_envelope(todo("1", "a", done=True)),
        )
        sync = ViewSynchronizer(client)
        await sync.load()

        await sync.toggle("1")

        assert sync.state.get("1").done is True
        assert sync.state.get("2").done is False
        assert 'class="todo-item done" data-id="1"' in sync.render()
        assert 'class="todo-item" data-id="2"' in sync.render()

    @pytest.mark.asyncio
    async def test_toggle_does_not_rewrite_text(self, stub_client):
        client = stub_client(
            list_envelope(todo("1", "original")),
            update_envelope(todo("1", "changed elsewhere", done=True)),
        )
        sync = ViewSynchronizer(client)
        await sync.load()

        await sync.toggle("1")

        assert sync.state.get("1").text == "original"
        assert len(client.queries) == 2

    @pytest.mark.asyncio
    async def test_change_sends_checkbox_state(self, stub_client):
        client = stub_client(
            list_envelope(todo("1")),
            update_envelope(todo("1", done=True)),
        )
        sync = ViewSynchronizer(client)
        await sync.load()

        await sync.change("1", True)

        assert client.queries[-1] == 'mutation _{updateTodo(id:"1",done:true){id,text,done}}'
        assert sync.state.get("1").done is True

    @pytest.mark.asyncio
    async def test_change_failure_restores_checkbox(self, stub_client):
        client = stub_client(
            list_envelope(todo("1")),
            HTTPStatusError("boom", status_code=500),
        )
        sync = ViewSynchronizer(client)
        await sync.load()

        with pytest.raises(HTTPStatusError):
            await sync.change("1", True)

        item = sync.state.get("1")
        assert item.checked is False
        assert item.done is False

    @pytest.mark.asyncio
    async def test_full_reload_on_toggle(self, stub_client):
        client = stub_client(
            list_envelope(todo("1")),
            update_envelope(todo("1", done=True)),
            list_envelope(todo("1", done=True), todo("2")),
        )
        sync = ViewSynchronizer(client, ViewConfig(full_reload_on_toggle=True))
        await sync.load()

        await sync.toggle("1")

        assert sync.state.ids() == ["1", "2"]
        assert sync.state.get("1").done is True
        assert len(client.queries) == 3

    @pytest.mark.asyncio
    async def test_create_appends_single_item(self, stub_client):
        client = stub_client(
            list_envelope(todo("a")),
            create_envelope(todo("new", "Milk")),
        )
        sync = ViewSynchronizer(client)
        await sync.load()

        record = await sync.create("Milk")

        assert record.id == "new"
        assert sync.state.ids() == ["a", "new"]
        assert len(client.queries) == 2
        assert sync.state.get("new").on_change == sync.toggle

    @pytest.mark.asyncio
    async def test_create_replaces_placeholder(self, stub_client):
        client = stub_client(list_envelope(), create_envelope(todo("new", "Milk")))
        sync = ViewSynchronizer(client)
        await sync.load()

        await sync.create("Milk")

        assert sync.state.placeholder is None
        assert sync.state.ids() == ["new"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize("text", ["", "   "])
    async def test_create_blank_issues_no_request(self, stub_client, text):
        client = stub_client(create_envelope(todo("x")))
        sync = ViewSynchronizer(client)

        with pytest.raises(ValidationError):
            await sync.create(text)

        assert client.queries == []
        assert len(sync.state) == 0

    @pytest.mark.asyncio
    async def test_failed_load_leaves_state(self, stub_client):
        client = stub_client(list_envelope(todo("a")), "not json")
        sync = ViewSynchronizer(client)
        await sync.load()

        with pytest.raises(DecodeError):
            await sync.load()

        assert sync.state.ids() == ["a"]

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "failure", [HTTPStatusError("boom", status_code=500), "not json"]
    )
    async def test_failed_create_leaves_state(self, stub_client, failure):
        client = stub_client(list_envelope(), failure)
        sync = ViewSynchronizer(client)
        await sync.load()

        with pytest.raises((HTTPStatusError, DecodeError)):
            await sync.create("Milk")

        assert sync.state.ids() == []
        assert sync.state.placeholder == EMPTY
        assert sync.render().count("<p>") == 1

    @pytest.mark.asyncio
    async def test_duplicate_ids_surface_as_decode_error(self, stub_client):
        sync = ViewSynchronizer(stub_client(list_envelope(todo("a"), todo("a"))))

        with pytest.raises(DecodeError) as exc_info:
            await sync.load()

        assert isinstance(exc_info.value.__cause__, ValueError)

    @pytest.mark.asyncio
    async def test_toggle_unknown_item(self, stub_client):
        sync = ViewSynchronizer(stub_client(list_envelope()))
        await sync.load()

        with pytest.raises(KeyError):
            await sync.toggle("missing")


def test_set_done_keeps_text():
    state = ViewState([ItemView("a", "keep")])
    state.apply([SetDone("a", True)])
    item = state.get("a")
    assert (item.text, item.done, item.checked) == ("keep", True, True)
