"""
Tests for the todo query builder.
"""

import pytest

from todo_gateway.exceptions import ValidationError
from todo_gateway.graphql.builder import (
    build_create_query,
    build_get_query,
    build_list_query,
    build_query,
    build_update_query,
    encode_value,
    serialize,
    to_request,
)
from todo_gateway.graphql.models import (
    CreateTodo,
    GraphQLOperationType,
    GraphQLRequest,
    LastTodo,
    ListTodos,
    UpdateTodo,
)


class TestQueryGrammar:
    """The serialized strings the todo backend understands."""

    def test_list_query(self):
        assert build_list_query() == "{todoList{id,text,done}}"

    def test_create_query(self):
        assert (
            build_create_query("My new todo")
            == 'mutation _{createTodo(text:"My new todo"){id,text,done}}'
        )

    def test_update_query(self):
        assert (
            build_update_query("a", True)
            == 'mutation _{updateTodo(id:"a",done:true){id,text,done}}'
        )
        assert (
            build_update_query("a", False)
            == 'mutation _{updateTodo(id:"a",done:false){id,text,done}}'
        )

    def test_get_and_last_queries(self):
        assert build_get_query("b") == '{todo(id:"b"){id,text,done}}'
        assert build_query(LastTodo()) == "{lastTodo{id,text,done}}"

    @pytest.mark.parametrize("text", ["Walk the dog", "Buy milk", "Ünïcode ✓", "z" * 200])
    def test_create_contains_text_once(self, text):
        query = build_create_query(text)
        assert query.count(text) == 1
        assert "createTodo" in query

    @pytest.mark.parametrize("done", [True, False])
    def test_update_encodes_done_as_bare_token(self, done):
        query = build_update_query("42", done)
        token = "true" if done else "false"
        assert f"done:{token}" in query
        assert f'done:"{token}"' not in query
        assert 'id:"42"' in query

    def test_update_quotes_non_string_id(self):
        assert 'id:"7"' in build_update_query(7, True)


class TestValidation:
    """Blank text is rejected before a query exists."""

    @pytest.mark.parametrize("text", ["", "   ", "\t\n"])
    def test_blank_text_rejected(self, text):
        with pytest.raises(ValidationError) as exc_info:
            build_create_query(text)
        assert exc_info.value.message == "Please specify a task"

    def test_surrounding_whitespace_kept(self):
        assert 'text:"  padded "' in build_create_query("  padded ")


class TestEscaping:
    """User input cannot break out of its string literal."""

    def test_quotes_escaped(self):
        query = build_create_query('say "hi"){id}}')
        assert query == 'mutation _{createTodo(text:"say \\"hi\\"){id}}"){id,text,done}}'

    def test_backslash_and_newline_escaped(self):
        query = build_create_query("a\\b\nc")
        assert 'text:"a\\\\b\\nc"' in query

    def test_id_escaped(self):
        query = build_update_query('a"),x', True)
        assert 'id:"a\\"),x"' in query


class TestEncodeValue:
    def test_scalars(self):
        assert encode_value(None) == "null"
        assert encode_value(True) == "true"
        assert encode_value(3) == "3"
        assert encode_value(1.5) == "1.5"
        assert encode_value("x") == '"x"'

    def test_collections(self):
        assert encode_value([1, "a"]) == '[1,"a"]'
        assert encode_value({"k": False}) == "{k:false}"

    def test_unknown_type(self):
        with pytest.raises(TypeError):
            encode_value(object())


class TestRequests:
    def test_to_request_marks_mutations(self):
        assert to_request(CreateTodo("x")).operation_type == GraphQLOperationType.MUTATION
        assert to_request(UpdateTodo("a", True)).is_mutation
        assert not to_request(ListTodos()).is_mutation
        assert to_request(ListTodos()).many is True

    def test_serialize_custom_selection(self):
        request = GraphQLRequest(field="todo", arguments={"id": "a"}, selection=("id",))
        assert serialize(request) == '{todo(id:"a"){id}}'

    def test_unknown_intent(self):
        with pytest.raises(TypeError):
            to_request("list")
