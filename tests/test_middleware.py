"""
Tests for request logging middleware helpers
"""

import pytest

from bookshelf.middleware import operation_name_from_query


@pytest.mark.parametrize(
    ("query", "expected"),
    [
        ("query GetBooks { getAllBooks { id } }", "GetBooks"),
        ('mutation AddAuthor { addAuthor(name: "A") { id } }', "mutation:AddAuthor"),
        ("{ getAllAuthors { id } }", "unnamed_operation"),
        ("query IntrospectionQuery { __schema { types { name } } }", "__introspection"),
    ],
)
def test_operation_name_from_query(query, expected):
    assert operation_name_from_query(query) == expected
