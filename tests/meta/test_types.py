"""Identifier quoting and object references."""

import pytest

from hanameta.meta import TableRef
from hanameta.meta._types import quote_identifier


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("ORDERS", "ORDERS"),
        ("_SYS_BIC", "_SYS_BIC"),
        ("ORDER", '"ORDER"'),
        ("SELECT", '"SELECT"'),
        ("orders", '"orders"'),
        ("Open Orders", '"Open Orders"'),
        ('A"B', '"A""B"'),
    ],
)
def test_quote_identifier(name, expected):
    assert quote_identifier(name) == expected


def test_qualified_name_quotes_reserved_words():
    assert TableRef("SALES", "ORDER", is_view=True).qualified_name == 'SALES."ORDER"'
