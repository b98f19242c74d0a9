from backend import statements


def test_insert_columns_follow_data_order():
    stmt = statements.insert('t', {'b': 'x', 'a': 1})
    assert stmt.sql == "INSERT INTO t (b, a) VALUES (?, ?)"
    assert stmt.params == ('x', 1)


def test_select_without_filters():
    stmt = statements.select('t')
    assert stmt.sql == "SELECT * FROM t"
    assert stmt.params == ()


def test_select_conditions_limit_offset():
    stmt = statements.select('t', {'a': 1, 'b': 'x'}, limit=2, offset=1)
    assert stmt.sql == "SELECT * FROM t WHERE a = ? AND b = ? LIMIT 2 OFFSET 1"
    assert stmt.params == (1, 'x')


def test_select_empty_conditions_means_no_where():
    assert statements.select('t', {}).sql == "SELECT * FROM t"


def test_select_offset_ignored_without_limit():
    stmt = statements.select('t', offset=5)
    assert 'OFFSET' not in stmt.sql


def test_select_limit_zero_is_emitted():
    assert statements.select('t', limit=0).sql == "SELECT * FROM t LIMIT 0"


def test_update_params_set_values_then_where_values():
    stmt = statements.update('t', {'a': 5, 'b': 'n'}, {'id': 1, 'a': 2})
    assert stmt.sql == "UPDATE t SET a = ?, b = ? WHERE id = ? AND a = ?"
    assert stmt.params == (5, 'n', 1, 2)


def test_delete_where_clause():
    stmt = statements.delete('t', {'id': 3, 'b': None})
    assert stmt.sql == "DELETE FROM t WHERE id = ? AND b = ?"
    assert stmt.params == (3, None)


def test_identifiers_are_interpolated_verbatim():
    """Names are not quoted or checked; only values are bound."""
    stmt = statements.delete('t; DROP TABLE t', {'id = 1 OR 1': 1})
    assert stmt.sql == "DELETE FROM t; DROP TABLE t WHERE id = 1 OR 1 = ?"
    assert stmt.params == (1,)
    assert statements.table_info('weird name').sql == "PRAGMA table_info(weird name)"


def test_introspection_statements_exclude_internal_tables():
    assert "NOT LIKE 'sqlite_%'" in statements.LIST_TABLES.sql
    assert "count(*) AS count" in statements.COUNT_TABLES.sql
