"""Tests for the join keyword rules."""

import pytest

from mysql_sqlite_translator.rules.joins import INNER_JOIN, JOIN_RULES, OUTER_JOIN


def _apply_all(sql):
    for rule in JOIN_RULES:
        sql = rule.apply(sql)
    return sql


class TestOuterJoin:
    @pytest.mark.parametrize(
        "join",
        ["LEFT JOIN", "LEFT OUTER JOIN", "RIGHT JOIN", "RIGHT OUTER JOIN", "FULL JOIN", "FULL OUTER JOIN"],
    )
    def test_collapses_to_left_join(self, join):
        result = OUTER_JOIN.apply(f"SELECT * FROM a {join} b ON a.id = b.id")
        assert result == "SELECT * FROM a LEFT JOIN b ON a.id = b.id"

    def test_lowercase(self):
        assert OUTER_JOIN.apply("a right outer join b") == "a LEFT JOIN b"


class TestInnerJoin:
    def test_bare_join(self):
        result = INNER_JOIN.apply("SELECT * FROM a JOIN b ON a.id = b.id")
        assert result == "SELECT * FROM a INNER JOIN b ON a.id = b.id"

    def test_inner_join_kept(self):
        sql = "SELECT * FROM a INNER JOIN b ON a.id = b.id"
        assert INNER_JOIN.apply(sql) == sql

    def test_chained_joins(self):
        result = INNER_JOIN.apply("FROM a JOIN b ON x JOIN c ON y")
        assert result == "FROM a INNER JOIN b ON x INNER JOIN c ON y"

    def test_joined_subquery(self):
        result = INNER_JOIN.apply("FROM (SELECT 1) s JOIN t ON 1")
        assert result == "FROM (SELECT 1) s INNER JOIN t ON 1"


class TestJoinOrdering:
    def test_left_join_not_rematched(self):
        result = _apply_all("FROM a LEFT OUTER JOIN b ON x")
        assert result == "FROM a LEFT JOIN b ON x"
        assert "INNER" not in result

    def test_qualified_joins_unchanged(self):
        sql = "FROM a CROSS JOIN b NATURAL JOIN c"
        assert _apply_all(sql) == sql

    def test_idempotent(self):
        once = _apply_all("FROM a JOIN b ON x RIGHT JOIN c ON y")
        assert once == "FROM a INNER JOIN b ON x LEFT JOIN c ON y"
        assert _apply_all(once) == once

    def test_join_in_string_not_matched(self):
        sql = "SELECT 'a JOIN b' FROM t"
        assert _apply_all(sql) == sql
