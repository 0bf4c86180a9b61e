"""Integration tests for the full translate() pipeline."""

import sqlite3

import pytest

from mysql_sqlite_translator import Diagnostic, translate, translate_with_diagnostics

CREATE_USERS = (
    "CREATE TABLE users (\n"
    "  id INT(11) NOT NULL AUTO_INCREMENT PRIMARY KEY,\n"
    "  email VARCHAR(255) NOT NULL,\n"
    "  first_name VARCHAR(50),\n"
    "  last_name VARCHAR(50),\n"
    "  balance DECIMAL(10,2) DEFAULT 0.00,\n"
    "  created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP ON UPDATE CURRENT_TIMESTAMP\n"
    ") ENGINE=InnoDB DEFAULT CHARSET=utf8mb4 COLLATE=utf8mb4_unicode_ci;"
)

CREATE_ORDERS = (
    "CREATE TABLE orders (\n"
    "  id INT PRIMARY KEY AUTO_INCREMENT,\n"
    "  user_id INT(11) NOT NULL,\n"
    "  total DECIMAL(10,2),\n"
    "  placed_at DATETIME\n"
    ") ENGINE=InnoDB;"
)


class TestTranslateProperties:
    def test_concat(self):
        result = translate("SELECT CONCAT(a,' ',b) FROM t")
        assert "a || ' ' || b" in result
        assert "CONCAT" not in result

    def test_ifnull(self):
        assert "COALESCE(x, 0)" in translate("SELECT IFNULL(x,0) FROM t")

    def test_unmapped_statement_only_normalizes_whitespace(self):
        assert translate("SELECT a,   b\tFROM t  WHERE x > 1") == "SELECT a, b FROM t WHERE x > 1"

    def test_auto_increment_order_independent(self):
        first = translate("CREATE TABLE t (id INT AUTO_INCREMENT PRIMARY KEY, v TEXT)")
        second = translate("CREATE TABLE t (id INT PRIMARY KEY AUTO_INCREMENT, v TEXT)")
        assert first == second
        assert "id INTEGER PRIMARY KEY AUTOINCREMENT," in first

    def test_group_concat_distinct_preserved(self):
        result = translate("SELECT u.id, GROUP_CONCAT(DISTINCT a.b) FROM u JOIN a ON a.uid = u.id GROUP BY u.id")
        assert "GROUP_CONCAT(DISTINCT a.b)" in result
        assert "INNER JOIN" in result

    def test_rollup_marked(self):
        marker = "/* WITH ROLLUP not supported */"
        result = translate("SELECT a, SUM(b) FROM t GROUP BY a WITH ROLLUP")
        assert marker in result
        assert "WITH ROLLUP" not in result.replace(marker, "")

    @pytest.mark.parametrize(
        "sql",
        [
            CREATE_USERS,
            "SELECT CONCAT(first_name, ' ', last_name) AS name FROM users",
            "SELECT IF(balance > 100, 'gold', 'basic') FROM users",
            "SELECT u.id, GROUP_CONCAT(o.id ORDER BY o.id SEPARATOR ';') FROM users u LEFT JOIN orders o ON o.user_id = u.id GROUP BY u.id",
            "SELECT\n  id,\n  DATE_ADD(created_at, INTERVAL 30 DAY) AS due\nFROM users\nWHERE YEAR(created_at) = 2024\nORDER BY id",
            "SELECT a, SUM(b) FROM t GROUP BY a WITH ROLLUP",
            "CREATE TABLE t (\n  id INT, -- the key\n  name VARCHAR(10)\n)",
            "SELECT GROUP_CONCAT(DISTINCT a SEPARATOR ';') FROM t",
            "SELECT CEIL(RAND() * 10)",
            "SELECT DATE_SUB(d, INTERVAL -2 DAY) FROM t",

        ],
    )
    def test_idempotent(self, sql):
        once = translate(sql)
        assert translate(once) == once


class TestTranslateDefinitions:
    def test_create_table_layout(self):
        assert translate(CREATE_USERS) == (
            "CREATE TABLE users (\n"
            "    id INTEGER NOT NULL PRIMARY KEY AUTOINCREMENT,\n"
            "    email TEXT NOT NULL,\n"
            "    first_name TEXT,\n"
            "    last_name TEXT,\n"
            "    balance REAL DEFAULT 0.00,\n"
            "    created_at DATETIME DEFAULT CURRENT_TIMESTAMP\n"
            ");"
        )

    def test_translated_schema_executes(self):
        with sqlite3.connect(":memory:") as conn:
            conn.execute(translate(CREATE_USERS))
            conn.execute(translate(CREATE_ORDERS))
            conn.execute("INSERT INTO users (email, first_name, last_name, balance) VALUES ('a@x', 'Ada', 'Lovelace', 150)")
            row = conn.execute("SELECT id, created_at FROM users").fetchone()
        assert row[0] == 1
        assert row[1] is not None

    def test_line_comment_between_columns(self):
        sql = translate("CREATE TABLE t (\n  id INT, -- the key\n  name VARCHAR(10)\n) ENGINE=InnoDB")
        assert sql == "CREATE TABLE t (\n    id INTEGER,\n    /* the key */ name TEXT\n);"
        with sqlite3.connect(":memory:") as conn:
            conn.execute(sql)
            columns = [row[1] for row in conn.execute("PRAGMA table_info(t)")]
        assert columns == ["id", "name"]

    def test_collate_binary_kept(self):
        sql = translate("CREATE TABLE t (code VARCHAR(8) COLLATE binary, hash BINARY(16))")
        assert "code TEXT COLLATE binary," in sql
        assert "hash BLOB" in sql
        with sqlite3.connect(":memory:") as conn:
            conn.execute(sql)



class TestTranslateQueries:
    @pytest.fixture
    def conn(self):
        conn = sqlite3.connect(":memory:")
        conn.execute(translate(CREATE_USERS))
        conn.execute(translate(CREATE_ORDERS))
        conn.executemany(
            "INSERT INTO users (email, first_name, last_name, balance, created_at) VALUES (?, ?, ?, ?, ?)",
            [
                ("ada@x", "Ada", "Lovelace", 150.0, "2024-03-01 10:00:00"),
                ("alan@x", "Alan", "Turing", None, "2023-07-15 08:30:00"),
            ],
        )
        conn.executemany(
            "INSERT INTO orders (user_id, total, placed_at) VALUES (?, ?, ?)",
            [(1, 10.5, "2024-03-02"), (1, 4.25, "2024-03-05")],
        )
        yield conn
        conn.close()

    def test_string_and_conditional_functions(self, conn):
        sql = translate(
            "SELECT CONCAT(first_name, ' ', UCASE(last_name)) AS name, "
            "IF(IFNULL(balance, 0) > 100, 'gold', 'basic') AS tier "
            "FROM users ORDER BY id"
        )
        assert conn.execute(sql).fetchall() == [
            ("Ada LOVELACE", "gold"),
            ("Alan TURING", "basic"),
        ]

    def test_date_functions(self, conn):
        sql = translate(
            "SELECT YEAR(created_at), DATE_ADD(created_at, INTERVAL 30 DAY), "
            "DATEDIFF('2024-03-11', created_at) FROM users WHERE id = 1"
        )
        assert conn.execute(sql).fetchone() == (2024, "2024-03-31 10:00:00", 10)

    def test_join_and_aggregate(self, conn):
        sql = translate(
            "SELECT u.first_name, COUNT(o.id), CEIL(SUM(o.total))\n"
            "FROM users u\n"
            "RIGHT JOIN orders o ON o.user_id = u.id\n"
            "GROUP BY u.first_name\n"
            "ORDER BY u.first_name"
        )
        # RIGHT JOIN is collapsed to LEFT JOIN, so users without orders appear
        assert "LEFT JOIN" in sql
        assert conn.execute(sql).fetchall() == [("Ada", 2, 15), ("Alan", 0, None)]

    def test_group_concat_separator(self, conn):
        sql = translate(
            "SELECT GROUP_CONCAT(o.total SEPARATOR '|') FROM orders o JOIN users u ON u.id = o.user_id"
        )
        assert "INNER JOIN" in sql
        assert conn.execute(sql).fetchone()[0] in ("10.5|4.25", "4.25|10.5")

    def test_group_concat_distinct_separator(self, conn):
        sql = translate("SELECT GROUP_CONCAT(DISTINCT first_name SEPARATOR ';') FROM users")
        assert conn.execute(sql).fetchone()[0] in ("Ada,Alan", "Alan,Ada")

    def test_negative_day_interval(self, conn):
        sql = translate(
            "SELECT DATE_ADD(created_at, INTERVAL -1 DAY), DATE_SUB(created_at, INTERVAL -1 DAY) "
            "FROM users WHERE id = 1"
        )
        assert conn.execute(sql).fetchone() == ("2024-02-29 10:00:00", "2024-03-02 10:00:00")



class TestTranslateDiagnostics:
    def test_diagnostics_returned(self):
        translation = translate_with_diagnostics(
            "SELECT DATE_ADD(d, INTERVAL 2 WEEK), a FROM t GROUP BY a WITH ROLLUP"
        )
        assert [d.fragment for d in translation.diagnostics] == [
            "WITH ROLLUP",
            "DATE_ADD(d, INTERVAL 2 WEEK)",
        ]
        assert all(isinstance(d, Diagnostic) for d in translation.diagnostics)
        assert "/* DATE_ADD(d, INTERVAL 2 WEEK) not supported */" in translation.sql

    def test_distinct_separator_reported(self):
        translation = translate_with_diagnostics("SELECT GROUP_CONCAT(DISTINCT a SEPARATOR ';') FROM t")
        assert translation.sql == "SELECT GROUP_CONCAT(DISTINCT a) /* SEPARATOR ';' not supported */ FROM t"
        assert [d.fragment for d in translation.diagnostics] == ["SEPARATOR ';'"]

    def test_no_diagnostics(self):

        translation = translate_with_diagnostics("SELECT NOW()")
        assert translation.sql == "SELECT DATETIME('now')"
        assert translation.diagnostics == []

    def test_translate_matches_sql_of_translation(self):
        sql = "SELECT a FROM t GROUP BY a WITH ROLLUP"
        assert translate(sql) == translate_with_diagnostics(sql).sql


class TestTranslatePassthrough:
    def test_empty_string(self):
        assert translate("") == ""

    def test_string_literals_untouched(self):
        sql = "SELECT 'CONCAT(a, b)   IFNULL(x, 0)' FROM t"
        assert translate(sql) == sql


class TestSqlglotParse:
    """Verify that translated SQL can be parsed by sqlglot's SQLite dialect.

    These tests require sqlglot to be installed (test dependency).
    """

    @pytest.mark.parametrize(
        "sql",
        [
            "SELECT CONCAT(a, ' ', b) FROM t",
            "SELECT IFNULL(x, 0), IF(a > 1, 'x', 'y') FROM t",
            "SELECT * FROM a FULL OUTER JOIN b ON a.id = b.id",
            "SELECT MOD(a, 2), FLOOR(b) FROM t",
            CREATE_ORDERS,
        ],
    )
    def test_translation_parses(self, sql):
        try:
            import sqlglot
        except ImportError:
            pytest.skip("sqlglot not installed")

        ast = sqlglot.parse_one(translate(sql), dialect="sqlite")
        assert ast is not None
