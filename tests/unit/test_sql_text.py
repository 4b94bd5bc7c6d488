"""
Unit Tests for SQL Text Processing
==================================

Tests for the sanitizer, statement splitter, error locator and formatter.
"""

from sql_playground.sql.formatter import format_sql
from sql_playground.sql.locator import extract_error_token, locate_error
from sql_playground.sql.sanitizer import sanitize_schema
from sql_playground.sql.splitter import (
    iter_statements,
    scan_statements,
    split_statements,
    strip_comments,
)


class TestSanitizer:
    """Tests for sanitize_schema."""

    def test_removes_sql_fence(self) -> None:
        """Test that fence markers never appear in the output."""
        text = "```sql\nCREATE TABLE t (id INTEGER);\n```"
        result = sanitize_schema(text)
        assert "```" not in result
        assert result == "CREATE TABLE t (id INTEGER);"

    def test_uppercase_fence_tag(self) -> None:
        """Test that the sql tag is matched case-insensitively."""
        result = sanitize_schema("```SQL\nDROP TABLE t;\n```")
        assert result == "DROP TABLE t;"

    def test_drops_leading_prose(self, generated_schema: str) -> None:
        """Test that explanatory text before the SQL is dropped."""
        result = sanitize_schema(generated_schema)
        assert result.startswith("-- Library schema")
        assert "Here is a schema" not in result

    def test_keeps_everything_after_sql_starts(self) -> None:
        """Test that lines after entry are kept, prose and blanks included."""
        text = "Intro line\nCREATE TABLE a (id INTEGER);\n\nThis table stores things.\nINSERT INTO a VALUES (1);"
        result = sanitize_schema(text)
        assert result.split("\n") == [
            "CREATE TABLE a (id INTEGER);",
            "",
            "This table stores things.",
            "INSERT INTO a VALUES (1);",
        ]

    def test_comment_line_enters_sql(self) -> None:
        """Test that a -- comment opens the SQL region."""
        result = sanitize_schema("Sure!\n-- tables\nselect 1;")
        assert result == "-- tables\nselect 1;"

    def test_keywords_case_insensitive(self) -> None:
        """Test that lower-case DDL is recognized."""
        assert sanitize_schema("ok\ncreate table t (x int);") == "create table t (x int);"

    def test_no_sql_gives_empty_string(self) -> None:
        """Test the degenerate case of pure prose."""
        assert sanitize_schema("I cannot help with that request.") == ""
        assert sanitize_schema("") == ""


class TestSplitter:
    """Tests for split_statements and its helpers."""

    def test_counts_top_level_statements(self) -> None:
        """Test that N statements come back as N entries in order."""
        sql = (
            "CREATE TABLE a (id INTEGER);\n"
            "INSERT INTO a VALUES (1);\n"
            "UPDATE a SET id = 2;\n"
            "DELETE FROM a;\n"
            "ALTER TABLE a ADD COLUMN name TEXT;\n"
            "DROP TABLE a;"
        )
        statements = split_statements(sql)
        assert len(statements) == 6
        assert all(s.endswith(";") for s in statements)
        assert [s.split()[0] for s in statements] == [
            "CREATE", "INSERT", "UPDATE", "DELETE", "ALTER", "DROP",
        ]

    def test_semicolon_inside_single_quotes(self) -> None:
        """Test that a quoted semicolon does not split the statement."""
        statements = split_statements("INSERT INTO t VALUES ('a;b');")
        assert statements == ["INSERT INTO t VALUES ('a;b');"]

    def test_semicolon_inside_double_quotes(self) -> None:
        """Test that double-quoted identifiers are honored."""
        statements = split_statements('CREATE TABLE "odd;name" (id INTEGER);')
        assert len(statements) == 1

    def test_semicolon_inside_parentheses(self) -> None:
        """Test that a statement is not split until depth returns to zero."""
        sql = "CREATE TABLE t (\n  id INTEGER;\n  name TEXT\n);\nINSERT INTO t VALUES (1, 'x');"
        statements = split_statements(sql)
        assert len(statements) == 2
        assert statements[0].startswith("CREATE TABLE t (")
        assert statements[0].endswith(");")

    def test_filters_non_load_statements(self) -> None:
        """Test that SELECT, PRAGMA and BEGIN are excluded."""
        sql = (
            "PRAGMA foreign_keys = ON;\n"
            "BEGIN;\n"
            "CREATE TABLE t (id INTEGER);\n"
            "SELECT * FROM t;\n"
            "insert into t values (1);\n"
            "COMMIT;"
        )
        assert split_statements(sql) == [
            "CREATE TABLE t (id INTEGER);",
            "insert into t values (1);",
        ]

    def test_trailing_statement_gets_semicolon(self) -> None:
        """Test that an unterminated final statement is completed."""
        statements = split_statements("CREATE TABLE a (id INTEGER);\nINSERT INTO a VALUES (1)")
        assert statements[-1] == "INSERT INTO a VALUES (1);"

    def test_comments_are_stripped(self) -> None:
        """Test that comment-only fragments disappear."""
        sql = "-- header\n/* block\ncomment */\nCREATE TABLE a (id INTEGER); -- trailing"
        assert split_statements(sql) == ["CREATE TABLE a (id INTEGER);"]

    def test_comment_marker_inside_string_is_stripped(self) -> None:
        """Test the known limitation: comment removal ignores quotes."""
        assert strip_comments("INSERT INTO t VALUES ('a--b');") == "INSERT INTO t VALUES ('a"

    def test_backslash_quote_does_not_toggle(self) -> None:
        """Test the known limitation: a backslash before a quote suppresses the toggle."""
        statements = scan_statements("INSERT INTO t VALUES ('it\\'s;ok');")
        assert len(statements) == 1

    def test_empty_input(self) -> None:
        """Test that empty input yields nothing."""
        assert split_statements("") == []
        assert split_statements("   \n-- only a comment\n") == []

    def test_iter_statements_keeps_selects(self) -> None:
        """Test that the ad hoc splitter keeps every statement kind."""
        statements = list(iter_statements("SELECT 1; SELECT 'a;b'; PRAGMA table_info(t)"))
        assert statements == ["SELECT 1;", "SELECT 'a;b';", "PRAGMA table_info(t)"]

    def test_iter_statements_skips_trailing_comment(self) -> None:
        """Test that a trailing comment is not treated as a statement."""
        assert list(iter_statements("SELECT 1; -- done")) == ["SELECT 1;"]


class TestErrorLocator:
    """Tests for locate_error."""

    def test_no_such_table_on_line_three(self) -> None:
        """Test that the table name is found on the right line."""
        query = "SELECT *\nFROM customers c\nJOIN widgets w ON w.id = c.id\nWHERE 1 = 1"
        location = locate_error("no such table: widgets", query)
        assert location.line == 3
        assert location.column == 6
        assert location.context_line == "JOIN widgets w ON w.id = c.id"

    def test_near_token(self) -> None:
        """Test the syntax error pattern."""
        location = locate_error('near "SELEC": syntax error', "SELEC name FROM customers")
        assert location.line == 1
        assert location.column == 1

    def test_no_such_column_case_insensitive(self) -> None:
        """Test that matching ignores case."""
        location = locate_error("no such column: Emial", "SELECT\n  emial\nFROM customers")
        assert location.line == 2

    def test_unrecognized_message(self) -> None:
        """Test that unknown errors give an all-null location."""
        location = locate_error("database is locked", "SELECT 1")
        assert location.line is None
        assert location.column is None
        assert location.context_line is None
        assert not location.found

    def test_token_not_in_query(self) -> None:
        """Test that a token absent from the query gives no location."""
        assert locate_error("no such table: ghosts", "SELECT 1").line is None

    def test_extract_token_variants(self) -> None:
        """Test the supplemental SQLite message forms."""
        assert extract_error_token("table orders has no column named totl") == "totl"
        assert extract_error_token("ambiguous column name: id") == "id"
        assert extract_error_token("near \"FROM\": syntax error") == "FROM"
        assert extract_error_token("out of memory") is None


class TestFormatter:
    """Tests for format_sql."""

    def test_breaks_clauses_onto_lines(self) -> None:
        """Test that each clause starts a new line."""
        result = format_sql("select name, email from customers where id = 1 order by name")
        assert result == "SELECT name,\n  email\nFROM customers\nWHERE id = 1\nORDER BY name"

    def test_string_literals_untouched(self) -> None:
        """Test that keywords and commas inside strings are left alone."""
        result = format_sql("SELECT * FROM t WHERE note = 'from a, to b'")
        assert "'from a, to b'" in result
