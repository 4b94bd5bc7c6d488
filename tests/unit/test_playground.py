"""
Unit Tests for Playground
=========================

Tests for the generate, load, query and coach flow.
"""

from sql_playground.coaching import SQLCoach
from sql_playground.generation import SchemaGenerator
from sql_playground.llm.mock import MockLLM
from sql_playground.models import GenerationSource
from sql_playground.playground import Playground


class TestGenerateAndLoad:
    """Tests for schema generation followed by loading."""

    async def test_fallback_end_to_end(self, offline_playground: Playground) -> None:
        """Test that the fallback schema loads into two queryable tables."""
        result = await offline_playground.generate_schema("retail store")
        assert result.source == GenerationSource.FALLBACK

        report = offline_playground.load_schema(result.text)

        assert report.success
        assert report.summary.failed == 0
        assert report.status_message == "Database loaded with 2 tables. Ready for queries!"
        counts = {t.name: t.row_count for t in report.tables}
        assert counts == {"customers": 3, "orders": 5}

    async def test_generated_schema_loads(self, mock_llm_schema: MockLLM) -> None:
        """Test loading provider output wrapped in prose and fences."""
        playground = Playground(
            generator=SchemaGenerator(llm=mock_llm_schema), coach=SQLCoach()
        )
        try:
            result = await playground.generate_schema("a library")
            report = playground.load_schema(result.text)
        finally:
            playground.close()

        assert result.source == GenerationSource.LLM
        assert "```" not in report.sanitized_sql
        assert len(report.statements) == 4
        assert {t.name: t.row_count for t in report.tables} == {"authors": 2, "books": 3}

    def test_load_replaces_previous_tables(self, loaded_playground: Playground) -> None:
        """Test that loading is a full reset, not a merge."""
        report = loaded_playground.load_schema("CREATE TABLE notes (body TEXT);")
        assert sorted(report.dropped_tables) == ["customers", "orders"]
        assert [t.name for t in report.tables] == ["notes"]

    def test_no_tables_status(self, offline_playground: Playground) -> None:
        """Test the status message when nothing could be created."""
        report = offline_playground.load_schema("Sorry, I can only describe databases.")
        assert not report.success
        assert report.statements == []
        assert report.status_message == "Failed to create any tables. Check your SQL syntax."

    def test_partial_failure_recorded(self, offline_playground: Playground) -> None:
        """Test that a bad statement is reported and later ones still run."""
        report = offline_playground.load_schema(
            "CREATE TABLE a (id INTEGER);\nCREATE TABLE oops (id INTEGER,,);\nINSERT INTO a VALUES (1);"
        )
        assert report.summary.applied == 2
        assert report.summary.failed == 1
        messages = [e.message for e in report.debug_trail]
        assert any(m.startswith("✗ Error executing statement 2/3") for m in messages)
        assert messages[-1] == "Table a is queryable with 1 rows"


class TestRunQuery:
    """Tests for Playground.run_query."""

    def test_successful_query(self, loaded_playground: Playground) -> None:
        """Test that results come back with a timing."""
        report = loaded_playground.run_query("SELECT name FROM customers ORDER BY id")
        assert report.success
        assert report.results[0].columns == ["name"]
        assert len(report.results[0].rows) == 3
        assert report.execution_time_ms >= 0
        assert not report.location.found

    def test_error_is_verbatim_with_location(self, loaded_playground: Playground) -> None:
        """Test that engine errors are captured and located."""
        query = "SELECT *\nFROM customers c\nJOIN widgets w ON w.id = c.id"
        report = loaded_playground.run_query(query)
        assert not report.success
        assert report.error == "no such table: widgets"
        assert report.results == []
        assert report.location.line == 3

    def test_query_changes_are_visible(self, loaded_playground: Playground) -> None:
        """Test that writes through queries show up in the table listing."""
        loaded_playground.run_query("DELETE FROM orders WHERE status = 'processing'")
        counts = {t.name: t.row_count for t in loaded_playground.tables()}
        assert counts["orders"] == 3


class TestExplainError:
    """Tests for Playground.explain_error."""

    async def test_offline_coaching(self, loaded_playground: Playground) -> None:
        """Test that coaching falls back without a provider."""
        outcome = await loaded_playground.explain_error(
            "CREATE TABLE customers (id INTEGER);",
            "SELECT * FROM widgets",
            "no such table: widgets",
        )
        assert outcome.source == GenerationSource.FALLBACK
        assert outcome.result.hints

    async def test_provider_coaching(self, mock_llm_coaching: MockLLM) -> None:
        """Test that provider coaching is passed through."""
        playground = Playground(generator=SchemaGenerator(), coach=SQLCoach(llm=mock_llm_coaching))
        try:
            outcome = await playground.explain_error("schema", "SELECT * FROM widgets", "no such table: widgets")
        finally:
            playground.close()
        assert outcome.source == GenerationSource.LLM
        assert outcome.result.suggested_fix == "SELECT * FROM customers;"


class TestDebugTrail:
    """Tests for the debug trail."""

    def test_trail_is_bounded(self, offline_playground: Playground) -> None:
        """Test that old entries are discarded past the limit."""
        for _ in range(Playground.MAX_DEBUG_ENTRIES + 20):
            offline_playground.run_query("SELECT 1")
        assert len(offline_playground.debug_trail) == Playground.MAX_DEBUG_ENTRIES

    def test_reset_drops_tables(self, loaded_playground: Playground) -> None:
        """Test that reset empties the session."""
        assert sorted(loaded_playground.reset()) == ["customers", "orders"]
        assert loaded_playground.tables() == []
