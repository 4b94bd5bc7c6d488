"""
Pytest Fixtures
===============

Shared fixtures for SQL playground tests.
"""

import sys
from pathlib import Path

import pytest

# Add src and the repository root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))
sys.path.insert(0, str(Path(__file__).parent.parent))

from sql_playground.coaching import SQLCoach
from sql_playground.generation import SchemaGenerator, fallback_schema
from sql_playground.llm.mock import MockLLM
from sql_playground.playground import Playground
from sql_playground.session import DatabaseSession


GENERATED_SCHEMA = """Here is a schema for your library:

```sql
-- Library schema
CREATE TABLE authors (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  name TEXT NOT NULL
);

CREATE TABLE books (
  id INTEGER PRIMARY KEY AUTOINCREMENT,
  author_id INTEGER NOT NULL,
  title TEXT NOT NULL,
  FOREIGN KEY (author_id) REFERENCES authors(id)
);

INSERT INTO authors (id, name) VALUES (1, 'Ursula K. Le Guin'), (2, 'Terry Pratchett');
INSERT INTO books (author_id, title) VALUES (1, 'The Dispossessed'), (2, 'Mort'), (2, 'Guards! Guards!');
```"""


@pytest.fixture
def generated_schema() -> str:
    """Return LLM-style output wrapped in prose and a sql fence."""
    return GENERATED_SCHEMA


@pytest.fixture
def fallback_sql() -> str:
    """Return the fallback schema for a retail store."""
    return fallback_schema("retail store")


@pytest.fixture
def session():
    """Create an in-memory database session."""
    with DatabaseSession() as db:
        yield db


@pytest.fixture
def mock_llm_schema() -> MockLLM:
    """Create a mock LLM that answers schema prompts."""
    return MockLLM(responses={"library": [GENERATED_SCHEMA]})


@pytest.fixture
def mock_llm_coaching() -> MockLLM:
    """Create a mock LLM that answers coaching prompts with JSON."""
    return MockLLM(
        responses={
            "sql tutor": [
                '{"explanation": "The table widgets does not exist.", '
                '"suggested_fix": "SELECT * FROM customers;", '
                '"hints": ["Check the table list."]}'
            ]
        }
    )


@pytest.fixture
def offline_playground():
    """Create a playground with no provider configured."""
    playground = Playground(generator=SchemaGenerator(), coach=SQLCoach())
    yield playground
    playground.close()


@pytest.fixture
def loaded_playground(offline_playground: Playground, fallback_sql: str) -> Playground:
    """Create a playground with the fallback schema loaded."""
    offline_playground.load_schema(fallback_sql)
    return offline_playground
