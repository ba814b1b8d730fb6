"""Pytest configuration and shared fixtures.

Builds small temporary projects and an isolated snapshot store so no test
touches the real ~/.codebase-context-mcp directory.
"""

import os
import sys
import tempfile
from pathlib import Path

import pytest

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', 'src'))

from codebase_context.config import IndexerConfig, reset_config  # noqa: E402
from codebase_context.indexing.store import IndexStore  # noqa: E402


def write_files(root: Path, files: dict) -> Path:
    """Create ``files`` (relative path -> text) under ``root``."""
    for relative_path, content in files.items():
        path = root / relative_path
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding="utf-8")
    return root


@pytest.fixture
def store_dir():
    """Temporary snapshot directory."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def indexer_config(store_dir, monkeypatch):
    """Configuration pointing at the temporary store."""
    for key in list(os.environ):
        if key.startswith("CODEBASE_CONTEXT_"):
            monkeypatch.delenv(key, raising=False)
    monkeypatch.setenv("CODEBASE_CONTEXT_STORE_DIR", store_dir)
    reset_config()
    yield IndexerConfig()
    reset_config()


@pytest.fixture
def index_store(indexer_config):
    return IndexStore(indexer_config.store_dir, indexer_config.index_format)


@pytest.fixture
def empty_project():
    """Create an empty temporary directory for testing."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield temp_dir


@pytest.fixture
def project_dir():
    """Empty project root as a Path; tests fill it with write_files."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def config_project(project_dir):
    """Two files that both mention "config" in symbol names and text."""
    write_files(project_dir, {
        "src/parse.py": (
            "import json\n"
            "\n"
            "\n"
            "def parseConfig(path):\n"
            "    \"\"\"Read the config file.\"\"\"\n"
            "    with open(path) as handle:\n"
            "        return json.load(handle)\n"
        ),
        "lib/parser.py": (
            "class ConfigParser:\n"
            "    def __init__(self, config):\n"
            "        self.text = config\n"
            "\n"
            "    def parse(self):\n"
            "        return dict(line.split('=') for line in self.text.splitlines())\n"
        ),
    })
    return project_dir


@pytest.fixture
def pattern_project(project_dir):
    """Project using only pattern-strategy languages, no grammars needed."""
    write_files(project_dir, {
        "App/Orders.vb": (
            "Imports System\n"
            "Imports System.Collections.Generic\n"
            "\n"
            "Namespace Shop\n"
            "    ''' <summary>Order aggregate.</summary>\n"
            "    Public Class Order\n"
            "        Public Property Id As Integer\n"
            "\n"
            "        Public Sub New(id As Integer)\n"
            "            Me.Id = id\n"
            "        End Sub\n"
            "\n"
            "        Public Function Total() As Decimal\n"
            "            Return 0D\n"
            "        End Function\n"
            "    End Class\n"
            "End Namespace\n"
        ),
        "App/MainWindow.xaml": (
            "<Window x:Class=\"Shop.MainWindow\"\n"
            "        xmlns=\"http://schemas.microsoft.com/winfx/2006/xaml/presentation\"\n"
            "        xmlns:x=\"http://schemas.microsoft.com/winfx/2006/xaml\">\n"
            "    <Grid x:Name=\"LayoutRoot\">\n"
            "        <Button Name=\"OrderButton\" Content=\"Order\" />\n"
            "    </Grid>\n"
            "</Window>\n"
        ),
    })
    return project_dir
