"""Pytest fixtures for prompt composer tests."""

import tempfile
from pathlib import Path

import pytest

# Ensure src is on path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))


@pytest.fixture
def temp_workspace():
    """创建临时工作区目录。"""
    with tempfile.TemporaryDirectory(prefix="prompt-composer-test-") as tmpdir:
        yield Path(tmpdir)


@pytest.fixture
def sample_tree(temp_workspace):
    """带有 src/、node_modules/、隐藏目录和若干文件的示例项目。"""
    (temp_workspace / "src" / "components").mkdir(parents=True)
    (temp_workspace / "src" / "index.ts").write_text("export {};\n")
    (temp_workspace / "src" / "components" / "Button.tsx").write_text("<button/>\n")
    (temp_workspace / "node_modules" / "lib").mkdir(parents=True)
    (temp_workspace / "node_modules" / "lib" / "index.js").write_text("module.exports = 1;\n")
    (temp_workspace / "README.md").write_text("# demo\n")
    (temp_workspace / "b.txt").write_text("b\n")
    (temp_workspace / "a.txt").write_text("a\n")
    return temp_workspace
