"""Tests for directory traversal."""
import os
import pytest

from cloudinpy.core.exceptions import LocalIOError
from cloudinpy.core.upload import iter_files, walk


def relative(paths, root):
    return [os.path.relpath(str(p), str(root)).replace(os.sep, "/") for p in paths]


class TestIterFiles:
    """Test suite for iter_files."""
    
    def test_files_only_sorted_preorder(self, tree):
        files = list(iter_files(tree))
        
        assert relative(files, tree) == [
            "b.png",
            "css/default.css",
            "images/a.png",
            "images/nested/c.jpg",
        ]
    
    def test_file_root(self, tree):
        files = list(iter_files(tree / "b.png"))
        
        assert files == [tree / "b.png"]
    
    def test_empty_directory(self, tmp_path):
        assert list(iter_files(tmp_path)) == []
    
    def test_missing_directory(self, tmp_path):
        with pytest.raises(LocalIOError):
            list(iter_files(tmp_path / "missing"))
    
    def test_deterministic(self, tree):
        assert list(iter_files(tree)) == list(iter_files(tree))


class TestWalk:
    """Test suite for walk."""
    
    @pytest.mark.asyncio
    async def test_visits_each_file_once(self, tree):
        visited = []
        
        async def visit(path):
            visited.append(path)
        
        count = await walk(tree, visit)
        
        assert count == 4
        assert len(visited) == 4
        assert all(p.is_file() for p in visited)
    
    @pytest.mark.asyncio
    async def test_aborts_on_first_error(self, tree):
        visited = []
        
        async def visit(path):
            visited.append(path)
            if path.name == "default.css":
                raise RuntimeError("boom")
        
        with pytest.raises(RuntimeError, match="boom"):
            await walk(tree, visit)
        
        assert relative(visited, tree) == ["b.png", "css/default.css"]
