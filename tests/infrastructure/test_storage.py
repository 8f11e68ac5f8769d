"""
Tests for asynchronous network file persistence.
"""

import asyncio
import os

import pytest

from roadnet.core.exceptions import StorageError
from roadnet.core.graph import Graph
from roadnet.core.models import Point
from roadnet.infrastructure.storage import NetworkStorage, backup_file


@pytest.fixture
def small_graph() -> Graph:
    """Fixture providing a two-node network."""
    graph = Graph()
    graph.add_node("home", Point(0.0, 0.0))
    graph.add_node("work", Point(3.0, 4.0))
    graph.add_edge("home", "work", "commute", 5.0)
    return graph


def test_save_and_load(tmp_path, small_graph):
    """Saved networks load back with their blocked pairs."""
    storage = NetworkStorage(str(tmp_path / "net.txt"))
    asyncio.run(storage.save(small_graph, {("work", "home")}))
    assert storage.exists()

    graph, blocked = asyncio.run(storage.load())
    assert graph.get_keys() == ["home", "work"]
    assert graph.find_edge("work", "home").label == "commute"
    assert ("home", "work") in blocked


def test_save_creates_directories(tmp_path, small_graph):
    """Missing parent directories are created."""
    path = tmp_path / "nested" / "deeper" / "net.txt"
    asyncio.run(NetworkStorage(str(path)).save(small_graph))
    assert path.is_file()


def test_save_keeps_backup(tmp_path, small_graph):
    """The previous file is copied to .bak before overwriting."""
    path = tmp_path / "net.txt"
    path.write_text("#NODES\nold;1;1\n", encoding="utf-8")

    asyncio.run(NetworkStorage(str(path)).save(small_graph))

    assert (tmp_path / "net.txt.bak").read_text(encoding="utf-8") == "#NODES\nold;1;1\n"
    assert "home;0;0" in path.read_text(encoding="utf-8")


def test_save_without_backup(tmp_path, small_graph):
    """Backups can be switched off."""
    path = tmp_path / "net.txt"
    path.write_text("old", encoding="utf-8")
    asyncio.run(NetworkStorage(str(path), create_backup=False).save(small_graph))
    assert not (tmp_path / "net.txt.bak").exists()


def test_load_missing_file(tmp_path):
    """A missing file is a storage failure, not an empty network."""
    storage = NetworkStorage(str(tmp_path / "absent.txt"))
    assert not storage.exists()
    with pytest.raises(StorageError, match="Network loading failed"):
        asyncio.run(storage.load())


def test_load_empty_file(tmp_path):
    """An empty file is an empty network."""
    path = tmp_path / "empty.txt"
    path.write_text("", encoding="utf-8")
    graph, blocked = asyncio.run(NetworkStorage(str(path)).load())
    assert len(graph) == 0
    assert len(blocked) == 0


def test_save_to_directory_fails(tmp_path, small_graph):
    """Writing over a directory is a storage failure."""
    target = tmp_path / "folder"
    os.makedirs(target)
    with pytest.raises(StorageError, match="Network persistence failed"):
        asyncio.run(NetworkStorage(str(target), create_backup=False).save(small_graph))


def test_backup_file(tmp_path):
    """backup_file copies existing files and skips missing ones."""
    source = tmp_path / "data.txt"
    assert backup_file(str(source)) is None
    source.write_text("content", encoding="utf-8")
    backup = backup_file(str(source))
    assert backup == f"{source}.bak"
    with open(backup, encoding="utf-8") as f:
        assert f.read() == "content"
