from dataclasses import dataclass

import pytest

from iglesia360.repositories import InMemoryRepository


@dataclass
class Row:
    id: int
    name: str


def test_reads_are_copies():
    repo = InMemoryRepository([Row(1, "a")])
    row = repo.get(1)
    row.name = "changed"
    assert repo.get(1).name == "a"


def test_duplicate_insert_rejected():
    repo = InMemoryRepository([Row(1, "a")])
    with pytest.raises(ValueError):
        repo.insert(Row(1, "b"))


def test_next_id_never_reuses_deleted_ids():
    repo = InMemoryRepository([Row(1, "a"), Row(2, "b")])
    assert repo.delete(2)
    assert repo.next_id() == 3

    repo.insert(Row(repo.next_id(), "c"))
    assert repo.delete(3)
    assert repo.delete(1)
    assert repo.count() == 0
    assert repo.next_id() == 4
