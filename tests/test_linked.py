import pytest

from ftkit.linked import LinkedList, Node


def test_empty_list():
    lst = LinkedList()
    assert len(lst) == 0
    assert lst.last() is None
    assert list(lst) == []
    assert lst.head is None


def test_push_back_keeps_order():
    lst = LinkedList()
    for word in ["a", "b", "c"]:
        lst.push_back(word)
    assert list(lst) == ["a", "b", "c"]
    assert len(lst) == 3


def test_push_front_reverses_order():
    lst = LinkedList()
    for word in ["a", "b", "c"]:
        lst.push_front(word)
    assert list(lst) == ["c", "b", "a"]


def test_push_returns_new_node():
    lst = LinkedList()
    node = lst.push_back(7)
    assert isinstance(node, Node)
    assert node.content == 7
    assert lst.head is node
    front = lst.push_front(3)
    assert front.next is node
    assert lst.head is front


def test_last_node():
    lst = LinkedList([1, 2, 3])
    tail = lst.last()
    assert tail.content == 3
    assert tail.next is None


def test_constructor_from_iterable():
    lst = LinkedList(range(5))
    assert list(lst) == [0, 1, 2, 3, 4]
    assert len(lst) == 5


def test_clear_calls_delete_in_order():
    deleted = []
    lst = LinkedList(["x", "y", "z"])
    lst.clear(deleted.append)
    assert deleted == ["x", "y", "z"]
    assert len(lst) == 0
    assert lst.head is None


def test_clear_without_delete_empties():
    lst = LinkedList([1, 2])
    lst.clear()
    assert list(lst) == []


def test_iterate_visits_every_content():
    seen = []
    lst = LinkedList([4, 5, 6])
    lst.iterate(seen.append)
    assert seen == [4, 5, 6]


def test_iterate_empty_does_nothing():
    seen = []
    LinkedList().iterate(seen.append)
    assert seen == []


def test_map_builds_new_list():
    lst = LinkedList(["ab", "cd"])
    mapped = lst.map(str.upper, lambda _: None)
    assert list(mapped) == ["AB", "CD"]
    assert list(lst) == ["ab", "cd"]
    assert mapped.head is not lst.head


def test_map_failure_deletes_mapped_and_raises():
    deleted = []
    lst = LinkedList([1, 2, 3])
    with pytest.raises(ValueError):
        lst.map(lambda v: None if v == 3 else v * 10, deleted.append)
    assert deleted == [10, 20]
    assert list(lst) == [1, 2, 3]


def test_map_empty_list():
    mapped = LinkedList().map(lambda v: v, None)
    assert len(mapped) == 0