from datetime import datetime, timedelta, timezone

import pytest

from meshkit.attribute.bag import EMPTY, equal
from meshkit.attribute.mutable_bag import BagDoneError, MutableBag, copy_bag, mutable_bag_from
from meshkit.attribute.values import wrap_string_map

T9 = datetime(2001, 1, 1, 1, 1, 1, 9, tzinfo=timezone.utc)
D1 = timedelta(seconds=42)


def compare_bags(b1, b2):
    names1 = b1.names()
    if len(names1) != len(b2.names()):
        return False
    return all(equal(b1.get(n), b2.get(n)) for n in names1)


def test_merge():
    mb = MutableBag(EMPTY)
    mb.set("STRING0", "@")

    c1 = MutableBag(mb)
    c2 = MutableBag(mb)

    c1.set("STRING0", "Z")
    c1.set("STRING1", "A")
    c2.set("STRING2", "B")

    mb.merge(c1)
    mb.merge(c2)

    assert mb.get("STRING0") == "@"
    assert mb.get("STRING1") == "A"
    assert mb.get("STRING2") == "B"


def test_copy_bag():
    ref = MutableBag()
    ref.set("M1", wrap_string_map({"M7": "M6"}))
    ref.set("M2", T9)
    ref.set("M3", D1)
    ref.set("M4", b"\x0b")
    ref.set("M5", wrap_string_map({"M7": "M6"}))
    ref.set("G4", "G5")
    ref.set("G6", 142)
    ref.set("G7", 142.0)

    copied = copy_bag(ref)
    assert compare_bags(copied, ref)


def test_copy_bag_is_deep():
    ref = MutableBag()
    ref.set("M", wrap_string_map({"a": "b"}))
    copied = copy_bag(ref)
    copied.get("M").set("a", "changed")
    assert ref.get("M").get("a") == "b"


def test_use_after_done():
    b = MutableBag()
    b.done()
    with pytest.raises(BagDoneError):
        b.get("XYZ")
    with pytest.raises(BagDoneError):
        b.names()
    with pytest.raises(BagDoneError):
        b.done()
    with pytest.raises(BagDoneError):
        b.set("x", "y")


def test_context_manager_marks_done():
    with MutableBag() as b:
        b.set("a", "b")
        assert b.get("a") == "b"
    with pytest.raises(BagDoneError):
        b.get("a")


def test_mutable_bag_from():
    mb = mutable_bag_from({"A": 1, "B": 2})
    assert mb.contains("A")
    assert mb.get("A") == 1


def test_mutable_bag_from_rejects_bad_type():
    with pytest.raises(TypeError):
        mutable_bag_from({"A": [1, 2]})


def test_set_rejects_bad_type():
    with pytest.raises(TypeError):
        MutableBag().set("A", object())


def test_reset():
    mb = MutableBag()
    mb.set("some", "value")
    mb.reset()
    assert mb.names() == []
    mb.done()


def test_delete():
    parent = MutableBag()
    child = MutableBag(parent)

    parent.set("parent", True)
    child.set("parent", False)

    assert len(child.names()) == 1
    assert child.get("parent") is False

    child.delete("parent")
    assert child.contains("parent")
    assert child.get("parent") is True


def test_names_union_of_parent_and_child():
    parent = MutableBag()
    parent.set("a", "1")
    child = MutableBag(parent)
    child.set("b", "2")
    assert child.names() == ["a", "b"]
    assert child.get("missing") is None


def test_str_format():
    parent = MutableBag()
    parent.set("p", True)
    child = MutableBag(parent)
    assert str(child) == "---\n" + f"{'p':<30}: true\n"
    child.set("a", 142.0)
    assert str(child) == "---\n" + f"{'p':<30}: true\n" + "---\n" + f"{'a':<30}: 142\n"


def test_reference_tracker_is_none():
    assert MutableBag().reference_tracker() is None