import io
import random
from dataclasses import dataclass

import pytest

from linked_sequence import (
    LinkedList,
    Match,
    MissingCallbackError,
    MissingValueError,
    OutOfRangeError,
    TypeMismatchError,
)


@dataclass
class Song:
    name: str
    duration: float


@pytest.mark.parametrize(
    "operation",
    ["for_each", "map", "reduce", "find", "some", "every", "filter"],
)
def test_missing_callback_raises(operation):
    with pytest.raises(MissingCallbackError):
        getattr(LinkedList(1, 2), operation)(None)


def test_non_callable_callback_is_type_mismatch():
    with pytest.raises(TypeMismatchError):
        LinkedList(1).map("not callable")


def test_for_each_receives_value_and_index():
    seen = []
    LinkedList("a", "b").for_each(lambda value, index: seen.append((value, index)))
    assert seen == [("a", 0), ("b", 1)]


def test_map_transforms_into_new_list():
    source = LinkedList(1, 2, 3)
    mapped = source.map(lambda value, index: value * 10 + index)
    assert mapped.to_list() == [10, 21, 32]
    assert source.to_list() == [1, 2, 3]


def test_map_identity_produces_independent_copy():
    record = {"name": "a"}
    source = LinkedList(record, 2)
    copy = source.map(lambda value, _: value)
    assert copy is not source
    assert copy.to_list() == source.to_list()
    assert copy.length == source.length

    copy.push_back(3)
    copy.front["name"] = "changed"
    assert source.length == 2
    assert record == {"name": "a"}


def test_reduce_with_default_and_explicit_initial():
    numbers = LinkedList(1, 2, 3, 4)
    assert numbers.reduce(lambda acc, value: acc + value) == 10
    assert numbers.reduce(lambda acc, value: acc + [value], []) == [1, 2, 3, 4]
    assert LinkedList().reduce(lambda acc, value: acc + value, 5) == 5


def test_find_returns_match_or_none():
    linked = LinkedList(5, 7, 9)
    assert linked.find(lambda value, _: value > 6) == Match(1, 7)
    assert linked.find(lambda _, index: index == 2).value == 9
    assert linked.find(lambda value, _: value > 100) is None


def test_includes_accepts_falsy_values():
    linked = LinkedList(0, "", None, "x")
    assert linked.includes(0)
    assert linked.includes("")
    assert linked.includes(None)
    assert "x" in linked
    assert not linked.includes("y")


def test_includes_without_argument_raises():
    with pytest.raises(MissingValueError):
        LinkedList(1).includes()


def test_some_short_circuits():
    calls = []

    def predicate(value):
        calls.append(value)
        return value == 2

    assert LinkedList(1, 2, 3).some(predicate)
    assert calls == [1, 2]
    assert not LinkedList().some(predicate)


def test_every_scans_all_values():
    calls = []

    def predicate(value):
        calls.append(value)
        return value > 1

    assert not LinkedList(1, 2, 3).every(predicate)
    assert calls == [1, 2, 3]
    assert LinkedList().every(predicate)


@pytest.mark.parametrize("threshold", [0, 2, 5])
def test_filter_and_every_are_consistent(threshold):
    linked = LinkedList(1, 2, 3, 4)

    def predicate(value):
        return value > threshold

    filtered = linked.filter(predicate)
    assert filtered.length <= linked.length
    assert linked.every(predicate) == (filtered.length == linked.length)
    assert filtered.to_list() == [value for value in linked if value > threshold]


def test_filter_copies_records():
    record = {"keep": True}
    source = LinkedList(record, {"keep": False})
    filtered = source.filter(lambda value: value["keep"])
    filtered.front["keep"] = "mutated"
    assert record == {"keep": True}


def test_concat_length_and_order():
    left = LinkedList(1, 2)
    right = LinkedList(3)
    combined = left.concat(right)
    assert combined.length == left.length + right.length
    assert combined.to_list() == [1, 2, 3]
    assert left.to_list() == [1, 2]
    assert right.to_list() == [3]
    assert left.concat(left).to_list() == [1, 2, 1, 2]


def test_concat_requires_linked_list():
    with pytest.raises(TypeMismatchError):
        LinkedList(1).concat([2])


def test_reverse_is_non_destructive_involution():
    linked = LinkedList(1, 2, 3)
    reversed_list = linked.reverse()
    assert reversed_list.to_list() == [3, 2, 1]
    assert linked.to_list() == [1, 2, 3]
    assert reversed_list.reverse().to_list() == linked.to_list()
    assert LinkedList().reverse().length == 0


def test_join_serializes_values():
    linked = LinkedList(1, "a", {"k": [1, 2]}, Song("x", 1.5))
    assert linked.join(",") == '1,"a",{"k": [1, 2]},{"name": "x", "duration": 1.5}'
    assert LinkedList().join(",") == ""
    assert LinkedList(1).join(" | ") == "1"


def test_join_requires_text_delimiter():
    with pytest.raises(TypeMismatchError):
        LinkedList(1, 2).join(1)


def test_sort_default_ascending():
    linked = LinkedList(5, 1, 4, 2, 8, 2)
    linked.sort()
    values = linked.to_list()
    assert values == [1, 2, 2, 4, 5, 8]
    assert all(left <= right for left, right in zip(values, values[1:]))


def test_sort_with_comparator_swaps_values_not_nodes():
    linked = LinkedList(Song("a", 3.0), Song("b", 1.0), Song("c", 2.0))
    nodes = []
    current = linked.head
    while current:
        nodes.append(current)
        current = current.next

    linked.sort(lambda left, right: left.duration < right.duration)
    assert [song.name for song in linked] == ["a", "c", "b"]

    current = linked.head
    for node in nodes:
        assert current is node
        current = current.next


def test_sort_empty_and_single():
    empty = LinkedList()
    empty.sort()
    assert empty.to_list() == []
    single = LinkedList(1)
    single.sort()
    assert single.to_list() == [1]


def test_sort_incomparable_values_raise_type_error():
    with pytest.raises(TypeError):
        LinkedList(1, "a").sort()


@pytest.mark.parametrize("depth", [0, 1, 10])
def test_shuffle_is_permutation(depth):
    values = [1, 2, 2, 3, 4, 5, 6]
    linked = LinkedList(*values)
    linked.shuffle(depth, rng=random.Random(7))
    assert sorted(linked.to_list()) == sorted(values)
    assert linked.length == len(values)


def test_shuffle_is_reproducible_with_seed():
    first = LinkedList(*range(20))
    second = LinkedList(*range(20))
    first.shuffle(3, rng=random.Random(42))
    second.shuffle(3, rng=random.Random(42))
    assert first.to_list() == second.to_list()


def test_shuffle_zero_depth_keeps_order():
    linked = LinkedList(1, 2, 3)
    linked.shuffle(0)
    assert linked.to_list() == [1, 2, 3]


def test_shuffle_rejects_negative_depth():
    linked = LinkedList(1, 2)
    with pytest.raises(OutOfRangeError):
        linked.shuffle(-1)
    with pytest.raises(TypeMismatchError):
        linked.shuffle("3")


def test_shuffle_on_empty_list():
    empty = LinkedList()
    empty.shuffle()
    assert empty.length == 0


def test_render_and_display():
    linked = LinkedList(1, "two")
    assert linked.render() == "1 -> two -> /"
    assert LinkedList().render() == "/"

    stream = io.StringIO()
    linked.display(stream)
    assert stream.getvalue() == "1 -> two -> /\n"


def test_render_indents_records():
    rendered = LinkedList({"a": 1}).render()
    assert rendered == '{\n  "a": 1\n} -> /'


def test_print_alias_writes_to_stdout(capsys):
    LinkedList(1, 2).print()
    assert capsys.readouterr().out == "1 -> 2 -> /\n"


def test_shuffle_changes_order():
    values = list(range(20))
    linked = LinkedList(*values)
    linked.shuffle(1, rng=random.Random(42))
    assert linked.to_list() != values
    assert sorted(linked.to_list()) == values


def test_concat_copies_are_independent():
    left_record = {"side": "left"}
    right_record = {"side": "right"}
    left = LinkedList(left_record)
    right = LinkedList(right_record)
    combined = left.concat(right)

    combined.front["side"] = "changed"
    combined.back["side"] = "changed"
    combined.push_back("extra")
    assert left_record == {"side": "left"}
    assert right_record == {"side": "right"}
    assert left.length == 1 and right.length == 1


def test_reverse_copies_are_independent():
    record = {"n": 1}
    source = LinkedList(record, 2)
    reversed_list = source.reverse()

    reversed_list.back["n"] = 99
    reversed_list.pop_front()
    assert record == {"n": 1}
    assert source.to_list() == [{"n": 1}, 2]


def test_render_handles_non_text_keys():
    rendered = LinkedList({(1, 2): "a", frozenset(): "b"}).render()
    assert rendered == '{\n  "(1, 2)": "a",\n  "frozenset()": "b"\n} -> /'


def test_join_handles_non_text_keys_and_odd_values():
    linked = LinkedList({(1, 2): "a"}, {"when": object}, {1: {3}})
    assert linked.join(";") == (
        '{"(1, 2)": "a"};{"when": "<class \'object\'>"};{"1": [3]}'
    )


def test_join_handles_self_referencing_record():
    record = {"name": "loop"}
    record["self"] = record
    assert LinkedList(record).join(",") == '{"name": "loop", "self": "..."}'
