from __future__ import annotations

import logging
import operator
import random
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Any, Callable, Iterator, Optional, TextIO

from linked_sequence.base import Container
from linked_sequence.configuration.loaders import get_settings
from linked_sequence.errors import (
    EmptyContainerError,
    MissingCallbackError,
    MissingValueError,
    OutOfRangeError,
    TypeMismatchError,
    UnsupportedSourceError,
)
from linked_sequence.utils import copy_value, render_value, serialize_value, swap_values


logger = logging.getLogger(__name__)

_MISSING = object()


@dataclass(eq=False)
class Node:
    """链表节点类。

    每个节点包含一个值和指向下一个节点的引用。
    这是构建链表的基本单元，只由所属的链表持有。

    属性:
        value: 节点存储的值
        next: 指向下一个节点的引用，如果是最后一个节点则为 None
    """
    value: Any
    next: Optional[Node] = field(default=None, repr=False)


@dataclass(frozen=True)
class Match:
    """``find`` 命中的结果：值及其位置。"""
    index: int
    value: Any


class LinkedList(Container):
    """单向链表实现。

    链表是一种线性数据结构，其中元素不存储在连续的内存位置。
    每个元素（节点）包含数据和指向下一个节点的引用。
    本实现只保存头节点和缓存的长度，不保存尾指针。

    主要操作：
        - push_front / push_back / insert_at: 在头部、尾部或指定位置插入
        - pop_front / pop_back / remove_at: 从头部、尾部或指定位置移除
        - front / back / at: 读取元素但不修改链表
        - map / filter / reduce / for_each / find / some / every: 高阶遍历
        - sort / shuffle: 原地排序与打乱
        - concat / reverse / join / render / display: 派生新链表或文本

    时间复杂度:
        - push_front / pop_front / front: O(1)
        - push_back / pop_back / back: O(n) - 需要遍历到末尾
        - insert_at / remove_at / at: O(n)
        - sort: O(n^2)
    空间复杂度: O(n) - n 为存储元素的数量

    不变量:
        - length == 0 当且仅当 head 为 None
        - 从 head 沿 next 走 length 步恰好到达 None，链中没有环
        - 所有派生操作返回的新链表拥有自己的节点，不与原链表共享
    """

    def __init__(self, *values: Any) -> None:
        """按给定顺序创建链表。

        参数:
            *values: 初始值，第一个参数位于链表头部

        示例:
            >>> LinkedList(1, 2, 3).to_list()
            [1, 2, 3]
        """
        self.head: Optional[Node] = None
        self._length = 0
        self._append_all(values)

    @property
    def length(self) -> int:
        """链表中的节点个数。"""
        return self._length

    # 插入 -----------------------------------------------------------------
    def push_front(self, value: Any) -> None:
        """在链表头部插入一个值。

        参数:
            value: 要插入的值

        时间复杂度: O(1) - 只需修改头节点
        """
        self.head = Node(value, self.head)
        self._length += 1

    def push_back(self, value: Any) -> None:
        """在链表末尾添加一个值。

        参数:
            value: 要添加的值

        时间复杂度: O(n) - 需要遍历到链表末尾

        示例:
            >>> linked_list = LinkedList()
            >>> linked_list.push_back(1)
            >>> linked_list.push_back(2)
            >>> linked_list.to_list()
            [1, 2]
        """
        new_node = Node(value)
        if self.head is None:  # 如果链表为空，新节点成为头节点
            self.head = new_node
        else:
            current = self.head
            while current.next:
                current = current.next
            current.next = new_node  # 将新节点连接到末尾
        self._length += 1

    def insert_at(self, value: Any, position: int) -> None:
        """在指定位置插入一个值，位置从 0 开始。

        位置 0 等价于 ``push_front``，位置 ``length`` 等价于 ``push_back``，
        其余位置把新节点接在 ``position - 1`` 与原 ``position`` 之间。

        参数:
            value: 要插入的值
            position: 插入位置，必须满足 0 <= position <= length

        异常:
            OutOfRangeError: 位置超出范围
            TypeMismatchError: 位置不是整数

        时间复杂度: O(n)
        """
        self._check_position(position, self._length)
        if position == 0:
            self.push_front(value)
            return
        if position == self._length:
            self.push_back(value)
            return

        prev = self._node_at(position - 1)
        prev.next = Node(value, prev.next)
        self._length += 1

    def push(self, value: Any, position: int = 0) -> None:
        """``insert_at`` 的别名，默认插入到头部。"""
        self.insert_at(value, position)

    # 移除 -----------------------------------------------------------------
    def pop_front(self) -> Any:
        """移除并返回头部的值。

        异常:
            EmptyContainerError: 链表为空
        """
        if self.head is None:
            raise EmptyContainerError("链表为空，无法移除头部元素")
        node = self.head
        self.head = node.next
        node.next = None
        self._length -= 1
        return node.value

    def pop_back(self) -> Any:
        """移除并返回末尾的值。

        返回:
            Any: 被移除的末尾值

        异常:
            EmptyContainerError: 链表为空

        时间复杂度: O(n) - 需要找到倒数第二个节点
        """
        if self.head is None:
            raise EmptyContainerError("链表为空，无法移除末尾元素")

        current = self.head
        prev: Optional[Node] = None
        while current.next:
            prev = current
            current = current.next

        if prev:  # 删除的不是头节点
            prev.next = None
        else:  # 只有一个节点
            self.head = None
        self._length -= 1
        return current.value

    def remove_at(self, position: int) -> Any:
        """移除并返回指定位置的值。

        参数:
            position: 要移除的位置，必须满足 0 <= position <= length - 1

        返回:
            Any: 被移除的值

        异常:
            OutOfRangeError: 位置超出范围（空链表上任何位置都超出范围）
            TypeMismatchError: 位置不是整数
        """
        self._check_position(position, self._length - 1)
        if position == 0:
            return self.pop_front()
        if position == self._length - 1:
            return self.pop_back()

        prev = self._node_at(position - 1)
        target = prev.next
        prev.next = target.next
        target.next = None
        self._length -= 1
        return target.value

    def pop(self, position: int = 0) -> Any:
        """``remove_at`` 的别名，默认移除头部。"""
        return self.remove_at(position)

    # 访问 -----------------------------------------------------------------
    @property
    def front(self) -> Any:
        """头部的值；链表为空时抛出 EmptyContainerError。"""
        if self.head is None:
            raise EmptyContainerError("链表为空，没有头部元素")
        return self.head.value

    @property
    def back(self) -> Any:
        """末尾的值；链表为空时抛出 EmptyContainerError。"""
        if self.head is None:
            raise EmptyContainerError("链表为空，没有末尾元素")
        current = self.head
        while current.next:
            current = current.next
        return current.value

    def at(self, position: int) -> Any:
        """返回指定位置的值，不修改链表。

        参数:
            position: 位置，必须满足 0 <= position <= length - 1

        异常:
            OutOfRangeError: 位置超出范围
            TypeMismatchError: 位置不是整数

        示例:
            >>> LinkedList("a", "b", "c").at(1)
            'b'
        """
        self._check_position(position, self._length - 1)
        if position == 0:
            return self.front
        return self._node_at(position).value

    def get(self, position: int = 0) -> Any:
        """``at`` 的别名。"""
        return self.at(position)

    def __getitem__(self, position: int) -> Any:
        return self.at(position)

    # 批量构建 -------------------------------------------------------------
    @classmethod
    def from_sequence(cls, values: Iterable[Any]) -> LinkedList:
        """由序列构建新链表，保持原有顺序。

        参数:
            values: 任意非文本、非映射的可迭代对象

        异常:
            UnsupportedSourceError: 输入是文本、映射或不可迭代对象
        """
        if (
            isinstance(values, (str, bytes, bytearray, Mapping))
            or not isinstance(values, Iterable)
        ):
            raise UnsupportedSourceError(
                f"无法把 {type(values).__name__} 转换为链表，需要序列"
            )
        result = cls()
        result._append_all(values)
        logger.debug("Built %s of %d values from sequence", cls.__name__, result.length)
        return result

    @classmethod
    def from_mapping(cls, mapping: Mapping[Any, Any]) -> LinkedList:
        """由映射构建新链表，每个条目成为一条 ``{"key": k, "value": v}`` 记录。

        记录顺序与映射的迭代顺序一致。

        异常:
            UnsupportedSourceError: 输入不是映射

        示例:
            >>> LinkedList.from_mapping({"a": 1}).to_list()
            [{'key': 'a', 'value': 1}]
        """
        if not isinstance(mapping, Mapping):
            raise UnsupportedSourceError(
                f"无法把 {type(mapping).__name__} 转换为链表，需要映射"
            )
        result = cls()
        result._append_all({"key": key, "value": value} for key, value in mapping.items())
        logger.debug("Built %s of %d records from mapping", cls.__name__, result.length)
        return result

    @classmethod
    def from_data(cls, data: Any) -> LinkedList:
        """根据输入形状分派到 ``from_mapping`` 或 ``from_sequence``。"""
        if isinstance(data, Mapping):
            return cls.from_mapping(data)
        return cls.from_sequence(data)

    # 排序与打乱 -----------------------------------------------------------
    def sort(self, comparator: Optional[Callable[[Any, Any], bool]] = None) -> None:
        """使用冒泡排序原地排序链表。

        共进行 length 轮，每轮对相邻节点做 length - 1 次比较，
        比较器返回真值时交换两个节点的值（不重新连接节点）。

        参数:
            comparator: 接收 (left, right)，当 left 应排在 right 之后时返回 True。
                默认使用 ``operator.gt``，即升序。

        时间复杂度: O(n^2)
        空间复杂度: O(1)

        示例:
            >>> numbers = LinkedList(3, 1, 2)
            >>> numbers.sort()
            >>> numbers.to_list()
            [1, 2, 3]
        """
        if comparator is None:
            comparator = operator.gt
        elif not callable(comparator):
            raise TypeMismatchError("比较器必须是可调用对象")

        for _ in range(self._length):
            current = self.head
            for _ in range(self._length - 1):
                if comparator(current.value, current.next.value):
                    swap_values(current, current.next)
                current = current.next
        logger.debug("Sorted %d values", self._length)

    def shuffle(self, depth: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        """原地打乱链表。

        每一轮从 length - 1 递减到 0，对每个 i 随机选取 j ∈ [0, i]，
        把位置 i 的值移除后重新插入位置 j。共重复 depth 轮。

        参数:
            depth: 轮数，默认取配置中的 ``shuffle_depth``（10）
            rng: 可选的随机数生成器，便于复现结果

        异常:
            OutOfRangeError: depth 为负数
            TypeMismatchError: depth 不是整数
        """
        if depth is None:
            depth = get_settings().shuffle_depth
        if not isinstance(depth, int) or isinstance(depth, bool):
            raise TypeMismatchError(f"打乱轮数必须是整数，得到: {type(depth).__name__}")
        if depth < 0:
            raise OutOfRangeError(f"打乱轮数不能为负数: {depth}")

        generator = rng or random.Random()
        for _ in range(depth):
            for i in range(self._length - 1, -1, -1):
                j = generator.randrange(i + 1)
                self.insert_at(self.remove_at(i), j)
        logger.debug("Shuffled %d values over %d passes", self._length, depth)

    # 遍历与高阶操作 -------------------------------------------------------
    def values(self) -> Iterator[Any]:
        """按顺序惰性地产出每个值，每次调用都从头开始。"""
        current = self.head
        while current:
            yield current.value
            current = current.next

    def __iter__(self) -> Iterator[Any]:
        return self.values()

    def __len__(self) -> int:
        return self._length

    def for_each(self, callback: Callable[[Any, int], Any]) -> None:
        """对每个值调用 ``callback(value, index)``。

        异常:
            MissingCallbackError: 未传入回调
        """
        self._require_callback(callback)
        for index, value in enumerate(self):
            callback(value, index)

    def map(self, callback: Callable[[Any, int], Any]) -> LinkedList:
        """返回由 ``callback(value, index)`` 的结果组成的新链表。

        回调原样返回传入的值时，新链表保存该值的副本，
        避免两个链表共享同一个可变记录。

        参数:
            callback: 变换函数，接收值和位置

        返回:
            LinkedList: 长度与原链表相同的新链表

        异常:
            MissingCallbackError: 未传入回调

        示例:
            >>> LinkedList(1, 2).map(lambda value, index: value * 10).to_list()
            [10, 20]
        """
        self._require_callback(callback)

        def transformed() -> Iterator[Any]:
            for index, value in enumerate(self):
                result = callback(value, index)
                yield copy_value(result) if result is value else result

        mapped = type(self)()
        mapped._append_all(transformed())
        return mapped

    def reduce(self, callback: Callable[[Any, Any], Any], initial: Any = 0) -> Any:
        """从左到右累积：``accumulator = callback(accumulator, value)``。

        参数:
            callback: 累积函数
            initial: 初始累积值，默认为 0

        返回:
            Any: 最终的累积值
        """
        self._require_callback(callback)
        accumulator = initial
        for value in self:
            accumulator = callback(accumulator, value)
        return accumulator

    def find(self, predicate: Callable[[Any, int], bool]) -> Optional[Match]:
        """查找第一个满足 ``predicate(value, index)`` 的值。

        返回:
            Optional[Match]: 命中的位置和值，如果未找到则返回 None

        时间复杂度: O(n) - 最坏情况下需要遍历整个链表
        """
        self._require_callback(predicate)
        for index, value in enumerate(self):
            if predicate(value, index):
                return Match(index, value)
        return None

    def includes(self, value: Any = _MISSING) -> bool:
        """检查链表中是否存在与 ``value`` 相同或相等的值。

        0、空字符串等假值同样是合法的查找目标。

        异常:
            MissingValueError: 未传入查找值
        """
        if value is _MISSING:
            raise MissingValueError("未传入要查找的值")
        return self.find(lambda item, _: item is value or item == value) is not None

    def __contains__(self, value: Any) -> bool:
        return self.includes(value)

    def some(self, predicate: Callable[[Any], bool]) -> bool:
        """只要有一个值满足 ``predicate(value)`` 就返回 True，命中后立即停止。"""
        self._require_callback(predicate)
        for value in self.to_list():
            if predicate(value):
                return True
        return False

    def every(self, predicate: Callable[[Any], bool]) -> bool:
        """检查是否所有值都满足 ``predicate(value)``。

        会对每个值都调用一次谓词，空链表返回 True。
        """
        self._require_callback(predicate)
        snapshot = self.to_list()
        passed = sum(1 for value in snapshot if predicate(value))
        return passed == len(snapshot)

    def filter(self, predicate: Callable[[Any], bool]) -> LinkedList:
        """返回满足 ``predicate(value)`` 的值组成的新链表，顺序不变。"""
        self._require_callback(predicate)
        filtered = type(self)()
        filtered._append_all(
            copy_value(value) for value in self.to_list() if predicate(value)
        )
        return filtered

    def concat(self, other: LinkedList) -> LinkedList:
        """返回包含本链表全部值、随后是 ``other`` 全部值的新链表。

        两个原链表都不会被修改。

        异常:
            TypeMismatchError: other 不是 LinkedList
        """
        if not isinstance(other, LinkedList):
            raise TypeMismatchError(
                f"只能与 LinkedList 拼接，得到: {type(other).__name__}"
            )
        combined = type(self)()
        combined._append_all(copy_value(value) for value in self)
        combined._append_all(copy_value(value) for value in other)
        return combined

    def reverse(self) -> LinkedList:
        """返回顺序相反的新链表，原链表保持不变。

        时间复杂度: O(n) - 逐个插入新链表头部
        """
        reversed_list = type(self)()
        for value in self:
            reversed_list.push_front(copy_value(value))
        return reversed_list

    def join(self, delimiter: str) -> str:
        """把每个值编码为 JSON 后用 ``delimiter`` 连接，末尾不带分隔符。

        异常:
            TypeMismatchError: delimiter 不是字符串

        示例:
            >>> LinkedList(1, "a", {"k": 2}).join(", ")
            '1, "a", {"k": 2}'
        """
        if not isinstance(delimiter, str):
            raise TypeMismatchError(
                f"分隔符必须是字符串，得到: {type(delimiter).__name__}"
            )
        return delimiter.join(serialize_value(value) for value in self)

    def render(self) -> str:
        """返回 ``v1 -> v2 -> ... -> /`` 形式的诊断文本。"""
        settings = get_settings()
        parts = [render_value(value, settings.indent) + settings.arrow for value in self]
        return "".join(parts) + settings.terminator

    def display(self, stream: Optional[TextIO] = None) -> None:
        """把 ``render()`` 的结果作为一行写入 ``stream``（默认标准输出）。"""
        target = stream if stream is not None else sys.stdout
        target.write(self.render() + "\n")

    print = display

    def execute(self, *args, **kwargs) -> list:
        """返回链表的列表表示。"""
        return self.to_list()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, LinkedList):
            return NotImplemented
        return self._length == other._length and all(
            left == right for left, right in zip(self, other)
        )

    def __repr__(self) -> str:
        return f"{type(self).__name__}({', '.join(repr(value) for value in self)})"

    # 内部辅助 -------------------------------------------------------------
    def _append_all(self, values: Iterable[Any]) -> None:
        # 只走到末尾一次，之后沿新节点追加
        tail = self.head
        while tail is not None and tail.next is not None:
            tail = tail.next
        for value in values:
            node = Node(value)
            if tail is None:
                self.head = node
            else:
                tail.next = node
            tail = node
            self._length += 1

    def _node_at(self, position: int) -> Node:
        current = self.head
        for _ in range(position):
            current = current.next
        return current

    @staticmethod
    def _check_position(position: Any, upper: int) -> None:
        if not isinstance(position, int) or isinstance(position, bool):
            raise TypeMismatchError(f"位置必须是整数，得到: {type(position).__name__}")
        if position < 0 or position > upper:
            raise OutOfRangeError(f"位置 {position} 超出范围 [0, {upper}]")

    @staticmethod
    def _require_callback(callback: Any) -> None:
        if callback is None:
            raise MissingCallbackError("未传入回调函数")
        if not callable(callback):
            raise TypeMismatchError(
                f"回调必须是可调用对象，得到: {type(callback).__name__}"
            )
