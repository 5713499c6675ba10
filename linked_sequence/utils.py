"""链表实现中使用的值处理辅助函数。

本模块提供了节点值交换、值复制，以及把任意值渲染成文本
（诊断输出）和 JSON（``join`` 序列化）的工具函数。
"""
import copy
import dataclasses
import json
from collections.abc import Mapping
from typing import Any, Set


def swap_values(left: Any, right: Any) -> None:
    """原地交换两个节点存储的值，节点之间的链接保持不变。

    排序算法通过它交换相邻节点的值，而不是重新连接节点。

    参数:
        left: 第一个节点
        right: 第二个节点

    时间复杂度: O(1) - 常数时间操作
    空间复杂度: O(1) - 不需要额外空间
    """
    left.value, right.value = right.value, left.value


def copy_value(value: Any) -> Any:
    """返回值的独立深拷贝，派生出的新链表不与原链表共享可变记录。"""
    return copy.deepcopy(value)


def is_composite(value: Any) -> bool:
    """判断值是否为复合记录（映射、列表、元组或 dataclass 实例）。"""
    if isinstance(value, (Mapping, list, tuple)):
        return True
    return dataclasses.is_dataclass(value) and not isinstance(value, type)


def _json_key(key: Any) -> Any:
    if key is None or isinstance(key, (str, int, float, bool)):
        return key
    return str(key)


def _to_json_tree(value: Any, active: Set[int]) -> Any:
    # active 保存当前递归路径上的容器，遇到环时输出 "..."
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        value = dataclasses.asdict(value)
    if isinstance(value, (Mapping, list, tuple, set, frozenset)):
        marker = id(value)
        if marker in active:
            return "..."
        active.add(marker)
        try:
            if isinstance(value, Mapping):
                return {_json_key(key): _to_json_tree(item, active) for key, item in value.items()}
            return [_to_json_tree(item, active) for item in value]
        finally:
            active.discard(marker)
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    return str(value)


def serialize_value(value: Any, indent: Any = None) -> str:
    """把值编码为 JSON 文本。

    字符串会带引号，与 ``join`` 的输出格式一致。编码前先把值整理成
    JSON 能表示的结构：非文本的映射键和无法编码的值都转为 ``str``，
    集合转为列表，dataclass 转为字典。

    参数:
        value: 要编码的值
        indent: 传给 ``json.dumps`` 的缩进，None 表示单行

    返回:
        str: JSON 文本

    示例:
        >>> serialize_value({"a": 1})
        '{"a": 1}'
        >>> serialize_value({(1, 2): "x"})
        '{"(1, 2)": "x"}'
    """
    return json.dumps(_to_json_tree(value, set()), indent=indent, ensure_ascii=False)


def render_value(value: Any, indent: int = 2) -> str:
    """返回值的可读文本形式。

    复合记录渲染为带缩进的 JSON，其余值使用 ``str``。
    """
    if is_composite(value):
        return serialize_value(value, indent=indent)
    return str(value)
