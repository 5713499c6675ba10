"""链表容器抛出的异常类型。

每个异常同时继承 :class:`SequenceError` 和最接近的内置异常，
调用方既可以统一捕获 ``SequenceError``，也可以按 ``IndexError``、
``TypeError`` 等常规方式处理。
"""
from __future__ import annotations


class SequenceError(Exception):
    """链表操作失败的基类。"""


class OutOfRangeError(SequenceError, IndexError):
    """位置参数超出当前操作允许的范围。"""


class EmptyContainerError(SequenceError, IndexError):
    """操作需要至少一个元素，但链表为空。"""


class MissingCallbackError(SequenceError, TypeError):
    """未传入必需的回调函数或谓词。"""


class MissingValueError(SequenceError, ValueError):
    """未传入必需的查找值。"""


class TypeMismatchError(SequenceError, TypeError):
    """参数类型与操作不兼容，例如与非链表拼接。"""


class UnsupportedSourceError(SequenceError, TypeError):
    """批量构建的输入既不是序列也不是映射。"""
