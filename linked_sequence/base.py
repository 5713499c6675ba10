from abc import ABC, abstractmethod
from typing import Any, Iterator, List


class Container(ABC):
    """所有顺序容器的基类。

    定义了容器的通用接口：元素个数、正向迭代和快照。
    具体的容器实现需要继承这个类并实现下列抽象方法。

    子类必须实现:
        __len__: 返回容器中的元素个数
        __iter__: 按顺序惰性地产出每个值
        execute: 返回容器当前状态的快照
    """

    @abstractmethod
    def __len__(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def __iter__(self) -> Iterator[Any]:
        raise NotImplementedError

    @abstractmethod
    def execute(self, *args, **kwargs) -> Any:
        """返回容器当前状态的快照。

        这是一个抽象方法，必须在子类中实现。

        返回:
            Any: 快照，类型取决于具体容器

        异常:
            NotImplementedError: 如果子类没有实现此方法
        """
        raise NotImplementedError

    def is_empty(self) -> bool:
        """检查容器是否为空。

        返回:
            bool: 如果容器为空返回 True，否则返回 False
        """
        return len(self) == 0

    def to_list(self) -> List[Any]:
        """将容器转换为普通列表。

        返回:
            List[Any]: 按顺序包含所有值的新列表

        时间复杂度: O(n) - 需要遍历整个容器
        """
        return list(iter(self))
