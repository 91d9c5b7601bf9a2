"""表格组件接口

GridField 本身只负责组装，列、数据、路由、HTML 属性都由组件提供：

- ColumnProvider: 增加列并渲染单元格
- DataManipulator: 在渲染前变换数据列表（排序、分页）
- URLHandler: 声明组件处理的路由
- HTMLProvider: 向表格外层追加 class、属性和片段

一个组件可以同时实现多个接口。
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List


class GridFieldComponent(ABC):
    """表格组件基类"""


class ColumnProvider(GridFieldComponent):
    """列提供者"""

    @abstractmethod
    def augment_columns(self, grid, context, columns: List[str]) -> None:
        """就地修改列名列表"""

    @abstractmethod
    def get_columns_handled(self, grid) -> List[str]:
        """本组件负责渲染的列名"""

    @abstractmethod
    def get_column_content(self, grid, context, record: Any, column: str) -> Any:
        """单元格内容（str 会被转义，Markup 原样输出）"""

    def get_column_attributes(self, grid, context, record: Any, column: str) -> Dict[str, Any]:
        """单元格 HTML 属性"""
        return {}

    def get_column_metadata(self, grid, column: str) -> Dict[str, Any]:
        """列元数据（如表头标题）"""
        return {}


class DataManipulator(GridFieldComponent):
    """数据变换者"""

    @abstractmethod
    def get_manipulated_data(self, grid, context, data_list):
        """返回变换后的新列表（不修改传入的列表）"""


class URLHandler(GridFieldComponent):
    """路由处理者"""

    @abstractmethod
    def get_url_handlers(self, grid) -> Dict[str, str]:
        """路由规则到处理方法名的映射

        规则格式为 "METHOD path"，path 相对于表格的 base_url，如:
            {"POST reorder": "handle_reorder", "GET item/{id}": "handle_record_link"}

        处理方法签名: handler(grid, context, request) -> str | dict | Response
        """


@dataclass
class HTMLFragments:
    """追加到表格外层的 HTML 内容

    属性:
        classes: 外层 class
        attributes: 外层属性（如 data-url-reorder）
        before: 表格前的片段
        after: 表格后的片段
    """
    classes: List[str] = field(default_factory=list)
    attributes: Dict[str, Any] = field(default_factory=dict)
    before: List[Any] = field(default_factory=list)
    after: List[Any] = field(default_factory=list)

    def merge(self, other: "HTMLFragments") -> "HTMLFragments":
        return HTMLFragments(
            classes=self.classes + [c for c in other.classes if c not in self.classes],
            attributes={**self.attributes, **other.attributes},
            before=self.before + other.before,
            after=self.after + other.after,
        )


class HTMLProvider(GridFieldComponent):
    """HTML 提供者"""

    @abstractmethod
    def get_html_fragments(self, grid, context) -> HTMLFragments:
        """本组件追加到表格外层的内容"""
