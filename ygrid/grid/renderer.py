"""模板渲染

表格及组件的 HTML 都通过 GridRenderer 渲染。渲染器作为依赖传给 GridField，
测试或业务项目可以换用自己的 Jinja2 Environment（如覆盖模板目录）。
"""

from typing import Any, Optional

from jinja2 import Environment, PackageLoader, select_autoescape
from markupsafe import Markup


def create_environment() -> Environment:
    """默认模板环境：ygrid/templates，HTML 自动转义"""
    return Environment(
        loader=PackageLoader("ygrid", "templates"),
        autoescape=select_autoescape(["html"]),
        trim_blocks=True,
        lstrip_blocks=True,
    )


class GridRenderer:
    """表格模板渲染器

    使用示例:
        renderer = GridRenderer()
        html = renderer.render("orderable_rows_drag_handle.html", record_id=3)

        # 覆盖模板目录
        env = Environment(loader=ChoiceLoader([FileSystemLoader("templates"), PackageLoader("ygrid")]))
        renderer = GridRenderer(env)
    """

    def __init__(self, environment: Optional[Environment] = None):
        self.environment = environment or create_environment()

    def render(self, template_name: str, **data: Any) -> Markup:
        """渲染模板，返回可直接嵌入其他模板的 Markup"""
        template = self.environment.get_template(template_name)
        return Markup(template.render(**data))
