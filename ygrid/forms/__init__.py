"""编辑表单结构模块"""

from .fields import FormField, Tab, TabSet, FieldList, CMSFieldsMixin

__all__ = [
    "FormField",
    "Tab",
    "TabSet",
    "FieldList",
    "CMSFieldsMixin",
]
