"""文件大小解析工具

使用示例:
    from ygrid.utils import parse_file_size

    size = parse_file_size("10MB")   # 10485760
    size = parse_file_size("512KB")  # 524288
"""

from typing import Union


# 单位转换表（按长度降序排列）
SIZE_UNITS = [
    ('TB', 1024 ** 4),
    ('GB', 1024 ** 3),
    ('MB', 1024 ** 2),
    ('KB', 1024),
    ('B', 1),
]

# 单位别名
SIZE_UNIT_ALIASES = {
    'T': 'TB',
    'G': 'GB',
    'M': 'MB',
    'K': 'KB',
}


def parse_file_size(size_str: Union[str, int, float]) -> int:
    """解析文件大小字符串为字节数

    Raises:
        ValueError: 格式无效
    """
    if isinstance(size_str, (int, float)):
        return int(size_str)

    size_str = str(size_str).strip().upper()
    if not size_str:
        raise ValueError("文件大小字符串不能为空")

    for alias, unit in SIZE_UNIT_ALIASES.items():
        if size_str.endswith(alias) and not size_str.endswith(unit):
            size_str = size_str[:-len(alias)] + unit
            break

    for unit, multiplier in SIZE_UNITS:
        if size_str.endswith(unit):
            number_str = size_str[:-len(unit)].strip()
            try:
                return int(float(number_str) * multiplier)
            except ValueError:
                raise ValueError(f"无法解析文件大小: {size_str}")

    try:
        return int(float(size_str))
    except ValueError:
        raise ValueError(f"无法解析文件大小: {size_str}")
