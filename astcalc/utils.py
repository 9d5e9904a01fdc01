import enum


class PrintableEnum(enum.Enum):
    def __str__(self) -> str:
        return self.name

    __repr__ = __str__


def truthy(v: float) -> bool:
    return v != 0.0


def format_number(v: float) -> str:
    return f"{v:g}"


def quoted(s: str) -> str:
    """Double-quote s, escaping embedded quotes and backslashes"""
    escaped = s.replace("\\", "\\\\").replace('"', '\\"')
    return f'"{escaped}"'
