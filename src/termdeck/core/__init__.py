"""Core module - id allocation and logical clock"""

from .ids import IdGenerator, IdKind, is_group_id, make_id, short_id

__all__ = [
    "IdGenerator",
    "IdKind",
    "make_id",
    "is_group_id",
    "short_id",
]
