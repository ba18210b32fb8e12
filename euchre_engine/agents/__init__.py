from .base import EuchreAgent
from .random_agent import RandomEuchreAgent

__all__ = [
    "EuchreAgent",
    "RandomEuchreAgent",
]
