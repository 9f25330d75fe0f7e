"""
Database models
"""
from .user import User
from .session import Session
from .contract import Contract
from .subgrant import Subgrant

__all__ = [
    "User",
    "Session",
    "Contract",
    "Subgrant",
]
