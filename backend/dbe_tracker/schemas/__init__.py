"""
Pydantic schemas for request/response validation
"""
from .auth import UserRegister, UserLogin, RefreshRequest, Token, UserResponse, SessionResponse
from .contract import (
    ContractCreate,
    ContractUpdate,
    ContractEdit,
    FinalReportUpdate,
    ContractResponse,
    ContractList,
    ContractFilter,
)
from .subgrant import SubgrantCreate, SubgrantUpdate, SubgrantEdit, CertifiedDBEUpdate, SubgrantResponse
from .report import ComplianceReport, EthnicityGenderReport

__all__ = [
    "UserRegister",
    "UserLogin",
    "RefreshRequest",
    "Token",
    "UserResponse",
    "SessionResponse",
    "ContractCreate",
    "ContractUpdate",
    "ContractEdit",
    "FinalReportUpdate",
    "ContractResponse",
    "ContractList",
    "ContractFilter",
    "SubgrantCreate",
    "SubgrantUpdate",
    "SubgrantEdit",
    "CertifiedDBEUpdate",
    "SubgrantResponse",
    "ComplianceReport",
    "EthnicityGenderReport",
]
