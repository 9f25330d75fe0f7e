"""
Contract model for prime contracts
"""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Date, Boolean, Numeric, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import uuid
from ..core.database import Base

# Bumped whenever a field is added; rows imported from older exports keep their version
CURRENT_SCHEMA_VERSION = 2


def generate_uuid() -> str:
    return str(uuid.uuid4())


class Contract(Base):
    """Prime contract awarded by the aeronautics division"""
    __tablename__ = "contracts"
    __table_args__ = (
        CheckConstraint("original_amount >= 0", name="ck_contracts_original_amount_non_negative"),
        CheckConstraint("dbe_percentage >= 0 AND dbe_percentage <= 100", name="ck_contracts_dbe_percentage_range"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)

    # Identification
    tad_project_number = Column(String(100), nullable=False, index=True)
    contract_number = Column(String(100), nullable=False, index=True)
    prime_contractor = Column(String(255), nullable=False)

    # Money
    original_amount = Column(Numeric(14, 2), nullable=False)
    dbe_percentage = Column(Numeric(5, 2), default=0, nullable=False)  # DBE goal, 0-100

    # Dates and status
    award_date = Column(Date, nullable=True)
    report_date = Column(Date, nullable=True)
    final_report = Column(Boolean, default=False, nullable=False)  # True once the contract has closed out

    # Metadata
    schema_version = Column(Integer, default=CURRENT_SCHEMA_VERSION, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    creator = relationship("User", back_populates="contracts")
    subgrants = relationship(
        "Subgrant",
        back_populates="contract",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Subgrant.created_at",
    )

    def __repr__(self):
        return f"<Contract(id={self.id}, contract_number={self.contract_number}, prime={self.prime_contractor})>"
