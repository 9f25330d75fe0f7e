"""
Subgrant model for DBE subcontracts, supply and manufacturing awards
"""
from sqlalchemy import Column, Integer, String, ForeignKey, DateTime, Date, Boolean, Numeric, CheckConstraint
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from ..core.database import Base
from .contract import CURRENT_SCHEMA_VERSION, generate_uuid


class SubgrantContractType(str, enum.Enum):
    """Kind of award made to the DBE firm"""
    SUBCONTRACT = "Subcontract"
    SUPPLIER = "Supplier"
    MANUFACTURER = "Manufacturer"


class DBEEthnicity(str, enum.Enum):
    """Ethnicity buckets used by the DBE participation report, in report order"""
    BLACK_AMERICAN = "Black American"
    HISPANIC_AMERICAN = "Hispanic American"
    NATIVE_AMERICAN = "Native American"
    ASIAN_PACIFIC_AMERICAN = "Asian-Pacific American"
    SUBCONTINENT_ASIAN_AMERICAN = "Subcontinent Asian American"
    NON_MINORITY = "Non-Minority"


class DBEGender(str, enum.Enum):
    FEMALE = "Female"
    MALE = "Male"


ETHNICITY_GENDER_SEPARATOR = "/"

# Canonical "<Ethnicity>/<Gender>" categories, e.g. "Black American/Female"
ETHNICITY_GENDER_CHOICES = [
    f"{ethnicity.value}{ETHNICITY_GENDER_SEPARATOR}{gender.value}"
    for ethnicity in DBEEthnicity
    for gender in DBEGender
]


class Subgrant(Base):
    """Award from a prime contractor to a DBE firm"""
    __tablename__ = "subgrants"
    __table_args__ = (
        CheckConstraint("amount >= 0", name="ck_subgrants_amount_non_negative"),
    )

    id = Column(String(36), primary_key=True, default=generate_uuid)
    contract_id = Column(String(36), ForeignKey("contracts.id", ondelete="CASCADE"), nullable=False, index=True)

    # Firm details
    dbe_firm_name = Column(String(255), nullable=False)
    naics_code = Column(String(6), nullable=True)  # six digits; null only on version 1 imports
    contract_type = Column(String(50), default=SubgrantContractType.SUBCONTRACT.value, nullable=False)
    certified_dbe = Column(Boolean, default=False, nullable=False)  # certified at time of record
    ethnicity_gender = Column(String(100), nullable=True)

    # Award
    amount = Column(Numeric(14, 2), nullable=False)
    award_date = Column(Date, nullable=True)

    # Metadata
    schema_version = Column(Integer, default=CURRENT_SCHEMA_VERSION, nullable=False)
    created_by = Column(Integer, ForeignKey("users.id", ondelete="SET NULL"), nullable=True, index=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now(), nullable=False)

    # Relationships
    contract = relationship("Contract", back_populates="subgrants")

    def __repr__(self):
        return f"<Subgrant(id={self.id}, firm={self.dbe_firm_name}, amount={self.amount})>"
