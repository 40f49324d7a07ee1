from datetime import datetime
from enum import Enum
from typing import List, Optional

from sqlalchemy import (
    String,
    Text,
    Float,
    Integer,
    DateTime,
    ForeignKey,
    CheckConstraint,
    Enum as SAEnum,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from skincare_ai.db.session import Base, utcnow
from skincare_ai.utils.encoding import JSONEncodedList


class Severity(str, Enum):
    LOW = "Low"
    MEDIUM = "Medium"
    HIGH = "High"


class Analysis(Base):
    __tablename__ = "analyses"
    __table_args__ = (
        CheckConstraint("confidence >= 0 AND confidence <= 100", name="ck_analyses_confidence_range"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    account_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("accounts.id"), index=True, nullable=False
    )
    image_ref: Mapped[str] = mapped_column(String(1024), nullable=False)
    disease: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    confidence: Mapped[float] = mapped_column(Float, nullable=False)
    severity: Mapped[Severity] = mapped_column(
        SAEnum(
            Severity,
            name="analysis_severity",
            native_enum=False,
            values_callable=lambda enum_cls: [m.value for m in enum_cls],
        ),
        nullable=False,
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    symptoms: Mapped[List[str]] = mapped_column(JSONEncodedList, nullable=False, default=list)
    recommendations: Mapped[List[str]] = mapped_column(JSONEncodedList, nullable=False, default=list)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=utcnow, index=True)

    account = relationship("Account", back_populates="analyses")
    # Medications have no lifecycle of their own: always loaded with the parent.
    medications: Mapped[List["Medication"]] = relationship(
        "Medication",
        back_populates="analysis",
        cascade="all, delete-orphan",
        lazy="selectin",
        order_by="Medication.id",
    )


class Medication(Base):
    __tablename__ = "medications"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    analysis_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("analyses.id", ondelete="CASCADE"), index=True, nullable=False
    )
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    dosage: Mapped[str] = mapped_column(String(255), nullable=False)
    frequency: Mapped[str] = mapped_column(String(255), nullable=False)

    analysis: Mapped["Analysis"] = relationship("Analysis", back_populates="medications")
