# skincare_ai/schemas/analysis.py
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, constr

from skincare_ai.models.analysis import Severity


# ---------- Prediction result (produced by the external classifier) ----------
class MedicationIn(BaseModel):
    name: str
    dosage: str
    frequency: str


class PredictionResult(BaseModel):
    disease: str
    confidence: float = Field(ge=0, le=100)
    description: Optional[str] = None
    symptoms: List[str] = Field(default_factory=list)
    medications: List[MedicationIn] = Field(default_factory=list)
    recommendations: List[str] = Field(default_factory=list)
    severity: Severity


class AnalysisCreate(BaseModel):
    image_ref: constr(strip_whitespace=True, min_length=1, max_length=1024)
    result: PredictionResult


# ---------- Stored records ----------
class MedicationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    dosage: str
    frequency: str


class AnalysisOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    account_id: str
    image_ref: str
    disease: str
    confidence: float
    severity: Severity
    description: Optional[str] = None
    symptoms: List[str]
    recommendations: List[str]
    medications: List[MedicationOut]
    created_at: datetime


class AdminAnalysisOut(AnalysisOut):
    user_name: str
    user_email: str


# ---------- Admin reporting ----------
class DiseaseCount(BaseModel):
    disease: str
    count: int


class AdminStatsOut(BaseModel):
    total_users: int
    active_users: int
    total_analyses: int
    disease_distribution: List[DiseaseCount]
    accuracy_rate: float
    accuracy_rate_is_placeholder: bool = True
