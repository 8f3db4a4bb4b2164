from enum import Enum
from pydantic import BaseModel, Field, field_validator
from typing import Optional, List, Any, Dict

class CallOutcome(str, Enum):
    ANSWERED = "answered"
    NO_ANSWER = "no_answer"
    REJECTED = "rejected"

class ChangeType(str, Enum):
    INSERT = "insert"
    UPDATE = "update"
    DELETE = "delete"

PHONE_NUMBERS_TABLE = "phone_numbers"
HISTORY_TABLE = "phone_calls_history"
FEED_TABLES = (PHONE_NUMBERS_TABLE, HISTORY_TABLE)

# Largest value a SQLite INTEGER column holds
MAX_ROW_ID = 2**63 - 1

class PhoneNumberCreate(BaseModel):
    phone_number: str
    name: Optional[str] = None

    @field_validator('phone_number')
    @classmethod
    def strip_phone_number(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("phone_number cannot be empty")
        return v

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

class PhoneNumberBulkCreate(BaseModel):
    numbers: List[PhoneNumberCreate] = Field(min_length=1)

class PhoneNumber(BaseModel):
    id: int
    phone_number: str
    name: Optional[str] = None
    status: Optional[CallOutcome] = None
    assigned_to: Optional[str] = None
    assigned_at: Optional[str] = None
    called_at: Optional[str] = None
    created_at: str

class CompleteRequest(BaseModel):
    outcome: CallOutcome

class CallHistoryEntry(BaseModel):
    id: int
    phone_number_id: int
    phone_number: str
    name: Optional[str] = None
    operator_id: str
    status: CallOutcome
    called_at: str

class OperatorCreate(BaseModel):
    name: str
    is_admin: bool = False

    @field_validator('name')
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty")
        return v

class Operator(BaseModel):
    id: str
    name: str
    is_admin: bool = False
    created_at: str

class ChangeEvent(BaseModel):
    table: str
    type: ChangeType
    row: Dict[str, Any]
    occurred_at: str
