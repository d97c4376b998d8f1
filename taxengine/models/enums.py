"""Enumerations for the tax engine."""

from enum import StrEnum


class FilingStatus(StrEnum):
    SINGLE = "single"
    MFJ = "married_filing_jointly"
    MFS = "married_filing_separately"
    HOH = "head_of_household"


class HoldingPeriod(StrEnum):
    SHORT_TERM = "short_term"
    LONG_TERM = "long_term"


class LotMethod(StrEnum):
    FIFO = "fifo"
    LIFO = "lifo"
    SPECIFIC_ID = "specific_id"


class QuarterStatus(StrEnum):
    UPCOMING = "upcoming"
    PAID = "paid"
    OVERDUE = "overdue"


class UnderpaymentRisk(StrEnum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
