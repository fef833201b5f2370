from enum import Enum


class CitationStatus(str, Enum):
    ISSUED = "issued"
    PAID = "paid"
    DISPUTED = "disputed"
    DISMISSED = "dismissed"
    WARRANT = "warrant"


# statuses that accept partial payments
PAYABLE_CITATION_STATUSES = (
    CitationStatus.ISSUED.value,
    CitationStatus.DISPUTED.value,
)


class WarrantStatus(str, Enum):
    ACTIVE = "active"
    SERVED = "served"
    RECALLED = "recalled"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CREDIT_CARD = "credit_card"
    DEBIT_CARD = "debit_card"
    CHECK = "check"
    ONLINE = "online"


class ErrorCode(str, Enum):
    DRIVER_NOT_FOUND = "DriverNotFound"
    VEHICLE_NOT_FOUND = "VehicleNotFound"
    VIOLATION_TYPE_NOT_FOUND = "ViolationTypeNotFound"
    INACTIVE_OFFICER = "InactiveOfficer"
    CITATION_NOT_FOUND = "CitationNotFound"
    INVALID_CITATION_STATE = "InvalidCitationState"
    OVERPAYMENT_REJECTED = "OverpaymentRejected"
    DUPLICATE_CITATION_NUMBER = "DuplicateCitationNumber"
    CONSTRAINT_VIOLATION = "ConstraintViolation"
    WARRANT_NOT_FOUND = "WarrantNotFound"
    INVALID_WARRANT_STATE = "InvalidWarrantState"
