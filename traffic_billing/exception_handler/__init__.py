from traffic_billing.exception_handler.exception_handler import billing_exception_handler, custom_exception_handler
from traffic_billing.exception_handler.errors import (
    TrafficBillingError,
    DriverNotFound,
    VehicleNotFound,
    ViolationTypeNotFound,
    InactiveOfficer,
    CitationNotFound,
    InvalidCitationState,
    OverpaymentRejected,
    DuplicateCitationNumber,
    ConstraintViolation,
    WarrantNotFound,
    InvalidWarrantState,
)
