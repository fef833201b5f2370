from fastapi import status

from traffic_billing.utils.enum import ErrorCode


class TrafficBillingError(Exception):
    """Base for every error surfaced by the citation, payment and warrant services."""

    status_code = status.HTTP_400_BAD_REQUEST
    error_code = ErrorCode.CONSTRAINT_VIOLATION

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DriverNotFound(TrafficBillingError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = ErrorCode.DRIVER_NOT_FOUND


class VehicleNotFound(TrafficBillingError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = ErrorCode.VEHICLE_NOT_FOUND


class ViolationTypeNotFound(TrafficBillingError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = ErrorCode.VIOLATION_TYPE_NOT_FOUND


class InactiveOfficer(TrafficBillingError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error_code = ErrorCode.INACTIVE_OFFICER


class CitationNotFound(TrafficBillingError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = ErrorCode.CITATION_NOT_FOUND


class InvalidCitationState(TrafficBillingError):
    status_code = status.HTTP_409_CONFLICT
    error_code = ErrorCode.INVALID_CITATION_STATE


class OverpaymentRejected(TrafficBillingError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error_code = ErrorCode.OVERPAYMENT_REJECTED


class DuplicateCitationNumber(TrafficBillingError):
    status_code = status.HTTP_409_CONFLICT
    error_code = ErrorCode.DUPLICATE_CITATION_NUMBER


class ConstraintViolation(TrafficBillingError):
    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    error_code = ErrorCode.CONSTRAINT_VIOLATION


class WarrantNotFound(TrafficBillingError):
    status_code = status.HTTP_404_NOT_FOUND
    error_code = ErrorCode.WARRANT_NOT_FOUND


class InvalidWarrantState(TrafficBillingError):
    status_code = status.HTTP_409_CONFLICT
    error_code = ErrorCode.INVALID_WARRANT_STATE
