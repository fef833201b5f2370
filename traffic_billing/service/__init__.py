from traffic_billing.service.officer_service import OfficerService
from traffic_billing.service.warrant_service import WarrantService
from traffic_billing.service.citation_service import CitationService
from traffic_billing.service.payment_service import PaymentService
from traffic_billing.service.report_service import ReportService, PointsService
