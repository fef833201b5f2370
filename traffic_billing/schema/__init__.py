from traffic_billing.schema.payment_schema import ProcessPaymentSchema, PaymentSchema, PaymentResultSchema
from traffic_billing.schema.warrant_schema import (WarrantSchema, EscalatedCitation, FailedEscalation,
                                                   WarrantSweepResultSchema)
from traffic_billing.schema.citation_schema import (IssueCitationSchema, CitationSchema, PointGrantSchema,
                                                    CitationDetailSchema)
from traffic_billing.schema.report_schema import OverdueCitationRow, DriverPointTotalSchema
