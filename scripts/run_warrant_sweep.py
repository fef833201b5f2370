import os
import sys
from dotenv import load_dotenv

load_dotenv()

# AS_OF = '2026-10-19 02:00:00'
AS_OF = os.getenv("SWEEP_AS_OF")
LIMIT = int(os.getenv("SWEEP_LIMIT", 0)) or None

DATABASE_CONN_STR = os.getenv("SQLALCHEMY_DATABASE_URI")
assert DATABASE_CONN_STR is not None, "Please set env variable SQLALCHEMY_DATABASE_URI"


if __name__ == "__main__":
    sys.path.append(os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

    from traffic_billing.models.context_session import get_db_session
    from traffic_billing.service.warrant_service import WarrantService
    from traffic_billing.utils.common import DateTimeUtils

    print("Connecting to database...")
    db_session = get_db_session()
    print("Connected to database")

    try:
        result = WarrantService.sweep_overdue_citations(db_session,
                                                        DateTimeUtils.parse_reference_time(AS_OF),
                                                        LIMIT)
        print(f"Total {result.candidates} candidate citations found")
        for escalated in result.escalated:
            print(f"Warrant {escalated.warrant_id} issued for citation {escalated.citation_number}: "
                  f"{escalated.amount_due}")
        for failed in result.failed:
            print(f"Citation id {failed.citation_id} failed: {failed.error}")
        print(f"Escalated {len(result.escalated)}, skipped {result.skipped}, failed {len(result.failed)}")
    finally:
        db_session.close()
        print("Database connection closed")
