from traffic_billing.models.session import SessionLocal


def get_db_session():
    # Session for work running outside a request, e.g. the huey sweep
    db_session = SessionLocal()
    return db_session
