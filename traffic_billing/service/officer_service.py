import logging
from sqlalchemy.orm import Session

from traffic_billing.exception_handler.errors import InactiveOfficer
from traffic_billing.models.officer import Officer

logger = logging.getLogger(__name__)


class OfficerService:

    @staticmethod
    def ensure_officer_active(db: Session, officer_id: int) -> Officer:
        """
        Raise ``InactiveOfficer`` unless ``officer_id`` names an active officer.
        An unknown officer is never eligible to issue a citation.
        """
        officer = Officer.get_by_id(db, officer_id)
        if officer is None:
            logger.warning(f"Officer: {officer_id} - not found, citation refused")
            raise InactiveOfficer(f"Officer {officer_id} not found")
        if not officer.active_status:
            logger.warning(f"Officer: {officer_id} / Badge: {officer.badge_number} - inactive, citation refused")
            raise InactiveOfficer("Cannot issue citation with inactive officer")
        return officer
