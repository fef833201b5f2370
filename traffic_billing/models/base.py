from traffic_billing.models.base_class import Base  # noqa
from traffic_billing.models.driver import Driver  # noqa
from traffic_billing.models.vehicle import Vehicle  # noqa
from traffic_billing.models.officer import Officer  # noqa
from traffic_billing.models.violation_type import ViolationType  # noqa
from traffic_billing.models.payment import Payment  # noqa
from traffic_billing.models.citation import Citation  # noqa
from traffic_billing.models.driver_point import DriverPoint  # noqa
from traffic_billing.models.warrant import Warrant  # noqa
