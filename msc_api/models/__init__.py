# Importing the package registers every table on Base.metadata
from msc_api.models.account import Account, Role, Gender  # noqa: F401
from msc_api.models.event import Event, EventType, EventStatus, EventRestriction  # noqa: F401
from msc_api.models.registration import EventRegistration, AttendanceStatus  # noqa: F401
from msc_api.models.setting import Setting, MembershipSequence  # noqa: F401
from msc_api.models.officer_log import OfficerActionLog, OfficerAction  # noqa: F401
