"""
Event lifecycle status

Only ACTIVE events accept orders. CANCELLED and COMPLETED are terminal from the
order service's point of view.
"""

from enum import StrEnum


class EventStatus(StrEnum):
    ACTIVE = 'ACTIVE'
    CANCELLED = 'CANCELLED'
    COMPLETED = 'COMPLETED'

    @classmethod
    def _missing_(cls, value: object) -> 'EventStatus | None':
        if isinstance(value, str):
            for member in cls:
                if member.value == value.upper():
                    return member
        return None
