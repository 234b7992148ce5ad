from enum import StrEnum


class OrderStatus(StrEnum):
    PENDING = 'PENDING'
    COMPLETED = 'COMPLETED'
    FAILED = 'FAILED'

    @classmethod
    def _missing_(cls, value: object) -> 'OrderStatus | None':
        # Accept 'completed' / 'Completed' from clients
        if isinstance(value, str):
            for member in cls:
                if member.value == value.upper():
                    return member
        return None
