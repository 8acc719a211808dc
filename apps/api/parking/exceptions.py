# apps/api/parking/exceptions.py

from core.exceptions import ConflictException, NotFoundException


class LotNotFoundException(NotFoundException):
    error_code = "LOT_NOT_FOUND"

    def __init__(self, lookup: str):
        super().__init__(f"Parking lot {lookup} not found")
        self.lookup = lookup


class SessionNotFoundException(NotFoundException):
    error_code = "SESSION_NOT_FOUND"

    def __init__(self, session_id: int):
        super().__init__(f"Parking session {session_id} not found")
        self.session_id = session_id


class LotExhaustedException(ConflictException):
    """No space left in the lot at check or reservation time."""

    error_code = "LOT_FULL"

    def __init__(self, lot_code: str):
        super().__init__(f"No available parking spaces at {lot_code}")
        self.lot_code = lot_code


class LotCapacityExceededException(ConflictException):
    error_code = "LOT_CAPACITY_EXCEEDED"

    def __init__(self, lot_code: str):
        super().__init__(f"Parking lot {lot_code} is already at full capacity")
        self.lot_code = lot_code


class InvalidTransitionException(ConflictException):
    """The session's current phase does not allow the requested operation."""

    error_code = "INVALID_SESSION_TRANSITION"

    def __init__(self, session_id: int, action: str, phase: str):
        super().__init__(f"Cannot {action} for session {session_id} in phase {phase}")
        self.session_id = session_id
        self.action = action
        self.phase = phase
