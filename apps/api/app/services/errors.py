class ShiftRejection(Exception):
    """Business-rule rejection of a kitchen shift registration (HTTP 409)."""

    code = "SHIFT_REJECTED"
    status_code = 409

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DuplicateRegistration(ShiftRejection):
    code = "DUPLICATE_REGISTRATION"

    def __init__(self):
        super().__init__("You are already registered for this shift")


class SlotFull(ShiftRejection):
    code = "SLOT_FULL"

    def __init__(self, capacity: int):
        super().__init__(f"This shift is full. {capacity} volunteers are already registered.")
        self.capacity = capacity


class ManagerSlotTaken(ShiftRejection):
    code = "MANAGER_SLOT_TAKEN"

    def __init__(self):
        super().__init__("This shift already has a manager. Please register as a volunteer instead.")


class ManagerRequiredFirst(ShiftRejection):
    code = "MANAGER_REQUIRED_FIRST"

    def __init__(self):
        super().__init__(
            "A shift manager must be assigned first before volunteers can register. "
            "Please check back later or consider becoming the shift manager!"
        )


class RegistrationNotFound(Exception):
    code = "NOT_FOUND"
    status_code = 404

    def __init__(self, message: str = "Shift not found"):
        super().__init__(message)
        self.message = message
