"""Journey plan domain exceptions."""

from journey_planner.services.exceptions import ConflictError, NotFoundError, ValidationError


class JourneyPlanNotFound(NotFoundError):
    """Journey plan not found."""

    def __init__(self, number: int):
        self.number = number
        super().__init__(f"Journey plan {number} not found")


class JourneyPlanNumberConflict(ConflictError):
    """Journey plan number is already used by another record."""

    def __init__(self, number: int):
        self.number = number
        super().__init__(f"Journey plan number {number} already exists")


class InvalidJourneyPlanNumber(ValidationError):
    """Journey plan number is not a positive integer."""

    pass


class InvalidNextNumber(ValidationError):
    """Requested next number is not a positive integer."""

    pass


class InvalidJourneyPlanFields(ValidationError):
    """Journey plan fields failed validation."""

    pass


class NoFieldsToUpdate(ValidationError):
    """Update payload contained no allowed fields."""

    pass
