"""
Custom domain exceptions for the reports module.
"""

from tracker.common.exceptions import AppError


class InvalidRangeError(AppError):
    """Raised when a custom period has a missing or inverted start/end date."""
    
    def __init__(self, message: str = "Please select both a start and an end date"):
        self.message = message
        super().__init__(self.message)
    
    def __str__(self) -> str:
        return self.message
