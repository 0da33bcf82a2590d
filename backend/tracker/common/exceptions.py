class AppError(Exception):
    """Base class for all application exceptions."""
    pass

class ResourceNotFoundError(AppError):
    """Generic error when a requested resource is not found."""
    def __init__(self, resource_name: str, identifier: any):
        self.message = f"{resource_name} with id {identifier} was not found."
        super().__init__(self.message)

class ExpenseAccessDeniedError(AppError):
    """Raised when a user tries to read or change an expense owned by someone else."""
    def __init__(self, expense_id: int):
        self.message = f"You do not have access to expense {expense_id}."
        self.expense_id = expense_id
        super().__init__(self.message)
