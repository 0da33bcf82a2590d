from tracker.common.exceptions import AppError

class AuthError(AppError):
    """Base class for all authentication and authorization exceptions."""
    pass

class InvalidTokenError(AuthError):
    """
    Raised when a JWT token is invalid, expired, malformed, or has wrong type.
    
    Used by:
    - jwt.py: decode_token() when token cannot be decoded or has wrong type
    - jwt.py: get_user_id_from_token() when token doesn't contain a numeric 'sub' claim
    """
    def __init__(self, detail: str = "Token is invalid."):
        super().__init__(detail)
