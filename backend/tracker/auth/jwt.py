from typing import Dict, Any, Optional

from jose import JWTError, jwt

from tracker.config import settings
from tracker.auth.exceptions import InvalidTokenError

def decode_token(token: str, expected_type: Optional[str] = None) -> Dict[str, Any]:
    """
    Decode and verify a JWT token.
    
    Tokens are issued by the auth service; this API only verifies them.
    
    Args:
        token: JWT token string to decode
        expected_type: Expected token type ('access' or 'refresh'). 
                      If provided, validates that token has correct type.
        
    Returns:
        Decoded token payload
        
    Raises:
        InvalidTokenError: If token is invalid, expired, or has wrong type
        
    Example:
        payload = decode_token(token, expected_type="access")
    """
    try:
        payload = jwt.decode(
            token, 
            settings.JWT_SECRET_KEY, 
            algorithms=[settings.JWT_ALGORITHM]
        )
    except JWTError as e:
        raise InvalidTokenError() from e

    if expected_type and payload.get("type") != expected_type:
        raise InvalidTokenError()

    return payload

def get_user_id_from_token(token: str, token_type: Optional[str] = "access") -> int:
    """
    Extract user_id from JWT token.
    
    Args:
        token: JWT token string
        token_type: Expected token type (default: "access", None skips the check)
        
    Returns:
        User ID from token's 'sub' claim
        
    Raises:
        InvalidTokenError: If token is invalid, wrong type, or doesn't contain 'sub'
    """
    payload = decode_token(token, expected_type=token_type)
    user_id: Optional[str] = payload.get("sub")
    
    if user_id is None:
        raise InvalidTokenError()
    
    try:
        return int(user_id)
    except (TypeError, ValueError) as e:
        raise InvalidTokenError() from e
