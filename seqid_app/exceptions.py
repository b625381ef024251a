"""
Domain errors.

Every error carries the HTTP status and a stable code; main.py turns any
SeqIdError into a JSON response with both.
"""


class SeqIdError(Exception):
    """Base class for all application errors"""
    
    status_code = 400
    code = "error"
    
    def __init__(self, message: str = None):
        self.message = message or self.__doc__
        super().__init__(self.message)


class EmptyInput(SeqIdError):
    """Input is empty"""
    status_code = 400
    code = "empty_input"


class NoIdentifiersFound(SeqIdError):
    """No 11-digit or 15-digit IDs found"""
    status_code = 422
    code = "no_identifiers_found"


class NoSequentialIdentifiers(SeqIdError):
    """No sequential IDs found"""
    status_code = 422
    code = "no_sequential_identifiers"


class StorageUnavailable(SeqIdError):
    """Storage is unavailable"""
    status_code = 503
    code = "storage_unavailable"


class InvalidIdentifier(SeqIdError):
    """Identifier must be 11 or 15 digits"""
    status_code = 500
    code = "invalid_identifier"


class DuplicateIdentifier(SeqIdError):
    """Identifier already recorded for this user"""
    status_code = 500
    code = "duplicate_identifier"


class InvalidUserId(SeqIdError):
    """Invalid user ID format"""
    status_code = 422
    code = "invalid_user_id"


class AuthenticationError(SeqIdError):
    """Invalid credentials"""
    status_code = 401
    code = "authentication_failed"


class PermissionDenied(SeqIdError):
    """Admin access required"""
    status_code = 403
    code = "permission_denied"
