from nexar.application.dtos.auth_outcomes import SignInOutcome, SignUpOutcome
from nexar.application.dtos.operation_result import ActionReport, OperationResult
from nexar.application.dtos.session_entry import SessionCacheEntry

__all__ = [
    "ActionReport",
    "OperationResult",
    "SessionCacheEntry",
    "SignInOutcome",
    "SignUpOutcome",
]
