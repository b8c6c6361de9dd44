"""Unified error codes and custom exceptions.

Error code ranges:
  1xxx: Auth/User
  2xxx: Cash card
  9xxx: System
"""


class AppError(Exception):
    """Base application error.

    ``with_body=False`` renders the error as a bare status code with an
    empty body (see the handler in src/main.py).
    """

    def __init__(
        self,
        code: int,
        message: str,
        http_status: int = 500,
        with_body: bool = True,
    ) -> None:
        self.code = code
        self.message = message
        self.http_status = http_status
        self.with_body = with_body
        super().__init__(message)


# --- 1xxx: Auth/User ---

class InvalidCredentialsError(AppError):
    def __init__(self) -> None:
        super().__init__(1003, "Invalid username or password", 401)


class AccountDisabledError(AppError):
    def __init__(self) -> None:
        super().__init__(1004, "Account is disabled", 401)


class RoleRequiredError(AppError):
    def __init__(self, role: str) -> None:
        super().__init__(1006, f"Role required: {role}", 403)


# --- 2xxx: Cash card ---

class CashCardNotFoundError(AppError):
    """Covers both a missing row and a row owned by someone else.

    The body stays empty so callers cannot tell the two cases apart.
    """

    def __init__(self, cash_card_id: int) -> None:
        super().__init__(
            2001, f"Cash card not found: {cash_card_id}", 404, with_body=False
        )


class InvalidSortError(AppError):
    def __init__(self, detail: str) -> None:
        super().__init__(2002, f"Invalid sort parameter: {detail}", 400)


# --- 9xxx: System ---

class InternalError(AppError):
    def __init__(self, detail: str = "Internal server error") -> None:
        super().__init__(9002, detail, 500)
