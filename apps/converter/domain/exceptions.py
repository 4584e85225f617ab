"""
Error taxonomy for conversions.

Input errors are the caller's fault and are never retried; UpstreamError is
a dependency failure surfaced as a server-side fault.
"""


class ConversionError(Exception):
    pass


class ConversionInputError(ConversionError):
    pass


class InvalidAmount(ConversionInputError):

    MESSAGES = {
        "not a valid number": "Amount must be a valid number",
        "not finite": "Amount must be a finite number",
        "negative": "Amount cannot be negative",
        "must be greater than zero": "Amount must be greater than zero",
        "exceeds maximum": "Amount exceeds maximum allowed value",
    }

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(self.MESSAGES.get(reason, f"Invalid amount: {reason}"))


class InvalidCurrencyCode(ConversionInputError):

    MESSAGES = {
        "blank": "{field} currency code cannot be empty",
        "wrong length": "{field} currency code must be exactly 3 characters",
        "not uppercase letters": "{field} currency code must contain only uppercase letters",
    }

    def __init__(self, field: str, reason: str):
        self.field = field
        self.reason = reason
        template = self.MESSAGES.get(reason, "{field} currency code is invalid")
        super().__init__(template.format(field=field))


class UnknownCurrency(ConversionInputError):

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Currency {code} not found")


class UpstreamError(ConversionError):

    def __init__(self, status: int | None, detail: str = ""):
        self.status = status
        self.detail = detail
        message = f"Failed to fetch currency rates: {status if status is not None else 'no response'}"
        if detail:
            message = f"{message} ({detail})"
        super().__init__(message)
