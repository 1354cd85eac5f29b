"""Domain-specific exceptions"""


class DomainException(Exception):
    """Base exception for domain layer"""

    pass


class MissingCredentialError(DomainException):
    """No API key configured, the request was never sent"""

    def __init__(self, message: str = "No API key configured. Please check VisioFex gateway settings."):
        super().__init__(message)


class TransportError(DomainException):
    """Network failure talking to the payment API (DNS, timeout, refused)"""

    pass


class HTTPError(DomainException):
    """Payment API answered with a non-2xx status"""

    def __init__(self, status: int, body: str, url: str):
        self.status = status
        self.body = body
        self.url = url
        super().__init__(f"HTTP {status}: {body} (URL: {url})")


class InvalidDateRangeError(DomainException):
    """Report start date falls after its end date"""

    pass


class ReportUnavailableError(DomainException):
    """Neither the aggregate endpoint nor the transaction fallback produced a report"""

    def __init__(self, stage: str, message: str):
        self.stage = stage
        super().__init__(f"{stage} failed: {message}")


class InvalidResponseError(DomainException):
    """Payment API answered 2xx with a body that cannot be interpreted"""

    pass
