"""Custom exceptions - SoC principle"""

class TagAnalyticsError(Exception):
    """Base exception for Tag Analytics module"""
    pass

class ValidationError(TagAnalyticsError):
    """Input validation error"""
    pass

class PaperNotFoundError(TagAnalyticsError):
    """Question paper not found error"""
    def __init__(self, message: str = "Paper not found"):
        super().__init__(message)

class ResponseNotFoundError(TagAnalyticsError):
    """Question paper response not found error"""
    def __init__(self, message: str = "Response not found"):
        super().__init__(message)
