"""Errors raised by the topic router."""


class InvalidTopicError(ValueError):
    """Raised when a topic filter or topic name is rejected by strict validation."""
