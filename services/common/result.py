"""
Result Pattern Implementation
Service methods return a Result instead of raising for bad input, so route
handlers and CLI commands can report validation problems uniformly
"""

from typing import TypeVar, Generic, Optional, Any, Dict, Callable
from dataclasses import dataclass

T = TypeVar('T')


@dataclass
class Result(Generic[T]):
    """
    Either a successful value or a failure with an error message and code.

    Examples:
        result = service.calculate(payload)
        if result.is_success:
            report = result.data
        else:
            return jsonify({'error': result.error, 'code': result.error_code}), 400
    """

    success: bool
    data: Optional[T] = None
    error: Optional[str] = None
    error_code: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def success(cls, data: T, metadata: Optional[Dict[str, Any]] = None) -> 'Result[T]':
        """
        Create a successful result.

        Args:
            data: The calculated value
            metadata: Optional metadata about the calculation

        Returns:
            A Result representing success
        """
        return cls(success=True, data=data, metadata=metadata)

    @classmethod
    def failure(cls,
                error: str,
                code: Optional[str] = None,
                metadata: Optional[Dict[str, Any]] = None) -> 'Result[T]':
        """
        Create a failure result.

        Args:
            error: Human readable reason
            code: Machine readable error code, e.g. NEGATIVE_VALUE
            metadata: Optional details such as the offending field

        Returns:
            A Result representing failure
        """
        return cls(success=False, error=error, error_code=code, metadata=metadata)

    @property
    def is_success(self) -> bool:
        return self.success

    @property
    def is_failure(self) -> bool:
        return not self.success

    def map(self, func: Callable[[T], Any]) -> 'Result':
        """Transform the data of a success; failures pass through unchanged"""
        if self.is_success:
            return Result.success(func(self.data), self.metadata)
        return self

