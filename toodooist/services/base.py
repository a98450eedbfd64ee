"""
Base Service.

Base class for services that orchestrate the repository and the
interaction engine.
"""

from typing import Any

from toodooist.core.logging import get_logger


class BaseService:
    """
    Base class for all services.

    Provides a module-scoped logger and operation logging helpers.
    """

    def __init__(self) -> None:
        self._logger = get_logger(self.__class__.__module__)

    def _log_operation(self, operation: str, **context: Any) -> None:
        """
        Log a service operation with context.

        Args:
            operation: Description of the operation
            **context: Additional context to include in log
        """
        self._logger.info(
            operation,
            extra={"service": self.__class__.__name__, **context},
        )

    def _log_debug(self, message: str, **context: Any) -> None:
        """
        Log debug information.

        Args:
            message: Debug message
            **context: Additional context to include in log
        """
        self._logger.debug(
            message,
            extra={"service": self.__class__.__name__, **context},
        )
