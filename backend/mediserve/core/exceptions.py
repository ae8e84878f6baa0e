"""
Error responses for the dashboard API.

The dashboard only ever sees short, safe messages. The reason behind an
error (which email failed to log in, what the database said) goes to the log.
"""
from fastapi import HTTPException, status
import logging

logger = logging.getLogger(__name__)


class SalesAnalysisError(Exception):
    """The language model was unavailable or returned unusable output."""


class PatientUpdateError(Exception):
    """No usable patient message could be drafted."""


def _http(code: int, detail: str, **kwargs) -> HTTPException:
    return HTTPException(status_code=code, detail=detail, **kwargs)


class BusinessError:
    """Factories for HTTPExceptions; callers `raise` the result."""

    @staticmethod
    def not_found(resource: str = "Resource", reason: str = "") -> HTTPException:
        """
        404 naming only the resource kind.

            medicine = inventory_service.get_medicine(db, pharmacy.id, medicine_id)
            if not medicine:
                raise BusinessError.not_found("Medicine")
        """
        if reason:
            logger.warning(f"{resource} lookup failed: {reason}")
        return _http(status.HTTP_404_NOT_FOUND, f"{resource} not found")

    @staticmethod
    def unauthorized(reason: str = "") -> HTTPException:
        """One response for wrong password, unknown email and bad token alike."""
        logger.warning(f"Rejected credentials: {reason}")
        return _http(
            status.HTTP_401_UNAUTHORIZED,
            "Authentication failed",
            headers={"WWW-Authenticate": "Bearer"},
        )

    @staticmethod
    def bad_request(detail: str) -> HTTPException:
        # The owner caused it, so the detail is shown as-is
        logger.info(f"Rejected input: {detail}")
        return _http(status.HTTP_400_BAD_REQUEST, detail)

    @staticmethod
    def conflict(detail: str) -> HTTPException:
        """409, e.g. a second medicine with the same name."""
        logger.info(f"Conflict: {detail}")
        return _http(status.HTTP_409_CONFLICT, detail)

    @staticmethod
    def server_error(original_error: Exception = None, detail: str = None) -> HTTPException:
        """500 with a generic message; the original error is logged with its traceback."""
        cause = f"{type(original_error).__name__}: {original_error}" if original_error else "unknown cause"
        logger.error(f"Request failed ({cause})", exc_info=original_error is not None)
        return _http(
            status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail or "Something went wrong. Please try again later.",
        )

    @staticmethod
    def upstream_unavailable(detail: str) -> HTTPException:
        """502 when the LLM failed us."""
        logger.warning(f"Upstream failure: {detail}")
        return _http(status.HTTP_502_BAD_GATEWAY, detail)
