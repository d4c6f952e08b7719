# logging_config.py

import logging
import structlog
import sys
from typing import Any, Dict, Optional
from flask import has_request_context, request, g


def add_request_context(logger: logging.Logger, method_name: str, event_dict: Dict[str, Any]) -> Dict[str, Any]:
    """Add Flask request context to log entries"""
    if has_request_context():
        event_dict["request_id"] = getattr(g, 'request_id', None)
        event_dict["user_id"] = getattr(g, 'user_id', None)
        event_dict["remote_addr"] = request.remote_addr
        event_dict["method"] = request.method
        event_dict["path"] = request.path
    return event_dict


def setup_logging(app_name: str = "casa-volunteer-tracker", log_level: str = "INFO") -> None:
    """
    Configure structured logging

    Args:
        app_name: Application name for log identification
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            add_request_context,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.JSONRenderer()
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, log_level.upper())),
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=getattr(logging, log_level.upper()),
    )

    logging.getLogger(app_name).setLevel(getattr(logging, log_level.upper()))

    # Reduce noise from third-party libraries
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)


def get_logger(name: Optional[str] = None) -> structlog.BoundLogger:
    """
    Get a structured logger instance

    Args:
        name: Logger name (usually __name__)
    """
    return structlog.get_logger(name or __name__)


class SecurityLogger:
    """Dedicated security event logger"""

    def __init__(self):
        self.logger = get_logger("security")

    def log_authentication_attempt(self, email: str, success: bool, ip_address: Optional[str]):
        """Log authentication attempts"""
        self.logger.info(
            "Authentication attempt",
            email=email,
            success=success,
            ip_address=ip_address,
            event_type="auth_attempt"
        )

    def log_cross_org_access(self, user_id: Optional[int], user_org_id: Optional[int],
                             resource: str, resource_id: Any, resource_org_id: Optional[int]):
        """Log a request for a record owned by another organization"""
        self.logger.warning(
            "Cross-organization access denied",
            user_id=user_id,
            user_org_id=user_org_id,
            resource=resource,
            resource_id=resource_id,
            resource_org_id=resource_org_id,
            event_type="org_access_denied"
        )

    def log_role_denied(self, user_id: Optional[int], role: Optional[str], endpoint: Optional[str]):
        """Log a request rejected for insufficient role"""
        self.logger.warning(
            "Role access denied",
            user_id=user_id,
            role=role,
            endpoint=endpoint,
            event_type="role_denied"
        )


# Global logger instance
security_logger = SecurityLogger()
