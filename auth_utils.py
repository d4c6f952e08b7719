# auth_utils.py
"""
Authorization decorators shared by the blueprints
"""

from functools import wraps
from flask import current_app, redirect, url_for, flash, abort, request
from flask_login import current_user, login_required
from logging_config import security_logger


def supervisor_required(f):
    """Require a signed-in supervisor or admin; volunteers are sent to the dashboard"""
    @wraps(f)
    @login_required
    def decorated_function(*args, **kwargs):
        if not (current_user.is_supervisor or current_user.is_casa_admin):
            security_logger.log_role_denied(current_user.id, current_user.role, request.endpoint)
            flash('You are not authorized to perform this action.', 'error')
            return redirect(url_for('main.dashboard'))
        return f(*args, **kwargs)
    return decorated_function


def casa_case_required(f):
    """
    Resolve the <casa_case_id> URL segment (id or slug) to a case of the
    current user's organization and pass it to the view as `casa_case`.

    Missing cases are a 404. Cases of another organization redirect to the
    dashboard.
    """
    @wraps(f)
    @login_required
    def decorated_function(*args, **kwargs):
        identifier = kwargs.pop('casa_case_id')
        casa_case_service = current_app.services.get('casa_case')
        result = casa_case_service.find_for_org(identifier, current_user.casa_org_id)

        if result.is_failure:
            if result.error_code == 'NOT_FOUND':
                abort(404)
            metadata = result.metadata or {}
            security_logger.log_cross_org_access(
                current_user.id, current_user.casa_org_id,
                'casa_case', metadata.get('casa_case_id', identifier), metadata.get('casa_org_id')
            )
            return redirect(url_for('main.dashboard'))

        return f(*args, casa_case=result.data, **kwargs)
    return decorated_function
