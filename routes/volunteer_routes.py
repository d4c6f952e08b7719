"""
Volunteer management routes (supervisors and admins)
"""
from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app
from flask_login import current_user
from auth_utils import supervisor_required
from logging_config import security_logger

volunteer_bp = Blueprint('volunteer', __name__, url_prefix='/volunteers')


def _volunteer_in_current_org(volunteer_id):
    """The volunteer, or None when missing or owned by another organization"""
    volunteer_service = current_app.services.get('volunteer')
    result = volunteer_service.get_volunteer(volunteer_id)
    if result.is_failure:
        return None
    volunteer = result.data
    if volunteer.casa_org_id != current_user.casa_org_id:
        security_logger.log_cross_org_access(
            current_user.id, current_user.casa_org_id,
            'volunteer', volunteer.id, volunteer.casa_org_id
        )
        return None
    return volunteer


@volunteer_bp.route('/unassigned')
@supervisor_required
def unassigned():
    """Volunteers without a current supervisor"""
    volunteer_service = current_app.services.get('volunteer')
    volunteers = volunteer_service.with_no_supervisor(current_user.casa_org_id)
    return render_template('volunteers/unassigned.html', volunteers=volunteers)


@volunteer_bp.route('/<int:volunteer_id>/activate', methods=['POST'])
@supervisor_required
def activate(volunteer_id):
    volunteer = _volunteer_in_current_org(volunteer_id)
    if volunteer is None:
        return redirect(url_for('main.dashboard'))

    result = current_app.services.get('volunteer').activate(volunteer.id)
    if result.is_success:
        flash(f"Volunteer {volunteer.display_name} was activated.", 'notice')
    else:
        flash(result.error, 'error')
    return redirect(request.referrer or url_for('main.dashboard'))


@volunteer_bp.route('/<int:volunteer_id>/deactivate', methods=['POST'])
@supervisor_required
def deactivate(volunteer_id):
    volunteer = _volunteer_in_current_org(volunteer_id)
    if volunteer is None:
        return redirect(url_for('main.dashboard'))

    result = current_app.services.get('volunteer').deactivate(volunteer.id)
    if result.is_success:
        flash(f"Volunteer {volunteer.display_name} was deactivated.", 'notice')
    else:
        flash(result.error, 'error')
    return redirect(request.referrer or url_for('main.dashboard'))


@volunteer_bp.route('/<int:volunteer_id>/supervisor', methods=['POST'])
@supervisor_required
def assign_supervisor(volunteer_id):
    """Assign the posted supervisor_id; an empty value unassigns"""
    volunteer = _volunteer_in_current_org(volunteer_id)
    if volunteer is None:
        return redirect(url_for('main.dashboard'))

    volunteer_service = current_app.services.get('volunteer')
    supervisor_id = request.form.get('supervisor_id', type=int)
    if supervisor_id:
        result = volunteer_service.assign_supervisor(volunteer.id, supervisor_id)
        success_message = "Supervisor assigned."
    else:
        result = volunteer_service.unassign_supervisor(volunteer.id)
        success_message = "Supervisor unassigned."

    if result.is_success:
        flash(success_message, 'notice')
    else:
        flash(result.error, 'error')
    return redirect(request.referrer or url_for('volunteer.unassigned'))
