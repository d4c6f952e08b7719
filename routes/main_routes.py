"""
Dashboard
"""
from flask import Blueprint, render_template, current_app
from flask_login import login_required, current_user

main_bp = Blueprint('main', __name__)


@main_bp.route('/')
@login_required
def dashboard():
    casa_case_service = current_app.services.get('casa_case')
    cases = casa_case_service.cases_for_org(current_user.casa_org_id)

    unassigned_volunteers = []
    contact_overdue = False
    if current_user.is_supervisor or current_user.is_casa_admin:
        volunteer_service = current_app.services.get('volunteer')
        unassigned_volunteers = volunteer_service.with_no_supervisor(current_user.casa_org_id)
    elif current_user.is_volunteer:
        volunteer_service = current_app.services.get('volunteer')
        contact_overdue = not volunteer_service.made_contact_with_all_cases_in_14_days(current_user.id)

    return render_template(
        'main/dashboard.html',
        cases=cases,
        unassigned_volunteers=unassigned_volunteers,
        contact_overdue=contact_overdue
    )
