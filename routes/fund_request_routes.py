"""
Fund request routes - submission form tied to a case
"""
from flask import Blueprint, render_template, request, redirect, url_for, flash, current_app
from auth_utils import casa_case_required

fund_request_bp = Blueprint('fund_request', __name__)


@fund_request_bp.route('/casa_cases/<casa_case_id>/fund_requests/new')
@casa_case_required
def new_fund_request(casa_case):
    """Blank fund request form"""
    return render_template('fund_requests/new.html', casa_case=casa_case, fund_request={}, errors={})


@fund_request_bp.route('/casa_cases/<casa_case_id>/fund_requests', methods=['POST'])
@casa_case_required
def create_fund_request(casa_case):
    """Save the request and send the notice, or show the form again with errors"""
    fund_request_service = current_app.services.get('fund_request')
    result = fund_request_service.create_fund_request(casa_case, request.form)

    if result.is_success:
        flash(f"Fund Request was sent for case {casa_case.case_number}", 'notice')
        return redirect(url_for('casa_case.show_casa_case', casa_case_id=casa_case.id))

    metadata = result.metadata or {}
    errors = metadata.get('errors') or {'base': result.error}
    return render_template(
        'fund_requests/new.html',
        casa_case=casa_case,
        fund_request=metadata.get('attributes', {}),
        errors=errors
    )
