"""
Case routes
"""
from flask import Blueprint, render_template, current_app
from auth_utils import casa_case_required

casa_case_bp = Blueprint('casa_case', __name__)


@casa_case_bp.route('/casa_cases/<casa_case_id>')
@casa_case_required
def show_casa_case(casa_case):
    casa_case_service = current_app.services.get('casa_case')
    overview = casa_case_service.case_overview(casa_case)
    return render_template('casa_cases/show.html', **overview)
