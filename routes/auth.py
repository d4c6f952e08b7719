# routes/auth.py

from flask import Blueprint, render_template, redirect, url_for, flash, request, current_app
from flask_login import login_required, current_user

auth_bp = Blueprint('auth', __name__, url_prefix='/auth')


@auth_bp.route('/login', methods=['GET', 'POST'])
def login():
    """Login page"""
    if current_user.is_authenticated:
        return redirect(url_for('main.dashboard'))

    if request.method == 'POST':
        email = request.form.get('email', '').strip()
        password = request.form.get('password', '')
        remember = bool(request.form.get('remember'))

        auth_service = current_app.services.get('auth')
        auth_result = auth_service.authenticate_user(email, password, ip_address=request.remote_addr)

        if auth_result.is_success:
            login_result = auth_service.login_user(auth_result.data, remember=remember)
            if login_result.is_success:
                next_page = request.args.get('next')
                # Only follow same-site relative paths
                if next_page and next_page.startswith('/') and not next_page.startswith('//'):
                    return redirect(next_page)
                return redirect(url_for('main.dashboard'))
            flash(login_result.error or 'Failed to log in', 'error')
        else:
            flash(auth_result.error or 'Invalid credentials', 'error')

    return render_template('auth/login.html')


@auth_bp.route('/logout')
@login_required
def logout():
    """Logout current user"""
    auth_service = current_app.services.get('auth')
    auth_service.logout_user()
    flash('You have been logged out', 'notice')
    return redirect(url_for('auth.login'))
