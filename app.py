# app.py

from flask import Flask, g, request, jsonify
from flask_login import current_user
from flask_migrate import Migrate
from config import get_config
from extensions import db, login_manager, bcrypt, mail
import os
import uuid
from werkzeug.middleware.proxy_fix import ProxyFix
from logging_config import setup_logging, get_logger

# Configure logging as early as possible
setup_logging(app_name="casa-volunteer-tracker", log_level="INFO")
logger = get_logger(__name__)

# Configure Sentry for production error tracking
def init_sentry():
    """Initialize Sentry error tracking in production."""
    sentry_dsn = os.environ.get('SENTRY_DSN')
    if sentry_dsn and os.environ.get('FLASK_ENV') == 'production':
        import sentry_sdk
        from sentry_sdk.integrations.flask import FlaskIntegration
        from sentry_sdk.integrations.sqlalchemy import SqlalchemyIntegration

        sentry_sdk.init(
            dsn=sentry_dsn,
            integrations=[
                FlaskIntegration(
                    transaction_style='endpoint'
                ),
                SqlalchemyIntegration()
            ],
            traces_sample_rate=0.1,
            environment=os.environ.get('FLASK_ENV', 'development'),
            release=os.environ.get('GIT_SHA', 'unknown')
        )
        logger.info("Sentry error tracking initialized")

init_sentry()

def create_app(config_name=None, test_config=None):
    """Create and configure an instance of the Flask application."""
    app = Flask(__name__)

    config_class = get_config(config_name)
    app.config.from_object(config_class)

    # Initialize app with config
    config_class.init_app(app)

    if test_config:
        app.config.update(test_config)

    app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_prefix=1)

    db.init_app(app)
    Migrate(app, db)
    mail.init_app(app)

    # Service registry with lazy loading
    from services.service_registry import ServiceRegistry
    registry = ServiceRegistry()

    # db.session is a scoped session, so one handle serves every request
    registry.register_instance('db_session', db.session)

    # Repositories
    registry.register_factory(
        'casa_org_repository',
        lambda db_session: _create_casa_org_repository(db_session),
        dependencies=['db_session']
    )
    registry.register_factory(
        'user_repository',
        lambda db_session: _create_user_repository(db_session),
        dependencies=['db_session']
    )
    registry.register_factory(
        'volunteer_repository',
        lambda db_session: _create_volunteer_repository(db_session),
        dependencies=['db_session']
    )
    registry.register_factory(
        'casa_case_repository',
        lambda db_session: _create_casa_case_repository(db_session),
        dependencies=['db_session']
    )
    registry.register_factory(
        'case_assignment_repository',
        lambda db_session: _create_case_assignment_repository(db_session),
        dependencies=['db_session']
    )
    registry.register_factory(
        'supervisor_volunteer_repository',
        lambda db_session: _create_supervisor_volunteer_repository(db_session),
        dependencies=['db_session']
    )
    registry.register_factory(
        'case_contact_repository',
        lambda db_session: _create_case_contact_repository(db_session),
        dependencies=['db_session']
    )
    registry.register_factory(
        'fund_request_repository',
        lambda db_session: _create_fund_request_repository(db_session),
        dependencies=['db_session']
    )

    # Services
    registry.register_factory('email', lambda: _create_email_service(app))
    registry.register_factory(
        'fund_request_mailer',
        lambda email: _create_fund_request_mailer(email, app),
        dependencies=['email']
    )
    registry.register_factory(
        'fund_request',
        lambda fund_request_repository, fund_request_mailer: _create_fund_request_service(
            fund_request_repository, fund_request_mailer
        ),
        dependencies=['fund_request_repository', 'fund_request_mailer']
    )
    registry.register_factory(
        'volunteer',
        lambda volunteer_repository, case_assignment_repository, supervisor_volunteer_repository,
               case_contact_repository, user_repository: _create_volunteer_service(
            volunteer_repository, case_assignment_repository, supervisor_volunteer_repository,
            case_contact_repository, user_repository, app.config.get('CASA_TIMEZONE')
        ),
        dependencies=['volunteer_repository', 'case_assignment_repository',
                      'supervisor_volunteer_repository', 'case_contact_repository',
                      'user_repository']
    )
    registry.register_factory(
        'casa_case',
        lambda casa_case_repository, case_assignment_repository, case_contact_repository,
               fund_request_repository: _create_casa_case_service(
            casa_case_repository, case_assignment_repository,
            case_contact_repository, fund_request_repository
        ),
        dependencies=['casa_case_repository', 'case_assignment_repository',
                      'case_contact_repository', 'fund_request_repository']
    )
    registry.register_factory(
        'auth',
        lambda user_repository: _create_auth_service(user_repository),
        dependencies=['user_repository']
    )

    # Validate all dependencies are registered
    errors = registry.validate_dependencies()
    if errors:
        for error in errors:
            logger.error(f"Service dependency error: {error}")
        raise RuntimeError(f"Service dependency errors: {errors}")

    if app.debug:
        logger.debug("Service initialization order", order=registry.get_initialization_order())

    # Attach registry to app
    app.services = registry

    # Initialize authentication
    bcrypt.init_app(app)
    login_manager.init_app(app)
    login_manager.login_view = 'auth.login'
    login_manager.login_message = 'Please log in to access this page.'

    # User loader for Flask-Login
    from casa_database import User
    @login_manager.user_loader
    def load_user(user_id):
        return db.session.get(User, int(user_id))

    # Add request tracking middleware
    @app.before_request
    def before_request():
        g.request_id = str(uuid.uuid4())
        g.user_id = current_user.get_id() if current_user.is_authenticated else None
        logger.info("Request started",
                    request_id=g.request_id,
                    method=request.method,
                    path=request.path)

    @app.after_request
    def after_request(response):
        logger.info("Request completed",
                    request_id=getattr(g, 'request_id', None),
                    status_code=response.status_code)
        return response

    # Global error handlers
    @app.errorhandler(500)
    def internal_error(error):
        db.session.rollback()
        logger.error("Internal server error",
                     request_id=getattr(g, 'request_id', None),
                     error=str(error))
        return "Internal server error", 500

    @app.errorhandler(404)
    def not_found_error(error):
        logger.warning("Page not found",
                       request_id=getattr(g, 'request_id', None),
                       path=request.path)
        return "Page not found", 404

    # Health check endpoint - no auth required
    @app.route('/health')
    def health_check():
        """Health check endpoint for monitoring"""
        from sqlalchemy import text
        health_status = {
            'status': 'healthy',
            'service': 'casa-volunteer-tracker'
        }

        try:
            db.session.execute(text('SELECT 1'))
            health_status['database'] = 'connected'
        except Exception as e:
            health_status['database'] = 'error'
            health_status['status'] = 'degraded'
            logger.error(f"Health check database error: {e}")

        return jsonify(health_status), 200 if health_status['status'] == 'healthy' else 503

    # Register blueprints for routes
    from routes.main_routes import main_bp
    from routes.auth import auth_bp
    from routes.casa_case_routes import casa_case_bp
    from routes.fund_request_routes import fund_request_bp
    from routes.volunteer_routes import volunteer_bp

    app.register_blueprint(main_bp)
    app.register_blueprint(auth_bp)
    app.register_blueprint(casa_case_bp)
    app.register_blueprint(fund_request_bp)
    app.register_blueprint(volunteer_bp)

    # Register CLI commands
    from scripts import commands
    commands.init_app(app)

    return app


# Service Factory Functions
# These are only called when the service is first requested

def _create_casa_org_repository(db_session):
    from repositories.casa_org_repository import CasaOrgRepository
    return CasaOrgRepository(session=db_session)


def _create_user_repository(db_session):
    from repositories.user_repository import UserRepository
    return UserRepository(session=db_session)


def _create_volunteer_repository(db_session):
    from repositories.volunteer_repository import VolunteerRepository
    return VolunteerRepository(session=db_session)


def _create_casa_case_repository(db_session):
    from repositories.casa_case_repository import CasaCaseRepository
    return CasaCaseRepository(session=db_session)


def _create_case_assignment_repository(db_session):
    from repositories.case_assignment_repository import CaseAssignmentRepository
    return CaseAssignmentRepository(session=db_session)


def _create_supervisor_volunteer_repository(db_session):
    from repositories.supervisor_volunteer_repository import SupervisorVolunteerRepository
    return SupervisorVolunteerRepository(session=db_session)


def _create_case_contact_repository(db_session):
    from repositories.case_contact_repository import CaseContactRepository
    return CaseContactRepository(session=db_session)


def _create_fund_request_repository(db_session):
    from repositories.fund_request_repository import FundRequestRepository
    return FundRequestRepository(session=db_session)


def _create_email_service(app):
    """Create email service bound to the app's Flask-Mail extension"""
    from services.email_service import EmailService
    return EmailService(
        mail_client=mail,
        default_sender=app.config.get('MAIL_DEFAULT_SENDER'),
        server=app.config.get('MAIL_SERVER')
    )


def _create_fund_request_mailer(email, app):
    from services.fund_request_mailer import FundRequestMailer
    return FundRequestMailer(
        email_service=email,
        fallback_recipient=app.config.get('FUND_REQUEST_RECIPIENT_EMAIL')
    )


def _create_fund_request_service(fund_request_repository, fund_request_mailer):
    from services.fund_request_service import FundRequestService
    return FundRequestService(
        fund_request_repository=fund_request_repository,
        mailer=fund_request_mailer
    )


def _create_volunteer_service(volunteer_repository, case_assignment_repository,
                              supervisor_volunteer_repository, case_contact_repository,
                              user_repository, timezone):
    from services.volunteer_service import VolunteerService
    from utils.datetime_utils import DEFAULT_TIMEZONE
    return VolunteerService(
        volunteer_repository=volunteer_repository,
        case_assignment_repository=case_assignment_repository,
        supervisor_volunteer_repository=supervisor_volunteer_repository,
        case_contact_repository=case_contact_repository,
        user_repository=user_repository,
        timezone=timezone or DEFAULT_TIMEZONE
    )


def _create_casa_case_service(casa_case_repository, case_assignment_repository,
                              case_contact_repository, fund_request_repository):
    from services.casa_case_service import CasaCaseService
    return CasaCaseService(
        casa_case_repository=casa_case_repository,
        case_assignment_repository=case_assignment_repository,
        case_contact_repository=case_contact_repository,
        fund_request_repository=fund_request_repository
    )


def _create_auth_service(user_repository):
    from services.auth_service import AuthService
    return AuthService(user_repository=user_repository)
