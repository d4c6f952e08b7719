# commands.py

import click
from flask import current_app
from flask.cli import with_appcontext
from flask_bcrypt import generate_password_hash
from sqlalchemy.exc import SQLAlchemyError


@click.command('create-org')
@click.argument('name')
@click.option('--display-name', default=None, help='Name shown in the interface')
@click.option('--fund-request-email', default=None, help='Recipient for fund request notices')
@with_appcontext
def create_org(name, display_name, fund_request_email):
    """Create a CASA organization"""
    org_repository = current_app.services.get('casa_org_repository')
    if org_repository.find_by_name(name):
        click.echo(f'Organization {name} already exists.')
        return

    try:
        org = org_repository.create(
            name=name,
            display_name=display_name or name,
            fund_request_email=fund_request_email
        )
        org_repository.commit()
    except SQLAlchemyError as e:
        click.echo(f'Failed to create organization: {e}')
        return

    click.echo(f'Organization created: {org.name} (id {org.id})')


@click.command('create-admin')
@click.option('--org', 'org_name', prompt='Organization name', help='Existing organization name')
@click.option('--email', prompt=True, help='Admin email address')
@click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Admin password')
@click.option('--display-name', prompt=True, help='Display name')
@with_appcontext
def create_admin(org_name, email, password, display_name):
    """Create a CASA admin user"""
    from casa_database import CasaAdmin

    org = current_app.services.get('casa_org_repository').find_by_name(org_name)
    if org is None:
        click.echo(f'Organization {org_name} does not exist. Run create-org first.')
        return

    user_repository = current_app.services.get('user_repository')
    if user_repository.find_by_email(email):
        click.echo(f'A user with email {email} already exists.')
        return

    try:
        admin = CasaAdmin(
            email=email.strip().lower(),
            display_name=display_name,
            casa_org_id=org.id,
            password_hash=generate_password_hash(password).decode('utf-8'),
            active=True
        )
        user_repository.session.add(admin)
        user_repository.commit()
    except SQLAlchemyError as e:
        user_repository.rollback()
        click.echo(f'Failed to create admin: {e}')
        return

    click.echo(f'Admin user created successfully: {admin.email}')


@click.command('unsupervised-volunteers')
@click.argument('org_id', type=int)
@with_appcontext
def unsupervised_volunteers(org_id):
    """List active volunteers of an organization that have no supervisor"""
    volunteers = current_app.services.get('volunteer').with_no_supervisor(org_id)
    if not volunteers:
        click.echo('Every volunteer has a supervisor.')
        return
    for volunteer in volunteers:
        click.echo(f'{volunteer.id}\t{volunteer.email}\t{volunteer.display_name}')


def init_app(app):
    """Register commands with the Flask app"""
    app.cli.add_command(create_org)
    app.cli.add_command(create_admin)
    app.cli.add_command(unsupervised_volunteers)
