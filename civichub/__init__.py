"""
CivicHub - platforma za gradjanske predloge unapredjenja grada.

Gradjani objavljuju predloge vezane za lokaciju, glasaju, komentarisu
i prijavljuju neprikladan sadrzaj. Administratori vode status predloga
i moderaciju.

Ovaj modul sadrzi app factory funkciju koja kreira i konfigurise
Flask aplikaciju sa svim potrebnim ekstenzijama i blueprintima.
"""

import os
import click
from flask import Flask, jsonify, request
from werkzeug.middleware.proxy_fix import ProxyFix
from .config import get_config, validate_production_config, validate_moderation_config
from .extensions import db, migrate, cors


def create_app(config_class=None):
    """
    App factory - kreira i konfigurise Flask aplikaciju.

    Args:
        config_class: Opciona config klasa. Ako nije proslednjena,
                     koristi se config na osnovu FLASK_ENV varijable.

    Returns:
        Konfigurisana Flask aplikacija.
    """
    app = Flask(__name__)

    # Ucitaj konfiguraciju
    if config_class is None:
        config_class = get_config()
    app.config.from_object(config_class)

    # SECURITY: Validiraj production konfiguraciju
    validate_production_config(app)
    validate_moderation_config(app)

    # ProxyFix - ispravno citanje X-Forwarded-* headera iza proxy-ja
    proxy_count = int(os.environ.get('TRUSTED_PROXY_COUNT', '1'))
    app.wsgi_app = ProxyFix(
        app.wsgi_app,
        x_for=proxy_count,
        x_proto=proxy_count,
        x_host=proxy_count,
        x_prefix=proxy_count
    )

    # Inicijalizuj ekstenzije
    _init_extensions(app)

    # Registruj blueprinte (API rute)
    _register_blueprints(app)

    # Registruj error handlere
    _register_error_handlers(app)

    # Registruj CLI komande
    _register_cli_commands(app)

    if app.config.get('SEED_DEMO_DATA'):
        _seed_demo_data(app)

    return app


def _init_extensions(app):
    """
    Inicijalizuje sve Flask ekstenzije sa app kontekstom.
    """
    # SQLAlchemy - ORM (import modela registruje tabele u metadata)
    from . import models  # noqa: F401
    db.init_app(app)

    # Flask-Migrate - migracije
    migrate.init_app(app, db)

    # CORS - dozvoli cross-origin zahteve
    cors.init_app(app, origins=app.config['CORS_ORIGINS'])


def _register_blueprints(app):
    """
    Registruje sve API blueprinte.

    Struktura:
    - /api/v1/* - korisnicki API (gradjani)
    - /api/admin/* - administratorski API
    """
    from .services import get_services

    # V1 API - gradjani
    from .api.v1 import bp as api_v1_bp, register_routes as register_v1_routes
    register_v1_routes()
    app.register_blueprint(api_v1_bp, url_prefix='/api/v1')

    # Admin API
    from .api.admin import bp as api_admin_bp, register_routes as register_admin_routes
    register_admin_routes()
    app.register_blueprint(api_admin_bp, url_prefix='/api/admin')

    @app.before_request
    def maintenance_guard():
        """Dok traje reset baze, svi zahtevi osim /health dobijaju 503."""
        if request.path == '/health':
            return None
        if get_services().maintenance.in_maintenance:
            return jsonify({
                'error': 'Service Unavailable',
                'message': 'Baza se resetuje, pokusajte ponovo za nekoliko sekundi'
            }), 503
        return None

    # Zdravstvena provera - uvek dostupna
    @app.route('/health')
    def health_check():
        """Endpoint za health check (load balancer, itd.)"""
        return jsonify({
            'status': 'healthy',
            'service': 'civichub'
        })


def _register_error_handlers(app):
    """
    Registruje globalne error handlere za API.
    Svi errori se vracaju kao JSON.
    """
    from .services.exceptions import ServiceError
    from .storage.base import StorageConflict

    @app.errorhandler(ServiceError)
    def service_error(error):
        return jsonify(error.to_dict()), error.code

    @app.errorhandler(StorageConflict)
    def storage_conflict(error):
        app.logger.warning(f'Storage conflict: {error}')
        return jsonify({
            'error': 'Conflict',
            'message': 'Istovremena izmena istog podatka, pokusajte ponovo'
        }), 409

    @app.errorhandler(400)
    def bad_request(error):
        return jsonify({
            'error': 'Bad Request',
            'message': str(error.description)
        }), 400

    @app.errorhandler(401)
    def unauthorized(error):
        return jsonify({
            'error': 'Unauthorized',
            'message': 'Autentifikacija je obavezna'
        }), 401

    @app.errorhandler(403)
    def forbidden(error):
        return jsonify({
            'error': 'Forbidden',
            'message': 'Nemate dozvolu za ovu akciju'
        }), 403

    @app.errorhandler(404)
    def not_found(error):
        return jsonify({
            'error': 'Not Found',
            'message': 'Resurs nije pronadjen'
        }), 404

    @app.errorhandler(405)
    def method_not_allowed(error):
        return jsonify({
            'error': 'Method Not Allowed',
            'message': str(error.description)
        }), 405

    @app.errorhandler(500)
    def internal_error(error):
        # Loguj gresku za debugging
        app.logger.error(f'Internal Server Error: {error}')
        return jsonify({
            'error': 'Internal Server Error',
            'message': 'Doslo je do greske na serveru'
        }), 500


def _seed_demo_data(app):
    """Popunjava praznu bazu demo podacima pri startu."""
    from .services import get_services
    from .services.demo_data import seed_demo_data

    with app.app_context():
        if app.config.get('STORAGE_BACKEND', 'sql') == 'sql':
            db.create_all()
        seed_demo_data(get_services(), skip_if_present=True)


def _register_cli_commands(app):
    """
    Registruje custom CLI komande za Flask.
    Koriste se sa: flask <command>
    """

    @app.cli.command('create-admin')
    @click.option('--username', prompt='Admin username', help='Username za login')
    @click.option('--email', prompt='Admin email', help='Email admina')
    @click.option('--name', prompt='Ime', help='Ime za prikaz')
    @click.option('--password', prompt=True, hide_input=True, confirmation_prompt=True, help='Lozinka')
    def create_admin_command(username, email, name, password):
        """Kreira administratorski nalog."""
        from .services import get_services, ServiceError

        try:
            user = get_services().auth.register(username, password, name, email, is_admin=True)
        except ServiceError as e:
            click.echo(f'Greska: {e.message}')
            return

        click.echo(f'Admin {user.username} (ID: {user.id}) uspesno kreiran!')

    @app.cli.command('reset-demo')
    @click.confirmation_option(prompt='Ovo brise SVE podatke. Nastaviti?')
    def reset_demo_command():
        """Brise sve podatke i upisuje demo podatke."""
        from .services import get_services

        click.echo('Resetujem bazu...')
        summary = get_services().maintenance.reset_and_seed()

        click.echo(f'Korisnika: {summary["users"]}')
        click.echo(f'Predloga: {summary["suggestions"]}')
        click.echo(f'Komentara: {summary["comments"]}')
        click.echo(f'Glasova: {summary["votes"]}')
        click.echo('Gotovo!')
