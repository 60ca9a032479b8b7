import sys

import click

from .app import create_app
from .app.services.plates import match_plate_rule, normalize_plate, strip_plate
from .config import ConfigurationError

try:
    app = create_app()
except ConfigurationError as exc:
    # Sin credenciales no se arranca en modo degradado
    click.echo(str(exc), err=True)
    sys.exit(1)


@app.cli.command("format-plate")
@click.argument("plates", nargs=-1, required=True)
def format_plate(plates):
    """
    Muestra cómo se normaliza cada matrícula recibida.
    """
    for raw in plates:
        cleaned = strip_plate(raw)
        rule = match_plate_rule(cleaned)
        sidecode = rule.name if rule else "sin formato"
        click.echo(f"{raw} -> {normalize_plate(raw)} ({sidecode})")


@app.cli.command("check-config")
def check_config():
    """Imprime la configuración de correo resuelta, sin secretos."""
    settings = app.extensions["contact_settings"]
    click.echo(f"Entorno: {app.config.get('APP_ENV')}")
    click.echo(f"Servidor SMTP: {app.config.get('MAIL_SERVER')}:{app.config.get('MAIL_PORT')}")
    click.echo(f"Remitente: {settings.sender}")
    click.echo(f"Destinatarios: {', '.join(settings.recipients)}")
    click.echo(f"BCC: {len(settings.bcc)} dirección(es)")
    click.echo(f"Credencial configurada: {'sí' if app.config.get('MAIL_PASSWORD') else 'no'}")


if __name__ == "__main__":
    port = app.config.get("PORT", 3000)
    app.logger.info(f"Contact backend escucha en el puerto {port}", extra={"event": "app.listen", "port": port})
    app.run(host="0.0.0.0", port=port, debug=app.config.get("DEBUG", False))
