# servicios/servicio_pedidos/presentacion/errores.py

from flask import jsonify, current_app
from werkzeug.exceptions import HTTPException

from servicios.servicio_pedidos.dominio.excepciones import ErrorAplicacion


def registrar_manejadores_errores(app):
    """Traduce las excepciones de dominio a respuestas JSON con su código HTTP."""

    @app.errorhandler(ErrorAplicacion)
    def _error_aplicacion(e: ErrorAplicacion):
        if e.codigo >= 500:
            current_app.logger.error("ErrorAplicacion %s: %s", e.codigo, e.mensaje)
        return jsonify(e.to_dict()), e.codigo

    @app.errorhandler(404)
    def pagina_no_encontrada(_error):
        return jsonify({"ok": False, "error": "Ruta no encontrada", "tipo": "no_encontrado"}), 404

    @app.errorhandler(Exception)
    def _unhandled(e):
        if isinstance(e, HTTPException):
            return e
        current_app.logger.exception("Unhandled")
        return jsonify({"ok": False, "error": "server_error", "tipo": ErrorAplicacion.tipo}), 500
