from functools import wraps
from flask import request, jsonify, current_app, g

from servicios.servicio_autenticacion.aplicacion.gestor_sesion import NOMBRE_COOKIE
from servicios.servicio_pedidos.dominio.excepciones import NoAutorizadoError


def _get_bearer_token() -> str | None:
    auth = request.headers.get("Authorization") or ""
    if not auth.lower().startswith("bearer "):
        return None
    return auth.split(" ", 1)[1].strip()


def token_requerido(fn):
    """Exige un token de sesión válido (cookie 'token' o header Bearer)."""
    @wraps(fn)
    def wrapper(*args, **kwargs):
        token = request.cookies.get(NOMBRE_COOKIE) or _get_bearer_token()
        if not token:
            return jsonify({"ok": False, "error": "Token requerido", "tipo": NoAutorizadoError.tipo}), 401
        gestor = current_app.extensions["gestor_sesion"]
        try:
            g.sesion = gestor.verificar_token(token)
        except NoAutorizadoError as e:
            return jsonify(e.to_dict()), e.codigo
        return fn(*args, **kwargs)
    return wrapper
