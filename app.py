# app.py
from flask import Flask
from flask_cors import CORS
import logging

from configuracion import Config
from servicios.servicio_autenticacion.aplicacion.gestor_sesion import GestorSesion
from servicios.servicio_pedidos.presentacion.errores import registrar_manejadores_errores


def crear_app(config=Config):
    app = Flask(__name__)
    app.config.from_object(config)

    # CORS con credenciales: en producción la cookie de sesión viaja cross-site
    cors_env = getattr(config, "CORS_ORIGINS", "*")
    allowed = [o.strip() for o in cors_env.split(",") if o.strip()] if cors_env and cors_env != "*" else "*"
    CORS(app, resources={r"/api/*": {"origins": allowed}}, supports_credentials=True)

    log_level = getattr(config, "LOG_LEVEL", "INFO").upper()
    if not app.logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s"))
        app.logger.addHandler(handler)
    app.logger.setLevel(getattr(logging, log_level, logging.INFO))
    logging.getLogger("servicios").setLevel(getattr(logging, log_level, logging.INFO))

    app.extensions["gestor_sesion"] = GestorSesion.desde_config(config)
    registrar_manejadores_errores(app)

    return app

create_app = crear_app
