# configuracion.py
import os
from pathlib import Path

try:
    # Cargar variables de entorno si existe .env (opcional)
    from dotenv import load_dotenv, find_dotenv
    load_dotenv(find_dotenv(usecwd=True))
except ImportError:
    pass


class Config:
    """
    Configuración global de la aplicación.
    Se lee una sola vez del entorno al importar; después es de solo lectura.
    """

    # -------------------- Entorno --------------------
    # Cualquier valor distinto de 'development' (incluido vacío) se trata como producción
    APP_ENV = (os.getenv("APP_ENV") or os.getenv("FLASK_ENV") or "production").strip().lower()
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()

    # -------------------- Base de datos --------------------
    BASE_DIR = Path(__file__).resolve().parent
    DB_PATH = BASE_DIR / "data" / "pedidos.sqlite"
    SQLALCHEMY_DATABASE_URI = (
        os.getenv("SQLALCHEMY_DATABASE_URI")
        or os.getenv("DATABASE_URL")
        or f"sqlite:///{DB_PATH.as_posix()}"
    )

    # -------------------- Seguridad / Sesiones --------------------
    SECRET_KEY = os.getenv("SECRET_KEY", "clave-secreta-para-prototipo")
    JWT_SECRET = os.getenv("JWT_SECRET") or SECRET_KEY
    JWT_EXPIRATION = int(os.getenv("JWT_EXPIRATION", "3600"))  # segundos

    # -------------------- CORS --------------------
    # Lista separada por comas: "https://mi-frontend.com,https://otro.com"
    CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")

    @classmethod
    def es_produccion(cls) -> bool:
        return cls.APP_ENV != "development"
