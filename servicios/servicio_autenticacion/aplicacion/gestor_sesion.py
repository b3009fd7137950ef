# servicios/servicio_autenticacion/aplicacion/gestor_sesion.py

import logging
from typing import Any, Dict, Mapping

from servicios.servicio_pedidos.dominio.excepciones import NoAutorizadoError
from utils.jwt import create_jwt, decode_jwt, JWTError

logger = logging.getLogger("servicios.servicio_autenticacion")

NOMBRE_COOKIE = "token"


# ==============================================================================
# GESTOR DE SESIÓN
# Crea y verifica tokens firmados (HS256) y los adjunta como cookie.
# No guarda estado: la validez depende solo de la firma y la expiración.
# ==============================================================================
class GestorSesion:
    """
    :param secreto: clave compartida para firmar los tokens.
    :param expiracion: vida del token y de la cookie, en segundos.
    :param produccion: True -> cookie Secure + SameSite=None;
        False -> cookie no segura + SameSite=Lax.
    """

    def __init__(self, secreto: str, expiracion: int = 3600, produccion: bool = True):
        if not secreto:
            raise ValueError("El gestor de sesión requiere un secreto.")
        if int(expiracion) <= 0:
            raise ValueError("La expiración del token debe ser positiva.")
        self.secreto = secreto
        self.expiracion = int(expiracion)
        self.produccion = bool(produccion)

    @classmethod
    def desde_config(cls, config) -> "GestorSesion":
        return cls(
            secreto=config.JWT_SECRET,
            expiracion=config.JWT_EXPIRATION,
            produccion=config.es_produccion(),
        )

    def crear_token(self, claims: Mapping[str, Any]) -> str:
        """Firma los claims tal cual, con expiración en `self.expiracion` segundos."""
        return create_jwt(claims, self.secreto, expires_in=self.expiracion)

    def emitir_cookie(self, respuesta, nombre: str, valor: str) -> None:
        """Adjunta la cookie a una respuesta Flask/Werkzeug."""
        respuesta.set_cookie(
            nombre,
            valor,
            max_age=self.expiracion,
            httponly=True,
            secure=self.produccion,
            samesite="None" if self.produccion else "Lax",
        )

    def emitir_cookie_sesion(self, respuesta, claims: Mapping[str, Any]) -> str:
        token = self.crear_token(claims)
        self.emitir_cookie(respuesta, NOMBRE_COOKIE, token)
        return token

    def verificar_token(self, token: str) -> Dict[str, Any]:
        """
        Verifica firma y expiración del token.

        :raises NoAutorizadoError: token inválido o expirado (no hay renovación).
        """
        try:
            return decode_jwt(token, self.secreto)
        except JWTError as e:
            logger.info("Token rechazado: %s", e)
            raise NoAutorizadoError("Token inválido o expirado.") from e
