"""
Tests del codec JWT y del gestor de sesión.
"""

import pytest
from flask import Flask

import utils.jwt as jwt_utils
from servicios.servicio_autenticacion.aplicacion.gestor_sesion import GestorSesion, NOMBRE_COOKIE
from servicios.servicio_pedidos.dominio.excepciones import NoAutorizadoError


@pytest.fixture
def reloj(monkeypatch):
    """Reloj controlable para el codec JWT."""
    estado = {"ahora": 1_700_000_000}
    monkeypatch.setattr(jwt_utils, "_ahora", lambda: estado["ahora"])
    return estado


def _cookie(respuesta, nombre=NOMBRE_COOKIE):
    for header in respuesta.headers.getlist("Set-Cookie"):
        if header.startswith(f"{nombre}="):
            return header
    raise AssertionError(f"No se emitió la cookie {nombre}")


# ============================================================================
# Codec JWT
# ============================================================================

class TestJWT:

    def test_firma_y_decodifica(self, reloj):
        token = jwt_utils.create_jwt({"role": "customer"}, "s3cr3t", expires_in=10)
        payload = jwt_utils.decode_jwt(token, "s3cr3t")
        assert payload["role"] == "customer"
        assert payload["iat"] == reloj["ahora"]
        assert payload["exp"] == reloj["ahora"] + 10

    def test_secreto_distinto(self, reloj):
        token = jwt_utils.create_jwt({"a": 1}, "uno")
        with pytest.raises(jwt_utils.JWTError, match="Firma"):
            jwt_utils.decode_jwt(token, "dos")

    def test_payload_alterado(self, reloj):
        token = jwt_utils.create_jwt({"role": "customer"}, "s3cr3t")
        header, _, firma = token.split(".")
        otro = jwt_utils.create_jwt({"role": "admin"}, "otro").split(".")[1]
        with pytest.raises(jwt_utils.JWTError):
            jwt_utils.decode_jwt(f"{header}.{otro}.{firma}", "s3cr3t")

    @pytest.mark.parametrize("token", ["", "abc", "a.b", "a.b.c.d", "!!.??.##"])
    def test_malformado(self, token):
        with pytest.raises(jwt_utils.JWTError):
            jwt_utils.decode_jwt(token, "s3cr3t")

    def test_rechaza_alg_none(self, reloj):
        header = jwt_utils._json_segment({"alg": "none", "typ": "JWT"})
        body = jwt_utils._json_segment({"role": "admin", "exp": reloj["ahora"] + 60})
        with pytest.raises(jwt_utils.JWTError, match="Algoritmo"):
            jwt_utils.decode_jwt(f"{header}.{body}.", "s3cr3t")

    def test_expira_en_el_instante_exp(self, reloj):
        token = jwt_utils.create_jwt({}, "s3cr3t", expires_in=5)
        reloj["ahora"] += 4
        jwt_utils.decode_jwt(token, "s3cr3t")
        reloj["ahora"] += 1
        with pytest.raises(jwt_utils.JWTExpiradoError):
            jwt_utils.decode_jwt(token, "s3cr3t")

    def test_sin_exp_no_es_valido(self, reloj):
        token = jwt_utils.create_jwt({}, "s3cr3t", expires_in=0)
        with pytest.raises(jwt_utils.JWTError):
            jwt_utils.decode_jwt(token, "s3cr3t")


# ============================================================================
# Gestor de sesión
# ============================================================================

class TestGestorSesion:

    def test_verifica_token_recien_creado(self, gestor, reloj):
        token = gestor.crear_token({"role": "customer"})
        assert gestor.verificar_token(token)["role"] == "customer"

    def test_token_expirado_no_autorizado(self, gestor, reloj):
        token = gestor.crear_token({"role": "customer"})
        reloj["ahora"] += gestor.expiracion
        with pytest.raises(NoAutorizadoError) as exc:
            gestor.verificar_token(token)
        assert exc.value.codigo == 401
        assert exc.value.mensaje == "Token inválido o expirado."

    @pytest.mark.parametrize("token", [None, "", "basura"])
    def test_token_invalido(self, gestor, token):
        with pytest.raises(NoAutorizadoError):
            gestor.verificar_token(token)

    def test_claims_se_embeben_tal_cual(self, gestor, reloj):
        claims = {"sub": "u-1", "roles": ["cocina", "caja"], "restaurante_id": 7}
        payload = gestor.verificar_token(gestor.crear_token(claims))
        for clave, valor in claims.items():
            assert payload[clave] == valor

    @pytest.mark.parametrize("kwargs", [
        {"secreto": ""},
        {"secreto": "x", "expiracion": 0},
        {"secreto": "x", "expiracion": -1},
    ])
    def test_configuracion_invalida(self, kwargs):
        with pytest.raises(ValueError):
            GestorSesion(**kwargs)

    def test_desde_config(self):
        class ConfigDesarrollo:
            JWT_SECRET = "abc"
            JWT_EXPIRATION = 120

            @classmethod
            def es_produccion(cls):
                return False

        gestor = GestorSesion.desde_config(ConfigDesarrollo)
        assert (gestor.secreto, gestor.expiracion, gestor.produccion) == ("abc", 120, False)


class TestCookieSesion:

    def _respuesta(self):
        return Flask(__name__).response_class("ok")

    def test_produccion_secure_samesite_none(self, gestor):
        respuesta = self._respuesta()
        token = gestor.emitir_cookie_sesion(respuesta, {"role": "customer"})
        cookie = _cookie(respuesta)
        assert cookie.startswith(f"token={token};")
        assert "HttpOnly" in cookie
        assert "Secure" in cookie
        assert "SameSite=None" in cookie
        assert f"Max-Age={gestor.expiracion}" in cookie

    def test_desarrollo_no_secure_samesite_lax(self):
        gestor = GestorSesion("secreto", expiracion=300, produccion=False)
        respuesta = self._respuesta()
        gestor.emitir_cookie_sesion(respuesta, {"role": "customer"})
        cookie = _cookie(respuesta)
        assert "HttpOnly" in cookie
        assert "Secure" not in cookie
        assert "SameSite=Lax" in cookie
        assert "Max-Age=300" in cookie

    def test_emitir_cookie_con_nombre_propio(self, gestor):
        respuesta = self._respuesta()
        gestor.emitir_cookie(respuesta, "preferencias", "valor")
        assert _cookie(respuesta, "preferencias").startswith("preferencias=valor;")
