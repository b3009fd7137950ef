import base64
import hmac
import hashlib
import json
import time
from typing import Any, Dict, Mapping


def _ahora() -> int:
    return int(time.time())


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _b64url_decode(data: str) -> bytes:
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> str:
    sig = hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()
    return _b64url_encode(sig)


def _json_segment(data: Mapping[str, Any]) -> str:
    return _b64url_encode(json.dumps(data, separators=(",", ":"), default=str).encode("utf-8"))


def create_jwt(payload: Mapping[str, Any], secret: str, expires_in: int = 3600) -> str:
    """Firma `payload` con HS256 agregando iat y exp (ahora + expires_in segundos)."""
    if not secret:
        raise ValueError("Se requiere un secreto para firmar el token")
    header = {"alg": "HS256", "typ": "JWT"}
    now = _ahora()

    body = dict(payload)
    body["iat"] = now
    if expires_in:
        body["exp"] = now + int(expires_in)

    signing_input = f"{_json_segment(header)}.{_json_segment(body)}"
    signature = _sign(signing_input.encode("ascii"), secret)
    return f"{signing_input}.{signature}"


class JWTError(ValueError):
    pass


class JWTExpiradoError(JWTError):
    pass


def decode_jwt(token: str, secret: str) -> Dict[str, Any]:
    """Verifica firma y expiración; retorna el payload."""
    if not token or not isinstance(token, str):
        raise JWTError("Token requerido")
    try:
        header_b64, payload_b64, signature = token.split(".")
    except ValueError:
        raise JWTError("Token malformado")

    try:
        header = json.loads(_b64url_decode(header_b64))
    except (ValueError, UnicodeDecodeError):
        raise JWTError("Encabezado inválido")
    if not isinstance(header, dict) or header.get("alg") != "HS256":
        raise JWTError("Algoritmo no soportado")

    signing_input = f"{header_b64}.{payload_b64}".encode("ascii", errors="replace")
    expected_sig = _sign(signing_input, secret)
    if not hmac.compare_digest(signature.encode("ascii", errors="replace"), expected_sig.encode("ascii")):
        raise JWTError("Firma inválida")

    try:
        payload = json.loads(_b64url_decode(payload_b64))
    except (ValueError, UnicodeDecodeError):
        raise JWTError("Payload inválido")
    if not isinstance(payload, dict):
        raise JWTError("Payload inválido")

    exp = payload.get("exp")
    if exp is None:
        raise JWTError("Token sin expiración")
    try:
        expirado = _ahora() >= int(exp)
    except (TypeError, ValueError):
        raise JWTError("Expiración inválida")
    if expirado:
        raise JWTExpiradoError("Token expirado")

    return payload
