# servicios/servicio_pedidos/dominio/excepciones.py

class ExcepcionDominio(Exception):
    """Clase base para todas las excepciones de dominio."""
    pass


class ErrorAplicacion(ExcepcionDominio):
    """
    Error genérico de la aplicación.
    Lleva un mensaje legible y el código HTTP equivalente (500 si no se indica).
    La capa HTTP usa `codigo` y `tipo` para construir la respuesta.
    """
    tipo = "error_aplicacion"

    def __init__(self, mensaje="Error interno de la aplicación.", codigo=None):
        self.mensaje = mensaje
        self.codigo = codigo if codigo is not None else 500
        super().__init__(self.mensaje)

    def to_dict(self) -> dict:
        return {
            'ok': False,
            'error': self.mensaje,
            'tipo': self.tipo,
        }


class DatosInvalidosError(ErrorAplicacion):
    """Excepción lanzada cuando los datos de entrada son inválidos (estado, platillos...)."""
    tipo = "datos_invalidos"

    def __init__(self, mensaje="Los datos proporcionados son inválidos."):
        super().__init__(mensaje, 400)


class NoEncontradoError(ErrorAplicacion):
    """Excepción lanzada cuando el recurso solicitado no existe."""
    tipo = "no_encontrado"

    def __init__(self, mensaje="El recurso solicitado no fue encontrado."):
        super().__init__(mensaje, 404)


class NoAutorizadoError(ErrorAplicacion):
    """Token de sesión inválido o expirado."""
    tipo = "no_autorizado"

    def __init__(self, mensaje="Token inválido o expirado."):
        super().__init__(mensaje, 401)
