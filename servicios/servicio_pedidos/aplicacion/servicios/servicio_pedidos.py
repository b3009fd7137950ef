# servicios/servicio_pedidos/aplicacion/servicios/servicio_pedidos.py

import logging
from typing import Any, Dict, List, Mapping, Optional, Sequence

from servicios.servicio_pedidos.dominio.estados import EstadoPedido, EstadoPlatillo
from servicios.servicio_pedidos.dominio.excepciones import (
    ErrorAplicacion,
    DatosInvalidosError,
    NoEncontradoError,
)
from servicios.servicio_pedidos.dominio.pedido import Pedido, leer_campo_platillo
from servicios.servicio_pedidos.aplicacion.repositorios.repositorio_pedido_interface import IRepositorioPedido

logger = logging.getLogger("servicios.servicio_pedidos")


def _es_cantidad_valida(cantidad: Any) -> bool:
    # bool es subclase de int: True no es una cantidad
    return isinstance(cantidad, int) and not isinstance(cantidad, bool) and cantidad >= 1


# ==============================================================================
# SERVICIO DE PEDIDOS
# Lógica de negocio del ciclo de vida de pedidos y sus platillos.
# ==============================================================================
class ServicioPedidos:
    """
    Valida y ejecuta los cambios de estado y las operaciones compuestas sobre
    pedidos. No guarda estado propio: toda lectura/escritura se delega al
    repositorio inyectado, que es la única fuente de verdad.

    Cualquier estado del vocabulario puede seguir a cualquier otro; solo se
    valida la pertenencia al vocabulario y la existencia de la entidad.
    """

    def __init__(self, repositorio: IRepositorioPedido):
        self.repositorio = repositorio

    # --------------------------------------------------------------------------
    # Consultas
    # --------------------------------------------------------------------------
    def buscar_pedidos(self, restaurante_id: int) -> List[Pedido]:
        """Retorna los pedidos del restaurante; lista vacía si no hay ninguno."""
        try:
            rows = self.repositorio.buscar_todos(restaurante_id)
        except ErrorAplicacion:
            raise
        except Exception as e:
            logger.exception("Fallo al listar pedidos del restaurante %s", restaurante_id)
            raise ErrorAplicacion(
                f"Error al obtener los pedidos del restaurante {restaurante_id}: {e}"
            ) from e
        return [Pedido.desde_fila(row) for row in (rows or [])]

    def listar_pedidos(self, restaurante_id: int) -> List[Pedido]:
        """
        Retorna los pedidos del restaurante.

        :raises NoEncontradoError: si el restaurante no tiene pedidos. Cero
            resultados no es una falla real; usar `buscar_pedidos` cuando se
            necesite distinguir la lista vacía de un 404.
        """
        pedidos = self.buscar_pedidos(restaurante_id)
        if not pedidos:
            raise NoEncontradoError("No se encontraron pedidos.")
        return pedidos

    def obtener_pedido(self, pedido_id: int) -> Optional[Pedido]:
        """Retorna el detalle del pedido (encabezado y platillos)."""
        try:
            return self.repositorio.buscar_pedido_por_id(pedido_id)
        except Exception as e:
            logger.warning("Fallo al obtener el pedido %s: %s", pedido_id, e)
            raise ErrorAplicacion(
                f"Error al obtener el pedido con ID {pedido_id}: {e}"
            ) from e

    # --------------------------------------------------------------------------
    # Cambios de estado
    # --------------------------------------------------------------------------
    def actualizar_estado_platillo(self, pedido_id: int, platillo_id: int, estado: str) -> Dict[str, str]:
        """
        Actualiza el estado de un platillo dentro de un pedido.

        :raises DatosInvalidosError: si el estado no pertenece al vocabulario.
        :raises NoEncontradoError: si el platillo no existe en ese pedido.
        :raises ErrorAplicacion: si la escritura no afectó ninguna fila.
        """
        if not EstadoPlatillo.es_valido(estado):
            raise DatosInvalidosError(
                f"Estado inválido. Estados permitidos: {', '.join(EstadoPlatillo.valores())}."
            )
        estado = EstadoPlatillo(estado).value

        try:
            platillo = self.repositorio.buscar_platillo_por_id(pedido_id, platillo_id)
        except ErrorAplicacion:
            raise
        except Exception as e:
            raise ErrorAplicacion(
                f"Error al buscar el platillo {platillo_id} del pedido {pedido_id}: {e}"
            ) from e
        if not platillo:
            raise NoEncontradoError(
                f"Platillo con ID {platillo_id} no encontrado en el pedido {pedido_id}."
            )

        try:
            filas = self.repositorio.actualizar_estado_platillo(pedido_id, platillo_id, estado)
        except ErrorAplicacion:
            raise
        except Exception as e:
            raise ErrorAplicacion(
                f"Error al actualizar el platillo {platillo_id} del pedido {pedido_id}: {e}"
            ) from e
        if not filas:
            # existía en la búsqueda pero no se pudo escribir
            logger.error("Sin filas afectadas al actualizar platillo %s del pedido %s", platillo_id, pedido_id)
            raise ErrorAplicacion("No se pudo actualizar el estado del platillo.", 500)

        logger.info("Platillo %s del pedido %s -> %s", platillo_id, pedido_id, estado)
        return {"mensaje": "Estado actualizado correctamente."}

    def actualizar_estado_pedido(self, pedido_id: int, estado: str) -> Pedido:
        """
        Actualiza el estado de un pedido. La existencia del pedido y el
        resultado de la escritura quedan a cargo del repositorio.
        """
        if not EstadoPedido.es_valido(estado):
            raise DatosInvalidosError(
                f"Estado inválido. Estados permitidos: {', '.join(EstadoPedido.valores())}."
            )
        estado = EstadoPedido(estado).value

        try:
            pedido = self.repositorio.actualizar_estado_pedido_por_id(pedido_id, estado)
        except ErrorAplicacion:
            raise
        except Exception as e:
            logger.exception("Fallo al actualizar el estado del pedido %s", pedido_id)
            raise ErrorAplicacion(
                f"Error al actualizar el estado del pedido {pedido_id}: {e}"
            ) from e

        logger.info("Pedido %s -> %s", pedido_id, estado)
        return pedido

    # --------------------------------------------------------------------------
    # Operaciones compuestas
    # --------------------------------------------------------------------------
    def crear_pedido(self, datos_pedido: Mapping[str, Any], platillos: Sequence[Any]) -> Pedido:
        """
        Crea un nuevo pedido con los platillos indicados.

        :param datos_pedido: datos del encabezado (p.ej. 'nombre_cliente', 'restaurante_id').
        :param platillos: lista de platillos, cada uno con 'platillo_id' y 'cantidad'.
        :raises DatosInvalidosError: lista vacía, primer platillo incompleto o
            estado inicial fuera del vocabulario.
        """
        # se materializa: un generador se agotaría al validarlo
        platillos = list(platillos or [])
        if not platillos:
            raise DatosInvalidosError("El pedido debe incluir al menos un platillo.")

        for platillo in platillos:
            platillo_id = leer_campo_platillo(platillo, "platillo_id", "platilloId")
            cantidad = leer_campo_platillo(platillo, "cantidad")
            if platillo_id is None or platillo_id == '' or not _es_cantidad_valida(cantidad):
                raise DatosInvalidosError(
                    "Cada platillo debe incluir platillo_id y una cantidad entera positiva."
                )

        estado = datos_pedido.get("estado")
        if estado is not None and not EstadoPedido.es_valido(estado):
            raise DatosInvalidosError(
                f"Estado inválido. Estados permitidos: {', '.join(EstadoPedido.valores())}."
            )

        # La atomicidad (encabezado + platillos) es responsabilidad del repositorio
        try:
            pedido = self.repositorio.crear(datos_pedido, platillos)
        except ErrorAplicacion:
            raise
        except Exception as e:
            logger.exception("Fallo al crear el pedido")
            raise ErrorAplicacion(f"Error al crear el pedido: {e}") from e

        logger.info("Pedido creado con %d platillo(s)", len(platillos))
        return pedido

    def cancelar_pedido(self, pedido_id: int, platillo_id: Optional[int] = None) -> Dict[str, Any]:
        """Cancela un pedido completo, o solo un platillo si se indica `platillo_id`."""
        objetivo = "platillo" if platillo_id is not None else "pedido"
        try:
            resultado = self.repositorio.cancelar_pedido(pedido_id, platillo_id)
        except Exception as e:
            logger.warning("Fallo al cancelar el %s (pedido %s): %s", objetivo, pedido_id, e)
            raise ErrorAplicacion(
                f"Error al cancelar el {objetivo}: {getattr(e, 'mensaje', None) or e}",
                getattr(e, 'codigo', None) or 500,
            ) from e

        logger.info("Cancelado el %s (pedido %s, platillo %s)", objetivo, pedido_id, platillo_id)
        return resultado
