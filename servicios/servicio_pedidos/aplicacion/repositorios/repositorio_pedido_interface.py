# servicios/servicio_pedidos/aplicacion/repositorios/repositorio_pedido_interface.py

from abc import ABC, abstractmethod
from typing import Any, Dict, List, Mapping, Optional, Sequence

from servicios.servicio_pedidos.dominio.pedido import Pedido

# ==============================================================================
# INTERFAZ (Contrato)
# Todo adaptador de persistencia de pedidos debe cumplir este contrato.
# El servicio de pedidos depende solo de esta interfaz (DIP).
# ==============================================================================
class IRepositorioPedido(ABC):

    @abstractmethod
    def buscar_todos(self, restaurante_id: int) -> List[Mapping[str, Any]]:
        """Retorna las filas de todos los pedidos de un restaurante."""
        pass

    @abstractmethod
    def buscar_pedido_por_id(self, pedido_id: int) -> Optional[Pedido]:
        """Retorna el pedido con sus platillos, o None si no existe."""
        pass

    @abstractmethod
    def buscar_platillo_por_id(self, pedido_id: int, platillo_id: int) -> List[Mapping[str, Any]]:
        """Retorna cero o una fila del platillo dentro del pedido."""
        pass

    @abstractmethod
    def actualizar_estado_platillo(self, pedido_id: int, platillo_id: int, estado: str) -> int:
        """Actualiza el estado de un platillo; retorna el número de filas afectadas."""
        pass

    @abstractmethod
    def actualizar_estado_pedido_por_id(self, pedido_id: int, estado: str) -> Pedido:
        """Actualiza el estado de un pedido y retorna su representación actualizada."""
        pass

    @abstractmethod
    def crear(self, datos_pedido: Mapping[str, Any], platillos: Sequence[Any]) -> Pedido:
        """
        Inserta el pedido y todos sus platillos como una sola unidad:
        o se guardan todas las filas o ninguna.
        """
        pass

    @abstractmethod
    def cancelar_pedido(self, pedido_id: int, platillo_id: Optional[int] = None) -> Dict[str, Any]:
        """Cancela el pedido completo, o solo el platillo indicado."""
        pass
