# servicios/servicio_pedidos/dominio/pedido.py

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Mapping, Optional

from servicios.servicio_pedidos.dominio.estados import EstadoPedido, EstadoPlatillo

# ==============================================================================
# ENTIDAD PEDIDO PLATILLO (Detalle del pedido)
# ==============================================================================
@dataclass
class PedidoPlatillo:
    """Representa un platillo (y su cantidad) dentro de un pedido."""
    platillo_id: int
    cantidad: int
    estado: str = EstadoPlatillo.RECIBIDO.value
    id: Optional[int] = None
    pedido_id: Optional[int] = None

    @classmethod
    def desde_fila(cls, row: Mapping[str, Any]) -> "PedidoPlatillo":
        """Construye la entidad a partir de una fila de la base de datos."""
        return cls(
            id=row.get('id'),
            pedido_id=row.get('pedido_id'),
            platillo_id=row['platillo_id'],
            cantidad=row['cantidad'],
            estado=str(row.get('estado') or EstadoPlatillo.RECIBIDO.value),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'pedido_id': self.pedido_id,
            'platillo_id': self.platillo_id,
            'cantidad': self.cantidad,
            'estado': self.estado,
        }


# ==============================================================================
# ENTIDAD PEDIDO
# ==============================================================================
@dataclass
class Pedido:
    """Representa el pedido completo de un cliente en un restaurante."""
    id: Optional[int]
    nombre_cliente: str
    estado: str = EstadoPedido.RECIBIDO.value
    restaurante_id: Optional[int] = None
    platillos: List[PedidoPlatillo] = field(default_factory=list)
    fecha_creacion: Optional[datetime] = None

    @classmethod
    def desde_fila(cls, row: Mapping[str, Any]) -> "Pedido":
        """
        Construye un Pedido a partir de una fila del repositorio.
        Si la fila trae la lista 'platillos' también se reconstruyen.
        """
        platillos = [
            p if isinstance(p, PedidoPlatillo) else PedidoPlatillo.desde_fila(p)
            for p in (row.get('platillos') or [])
        ]
        return cls(
            id=row.get('id'),
            nombre_cliente=row.get('nombre_cliente') or '',
            estado=str(row.get('estado') or EstadoPedido.RECIBIDO.value),
            restaurante_id=row.get('restaurante_id'),
            platillos=platillos,
            fecha_creacion=row.get('fecha_creacion'),
        )

    def to_dict(self) -> dict:
        return {
            'id': self.id,
            'restaurante_id': self.restaurante_id,
            'nombre_cliente': self.nombre_cliente,
            'estado': self.estado,
            'platillos': [p.to_dict() for p in self.platillos],
            'fecha_creacion': self.fecha_creacion.isoformat() if self.fecha_creacion else None,
        }


def leer_campo_platillo(platillo: Any, nombre: str, alias: Optional[str] = None) -> Any:
    """Lee un campo de un platillo recibido como PedidoPlatillo o como dict."""
    if isinstance(platillo, PedidoPlatillo):
        return getattr(platillo, nombre, None)
    if isinstance(platillo, Mapping):
        valor = platillo.get(nombre)
        if valor is None and alias:
            valor = platillo.get(alias)
        return valor
    return None
