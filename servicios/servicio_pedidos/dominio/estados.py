# servicios/servicio_pedidos/dominio/estados.py

import enum
from typing import List

# ==============================================================================
# VOCABULARIO DE ESTADOS
# Pedido y platillo tienen enumeraciones separadas aunque hoy coincidan,
# para que puedan divergir sin romper la API.
# ==============================================================================


class _Estado(str, enum.Enum):

    @classmethod
    def valores(cls) -> List[str]:
        """Todos los valores válidos, en orden de declaración."""
        return [e.value for e in cls]

    @classmethod
    def es_valido(cls, valor) -> bool:
        """True si `valor` (miembro o string) pertenece al vocabulario."""
        if isinstance(valor, cls):
            return True
        if not isinstance(valor, str):
            return False
        return valor in cls._value2member_map_

    def __str__(self):
        return self.value


class EstadoPedido(_Estado):
    """Estados posibles de un pedido completo."""
    RECIBIDO = "recibido"
    EN_PREPARACION = "en_preparacion"
    LISTO = "listo"
    ENTREGADO = "entregado"
    CANCELADO = "cancelado"


class EstadoPlatillo(_Estado):
    """Estados posibles de un platillo dentro de un pedido."""
    RECIBIDO = "recibido"
    EN_PREPARACION = "en_preparacion"
    LISTO = "listo"
    ENTREGADO = "entregado"
    CANCELADO = "cancelado"
