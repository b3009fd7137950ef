# servicios/servicio_pedidos/infraestructura/persistencia/sqlalchemy_repositorio_pedido.py

from typing import Any, Dict, List, Mapping, Optional, Sequence

from sqlalchemy import create_engine, select, update
from sqlalchemy.orm import sessionmaker

from configuracion import Config
from inicializar_db import PedidoORM, PedidoPlatilloORM
from servicios.servicio_pedidos.dominio.estados import EstadoPedido, EstadoPlatillo
from servicios.servicio_pedidos.dominio.excepciones import NoEncontradoError
from servicios.servicio_pedidos.dominio.pedido import Pedido, PedidoPlatillo, leer_campo_platillo
from servicios.servicio_pedidos.aplicacion.repositorios.repositorio_pedido_interface import IRepositorioPedido


# ==============================================================================
# IMPLEMENTACIÓN DEL REPOSITORIO DE PEDIDOS (INFRAESTRUCTURA)
# ==============================================================================
class SQLAlchemyRepositorioPedido(IRepositorioPedido):
    """
    Adaptador de persistencia que implementa IRepositorioPedido con SQLAlchemy.
    Cada operación abre su propia sesión; las escrituras compuestas corren en
    una sola transacción.
    """

    def __init__(self, db_url: Optional[str] = None, engine=None):
        self.engine = engine or create_engine(db_url or Config.SQLALCHEMY_DATABASE_URI, future=True)
        self.Session = sessionmaker(bind=self.engine, autoflush=False, autocommit=False, future=True)

    # --------------------------------------------------------------------------
    # Mapeo ORM -> filas / Dominio
    # --------------------------------------------------------------------------
    def _fila_platillo(self, orm: PedidoPlatilloORM) -> Dict[str, Any]:
        return {
            'id': orm.id,
            'pedido_id': orm.pedido_id,
            'platillo_id': orm.platillo_id,
            'cantidad': orm.cantidad,
            'estado': EstadoPlatillo(orm.estado).value,
        }

    def _fila_pedido(self, orm: PedidoORM) -> Dict[str, Any]:
        return {
            'id': orm.id,
            'restaurante_id': orm.restaurante_id,
            'nombre_cliente': orm.nombre_cliente,
            'estado': EstadoPedido(orm.estado).value,
            'fecha_creacion': orm.fecha_creacion,
        }

    def _map_to_domain(self, orm: PedidoORM) -> Pedido:
        fila = self._fila_pedido(orm)
        fila['platillos'] = [PedidoPlatillo.desde_fila(self._fila_platillo(p)) for p in orm.platillos]
        return Pedido.desde_fila(fila)

    # --------------------------------------------------------------------------
    # Implementación del Contrato IRepositorioPedido
    # --------------------------------------------------------------------------
    def buscar_todos(self, restaurante_id: int) -> List[Mapping[str, Any]]:
        with self.Session() as session:
            stmt = (
                select(PedidoORM)
                .where(PedidoORM.restaurante_id == restaurante_id)
                .order_by(PedidoORM.fecha_creacion.desc(), PedidoORM.id.desc())
            )
            return [self._fila_pedido(orm) for orm in session.scalars(stmt)]

    def buscar_pedido_por_id(self, pedido_id: int) -> Optional[Pedido]:
        with self.Session() as session:
            orm = session.get(PedidoORM, pedido_id)
            return self._map_to_domain(orm) if orm else None

    def buscar_platillo_por_id(self, pedido_id: int, platillo_id: int) -> List[Mapping[str, Any]]:
        with self.Session() as session:
            stmt = select(PedidoPlatilloORM).where(
                PedidoPlatilloORM.pedido_id == pedido_id,
                PedidoPlatilloORM.id == platillo_id,
            )
            return [self._fila_platillo(orm) for orm in session.scalars(stmt)]

    def actualizar_estado_platillo(self, pedido_id: int, platillo_id: int, estado: str) -> int:
        with self.Session.begin() as session:
            result = session.execute(
                update(PedidoPlatilloORM)
                .where(
                    PedidoPlatilloORM.pedido_id == pedido_id,
                    PedidoPlatilloORM.id == platillo_id,
                )
                .values(estado=EstadoPlatillo(estado))
            )
            return result.rowcount

    def actualizar_estado_pedido_por_id(self, pedido_id: int, estado: str) -> Pedido:
        with self.Session.begin() as session:
            orm = session.get(PedidoORM, pedido_id)
            if orm is None:
                raise NoEncontradoError(f"Pedido con ID {pedido_id} no encontrado.")
            orm.estado = EstadoPedido(estado)
            session.flush()
            return self._map_to_domain(orm)

    def crear(self, datos_pedido: Mapping[str, Any], platillos: Sequence[Any]) -> Pedido:
        # Session.begin(): commit al salir, rollback completo si algo falla
        with self.Session.begin() as session:
            pedido = PedidoORM(
                restaurante_id=datos_pedido.get('restaurante_id'),
                nombre_cliente=datos_pedido.get('nombre_cliente'),
                estado=EstadoPedido(datos_pedido.get('estado') or EstadoPedido.RECIBIDO),
            )
            for platillo in platillos:
                pedido.platillos.append(PedidoPlatilloORM(
                    platillo_id=leer_campo_platillo(platillo, 'platillo_id', 'platilloId'),
                    cantidad=leer_campo_platillo(platillo, 'cantidad'),
                    estado=EstadoPlatillo.RECIBIDO,
                ))
            session.add(pedido)
            session.flush()
            session.refresh(pedido)
            return self._map_to_domain(pedido)

    def cancelar_pedido(self, pedido_id: int, platillo_id: Optional[int] = None) -> Dict[str, Any]:
        with self.Session.begin() as session:
            if platillo_id is None:
                pedido = session.get(PedidoORM, pedido_id)
                if pedido is None:
                    raise NoEncontradoError(f"Pedido con ID {pedido_id} no encontrado.")
                pedido.estado = EstadoPedido.CANCELADO
                for p in pedido.platillos:
                    p.estado = EstadoPlatillo.CANCELADO
                return {"mensaje": "Pedido cancelado correctamente.", "pedido_id": pedido_id}

            platillo = session.scalars(
                select(PedidoPlatilloORM).where(
                    PedidoPlatilloORM.pedido_id == pedido_id,
                    PedidoPlatilloORM.id == platillo_id,
                )
            ).first()
            if platillo is None:
                raise NoEncontradoError(
                    f"Platillo con ID {platillo_id} no encontrado en el pedido {pedido_id}."
                )
            platillo.estado = EstadoPlatillo.CANCELADO
            return {
                "mensaje": "Platillo cancelado correctamente.",
                "pedido_id": pedido_id,
                "platillo_id": platillo_id,
            }
