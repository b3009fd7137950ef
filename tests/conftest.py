"""
Fixtures compartidos: repositorio falso en memoria, base SQLite en memoria
y una app Flask mínima.
"""

import pytest
from sqlalchemy import create_engine
from sqlalchemy.pool import StaticPool

from inicializar_db import Base
from servicios.servicio_autenticacion.aplicacion.gestor_sesion import GestorSesion
from servicios.servicio_pedidos.aplicacion.repositorios.repositorio_pedido_interface import IRepositorioPedido
from servicios.servicio_pedidos.aplicacion.servicios.servicio_pedidos import ServicioPedidos
from servicios.servicio_pedidos.dominio.pedido import Pedido
from servicios.servicio_pedidos.infraestructura.persistencia.sqlalchemy_repositorio_pedido import (
    SQLAlchemyRepositorioPedido,
)


class RepositorioPedidoFalso(IRepositorioPedido):
    """Repositorio en memoria que registra cada llamada recibida."""

    def __init__(self):
        self.llamadas = []
        self.pedidos = []
        self.platillos = []
        self.filas_afectadas = None
        self.error = None

    def _registrar(self, nombre, *args):
        self.llamadas.append((nombre,) + args)
        if self.error is not None:
            raise self.error

    def nombres_llamadas(self):
        return [c[0] for c in self.llamadas]

    def buscar_todos(self, restaurante_id):
        self._registrar("buscar_todos", restaurante_id)
        return [p for p in self.pedidos if p.get("restaurante_id") == restaurante_id]

    def buscar_pedido_por_id(self, pedido_id):
        self._registrar("buscar_pedido_por_id", pedido_id)
        for p in self.pedidos:
            if p["id"] == pedido_id:
                return Pedido.desde_fila(p)
        return None

    def buscar_platillo_por_id(self, pedido_id, platillo_id):
        self._registrar("buscar_platillo_por_id", pedido_id, platillo_id)
        return [
            p for p in self.platillos
            if p["pedido_id"] == pedido_id and p["id"] == platillo_id
        ]

    def actualizar_estado_platillo(self, pedido_id, platillo_id, estado):
        self._registrar("actualizar_estado_platillo", pedido_id, platillo_id, estado)
        if self.filas_afectadas is not None:
            return self.filas_afectadas
        filas = 0
        for p in self.platillos:
            if p["pedido_id"] == pedido_id and p["id"] == platillo_id:
                p["estado"] = estado
                filas += 1
        return filas

    def actualizar_estado_pedido_por_id(self, pedido_id, estado):
        self._registrar("actualizar_estado_pedido_por_id", pedido_id, estado)
        for p in self.pedidos:
            if p["id"] == pedido_id:
                p["estado"] = estado
                return Pedido.desde_fila(p)
        return None

    def crear(self, datos_pedido, platillos):
        self._registrar("crear", datos_pedido, platillos)
        fila = dict(datos_pedido, id=len(self.pedidos) + 1)
        self.pedidos.append(fila)
        return Pedido.desde_fila(fila)

    def cancelar_pedido(self, pedido_id, platillo_id=None):
        self._registrar("cancelar_pedido", pedido_id, platillo_id)
        return {"mensaje": "cancelado", "pedido_id": pedido_id, "platillo_id": platillo_id}


@pytest.fixture
def repositorio():
    return RepositorioPedidoFalso()


@pytest.fixture
def servicio(repositorio):
    return ServicioPedidos(repositorio)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        future=True,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def repositorio_sql(engine):
    return SQLAlchemyRepositorioPedido(engine=engine)


@pytest.fixture
def gestor():
    return GestorSesion(secreto="secreto-de-prueba", expiracion=60, produccion=True)
