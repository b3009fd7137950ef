# inicializar_db.py

from __future__ import annotations

from pathlib import Path

from sqlalchemy import (
    create_engine,
    Column,
    Integer,
    String,
    Enum as SAEnum,
    DateTime,
    ForeignKey,
    func,
)
from sqlalchemy.orm import sessionmaker, declarative_base, relationship

from configuracion import Config
from servicios.servicio_pedidos.dominio.estados import EstadoPedido, EstadoPlatillo

# ----------------------------------------------------------------------
# Base ORM
# ----------------------------------------------------------------------
Base = declarative_base()


def _enum_estado(enum_cls, nombre: str) -> SAEnum:
    # Guarda el valor ('en_preparacion'), no el nombre del miembro
    return SAEnum(
        enum_cls,
        name=nombre,
        native_enum=False,           # Para SQLite crea CHECK en lugar de tipo nativo
        validate_strings=True,
        values_callable=lambda cls: [e.value for e in cls],
    )


# ----------------------------------------------------------------------
# Modelos ORM
# ----------------------------------------------------------------------
class PedidoORM(Base):
    """Encabezado del pedido."""
    __tablename__ = "pedidos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    restaurante_id = Column(Integer, nullable=True, index=True)
    nombre_cliente = Column(String, nullable=False)
    estado = Column(_enum_estado(EstadoPedido, "estado_pedido_enum"),
                    nullable=False, default=EstadoPedido.RECIBIDO)
    fecha_creacion = Column(DateTime, server_default=func.now(), nullable=False)

    platillos = relationship(
        "PedidoPlatilloORM",
        back_populates="pedido",
        cascade="all, delete-orphan",
        order_by="PedidoPlatilloORM.id",
    )


class PedidoPlatilloORM(Base):
    """Platillos (líneas) de cada pedido."""
    __tablename__ = "pedido_platillos"

    id = Column(Integer, primary_key=True, autoincrement=True)
    pedido_id = Column(Integer, ForeignKey("pedidos.id"), nullable=False, index=True)
    platillo_id = Column(Integer, nullable=False)
    cantidad = Column(Integer, nullable=False, default=1)
    estado = Column(_enum_estado(EstadoPlatillo, "estado_platillo_enum"),
                    nullable=False, default=EstadoPlatillo.RECIBIDO)

    pedido = relationship("PedidoORM", back_populates="platillos")


# ----------------------------------------------------------------------
# Helpers DB
# ----------------------------------------------------------------------
def resolve_db_uri() -> str:
    """
    Devuelve la URI de la base de datos a usar (Config.SQLALCHEMY_DATABASE_URI).
    Si es SQLite en archivo, asegura que la carpeta exista.
    """
    db_uri = Config.SQLALCHEMY_DATABASE_URI
    if db_uri.startswith("sqlite:///") and db_uri != "sqlite:///:memory:":
        sqlite_file = Path(db_uri.replace("sqlite:///", "", 1))
        sqlite_file.parent.mkdir(parents=True, exist_ok=True)
    return db_uri


def get_engine_and_session(db_uri: str):
    engine = create_engine(db_uri, echo=False, future=True)
    SessionLocal = sessionmaker(bind=engine, autoflush=False, autocommit=False, future=True)
    return engine, SessionLocal


# ----------------------------------------------------------------------
# Inicialización
# ----------------------------------------------------------------------
def inicializar_base_datos(db_uri: str | None = None):
    """Crea las tablas de pedidos si no existen y retorna el engine."""
    db_uri = db_uri or resolve_db_uri()
    engine, _ = get_engine_and_session(db_uri)
    Base.metadata.create_all(engine)
    print(f"Tablas creadas/verificadas en: {db_uri}")
    return engine


if __name__ == "__main__":
    inicializar_base_datos()
