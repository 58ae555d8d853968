from sqlalchemy import Column, Integer, String, ForeignKey, Table, CheckConstraint, UniqueConstraint
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.orm import relationship, validates

from stackhelper.database import Base


class KeyedModel(Base):
    """
    Abstract persistable entity with a generated integer key.

    The key is None until the first flush assigns it and may not change
    afterwards. Whether an entity is new is derived from the key alone.
    """
    __abstract__ = True

    id = Column(Integer, primary_key=True, autoincrement=True)

    @validates('id')
    def _validate_id(self, key, value):
        # Expired instances keep their key in the identity, not in __dict__
        identity = sa_inspect(self).identity
        current = identity[0] if identity else self.__dict__.get('id')
        if current is not None and value != current:
            raise ValueError(f"{type(self).__name__} key is immutable ({current} -> {value})")
        return value

    @property
    def is_new(self) -> bool:
        return self.id is None

    def __repr__(self):
        return f"<{type(self).__name__} id={self.id}>"


pet_friends = Table(
    'pet_friends',
    Base.metadata,
    Column('pet_id', Integer, ForeignKey('pets.id', ondelete='CASCADE'), primary_key=True),
    Column('friend_id', Integer, ForeignKey('pets.id', ondelete='CASCADE'), primary_key=True),
)


class Pet(KeyedModel):
    """
    Example resource wired through every CRUD layer.

    Friendship is directed: a pet lists the pets it considers friends.
    """
    __tablename__ = 'pets'

    name = Column(String(255), nullable=False)

    friends = relationship(
        'Pet',
        secondary=pet_friends,
        primaryjoin=lambda: Pet.id == pet_friends.c.pet_id,
        secondaryjoin=lambda: Pet.id == pet_friends.c.friend_id,
        order_by=lambda: Pet.id,
    )

    __table_args__ = (
        CheckConstraint("name != ''"),
        UniqueConstraint('name', name='uq_pets_name'),
    )
