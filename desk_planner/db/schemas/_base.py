from typing import Optional
from pydantic import BaseModel, ConfigDict

class OrmModel(BaseModel):
    model_config = ConfigDict(from_attributes=True)

class Entity(OrmModel):
    """
    Base of every stored entity.

    ``id`` stays None until the record is given one, either by
    ``DataBase.new_id()`` or by the caller. Records are stored under
    ``record_type()``, which is the class name.
    """
    id: Optional[str] = None

    @classmethod
    def record_type(cls) -> str:
        return cls.__name__
