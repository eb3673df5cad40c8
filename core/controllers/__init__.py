from .activatable import ActivatableEntityController
from .entity import EntityController
from .readonly import ReadonlyEntityController

__all__ = ["ActivatableEntityController", "EntityController", "ReadonlyEntityController"]
